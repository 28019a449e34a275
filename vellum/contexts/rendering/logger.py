"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(
    log_dir: Path, template_name: str, language_mode: str, console_level: str = "INFO"
) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        template_name: Template used for the session (recorded in provenance)
        language_mode: Language mode used for the session
        console_level: Minimum level echoed to the console

    Returns:
        Path to log file

    Example:
        from vellum.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir, "classic", "auto")
        _log_info("Starting render...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Template": template_name, "Language mode": language_mode},
        console_level=console_level,
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(resume_name: str, template_name: str, language_mode: str) -> None:
    """Log start of a render with context."""
    _log_info(f"Rendering {resume_name}")
    _log_debug(f"  Template: {template_name}")
    _log_debug(f"  Language mode: {language_mode}")


def log_render_result(
    resume_name: str,
    success: bool,
    elapsed_time: float,
    num_bytes: int = 0,
    page_breaks: int = 0,
    error: Optional[Exception] = None,
) -> None:
    """
    Log render result.

    Args:
        resume_name: Name on the resume being rendered
        success: Whether the render produced a PDF
        elapsed_time: Time taken to render
        num_bytes: Size of the PDF produced
        page_breaks: Page breaks requested by the main column
        error: Error that aborted the render, if any
    """
    if success:
        _log_success(f"{resume_name}: rendered {num_bytes} bytes ({elapsed_time:.2f}s)")
        _log_debug(f"  Page breaks: {page_breaks}")
    else:
        _log_error(f"Failed to render {resume_name} ({elapsed_time:.2f}s)")
        if error:
            _log_error(f"  Error: {type(error).__name__}: {error}")


def log_font_probe(font_path: Path, outcome: str) -> None:
    """Log the outcome of probing one candidate font file."""
    _log_debug(f"Font candidate {font_path}: {outcome}")


def log_font_rejected(font_path: Path, reason: str) -> None:
    _log_warning(f"Skipping font {font_path}: {reason}")


def log_font_coverage(coverage) -> None:
    """
    Log the resolved font coverage.

    Args:
        coverage: FontCoverage from GlyphAvailabilityResolver.resolve()
    """
    if coverage.capable:
        _log_success(f"Registered script-capable font: {coverage.font_path}")
    else:
        _log_warning(
            "No script-capable font found; using "
            f"{coverage.regular}/{coverage.bold} with transliteration fallback"
        )


def log_transliteration(enabled: bool, language_mode: str, capable: bool) -> None:
    state = "on" if enabled else "off"
    _log_debug(f"Transliteration {state} (mode={language_mode}, capable font={capable})")


def log_page_break(page_number: int, offset: float, required_space: float) -> None:
    _log_debug(
        f"Page break before block of {required_space:.1f}pt at y={offset:.1f}; now on page {page_number}"
    )


def log_side_column_overflow(section: str, dropped: int) -> None:
    """Log content dropped because the side column ran out of room on page one."""
    _log_warning(f"Side column full: dropped {dropped} line(s) from '{section}'")
