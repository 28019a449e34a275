"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
Templating modules log through these helpers; sessions are set up by the rendering context.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[template]"


# Wrapper functions with automatic [template] prefix


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_templates_loaded(templates_path: Path, names: list) -> None:
    """Log which template definitions were loaded from a directory."""
    _log_debug(f"Loaded {len(names)} template(s) from {templates_path}: {', '.join(names)}")


def log_template_registered(name: str, replaced: bool) -> None:
    if replaced:
        _log_warning(f"Template '{name}' re-registered; previous definition replaced")
    else:
        _log_debug(f"Registered template '{name}'")


def log_template_missing(name: str, available: list) -> None:
    _log_warning(f"Template '{name}' not found (available: {', '.join(sorted(available))})")
