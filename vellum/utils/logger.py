"""
Generic logger setup utilities.

One loguru configuration per rendering session: a DEBUG file sink inside the
session directory, a console sink at the requested level, and a provenance
header so every log states which interpreter, platform and PDF library
produced the output (font discovery depends on all three).
Context-specific wrappers live in contexts/{context}/logger.py.
"""

import platform
import sys
from pathlib import Path
from typing import Dict, Iterator, Optional

import reportlab
from dotenv import load_dotenv
from loguru import logger

import vellum

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"
RULE = "=" * 80


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Point loguru at a fresh session directory.

    Any previously configured sinks are removed, so a long-lived process
    rendering many files gets one log per session.

    Args:
        context_name: Context identifier, used as the log file stem ("render")
        log_dir: Directory for this logging session (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Minimum level echoed to stdout (file always gets DEBUG)

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/render_20251114_123456"),
            extra_provenance={"Template": "classic"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    for line in _provenance_lines(extra_provenance):
        logger.info(line)

    return log_file


def _provenance_lines(extra: Optional[Dict[str, str]] = None) -> Iterator[str]:
    yield RULE
    yield f"Command: {' '.join(sys.argv)}"
    yield f"Working directory: {Path.cwd()}"
    yield f"Platform: {sys.platform} ({platform.machine()})"
    yield f"Python: {platform.python_version()}"
    yield f"Vellum: {vellum.__version__}"
    yield f"reportlab: {reportlab.Version}"
    for key, value in (extra or {}).items():
        yield f"{key}: {value}"
    yield RULE
