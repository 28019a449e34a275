"""Helpers for callers that ship rendered PDFs (download names, content types)."""

import re
from datetime import date
from typing import Optional

from vellum.utils.timestamp import today

PDF_CONTENT_TYPE = "application/pdf"

# Path separators and control characters never belong in a download name
_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def export_filename(name: Optional[str], on: Optional[date] = None) -> str:
    """
    Conventional download name for a rendered resume.

    Args:
        name: Person's name from the resume (falls back to "resume" when blank)
        on: Date stamped into the name (default: today)

    Returns:
        Filename such as "Jane Doe_2025-11-14.pdf"

    Example:
        >>> export_filename("Jane Doe", on=date(2025, 11, 14))
        'Jane Doe_2025-11-14.pdf'
    """
    stem = _UNSAFE_FILENAME_CHARS.sub("_", (name or "").strip()) or "resume"
    return f"{stem}_{today(on)}.pdf"
