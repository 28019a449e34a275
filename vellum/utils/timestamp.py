"""Timestamp formatting utilities."""

from datetime import date, datetime
from typing import Optional


def now() -> str:
    """Compact local timestamp for directory names, e.g. "20251114_183040"."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def today(on: Optional[date] = None) -> str:
    """ISO calendar date, e.g. "2025-11-14". Defaults to the current local date."""
    return (on or date.today()).isoformat()
