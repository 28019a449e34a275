"""
Shared utilities for Vellum.

Common functionality used across contexts:
- Logger setup
- Timestamps and export filenames
- Rendered PDF inspection
"""

from vellum.utils.export import PDF_CONTENT_TYPE, export_filename
from vellum.utils.timestamp import now, today

__all__ = ["PDF_CONTENT_TYPE", "export_filename", "now", "today"]
