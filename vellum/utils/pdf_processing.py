"""
PDF inspection utilities for rendered output.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_text: Plain text of every page, in page order.
    extract_lines: Text lines of one page, top to bottom.
"""

from io import BytesIO
from pathlib import Path
from typing import List, Optional, Union

import pdfplumber
from PyPDF2 import PdfReader

PDFSource = Union[bytes, str, Path]


def _open_source(source: PDFSource):
    """Wrap raw bytes in a stream; paths are passed through as strings."""
    if isinstance(source, (bytes, bytearray)):
        return BytesIO(source)
    return str(source)


def page_count(source: PDFSource) -> Optional[int]:
    """Get page count from PDF bytes or path, or None if unreadable."""
    try:
        reader = PdfReader(_open_source(source))
        return len(reader.pages)
    except Exception:
        return None


def extract_text(source: PDFSource) -> List[str]:
    """
    Extract the text of every page.

    Args:
        source: PDF bytes or path

    Returns:
        One string per page (empty string for pages without text)
    """
    with pdfplumber.open(_open_source(source)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]


def extract_lines(source: PDFSource, page: int = 1) -> List[str]:
    """
    Extract text lines of a single page, top to bottom.

    Args:
        source: PDF bytes or path
        page: 1-indexed page number

    Returns:
        Non-empty text lines
    """
    with pdfplumber.open(_open_source(source)) as pdf:
        text = pdf.pages[page - 1].extract_text() or ""
    return [line for line in text.splitlines() if line.strip()]
