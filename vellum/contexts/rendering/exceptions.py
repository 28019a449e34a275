"""Custom exceptions for rendering context."""

from pathlib import Path
from typing import Optional


class RenderError(Exception):
    """
    Exception raised when a render aborts.

    Any drawing or measurement failure inside the backend ends the whole
    render; partial PDF output is discarded and never returned.

    Attributes:
        message: Error description
        template_name: Template being rendered
        original_error: The backend error that aborted the render
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.original_error = original_error

        parts = [message]
        if template_name:
            parts.append(f"Template: {template_name}")
        if original_error:
            parts.append(f"Original error: {type(original_error).__name__}: {original_error}")

        super().__init__("\n".join(parts))


class FontRegistrationError(Exception):
    """
    Exception raised by a backend that cannot load a font file.

    Attributes:
        message: Error description
        font_path: Font file that failed to load
        original_error: The loader's error
    """

    def __init__(
        self,
        message: str,
        font_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.font_path = font_path
        self.original_error = original_error

        parts = [message]
        if font_path:
            parts.append(f"Font file: {font_path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
