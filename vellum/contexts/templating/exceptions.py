"""Custom exceptions for templating context."""

from pathlib import Path
from typing import Iterable, Optional


class TemplateNotFoundError(LookupError):
    """
    Exception raised when a template name is not registered.

    No default template is ever substituted for an unknown name.

    Attributes:
        message: Error description
        template_name: The name that was requested
        available: Names registered at the time of the lookup
    """

    def __init__(self, template_name: str, available: Iterable[str] = ()):
        self.template_name = template_name
        self.available = sorted(available)
        self.message = f'Template "{template_name}" not found'

        parts = [self.message]
        if self.available:
            parts.append(f"Available templates: {', '.join(self.available)}")

        super().__init__("\n".join(parts))


class InvalidTemplateError(ValueError):
    """
    Exception raised when a template definition cannot be loaded.

    Attributes:
        message: Error description
        template_path: YAML file that defined the template (if any)
    """

    def __init__(self, message: str, template_path: Optional[Path] = None):
        self.message = message
        self.template_path = template_path

        parts = [message]
        if template_path:
            parts.append(f"Template file: {template_path}")

        super().__init__("\n".join(parts))


class InvalidResumeDataError(ValueError):
    """
    Exception raised when resume input is missing required fields.

    Only raised by the loaders (from_dict / from_yaml). Rendering itself
    assumes a normalized document and never validates.
    """

    pass
