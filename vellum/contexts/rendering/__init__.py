"""
Rendering Context

Responsibilities:
- Detects a font able to display the source script and registers it
- Transliterates source-script text when it cannot (or must not) be shown
- Lays out résumé sections with measured text and automatic page breaks
- Assembles the final PDF bytes through a graphics backend

Owns: Graphics backend interface, font coverage, transliteration table, layout cursor,
      section renderers, PDF assembly
Never: Parses user input formats or decides template contents
"""

from vellum.contexts.rendering.assembler import (
    PDFAssembler,
    RenderOptions,
    RenderResult,
    render_pdf,
    render_resume,
)
from vellum.contexts.rendering.backend import GraphicsBackend, ReportLabBackend
from vellum.contexts.rendering.cursor import LayoutCursor, PaginationState
from vellum.contexts.rendering.exceptions import FontRegistrationError, RenderError
from vellum.contexts.rendering.fonts import (
    FontCoverage,
    GlyphAvailabilityResolver,
    resolve_font_coverage,
)
from vellum.contexts.rendering.transliteration import (
    LanguageMode,
    TextProcessor,
    should_transliterate,
    transliterate,
)

__all__ = [
    # Assembly
    "PDFAssembler",
    "RenderOptions",
    "RenderResult",
    "render_pdf",
    "render_resume",
    # Backend
    "GraphicsBackend",
    "ReportLabBackend",
    # Layout
    "LayoutCursor",
    "PaginationState",
    # Fonts and text
    "FontCoverage",
    "GlyphAvailabilityResolver",
    "resolve_font_coverage",
    "LanguageMode",
    "TextProcessor",
    "transliterate",
    "should_transliterate",
    # Errors
    "RenderError",
    "FontRegistrationError",
]
