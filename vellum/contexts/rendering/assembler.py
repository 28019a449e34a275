"""
PDF Assembly Module

Orchestrates one render: resolve the template, create a backend, resolve
font coverage, decide on transliteration, lay out every section and
collect the finished PDF bytes.
"""

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from dotenv import load_dotenv

from vellum.contexts.rendering.backend import GraphicsBackend, ReportLabBackend
from vellum.contexts.rendering.cursor import LayoutCursor
from vellum.contexts.rendering.exceptions import RenderError
from vellum.contexts.rendering.fonts import GlyphAvailabilityResolver, default_resolver
from vellum.contexts.rendering.layouts import compose
from vellum.contexts.rendering.logger import (
    _log_debug,
    _log_info,
    log_render_result,
    log_render_start,
    log_transliteration,
    setup_rendering_logger,
)
from vellum.contexts.rendering.transliteration import LanguageMode, TextProcessor
from vellum.contexts.templating.exceptions import TemplateNotFoundError
from vellum.contexts.templating.resume_data_structure import ResumeDocument
from vellum.contexts.templating.template_registry import TemplateRegistry, default_registry
from vellum.utils.export import export_filename
from vellum.utils.pdf_processing import page_count
from vellum.utils.timestamp import now, today

load_dotenv()
DEFAULT_TEMPLATE = os.getenv("VELLUM_DEFAULT_TEMPLATE", "classic")
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))

PDF_SUBJECT = "Professional Resume"

BackendFactory = Callable[[float, float], GraphicsBackend]


@dataclass(frozen=True)
class RenderOptions:
    """
    Per-call render options.

    Attributes:
        template_name: Registered template to render with
        language_mode: LanguageMode, or any alias LanguageMode.parse accepts
    """

    template_name: str = DEFAULT_TEMPLATE
    language_mode: LanguageMode = LanguageMode.AUTO

    def __post_init__(self):
        object.__setattr__(self, "language_mode", LanguageMode.parse(self.language_mode))


class PDFAssembler:
    """
    Renders ResumeDocuments to PDF bytes.

    Holds no per-render state; every render() gets its own backend and
    cursor, so one assembler can serve concurrent callers.
    """

    def __init__(
        self,
        registry: Optional[TemplateRegistry] = None,
        resolver: Optional[GlyphAvailabilityResolver] = None,
        backend_factory: Optional[BackendFactory] = None,
    ):
        """
        Args:
            registry: Template lookup (default: built-in templates)
            resolver: Font coverage resolver (default: process-wide resolver)
            backend_factory: Called with (page_width, page_height) for each render
        """
        self.registry = registry if registry is not None else default_registry()
        self.resolver = resolver if resolver is not None else default_resolver()
        self.backend_factory = backend_factory if backend_factory is not None else ReportLabBackend

    def render(self, document: ResumeDocument, options: Optional[RenderOptions] = None) -> bytes:
        """
        Render a document.

        Args:
            document: Resume to render
            options: Template and language mode (default: RenderOptions())

        Returns:
            Complete PDF bytes

        Raises:
            TemplateNotFoundError: If the template is not registered
            RenderError: If the backend fails while drawing; no bytes are returned
        """
        pdf_bytes, _ = self._render(document, options or RenderOptions())
        return pdf_bytes

    def _render(self, document: ResumeDocument, options: RenderOptions) -> Tuple[bytes, int]:
        """Render and also report the number of main column page breaks."""
        mode = options.language_mode
        template = self.registry.resolve(options.template_name)
        style = template.style
        log_render_start(document.name, template.name, mode.value)

        start_time = time.time()
        cursor = None
        try:
            backend = self.backend_factory(style.page_width, style.page_height)

            fonts = self.resolver.resolve(backend)
            text = TextProcessor.for_mode(mode, fonts.capable)
            log_transliteration(text.enabled, mode.value, fonts.capable)

            backend.set_metadata(
                title=f"{document.name} - Resume", author=document.name, subject=PDF_SUBJECT
            )

            cursor = LayoutCursor(
                backend,
                top_margin=style.top_margin,
                bottom_threshold=style.bottom_threshold,
                content_width=style.content_width,
            )
            compose(template, document, backend, cursor, fonts, text)
            pdf_bytes = backend.finish()
        except Exception as e:
            error = RenderError(f"Failed to render resume for {document.name}", template.name, e)
            log_render_result(document.name, False, time.time() - start_time, error=e)
            raise error from e

        log_render_result(
            document.name,
            True,
            time.time() - start_time,
            num_bytes=len(pdf_bytes),
            page_breaks=cursor.page_breaks,
        )
        return pdf_bytes, cursor.page_breaks


def render_pdf(
    document: ResumeDocument,
    template_name: str = DEFAULT_TEMPLATE,
    language_mode=LanguageMode.AUTO,
) -> bytes:
    """Render with the built-in templates and the process-wide font resolver."""
    return PDFAssembler().render(
        document, RenderOptions(template_name=template_name, language_mode=language_mode)
    )


@dataclass
class RenderResult:
    """
    Result of rendering a resume file.

    Attributes:
        success: Whether a PDF was written
        pdf_path: Path of the written PDF (None if failed)
        num_bytes: Size of the PDF
        page_count: Pages in the written PDF (None if unavailable)
        page_breaks: Page breaks requested by the main column
        log_dir: Directory holding this session's log
        errors: Error messages if the render failed
    """

    success: bool
    pdf_path: Optional[Path] = None
    num_bytes: int = 0
    page_count: Optional[int] = None
    page_breaks: int = 0
    log_dir: Optional[Path] = None
    errors: List[str] = field(default_factory=list)


def render_resume(
    yaml_path: Path,
    template_name: str = DEFAULT_TEMPLATE,
    language_mode="auto",
    output_dir: Optional[Path] = None,
    verbose: bool = False,
    assembler: Optional[PDFAssembler] = None,
) -> RenderResult:
    """
    Render a resume YAML file to a PDF on disk with session logging.

    Orchestration function around PDFAssembler:
        - Logs to LOGS_PATH/render_<timestamp>/render.log
        - Writes the PDF to output_dir (default: RESULTS_PATH/YYYY-MM-DD/)
          named "<name>_<YYYY-MM-DD>.pdf"
        - Symlinks the PDF into the log directory

    Args:
        yaml_path: Resume YAML file (see ResumeDocument.from_yaml)
        template_name: Registered template name
        language_mode: LanguageMode or alias ("auto", "english", "zh", ...)
        output_dir: Directory for the PDF
        verbose: Echo debug logs to the console
        assembler: Assembler to use (default: PDFAssembler())

    Returns:
        RenderResult with the output path and diagnostics

    Raises:
        InvalidResumeDataError: If the YAML does not describe a resume
    """
    yaml_path = Path(yaml_path)
    assert yaml_path.exists(), f"Resume file not found: {yaml_path}"

    mode = LanguageMode.parse(language_mode)
    log_dir = LOGS_PATH / f"render_{now()}"
    setup_rendering_logger(
        log_dir, template_name, mode.value, console_level="DEBUG" if verbose else "INFO"
    )

    document = ResumeDocument.from_yaml(yaml_path)
    assembler = assembler if assembler is not None else PDFAssembler()

    try:
        pdf_bytes, page_breaks = assembler._render(
            document, RenderOptions(template_name=template_name, language_mode=mode)
        )
    except (TemplateNotFoundError, RenderError) as e:
        return RenderResult(success=False, log_dir=log_dir, errors=[str(e)])

    results_dir = Path(output_dir) if output_dir is not None else RESULTS_PATH / today()
    results_dir.mkdir(parents=True, exist_ok=True)

    pdf_path = results_dir / export_filename(document.name)
    pdf_path.write_bytes(pdf_bytes)
    _log_info(f"PDF saved to: {pdf_path}")

    pdf_symlink = log_dir / pdf_path.name
    if not pdf_symlink.exists():
        pdf_symlink.symlink_to(pdf_path.resolve())
    _log_debug(f"Linked PDF into log directory: {pdf_symlink}")

    return RenderResult(
        success=True,
        pdf_path=pdf_path,
        num_bytes=len(pdf_bytes),
        page_count=page_count(pdf_bytes),
        page_breaks=page_breaks,
        log_dir=log_dir,
    )
