"""
Glyph availability resolution.

Decides once per process whether a font able to display the source script
(Simplified Chinese) is installed, and registers it with the backend under
the logical names PRIMARY_FONT / PRIMARY_BOLD_FONT. When nothing usable is
found the standard Helvetica pair is used and callers fall back to
transliteration.
"""

import os
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from vellum.contexts.rendering.exceptions import FontRegistrationError
from vellum.contexts.rendering.logger import (
    log_font_coverage,
    log_font_probe,
    log_font_rejected,
)

load_dotenv()

PRIMARY_FONT = "primary"
PRIMARY_BOLD_FONT = "primary-bold"
FALLBACK_FONT = "Helvetica"
FALLBACK_BOLD_FONT = "Helvetica-Bold"

# Collections (.ttc) and web fonts (.woff/.woff2) cannot be loaded by the backend
SUPPORTED_FONT_SUFFIXES = (".ttf", ".otf")

# Sample checked against a registered candidate: a font that only covers
# Latin text is no better than the fallback
GLYPH_PROBE = "简历工作经历"

PLATFORM_FONT_CANDIDATES = {
    "darwin": [
        "/System/Library/Fonts/PingFang.ttc",
        "/Library/Fonts/Arial Unicode MS.ttf",
        "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
        "/System/Library/Fonts/Helvetica.ttc",
    ],
    "win32": [
        "C:\\Windows\\Fonts\\msyh.ttf",
        "C:\\Windows\\Fonts\\simsun.ttf",
        "C:\\Windows\\Fonts\\simhei.ttf",
    ],
    "linux": [
        "/usr/share/fonts/truetype/droid/DroidSansFallbackFull.ttf",
        "/usr/share/fonts/opentype/noto/NotoSansSC-Regular.otf",
        "/usr/share/fonts/truetype/noto/NotoSansSC-Regular.ttf",
        "/usr/share/fonts/truetype/wqy/wqy-microhei.ttc",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    ],
}


def default_candidates(platform: Optional[str] = None) -> List[Path]:
    """
    Candidate font files in probe order.

    Paths from VELLUM_FONT_CANDIDATES (os.pathsep-separated) come first,
    followed by the built-in list for the platform.
    """
    platform = platform or sys.platform
    if platform.startswith("linux"):
        platform = "linux"

    configured = [
        Path(entry) for entry in os.getenv("VELLUM_FONT_CANDIDATES", "").split(os.pathsep) if entry
    ]
    builtin = [Path(entry) for entry in PLATFORM_FONT_CANDIDATES.get(platform, [])]
    return configured + builtin


@dataclass(frozen=True)
class FontCoverage:
    """
    Fonts to draw with for one process.

    Attributes:
        capable: True if the regular/bold handles can display the source script
        regular: Font name for body text
        bold: Font name for titles and labels
        font_path: File the capable font was loaded from
    """

    capable: bool
    regular: str
    bold: str
    font_path: Optional[Path] = None

    def font(self, bold: bool = False) -> str:
        return self.bold if bold else self.regular


FALLBACK_COVERAGE = FontCoverage(capable=False, regular=FALLBACK_FONT, bold=FALLBACK_BOLD_FONT)


class GlyphAvailabilityResolver:
    """
    Probes candidate fonts once and caches the resulting FontCoverage.

    resolve() is safe to call from several threads; the first caller does
    the probing while holding the lock, later callers read the cached value.
    """

    def __init__(self, candidates: Optional[Sequence[Path]] = None):
        self.candidates = [Path(c) for c in candidates] if candidates is not None else None
        self._coverage: Optional[FontCoverage] = None
        self._lock = threading.Lock()

    @property
    def resolved(self) -> bool:
        return self._coverage is not None

    def resolve(self, backend) -> FontCoverage:
        """
        Return the process font coverage, probing on the first call.

        Args:
            backend: GraphicsBackend the capable font is registered with

        Returns:
            FontCoverage with PRIMARY_FONT handles, or FALLBACK_COVERAGE
        """
        coverage = self._coverage
        if coverage is not None:
            return coverage

        with self._lock:
            if self._coverage is None:
                self._coverage = self._probe(backend)
                log_font_coverage(self._coverage)
            return self._coverage

    def _probe(self, backend) -> FontCoverage:
        candidates = self.candidates if self.candidates is not None else default_candidates()

        for font_path in candidates:
            if not font_path.exists():
                log_font_probe(font_path, "not found")
                continue
            if font_path.suffix.lower() not in SUPPORTED_FONT_SUFFIXES:
                log_font_probe(font_path, f"unsupported format '{font_path.suffix}'")
                continue

            try:
                backend.register_font(PRIMARY_FONT, font_path)
                backend.register_font(PRIMARY_BOLD_FONT, font_path)
            except FontRegistrationError as e:
                log_font_rejected(font_path, str(e.original_error or e.message))
                continue

            if not backend.covers(PRIMARY_FONT, GLYPH_PROBE):
                log_font_rejected(font_path, "no glyphs for the source script")
                continue

            log_font_probe(font_path, "registered")
            return FontCoverage(
                capable=True,
                regular=PRIMARY_FONT,
                bold=PRIMARY_BOLD_FONT,
                font_path=font_path,
            )

        return FALLBACK_COVERAGE

    def reset(self) -> None:
        """Forget the cached coverage so the next resolve() probes again."""
        with self._lock:
            self._coverage = None


_default_resolver = GlyphAvailabilityResolver()


def default_resolver() -> GlyphAvailabilityResolver:
    """Process-wide resolver used when none is injected."""
    return _default_resolver


def resolve_font_coverage(backend) -> FontCoverage:
    return _default_resolver.resolve(backend)
