"""
Graphics backend interface and the reportlab adapter.

The rendering core only talks to GraphicsBackend: font registration, text
drawing/measurement, rectangles, lines, page breaks and final byte
collection. Coordinates are in points with a top-left origin; `y` in
draw_text is the top of the first text line.

ReportLabBackend converts to reportlab's bottom-left origin, wraps text
greedily on words (CJK runs wrap per character) and collects the emitted
PDF bytes in an in-memory sink until the document is finished.
"""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from reportlab.lib.colors import toColor
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from vellum.contexts.rendering.exceptions import FontRegistrationError
from vellum.contexts.templating.defaults import A4_HEIGHT, A4_WIDTH

ALIGNMENTS = ("left", "center", "right", "justify")

# Line height as a multiple of font size (reportlab's default leading)
LEADING_RATIO = 1.2

# CJK ideographs, kana, hangul and full-width forms break anywhere
_WIDE_CHARS = "\u2e80-\u9fff\uac00-\ud7af\uf900-\ufaff\uff00-\uffef"
_WRAP_TOKEN = re.compile(rf"[{_WIDE_CHARS}]|[^\s{_WIDE_CHARS}]+|\s+")


class GraphicsBackend(ABC):
    """
    Low-level drawing surface consumed by the rendering core.

    One backend instance backs exactly one document. Subclasses must
    implement every abstract method; covers() and set_metadata() have
    permissive defaults.
    """

    @abstractmethod
    def register_font(self, name: str, font_path: Path) -> None:
        """Register a font file under a logical name. Raises FontRegistrationError."""

    @abstractmethod
    def set_font(self, name: str) -> None:
        pass

    @abstractmethod
    def set_font_size(self, points: float) -> None:
        pass

    @abstractmethod
    def set_fill_color(self, color: str) -> None:
        pass

    @abstractmethod
    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        width: Optional[float] = None,
        align: str = "left",
        line_gap: float = 0.0,
        continued: bool = False,
    ) -> None:
        """
        Draw text whose first line's top edge sits at y.

        With a width the text wraps inside [x, x + width]. With continued=True
        the next draw_text call resumes right after this text on its last line
        (its own x/y are ignored), which is how a bold label is followed by
        regular text.
        """

    @abstractmethod
    def measure_height(
        self, text: str, width: float, line_gap: float = 0.0, first_line_indent: float = 0.0
    ) -> float:
        """
        Height the text would occupy when wrapped at width, in the current font.

        first_line_indent narrows the first line only, matching text drawn
        after a continued draw_text that ended first_line_indent into the line.
        """

    @abstractmethod
    def measure_width(self, text: str, font_size: Optional[float] = None) -> float:
        """Unwrapped width of text in the current font."""

    @abstractmethod
    def draw_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        pass

    @abstractmethod
    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, width: float, color: str
    ) -> None:
        pass

    @abstractmethod
    def add_page(self) -> None:
        pass

    @abstractmethod
    def finish(self) -> bytes:
        """Complete the document and return every emitted byte, concatenated."""

    def covers(self, font_name: str, sample: str) -> bool:
        """Whether a registered font has glyphs for every character in sample."""
        return True

    def split_lines(self, text: str, width: float) -> List[List[str]]:
        """Lines draw_text would produce at width in the current font, per paragraph."""
        return wrap_paragraphs(text, self.measure_width, width)

    def set_metadata(
        self, title: Optional[str] = None, author: Optional[str] = None, subject: Optional[str] = None
    ) -> None:
        pass


def wrap_paragraphs(
    text: str,
    measure: Callable[[str], float],
    width: float,
    first_line_width: Optional[float] = None,
) -> List[List[str]]:
    """
    Greedy line wrapping.

    Args:
        text: Text to wrap; "\\n" starts a new paragraph
        measure: Width of a string in the current font
        width: Available width per line
        first_line_width: Narrower width for the very first line (continued text)

    Returns:
        One list of lines per paragraph
    """
    paragraphs: List[List[str]] = []
    line_count = 0

    def available() -> float:
        if first_line_width is not None and line_count == 0:
            return first_line_width
        return width

    for paragraph in text.split("\n"):
        lines: List[str] = []
        current = ""
        for token in _WRAP_TOKEN.findall(paragraph):
            if token.isspace():
                if current:
                    current += token
                continue
            if measure((current + token).rstrip()) <= available():
                current += token
                continue
            if current.strip():
                lines.append(current.rstrip())
                line_count += 1
            elif available() < width and measure(token) <= width:
                # Too wide for the rest of a continued line but not for a full one
                lines.append("")
                line_count += 1
                current = token
                continue
            # A single token wider than a full line is split per character
            while len(token) > 1 and measure(token) > available():
                cut = _fit_prefix(token, measure, available())
                lines.append(token[:cut])
                line_count += 1
                token = token[cut:]
            current = token
        lines.append(current.rstrip())
        line_count += 1
        paragraphs.append(lines)

    return paragraphs


def wrap_text(
    text: str,
    measure: Callable[[str], float],
    width: float,
    first_line_width: Optional[float] = None,
) -> List[str]:
    """Flat list of wrapped lines (see wrap_paragraphs)."""
    return [
        line
        for paragraph in wrap_paragraphs(text, measure, width, first_line_width)
        for line in paragraph
    ]


def _fit_prefix(token: str, measure: Callable[[str], float], width: float) -> int:
    """Longest prefix length (at least 1) of token that fits in width."""
    cut = 1
    while cut < len(token) and measure(token[: cut + 1]) <= width:
        cut += 1
    return cut


class _ChunkSink:
    """File-like target collecting the byte chunks reportlab writes."""

    def __init__(self):
        self.chunks: List[bytes] = []

    def write(self, data) -> int:
        self.chunks.append(bytes(data))
        return len(data)

    def flush(self) -> None:
        pass

    def getvalue(self) -> bytes:
        return b"".join(self.chunks)


class ReportLabBackend(GraphicsBackend):
    """
    GraphicsBackend over a reportlab canvas.

    Fonts registered here go into reportlab's process-wide font registry,
    so a font registered once is usable by every later backend.
    """

    def __init__(self, page_width: float = A4_WIDTH, page_height: float = A4_HEIGHT):
        self.page_width = page_width
        self.page_height = page_height
        self.page_number = 1

        self._sink = _ChunkSink()
        self._canvas = canvas.Canvas(self._sink, pagesize=(page_width, page_height))
        self._font = "Helvetica"
        self._font_size = 12.0
        self._fill = "#000000"
        # (block x, pen x, top of pen line, block width) after a continued draw
        self._pen: Optional[Tuple[float, float, float, Optional[float]]] = None
        self._finished = False

    # Fonts and state

    def register_font(self, name: str, font_path: Path) -> None:
        try:
            pdfmetrics.registerFont(TTFont(name, str(font_path)))
        except (TTFError, OSError) as e:
            raise FontRegistrationError(f"Cannot load font '{name}'", Path(font_path), e) from e

    def covers(self, font_name: str, sample: str) -> bool:
        face = getattr(pdfmetrics.getFont(font_name), "face", None)
        char_to_glyph = getattr(face, "charToGlyph", None)
        if char_to_glyph is None:
            # Standard Type 1 fonts only carry a single-byte encoding
            return False
        return all(ord(ch) in char_to_glyph for ch in sample if not ch.isspace())

    def set_font(self, name: str) -> None:
        # Fails fast on names that were never registered
        pdfmetrics.getFont(name)
        self._font = name

    def set_font_size(self, points: float) -> None:
        self._font_size = float(points)

    def set_fill_color(self, color: str) -> None:
        self._fill = color

    def set_metadata(self, title=None, author=None, subject=None) -> None:
        self._canvas.setCreator("Vellum")
        if title:
            self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)
        if subject:
            self._canvas.setSubject(subject)

    # Measurement

    def _string_width(self, text: str) -> float:
        return pdfmetrics.stringWidth(text, self._font, self._font_size)

    def _leading(self) -> float:
        return self._font_size * LEADING_RATIO

    def measure_height(
        self, text: str, width: float, line_gap: float = 0.0, first_line_indent: float = 0.0
    ) -> float:
        if not text:
            return 0.0
        first_line_width = width - first_line_indent if first_line_indent else None
        lines = wrap_text(text, self._string_width, width, first_line_width=first_line_width)
        return len(lines) * (self._leading() + line_gap)

    def measure_width(self, text: str, font_size: Optional[float] = None) -> float:
        return pdfmetrics.stringWidth(text, self._font, font_size or self._font_size)

    # Drawing

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        width: Optional[float] = None,
        align: str = "left",
        line_gap: float = 0.0,
        continued: bool = False,
    ) -> None:
        if align not in ALIGNMENTS:
            raise ValueError(f"Unsupported alignment '{align}'. Use one of {ALIGNMENTS}")

        first_offset = 0.0
        if self._pen is not None:
            x, pen_x, y, width = self._pen
            first_offset = pen_x - x

        if width is None:
            paragraphs = [[line] for line in (text or "").split("\n")]
        else:
            paragraphs = wrap_paragraphs(
                text or "", self._string_width, width, first_line_width=width - first_offset
            )

        self._canvas.setFillColor(toColor(self._fill))
        self._canvas.setFont(self._font, self._font_size)
        ascent = pdfmetrics.getAscent(self._font, self._font_size)
        leading = self._leading() + line_gap

        index = 0
        last_line = ""
        for paragraph in paragraphs:
            for position, line in enumerate(paragraph):
                offset = first_offset if index == 0 else 0.0
                line_width = None if width is None else width - offset
                baseline = self.page_height - (y + index * leading) - ascent
                self._draw_aligned(
                    line, x + offset, baseline, line_width, align,
                    last_in_paragraph=position == len(paragraph) - 1,
                )
                last_line = line
                index += 1

        if continued:
            last_offset = first_offset if index <= 1 else 0.0
            pen_x = x + last_offset + self._string_width(last_line)
            self._pen = (x, pen_x, y + max(index - 1, 0) * leading, width)
        else:
            self._pen = None

    def _draw_aligned(
        self,
        line: str,
        x: float,
        baseline: float,
        width: Optional[float],
        align: str,
        last_in_paragraph: bool,
    ) -> None:
        if not line:
            return
        if width is None or align == "left" or (align == "justify" and last_in_paragraph):
            self._canvas.drawString(x, baseline, line)
        elif align == "center":
            self._canvas.drawCentredString(x + width / 2, baseline, line)
        elif align == "right":
            self._canvas.drawRightString(x + width, baseline, line)
        else:
            words = line.split()
            if len(words) < 2:
                self._canvas.drawString(x, baseline, line)
                return
            spare = width - sum(self._string_width(word) for word in words)
            gap = spare / (len(words) - 1)
            cursor_x = x
            for word in words:
                self._canvas.drawString(cursor_x, baseline, word)
                cursor_x += self._string_width(word) + gap

    def draw_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self._canvas.setFillColor(toColor(color))
        self._canvas.rect(x, self.page_height - y - height, width, height, stroke=0, fill=1)

    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, width: float, color: str
    ) -> None:
        self._canvas.setStrokeColor(toColor(color))
        self._canvas.setLineWidth(width)
        self._canvas.line(x1, self.page_height - y1, x2, self.page_height - y2)

    def add_page(self) -> None:
        self._canvas.showPage()
        self.page_number += 1
        self._pen = None

    def finish(self) -> bytes:
        if self._finished:
            raise RuntimeError("Document already finished")
        self._canvas.save()
        self._finished = True
        return self._sink.getvalue()
