"""Shared fixtures: a recording graphics backend and isolated resolvers."""

from pathlib import Path

import pytest

from vellum.contexts.rendering.backend import GraphicsBackend
from vellum.contexts.rendering.exceptions import FontRegistrationError
from vellum.contexts.rendering.fonts import GlyphAvailabilityResolver
from vellum.contexts.templating.resume_data_structure import ResumeDocument

# Deterministic metrics: every character is half an em wide, lines are 1.2 em
CHAR_WIDTH_RATIO = 0.5
LINE_HEIGHT_RATIO = 1.2


class RecordingBackend(GraphicsBackend):
    """
    In-memory GraphicsBackend that records every call.

    Attributes:
        calls: (method, args...) tuples in call order
        texts: draw_text records as dicts (text, x, y, font, size, color, page, ...)
        page: Current page number (1-based)
        height_overrides: Exact measure_height results for specific strings
        register_failures: Font paths whose registration raises FontRegistrationError
        coverage: Result of covers()
        fail_on: Method name that raises RuntimeError when called
    """

    def __init__(self, page_width=595.28, page_height=841.89):
        self.page_width = page_width
        self.page_height = page_height
        self.calls = []
        self.texts = []
        self.page = 1
        self.font = "Helvetica"
        self.font_size = 12.0
        self.color = "#000000"
        self.registered = {}
        self.metadata = {}
        self.height_overrides = {}
        self.register_failures = set()
        self.coverage = True
        self.fail_on = None
        self.finished = False

    def _record(self, method, *args):
        if self.fail_on == method:
            raise RuntimeError(f"{method} failed")
        self.calls.append((method,) + args)

    def register_font(self, name, font_path):
        self._record("register_font", name, Path(font_path))
        if Path(font_path) in self.register_failures:
            raise FontRegistrationError(f"Cannot load font '{name}'", Path(font_path), OSError("bad font"))
        self.registered[name] = Path(font_path)

    def covers(self, font_name, sample):
        return self.coverage

    def set_font(self, name):
        self._record("set_font", name)
        self.font = name

    def set_font_size(self, points):
        self._record("set_font_size", points)
        self.font_size = points

    def set_fill_color(self, color):
        self._record("set_fill_color", color)
        self.color = color

    def set_metadata(self, title=None, author=None, subject=None):
        self.metadata = {"title": title, "author": author, "subject": subject}

    def draw_text(self, text, x, y, width=None, align="left", line_gap=0.0, continued=False):
        self._record("draw_text", text, x, y)
        self.texts.append(
            {
                "text": text,
                "x": x,
                "y": y,
                "width": width,
                "align": align,
                "continued": continued,
                "font": self.font,
                "size": self.font_size,
                "color": self.color,
                "page": self.page,
            }
        )

    def measure_height(self, text, width, line_gap=0.0, first_line_indent=0.0):
        self._record("measure_height", text)
        if text in self.height_overrides:
            return self.height_overrides[text]
        if not text:
            return 0.0
        char_width = self.font_size * CHAR_WIDTH_RATIO
        chars_per_line = max(int(width / char_width), 1)
        # The indent counts as characters already on the first line
        parts = text.split("\n")
        lengths = [len(parts[0]) + int(first_line_indent / char_width)] + [len(p) for p in parts[1:]]
        lines = sum(max(1, -(-length // chars_per_line)) for length in lengths)
        return lines * (self.font_size * LINE_HEIGHT_RATIO + line_gap)

    def measure_width(self, text, font_size=None):
        return len(text) * (font_size or self.font_size) * CHAR_WIDTH_RATIO

    def draw_rect(self, x, y, width, height, color):
        self._record("draw_rect", x, y, width, height, color)

    def draw_line(self, x1, y1, x2, y2, width, color):
        self._record("draw_line", x1, y1, x2, y2, width, color)

    def add_page(self):
        self._record("add_page")
        self.page += 1

    def finish(self):
        self._record("finish")
        self.finished = True
        return b"%PDF-recorded"

    # Query helpers

    def text_values(self):
        return [t["text"] for t in self.texts]

    def find_text(self, text):
        """First draw_text record whose text equals text."""
        return next((t for t in self.texts if t["text"] == text), None)

    def count(self, method):
        return sum(1 for call in self.calls if call[0] == method)


@pytest.fixture
def recording_backend():
    return RecordingBackend()


@pytest.fixture
def make_backend():
    """The RecordingBackend class, for tests that need several backends."""
    return RecordingBackend


@pytest.fixture
def backend_factory():
    """Factory that records every backend it creates in `.created`."""

    def factory(page_width, page_height):
        backend = RecordingBackend(page_width, page_height)
        factory.created.append(backend)
        return backend

    factory.created = []
    return factory


@pytest.fixture
def fallback_resolver():
    """Resolver with no candidate fonts: always resolves to Helvetica."""
    return GlyphAvailabilityResolver(candidates=[])


@pytest.fixture
def capable_font(tmp_path):
    """A file the resolver will accept as a candidate (the recording backend never parses it)."""
    font_path = tmp_path / "NotoSansSC-Regular.ttf"
    font_path.write_bytes(b"\x00\x01\x00\x00")
    return font_path


@pytest.fixture
def capable_resolver(capable_font):
    return GlyphAvailabilityResolver(candidates=[capable_font])


@pytest.fixture
def acme_document():
    return ResumeDocument.from_dict(
        {
            "personalInfo": {"name": "Jane Doe", "email": "jane@example.com"},
            "experiences": [
                {
                    "company": "Acme",
                    "position": "Engineer",
                    "startDate": "2021-01",
                    "isCurrent": True,
                }
            ],
        }
    )


@pytest.fixture
def full_document():
    return ResumeDocument.from_dict(
        {
            "personalInfo": {
                "name": "张伟",
                "email": "zhang.wei@example.com",
                "phone": "+86 138 0000 0000",
                "location": "杭州市",
                "website": "https://zhangwei.dev",
                "summary": "全栈开发 with a focus on 性能 and 架构.",
            },
            "experiences": [
                {
                    "company": "阿里巴巴",
                    "position": "高级工程师",
                    "location": "杭州市",
                    "startDate": "2021-01",
                    "isCurrent": True,
                    "description": "Led 微服务 migration.",
                    "achievements": ["Cut p99 latency by 40%", "  ", "Mentored five engineers"],
                },
                {
                    "company": "Globex",
                    "position": "Engineer",
                    "startDate": "2018-07",
                    "endDate": "2020-12",
                },
            ],
            "educations": [
                {
                    "school": "浙江大学",
                    "degree": "硕士",
                    "major": "计算机科学",
                    "startDate": "2016-09",
                    "endDate": "2018-06",
                    "gpa": "3.8",
                }
            ],
            "projects": [
                {
                    "name": "Vellum",
                    "description": "PDF resume renderer.",
                    "technologies": ["Python", "reportlab"],
                    "url": "https://example.com/vellum",
                    "startDate": "2023-01",
                }
            ],
            "skills": [
                {"category": "编程语言", "name": "Python"},
                {"category": "数据库", "name": "PostgreSQL"},
                {"category": "编程语言", "name": "Go"},
            ],
        }
    )
