"""Vertical layout cursor with page-break policy."""

from enum import Enum
from typing import Callable, List, Optional

from vellum.contexts.rendering.logger import log_page_break


class PaginationState(Enum):
    ON_PAGE = "on_page"
    PAGE_BREAK_REQUESTED = "page_break_requested"


class LayoutCursor:
    """
    Current vertical drawing offset for one column of one render.

    Renderers call check_page_break() with the height they are about to
    use before drawing, then advance() by the height actually used. The
    cursor is never shared between renders.
    """

    def __init__(
        self,
        backend,
        top_margin: float,
        bottom_threshold: float,
        content_width: float,
        start_y: Optional[float] = None,
        paginate: bool = True,
    ):
        """
        Args:
            backend: GraphicsBackend that receives add_page() calls
            top_margin: Offset the cursor resets to on a new page
            bottom_threshold: Lowest offset content may reach on a page
            content_width: Width of the column the cursor flows through
            start_y: Initial offset (defaults to top_margin)
            paginate: False for columns that must stay on the first page
        """
        self.backend = backend
        self.top_margin = top_margin
        self.bottom_threshold = bottom_threshold
        self.content_width = content_width
        self.paginate = paginate
        self.y = top_margin if start_y is None else start_y
        self.page_number = 1
        self.page_breaks = 0
        self.state = PaginationState.ON_PAGE
        self._new_page_hooks: List[Callable[[], None]] = []

    def advance(self, amount: float) -> None:
        self.y += amount

    def move_to(self, y: float) -> None:
        self.y = y

    @property
    def remaining(self) -> float:
        """Space left before the bottom threshold."""
        return self.bottom_threshold - self.y

    @property
    def page_capacity(self) -> float:
        """Height available on a fresh page."""
        return self.bottom_threshold - self.top_margin

    def fits(self, required_space: float) -> bool:
        return self.y + required_space <= self.bottom_threshold

    def on_new_page(self, hook: Callable[[], None]) -> None:
        """Register a callback fired after every page this cursor adds."""
        self._new_page_hooks.append(hook)

    def check_page_break(self, required_space: float) -> bool:
        """
        Start a new page if required_space does not fit below the cursor.

        Returns:
            True if a page was added (the cursor is then at top_margin)
        """
        if not self.paginate or self.fits(required_space):
            return False

        self.state = PaginationState.PAGE_BREAK_REQUESTED
        offset = self.y
        self.backend.add_page()
        self.page_number += 1
        self.page_breaks += 1
        self.y = self.top_margin
        for hook in self._new_page_hooks:
            hook()
        self.state = PaginationState.ON_PAGE

        log_page_break(self.page_number, offset, required_space)
        return True
