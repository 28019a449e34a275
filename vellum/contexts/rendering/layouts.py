"""
Column layouts.

compose() walks a template's section lists and hands each present section
to its renderer. Single-column templates flow everything through one
cursor. Two-column templates paint a side panel, fill it from a cursor that
never leaves page one, then flow the main sections beside it with their
own cursor.
"""

from vellum.contexts.rendering.cursor import LayoutCursor
from vellum.contexts.rendering.logger import _log_debug
from vellum.contexts.rendering.sections import SECTION_RENDERERS, SIDE_RENDERERS, RenderContext


def compose(template, document, backend, cursor: LayoutCursor, fonts, text) -> None:
    """
    Draw a document with a template.

    Args:
        template: Template to lay out with
        document: ResumeDocument to draw
        backend: GraphicsBackend to draw on
        cursor: Main column cursor
        fonts: FontCoverage for this render
        text: TextProcessor for this render
    """
    style = template.style

    if template.columns == 1:
        main = RenderContext(backend, cursor, style, fonts, text, x=style.margin, width=style.content_width)
    else:
        side_x = style.side_padding
        side_width = style.side_width - 2 * style.side_padding
        main_x = style.side_width + style.column_gap
        main_width = style.page_width - main_x - style.margin

        def paint_side_panel():
            backend.draw_rect(0, 0, style.side_width, style.page_height, style.side_background)

        paint_side_panel()
        cursor.on_new_page(paint_side_panel)

        side_cursor = LayoutCursor(
            backend,
            top_margin=style.top_margin,
            bottom_threshold=style.bottom_threshold,
            content_width=side_width,
            paginate=False,
        )
        side = RenderContext(backend, side_cursor, style, fonts, text, x=side_x, width=side_width)
        _render_sections(template.side_sections, SIDE_RENDERERS, document, side)

        main = RenderContext(backend, cursor, style, fonts, text, x=main_x, width=main_width)

    _render_sections(template.main_sections, SECTION_RENDERERS, document, main)


def _render_sections(keys, renderers, document, ctx: RenderContext) -> None:
    for key in keys:
        renderer, accessor = renderers[key]
        _log_debug(f"Section '{key}' at y={ctx.cursor.y:.1f}")
        renderer(accessor(document), ctx)
