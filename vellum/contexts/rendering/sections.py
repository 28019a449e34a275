"""
Section renderers.

One function per résumé section. Every renderer takes the section's data
and a RenderContext, draws through the context's backend and moves the
context's cursor; none of them keeps state between calls.

Text blocks of unknown height are measured with the backend first, the
cursor gets a chance to break the page for that height, and only then is
the block drawn and the cursor advanced by the measured height.

Labels are written in the source script (Simplified Chinese) and pass
through the render's TextProcessor like any other text, so a render that
transliterates also gets English headings.
"""

from dataclasses import dataclass
from operator import attrgetter
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from vellum.contexts.rendering.cursor import LayoutCursor
from vellum.contexts.rendering.fonts import FontCoverage
from vellum.contexts.rendering.logger import log_side_column_overflow
from vellum.contexts.rendering.transliteration import TextProcessor
from vellum.contexts.templating.defaults import StyleTokens
from vellum.contexts.templating.resume_data_structure import (
    Education,
    Experience,
    PersonalInfo,
    Project,
    SkillGroup,
)

SECTION_LABELS = {
    "summary": "个人简介",
    "experiences": "工作经历",
    "educations": "教育经历",
    "projects": "项目经历",
    "skills": "技能专长",
    "contact": "联系方式",
}
PRESENT_TOKEN = "至今"
TECH_STACK_LABEL = "技术栈"
BULLET = "• "
META_SEPARATOR = " | "

# Conservative heights checked before an entry or title starts
SECTION_TITLE_ESTIMATE = 50.0
EXPERIENCE_ESTIMATE = 80.0
EDUCATION_ESTIMATE = 60.0
PROJECT_ESTIMATE = 60.0
SKILL_GROUP_ESTIMATE = 30.0

# Accent block beside section titles
TITLE_ACCENT_WIDTH = 8.0
TITLE_ACCENT_HEIGHT = 22.0
TITLE_ACCENT_OFFSET = 5.0
# Underline sits this far above the cursor after the title advance
UNDERLINE_RISE = 10.0
UNDERLINE_OVERHANG = 20.0
UNDERLINE_WIDTH = 1.0


@dataclass
class RenderContext:
    """
    Everything a section renderer needs for one column of one render.

    Attributes:
        backend: GraphicsBackend to draw on
        cursor: Vertical cursor of this column
        style: Template style tokens
        fonts: Font handles resolved for this process
        text: Transliteration hook for this render
        x: Left edge of the column
        width: Width of the column
    """

    backend: object
    cursor: LayoutCursor
    style: StyleTokens
    fonts: FontCoverage
    text: TextProcessor
    x: float
    width: float

    def use_font(self, bold: bool = False, size: Optional[float] = None, color: Optional[str] = None):
        self.backend.set_font(self.fonts.font(bold))
        if size is not None:
            self.backend.set_font_size(size)
        if color is not None:
            self.backend.set_fill_color(color)

    def title_text(self, label: str) -> str:
        title = self.text(label)
        return title.upper() if self.style.uppercase_titles else title


# Drawing helpers


def _draw_block(
    ctx: RenderContext,
    text: str,
    *,
    size: float,
    color: str,
    bold: bool = False,
    indent: float = 0.0,
    line_gap: float = 0.0,
    align: str = "left",
    gap: float = 0.0,
) -> None:
    """
    Measure, break if needed, draw, then advance by the measured height plus gap.

    A block that fits on a fresh page is never split: it moves to the next
    page whole. A taller block fills the rest of the current page and flows
    line by line onto as many pages as it needs.
    """
    ctx.use_font(bold, size, color)
    width = ctx.width - indent
    height = ctx.backend.measure_height(text, width, line_gap)
    cursor = ctx.cursor

    if height <= cursor.page_capacity or not cursor.paginate:
        cursor.check_page_break(height)
        ctx.backend.draw_text(
            text, ctx.x + indent, cursor.y, width=width, align=align, line_gap=line_gap
        )
        cursor.advance(height)
    else:
        _flow_block(ctx, text, ctx.x + indent, width, height, align=align, line_gap=line_gap)
    cursor.advance(gap)


def _flow_block(
    ctx: RenderContext,
    text: str,
    x: float,
    width: float,
    height: float,
    *,
    align: str,
    line_gap: float,
) -> None:
    """Draw a block taller than a page in per-page runs of whole lines."""
    paragraphs = ctx.backend.split_lines(text, width)
    line_height = height / max(sum(len(lines) for lines in paragraphs), 1)
    cursor = ctx.cursor

    # (line, ends its paragraph) for the run on the current page
    run: List[Tuple[str, bool]] = []

    def flush() -> None:
        if not run:
            return
        # Rewrapping the rejoined run at the same width yields the same lines
        joined = "".join(line + ("\n" if last else " ") for line, last in run).rstrip(" \n")
        ctx.backend.draw_text(joined, x, cursor.y, width=width, align=align, line_gap=line_gap)
        cursor.advance(len(run) * line_height)
        run.clear()

    for lines in paragraphs:
        for position, line in enumerate(lines):
            if not cursor.fits((len(run) + 1) * line_height):
                flush()
                cursor.check_page_break(line_height)
            run.append((line, position == len(lines) - 1))
    flush()


def _draw_line(
    ctx: RenderContext,
    text: str,
    *,
    size: float,
    color: str,
    bold: bool = False,
    align: str = "left",
    advance: Optional[float] = None,
) -> None:
    """Draw a short line and advance by the fixed line advance (or more if it wrapped)."""
    ctx.use_font(bold, size, color)
    height = ctx.backend.measure_height(text, ctx.width)
    ctx.backend.draw_text(text, ctx.x, ctx.cursor.y, width=ctx.width, align=align)
    step = ctx.style.line_advance if advance is None else advance
    ctx.cursor.advance(max(step, height))


def _draw_labeled_line(
    ctx: RenderContext, label: str, value: str, *, size: float, color: str
) -> None:
    """Bold label continued by regular text on the same line."""
    ctx.use_font(True, size, color)
    label_width = ctx.backend.measure_width(label)
    ctx.backend.draw_text(label, ctx.x, ctx.cursor.y, width=ctx.width, continued=True)
    ctx.use_font(False)
    height = ctx.backend.measure_height(value, ctx.width, first_line_indent=label_width)
    ctx.backend.draw_text(value, ctx.x, ctx.cursor.y, width=ctx.width)
    ctx.cursor.advance(max(ctx.style.line_advance, height))


# Main column renderers


def render_header(personal_info: PersonalInfo, ctx: RenderContext) -> None:
    """Accent bar, name, contact line and divider."""
    style = ctx.style
    backend = ctx.backend
    cursor = ctx.cursor

    if style.accent_bar:
        backend.draw_rect(0, 0, style.page_width, style.accent_bar_height, style.accent_color)

    cursor.move_to(style.header_top)
    ctx.use_font(True, style.name_size, style.heading_color)
    backend.draw_text(
        ctx.text(personal_info.name), ctx.x, cursor.y, width=ctx.width, align=style.header_align
    )
    cursor.advance(style.name_advance)

    if style.header_contact:
        contact = style.contact_separator.join(_contact_fields(personal_info, ctx.text))
        if contact:
            ctx.use_font(False, style.contact_size, style.muted_color)
            backend.draw_text(contact, ctx.x, cursor.y, width=ctx.width, align=style.header_align)
        cursor.advance(style.contact_advance)

    if style.header_divider:
        backend.draw_line(
            ctx.x + style.divider_inset,
            cursor.y,
            ctx.x + ctx.width - style.divider_inset,
            cursor.y,
            style.divider_width,
            style.divider_color,
        )
    cursor.advance(style.header_gap)


def _contact_fields(personal_info: PersonalInfo, text: TextProcessor) -> list:
    # Only the location is natural language; the rest are identifiers
    fields = [
        personal_info.email,
        personal_info.phone,
        text(personal_info.location or ""),
        personal_info.website,
    ]
    return [f for f in fields if f]


def render_section_title(ctx: RenderContext, label: str) -> None:
    style = ctx.style
    backend = ctx.backend
    cursor = ctx.cursor

    cursor.check_page_break(SECTION_TITLE_ESTIMATE)
    title = ctx.title_text(label)

    if style.title_accent:
        backend.draw_rect(
            ctx.x - TITLE_ACCENT_OFFSET,
            cursor.y - TITLE_ACCENT_OFFSET,
            TITLE_ACCENT_WIDTH,
            TITLE_ACCENT_HEIGHT,
            style.accent_color,
        )

    title_x = ctx.x + style.title_indent
    ctx.use_font(True, style.title_size, style.heading_color)
    backend.draw_text(title, title_x, cursor.y)
    cursor.advance(style.title_advance)

    if style.title_underline:
        underline_y = cursor.y - UNDERLINE_RISE
        title_width = backend.measure_width(title, style.title_size)
        backend.draw_line(
            title_x,
            underline_y,
            title_x + title_width + UNDERLINE_OVERHANG,
            underline_y,
            UNDERLINE_WIDTH,
            style.divider_color,
        )
    cursor.advance(style.title_gap)


def render_summary(personal_info: PersonalInfo, ctx: RenderContext) -> None:
    if not personal_info.summary:
        return

    style = ctx.style
    render_section_title(ctx, SECTION_LABELS["summary"])
    _draw_block(
        ctx,
        ctx.text(personal_info.summary),
        size=style.body_size,
        color=style.body_color,
        line_gap=style.summary_line_gap,
        align="justify",
        gap=style.summary_gap,
    )


def _render_entry_heading(
    ctx: RenderContext, title: str, subtitle: Optional[str], meta: Sequence[str]
) -> None:
    """
    Title, optional subtitle and meta line of one entry.

    Side by side templates fold the subtitle into the title
    ("position - company"); stacked templates give it a line of its own in
    the highlight color.
    """
    style = ctx.style
    meta = [m for m in meta if m]

    if style.stacked_entry_titles:
        _draw_line(ctx, title, size=style.entry_title_size, color=style.heading_color, bold=True)
        if subtitle:
            _draw_line(ctx, subtitle, size=style.meta_size, color=style.highlight_color)
    else:
        heading = f"{title} - {subtitle}" if subtitle else title
        _draw_line(ctx, heading, size=style.entry_title_size, color=style.heading_color, bold=True)

    if meta:
        _draw_line(ctx, META_SEPARATOR.join(meta), size=style.meta_size, color=style.muted_color)


def _render_description(ctx: RenderContext, description: Optional[str]) -> None:
    if not description:
        return
    style = ctx.style
    _draw_block(
        ctx,
        ctx.text(description),
        size=style.body_size,
        color=style.body_color,
        line_gap=style.body_line_gap,
        gap=style.description_gap,
    )


def render_experiences(experiences: Sequence[Experience], ctx: RenderContext) -> None:
    if not experiences:
        return

    style = ctx.style
    text = ctx.text
    present = text(PRESENT_TOKEN)
    render_section_title(ctx, SECTION_LABELS["experiences"])

    for index, experience in enumerate(experiences):
        ctx.cursor.check_page_break(EXPERIENCE_ESTIMATE)

        if style.stacked_entry_titles:
            meta = [experience.date_range(present), text(experience.location or "")]
        else:
            meta = [
                experience.date_range(present)
                + (f"{META_SEPARATOR}{text(experience.location)}" if experience.location else "")
            ]
        _render_entry_heading(ctx, text(experience.position), text(experience.company), meta)
        _render_description(ctx, experience.description)

        for achievement in experience.achievements:
            if not achievement.strip():
                continue
            _draw_block(
                ctx,
                f"{BULLET}{text(achievement)}",
                size=style.body_size,
                color=style.body_color,
                indent=style.bullet_indent,
                line_gap=style.body_line_gap,
                gap=style.bullet_gap,
            )

        if index < len(experiences) - 1:
            ctx.cursor.advance(style.entry_gap)

    ctx.cursor.advance(style.section_gap)


def render_educations(educations: Sequence[Education], ctx: RenderContext) -> None:
    if not educations:
        return

    style = ctx.style
    text = ctx.text
    present = text(PRESENT_TOKEN)
    render_section_title(ctx, SECTION_LABELS["educations"])

    for index, education in enumerate(educations):
        ctx.cursor.check_page_break(EDUCATION_ESTIMATE)

        gpa = f"GPA: {education.gpa}" if education.gpa else ""
        title = f"{text(education.degree)} - {text(education.major)}"
        if style.stacked_entry_titles:
            _render_entry_heading(
                ctx, title, text(education.school), [education.date_range(present), gpa]
            )
        else:
            _render_entry_heading(
                ctx, title, None, [text(education.school), education.date_range(present), gpa]
            )
        _render_description(ctx, education.description)

        if index < len(educations) - 1:
            ctx.cursor.advance(style.short_entry_gap)

    ctx.cursor.advance(style.section_gap)


def render_projects(projects: Sequence[Project], ctx: RenderContext) -> None:
    if not projects:
        return

    style = ctx.style
    text = ctx.text
    render_section_title(ctx, SECTION_LABELS["projects"])

    for index, project in enumerate(projects):
        ctx.cursor.check_page_break(PROJECT_ESTIMATE)

        _render_entry_heading(ctx, text(project.name), None, [project.date_range(), project.url])
        _render_description(ctx, project.description)

        if project.technologies:
            _draw_labeled_line(
                ctx,
                f"{text(TECH_STACK_LABEL)}: ",
                ", ".join(text(tech) for tech in project.technologies),
                size=style.body_size,
                color=style.body_color,
            )

        if index < len(projects) - 1:
            ctx.cursor.advance(style.short_entry_gap)

    ctx.cursor.advance(style.section_gap)


def render_skills(skill_groups: Sequence[SkillGroup], ctx: RenderContext) -> None:
    if not skill_groups:
        return

    style = ctx.style
    text = ctx.text
    render_section_title(ctx, SECTION_LABELS["skills"])

    for group in skill_groups:
        ctx.cursor.check_page_break(SKILL_GROUP_ESTIMATE)
        _draw_labeled_line(
            ctx,
            f"{text(group.category)}: ",
            ", ".join(text(item) for item in group.items),
            size=style.body_size,
            color=style.body_color,
        )

    ctx.cursor.advance(style.section_gap)


# Side column renderers
#
# The side column never paginates: whatever does not fit on the first
# page is dropped and reported.


def _side_title(ctx: RenderContext, label: str) -> bool:
    style = ctx.style
    return _side_line(
        ctx,
        ctx.title_text(label),
        size=style.side_title_size,
        bold=True,
        color=style.side_heading_color,
        advance=style.side_title_advance,
    )


def _side_line(
    ctx: RenderContext,
    text: str,
    *,
    size: float,
    advance: float,
    bold: bool = False,
    color: Optional[str] = None,
    indent: float = 0.0,
) -> bool:
    """Draw one side column line if it fits; returns False when it was dropped."""
    ctx.use_font(bold, size, color or ctx.style.body_color)
    width = ctx.width - indent
    height = max(advance, ctx.backend.measure_height(text, width))
    if not ctx.cursor.fits(height):
        return False
    ctx.backend.draw_text(text, ctx.x + indent, ctx.cursor.y, width=width)
    ctx.cursor.advance(height)
    return True


def render_contact_block(personal_info: PersonalInfo, ctx: RenderContext) -> None:
    fields = _contact_fields(personal_info, ctx.text)
    if not fields:
        return

    style = ctx.style
    dropped = 0 if _side_title(ctx, SECTION_LABELS["contact"]) else 1
    for field_text in fields:
        if not _side_line(
            ctx,
            field_text,
            size=style.side_body_size,
            color=style.side_heading_color,
            advance=style.side_line_advance,
        ):
            dropped += 1

    if dropped:
        log_side_column_overflow("contact", dropped)
    ctx.cursor.advance(style.side_section_gap)


def render_skills_stacked(skill_groups: Sequence[SkillGroup], ctx: RenderContext) -> None:
    """Skills as a category label followed by one bulleted line per item."""
    if not skill_groups:
        return

    style = ctx.style
    text = ctx.text
    dropped = 0 if _side_title(ctx, SECTION_LABELS["skills"]) else 1

    for group in skill_groups:
        if not _side_line(
            ctx,
            text(group.category),
            size=style.side_label_size,
            bold=True,
            color=style.side_heading_color,
            advance=style.side_label_advance,
        ):
            dropped += 1
        for item in group.items:
            if not _side_line(
                ctx,
                f"{BULLET}{text(item)}",
                size=style.side_label_size,
                color=style.side_heading_color,
                advance=style.side_item_advance,
                indent=style.side_item_indent,
            ):
                dropped += 1
        ctx.cursor.advance(style.side_group_gap)

    if dropped:
        log_side_column_overflow("skills", dropped)
    ctx.cursor.advance(style.side_section_gap)


SectionEntry = Tuple[Callable[[object, RenderContext], None], Callable[[object], object]]

# Section key -> (renderer, document accessor)
SECTION_RENDERERS: Dict[str, SectionEntry] = {
    "header": (render_header, attrgetter("personal_info")),
    "summary": (render_summary, attrgetter("personal_info")),
    "experiences": (render_experiences, attrgetter("experiences")),
    "educations": (render_educations, attrgetter("educations")),
    "projects": (render_projects, attrgetter("projects")),
    "skills": (render_skills, attrgetter("skill_groups")),
}

SIDE_RENDERERS: Dict[str, SectionEntry] = {
    "contact": (render_contact_block, attrgetter("personal_info")),
    "skills": (render_skills_stacked, attrgetter("skill_groups")),
}
