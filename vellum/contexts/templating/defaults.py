"""
Default style tokens for Vellum templates.

StyleTokens is the structured schema every template's `style:` block is
merged onto (OmegaConf structured config), so a template YAML only lists
the tokens it changes. Unknown keys are rejected at load time.

All lengths are PDF points on a top-left origin page.
"""

from dataclasses import dataclass

# A4 in points
A4_WIDTH = 595.28
A4_HEIGHT = 841.89


@dataclass
class StyleTokens:
    # Page geometry
    page_width: float = A4_WIDTH
    page_height: float = A4_HEIGHT
    margin: float = 50.0
    top_margin: float = 50.0
    bottom_threshold: float = 750.0

    # Palette
    accent_color: str = "#2563eb"
    heading_color: str = "#1f2937"
    body_color: str = "#374151"
    muted_color: str = "#6b7280"
    divider_color: str = "#e5e7eb"
    highlight_color: str = "#6366f1"

    # Font sizes
    name_size: float = 32.0
    contact_size: float = 12.0
    title_size: float = 16.0
    entry_title_size: float = 13.0
    meta_size: float = 10.0
    body_size: float = 11.0

    # Header
    accent_bar: bool = True
    accent_bar_height: float = 8.0
    header_top: float = 30.0
    header_align: str = "center"
    header_contact: bool = True
    contact_separator: str = " • "
    name_advance: float = 45.0
    contact_advance: float = 35.0
    header_divider: bool = True
    divider_inset: float = 100.0
    divider_width: float = 2.0
    header_gap: float = 25.0

    # Section titles
    title_accent: bool = True
    title_indent: float = 15.0
    title_underline: bool = True
    uppercase_titles: bool = False
    title_advance: float = 28.0
    title_gap: float = 15.0

    # Entries
    stacked_entry_titles: bool = False
    line_advance: float = 18.0
    summary_line_gap: float = 2.0
    summary_gap: float = 20.0
    body_line_gap: float = 1.0
    description_gap: float = 8.0
    bullet_indent: float = 15.0
    bullet_gap: float = 5.0
    entry_gap: float = 20.0
    short_entry_gap: float = 18.0
    section_gap: float = 25.0

    # Side column (two-column templates only)
    side_width: float = 200.0
    side_padding: float = 30.0
    column_gap: float = 20.0
    side_background: str = "#f8fafc"
    side_heading_color: str = "#475569"
    side_title_size: float = 10.0
    side_label_size: float = 8.0
    side_body_size: float = 9.0
    side_title_advance: float = 20.0
    side_line_advance: float = 15.0
    side_label_advance: float = 12.0
    side_item_advance: float = 10.0
    side_item_indent: float = 5.0
    side_group_gap: float = 5.0
    side_section_gap: float = 20.0

    @property
    def content_width(self) -> float:
        """Width between the left and right page margins."""
        return self.page_width - 2 * self.margin
