"""
Template definitions.

A Template is data, not behavior: style tokens plus the ordered list of
sections drawn in each column. New layouts are added by supplying new
tokens and orderings (usually a YAML file under templates/), never by
subclassing.

Template YAML structure:

    name: modern
    display_name: Modern
    description: Two-column layout with a tinted side panel
    columns: 2
    sections:
      main: [header, summary, experiences, educations, projects]
      side: [contact, skills]
    style:
      margin: 30
      accent_bar: false
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from vellum.contexts.templating.defaults import StyleTokens
from vellum.contexts.templating.exceptions import InvalidTemplateError

# Fixed drawing order within a column
SECTION_ORDER = ("header", "summary", "experiences", "educations", "projects", "skills")
SIDE_SECTION_ORDER = ("contact", "skills")


def _check_order(sections: Sequence[str], canonical: Sequence[str], column: str) -> None:
    unknown = [s for s in sections if s not in canonical]
    if unknown:
        raise InvalidTemplateError(
            f"Unknown {column} section(s) {unknown}. Allowed: {list(canonical)}"
        )
    positions = [canonical.index(s) for s in sections]
    if positions != sorted(set(positions)):
        raise InvalidTemplateError(
            f"{column.capitalize()} sections {list(sections)} must be unique and follow "
            f"the order {list(canonical)}"
        )


@dataclass(frozen=True)
class Template:
    """
    Named composition of section renderers plus style/geometry tokens.

    Attributes:
        name: Registry key (e.g., "classic")
        display_name: Human-readable name for listings
        description: One-line description for listings
        columns: 1 (single flow) or 2 (side column + main column)
        style: Geometry, palette, sizes and spacing tokens
        main_sections: Section keys drawn in the main column, in order
        side_sections: Section keys drawn in the side column (two-column only)
        source_path: YAML file the template was loaded from, if any
    """

    name: str
    display_name: str
    description: str = ""
    columns: int = 1
    style: StyleTokens = field(default_factory=StyleTokens)
    main_sections: Tuple[str, ...] = SECTION_ORDER
    side_sections: Tuple[str, ...] = ()
    source_path: Optional[Path] = None

    def __post_init__(self):
        if self.columns not in (1, 2):
            raise InvalidTemplateError(
                f"Template '{self.name}' has {self.columns} columns; only 1 or 2 are supported",
                self.source_path,
            )
        if self.columns == 1 and self.side_sections:
            raise InvalidTemplateError(
                f"Template '{self.name}' is single-column but lists side sections",
                self.source_path,
            )
        _check_order(self.main_sections, SECTION_ORDER, "main")
        _check_order(self.side_sections, SIDE_SECTION_ORDER, "side")

    def with_style(self, **overrides: Any) -> "Template":
        """Copy of this template with some style tokens replaced."""
        return replace(self, style=replace(self.style, **overrides))

    def describe(self) -> Dict[str, str]:
        """Listing entry: name, display name and description."""
        return {
            "name": self.name,
            "display_name": self.display_name,
            "description": self.description,
        }


def load_template(template_path: Path) -> Template:
    """
    Load a template definition from YAML.

    The `style:` block is merged onto the StyleTokens schema, so omitted
    tokens keep their defaults and misspelled tokens fail loudly.

    Args:
        template_path: Path to the template YAML file

    Returns:
        Template instance

    Raises:
        InvalidTemplateError: If the YAML is malformed or names unknown tokens/sections
    """
    template_path = Path(template_path)
    try:
        config = OmegaConf.load(template_path)
        style_schema = OmegaConf.structured(StyleTokens)
        style = OmegaConf.to_object(OmegaConf.merge(style_schema, config.get("style") or {}))
        sections_config = config.get("sections")
        sections = OmegaConf.to_container(sections_config, resolve=True) if sections_config else {}
    except OmegaConfBaseException as e:
        raise InvalidTemplateError(f"Invalid template definition: {e}", template_path) from e

    if "name" not in config:
        raise InvalidTemplateError("Template definition is missing 'name'", template_path)

    return Template(
        name=str(config.name),
        display_name=str(config.get("display_name") or config.name),
        description=str(config.get("description") or ""),
        columns=int(config.get("columns", 1)),
        style=style,
        main_sections=tuple(sections.get("main") or SECTION_ORDER),
        side_sections=tuple(sections.get("side") or ()),
        source_path=template_path,
    )
