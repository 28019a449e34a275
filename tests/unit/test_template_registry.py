"""Unit tests for TemplateRegistry and template loading."""

import pytest

from vellum.contexts.templating.defaults import StyleTokens
from vellum.contexts.templating.exceptions import InvalidTemplateError, TemplateNotFoundError
from vellum.contexts.templating.template_registry import TemplateRegistry
from vellum.contexts.templating.templates import SECTION_ORDER, Template, load_template


@pytest.mark.unit
def test_template_registry_init_loads_builtin():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry()

    assert registry.templates_path.exists()
    assert {"classic", "minimal", "modern"} <= {t.name for t in registry.list()}


@pytest.mark.unit
def test_template_registry_empty():
    registry = TemplateRegistry(load_builtin=False)

    assert registry.list() == []
    assert registry.get("classic") is None


@pytest.mark.unit
def test_get_classic_template():
    """Classic keeps every default token."""
    template = TemplateRegistry().get("classic")

    assert template is not None
    assert template.columns == 1
    assert template.style == StyleTokens()
    assert template.main_sections == SECTION_ORDER


@pytest.mark.unit
def test_get_modern_template():
    template = TemplateRegistry().get("modern")

    assert template.columns == 2
    assert template.side_sections == ("contact", "skills")
    assert "skills" not in template.main_sections
    assert template.style.margin == 30
    assert template.style.side_width == 200


@pytest.mark.unit
def test_get_template_not_found():
    """Test error handling for missing template."""
    registry = TemplateRegistry()

    assert registry.get("nonexistent") is None
    with pytest.raises(TemplateNotFoundError) as exc_info:
        registry.resolve("nonexistent")

    assert exc_info.value.template_name == "nonexistent"
    assert "classic" in exc_info.value.available


@pytest.mark.unit
def test_register_replaces_same_name():
    registry = TemplateRegistry(load_builtin=False)
    first = Template(name="custom", display_name="Custom")
    second = first.with_style(accent_color="#ff0000")

    registry.register(first)
    registry.register(second)

    assert registry.get("custom") is second
    assert len(registry.list()) == 1
    assert registry.is_registered("custom")


@pytest.mark.unit
def test_list_in_registration_order():
    registry = TemplateRegistry(load_builtin=False)
    for name in ["b", "a", "c"]:
        registry.register(Template(name=name, display_name=name.upper()))

    assert [t.name for t in registry.list()] == ["b", "a", "c"]


@pytest.mark.unit
def test_describe_entries():
    registry = TemplateRegistry(load_builtin=False)
    registry.register(Template(name="plain", display_name="Plain", description="Nothing fancy"))

    assert registry.describe() == [
        {"name": "plain", "display_name": "Plain", "description": "Nothing fancy"}
    ]


@pytest.mark.unit
def test_with_style_leaves_original_untouched():
    template = Template(name="t", display_name="T")
    changed = template.with_style(margin=20)

    assert template.style.margin == 50
    assert changed.style.margin == 20


@pytest.mark.unit
def test_single_column_rejects_side_sections():
    with pytest.raises(InvalidTemplateError):
        Template(name="bad", display_name="Bad", side_sections=("contact",))


@pytest.mark.unit
def test_sections_must_follow_fixed_order():
    with pytest.raises(InvalidTemplateError, match="order"):
        Template(name="bad", display_name="Bad", main_sections=("skills", "header"))


@pytest.mark.unit
def test_unknown_section_rejected():
    with pytest.raises(InvalidTemplateError, match="Unknown"):
        Template(name="bad", display_name="Bad", main_sections=("header", "hobbies"))


@pytest.mark.unit
def test_load_template_merges_style_onto_defaults(tmp_path):
    template_file = tmp_path / "compact.yaml"
    template_file.write_text(
        "name: compact\n"
        "display_name: Compact\n"
        "sections:\n"
        "  main: [header, experiences]\n"
        "style:\n"
        "  margin: 36\n"
        "  contact_separator: ' | '\n",
        encoding="utf-8",
    )

    template = load_template(template_file)

    assert template.name == "compact"
    assert template.main_sections == ("header", "experiences")
    assert template.style.margin == 36
    assert template.style.contact_separator == " | "
    assert template.style.accent_color == StyleTokens().accent_color
    assert template.source_path == template_file


@pytest.mark.unit
def test_load_template_rejects_unknown_token(tmp_path):
    template_file = tmp_path / "typo.yaml"
    template_file.write_text("name: typo\nstyle:\n  margn: 36\n", encoding="utf-8")

    with pytest.raises(InvalidTemplateError) as exc_info:
        load_template(template_file)

    assert exc_info.value.template_path == template_file


@pytest.mark.unit
def test_load_template_requires_name(tmp_path):
    template_file = tmp_path / "anonymous.yaml"
    template_file.write_text("columns: 1\n", encoding="utf-8")

    with pytest.raises(InvalidTemplateError, match="name"):
        load_template(template_file)


@pytest.mark.unit
def test_load_directory_registers_custom_templates(tmp_path):
    (tmp_path / "one.yaml").write_text("name: one\n", encoding="utf-8")
    (tmp_path / "two.yaml").write_text("name: two\ncolumns: 2\nsections:\n  side: [contact]\n", encoding="utf-8")

    registry = TemplateRegistry(templates_path=tmp_path)

    assert [t.name for t in registry.list()] == ["one", "two"]
    assert registry.get("two").side_sections == ("contact",)
