"""
Template Registry

Lookup of named templates. Built-in templates are YAML definitions in
vellum/contexts/templating/templates/; more can be registered at runtime.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from vellum.contexts.templating.exceptions import TemplateNotFoundError
from vellum.contexts.templating.logger import (
    log_template_missing,
    log_template_registered,
    log_templates_loaded,
)
from vellum.contexts.templating.resume_data_structure import ResumeDocument
from vellum.contexts.templating.templates import Template, load_template

load_dotenv()
TEMPLATES_PATH = Path(
    os.getenv("VELLUM_TEMPLATES_PATH", Path(__file__).resolve().parent / "templates")
)


class TemplateRegistry:
    """
    Registry of named templates.

    Lookups never fall back to a default: an unregistered name is an error
    for resolve() and generate(), and None for get().
    """

    def __init__(self, templates_path: Optional[Path] = None, load_builtin: bool = True):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory of template YAML files. Defaults to
                            VELLUM_TEMPLATES_PATH from environment
            load_builtin: Load every *.yaml in templates_path on init
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._templates: Dict[str, Template] = {}

        if load_builtin:
            self.load_directory(self.templates_path)

    def load_directory(self, templates_path: Path) -> List[str]:
        """
        Load and register every template definition in a directory.

        Args:
            templates_path: Directory containing *.yaml template files

        Returns:
            Names of the templates loaded, in file name order

        Raises:
            InvalidTemplateError: If any definition is malformed
        """
        names = []
        for template_file in sorted(Path(templates_path).glob("*.yaml")):
            template = load_template(template_file)
            self.register(template)
            names.append(template.name)

        log_templates_loaded(templates_path, names)
        return names

    def register(self, template: Template) -> None:
        """Register a template under its name, replacing any previous one."""
        replaced = template.name in self._templates
        self._templates[template.name] = template
        log_template_registered(template.name, replaced)

    def get(self, name: str) -> Optional[Template]:
        """Get a template by name, or None if it is not registered."""
        return self._templates.get(name)

    def resolve(self, name: str) -> Template:
        """
        Get a template by name.

        Raises:
            TemplateNotFoundError: If the name is not registered
        """
        template = self._templates.get(name)
        if template is None:
            log_template_missing(name, list(self._templates))
            raise TemplateNotFoundError(name, self._templates)
        return template

    def list(self) -> List[Template]:
        """All registered templates in registration order."""
        return list(self._templates.values())

    def describe(self) -> List[Dict[str, str]]:
        """Listing entries (name, display name, description) for every template."""
        return [template.describe() for template in self._templates.values()]

    def is_registered(self, name: str) -> bool:
        return name in self._templates

    def generate(self, name: str, document: ResumeDocument, language_mode="auto") -> bytes:
        """
        Render a document with the named template.

        Args:
            name: Registered template name
            document: Resume to render
            language_mode: "auto", "force-target-script" or "force-source-script"

        Returns:
            PDF bytes

        Raises:
            TemplateNotFoundError: If the name is not registered
            RenderError: If drawing fails
        """
        # Import here to avoid circular dependency
        from vellum.contexts.rendering.assembler import PDFAssembler, RenderOptions

        template = self.resolve(name)
        assembler = PDFAssembler(registry=self)
        return assembler.render(
            document, RenderOptions(template_name=template.name, language_mode=language_mode)
        )


@lru_cache(maxsize=1)
def default_registry() -> TemplateRegistry:
    """Process-wide registry holding the built-in templates."""
    return TemplateRegistry()
