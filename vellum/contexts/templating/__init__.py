"""
Templating Context

Responsibilities:
- Defines the normalized resume document model and its loaders
- Groups flat skill records by category
- Defines style tokens and named templates (tokens + section ordering)
- Keeps the registry of templates available for rendering

Owns: Resume document model, style tokens, template definitions, template registry
Never: Draws on a page or talks to the graphics backend
"""

from vellum.contexts.templating.defaults import StyleTokens
from vellum.contexts.templating.exceptions import (
    InvalidResumeDataError,
    InvalidTemplateError,
    TemplateNotFoundError,
)
from vellum.contexts.templating.resume_data_structure import (
    Education,
    Experience,
    PersonalInfo,
    Project,
    ResumeDocument,
    SkillGroup,
    group_skills,
)
from vellum.contexts.templating.template_registry import TemplateRegistry, default_registry
from vellum.contexts.templating.templates import Template, load_template

__all__ = [
    # Document model
    "ResumeDocument",
    "PersonalInfo",
    "Experience",
    "Education",
    "Project",
    "SkillGroup",
    "group_skills",
    # Templates
    "StyleTokens",
    "Template",
    "load_template",
    "TemplateRegistry",
    "default_registry",
    # Errors
    "TemplateNotFoundError",
    "InvalidTemplateError",
    "InvalidResumeDataError",
]
