"""
Resume Document Structure

Defines the normalized, read-only resume record handed to the renderer.
One ResumeDocument is built per render and discarded afterwards.

Loaders accept both the snake_case field names used here and the camelCase
names of the JSON records produced by the persistence layer
(e.g. "personalInfo", "startDate", "isCurrent").
"""

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from omegaconf import OmegaConf

from vellum.contexts.templating.exceptions import InvalidResumeDataError


def _get(data: Mapping[str, Any], snake: str, camel: Optional[str] = None, default=None):
    """Read a field by snake_case name, falling back to its camelCase alias."""
    if snake in data:
        return data[snake]
    if camel and camel in data:
        return data[camel]
    return default


def _require(data: Mapping[str, Any], record: str, snake: str, camel: Optional[str] = None):
    value = _get(data, snake, camel)
    if value is None:
        raise InvalidResumeDataError(f"{record} is missing required field '{snake}'")
    return value


def _as_text(value) -> Optional[str]:
    """Dates become ISO calendar strings, blank strings become None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value)
    return text if text.strip() else None


def _as_tuple(values) -> Tuple[str, ...]:
    if not values:
        return ()
    return tuple(str(v) for v in values)


def format_date_range(
    start: Optional[str], end: Optional[str], is_current: bool, present: str
) -> str:
    """
    Format a date range line.

    A current entry always ends with the present sentinel, even when an end
    date was supplied upstream. Without an end date the start stands alone.

    Example:
        >>> format_date_range("2021-01", "2023-05", True, "Present")
        '2021-01 - Present'
        >>> format_date_range("2019-09", None, False, "Present")
        '2019-09'
    """
    start = start or ""
    if is_current:
        return f"{start} - {present}"
    if end:
        return f"{start} - {end}"
    return start


@dataclass(frozen=True)
class PersonalInfo:
    """Contact block and optional personal summary."""

    name: str
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    summary: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PersonalInfo":
        return cls(
            name=str(_require(data, "personalInfo", "name")),
            email=str(_require(data, "personalInfo", "email")),
            phone=_as_text(_get(data, "phone")),
            location=_as_text(_get(data, "location")),
            website=_as_text(_get(data, "website")),
            summary=_as_text(_get(data, "summary")),
        )


@dataclass(frozen=True)
class Experience:
    company: str
    position: str
    start_date: str
    location: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    description: Optional[str] = None
    achievements: Tuple[str, ...] = ()

    def date_range(self, present: str) -> str:
        return format_date_range(self.start_date, self.end_date, self.is_current, present)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Experience":
        return cls(
            company=str(_require(data, "experience", "company")),
            position=str(_require(data, "experience", "position")),
            start_date=_as_text(_require(data, "experience", "start_date", "startDate")),
            location=_as_text(_get(data, "location")),
            end_date=_as_text(_get(data, "end_date", "endDate")),
            is_current=bool(_get(data, "is_current", "isCurrent", False)),
            description=_as_text(_get(data, "description")),
            achievements=_as_tuple(_get(data, "achievements")),
        )


@dataclass(frozen=True)
class Education:
    school: str
    degree: str
    major: str
    start_date: str
    end_date: Optional[str] = None
    is_current: bool = False
    gpa: Optional[str] = None
    description: Optional[str] = None

    def date_range(self, present: str) -> str:
        return format_date_range(self.start_date, self.end_date, self.is_current, present)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Education":
        return cls(
            school=str(_require(data, "education", "school")),
            degree=str(_require(data, "education", "degree")),
            major=str(_require(data, "education", "major")),
            start_date=_as_text(_require(data, "education", "start_date", "startDate")),
            end_date=_as_text(_get(data, "end_date", "endDate")),
            is_current=bool(_get(data, "is_current", "isCurrent", False)),
            gpa=_as_text(_get(data, "gpa")),
            description=_as_text(_get(data, "description")),
        )


@dataclass(frozen=True)
class Project:
    name: str
    description: Optional[str] = None
    technologies: Tuple[str, ...] = ()
    url: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    def date_range(self) -> Optional[str]:
        """Projects have no "current" flag: start alone, start - end, or nothing."""
        if not self.start_date:
            return None
        if self.end_date:
            return f"{self.start_date} - {self.end_date}"
        return self.start_date

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Project":
        return cls(
            name=str(_require(data, "project", "name")),
            description=_as_text(_get(data, "description")),
            technologies=_as_tuple(_get(data, "technologies")),
            url=_as_text(_get(data, "url")),
            start_date=_as_text(_get(data, "start_date", "startDate")),
            end_date=_as_text(_get(data, "end_date", "endDate")),
        )


@dataclass(frozen=True)
class SkillGroup:
    category: str
    items: Tuple[str, ...] = ()


def group_skills(records: Iterable[Mapping[str, Any]]) -> Tuple[SkillGroup, ...]:
    """
    Group flat skill records by category.

    Categories keep their first-seen order; skills keep input order within
    their category.

    Args:
        records: Mappings with "category" and "name" keys

    Returns:
        Tuple of SkillGroup

    Example:
        >>> group_skills([
        ...     {"category": "Languages", "name": "Python"},
        ...     {"category": "Tools", "name": "Git"},
        ...     {"category": "Languages", "name": "Go"},
        ... ])
        (SkillGroup(category='Languages', items=('Python', 'Go')), SkillGroup(category='Tools', items=('Git',)))
    """
    grouped: Dict[str, List[str]] = {}
    for record in records:
        category = str(_require(record, "skill", "category"))
        name = str(_require(record, "skill", "name"))
        grouped.setdefault(category, []).append(name)
    return tuple(SkillGroup(category, tuple(items)) for category, items in grouped.items())


def _skill_groups_from(raw) -> Tuple[SkillGroup, ...]:
    """Accept either pre-grouped {category, items} entries or flat {category, name} records."""
    if not raw:
        return ()
    if all("items" in entry for entry in raw):
        return tuple(
            SkillGroup(str(_require(entry, "skill group", "category")), _as_tuple(entry["items"]))
            for entry in raw
        )
    return group_skills(raw)


@dataclass(frozen=True)
class ResumeDocument:
    """
    Normalized resume aggregate: personal info plus ordered section lists.

    Attributes:
        personal_info: Name, email and optional contact fields / summary
        experiences: Work history in display order
        educations: Education history in display order
        projects: Projects in display order
        skill_groups: Skills grouped by category in first-seen order
    """

    personal_info: PersonalInfo
    experiences: Tuple[Experience, ...] = ()
    educations: Tuple[Education, ...] = ()
    projects: Tuple[Project, ...] = ()
    skill_groups: Tuple[SkillGroup, ...] = ()

    @property
    def name(self) -> str:
        return self.personal_info.name

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResumeDocument":
        """
        Build a document from a plain mapping.

        Args:
            data: Mapping with "personal_info"/"personalInfo" and optional
                  "experiences", "educations", "projects" and
                  "skill_groups"/"skills" lists

        Raises:
            InvalidResumeDataError: If a required field is missing
        """
        personal = _get(data, "personal_info", "personalInfo")
        if not personal:
            raise InvalidResumeDataError("Resume is missing required 'personal_info' block")

        return cls(
            personal_info=PersonalInfo.from_dict(personal),
            experiences=tuple(Experience.from_dict(e) for e in _get(data, "experiences", default=()) or ()),
            educations=tuple(Education.from_dict(e) for e in _get(data, "educations", default=()) or ()),
            projects=tuple(Project.from_dict(p) for p in _get(data, "projects", default=()) or ()),
            skill_groups=_skill_groups_from(_get(data, "skill_groups", "skills", ())),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "ResumeDocument":
        """
        Load a document from a YAML file.

        The record may sit at the root or under a top-level "resume" key.

        Raises:
            FileNotFoundError: If yaml_path does not exist
            InvalidResumeDataError: If a required field is missing
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"YAML file not found: {yaml_path}")

        data = OmegaConf.to_container(OmegaConf.load(yaml_path), resolve=True)
        if not isinstance(data, dict):
            raise InvalidResumeDataError(f"Resume YAML must be a mapping: {yaml_path}")

        return cls.from_dict(data.get("resume", data))
