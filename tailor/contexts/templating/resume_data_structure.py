"""
Structured résumé record types.

StructuredResume is the data contract shared by every pipeline stage: the
parser produces it, the optimizer consumes and returns it (as OptimizedResume),
and the formatter renders it. All records are frozen; stages build new
records rather than mutating inputs.

Serialization uses the external field names (camelCase) so records can be
exchanged as YAML/JSON with other tools. Optional fields that are absent
serialize as "" and "" deserializes back to None.
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple

from omegaconf import OmegaConf

from tailor.contexts.templating.exceptions import InvalidResumeStructureError
from tailor.utils.vocabulary import SKILL_CATEGORIES


# Accepted keys per mapping level of to_dict()/from_dict()
RESUME_KEYS = frozenset(
    {
        "name",
        "contact",
        "summary",
        "experience",
        "education",
        "skills",
        "projects",
        "achievements",
        "certifications",
    }
)
CONTACT_KEYS = frozenset({"email", "phone", "linkedin", "github", "portfolio"})
EXPERIENCE_KEYS = frozenset(
    {"title", "company", "startDate", "start_date", "endDate", "end_date", "bullets"}
)
EDUCATION_KEYS = frozenset({"degree", "university", "years", "location"})
PROJECT_KEYS = frozenset({"title", "description", "contribution", "techStack", "tech_stack"})


def _check_keys(mapping: dict, allowed: frozenset, field_name: Optional[str] = None) -> None:
    unknown = set(mapping) - allowed
    if unknown:
        raise InvalidResumeStructureError(
            f"Unknown keys: {sorted(map(str, unknown))}", field_name=field_name
        )



def _optional(value: Any) -> Optional[str]:
    """Map "" / None to None, anything else to a stripped string."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _string_tuple(value: Any, field_name: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise InvalidResumeStructureError("Expected a list of strings", field_name=field_name)
    return tuple(_text(item) for item in value if _text(item))


def _records(value: Any, field_name: str, allowed: frozenset) -> Tuple[dict, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, dict) for v in value):
        raise InvalidResumeStructureError("Expected a list of mappings", field_name=field_name)
    for index, record in enumerate(value):
        _check_keys(record, allowed, f"{field_name}[{index}]")
    return tuple(value)


@dataclass(frozen=True)
class ContactInfo:
    """Contact details; only email is mandatory (may still be empty)."""

    email: str = ""
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None

    def present(self) -> Tuple[str, ...]:
        """Non-empty contact values in display order."""
        values = (self.email, self.phone, self.linkedin, self.github, self.portfolio)
        return tuple(v for v in values if v)


@dataclass(frozen=True)
class ExperienceEntry:
    title: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = ""
    bullets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class EducationEntry:
    degree: str = ""
    university: str = ""
    years: Optional[str] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class ProjectEntry:
    title: str = ""
    description: Optional[str] = None
    contribution: Optional[str] = None
    tech_stack: Optional[str] = None


@dataclass(frozen=True)
class SkillSet:
    """
    Skills grouped into the five fixed categories.

    Each category is an ordered tuple without case-insensitive duplicates.
    """

    programming: Tuple[str, ...] = ()
    tools: Tuple[str, ...] = ()
    databases: Tuple[str, ...] = ()
    cloud: Tuple[str, ...] = ()
    others: Tuple[str, ...] = ()

    def get(self, category: str) -> Tuple[str, ...]:
        if category not in SKILL_CATEGORIES:
            raise KeyError(f"Unknown skill category: {category}")
        return getattr(self, category)

    def items(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        """(category, skills) pairs in fixed category order."""
        for category in SKILL_CATEGORIES:
            yield category, getattr(self, category)

    def is_empty(self) -> bool:
        return not any(skills for _, skills in self.items())

    def with_category(self, category: str, skills: Tuple[str, ...]) -> "SkillSet":
        """Return a copy with one category replaced."""
        self.get(category)
        return replace(self, **{category: tuple(skills)})


@dataclass(frozen=True)
class StructuredResume:
    """
    Structured résumé record.

    Fields the parser could not identify stay empty; nothing is invented.

    Example:
        resume = StructuredResume(
            name="Jane Doe",
            contact=ContactInfo(email="jane@example.com"),
            skills=SkillSet(programming=("Python",)),
        )
        resume.to_dict()["contact"]["phone"]
        # ""
    """

    name: str = ""
    contact: ContactInfo = field(default_factory=ContactInfo)
    summary: str = ""
    experience: Tuple[ExperienceEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    skills: SkillSet = field(default_factory=SkillSet)
    projects: Tuple[ProjectEntry, ...] = ()
    achievements: Tuple[str, ...] = ()
    certifications: Tuple[str, ...] = ()

    @property
    def name_parts(self) -> Tuple[str, str, str]:
        """
        Split name into (first, middle, last).

        Single-token names have no last name; inner tokens form the middle name.

        Example:
            StructuredResume(name="Mary Ann Smith").name_parts
            # ("Mary", "Ann", "Smith")
        """
        tokens = self.name.split()
        if not tokens:
            return ("", "", "")
        if len(tokens) == 1:
            return (tokens[0], "", "")
        return (tokens[0], " ".join(tokens[1:-1]), tokens[-1])

    def is_empty(self) -> bool:
        """True when every field is empty."""
        return self == type(self)()

    # ========================================================================
    # SERIALIZATION
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping using external field names; absent optionals become ""."""
        contact = self.contact
        return {
            "name": self.name,
            "contact": {
                "email": contact.email,
                "phone": contact.phone or "",
                "linkedin": contact.linkedin or "",
                "github": contact.github or "",
                "portfolio": contact.portfolio or "",
            },
            "summary": self.summary,
            "experience": [
                {
                    "title": e.title,
                    "company": e.company,
                    "startDate": e.start_date,
                    "endDate": e.end_date,
                    "bullets": list(e.bullets),
                }
                for e in self.experience
            ],
            "education": [
                {
                    "degree": e.degree,
                    "university": e.university,
                    "years": e.years or "",
                    "location": e.location or "",
                }
                for e in self.education
            ],
            "skills": {category: list(skills) for category, skills in self.skills.items()},
            "projects": [
                {
                    "title": p.title,
                    "description": p.description or "",
                    "contribution": p.contribution or "",
                    "techStack": p.tech_stack or "",
                }
                for p in self.projects
            ],
            "achievements": list(self.achievements),
            "certifications": list(self.certifications),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """
        Build a record from a plain mapping (inverse of to_dict).

        Missing keys default to empty values. Both camelCase and snake_case
        keys are accepted for dates and tech stack.

        Raises:
            InvalidResumeStructureError: If a key is unknown at any level or a
                field has the wrong shape
        """
        if not isinstance(data, dict):
            raise InvalidResumeStructureError("Resume data must be a mapping")
        _check_keys(data, RESUME_KEYS)

        contact = data.get("contact") or {}
        if not isinstance(contact, dict):
            raise InvalidResumeStructureError("Expected a mapping", field_name="contact")
        _check_keys(contact, CONTACT_KEYS, "contact")

        skills = data.get("skills") or {}
        if not isinstance(skills, dict):
            raise InvalidResumeStructureError("Expected a mapping", field_name="skills")
        unknown = set(skills) - set(SKILL_CATEGORIES)
        if unknown:
            raise InvalidResumeStructureError(
                f"Unknown skill categories: {sorted(unknown)}", field_name="skills"
            )

        return cls(
            name=_text(data.get("name")),
            contact=ContactInfo(
                email=_text(contact.get("email")),
                phone=_optional(contact.get("phone")),
                linkedin=_optional(contact.get("linkedin")),
                github=_optional(contact.get("github")),
                portfolio=_optional(contact.get("portfolio")),
            ),
            summary=_text(data.get("summary")),
            experience=tuple(
                ExperienceEntry(
                    title=_text(e.get("title")),
                    company=_text(e.get("company")),
                    start_date=_text(e.get("startDate", e.get("start_date"))),
                    end_date=_text(e.get("endDate", e.get("end_date"))),
                    bullets=_string_tuple(e.get("bullets"), "experience.bullets"),
                )
                for e in _records(data.get("experience"), "experience", EXPERIENCE_KEYS)
            ),
            education=tuple(
                EducationEntry(
                    degree=_text(e.get("degree")),
                    university=_text(e.get("university")),
                    years=_optional(e.get("years")),
                    location=_optional(e.get("location")),
                )
                for e in _records(data.get("education"), "education", EDUCATION_KEYS)
            ),
            skills=SkillSet(
                **{
                    category: _string_tuple(skills.get(category), f"skills.{category}")
                    for category in SKILL_CATEGORIES
                }
            ),
            projects=tuple(
                ProjectEntry(
                    title=_text(p.get("title")),
                    description=_optional(p.get("description")),
                    contribution=_optional(p.get("contribution")),
                    tech_stack=_optional(p.get("techStack", p.get("tech_stack"))),
                )
                for p in _records(data.get("projects"), "projects", PROJECT_KEYS)
            ),
            achievements=_string_tuple(data.get("achievements"), "achievements"),
            certifications=_string_tuple(data.get("certifications"), "certifications"),
        )

    @classmethod
    def from_file(cls, path: Path):
        """
        Load a record from a YAML or JSON file.

        Args:
            path: File written by save() or any mapping in to_dict() shape

        Raises:
            FileNotFoundError: If path does not exist
            InvalidResumeStructureError: If the content has the wrong shape
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Resume file not found: {path}")

        # JSON is a YAML subset, so OmegaConf reads both
        data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
        if not isinstance(data, dict):
            raise InvalidResumeStructureError("Resume file root must be a mapping", source=path)
        return cls.from_dict(data)

    def save(self, path: Path) -> Path:
        """Write the record as YAML."""
        path = Path(path)
        path.parent.mkdir(exist_ok=True, parents=True)
        OmegaConf.save(OmegaConf.create(self.to_dict()), path)
        return path


@dataclass(frozen=True)
class OptimizedResume(StructuredResume):
    """
    Résumé record after tailoring to a job description.

    Same shape as StructuredResume. Only orderings and bullet wording differ
    from the source record; factual content is unchanged.
    """

    @classmethod
    def from_resume(cls, resume: StructuredResume, **changes) -> "OptimizedResume":
        """Copy every field of resume into an OptimizedResume, applying changes."""
        values = {f.name: getattr(resume, f.name) for f in fields(StructuredResume)}
        values.update(changes)
        return cls(**values)
