"""
Templating Context

Responsibilities:
- Defines the structured résumé record shared by every pipeline stage
- Parses free-form résumé text into that record
- Loads and saves records as YAML/JSON

Owns: Résumé data model, résumé text → structured record conversion
Never: Reads job descriptions or makes tailoring decisions
"""

from tailor.contexts.templating.exceptions import InvalidResumeStructureError
from tailor.contexts.templating.resume_data_structure import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    OptimizedResume,
    ProjectEntry,
    SkillSet,
    StructuredResume,
)
from tailor.contexts.templating.resume_parser import ResumeTextParser, parse_resume

__all__ = [
    # Parsing
    "parse_resume",
    "ResumeTextParser",
    # Data structure classes
    "ContactInfo",
    "EducationEntry",
    "ExperienceEntry",
    "OptimizedResume",
    "ProjectEntry",
    "SkillSet",
    "StructuredResume",
    "InvalidResumeStructureError",
]
