"""
Canonical plain-text résumé layout.

Renders a résumé record into the fixed, ATS-friendly text layout:

    {NAME, centered}
    {email | phone | linkedin | github | portfolio, centered}

    SUMMARY
    {summary}

    SKILLS
    Programming: a, b
    ...

    EXPERIENCE
    {title} — {start} – {end}
    {COMPANY}
      • bullet

Sections without content are omitted. Output is deterministic and has no
trailing newline; an empty record renders as "".
"""

from typing import List

from tailor.contexts.templating.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    StructuredResume,
)

# ============================================================================
# LAYOUT CONSTANTS
# ============================================================================

LINE_WIDTH = 80
BULLET_PREFIX = "  • "
CONTACT_SEPARATOR = " | "
TITLE_SEPARATOR = " — "
DATE_SEPARATOR = " – "

SECTION_ORDER = (
    "SUMMARY",
    "SKILLS",
    "EXPERIENCE",
    "EDUCATION",
    "PROJECTS",
    "ACHIEVEMENTS",
    "CERTIFICATIONS",
)

SKILL_LABELS = {
    "programming": "Programming",
    "tools": "Tools",
    "databases": "Databases",
    "cloud": "Cloud",
    "others": "Others",
}


def center(text: str, width: int = LINE_WIDTH) -> str:
    """Left-pad text to center it; no trailing spaces. Text wider than width is not padded."""
    return " " * max(0, (width - len(text)) // 2) + text


def _bullet(text: str) -> str:
    return f"{BULLET_PREFIX}{text}"


# ============================================================================
# ENTRY FORMATTERS
# ============================================================================


def format_experience_entry(entry: ExperienceEntry) -> List[str]:
    """
    Format one experience entry.

    Example:
        format_experience_entry(ExperienceEntry("Senior Engineer", "Acme", "2020", "Present", ("Built APIs",)))
        # ["Senior Engineer — 2020 – Present", "ACME", "  • Built APIs"]
    """
    dates = DATE_SEPARATOR.join(d for d in (entry.start_date, entry.end_date) if d)
    header = TITLE_SEPARATOR.join(part for part in (entry.title, dates) if part)

    lines = []
    if header:
        lines.append(header)
    if entry.company:
        lines.append(entry.company.upper())
    lines.extend(_bullet(b) for b in entry.bullets)
    return lines


def format_education_entry(entry: EducationEntry) -> List[str]:
    header = TITLE_SEPARATOR.join(part for part in (entry.degree, entry.years) if part)
    return [line for line in (header, entry.university, entry.location) if line]


def format_project_entry(entry: ProjectEntry) -> List[str]:
    lines = [entry.title] if entry.title else []
    for text in (entry.description, entry.contribution):
        if text:
            lines.append(_bullet(text))
    if entry.tech_stack:
        lines.append(_bullet(f"Tech Stack: {entry.tech_stack}"))
    return lines


def _entries_block(blocks: List[List[str]]) -> List[str]:
    """Join entry blocks with one blank line between them."""
    lines: List[str] = []
    for block in (b for b in blocks if b):
        if lines:
            lines.append("")
        lines.extend(block)
    return lines


# ============================================================================
# SECTION FORMATTERS
# ============================================================================


def format_sections(resume: StructuredResume) -> dict:
    """Body lines of each non-empty section, keyed by section label."""
    skills = [
        f"{SKILL_LABELS[category]}: {', '.join(items)}"
        for category, items in resume.skills.items()
        if items
    ]

    bodies = {
        "SUMMARY": [resume.summary] if resume.summary else [],
        "SKILLS": skills,
        "EXPERIENCE": _entries_block([format_experience_entry(e) for e in resume.experience]),
        "EDUCATION": _entries_block([format_education_entry(e) for e in resume.education]),
        "PROJECTS": _entries_block([format_project_entry(p) for p in resume.projects]),
        "ACHIEVEMENTS": [_bullet(a) for a in resume.achievements],
        "CERTIFICATIONS": [_bullet(c) for c in resume.certifications],
    }
    return {label: bodies[label] for label in SECTION_ORDER if bodies[label]}


def format_resume(resume: StructuredResume) -> str:
    """
    Render a résumé record in the canonical text layout.

    Deterministic and free of I/O: formatting the same record twice yields
    identical strings.

    Args:
        resume: StructuredResume or OptimizedResume

    Returns:
        Rendered text, lines joined with "\\n", no trailing newline

    Raises:
        TypeError: If resume is not a StructuredResume
    """
    if not isinstance(resume, StructuredResume):
        raise TypeError(f"resume must be StructuredResume, got {type(resume).__name__}")

    blocks: List[List[str]] = []

    heading = []
    if resume.name:
        heading.append(center(resume.name.upper()))
    contact = resume.contact.present()
    if contact:
        heading.append(center(CONTACT_SEPARATOR.join(contact)))
    if heading:
        blocks.append(heading)

    for label, body in format_sections(resume).items():
        blocks.append([label] + body)

    return "\n".join(_entries_block(blocks))
