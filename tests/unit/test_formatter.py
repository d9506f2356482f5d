"""Unit tests for the canonical text layout."""

import pytest

from tailor.contexts.rendering import LINE_WIDTH, format_resume
from tailor.contexts.rendering.formatter import (
    center,
    format_education_entry,
    format_experience_entry,
    format_project_entry,
)
from tailor.contexts.templating import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    OptimizedResume,
    ProjectEntry,
    SkillSet,
    StructuredResume,
)


@pytest.fixture
def resume():
    return OptimizedResume(
        name="Jane Doe",
        contact=ContactInfo(email="jane@example.com", phone="555-123-4567"),
        summary="Backend engineer.",
        skills=SkillSet(programming=("Python", "Golang"), databases=("PostgreSQL",)),
        experience=(
            ExperienceEntry("Senior Engineer", "Acme Corp", "2020", "Present", ("Built APIs", "Led team")),
        ),
        education=(
            EducationEntry("B.S. Computer Science", "Stanford University", "2013 - 2017", "Stanford, CA"),
        ),
    )


@pytest.mark.unit
def test_exact_layout(resume):
    expected = "\n".join(
        [
            " " * 36 + "JANE DOE",
            " " * 24 + "jane@example.com | 555-123-4567",
            "",
            "SUMMARY",
            "Backend engineer.",
            "",
            "SKILLS",
            "Programming: Python, Golang",
            "Databases: PostgreSQL",
            "",
            "EXPERIENCE",
            "Senior Engineer — 2020 – Present",
            "ACME CORP",
            "  • Built APIs",
            "  • Led team",
            "",
            "EDUCATION",
            "B.S. Computer Science — 2013 - 2017",
            "Stanford University",
            "Stanford, CA",
        ]
    )

    assert format_resume(resume) == expected


@pytest.mark.unit
def test_formatting_is_idempotent(resume):
    assert format_resume(resume) == format_resume(resume)


@pytest.mark.unit
def test_empty_sections_omitted(resume):
    rendered = format_resume(resume)

    for label in ("PROJECTS", "ACHIEVEMENTS", "CERTIFICATIONS", "Tools:", "Cloud:"):
        assert label not in rendered
    assert not rendered.endswith("\n")


@pytest.mark.unit
def test_empty_record_renders_empty_string():
    assert format_resume(StructuredResume()) == ""


@pytest.mark.unit
def test_contact_line_without_dangling_separators():
    rendered = format_resume(StructuredResume(contact=ContactInfo(github="github.com/jane")))
    assert rendered == center("github.com/jane")


@pytest.mark.unit
def test_structured_resume_also_accepted():
    assert format_resume(StructuredResume(summary="Hi.")) == "SUMMARY\nHi."


@pytest.mark.unit
def test_rejects_non_record():
    with pytest.raises(TypeError):
        format_resume({"name": "Jane Doe"})


@pytest.mark.unit
def test_center():
    assert center("ab", width=6) == "  ab"
    assert center("x" * (LINE_WIDTH + 5)) == "x" * (LINE_WIDTH + 5)


@pytest.mark.unit
def test_experience_entry_without_dates_or_company():
    entry = ExperienceEntry(title="Consultant", bullets=("Advised clients",))
    assert format_experience_entry(entry) == ["Consultant", "  • Advised clients"]


@pytest.mark.unit
def test_experience_entry_with_open_range():
    entry = ExperienceEntry(title="Engineer", company="Acme", start_date="2021")
    assert format_experience_entry(entry) == ["Engineer — 2021", "ACME"]


@pytest.mark.unit
def test_education_entry_without_optional_fields():
    entry = EducationEntry(degree="M.S. Physics", university="MIT")
    assert format_education_entry(entry) == ["M.S. Physics", "MIT"]


@pytest.mark.unit
def test_project_entry():
    entry = ProjectEntry(title="Resume Tailor", description="Keyword optimizer", tech_stack="Python")
    assert format_project_entry(entry) == [
        "Resume Tailor",
        "  • Keyword optimizer",
        "  • Tech Stack: Python",
    ]


@pytest.mark.unit
def test_list_sections_and_entry_spacing():
    resume = StructuredResume(
        projects=(ProjectEntry(title="One"), ProjectEntry(title="Two")),
        achievements=("Won hackathon",),
    )

    assert format_resume(resume) == "PROJECTS\nOne\n\nTwo\n\nACHIEVEMENTS\n  • Won hackathon"
