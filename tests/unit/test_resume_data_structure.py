"""Unit tests for résumé record types and their serialization."""

import json
from dataclasses import FrozenInstanceError

import pytest

from tailor.contexts.templating import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    InvalidResumeStructureError,
    OptimizedResume,
    ProjectEntry,
    SkillSet,
    StructuredResume,
)


@pytest.fixture
def resume():
    return StructuredResume(
        name="Jane Doe",
        contact=ContactInfo(email="jane@example.com", github="github.com/janedoe"),
        summary="Backend engineer.",
        experience=(
            ExperienceEntry("Senior Engineer", "Acme Corp", "2020", "Present", ("Built APIs",)),
        ),
        education=(EducationEntry("B.S. Computer Science", "Stanford University", years="2017"),),
        skills=SkillSet(programming=("Python",), databases=("PostgreSQL", "MySQL")),
        projects=(ProjectEntry("Resume Tailor", tech_stack="Python"),),
        certifications=("AWS Certified Developer",),
    )


@pytest.mark.unit
def test_to_dict_uses_external_names_and_empty_strings(resume):
    data = resume.to_dict()

    assert data["contact"] == {
        "email": "jane@example.com",
        "phone": "",
        "linkedin": "",
        "github": "github.com/janedoe",
        "portfolio": "",
    }
    assert data["experience"][0] == {
        "title": "Senior Engineer",
        "company": "Acme Corp",
        "startDate": "2020",
        "endDate": "Present",
        "bullets": ["Built APIs"],
    }
    assert data["education"][0]["location"] == ""
    assert data["projects"][0]["techStack"] == "Python"
    assert list(data["skills"]) == ["programming", "tools", "databases", "cloud", "others"]


@pytest.mark.unit
def test_from_dict_inverts_to_dict(resume):
    assert StructuredResume.from_dict(resume.to_dict()) == resume


@pytest.mark.unit
def test_from_dict_accepts_snake_case_and_missing_keys():
    data = {
        "name": "John Smith",
        "experience": [{"title": "Analyst", "start_date": "2019", "end_date": "2021"}],
        "projects": [{"title": "Dashboards", "tech_stack": "Tableau", "description": ""}],
    }

    resume = StructuredResume.from_dict(data)

    assert resume.experience[0].start_date == "2019"
    assert resume.experience[0].end_date == "2021"
    assert resume.experience[0].bullets == ()
    assert resume.projects[0].tech_stack == "Tableau"
    assert resume.projects[0].description is None
    assert resume.contact == ContactInfo()
    assert resume.skills.is_empty()


@pytest.mark.unit
def test_from_dict_rejects_unknown_skill_category():
    with pytest.raises(InvalidResumeStructureError) as exc_info:
        StructuredResume.from_dict({"skills": {"hobbies": ["Chess"]}})

    assert exc_info.value.field_name == "skills"


@pytest.mark.unit
@pytest.mark.parametrize(
    "data, field_name",
    [
        ({"nmae": "Jane Doe"}, None),
        ({"contact": {"emial": "jane@example.com"}}, "contact"),
        ({"experience": [{"title": "Engineer"}, {"titel": "Analyst"}]}, "experience[1]"),
        ({"education": [{"degree": "B.S.", "school": "MIT"}]}, "education[0]"),
        ({"projects": [{"title": "Dashboards", "stack": "Tableau"}]}, "projects[0]"),
    ],
)
def test_from_dict_rejects_unknown_keys(data, field_name):
    """Test misspelled keys raise at every level instead of being dropped."""
    with pytest.raises(InvalidResumeStructureError, match="Unknown keys") as exc_info:
        StructuredResume.from_dict(data)

    assert exc_info.value.field_name == field_name


@pytest.mark.unit
def test_from_dict_rejects_string_for_list():
    with pytest.raises(InvalidResumeStructureError) as exc_info:
        StructuredResume.from_dict({"achievements": "Won a prize"})

    assert exc_info.value.field_name == "achievements"


@pytest.mark.unit
def test_save_and_load_yaml(resume, tmp_path):
    path = resume.save(tmp_path / "records" / "resume.yaml")

    assert path.exists()
    assert StructuredResume.from_file(path) == resume


@pytest.mark.unit
def test_load_json(resume, tmp_path):
    path = tmp_path / "resume.json"
    path.write_text(json.dumps(resume.to_dict()))

    assert StructuredResume.from_file(path) == resume


@pytest.mark.unit
def test_from_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        StructuredResume.from_file(tmp_path / "missing.yaml")


@pytest.mark.unit
def test_records_are_frozen(resume):
    with pytest.raises(FrozenInstanceError):
        resume.name = "Someone Else"


@pytest.mark.unit
def test_is_empty():
    assert StructuredResume().is_empty()
    assert OptimizedResume().is_empty()
    assert not StructuredResume(summary="Hi").is_empty()


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, parts",
    [
        ("Mary Ann Smith", ("Mary", "Ann", "Smith")),
        ("Jane Doe", ("Jane", "", "Doe")),
        ("Cher", ("Cher", "", "")),
        ("", ("", "", "")),
    ],
)
def test_name_parts(name, parts):
    assert StructuredResume(name=name).name_parts == parts


@pytest.mark.unit
def test_contact_present_skips_absent_fields():
    contact = ContactInfo(email="a@b.io", phone=None, linkedin="linkedin.com/in/a")
    assert contact.present() == ("a@b.io", "linkedin.com/in/a")


@pytest.mark.unit
def test_skill_set_with_category():
    skills = SkillSet(tools=("Git",))

    updated = skills.with_category("tools", ("Docker", "Git"))

    assert updated.tools == ("Docker", "Git")
    assert skills.tools == ("Git",)
    with pytest.raises(KeyError):
        skills.get("hobbies")


@pytest.mark.unit
def test_optimized_resume_from_resume(resume):
    optimized = OptimizedResume.from_resume(resume, summary="Tailored.")

    assert isinstance(optimized, OptimizedResume)
    assert optimized.summary == "Tailored."
    assert optimized.experience == resume.experience
    assert resume.summary == "Backend engineer."
