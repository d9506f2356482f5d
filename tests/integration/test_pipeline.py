"""
Integration tests for the end-to-end tailoring pipeline.
Tests: résumé text + job description -> parsed, tailored and rendered résumé.
"""

import pytest

from tailor import (
    StructuredResume,
    format_resume,
    parse_resume,
    tailor_resume,
    tailor_structured_resume,
)

RESUME_TEXT = """\
Jane Doe
jane.doe@example.com | (555) 123-4567 | github.com/janedoe

SUMMARY
Backend engineer with eight years of experience building data platforms.

SKILLS
Languages: Python, JavaScript
Databases: MySQL, PostgreSQL
Docker, Kafka

EXPERIENCE
Senior Engineer | Acme Corp | Jan 2020 - Present
• Built APIs serving 10M requests per day
• Tuned Postgres queries for reporting

EDUCATION
B.S. Computer Science, Stanford University, Stanford, CA
2013 - 2017
"""

JOB_DESCRIPTION = """\
We are seeking a Senior Backend Engineer to join our platform team.
Requirements:
- Experience with PostgreSQL and Kafka
- Docker and AWS
"""


@pytest.mark.integration
def test_tailor_resume_end_to_end():
    result = tailor_resume(RESUME_TEXT, JOB_DESCRIPTION)

    assert result.job_title == "Senior Backend Engineer"
    assert result.resume.skills.databases == ("PostgreSQL", "MySQL")
    assert result.resume.experience[0].bullets[0] == "Tuned PostgreSQL queries for reporting"

    lines = result.rendered.split("\n")
    assert lines[0].strip() == "JANE DOE"
    assert "Databases: PostgreSQL, MySQL" in lines
    assert "Senior Engineer — Jan 2020 – Present" in lines
    assert lines.index("  • Tuned PostgreSQL queries for reporting") < lines.index(
        "  • Built APIs serving 10M requests per day"
    )
    assert result.time_s >= 0


@pytest.mark.integration
def test_rendered_text_matches_formatter():
    result = tailor_resume(RESUME_TEXT, JOB_DESCRIPTION)
    assert result.rendered == format_resume(result.resume)


@pytest.mark.integration
def test_structured_entry_point_accepts_edited_record():
    parsed = parse_resume(RESUME_TEXT)
    edited = StructuredResume.from_dict({**parsed.to_dict(), "summary": ""})

    result = tailor_structured_resume(edited, JOB_DESCRIPTION)

    assert result.resume.summary.startswith("Senior Engineer with experience in ")
    assert "PostgreSQL" in result.resume.summary


@pytest.mark.integration
def test_response_shape():
    result = tailor_resume(RESUME_TEXT, JOB_DESCRIPTION)

    data = result.to_dict()

    assert set(data) == {"resume", "jobTitle", "structured"}
    assert data["resume"] == result.rendered
    assert data["jobTitle"] == "Senior Backend Engineer"
    assert data["structured"]["skills"]["databases"] == ["PostgreSQL", "MySQL"]


@pytest.mark.integration
def test_unstructured_inputs_degrade_gracefully():
    result = tailor_resume("just a paragraph about me", "")

    assert result.resume.summary == "just a paragraph about me"
    assert result.rendered == "SUMMARY\njust a paragraph about me"
    assert result.job_title == ""
