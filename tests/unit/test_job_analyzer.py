"""Unit tests for job description analysis."""

import pytest

from tailor.contexts.intake import JobDescriptionAnalyzer, analyze_job_description
from tailor.contexts.intake.extraction_patterns import build_phrase_pattern
from tailor.contexts.intake.normalizer import normalize_job_text

SHORT_JD = "We require experience with PostgreSQL and React. Must have AWS."

# Five neutral lines fill the priority zone
FILLER = "Acme Corp overview\nOur team builds payments\nRemote friendly\nCompetitive salary\nGreat benefits\n"


def terms(analysis, category):
    return [kw.term for kw in analysis.keywords(category)]


def weights(analysis, category):
    return {kw.term: kw.weight for kw in analysis.keywords(category)}


@pytest.mark.unit
def test_short_description_categories():
    analysis = analyze_job_description(SHORT_JD)

    assert terms(analysis, "databases") == ["PostgreSQL"]
    assert terms(analysis, "programming") == ["React"]
    assert terms(analysis, "cloud") == ["AWS"]
    assert analysis.keywords("requirements") == ()
    assert weights(analysis, "databases")["PostgreSQL"] > 0


@pytest.mark.unit
def test_analysis_is_deterministic():
    assert analyze_job_description(SHORT_JD).to_dict() == analyze_job_description(SHORT_JD).to_dict()


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "   \n\t"])
def test_blank_description(text):
    analysis = analyze_job_description(text)

    assert analysis.is_empty()
    assert analysis.job_title == ""


@pytest.mark.unit
def test_rejects_non_string():
    with pytest.raises(TypeError):
        analyze_job_description(b"PostgreSQL")


@pytest.mark.unit
def test_job_title_after_lead_in():
    analysis = analyze_job_description(
        "We are seeking a Senior Backend Engineer to join our platform team."
    )
    assert analysis.job_title == "Senior Backend Engineer"


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, expected",
    [
        ("Our hiring manager will review every application within two weeks.", ""),
        ("Our hiring manager is looking for a Data Engineer.", "Data Engineer"),
        ("We are hiring a Product Manager.", "Product Manager"),
    ],
)
def test_hiring_manager_is_not_a_title(text, expected):
    assert analyze_job_description(text).job_title == expected


@pytest.mark.unit
def test_job_title_from_first_line():
    analysis = analyze_job_description("Data Analyst\nWe need SQL and Tableau.")
    assert analysis.job_title == "Data Analyst"


@pytest.mark.unit
def test_no_job_title():
    assert analyze_job_description(SHORT_JD).job_title == ""


@pytest.mark.unit
def test_aliases_fold_into_canonical_term():
    analysis = analyze_job_description("Experience with Postgres and PostgreSQL.")

    assert weights(analysis, "databases") == {"PostgreSQL": 3.0}


@pytest.mark.unit
def test_alias_display_kept_when_canonical_absent():
    analysis = analyze_job_description("Experience with Postgres and K8s.")

    assert terms(analysis, "databases") == ["Postgres"]
    assert terms(analysis, "tools") == ["K8s"]


@pytest.mark.unit
def test_priority_zone_boost():
    analysis = analyze_job_description("Python developer\n" + FILLER + "Python daily")

    # 1.5 in the first line, 1.0 after the priority zone
    assert weights(analysis, "programming") == {"Python": 2.5}


@pytest.mark.unit
def test_bullets_under_requirement_signal_are_boosted():
    jd = FILLER + "Requirements:\n- Kafka\n- Redis\nNice to have:\n- Spark\n"

    analysis = analyze_job_description(jd)

    assert analysis.keywords("tools")[0].term == "Kafka"
    assert weights(analysis, "tools") == {"Kafka": 1.5, "Spark": 1.0}
    assert weights(analysis, "databases") == {"Redis": 1.5}


@pytest.mark.unit
def test_requirements_bucket_collects_terms_after_signals():
    analysis = analyze_job_description("Must have Terraform and observability tooling experience.")

    requirement_terms = terms(analysis, "requirements")
    assert "observability" in requirement_terms
    assert "tooling" in requirement_terms
    assert "terraform" not in requirement_terms
    assert "and" not in requirement_terms
    assert terms(analysis, "tools") == ["Terraform"]


@pytest.mark.unit
def test_weights_are_descending():
    jd = "Python, Python, Python and Java. Experience with Java and Rust.\n" + FILLER + "Rust"

    analysis = analyze_job_description(jd)

    programming = analysis.keywords("programming")
    assert [kw.term for kw in programming] == ["Python", "Java", "Rust"]
    assert all(a.weight >= b.weight for a, b in zip(programming, programming[1:]))


@pytest.mark.unit
def test_multi_word_terms_counted_once():
    analysis = analyze_job_description("We use SQL Server and Power BI.")

    assert terms(analysis, "databases") == ["SQL Server"]
    assert terms(analysis, "tools") == ["Power BI"]
    assert terms(analysis, "programming") == []


@pytest.mark.unit
def test_custom_analyzer_instance_matches_shared_one():
    analyzer = JobDescriptionAnalyzer()
    assert analyzer.analyze(SHORT_JD).to_dict() == analyze_job_description(SHORT_JD).to_dict()


@pytest.mark.unit
def test_build_phrase_pattern_prefers_longest():
    pattern = build_phrase_pattern(["SQL", "SQL Server"])

    assert pattern.search("MS SQL Server 2019").group(0) == "SQL Server"
    assert pattern.search("NoSQL stores") is None


@pytest.mark.unit
def test_normalize_job_text():
    text = "Senior Engineer — “remote”\r\n• Python"
    assert normalize_job_text(text) == 'Senior Engineer - "remote"\n* Python'
