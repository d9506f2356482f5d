"""Unit tests for the shared matching vocabulary."""

from dataclasses import FrozenInstanceError

import pytest

from tailor.utils.vocabulary import (
    DEFAULT_VOCABULARY_PATH,
    SKILL_CATEGORIES,
    InvalidVocabularyError,
    get_vocabulary,
    load_vocabulary,
    vocabulary_path_from_env,
)

MINIMAL_VOCABULARY = """\
version: 1
section_headers:
  experience: [EXPERIENCE, Work History]
skill_terms:
  databases: [PostgreSQL]
role_nouns: [Engineer]
synonyms:
  PostgreSQL: [Postgres]
"""


@pytest.mark.unit
def test_get_vocabulary_is_cached():
    """Test that every caller shares one vocabulary instance."""
    assert get_vocabulary() is get_vocabulary()


@pytest.mark.unit
def test_packaged_vocabulary_covers_every_category():
    """Test the packaged file lists terms for all five skill categories."""
    vocab = get_vocabulary()

    assert vocab.version == 1
    for category in SKILL_CATEGORIES:
        assert vocab.skill_terms[category], category


@pytest.mark.unit
def test_section_for_header():
    """Test header synonyms resolve case-insensitively."""
    vocab = get_vocabulary()

    assert vocab.section_for_header("Work Experience") == "experience"
    assert vocab.section_for_header("technical skills") == "skills"
    assert vocab.section_for_header("Education:") == "education"
    assert vocab.section_for_header("Senior Engineer") is None


@pytest.mark.unit
def test_synonym_lookups():
    """Test synonym groups, canonical forms and term categories."""
    vocab = get_vocabulary()

    assert vocab.synonym_group("Postgres") == frozenset({"postgresql", "postgres", "postgre sql"})
    assert vocab.synonym_group("Haskell") == frozenset({"haskell"})
    assert vocab.canonical_term("k8s") == "Kubernetes"
    assert vocab.canonical_term("Haskell") == "Haskell"
    assert vocab.category_for_term("Postgres") == "databases"
    assert vocab.category_for_term("AWS") == "cloud"


@pytest.mark.unit
def test_category_for_label():
    """Test skills-section labels map to categories."""
    vocab = get_vocabulary()

    assert vocab.category_for_label("Programming  Languages") == "programming"
    assert vocab.category_for_label("Databases") == "databases"
    assert vocab.category_for_label("Hobbies") is None


@pytest.mark.unit
def test_all_term_forms_maps_aliases_to_canonical():
    forms = get_vocabulary().all_term_forms()

    assert forms["PostgreSQL"] == "PostgreSQL"
    assert forms["Postgres"] == "PostgreSQL"
    assert forms["K8s"] == "Kubernetes"


@pytest.mark.unit
def test_vocabulary_is_immutable():
    """Test that neither fields nor tables can be modified."""
    vocab = get_vocabulary()

    with pytest.raises(FrozenInstanceError):
        vocab.boost = 2.0

    with pytest.raises(TypeError):
        vocab.skill_terms["databases"] = ("Access",)


@pytest.mark.unit
def test_load_minimal_vocabulary_uses_defaults(tmp_path):
    path = tmp_path / "vocabulary.yaml"
    path.write_text(MINIMAL_VOCABULARY)

    vocab = load_vocabulary(path)

    assert vocab.section_for_header("WORK HISTORY") == "experience"
    assert vocab.skill_terms["cloud"] == ()
    assert vocab.role_nouns == frozenset({"engineer"})
    assert vocab.boost == 1.5
    assert vocab.summary_max_skills == 5


@pytest.mark.unit
def test_load_vocabulary_missing_file(tmp_path):
    with pytest.raises(InvalidVocabularyError):
        load_vocabulary(tmp_path / "missing.yaml")


@pytest.mark.unit
def test_load_vocabulary_unsupported_version(tmp_path):
    path = tmp_path / "vocabulary.yaml"
    path.write_text(MINIMAL_VOCABULARY.replace("version: 1", "version: 2"))

    with pytest.raises(InvalidVocabularyError) as exc_info:
        load_vocabulary(path)

    assert exc_info.value.key == "version"


@pytest.mark.unit
def test_load_vocabulary_unknown_category(tmp_path):
    path = tmp_path / "vocabulary.yaml"
    path.write_text(MINIMAL_VOCABULARY.replace("  databases: [PostgreSQL]", "  databases: [PostgreSQL]\n  hobbies: [Chess]"))

    with pytest.raises(InvalidVocabularyError) as exc_info:
        load_vocabulary(path)

    assert exc_info.value.key == "skill_terms"


@pytest.mark.unit
def test_load_vocabulary_orphan_synonym_group(tmp_path):
    """Test that synonym groups must name a listed skill term."""
    path = tmp_path / "vocabulary.yaml"
    path.write_text(MINIMAL_VOCABULARY + "  Haskell: [GHC]\n")

    with pytest.raises(InvalidVocabularyError) as exc_info:
        load_vocabulary(path)

    assert exc_info.value.key == "synonyms"
    assert "Haskell" in str(exc_info.value)


@pytest.mark.unit
def test_packaged_word_lists_load_as_strings():
    """Test YAML 1.1 words such as 'on' stay strings instead of booleans."""
    vocab = get_vocabulary()

    assert "on" in vocab.stopwords
    word_lists = {
        "stopwords": vocab.stopwords,
        "role_nouns": vocab.role_nouns,
        "title_lead_ins": vocab.title_lead_ins,
        "requirement_signals": vocab.requirement_signals,
    }
    for name, words in word_lists.items():
        assert words, name
        for word in words:
            assert isinstance(word, str) and word.strip(), (name, word)

    for canonical, aliases in vocab.synonyms.items():
        for alias in aliases:
            assert isinstance(alias, str) and alias.strip(), (canonical, alias)


@pytest.mark.unit
def test_load_vocabulary_rejects_yaml_boolean_words(tmp_path):
    path = tmp_path / "vocabulary.yaml"
    path.write_text(MINIMAL_VOCABULARY + "stopwords: [the, on]\n")

    with pytest.raises(InvalidVocabularyError) as exc_info:
        load_vocabulary(path)

    assert exc_info.value.key == "stopwords"


@pytest.mark.unit
def test_load_vocabulary_rejects_directory(tmp_path):
    with pytest.raises(InvalidVocabularyError):
        load_vocabulary(tmp_path)


@pytest.mark.unit
@pytest.mark.parametrize("value", ["", None])
def test_unset_or_empty_env_uses_packaged_vocabulary(monkeypatch, value):
    if value is None:
        monkeypatch.delenv("TAILOR_VOCABULARY_PATH", raising=False)
    else:
        monkeypatch.setenv("TAILOR_VOCABULARY_PATH", value)

    assert vocabulary_path_from_env() == DEFAULT_VOCABULARY_PATH


@pytest.mark.unit
def test_env_overrides_vocabulary_path(monkeypatch, tmp_path):
    custom = tmp_path / "custom.yaml"
    monkeypatch.setenv("TAILOR_VOCABULARY_PATH", str(custom))

    assert vocabulary_path_from_env() == custom
