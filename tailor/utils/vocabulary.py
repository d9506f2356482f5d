"""
Shared matching vocabulary.

Loads the versioned vocabulary YAML (section header synonyms, skill terms,
synonym table, role nouns, requirement signals, stopwords and weighting
constants) into an immutable Vocabulary. Every pipeline stage reads the same
cached instance through get_vocabulary().
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

DEFAULT_VOCABULARY_PATH = Path(__file__).resolve().parent.parent / "config" / "vocabulary.yaml"


def vocabulary_path_from_env() -> Path:
    """TAILOR_VOCABULARY_PATH when set and non-empty, else the packaged vocabulary."""
    return Path(os.getenv("TAILOR_VOCABULARY_PATH") or DEFAULT_VOCABULARY_PATH)


VOCABULARY_PATH = vocabulary_path_from_env()

SUPPORTED_VERSIONS = (1,)

# Fixed category order used by the data model, analyzer and formatter
SKILL_CATEGORIES = ("programming", "tools", "databases", "cloud", "others")

SECTION_KINDS = (
    "summary",
    "experience",
    "education",
    "skills",
    "projects",
    "achievements",
    "certifications",
)


class InvalidVocabularyError(ValueError):
    """
    Exception raised when the vocabulary file is missing keys or malformed.

    Attributes:
        message: Error description
        path: Vocabulary file that failed validation
        key: Offending top-level key, when known
    """

    def __init__(self, message: str, path: Optional[Path] = None, key: Optional[str] = None):
        self.message = message
        self.path = path
        self.key = key

        parts = [message]
        if key:
            parts.append(f"Key: {key}")
        if path:
            parts.append(f"Vocabulary file: {path}")

        super().__init__("\n".join(parts))


def _normalize_header(text: str) -> str:
    """Collapse whitespace, upper-case and drop a trailing colon."""
    return " ".join(text.split()).upper().rstrip(":").rstrip()


@dataclass(frozen=True)
class Vocabulary:
    """
    Immutable vocabulary tables shared by all pipeline stages.

    Lookups are case-insensitive; display forms keep the spelling from the
    vocabulary file.
    """

    version: int
    section_headers: Mapping[str, FrozenSet[str]]
    skill_terms: Mapping[str, Tuple[str, ...]]
    skill_labels: Mapping[str, str]
    synonyms: Mapping[str, Tuple[str, ...]]
    role_nouns: FrozenSet[str]
    title_lead_ins: Tuple[str, ...]
    requirement_signals: Tuple[str, ...]
    stopwords: FrozenSet[str]
    priority_zone_lines: int = 5
    boost: float = 1.5
    requirement_window: int = 4
    title_window: int = 10
    summary_max_skills: int = 5
    fallback_summary_chars: int = 500
    max_lines: int = 1000
    name_scan_lines: int = 15
    summary_min_chars: int = 100

    def section_for_header(self, line: str) -> Optional[str]:
        """
        Return the section kind whose header synonyms contain this line.

        Args:
            line: Candidate header line (case and trailing colon ignored)

        Returns:
            Section kind (e.g. "experience") or None if the line is not a header
        """
        key = _normalize_header(line)
        for kind, headers in self.section_headers.items():
            if key in headers:
                return kind
        return None

    def synonym_group(self, term: str) -> FrozenSet[str]:
        """
        Return every lower-cased form equivalent to term (itself included).

        Example:
            >>> get_vocabulary().synonym_group("postgres")
            frozenset({'postgresql', 'postgres', 'postgre sql'})
        """
        key = term.lower()
        return self._synonym_index.get(key, frozenset({key}))

    def canonical_term(self, term: str) -> str:
        """Map an alias to its canonical display form; unknown terms pass through."""
        return self._canonical_index.get(term.lower(), term)

    def category_for_term(self, term: str) -> Optional[str]:
        """Return the skill category of a vocabulary term or alias."""
        return self._category_index.get(self.canonical_term(term).lower())

    def category_for_label(self, label: str) -> Optional[str]:
        """Map a skills-section label like 'Languages' to its category."""
        return self.skill_labels.get(" ".join(label.lower().split()))

    def all_term_forms(self) -> Dict[str, str]:
        """Every matchable form (canonical and alias) mapped to its canonical term."""
        forms = {}
        for category in SKILL_CATEGORIES:
            for term in self.skill_terms.get(category, ()):
                forms[term] = term
                for alias in self.synonyms.get(term, ()):
                    forms[alias] = term
        return forms

    # Derived indexes, built lazily and cached on the frozen instance

    @property
    def _synonym_index(self) -> Mapping[str, FrozenSet[str]]:
        index = self.__dict__.get("_synonym_index_cache")
        if index is None:
            built = {}
            for canonical, aliases in self.synonyms.items():
                group = frozenset([canonical.lower()] + [a.lower() for a in aliases])
                for form in group:
                    built[form] = group
            index = MappingProxyType(built)
            object.__setattr__(self, "_synonym_index_cache", index)
        return index

    @property
    def _canonical_index(self) -> Mapping[str, str]:
        index = self.__dict__.get("_canonical_index_cache")
        if index is None:
            built = {}
            for canonical, aliases in self.synonyms.items():
                built[canonical.lower()] = canonical
                for alias in aliases:
                    built[alias.lower()] = canonical
            index = MappingProxyType(built)
            object.__setattr__(self, "_canonical_index_cache", index)
        return index

    @property
    def _category_index(self) -> Mapping[str, str]:
        index = self.__dict__.get("_category_index_cache")
        if index is None:
            built = {}
            for category in SKILL_CATEGORIES:
                for term in self.skill_terms.get(category, ()):
                    built.setdefault(term.lower(), category)
            index = MappingProxyType(built)
            object.__setattr__(self, "_category_index_cache", index)
        return index


# ============================================================================
# LOADING
# ============================================================================


def _require(data: dict, key: str, path: Path):
    if key not in data or data[key] is None:
        raise InvalidVocabularyError("Missing required vocabulary section", path=path, key=key)
    return data[key]


def _string_list(value, key: str, path: Path) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise InvalidVocabularyError("Expected a list of strings", path=path, key=key)
    return tuple(item.strip() for item in value if item.strip())


def load_vocabulary(path: Path = VOCABULARY_PATH) -> Vocabulary:
    """
    Load and validate a vocabulary YAML file.

    Args:
        path: Vocabulary file (defaults to TAILOR_VOCABULARY_PATH or the packaged file)

    Returns:
        Immutable Vocabulary

    Raises:
        InvalidVocabularyError: If the file is missing, has an unsupported
            version, or a section has the wrong shape
    """
    path = Path(path)
    if not path.is_file():
        raise InvalidVocabularyError("Vocabulary file not found", path=path)

    data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    if not isinstance(data, dict):
        raise InvalidVocabularyError("Vocabulary root must be a mapping", path=path)

    version = data.get("version")
    if version not in SUPPORTED_VERSIONS:
        raise InvalidVocabularyError(
            f"Unsupported vocabulary version {version!r} (supported: {SUPPORTED_VERSIONS})",
            path=path,
            key="version",
        )

    raw_headers = _require(data, "section_headers", path)
    section_headers = {}
    for kind in SECTION_KINDS:
        headers = _string_list(raw_headers.get(kind, []), f"section_headers.{kind}", path)
        section_headers[kind] = frozenset(_normalize_header(h) for h in headers)

    raw_terms = _require(data, "skill_terms", path)
    unknown = set(raw_terms) - set(SKILL_CATEGORIES)
    if unknown:
        raise InvalidVocabularyError(
            f"Unknown skill categories: {sorted(unknown)}", path=path, key="skill_terms"
        )
    skill_terms = {
        category: _string_list(raw_terms.get(category, []), f"skill_terms.{category}", path)
        for category in SKILL_CATEGORIES
    }

    skill_labels = {}
    for label, category in (data.get("skill_labels") or {}).items():
        if category not in SKILL_CATEGORIES:
            raise InvalidVocabularyError(
                f"Label '{label}' maps to unknown category '{category}'",
                path=path,
                key="skill_labels",
            )
        skill_labels[" ".join(str(label).lower().split())] = category

    synonyms = {
        str(canonical): _string_list(aliases, f"synonyms.{canonical}", path)
        for canonical, aliases in (data.get("synonyms") or {}).items()
    }
    known_terms = {term.lower() for terms in skill_terms.values() for term in terms}
    orphans = [canonical for canonical in synonyms if canonical.lower() not in known_terms]
    if orphans:
        raise InvalidVocabularyError(
            f"Synonym groups without a skill term: {orphans}", path=path, key="synonyms"
        )

    weighting = data.get("weighting") or {}
    summary = data.get("summary") or {}
    parser = data.get("parser") or {}

    return Vocabulary(
        version=version,
        section_headers=MappingProxyType(section_headers),
        skill_terms=MappingProxyType(skill_terms),
        skill_labels=MappingProxyType(skill_labels),
        synonyms=MappingProxyType(synonyms),
        role_nouns=frozenset(
            n.lower() for n in _string_list(_require(data, "role_nouns", path), "role_nouns", path)
        ),
        title_lead_ins=_string_list(data.get("title_lead_ins", []), "title_lead_ins", path),
        requirement_signals=_string_list(
            data.get("requirement_signals", []), "requirement_signals", path
        ),
        stopwords=frozenset(
            w.lower() for w in _string_list(data.get("stopwords", []), "stopwords", path)
        ),
        priority_zone_lines=int(weighting.get("priority_zone_lines", 5)),
        boost=float(weighting.get("boost", 1.5)),
        requirement_window=int(weighting.get("requirement_window", 4)),
        title_window=int(weighting.get("title_window", 10)),
        summary_max_skills=int(summary.get("max_skills", 5)),
        fallback_summary_chars=int(parser.get("fallback_summary_chars", 500)),
        max_lines=int(parser.get("max_lines", 1000)),
        name_scan_lines=int(parser.get("name_scan_lines", 15)),
        summary_min_chars=int(parser.get("summary_min_chars", 100)),
    )


@lru_cache(maxsize=1)
def get_vocabulary() -> Vocabulary:
    """Process-wide vocabulary, loaded once from VOCABULARY_PATH."""
    return load_vocabulary(VOCABULARY_PATH)
