"""
Keyword profile of a job description.

A JDAnalysis holds the detected job title and, per category, the weighted
keywords found in the job description. Categories are the five skill
categories plus "requirements" (terms outside the vocabulary that appear
near requirement-signal words).

Contract enforced at construction:
- every category key is known; missing categories are filled with ()
- every weight is a finite, non-negative real number (bools rejected)
- weights within a category are non-increasing
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from tailor.contexts.intake.exceptions import (
    InvalidKeywordWeightError,
    KeywordOrderError,
    KeywordProfileError,
    UnknownKeywordCategoryError,
)
from tailor.utils.vocabulary import SKILL_CATEGORIES

KEYWORD_CATEGORIES = SKILL_CATEGORIES + ("requirements",)


@dataclass(frozen=True)
class KeywordWeight:
    """A keyword and its relevance weight."""

    term: str
    weight: float

    def __post_init__(self):
        if not isinstance(self.term, str) or not self.term.strip():
            raise KeywordProfileError(f"Keyword term must be a non-empty string, got {self.term!r}")

        weight = self.weight
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise InvalidKeywordWeightError(
                f"Weight must be a real number, got {type(weight).__name__}", term=self.term
            )
        if not math.isfinite(weight) or weight < 0:
            raise InvalidKeywordWeightError(
                f"Weight must be finite and non-negative, got {weight}", term=self.term
            )


@dataclass(frozen=True)
class JDAnalysis:
    """
    Weighted keyword profile of one job description.

    Example:
        analysis = JDAnalysis(
            job_title="Backend Engineer",
            keywords_by_category={"databases": (KeywordWeight("PostgreSQL", 2.5),)},
        )
        analysis.keywords("cloud")
        # ()
    """

    job_title: str = ""
    keywords_by_category: Mapping[str, Tuple[KeywordWeight, ...]] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.job_title, str):
            raise KeywordProfileError(f"job_title must be str, got {type(self.job_title).__name__}")

        unknown = set(self.keywords_by_category) - set(KEYWORD_CATEGORIES)
        if unknown:
            raise UnknownKeywordCategoryError(
                f"Unknown keyword categories {sorted(unknown)} "
                f"(expected one of {list(KEYWORD_CATEGORIES)})",
                category=sorted(unknown)[0],
            )

        normalized: Dict[str, Tuple[KeywordWeight, ...]] = {}
        for category in KEYWORD_CATEGORIES:
            keywords = tuple(
                self._coerce(item, category) for item in self.keywords_by_category.get(category, ())
            )
            for previous, current in zip(keywords, keywords[1:]):
                if current.weight > previous.weight:
                    raise KeywordOrderError(
                        f"Weights must be descending: {previous.term}={previous.weight} "
                        f"precedes {current.term}={current.weight}",
                        category=category,
                        term=current.term,
                    )
            normalized[category] = keywords

        object.__setattr__(self, "keywords_by_category", MappingProxyType(normalized))

    @staticmethod
    def _coerce(item: Any, category: str) -> KeywordWeight:
        if isinstance(item, KeywordWeight):
            return item
        if isinstance(item, (tuple, list)) and len(item) == 2:
            return KeywordWeight(*item)
        raise KeywordProfileError(
            f"Expected KeywordWeight or (term, weight), got {item!r}", category=category
        )

    def keywords(self, category: str) -> Tuple[KeywordWeight, ...]:
        if category not in KEYWORD_CATEGORIES:
            raise UnknownKeywordCategoryError("Unknown keyword category", category=category)
        return self.keywords_by_category[category]

    def all_keywords(self) -> Tuple[KeywordWeight, ...]:
        """Every keyword across categories, in category order."""
        return tuple(kw for category in KEYWORD_CATEGORIES for kw in self.keywords_by_category[category])

    def is_empty(self) -> bool:
        return not self.job_title and not self.all_keywords()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobTitle": self.job_title,
            "keywordsByCategory": {
                category: [{"term": kw.term, "weight": kw.weight} for kw in keywords]
                for category, keywords in self.keywords_by_category.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JDAnalysis":
        """Inverse of to_dict; raises KeywordProfileError subclasses on bad input."""
        raw = data.get("keywordsByCategory", data.get("keywords_by_category")) or {}
        return cls(
            job_title=data.get("jobTitle", data.get("job_title", "")) or "",
            keywords_by_category={
                category: tuple(
                    KeywordWeight(term=entry["term"], weight=entry["weight"]) for entry in entries
                )
                for category, entries in raw.items()
            },
        )
