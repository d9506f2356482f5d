"""
Relevance scoring between résumé content and a keyword profile.

All functions are pure: they read the vocabulary and keywords and return
new values.
"""

import re
from functools import lru_cache
from typing import Iterable

from tailor.contexts.intake.job_analysis import KeywordWeight
from tailor.utils.vocabulary import Vocabulary


@lru_cache(maxsize=512)
def _whole_word(term: str) -> re.Pattern:
    return re.compile(rf"(?<![A-Za-z0-9]){re.escape(term)}(?![A-Za-z0-9])", re.IGNORECASE)


@lru_cache(maxsize=512)
def _replaceable_form(form: str) -> re.Pattern:
    # "JS" must not match inside "Node.js" or "JSON"
    return re.compile(rf"(?<![\w.]){re.escape(form)}(?![\w]|\.\w)", re.IGNORECASE)


def skill_matches(skill: str, term: str, vocabulary: Vocabulary) -> bool:
    """
    True when a résumé skill and a keyword term refer to the same thing.

    Matches on case-insensitive equality, synonym-group equivalence
    ("Postgres" ~ "PostgreSQL"), or whole-word containment either way
    ("AWS Lambda" ~ "AWS").
    """
    skill_key, term_key = skill.lower().strip(), term.lower().strip()
    if not skill_key or not term_key:
        return False
    if skill_key == term_key:
        return True
    if term_key in vocabulary.synonym_group(skill_key):
        return True
    return bool(_whole_word(term_key).search(skill_key) or _whole_word(skill_key).search(term_key))


def mentions_term(text: str, term: str) -> bool:
    """True when term appears in text as a whole word, case-insensitively ("R" is not in "hiring")."""
    return bool(term.strip()) and bool(_whole_word(term.strip()).search(text))


def skill_weight(skill: str, keywords: Iterable[KeywordWeight], vocabulary: Vocabulary) -> float:
    """Highest weight among keywords matching skill (0.0 when none match)."""
    return max((kw.weight for kw in keywords if skill_matches(skill, kw.term, vocabulary)), default=0.0)


def bullet_score(bullet: str, keywords: Iterable[KeywordWeight]) -> float:
    """
    Sum of weights of every keyword whose term appears in the bullet.

    Containment is a case-insensitive substring test.
    """
    lowered = bullet.lower()
    return sum(kw.weight for kw in keywords if kw.term.lower() in lowered)


def substitute_synonyms(bullet: str, keywords: Iterable[KeywordWeight], vocabulary: Vocabulary) -> str:
    """
    Rewrite synonym forms in a bullet to the keyword spelling used by the job description.

    Only forms already present are rewritten, whole-token and case-insensitive.

    Example:
        substitute_synonyms("Tuned Postgres queries", [KeywordWeight("PostgreSQL", 3.0)], vocab)
        # "Tuned PostgreSQL queries"
    """
    for keyword in keywords:
        preferred = keyword.term
        forms = vocabulary.synonym_group(preferred) - {preferred.lower()}
        # Longest first so "google cloud platform" is rewritten before "google cloud"
        for form in sorted(forms, key=lambda f: (-len(f), f)):
            bullet = _replaceable_form(form).sub(lambda _: preferred, bullet)
    return bullet
