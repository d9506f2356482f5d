"""
Regex builders and patterns for job description analysis.

Vocabulary-driven patterns are built from the loaded Vocabulary; static
line and token shapes are grouped in frozen dataclasses.
"""

import re
from dataclasses import dataclass
from typing import Iterable

# Terms may contain punctuation ("C++", "Node.js", "CI/CD"), so word
# boundaries are expressed with alphanumeric lookarounds instead of \b
_TERM_START = r"(?<![A-Za-z0-9])"
_TERM_END = r"(?![A-Za-z0-9])"


def build_phrase_pattern(phrases: Iterable[str]) -> re.Pattern:
    """
    Compile one case-insensitive alternation of whole-word phrases.

    Longer phrases are tried first so "sql server" wins over "sql" and
    "must have" over "must". Internal whitespace matches any whitespace run.

    Example:
        >>> pattern = build_phrase_pattern(["SQL", "SQL Server"])
        >>> pattern.search("MS SQL Server 2019").group(0)
        'SQL Server'
    """
    unique = sorted({p.strip() for p in phrases if p.strip()}, key=lambda p: (-len(p), p.lower()))
    if not unique:
        # Never matches
        return re.compile(r"(?!x)x")
    alternation = "|".join(r"\s+".join(re.escape(w) for w in p.split()) for p in unique)
    return re.compile(rf"{_TERM_START}(?:{alternation}){_TERM_END}", re.IGNORECASE)


@dataclass(frozen=True)
class JobTextPatterns:
    """Line and token shapes in job description text."""

    # Bullet glyph (after unicode normalization) or "1." numbering
    BULLET = re.compile(r"^\s*(?:[*\-+>]|\d{1,2}[.)])\s+")

    # Clause boundary for requirement windows; colons end the lead phrase
    # ("Requirements: ...") so the window restarts after them
    CLAUSE_BOUNDARY = re.compile(r"[.!?;:](?=\s|$)")

    # Sentence boundary for title windows; colons are kept ("Position: Data Analyst")
    SENTENCE_BOUNDARY = re.compile(r"[.!?;](?=\s|$)")

    TOKEN = re.compile(r"[A-Za-z0-9]+")

    # Title words may carry punctuation ("Sr.", "Full-Stack", "C++")
    TITLE_WORD = re.compile(r"[A-Za-z0-9][A-Za-z0-9+#/&.\-]*")

    # Markdown and punctuation trimmed from a fallback title line
    TITLE_TRIM = " \t#*_-:|,.()"
