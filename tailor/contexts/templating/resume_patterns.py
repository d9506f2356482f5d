"""
Regex patterns for plain-text résumé parsing.

Grouped by concern in frozen dataclasses so the parser references
ContactPatterns.EMAIL, DatePatterns.RANGE, etc. Section header recognition is
vocabulary-driven (see tailor.utils.vocabulary), not pattern-driven.
"""

import re
from dataclasses import dataclass
from typing import Tuple

# ============================================================================
# SHARED BUILDING BLOCKS
# ============================================================================

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|"
    r"aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)

# Month-year is listed first so "Jan 2020" is not consumed as a bare year
_DATE_TOKEN = rf"(?:\b{_MONTH}\s+\d{{4}}(?!\d)|\b\d{{1,2}}/\d{{4}}(?!\d)|(?<!\d)\d{{4}}(?!\d))"
_END_TOKEN = rf"(?:{_DATE_TOKEN}|\b(?:present|current|now|ongoing)\b)"
_RANGE_SEPARATOR = r"\s*(?:-|–|—|\bto\b)\s*"

# Glyphs that may touch the text ("•Built") vs. ones that need a following space
BULLET_GLYPHS = "•◦▪▫●○■□◆◇▶►‣∙·"
BULLET_DASHES = "*-–—"


@dataclass(frozen=True)
class LinePatterns:
    """Line-shape patterns used by the line classifier."""

    # Bullet glyph, dash or "1." / "1)" numbering
    BULLET = re.compile(
        rf"^\s*(?:[{re.escape(BULLET_GLYPHS)}]\s*|[{re.escape(BULLET_DASHES)}]\s+|\d{{1,2}}[.)]\s+)"
        r"(?P<text>.*\S)\s*$"
    )

    # Markdown decoration around a header ("## Skills", "**EXPERIENCE**")
    HEADER_DECORATION = re.compile(r"^[#*_=\s]+|[#*_=:\s]+$")

    # Lines made only of separators ("-----", "=====")
    RULE = re.compile(r"^\s*[-=_~*•·]{3,}\s*$")

    # A lone glyph left over from PDF extraction
    BULLET_ONLY = frozenset(BULLET_GLYPHS + BULLET_DASHES)


@dataclass(frozen=True)
class DatePatterns:
    """Date-range patterns for experience and education entries."""

    RANGE = re.compile(
        rf"(?P<start>{_DATE_TOKEN}){_RANGE_SEPARATOR}(?P<end>{_END_TOKEN})",
        re.IGNORECASE,
    )

    # Lone graduation year ("Class of 2019", "2019")
    YEAR = re.compile(r"(?<!\d)(?:19|20)\d{2}(?!\d)")

    # Characters trimmed from the text around a date range
    EDGE_SEPARATORS = " \t,;|—–-()[]:@"


@dataclass(frozen=True)
class ContactPatterns:
    """Contact extraction patterns; first match over the whole text wins."""

    EMAIL = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

    # Tried in order
    PHONES: Tuple[re.Pattern, ...] = (
        re.compile(r"\+?\d{1,3}[-.\s]?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)"),
        re.compile(r"\+\d{10,15}(?!\d)"),
        re.compile(r"\(\d{3}\)\s?\d{3}[-.\s]?\d{4}(?!\d)"),
        re.compile(r"(?<!\d)\d{3}[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)"),
    )

    LINKEDIN = re.compile(
        r"(?:https?://)?(?:[a-z]{2,3}\.)?linkedin\.com/[^\s|,;()<>]+", re.IGNORECASE
    )
    GITHUB = re.compile(r"(?:https?://)?(?:www\.)?github\.com/[^\s|,;()<>]+", re.IGNORECASE)

    PORTFOLIO_LABEL = re.compile(
        r"\b(?:portfolio|website|personal\s+website|web)\s*:\s*(?P<url>[^\s|,;]+)", re.IGNORECASE
    )
    URL = re.compile(r"(?:https?://|www\.)[^\s|,;()<>]+", re.IGNORECASE)

    # Marks a line as contact info rather than a name candidate
    CONTACT_MARKER = re.compile(
        r"@|\d{3}|phone|email|linkedin|github|portfolio|resume|curriculum|www\.|https?://",
        re.IGNORECASE,
    )


@dataclass(frozen=True)
class NamePatterns:
    """Personal-name shapes: 2-5 title-case or all-caps tokens."""

    TITLE_CASE = re.compile(r"^[A-Z][a-z'’]+(?:[\s\-.]+[A-Z][a-z'’]*\.?){1,4}$")
    ALL_CAPS = re.compile(r"^[A-Z][A-Z'’.\-]*(?:\s+[A-Z][A-Z'’.\-]*){1,4}$")
    MIDDLE_INITIAL = re.compile(r"^[A-Z][a-z]+\s+[A-Z]\.?\s+[A-Z][a-z]+$")


@dataclass(frozen=True)
class EducationPatterns:
    """Degree and institution detection."""

    DEGREE = re.compile(
        r"(?<![A-Za-z])(?:"
        r"(?i:bachelor|master|doctor(?:ate)?|diploma|associate(?:'s)?\s+(?:of|degree)|high\s+school)"
        r"|(?:B\.?\s?Tech|M\.?\s?Tech|B\.?\s?Sc|M\.?\s?Sc|B\.S\.?|M\.S\.?|B\.A\.?|M\.A\.?"
        r"|B\.E\.?|M\.E\.?|Ph\.?\s?D|MBA|(?:BS|MS|BA|MA|BE|ME)(?=\s+(?:in|of)\b))(?![a-z])"
        r")"
    )

    UNIVERSITY = re.compile(
        r"\b(?:university|college|institute|school|academy|polytechnic|iit|nit)\b", re.IGNORECASE
    )

    # "B.S. Computer Science, Stanford University" or "... from Stanford University"
    INLINE_SEPARATOR = re.compile(r",\s*|\s+(?:at|from)\s+")


@dataclass(frozen=True)
class ExperiencePatterns:
    """Heuristics for splitting title and company on experience header lines."""

    TITLE_KEYWORD = re.compile(
        r"\b(?:developer|engineer|analyst|manager|specialist|consultant|associate|lead|"
        r"senior|junior|intern|architect|designer|scientist|director|administrator|"
        r"coordinator|programmer|researcher|officer|head|founder|president|assistant)\b",
        re.IGNORECASE,
    )

    # " at " between title and company ("Engineer at Acme")
    AT_SEPARATOR = re.compile(r"\s+(?:at|@)\s+", re.IGNORECASE)

    # Separators splitting a header line into fields
    FIELD_SEPARATOR = re.compile(r"\s*(?:\||—|–|\s-\s)\s*")


@dataclass(frozen=True)
class ListPatterns:
    """Skills, projects and achievements list splitting."""

    LABEL = re.compile(r"^(?P<label>[A-Za-z][A-Za-z &/+.\-]{0,40}?)\s*:\s*(?P<rest>.*)$")
    ITEM_SEPARATOR = re.compile(r"\s*[,;|•·]\s*")
    TECH_STACK_LABEL = re.compile(
        r"^(?:tech(?:nology|nologies)?\s*stack|technologies|tech|tools|stack|built\s+with)\s*:\s*(?P<stack>.+)$",
        re.IGNORECASE,
    )
