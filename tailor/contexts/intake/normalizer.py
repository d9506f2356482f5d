"""
Job description text normalizer for the Intake context.

Job descriptions are pasted from web pages and PDFs, so they carry smart
quotes, non-breaking spaces, typographic dashes and bullet glyphs. These are
folded to ASCII before keyword matching so whole-word patterns see
"Node.js - required" rather than "Node.js — required".
"""

import unicodedata

# Replacement -> characters folded into it. NFKC already handles
# ellipsis, full-width forms and most compatibility spaces.
_FOLDED_CHARACTERS = {
    " ": "\u00a0\u2007\u202f",  # no-break spaces
    "": "\u200b\u200c\u200d\u2060\ufeff",  # zero-width characters
    "'": "\u2018\u2019\u201a\u2032",
    '"': "\u201c\u201d\u201e\u2033",
    "-": "\u2010\u2011\u2012\u2013\u2014\u2015\u2212",
    "*": "\u2022\u2023\u25aa\u25cf\u25e6\u00b7\u2043",
}

UNICODE_TRANSLATION = str.maketrans(
    {char: replacement for replacement, chars in _FOLDED_CHARACTERS.items() for char in chars}
)


def normalize_unicode(text: str) -> str:
    """
    Apply NFKC, then fold quotes, dashes, bullets and invisible spaces to ASCII.

    Example:
        >>> normalize_unicode("“Senior” Engineer — Remote")
        '"Senior" Engineer - Remote'
    """
    return unicodedata.normalize("NFKC", text).translate(UNICODE_TRANSLATION)


def normalize_job_text(text: str) -> str:
    """Normalize unicode and line endings of a raw job description."""
    return normalize_unicode(text).replace("\r\n", "\n").replace("\r", "\n")
