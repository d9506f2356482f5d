"""
Shared utilities for the tailoring pipeline.

Common functionality used across contexts:
- Matching vocabulary (section headers, skill terms, synonyms)
- Text processing
- Logging setup
- Timestamps for session directories
"""

from tailor.utils.timestamp import now
from tailor.utils.vocabulary import SKILL_CATEGORIES, Vocabulary, get_vocabulary

__all__ = ["now", "SKILL_CATEGORIES", "Vocabulary", "get_vocabulary"]
