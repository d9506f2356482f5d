"""
Text processing utilities shared by the parser, analyzer and formatter.
"""

import re
from typing import Iterable, List

_WHITESPACE = re.compile(r"[ \t\f\v\u00a0]+")


def normalize_whitespace(text: str) -> str:
    """
    Collapse runs of horizontal whitespace to one space and strip the ends.

    Example:
        >>> normalize_whitespace("  Senior   Engineer\\t ")
        'Senior Engineer'
    """
    return _WHITESPACE.sub(" ", text).strip()


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Original text if within max_len, otherwise truncated with "..."

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def dedupe_casefold(items: Iterable[str]) -> List[str]:
    """
    Drop empty and case-insensitive duplicate strings, keeping the first spelling.

    Example:
        >>> dedupe_casefold(["Python", "python", "", "SQL"])
        ['Python', 'SQL']
    """
    seen = set()
    result = []
    for item in items:
        key = item.casefold()
        if item and key not in seen:
            seen.add(key)
            result.append(item)
    return result


def human_join(items: List[str]) -> str:
    """
    Join items as an English list.

    Example:
        >>> human_join(["Python", "SQL", "AWS"])
        'Python, SQL and AWS'
    """
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} and {items[-1]}"
