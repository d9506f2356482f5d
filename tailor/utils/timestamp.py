"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """
    Current local time as a sortable, filesystem-safe string.

    Used to name logging session directories (e.g. outs/logs/transform_20251114_123456).

    Example:
        now()
        # "20251114_123456"
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")
