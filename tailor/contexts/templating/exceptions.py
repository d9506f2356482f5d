"""Custom exceptions for the templating context."""

from pathlib import Path
from typing import Optional


class InvalidResumeStructureError(ValueError):
    """
    Exception raised when a structured résumé mapping has the wrong shape.

    Raised while loading records from YAML/JSON, never by the text parser,
    which degrades to partial extraction instead.

    Attributes:
        message: Error description
        field_name: Dotted path of the offending field (e.g. 'skills.cloud')
        source: File the mapping was loaded from, when known
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        source: Optional[Path] = None,
    ):
        self.message = message
        self.field_name = field_name
        self.source = source

        # Build enhanced error message
        parts = [message]

        if field_name:
            parts.append(f"Field: {field_name}")

        if source:
            parts.append(f"Source: {source}")

        super().__init__("\n".join(parts))
