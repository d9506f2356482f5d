"""Custom exceptions for the intake context's keyword profiles."""

from typing import Optional


class KeywordProfileError(ValueError):
    """
    Exception raised when a keyword profile violates its contract.

    Raised at construction time so malformed profiles never reach the optimizer.

    Attributes:
        message: Error description
        category: Keyword category involved, when known
        term: Keyword term involved, when known
    """

    def __init__(self, message: str, category: Optional[str] = None, term: Optional[str] = None):
        self.message = message
        self.category = category
        self.term = term

        # Build enhanced error message
        parts = [message]

        if category:
            parts.append(f"Category: {category}")

        if term:
            parts.append(f"Term: {term}")

        super().__init__("\n".join(parts))


class InvalidKeywordWeightError(KeywordProfileError):
    """Weight is not a finite, non-negative real number (booleans rejected)."""

    pass


class UnknownKeywordCategoryError(KeywordProfileError):
    """Category is outside the five skill categories plus 'requirements'."""

    pass


class KeywordOrderError(KeywordProfileError):
    """Weights within a category are not in descending order."""

    pass
