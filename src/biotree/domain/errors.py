from __future__ import annotations

"""
Domain Exceptions.

Every failure raised on purpose by BioTree derives from BioTreeError so
interface layers can separate expected failures from crashes.
"""

from typing import Iterable


class BioTreeError(Exception):
    """Base class for all BioTree failures."""


class UnknownCategoryError(BioTreeError, LookupError):
    """Raised when a category is not present in the name registry."""

    def __init__(self, category: str) -> None:
        super().__init__(f"Invalid class name: {category}")
        self.category = category


class InvalidRootCategoryError(BioTreeError, ValueError):
    """Raised when a tree is requested with an unsupported root category."""

    def __init__(self, root_category: str, allowed: Iterable[str]) -> None:
        allowed_list = list(allowed)
        quoted = " or ".join(f"'{a}'" for a in allowed_list)
        super().__init__(
            f"Invalid or missing parameter: 'startingClassName' must be {quoted}."
        )
        self.root_category = root_category
        self.allowed = tuple(allowed_list)


class RegistryFormatError(BioTreeError, ValueError):
    """Raised when the registry JSON does not map categories to prefix lists."""


class TreeFetchError(BioTreeError):
    """Raised by the HTTP client when the server cannot deliver a tree."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code
