from __future__ import annotations

"""
Name Registry Domain Model.

Holds the whitelist of recognized name prefixes per category. The registry is
built once at startup and shared read-only by every traversal.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from biotree.domain.errors import RegistryFormatError, UnknownCategoryError

# -----------------------------------------------------------------------------
# REGISTRY MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class NameRegistry:
    """
    Immutable mapping of category names to ordered prefix tuples.

    Prefixes within a category are not required to be mutually exclusive:
    a name can satisfy several of them.

    Attributes:
        categories: Read-only view of category -> prefixes.
    """
    categories: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen: Dict[str, Tuple[str, ...]] = {}
        for category, prefixes in self.categories.items():
            frozen[category] = _ordered_unique(prefixes)
        object.__setattr__(self, "categories", MappingProxyType(frozen))

    @classmethod
    def from_mapping(cls, raw: Any) -> NameRegistry:
        """
        Build a registry from decoded JSON data.

        Args:
            raw: Expected to be a dict of category -> list of strings.

        Returns:
            NameRegistry: The validated registry.

        Raises:
            RegistryFormatError: If the structure or any value has the wrong type.
        """
        if not isinstance(raw, dict):
            raise RegistryFormatError(
                f"Registry root must be an object, received {type(raw).__name__}."
            )

        parsed: Dict[str, Tuple[str, ...]] = {}
        for category, prefixes in raw.items():
            if not isinstance(prefixes, list):
                raise RegistryFormatError(
                    f"Category '{category}' must map to a list of prefixes."
                )
            for prefix in prefixes:
                if not isinstance(prefix, str):
                    raise RegistryFormatError(
                        f"Category '{category}' contains a non-string prefix: {prefix!r}."
                    )
            parsed[str(category)] = tuple(prefixes)

        return cls(parsed)

    def prefixes(self, category: str) -> Tuple[str, ...]:
        """Return the prefixes of a category or raise UnknownCategoryError."""
        try:
            return self.categories[category]
        except KeyError:
            raise UnknownCategoryError(category) from None

    def matches(self, name: str, category: str) -> bool:
        """True iff name starts with at least one prefix registered for category."""
        return any(name.startswith(prefix) for prefix in self.prefixes(category))

    def __contains__(self, category: object) -> bool:
        return category in self.categories


def _ordered_unique(prefixes: Any) -> Tuple[str, ...]:
    """Drop repeated prefixes while keeping the first occurrence order."""
    seen = set()
    out = []
    for prefix in prefixes:
        if prefix in seen:
            continue
        seen.add(prefix)
        out.append(prefix)
    return tuple(out)
