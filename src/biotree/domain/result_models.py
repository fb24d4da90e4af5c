from __future__ import annotations

"""
Tree Request Result Models.

Defines the immutable result object exchanged between the tree service and
the interface layers (HTTP handler and CLI), plus its factory functions.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from biotree.domain.tree_models import Tree, tree_to_json

# Stage at which a request failed
FAILURE_VALIDATION = "validation"
FAILURE_BUILD = "build"
FAILURE_SNAPSHOT = "snapshot"

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TreeResult:
    """
    Outcome of a single tree request.

    Attributes:
        ok: True when the tree was built and its snapshot persisted.
        error: User-facing error message, empty on success.
        failure: Failing stage (validation/build/snapshot), empty on success.
        root_category: Root category requested.
        tree: Built tree, None when validation or construction failed.
        markdown: Rendered outline, empty when no tree exists.
        snapshot_path: Absolute path of the written snapshot, if any.
    """
    ok: bool
    error: str
    failure: str
    root_category: str
    tree: Optional[Tree] = None
    markdown: str = ""
    snapshot_path: str = ""

    def to_payload(self) -> Dict[str, Any]:
        """Build the JSON envelope returned by GET /get-tree."""
        return {
            "error_msg": self.error or None,
            "tree": tree_to_json(self.tree) if self.tree is not None else None,
        }

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        failure: str,
        error: str,
        root_category: str,
        tree: Optional[Tree] = None,
        markdown: str = "",
) -> TreeResult:
    """
    Create a failed result.

    Args:
        failure: Stage identifier (FAILURE_* constant).
        error: Message surfaced to the caller.
        root_category: Requested root category.
        tree: Tree already built before the failure, if any.
        markdown: Outline already rendered before the failure, if any.
    """
    return TreeResult(
        ok=False,
        error=error,
        failure=failure,
        root_category=root_category,
        tree=tree,
        markdown=markdown,
    )


def create_success_result(
        root_category: str,
        tree: Tree,
        markdown: str,
        snapshot_path: str = "",
) -> TreeResult:
    return TreeResult(
        ok=True,
        error="",
        failure="",
        root_category=root_category,
        tree=tree,
        markdown=markdown,
        snapshot_path=snapshot_path,
    )
