from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the recursive node type produced by the tree builder and the
conversions between nodes and the JSON payload served to clients.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TreeNode:
    """
    A labeled node of the session tree.

    Attributes:
        name: Category prefix, instance id, trial id or file base name.
        children: Ordered child nodes; empty for leaf (file) nodes.
    """
    name: str
    children: Tuple["TreeNode", ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the node; leaves carry no 'children' key."""
        if self.is_leaf:
            return {"name": self.name}
        return {"name": self.name, "children": [c.to_dict() for c in self.children]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TreeNode:
        children = data.get("children") or []
        return cls(
            name=str(data.get("name", "")),
            children=tuple(cls.from_dict(c) for c in children),
        )


Tree = List[TreeNode]

# -----------------------------------------------------------------------------
# JSON CONVERSION
# -----------------------------------------------------------------------------

def tree_to_json(tree: Sequence[TreeNode]) -> List[Dict[str, Any]]:
    """Convert a forest of nodes into JSON-ready dictionaries."""
    return [node.to_dict() for node in tree]


def tree_from_json(data: Sequence[Dict[str, Any]]) -> Tree:
    """Rebuild a forest of nodes from a decoded JSON payload."""
    return [TreeNode.from_dict(item) for item in data]


def iter_leaf_names(tree: Sequence[TreeNode]) -> List[str]:
    """Collect the names of every leaf, depth-first."""
    names: List[str] = []
    for node in tree:
        if node.is_leaf:
            names.append(node.name)
        else:
            names.extend(iter_leaf_names(node.children))
    return names
