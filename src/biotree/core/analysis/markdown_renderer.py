from __future__ import annotations

"""
Markdown Tree Renderer.

Serializes a session tree into the Markdown outline consumed by markmap.
Root nodes become '##' headers; deeper nodes become bullets indented by two
spaces per level below the first bullet level.
"""

from typing import Iterator, List, Sequence

from biotree.domain.constants import DEFAULT_DOCUMENT_TITLE, MARKMAP_COLOR_FREEZE_LEVEL
from biotree.domain.tree_models import TreeNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def iter_markdown_lines(tree: Sequence[TreeNode], level: int = 0) -> Iterator[str]:
    """
    Lazily yield the outline lines of a tree, depth-first and pre-order.

    Args:
        tree: Nodes of the current level.
        level: Depth of those nodes (0 for roots).

    Yields:
        str: One line per node, without trailing newline.
    """
    for node in tree:
        if level == 0:
            yield f"## {_capitalize_first(node.name)}"
        else:
            yield f"{'  ' * (level - 1)}- {node.name}"

        if node.children:
            yield from iter_markdown_lines(node.children, level + 1)


def render_markdown(tree: Sequence[TreeNode], title: str = DEFAULT_DOCUMENT_TITLE) -> str:
    """
    Render the full Markdown document of a tree.

    Example:
        # Data Collection
        ## User
        - 01
          - walk
            - 01
              - accel
    """
    lines: List[str] = []
    if title:
        lines.append(f"# {title}")
    lines.extend(iter_markdown_lines(tree))
    return "\n".join(lines) + "\n"


def with_markmap_options(markdown: str, color_freeze_level: int = MARKMAP_COLOR_FREEZE_LEVEL) -> str:
    """Prefix a document with the markmap front matter used by the viewer."""
    return f"---\nmarkmap:\n  colorFreezeLevel: {color_freeze_level}\n---\n\n{markdown}"


def _capitalize_first(name: str) -> str:
    return name[:1].upper() + name[1:]
