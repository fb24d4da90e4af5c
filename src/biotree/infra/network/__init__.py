from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the HTTP clients used to talk to a running BioTree server.
"""

from biotree.infra.network.tree_client import fetch_tree, fetch_tree_payload

__all__ = [
    "fetch_tree",
    "fetch_tree_payload",
]
