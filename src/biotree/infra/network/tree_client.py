from __future__ import annotations

import logging
from typing import Any, Dict

import requests

from biotree.domain.constants import DEFAULT_ROOT_CATEGORY
from biotree.domain.errors import TreeFetchError
from biotree.domain.tree_models import Tree, tree_from_json
from biotree.infra.network.common import DEFAULT_SERVER_URL, DEFAULT_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)

TREE_ENDPOINT = "/get-tree"


def fetch_tree_payload(
        root_category: str = DEFAULT_ROOT_CATEGORY,
        base_url: str = DEFAULT_SERVER_URL,
        timeout: float = DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    """
    Request the session tree from a running server.

    Returns:
        Dict[str, Any]: The decoded {error_msg, tree} envelope of a 200 response.

    Raises:
        TreeFetchError: On transport failures, non-200 responses or malformed bodies.
            The server's error_msg is used as message when available.
    """
    url = base_url.rstrip("/") + TREE_ENDPOINT
    headers = {"User-Agent": USER_AGENT}
    logger.info(f"Fetching directory tree for startingClassName: {root_category}")

    try:
        response = requests.get(
            url,
            params={"startingClassName": root_category},
            headers=headers,
            timeout=timeout,
        )
    except requests.exceptions.Timeout:
        raise TreeFetchError(f"Request to {url} timed out after {timeout}s.") from None
    except requests.exceptions.RequestException as e:
        raise TreeFetchError(f"Failed to reach the server at {url}: {e}") from e

    try:
        payload = response.json()
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        raise TreeFetchError(
            f"Malformed response from server (HTTP {response.status_code}).",
            status_code=response.status_code,
        )

    if response.status_code != 200:
        message = payload.get("error_msg") or f"Failed to fetch tree: HTTP {response.status_code}"
        logger.error(f"Server rejected the tree request: {message}")
        raise TreeFetchError(message, status_code=response.status_code)

    logger.debug(f"Directory tree received ({len(response.content) / 1024:.1f} KB).")
    return payload


def fetch_tree(
        root_category: str = DEFAULT_ROOT_CATEGORY,
        base_url: str = DEFAULT_SERVER_URL,
        timeout: float = DEFAULT_TIMEOUT,
) -> Tree:
    """Request the session tree and rebuild it as TreeNode objects."""
    payload = fetch_tree_payload(root_category, base_url, timeout)
    return tree_from_json(payload.get("tree") or [])
