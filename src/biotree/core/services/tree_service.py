from __future__ import annotations

"""
Tree Request Orchestration.

Coordinates a single tree request:
1. Validates the requested ordering.
2. Builds the session tree from the data root.
3. Renders the Markdown outline.
4. Persists the outline in the snapshot history.

Failures never escape as exceptions: they are reported through TreeResult
with the stage that failed, so each interface decides how to surface them.
"""

import json
import logging
from datetime import datetime
from typing import Optional

from biotree.core.analysis.markdown_renderer import render_markdown
from biotree.core.analysis.tree_builder import build_tree
from biotree.core.services.snapshot import save_snapshot
from biotree.core.services.validator import validate_root_category
from biotree.domain.config import AppConfig
from biotree.domain.errors import InvalidRootCategoryError
from biotree.domain.registry import NameRegistry
from biotree.domain.result_models import (
    FAILURE_BUILD,
    FAILURE_SNAPSHOT,
    FAILURE_VALIDATION,
    TreeResult,
    create_error_result,
    create_success_result,
)
from biotree.domain.tree_models import iter_leaf_names, tree_to_json
from biotree.infra.fs import DirectoryLister, FileWriter

logger = logging.getLogger(__name__)

BUILD_ERROR_MSG = "An error occurred while generating the tree."
SNAPSHOT_ERROR_MSG = "Failed to save the Markdown file."


def generate_tree(
        root_category: str,
        cfg: AppConfig,
        registry: NameRegistry,
        *,
        lister: Optional[DirectoryLister] = None,
        writer: Optional[FileWriter] = None,
        save: bool = True,
        now: Optional[datetime] = None,
) -> TreeResult:
    """
    Execute a full tree request.

    Args:
        root_category: Requested ordering ('user' or 'activity').
        cfg: Runtime configuration (data root, history folder, naming).
        registry: Name registry.
        lister: Directory listing capability.
        writer: File writing capability.
        save: If False, skip the snapshot history.
        now: Timestamp override for the snapshot filename.

    Returns:
        TreeResult: Outcome, including the tree when it could be built.
    """
    logger.info(f"Received startingClassName: {root_category}")

    # 1) Boundary validation
    try:
        validate_root_category(root_category)
    except InvalidRootCategoryError as e:
        logger.warning(str(e))
        return create_error_result(FAILURE_VALIDATION, str(e), root_category)

    # 2) Tree construction
    logger.info(f"Resolving root folder: {cfg.data_root}")
    try:
        tree = build_tree(
            cfg.data_root,
            root_category,
            registry,
            lister=lister,
            data_extension=cfg.data_extension,
        )
    except Exception as e:
        logger.error(f"Error generating tree: {e}", exc_info=True)
        return create_error_result(FAILURE_BUILD, BUILD_ERROR_MSG, root_category)

    logger.info(f"Tree built by {root_category} with {len(iter_leaf_names(tree))} data files.")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Generated tree:\n" + json.dumps(tree_to_json(tree), indent=2))

    # 3) Rendering
    markdown = render_markdown(tree, cfg.document_title)
    logger.debug("Generated markdown tree:\n" + markdown)

    if not save:
        return create_success_result(root_category, tree, markdown)

    # 4) Snapshot persistence
    try:
        snapshot_path = save_snapshot(
            markdown,
            cfg.snapshot_base_name,
            root_category,
            cfg.history_dir,
            writer=writer,
            now=now,
        )
    except OSError:
        return create_error_result(
            FAILURE_SNAPSHOT, SNAPSHOT_ERROR_MSG, root_category, tree=tree, markdown=markdown
        )

    return create_success_result(root_category, tree, markdown, snapshot_path)
