from __future__ import annotations

"""
Session Tree Builder.

Walks a data-collection folder laid out as user -> activity/trial -> data
file and produces a labeled tree in one of two orderings:

- 'user': user -> user number -> activity -> trial -> file
- 'activity': activity -> user -> user number -> trial -> file

Both orderings share a single traversal; the 'activity' ordering runs it
once per registered activity prefix with the activity level folded away.
Branches left without data files are pruned at every level.
"""

import logging
import os
from typing import Optional, Sequence

from biotree.core.analysis.grouping import group_folders
from biotree.domain.constants import (
    CATEGORY_ACTIVITY,
    CATEGORY_DATA_TYPE,
    CATEGORY_USER,
    DEFAULT_DATA_EXTENSION,
    ROOT_CATEGORIES,
    SEGMENT_SEPARATOR,
)
from biotree.domain.errors import InvalidRootCategoryError
from biotree.domain.registry import NameRegistry
from biotree.domain.tree_models import Tree, TreeNode
from biotree.infra.fs import DirectoryLister, LocalDirectoryLister

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(
        root_folder: str,
        root_category: str,
        registry: NameRegistry,
        lister: Optional[DirectoryLister] = None,
        data_extension: str = DEFAULT_DATA_EXTENSION,
) -> Tree:
    """
    Construct the hierarchical session tree of a data-collection folder.

    Example, for data_collection/user_01/walk_01/accel.csv:
        user:     user -> 01 -> walk -> 01 -> accel
        activity: walk -> user -> 01 -> 01 -> accel

    Args:
        root_folder: Folder containing the user directories.
        root_category: 'user' or 'activity'.
        registry: Name registry providing the prefixes of each category.
        lister: Directory listing capability (local disk by default).
        data_extension: Suffix of the data files turned into leaves.

    Returns:
        Tree: Root nodes, one per non-empty user prefix or activity prefix.

    Raises:
        InvalidRootCategoryError: If root_category is not supported.
        UnknownCategoryError: If the registry lacks a required category.
        OSError: If any folder of the hierarchy cannot be listed.
    """
    if root_category not in ROOT_CATEGORIES:
        raise InvalidRootCategoryError(root_category, ROOT_CATEGORIES)

    walker = _SessionWalker(root_folder, registry, lister or LocalDirectoryLister(), data_extension)

    if root_category == CATEGORY_USER:
        return walker.walk_users(registry.prefixes(CATEGORY_ACTIVITY), nest_activities=True)

    tree: Tree = []
    for activity_prefix in registry.prefixes(CATEGORY_ACTIVITY):
        users = walker.walk_users((activity_prefix,), nest_activities=False)
        _append_branch(tree, activity_prefix, users)
    return tree


def extract_instance_id(folder_name: str) -> str:
    """
    Return the segment following the category prefix ('user_01' -> '01').

    Names without a separator have no such segment and keep their full name.
    """
    segments = folder_name.split(SEGMENT_SEPARATOR)
    if len(segments) < 2:
        return folder_name
    return segments[1]


def extract_trial_id(folder_name: str) -> str:
    """Return the last segment of an activity folder ('walk_fast_03' -> '03')."""
    return folder_name.split(SEGMENT_SEPARATOR)[-1]

# -----------------------------------------------------------------------------
# INTERNAL TRAVERSAL
# -----------------------------------------------------------------------------

class _SessionWalker:
    """Shared traversal state for one build request."""

    def __init__(
            self,
            root_folder: str,
            registry: NameRegistry,
            lister: DirectoryLister,
            data_extension: str,
    ) -> None:
        self.root_folder = root_folder
        self.registry = registry
        self.lister = lister
        self.data_extension = data_extension

    def walk_users(self, activity_prefixes: Sequence[str], nest_activities: bool) -> Tree:
        """
        Build the user-category level of the tree.

        Args:
            activity_prefixes: Activity prefixes to keep, in output order.
            nest_activities: If True, trials hang from an activity node;
                             otherwise they hang directly from the user number.
        """
        users: Tree = []
        user_groups = group_folders(self.root_folder, CATEGORY_USER, self.registry, self.lister)

        for user_prefix, user_folders in user_groups.items():
            instances: Tree = []
            for user_folder in user_folders:
                logger.debug(f"Processing user folder: {user_folder}")
                user_path = os.path.join(self.root_folder, user_folder)
                children = self._walk_activities(user_path, activity_prefixes, nest_activities)
                _append_branch(instances, extract_instance_id(user_folder), children)
            _append_branch(users, user_prefix, instances)

        return users

    def _walk_activities(
            self,
            user_path: str,
            activity_prefixes: Sequence[str],
            nest_activities: bool,
    ) -> Tree:
        children: Tree = []
        activity_groups = group_folders(user_path, CATEGORY_ACTIVITY, self.registry, self.lister)

        for activity_prefix in activity_prefixes:
            trials: Tree = []
            for activity_folder in activity_groups.get(activity_prefix, []):
                logger.debug(f"Processing activity folder: {activity_folder}")
                trial_path = os.path.join(user_path, activity_folder)
                _append_branch(trials, extract_trial_id(activity_folder), self._collect_files(trial_path))

            if nest_activities:
                _append_branch(children, activity_prefix, trials)
            else:
                children.extend(trials)

        return children

    def _collect_files(self, trial_path: str) -> Tree:
        """Turn the qualifying data files of a trial folder into leaves."""
        leaves: Tree = []
        for file_name in self.lister.list_files(trial_path):
            if not file_name.endswith(self.data_extension):
                continue
            if not self.registry.matches(file_name, CATEGORY_DATA_TYPE):
                continue
            leaves.append(TreeNode(name=file_name[:len(file_name) - len(self.data_extension)]))

        logger.debug(f"Data files in {trial_path}: {[leaf.name for leaf in leaves]}")
        return leaves


def _append_branch(siblings: Tree, name: str, children: Tree) -> None:
    """Append a branch node unless it would be empty."""
    if children:
        siblings.append(TreeNode(name=name, children=tuple(children)))
