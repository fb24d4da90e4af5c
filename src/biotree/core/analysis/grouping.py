from __future__ import annotations

"""
Folder Grouping.

Partitions the sub-directories of a folder into buckets keyed by the
registered prefixes of a category.
"""

import logging
from typing import Dict, List, Optional

from biotree.domain.registry import NameRegistry
from biotree.infra.fs import DirectoryLister, LocalDirectoryLister

logger = logging.getLogger(__name__)


def group_folders(
        folder_path: str,
        category: str,
        registry: NameRegistry,
        lister: Optional[DirectoryLister] = None,
) -> Dict[str, List[str]]:
    """
    Group the immediate sub-directories of folder_path by category prefix.

    Every registered prefix of the category is a key, in registry order, even
    when its bucket stays empty. A directory is appended to every bucket whose
    prefix it starts with, so overlapping prefixes yield repeated entries.

    Args:
        folder_path: Directory to scan.
        category: Registry category providing the prefixes.
        registry: Name registry.
        lister: Directory listing capability (local disk by default).

    Returns:
        Dict[str, List[str]]: prefix -> matching directory names.

    Raises:
        UnknownCategoryError: If the category is not registered.
        OSError: If the folder cannot be listed.
    """
    prefixes = registry.prefixes(category)
    lister = lister or LocalDirectoryLister()

    grouped: Dict[str, List[str]] = {prefix: [] for prefix in prefixes}
    for name in lister.list_directories(folder_path):
        for prefix in prefixes:
            if name.startswith(prefix):
                grouped[prefix].append(name)

    logger.debug(f"Grouped folders in {folder_path} by {category}: {grouped}")
    return grouped
