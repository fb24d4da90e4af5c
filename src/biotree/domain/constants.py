from __future__ import annotations

"""
Domain Constants.

Centralizes the category identifiers of the name registry, the supported
tree orderings and the defaults shared by the builder, renderer and
snapshot writer.
"""

from typing import Tuple

# -----------------------------------------------------------------------------
# REGISTRY CATEGORIES
# -----------------------------------------------------------------------------

CATEGORY_USER = "user"
CATEGORY_ACTIVITY = "activity"
CATEGORY_DATA_TYPE = "data_type"

KNOWN_CATEGORIES: Tuple[str, ...] = (CATEGORY_USER, CATEGORY_ACTIVITY, CATEGORY_DATA_TYPE)

# Categories a tree may be rooted at
ROOT_CATEGORIES: Tuple[str, ...] = (CATEGORY_USER, CATEGORY_ACTIVITY)
DEFAULT_ROOT_CATEGORY = CATEGORY_USER

# -----------------------------------------------------------------------------
# NAMING AND OUTPUT DEFAULTS
# -----------------------------------------------------------------------------

SEGMENT_SEPARATOR = "_"
DEFAULT_DATA_EXTENSION = ".csv"
DEFAULT_DOCUMENT_TITLE = "Data Collection"
DEFAULT_SNAPSHOT_BASE_NAME = "data_collection_tree"
HISTORY_SUBDIR = "tree_history"
SNAPSHOT_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

MARKMAP_COLOR_FREEZE_LEVEL = 5
