from __future__ import annotations

"""
Configuration Domain Management.

Defines the immutable runtime configuration, its defaults, the optional JSON
settings file and the loader of the name registry.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from biotree.domain.constants import (
    DEFAULT_DATA_EXTENSION,
    DEFAULT_DOCUMENT_TITLE,
    DEFAULT_ROOT_CATEGORY,
    DEFAULT_SNAPSHOT_BASE_NAME,
    HISTORY_SUBDIR,
    KNOWN_CATEGORIES,
)
from biotree.domain.errors import RegistryFormatError
from biotree.domain.registry import NameRegistry

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
SETTINGS_FILE_NAME = "biotree.json"
DEFAULT_REGISTRY_FILE = "instance_names.json"
DEFAULT_DATA_ROOT = "data_collection"
DEFAULT_PUBLIC_DIR = "public"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


# -----------------------------------------------------------------------------
# Configuration Model
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class AppConfig:
    """
    Immutable runtime configuration.

    Attributes:
        data_root: Directory holding the user/activity/trial hierarchy.
        registry_file: JSON file mapping categories to name prefixes.
        public_dir: Static-content root; snapshots go under it.
        history_subdir: Snapshot folder name inside public_dir.
        snapshot_base_name: Base name embedded in snapshot filenames.
        data_extension: Extension identifying data files.
        document_title: Top-level Markdown title.
        host: Bind address of the HTTP server.
        port: TCP port of the HTTP server.
        open_browser: Launch the default browser when serving.
        default_root_category: Ordering used when a request omits one.
        log_level: Minimum logging severity.
        log_file: Optional persistent log file.
    """
    data_root: str = DEFAULT_DATA_ROOT
    registry_file: str = DEFAULT_REGISTRY_FILE
    public_dir: str = DEFAULT_PUBLIC_DIR
    history_subdir: str = HISTORY_SUBDIR
    snapshot_base_name: str = DEFAULT_SNAPSHOT_BASE_NAME
    data_extension: str = DEFAULT_DATA_EXTENSION
    document_title: str = DEFAULT_DOCUMENT_TITLE
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    open_browser: bool = True
    default_root_category: str = DEFAULT_ROOT_CATEGORY
    log_level: str = "INFO"
    log_file: str = ""

    @property
    def history_dir(self) -> str:
        """Absolute snapshot folder; a relative public_dir is taken from the working directory."""
        return os.path.abspath(os.path.join(self.public_dir, self.history_subdir))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default configuration dictionary.

    Returns:
        Dict[str, Any]: Default values keyed by AppConfig field name.
    """
    return AppConfig().to_dict()


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_settings(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load user settings from a JSON file.

    A missing file is not an error: the caller falls back to defaults.
    A corrupted file is reported and ignored.

    Args:
        path: Settings file. Defaults to biotree.json in the working directory.

    Returns:
        Dict[str, Any]: Raw settings (possibly empty).
    """
    settings_path = path or os.path.join(os.getcwd(), SETTINGS_FILE_NAME)

    if not os.path.exists(settings_path):
        logger.debug(f"Settings file not found at {settings_path}. Using defaults.")
        return {}

    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load settings from {settings_path}: {e}. Using defaults.")
        return {}

    if not isinstance(data, dict):
        logger.warning("Corrupted settings file. Using defaults.")
        return {}

    logger.debug(f"Settings loaded from {settings_path}")
    return data


def load_name_registry(path: str) -> NameRegistry:
    """
    Read the registry of allowed instance names.

    The registry is mandatory: any failure here stops the application.

    Args:
        path: JSON file mapping category -> list of prefixes.

    Returns:
        NameRegistry: The immutable registry.

    Raises:
        OSError: If the file cannot be read.
        RegistryFormatError: If the content is not valid registry JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise RegistryFormatError(f"Registry file '{path}' is not valid JSON: {e}") from e

    registry = NameRegistry.from_mapping(raw)
    missing = [c for c in KNOWN_CATEGORIES if c not in registry]
    if missing:
        logger.warning(f"Name registry has no entry for: {', '.join(missing)}")
    logger.info(
        f"Name registry loaded from {path} "
        f"({', '.join(f'{k}: {len(v)}' for k, v in registry.categories.items())})"
    )
    return registry
