from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, the application data directory and the two
filesystem capabilities used by the core: listing a directory and writing a
text file. The core only depends on the DirectoryLister and FileWriter
protocols so traversals can run against in-memory fakes.
"""

import logging
import os
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "BioTree"
UNIX_APP_DIR_NAME = ".biotree"

# -----------------------------------------------------------------------------
# CAPABILITY PROTOCOLS
# -----------------------------------------------------------------------------

class DirectoryLister(Protocol):
    """Read-only view over a directory hierarchy."""

    def list_directories(self, path: str) -> List[str]:
        """Names of the immediate child directories of path, sorted."""
        ...

    def list_files(self, path: str) -> List[str]:
        """Names of the immediate regular files of path, sorted."""
        ...


class FileWriter(Protocol):
    """Write access used to persist snapshots."""

    def ensure_directory(self, path: str) -> None:
        ...

    def write_text(self, path: str, content: str) -> None:
        ...

# -----------------------------------------------------------------------------
# LOCAL IMPLEMENTATIONS
# -----------------------------------------------------------------------------

class LocalDirectoryLister:
    """
    DirectoryLister backed by os.scandir.

    Errors (missing directory, permission denied) propagate to the caller.
    """

    def list_directories(self, path: str) -> List[str]:
        with os.scandir(path) as it:
            return sorted(entry.name for entry in it if entry.is_dir())

    def list_files(self, path: str) -> List[str]:
        with os.scandir(path) as it:
            return sorted(entry.name for entry in it if entry.is_file())


class LocalFileWriter:
    """FileWriter writing UTF-8 text to the local disk."""

    def ensure_directory(self, path: str) -> None:
        if not os.path.isdir(path):
            os.makedirs(path, exist_ok=True)
            logger.info(f"Created directory: {path}")

    def write_text(self, path: str, content: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/BioTree
    - Linux/Mac: ~/.biotree

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use when the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)
