from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A synthetic name registry shared by the unit tests.
3. In-memory directory lister and file writer fakes, so traversals can be
   tested without touching the disk.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from biotree.domain.config import AppConfig  # noqa: E402
from biotree.domain.registry import NameRegistry  # noqa: E402

FAKE_ROOT = os.path.abspath(os.sep + "data_collection")


# -----------------------------------------------------------------------------
# Filesystem Fakes
# -----------------------------------------------------------------------------
class InMemoryLister:
    """
    DirectoryLister over a nested dict: dict values are folders,
    anything else is a file.
    """

    def __init__(self, layout: Dict[str, Any], root: str = FAKE_ROOT) -> None:
        self.layout = layout
        self.root = root
        self.calls: List[str] = []

    def _node(self, path: str) -> Dict[str, Any]:
        self.calls.append(path)
        rel = os.path.relpath(path, self.root)
        node: Any = self.layout
        if rel != ".":
            for part in rel.split(os.sep):
                if not isinstance(node, dict) or part not in node:
                    raise FileNotFoundError(path)
                node = node[part]
        if not isinstance(node, dict):
            raise NotADirectoryError(path)
        return node

    def list_directories(self, path: str) -> List[str]:
        return sorted(k for k, v in self._node(path).items() if isinstance(v, dict))

    def list_files(self, path: str) -> List[str]:
        return sorted(k for k, v in self._node(path).items() if not isinstance(v, dict))


class InMemoryWriter:
    """FileWriter that keeps written files in a dict, optionally failing."""

    def __init__(self, fail_with: Optional[OSError] = None) -> None:
        self.directories: List[str] = []
        self.files: Dict[str, str] = {}
        self.fail_with = fail_with

    def ensure_directory(self, path: str) -> None:
        if path not in self.directories:
            self.directories.append(path)

    def write_text(self, path: str, content: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.files[path] = content


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def registry() -> NameRegistry:
    """Registry with one user prefix, two activities and two data types."""
    return NameRegistry.from_mapping({
        "user": ["user"],
        "activity": ["walk", "run"],
        "data_type": ["accel", "gyro"],
    })


@pytest.fixture
def single_session_layout() -> Dict[str, Any]:
    """user_01 with one walk and one run trial, each holding accel.csv."""
    return {
        "user_01": {
            "walk_01": {"accel.csv": ""},
            "run_01": {"accel.csv": ""},
        },
    }


@pytest.fixture
def fake_config() -> AppConfig:
    return AppConfig(
        data_root=FAKE_ROOT,
        public_dir=os.path.abspath(os.sep + "public"),
    )


def write_layout(base: Path, layout: Dict[str, Any]) -> None:
    """Materialize a nested dict layout on disk."""
    base.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        if isinstance(value, dict):
            write_layout(base / name, value)
        else:
            (base / name).write_text(str(value or "t,x\n0,0\n"), encoding="utf-8")


@pytest.fixture
def disk_session(tmp_path: Path, single_session_layout: Dict[str, Any]) -> Path:
    """The single-session layout written under tmp_path/data_collection."""
    root = tmp_path / "data_collection"
    write_layout(root, single_session_layout)
    return root


@pytest.fixture
def make_lister():
    """Factory building an InMemoryLister over a layout dict."""
    def _make(layout: Dict[str, Any]) -> InMemoryLister:
        return InMemoryLister(layout)
    return _make


@pytest.fixture
def make_writer():
    """Factory building an InMemoryWriter, failing when given an OSError."""
    def _make(fail_with: Optional[OSError] = None) -> InMemoryWriter:
        return InMemoryWriter(fail_with)
    return _make


@pytest.fixture
def layout_writer():
    return write_layout
