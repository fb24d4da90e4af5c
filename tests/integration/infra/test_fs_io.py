from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, data directory resolution and the local
directory lister and file writer.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from biotree.infra.fs import LocalDirectoryLister, LocalFileWriter, get_user_data_dir, normalize_path

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            path = get_user_data_dir()
            assert "BioTree" in path
            assert path.lower().startswith(os.path.abspath(mock_appdata).lower())


def test_get_user_data_dir_unix() -> None:
    """TC-02: Verify resolution of ~/.biotree on Unix-like systems."""
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value="/home/testuser"):
            path = get_user_data_dir()
            assert path.endswith(".biotree")


def test_normalize_path_fallback_and_expansion(tmp_path: Path) -> None:
    """TC-03: Empty input falls back; environment variables expand."""
    with patch.dict(os.environ, {"BIOTREE_TEST_DIR": str(tmp_path)}):
        assert normalize_path("", str(tmp_path)) == os.path.abspath(str(tmp_path))
        assert normalize_path("   ", str(tmp_path)) == os.path.abspath(str(tmp_path))
        expanded = normalize_path(os.path.join("$BIOTREE_TEST_DIR", "data"), "unused")
        assert expanded == os.path.join(os.path.abspath(str(tmp_path)), "data")

# -----------------------------------------------------------------------------
# LOCAL CAPABILITIES
# -----------------------------------------------------------------------------

def test_lister_separates_sorted_dirs_and_files(tmp_path: Path) -> None:
    """TC-04: Directories and regular files are listed apart, sorted."""
    (tmp_path / "walk_02").mkdir()
    (tmp_path / "walk_01").mkdir()
    (tmp_path / "gyro.csv").write_text("", encoding="utf-8")
    (tmp_path / "accel.csv").write_text("", encoding="utf-8")

    lister = LocalDirectoryLister()

    assert lister.list_directories(str(tmp_path)) == ["walk_01", "walk_02"]
    assert lister.list_files(str(tmp_path)) == ["accel.csv", "gyro.csv"]


def test_lister_errors_propagate(tmp_path: Path) -> None:
    lister = LocalDirectoryLister()
    with pytest.raises(FileNotFoundError):
        lister.list_directories(str(tmp_path / "missing"))


def test_writer_creates_directories_and_overwrites(tmp_path: Path) -> None:
    """TC-05: ensure_directory is idempotent; write_text replaces content."""
    target_dir = tmp_path / "public" / "tree_history"
    writer = LocalFileWriter()

    writer.ensure_directory(str(target_dir))
    writer.ensure_directory(str(target_dir))
    target = target_dir / "snap.md"
    writer.write_text(str(target), "first")
    writer.write_text(str(target), "second")

    assert target.read_text(encoding="utf-8") == "second"
