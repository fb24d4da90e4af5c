from __future__ import annotations

"""
Unit tests for the snapshot history writer.
"""

import os
from datetime import datetime

import pytest

from biotree.core.services.snapshot import build_snapshot_filename, save_snapshot

FIXED_NOW = datetime(2024, 11, 29, 8, 5, 3)


def test_filename_layout() -> None:
    """TC-01: Zero-padded local timestamp, base name and ordering."""
    assert build_snapshot_filename("data_collection_tree", "user", FIXED_NOW) == \
        "20241129080503_data_collection_tree_by_user.md"
    assert build_snapshot_filename("study", "activity", FIXED_NOW) == \
        "20241129080503_study_by_activity.md"


def test_save_creates_folder_and_writes_content(make_writer) -> None:
    """TC-02: The history folder is ensured before the file is written."""
    writer = make_writer()
    history = os.path.join(os.sep + "public", "tree_history")

    path = save_snapshot("# Data Collection\n", "data_collection_tree", "user", history, writer, FIXED_NOW)

    assert path == os.path.join(history, "20241129080503_data_collection_tree_by_user.md")
    assert writer.directories == [history]
    assert writer.files == {path: "# Data Collection\n"}


def test_same_second_same_ordering_overwrites(make_writer) -> None:
    writer = make_writer()

    first = save_snapshot("old", "tree", "user", "/h", writer, FIXED_NOW)
    second = save_snapshot("new", "tree", "user", "/h", writer, FIXED_NOW)

    assert first == second
    assert writer.files[first] == "new"


def test_write_failure_is_logged_and_raised(make_writer, caplog) -> None:
    """TC-03: OSError propagates after being logged."""
    writer = make_writer(PermissionError("read-only"))

    with pytest.raises(PermissionError):
        save_snapshot("x", "tree", "user", "/h", writer, FIXED_NOW)

    assert "Failed to save markdown file" in caplog.text


def test_writes_to_real_disk(tmp_path) -> None:
    """TC-04: Default writer creates nested folders and writes UTF-8."""
    history = tmp_path / "public" / "tree_history"

    path = save_snapshot("# Données\n", "tree", "activity", str(history), now=FIXED_NOW)

    assert os.path.basename(path) == "20241129080503_tree_by_activity.md"
    with open(path, "r", encoding="utf-8") as f:
        assert f.read() == "# Données\n"
