from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr), and file system side effects (snapshots).
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "biotree" / "main.py"


def run_cli(args: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH to ensure the package
    is resolvable without being installed in site-packages.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def lab(tmp_path: Path, layout_writer) -> Path:
    """
    Create a small data collection with its registry.

    Structure:
    /data_collection
      /user_01
        /walk_01  accel.csv gyro.csv
        /run_01   accel.csv
      /user_02
        /walk_01  notes.txt
    instance_names.json
    """
    layout_writer(tmp_path / "data_collection", {
        "user_01": {
            "walk_01": {"accel.csv": "", "gyro.csv": ""},
            "run_01": {"accel.csv": ""},
        },
        "user_02": {"walk_01": {"notes.txt": ""}},
    })
    (tmp_path / "instance_names.json").write_text(json.dumps({
        "user": ["user"],
        "activity": ["walk", "run"],
        "data_type": ["accel", "gyro"],
    }), encoding="utf-8")
    return tmp_path


def test_cli_help() -> None:
    """TC-01: Verify that the help command runs without errors."""
    result = run_cli(["--help"])
    assert result.returncode == 0
    assert "serve" in result.stdout
    assert "build" in result.stdout


def test_build_json_end_to_end(lab: Path) -> None:
    """TC-02: Full run from disk to JSON envelope and snapshot file."""
    result = run_cli([
        "--registry", "instance_names.json",
        "--data-root", "data_collection",
        "--public-dir", "public",
        "build", "--json",
    ], cwd=lab)

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["error_msg"] is None
    user_number = payload["tree"][0]["children"]
    assert [u["name"] for u in user_number] == ["01"]
    walk = user_number[0]["children"][0]
    assert walk == {"name": "walk", "children": [
        {"name": "01", "children": [{"name": "accel"}, {"name": "gyro"}]},
    ]}

    history = lab / "public" / "tree_history"
    snapshots = list(history.iterdir())
    assert len(snapshots) == 1
    assert snapshots[0].name.endswith("_data_collection_tree_by_user.md")
    assert snapshots[0].read_text(encoding="utf-8").startswith("# Data Collection\n## User\n")


def test_build_markdown_by_activity(lab: Path) -> None:
    result = run_cli(["build", "--by", "activity", "--no-snapshot"], cwd=lab)

    assert result.returncode == 0, result.stderr
    assert result.stdout.startswith("# Data Collection\n## Walk\n- user\n  - 01\n    - 01\n")
    assert not (lab / "public").exists()


def test_missing_registry_exit_code(tmp_path: Path) -> None:
    """TC-03: A missing registry is a setup error (exit 2)."""
    result = run_cli(["--registry", str(tmp_path / "absent.json"), "build"], cwd=tmp_path)

    assert result.returncode == 2
    assert "Cannot load name registry" in result.stderr


def test_invalid_subcommand_exit_code() -> None:
    result = run_cli(["draw"])
    assert result.returncode == 2
