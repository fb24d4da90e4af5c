from __future__ import annotations

"""
Unit tests for the tree request result envelope.
"""

from biotree.domain.result_models import (
    FAILURE_SNAPSHOT,
    FAILURE_VALIDATION,
    create_error_result,
    create_success_result,
)
from biotree.domain.tree_models import TreeNode


def test_success_payload() -> None:
    result = create_success_result("user", [TreeNode("user", (TreeNode("01"),))], "# Data Collection\n")

    assert result.ok is True
    assert result.to_payload() == {
        "error_msg": None,
        "tree": [{"name": "user", "children": [{"name": "01"}]}],
    }


def test_empty_tree_is_serialized_as_list() -> None:
    assert create_success_result("activity", [], "").to_payload()["tree"] == []


def test_validation_error_has_null_tree() -> None:
    result = create_error_result(FAILURE_VALIDATION, "bad ordering", "foo")

    assert result.ok is False
    assert result.to_payload() == {"error_msg": "bad ordering", "tree": None}


def test_snapshot_error_keeps_tree() -> None:
    result = create_error_result(FAILURE_SNAPSHOT, "Failed to save the Markdown file.", "user",
                                 tree=[TreeNode("user")], markdown="# Data Collection\n## User\n")

    assert result.to_payload()["tree"] == [{"name": "user"}]
    assert result.markdown.endswith("## User\n")
