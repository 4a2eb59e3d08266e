"""
Unit tests for the structural tree diff.
"""

import pytest

from astassert.diff import (
    ADDED,
    CHANGED,
    REMOVED,
    TreeDifference,
    assert_trees_equal,
    format_diff,
    summarize,
    tree_diff,
)
from astassert.normalizer import normalize


class TestTreeDiff:
    """Test listing differences between trees."""

    def test_identical_trees(self):
        """Test that equal trees have no differences."""
        assert tree_diff(normalize("x = 1"), normalize("x = 1")) == []

    def test_changed_value(self):
        """Test a changed scalar value."""
        differences = tree_diff(normalize("x = 1"), normalize("x = 2"))

        assert differences == [TreeDifference("root.body[0].value.value", CHANGED, 1, 2)]

    def test_changed_node_type(self):
        """Test that a different node type is one change."""
        differences = tree_diff(normalize("x = 1"), normalize("x = y"))

        assert len(differences) == 1
        assert differences[0].path == "root.body[0].value"
        assert differences[0].kind == CHANGED

    def test_added_and_removed_list_items(self):
        """Test list length differences."""
        old = normalize("x = 1")
        new = normalize("x = 1\ny = 2")

        assert [d.kind for d in tree_diff(old, new)] == [ADDED]
        assert [d.kind for d in tree_diff(new, old)] == [REMOVED]
        assert tree_diff(old, new)[0].path == "root.body[1]"

    def test_added_and_removed_keys(self):
        """Test mapping key differences."""
        old = {"_type": "Expr", "a": 1}
        new = {"_type": "Expr", "b": 2}

        differences = tree_diff(old, new)

        assert differences == [
            TreeDifference("root.a", REMOVED, old=1),
            TreeDifference("root.b", ADDED, new=2),
        ]

    def test_scalar_types_are_strict(self):
        """Test that True and 1 are different literals."""
        differences = tree_diff(normalize("x = True"), normalize("x = 1"))

        assert differences == [TreeDifference("root.body[0].value.value", CHANGED, True, 1)]

    def test_int_and_float_differ(self):
        """Test that 1 and 1.0 are different literals."""
        assert tree_diff(normalize("x = 1"), normalize("x = 1.0"))


class TestFormatting:
    """Test rendering of differences."""

    def test_summarize(self):
        """Test one-line summaries of values."""
        assert summarize({"_type": "Name"}) == "<Name>"
        assert summarize({"other": 1}) == "<mapping>"
        assert summarize([1, 2]) == "[2 items]"
        assert summarize("x") == "'x'"

    def test_format_lines(self):
        """Test one line per difference with a sign."""
        differences = [
            TreeDifference("root.a", REMOVED, old=1),
            TreeDifference("root.b", ADDED, new={"_type": "Name"}),
            TreeDifference("root.c", CHANGED, "x", "y"),
        ]

        assert format_diff(differences) == (
            "- root.a: 1\n"
            "+ root.b: <Name>\n"
            "~ root.c: 'x' -> 'y'"
        )

    def test_format_empty(self):
        """Test rendering no differences."""
        assert format_diff([]) == "(no structural differences)"


class TestAssertTreesEqual:
    """Test the strict equality assertion."""

    def test_equal_passes(self):
        """Test equal trees."""
        assert_trees_equal(normalize("f(a)"), normalize("f( a, )"))

    def test_unequal_names_first_path(self):
        """Test that the failure names the first differing path."""
        with pytest.raises(AssertionError, match=r"root\.body\[0\]\.value\.value"):
            assert_trees_equal(normalize("x = 1"), normalize("x = 2"))
