"""
Unit tests for plugin-based transforms.
"""

import ast

import pytest

from astassert.parser import parse_source
from astassert.plugins import apply_plugins, load_plugin, transform_with_plugins
from tests.helpers import CountCalls, DropPass, RejectGlobal, RenameName


class TestLoadPlugin:
    """Test plugin spec handling."""

    def test_class(self):
        """Test that a class is instantiated without arguments."""
        plugin = load_plugin(RenameName)

        assert isinstance(plugin, RenameName)
        assert plugin.old == "foo"

    def test_class_with_options(self):
        """Test that options become constructor keyword arguments."""
        plugin = load_plugin((RenameName, {"old": "a", "new": "b"}))

        assert (plugin.old, plugin.new) == ("a", "b")

    def test_instance(self):
        """Test that an instance is used as is."""
        instance = RenameName("x", "y")

        assert load_plugin(instance) is instance

    @pytest.mark.parametrize("spec", [object, "RenameName", 42])
    def test_invalid_spec(self, spec):
        """Test that non-visitors are rejected."""
        with pytest.raises(TypeError):
            load_plugin(spec)


class TestApplyPlugins:
    """Test running plugins over a tree."""

    def test_plain_visitor_keeps_tree(self):
        """Test that a visitor returning None leaves the tree in place."""
        counter = CountCalls()
        tree = parse_source("f(g(1))")

        result = apply_plugins(tree, [counter])

        assert result is tree
        assert counter.calls == 2

    def test_new_nodes_get_locations(self):
        """Test that missing locations are filled in."""
        class WrapInCall(ast.NodeTransformer):
            def visit_Constant(self, node):
                return ast.Call(func=ast.Name(id="wrap", ctx=ast.Load()), args=[node], keywords=[])

        tree = apply_plugins(parse_source("x = 1"), [WrapInCall])

        assert tree.body[0].value.lineno == 1


class TestTransformWithPlugins:
    """Test the source-to-source transform wrapper."""

    def test_single_plugin(self):
        """Test renaming through a plugin class."""
        transform = transform_with_plugins([RenameName])

        assert transform("foo(1)") == "bar(1)"

    def test_plugins_run_in_order(self):
        """Test that plugins see each other's output."""
        transform = transform_with_plugins([
            (RenameName, {"old": "a", "new": "b"}),
            (RenameName, {"old": "b", "new": "c"}),
        ])

        assert transform("a + b") == "c + c"

    def test_comments_survive(self):
        """Test that comments on kept statements are printed."""
        transform = transform_with_plugins([RenameName])

        assert transform("# keep\nfoo()  # call\n") == "# keep\nbar()  # call"

    def test_statement_removal(self):
        """Test a plugin removing statements."""
        transform = transform_with_plugins([DropPass])

        assert transform("pass\nx = 1") == "x = 1"

    def test_case_options_accepted(self):
        """Test that per-case options do not break the call."""
        transform = transform_with_plugins([RenameName])

        assert transform("foo", {"unused": True}) == "bar"

    def test_plugin_errors_propagate(self):
        """Test that plugin exceptions reach the caller."""
        transform = transform_with_plugins([RejectGlobal])

        with pytest.raises(ValueError, match="global statements are not allowed"):
            transform("def f():\n    global x\n")

    def test_parse_errors_propagate(self):
        """Test that invalid input raises SyntaxError."""
        transform = transform_with_plugins([RenameName])

        with pytest.raises(SyntaxError):
            transform("foo(")
