"""
astassert - structural assertions for Python source transforms

Compare two Python sources by syntax tree instead of by text, and drive
table-based pytest suites for ``ast`` transformer plugins.
"""

from .options import CompareOptions

from .parser import (
    parse_source,
    collect_comments,
    Comment
)

from .printer import (
    print_source,
    pretty_print
)

from .tree import (
    SyntaxTree,
    to_tree,
    strip_meta
)

from .normalizer import (
    FieldExclusionSet,
    canonicalize,
    normalize
)

from .diff import (
    TreeDifference,
    tree_diff
)

from .compare import (
    DivergenceReport,
    StructuralMismatch,
    assert_source_ast_equal,
    common_prefix
)

from .plugins import (
    PluginSpec,
    apply_plugins,
    transform_with_plugins
)

from .runner import (
    TestCase,
    run_case,
    test_section,
    test_case
)

__version__ = "0.1.0"

__all__ = [
    # Options
    "CompareOptions",

    # Parsing and printing
    "parse_source",
    "collect_comments",
    "Comment",
    "print_source",
    "pretty_print",

    # Trees
    "SyntaxTree",
    "to_tree",
    "strip_meta",
    "FieldExclusionSet",
    "canonicalize",
    "normalize",
    "TreeDifference",
    "tree_diff",

    # Comparison
    "DivergenceReport",
    "StructuralMismatch",
    "assert_source_ast_equal",
    "common_prefix",

    # Plugins and test tables
    "PluginSpec",
    "apply_plugins",
    "transform_with_plugins",
    "TestCase",
    "run_case",
    "test_section",
    "test_case",
]
