"""
Structural comparison of two Python sources.

The comparison itself is plain tree equality on normalized trees. Most of
this module is about explaining a failure: both sources are pretty-printed
for display, the point where the two renderings start to differ is located,
and the tree diff is attached.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from .diff import TreeDifference, assert_trees_equal, format_diff, tree_diff
from .normalizer import normalize
from .options import CompareOptions
from .printer import pretty_print
from .tree import SyntaxTree

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 60


def common_prefix(left: str, right: str) -> str:
    """Return the longest literal prefix shared by two strings."""
    for index, (left_char, right_char) in enumerate(zip(left, right)):
        if left_char != right_char:
            return left[:index]
    return left[:min(len(left), len(right))]


@dataclass
class DivergenceReport:
    """Human readable explanation of why two sources differ."""
    expected: str
    actual: str
    common_prefix: str
    expected_excerpt: str
    actual_excerpt: str
    differences: List[TreeDifference] = field(default_factory=list)
    excerpt_length: int = EXCERPT_LENGTH

    @classmethod
    def build(
        cls,
        expected_source: str,
        actual_source: str,
        expected_tree: SyntaxTree,
        actual_tree: SyntaxTree,
        excerpt_length: int = EXCERPT_LENGTH,
    ) -> "DivergenceReport":
        """Render both sources and locate their first difference."""
        expected = pretty_print(expected_source)
        actual = pretty_print(actual_source)
        prefix = common_prefix(expected, actual)
        start = len(prefix)

        return cls(
            expected=expected,
            actual=actual,
            common_prefix=prefix,
            expected_excerpt=expected[start:start + excerpt_length],
            actual_excerpt=actual[start:start + excerpt_length],
            differences=tree_diff(actual_tree, expected_tree),
            excerpt_length=excerpt_length,
        )

    @property
    def diff(self) -> str:
        return format_diff(self.differences)

    def render(self) -> str:
        return (
            "Syntax tree assertion failed for the following code:\n"
            "\n"
            f"Expected output: <<<{self.expected}>>>\n"
            "\n"
            f"Actual output: <<<{self.actual}>>>\n"
            "\n"
            f"First common string: <<<{self.common_prefix}>>>\n"
            "\n"
            f"The first difference is ({self.excerpt_length} chars max):\n"
            "\n"
            f"Expected : <<<{self.expected_excerpt}>>>\n"
            "\n"
            f"Actual   : <<<{self.actual_excerpt}>>>\n"
            "\n"
            "AST diff:\n"
            "====\n"
            f"{self.diff}\n"
            "====\n"
        )


class StructuralMismatch(AssertionError):
    """Raised when two sources normalize to different syntax trees."""

    def __init__(self, report: DivergenceReport):
        super().__init__(report.render())
        self.report = report


def assert_source_ast_equal(
    expected: str,
    actual: str,
    options: Optional[Union[CompareOptions, Mapping[str, Any]]] = None,
) -> None:
    """
    Assert that two sources have the same syntax tree after normalization.

    Args:
        expected: Expected source text
        actual: Actual source text, usually a transform's output
        options: Comparison options; comments are ignored unless
            ``preserve_comments`` (or ``comments`` in a mapping) is set

    Raises:
        SyntaxError: If either source does not parse
        StructuralMismatch: If the normalized trees differ. The original
            comparison failure is chained as the cause and its traceback
            is kept.
    """
    options = CompareOptions.coerce(options)
    expected_tree = normalize(expected, options)
    actual_tree = normalize(actual, options)

    try:
        assert_trees_equal(actual_tree, expected_tree)
    except AssertionError as error:
        report = DivergenceReport.build(expected, actual, expected_tree, actual_tree)
        mismatch = StructuralMismatch(report)
        logger.error(str(mismatch))
        raise mismatch.with_traceback(error.__traceback__) from error
