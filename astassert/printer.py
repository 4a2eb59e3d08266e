"""
Canonical source printer.

Printing goes through ``ast.unparse``, which already writes a fixed style:
single-quoted strings, no trailing commas, four-space indentation and
normalized spacing. Comments are not part of the ``ast`` grammar, so each
attached comment is swapped for a placeholder statement before unparsing
and the placeholder lines are rewritten into comments afterwards.

Trailing comments are written on their statement's last line. A statement
with several trailing comments prints them on that one line, two spaces
apart, which reads back as a single comment; ``parse_source`` merges inline
comments the same way so printing and re-parsing agree.
"""

import ast
import copy
import logging
import re
from typing import List

from .parser import LEADING, TRAILING, parse_source

logger = logging.getLogger(__name__)

_LEADING_MARKER = "__astassert_leading_{}__"
_TRAILING_MARKER = "__astassert_trailing_{}__"
_MARKER_LINE = re.compile(
    r"^(?P<indent>\s*)__astassert_(?P<kind>leading|trailing)_(?P<index>\d+)__$"
)


class _CommentMarker(ast.NodeTransformer):
    """Surround commented statements with placeholder statements."""

    def __init__(self):
        self.comments: List[str] = []

    def _marker(self, template: str, text: str) -> ast.Expr:
        self.comments.append(text)
        name = ast.Name(id=template.format(len(self.comments) - 1), ctx=ast.Load())
        return ast.Expr(value=name)

    def generic_visit(self, node):
        super().generic_visit(node)

        if isinstance(node, ast.Module):
            node.body.extend(
                self._marker(_LEADING_MARKER, text)
                for text in getattr(node, TRAILING, None) or []
            )
            return node

        if not isinstance(node, ast.stmt):
            return node

        leading = [self._marker(_LEADING_MARKER, text)
                   for text in getattr(node, LEADING, None) or []]
        trailing = [self._marker(_TRAILING_MARKER, text)
                    for text in getattr(node, TRAILING, None) or []]
        if not leading and not trailing:
            return node
        return leading + [node] + trailing


def _render_markers(code: str, comments: List[str]) -> str:
    lines: List[str] = []
    for line in code.splitlines():
        match = _MARKER_LINE.match(line)
        if match is None:
            lines.append(line)
            continue

        text = comments[int(match.group("index"))]
        if match.group("kind") == "trailing" and lines:
            lines[-1] = f"{lines[-1]}  {text}"
        else:
            lines.append(match.group("indent") + text)
    return "\n".join(lines)


def print_source(tree: ast.AST, comments: bool = True) -> str:
    """
    Print a syntax tree as canonical source text.

    Args:
        tree: Tree to print, usually a module from ``parse_source``
        comments: Whether attached comments are written out

    Returns:
        Source text in the canonical style. The tree is not modified.
    """
    if not comments:
        return ast.unparse(tree)

    marker = _CommentMarker()
    marked = marker.visit(copy.deepcopy(tree))
    if not marker.comments:
        return ast.unparse(marked)
    return _render_markers(ast.unparse(marked), marker.comments)


def pretty_print(source: str) -> str:
    """Parse once and print with comments, for display only."""
    return print_source(parse_source(source), comments=True).strip()
