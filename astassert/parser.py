"""
Source parser with comment recovery.

``ast.parse`` discards comments, so they are recovered from the token stream
and attached to the statements they belong to. Comments are stored on the
nodes themselves as ``leading_comments`` / ``trailing_comments`` lists, which
keeps them attached when a transformer moves or copies a statement.
"""

import ast
import io
import logging
import tokenize
from dataclasses import dataclass
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)

LEADING = "leading_comments"
TRAILING = "trailing_comments"

_LAYOUT_TOKENS = frozenset({
    tokenize.NL,
    tokenize.NEWLINE,
    tokenize.INDENT,
    tokenize.DEDENT,
    tokenize.ENDMARKER,
    tokenize.ENCODING,
    tokenize.COMMENT,
})


@dataclass
class Comment:
    """A comment recovered from the token stream."""
    text: str
    line: int
    inline: bool = False  # shares its line with code


def parse_source(source: str, filename: str = "<unknown>") -> ast.Module:
    """
    Parse Python source into a module with comments attached.

    Args:
        source: Python source text
        filename: Name used in syntax error messages

    Returns:
        The parsed module. Statements carry ``leading_comments`` and
        ``trailing_comments`` attributes when comments belong to them;
        comments after the last statement land on the module's
        ``trailing_comments``.

    Raises:
        SyntaxError: If the source is not valid Python. The error is not
            wrapped or recovered from.
    """
    tree = ast.parse(source, filename=filename)
    comments = collect_comments(source)
    if comments:
        attach_comments(tree, comments)
    logger.debug("Parsed %d statements and %d comments from %s",
                 len(tree.body), len(comments), filename)
    return tree


def collect_comments(source: str) -> List[Comment]:
    """Collect every comment token in source order."""
    comments: List[Comment] = []
    last_code_line = 0

    tokens = tokenize.generate_tokens(io.StringIO(source).readline)
    for token in tokens:
        if token.type == tokenize.COMMENT:
            comments.append(Comment(
                text=token.string.rstrip(),
                line=token.start[0],
                inline=token.start[0] == last_code_line,
            ))
        elif token.type not in _LAYOUT_TOKENS:
            last_code_line = token.end[0]

    return comments


def iter_statements(node: ast.AST) -> Iterator[ast.stmt]:
    """Yield nested statements in source order, parents before children."""
    for _, value in ast.iter_fields(node):
        if isinstance(value, list):
            for item in value:
                if isinstance(item, ast.AST):
                    if isinstance(item, ast.stmt):
                        yield item
                    yield from iter_statements(item)
        elif isinstance(value, ast.AST):
            yield from iter_statements(value)


def attach_comments(tree: ast.Module, comments: List[Comment]) -> None:
    """
    Attach comments to the statements of a parsed module.

    An inline comment trails the innermost statement spanning its line;
    several inline comments on one statement are merged into a single
    trailing comment, the way they print on one line. When that statement
    is compound (the comment sits on a header such as ``if x:``,
    ``else:``, ``except E:`` or a decorator), the comment leads the next
    statement after its line instead, which keeps it in its own clause.
    A comment on its own line leads the next statement as well; comments
    after the last statement trail the module.
    """
    statements = list(iter_statements(tree))

    for comment in comments:
        if comment.inline:
            owner = _innermost_statement(statements, comment.line)
            if owner is not None and not _has_block(owner):
                _add_trailing(owner, comment.text)
                continue

        following = _next_statement(statements, comment.line)
        if following is None:
            _add_comment(tree, TRAILING, comment.text)
        else:
            _add_comment(following, LEADING, comment.text)


def _innermost_statement(statements: List[ast.stmt], line: int) -> Optional[ast.stmt]:
    owner = None
    for statement in statements:
        end = getattr(statement, "end_lineno", None) or statement.lineno
        if statement.lineno <= line <= end:
            owner = statement
    return owner


def _next_statement(statements: List[ast.stmt], line: int) -> Optional[ast.stmt]:
    for statement in statements:
        if statement.lineno > line:
            return statement
    return None


def _has_block(statement: ast.stmt) -> bool:
    """Check whether a statement holds nested statements."""
    # match statements keep their blocks on the cases
    if getattr(statement, "cases", None):
        return True
    return any(isinstance(child, ast.stmt) for child in ast.iter_child_nodes(statement))


def _add_trailing(statement: ast.stmt, text: str) -> None:
    existing = getattr(statement, TRAILING, None)
    if existing:
        existing[-1] = f"{existing[-1]}  {text}"
    else:
        _add_comment(statement, TRAILING, text)


def _add_comment(node: ast.AST, key: str, text: str) -> None:
    existing = getattr(node, key, None)
    if existing is None:
        existing = []
        setattr(node, key, existing)
    existing.append(text)
