"""
Generic syntax tree representation.

``ast`` nodes are converted into plain nested mappings so they can be
stripped of fields, compared and diffed without caring about
node classes. Each mapping carries a ``_type`` key with the node class name.
"""

import ast
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union

from .parser import LEADING, TRAILING

SyntaxTree = Dict[str, Any]
TreeValue = Union[SyntaxTree, List[Any], str, int, float, complex, bytes, bool, None]

TYPE_KEY = "_type"


def to_tree(node: ast.AST, source: Optional[str] = None) -> SyntaxTree:
    """
    Convert an AST node into a nested mapping.

    Args:
        node: Node to convert
        source: Source text the node was parsed from. When given, literal
            nodes also record their source slice under ``raw``.

    Returns:
        Mapping with one key per AST field, the location attributes, and any
        attached comments
    """
    result: SyntaxTree = {TYPE_KEY: type(node).__name__}

    # f-string parts have no source spelling of their own
    child_source = None if isinstance(node, ast.JoinedStr) else source
    for name, value in ast.iter_fields(node):
        result[name] = _convert(value, child_source)

    for name in node._attributes:
        if hasattr(node, name):
            result[name] = getattr(node, name)

    if source is not None and isinstance(node, ast.Constant):
        raw = ast.get_source_segment(source, node)
        if raw is not None:
            result["raw"] = raw

    for key in (LEADING, TRAILING):
        comments = getattr(node, key, None)
        if comments:
            result[key] = list(comments)

    return result


def _convert(value: Any, source: Optional[str]) -> TreeValue:
    if isinstance(value, ast.AST):
        return to_tree(value, source)
    if isinstance(value, list):
        return [_convert(item, source) for item in value]
    return value


def is_composite(value: Any) -> bool:
    """Check whether a value has children worth walking into."""
    return isinstance(value, (dict, list))


class MetaStripper:
    """
    Remove a fixed set of keys from every mapping in a tree, in place.

    Every mapping is treated the same regardless of its ``_type``; scalar
    values are left untouched.
    """

    def __init__(self, exclusions: Iterable[str]):
        self.exclusions: FrozenSet[str] = frozenset(exclusions)

    def visit(self, value: Any) -> Any:
        if isinstance(value, dict):
            self.visit_mapping(value)
        elif isinstance(value, list):
            for item in value:
                if is_composite(item):
                    self.visit(item)
        return value

    def visit_mapping(self, mapping: Dict[str, Any]) -> None:
        for key in self.exclusions:
            mapping.pop(key, None)
        for child in mapping.values():
            if is_composite(child):
                self.visit(child)


def strip_meta(tree: SyntaxTree, exclusions: Iterable[str]) -> SyntaxTree:
    """Strip the excluded keys from every node of a tree and return it."""
    return MetaStripper(exclusions).visit(tree)
