"""
Structural diff of two generic syntax trees.

The same walk backs the strict equality check and the failure report; it
never raises on well-formed trees.
"""

from dataclasses import dataclass
from typing import Any, List

from .tree import TYPE_KEY

ADDED = "added"
REMOVED = "removed"
CHANGED = "changed"

_SIGNS = {ADDED: "+", REMOVED: "-", CHANGED: "~"}


@dataclass
class TreeDifference:
    """One difference between two trees, located by a dotted path."""
    path: str
    kind: str
    old: Any = None
    new: Any = None

    def __str__(self) -> str:
        sign = _SIGNS[self.kind]
        if self.kind == ADDED:
            return f"{sign} {self.path}: {summarize(self.new)}"
        if self.kind == REMOVED:
            return f"{sign} {self.path}: {summarize(self.old)}"
        return f"{sign} {self.path}: {summarize(self.old)} -> {summarize(self.new)}"


def summarize(value: Any) -> str:
    """Short one-line description of a tree value."""
    if isinstance(value, dict):
        return f"<{value.get(TYPE_KEY, 'mapping')}>"
    if isinstance(value, list):
        return f"[{len(value)} items]"
    return repr(value)


def tree_diff(old: Any, new: Any, path: str = "root") -> List[TreeDifference]:
    """
    List the differences that turn ``old`` into ``new``.

    Mappings are compared key by key, lists index by index. Nodes of different
    types are reported as a single change instead of field by field.
    """
    differences: List[TreeDifference] = []
    _compare(old, new, path, differences)
    return differences


def _compare(old: Any, new: Any, path: str, differences: List[TreeDifference]) -> None:
    if isinstance(old, dict) and isinstance(new, dict):
        if old.get(TYPE_KEY) != new.get(TYPE_KEY):
            differences.append(TreeDifference(path, CHANGED, old, new))
            return
        for key in old:
            if key not in new:
                differences.append(TreeDifference(f"{path}.{key}", REMOVED, old=old[key]))
            else:
                _compare(old[key], new[key], f"{path}.{key}", differences)
        for key in new:
            if key not in old:
                differences.append(TreeDifference(f"{path}.{key}", ADDED, new=new[key]))

    elif isinstance(old, list) and isinstance(new, list):
        for index, (old_item, new_item) in enumerate(zip(old, new)):
            _compare(old_item, new_item, f"{path}[{index}]", differences)
        for index in range(len(new), len(old)):
            differences.append(TreeDifference(f"{path}[{index}]", REMOVED, old=old[index]))
        for index in range(len(old), len(new)):
            differences.append(TreeDifference(f"{path}[{index}]", ADDED, new=new[index]))

    elif type(old) is not type(new) or old != new:
        differences.append(TreeDifference(path, CHANGED, old, new))


def format_diff(differences: List[TreeDifference]) -> str:
    """Render differences one per line."""
    if not differences:
        return "(no structural differences)"
    return "\n".join(str(difference) for difference in differences)


def assert_trees_equal(actual: Any, expected: Any) -> None:
    """
    Assert strict structural equality of two trees.

    Scalars must match in type as well as value, so ``True`` and ``1`` or
    ``1`` and ``1.0`` are different literals.

    Raises:
        AssertionError: Naming the first differing path
    """
    differences = tree_diff(actual, expected)
    if differences:
        raise AssertionError(
            f"Syntax trees differ at {differences[0].path} "
            f"({len(differences)} difference(s))"
        )
