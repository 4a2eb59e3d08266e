"""
Declarative test tables for source transforms.

A test table maps case names to cases::

    CASES = {
        "adds semicolon": {"input": "x = 1", "output": "x = 1;"},
        "rejects bad input": {"input": "x = (", "throws": "was never closed"},
    }

    test_semicolons = test_section(CASES, transform)
    TestRenamePlugin = test_case("rename plugin", [RenamePlugin], CASES)

``test_section`` returns a pytest test function parametrized over the table
and ``test_case`` returns a pytest test class grouping one. Assign them to a
``test_*`` or ``Test*`` name in a test module for pytest to collect them.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

import pytest

from .compare import assert_source_ast_equal
from .options import CompareOptions
from .plugins import PluginSpec, transform_with_plugins

logger = logging.getLogger(__name__)

Throws = Union[bool, str, None]
Options = Optional[Union[CompareOptions, Mapping[str, Any]]]


@dataclass(frozen=True)
class TestCase:
    """One named entry of a test table."""
    __test__ = False

    name: str
    input: str
    output: Optional[str] = None
    throws: Throws = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.throws is not None and not isinstance(self.throws, (bool, str)):
            raise ValueError(
                f"Test case {self.name!r}: 'throws' must be a bool or a string, "
                f"got {type(self.throws).__name__}"
            )
        if self.throws is None and self.output is None:
            raise ValueError(
                f"Test case {self.name!r} needs either 'output' or 'throws'"
            )

    @classmethod
    def from_entry(cls, name: str, entry: Union["TestCase", Mapping[str, Any]]) -> "TestCase":
        """Build a case from a table entry."""
        if isinstance(entry, cls):
            return entry
        return cls(
            name=name,
            input=entry["input"],
            output=entry.get("output"),
            throws=entry.get("throws"),
            options=entry.get("options") or {},
        )


def load_table(table: Mapping[str, Union[TestCase, Mapping[str, Any]]]) -> List[TestCase]:
    """Convert a test table into cases, keeping the table's order."""
    return [TestCase.from_entry(name, entry) for name, entry in table.items()]


def run_case(case: TestCase, transform: Callable[..., str], options: Options = None) -> None:
    """
    Run one case against a transform.

    The ``throws`` directive is checked first: ``True`` expects any
    exception, a string expects an exception whose message contains it, and
    ``False`` only requires the transform not to raise. Without a directive
    the transform's result must match ``case.output`` structurally.
    """
    logger.debug("Running case %r", case.name)

    if case.throws is True:
        with pytest.raises(Exception):
            transform(case.input, case.options)
    elif isinstance(case.throws, str):
        with pytest.raises(Exception, match=re.escape(case.throws)):
            transform(case.input, case.options)
    elif case.throws is False:
        transform(case.input, case.options)
    else:
        assert_source_ast_equal(case.output, transform(case.input, case.options), options)


def _parametrize(cases: Sequence[TestCase]):
    return pytest.mark.parametrize("case", cases, ids=[case.name for case in cases])


def test_section(
    table: Mapping[str, Union[TestCase, Mapping[str, Any]]],
    transform: Callable[..., str],
    options: Options = None,
) -> Callable[[TestCase], None]:
    """
    Build a pytest test function running every case of a table.

    Args:
        table: Mapping of case names to cases
        transform: Callable taking ``(source, case_options)`` and returning
            the transformed source
        options: Comparison options shared by all cases

    Returns:
        A test function parametrized with one test per case
    """
    cases = load_table(table)

    @_parametrize(cases)
    def test_transform(case: TestCase) -> None:
        run_case(case, transform, options)

    return test_transform


def test_case(
    name: str,
    plugins: Sequence[PluginSpec],
    table: Mapping[str, Union[TestCase, Mapping[str, Any]]],
    options: Options = None,
) -> type:
    """
    Build a pytest test class running a table through a plugin list.

    Args:
        name: Name of the group, used as the class docstring and name
        plugins: Plugins applied in order, see ``transform_with_plugins``
        table: Mapping of case names to cases
        options: Comparison options shared by all cases

    Returns:
        A test class with one parametrized ``test_transform`` method
    """
    cases = load_table(table)
    transform = transform_with_plugins(plugins)

    class Group:
        @_parametrize(cases)
        def test_transform(self, case: TestCase) -> None:
            run_case(case, transform, options)

    Group.__name__ = Group.__qualname__ = _group_name(name)
    Group.__doc__ = name
    return Group


def _group_name(name: str) -> str:
    words = re.findall(r"[A-Za-z0-9]+", name)
    return "Test" + "".join(word[:1].upper() + word[1:] for word in words)


# keep pytest from collecting the factories themselves when imported
test_section.__test__ = False
test_case.__test__ = False
