"""
Source normalization for structural comparison.

Normalizing runs a source through parse, canonical print and parse again,
then strips the fields that carry no meaning for a comparison. Both sides of
a comparison go through the identical pipeline, so anything the printer
settles (quotes, trailing commas, layout, where a header comment lives) can
no longer make two trees differ.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Mapping, Optional, Union

from .options import CompareOptions
from .parser import LEADING, TRAILING, parse_source
from .printer import print_source
from .tree import SyntaxTree, strip_meta, to_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldExclusionSet:
    """Field names stripped from normalized trees."""
    always: FrozenSet[str] = field(default_factory=lambda: frozenset({
        # position spans
        "lineno",
        "col_offset",
        "end_lineno",
        "end_col_offset",
        # literal spelling
        "raw",
        "kind",
    }))
    comments: FrozenSet[str] = frozenset({LEADING, TRAILING})

    def for_options(self, options: CompareOptions) -> FrozenSet[str]:
        """Return the names to strip under the given options."""
        if options.preserve_comments:
            return self.always
        return self.always | self.comments


DEFAULT_EXCLUSIONS = FieldExclusionSet()


def canonicalize(source: str) -> str:
    """Parse source and print it back in the canonical style, comments kept."""
    return print_source(parse_source(source), comments=True)


def normalize(
    source: str,
    options: Optional[Union[CompareOptions, Mapping[str, Any]]] = None,
    exclusions: FieldExclusionSet = DEFAULT_EXCLUSIONS,
) -> SyntaxTree:
    """
    Turn source text into a comparison-ready tree.

    Args:
        source: Python source text; an empty string yields an empty module
        options: Comparison options, see ``CompareOptions``
        exclusions: Field names to strip

    Returns:
        The normalized module as a nested mapping

    Raises:
        SyntaxError: If the source does not parse
    """
    options = CompareOptions.coerce(options)

    canonical = canonicalize(source)
    logger.debug("Canonical source:\n%s", canonical)

    tree = to_tree(parse_source(canonical), canonical)
    return strip_meta(tree, exclusions.for_options(options))
