"""
Comparison options.

A single explicit record replaces the untyped options bag: the only
recognized setting is whether comments take part in the comparison.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union


@dataclass(frozen=True)
class CompareOptions:
    """Options controlling how two sources are compared."""
    preserve_comments: bool = False

    @classmethod
    def coerce(
        cls,
        options: Optional[Union["CompareOptions", Mapping[str, Any]]] = None
    ) -> "CompareOptions":
        """
        Build options from ``None``, an existing record, or a mapping.

        Mappings may use either ``preserve_comments`` or the shorter
        ``comments`` key.

        Raises:
            TypeError: If options is of any other type
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            preserve = options.get("preserve_comments", options.get("comments", False))
            return cls(preserve_comments=bool(preserve))
        raise TypeError(
            f"Expected CompareOptions or a mapping, got {type(options).__name__}"
        )
