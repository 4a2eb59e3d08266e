"""
Test helper utilities for astassert tests.
"""

from .plugins import (
    CountCalls,
    DropPass,
    RejectGlobal,
    RenameName,
    append_semicolon,
    identity,
)

__all__ = [
    # Plugins
    "CountCalls",
    "DropPass",
    "RejectGlobal",
    "RenameName",
    # Transforms
    "append_semicolon",
    "identity",
]
