"""
Transform functions built from AST plugins.

A plugin is an ``ast.NodeVisitor`` (usually an ``ast.NodeTransformer``)
given as a class, an instance, or a ``(class, options)`` pair whose options
are passed to the constructor as keyword arguments.
"""

import ast
import logging
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple, Type, Union

from .parser import parse_source
from .printer import print_source

logger = logging.getLogger(__name__)

PluginSpec = Union[
    Type[ast.NodeVisitor],
    ast.NodeVisitor,
    Tuple[Type[ast.NodeVisitor], Mapping[str, Any]],
]
Transform = Callable[..., str]


def load_plugin(spec: PluginSpec) -> ast.NodeVisitor:
    """
    Instantiate a plugin from its spec.

    Raises:
        TypeError: If the spec is not a visitor class, instance or pair
    """
    if isinstance(spec, tuple):
        plugin_class, options = spec
        return plugin_class(**dict(options))
    if isinstance(spec, type) and issubclass(spec, ast.NodeVisitor):
        return spec()
    if isinstance(spec, ast.NodeVisitor):
        return spec
    raise TypeError(f"Not an AST plugin: {spec!r}")


def apply_plugins(tree: ast.Module, plugins: Sequence[PluginSpec]) -> ast.Module:
    """Run each plugin over the tree in order."""
    for spec in plugins:
        plugin = load_plugin(spec)
        logger.debug("Applying plugin %s", type(plugin).__name__)
        result = plugin.visit(tree)
        # plain visitors return None and work in place
        if result is not None:
            tree = result
    return ast.fix_missing_locations(tree)


def transform_with_plugins(plugins: Sequence[PluginSpec]) -> Transform:
    """
    Wrap a fixed plugin list into a source-to-source transform.

    The returned callable takes ``(source, options=None)``; per-case options
    are accepted for signature compatibility with hand-written transforms and
    are not passed to the plugins.
    """
    plugins = list(plugins)

    def transform(source: str, options: Optional[Mapping[str, Any]] = None) -> str:
        tree = apply_plugins(parse_source(source), plugins)
        return print_source(tree, comments=True)

    return transform
