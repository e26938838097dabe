"""Include parsing and dependency resolution."""

from build_sources.analysis.dependency_graph import (
    DEFAULT_MAX_DEPTH,
    DependencyResolver,
    resolve_dependencies,
)
from build_sources.analysis.include_parser import iter_includes, parse_include

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DependencyResolver",
    "iter_includes",
    "parse_include",
    "resolve_dependencies",
]
