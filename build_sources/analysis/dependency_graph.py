"""Header dependency resolver — walks #include chains from one source file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from build_sources.analysis.include_parser import iter_includes
from build_sources.models import (
    DependencyDepthError,
    IncludeDirective,
    IncludeScope,
    MissingFileError,
    ResolvedDependencies,
    UnresolvedInclude,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


def absolute_path(path: Path) -> Path:
    """Absolute, normalized path without resolving symlinks."""
    return Path(os.path.abspath(path))


def check_readable(path: Path) -> None:
    if not path.exists():
        raise MissingFileError(f"file not found: {path}")
    if path.is_dir():
        raise MissingFileError(f"path is a directory: {path}")


class DependencyResolver:
    """Resolve the transitive header dependencies of source files.

    Quoted includes are looked up next to the including file, angle-bracket
    includes along ``search_paths`` in order. Includes that match nothing are
    skipped: they refer to system or generated headers outside the tree.
    """

    def __init__(
        self,
        search_paths: Iterable[str | Path] = (),
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.search_paths = [Path(p) for p in search_paths]
        self.max_depth = max_depth

    def resolve(self, file_path: str | Path) -> ResolvedDependencies:
        """Depth-first walk over the include graph rooted at *file_path*.

        Each file is scanned at most once per call, the root included. A
        header reached through several chains is listed once. The root is
        never listed as its own dependency, even when a header includes it
        back. Include literals are appended to their base directory, so an
        absolute literal such as ``</usr/include/x.h>`` stays under it.
        """
        root = Path(file_path)
        check_readable(root)
        root_key = absolute_path(root)

        result = ResolvedDependencies(root=root_key)
        found: dict[Path, None] = {}
        visited: set[Path] = set()
        stack: list[tuple[Path, int]] = [(root, 1)]

        while stack:
            current, depth = stack.pop()
            key = absolute_path(current)
            if key != root_key:
                found.setdefault(key, None)
            if key in visited:
                continue
            if depth > self.max_depth:
                raise DependencyDepthError(
                    f"dependency recursion too deep: {current} is {depth} "
                    f"includes below {root} (limit {self.max_depth})"
                )
            visited.add(key)

            children: list[Path] = []
            for directive in self._read_includes(current):
                target = self._locate(directive, current)
                if target is None:
                    logger.debug(
                        "%s:%d: unable to locate %s",
                        current, directive.line_number, directive.path,
                    )
                    result.unresolved.append(UnresolvedInclude(directive, current))
                    continue
                children.append(target)

            # Reversed so the first include is scanned first
            stack.extend((child, depth + 1) for child in reversed(children))

        result.dependencies = list(found)
        return result

    def _locate(self, directive: IncludeDirective, including_file: Path) -> Path | None:
        if directive.scope is IncludeScope.LOCAL:
            candidates = [Path(f"{including_file.parent}/{directive.path}")]
        else:
            candidates = [Path(f"{d}/{directive.path}") for d in self.search_paths]

        for candidate in candidates:
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def _read_includes(path: Path) -> list[IncludeDirective]:
        with path.open("r", encoding="utf-8", errors="replace") as fh:
            return list(iter_includes(fh))


def resolve_dependencies(
    file_path: str | Path,
    search_paths: Iterable[str | Path] = (),
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ResolvedDependencies:
    """Resolve one file with a throwaway resolver."""
    return DependencyResolver(search_paths, max_depth=max_depth).resolve(file_path)
