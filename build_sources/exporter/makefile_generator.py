"""Render discovered sources as make rules."""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Callable, Iterable, TextIO

from build_sources.analysis.dependency_graph import (
    DEFAULT_MAX_DEPTH,
    DependencyResolver,
    absolute_path,
)
from build_sources.models import ObjectPathError, SourceFile
from build_sources.scanner.language_map import source_kind

CC_RECIPE = "$(CC) $(CFLAGS) -c $< -o $@"
CXX_RECIPE = "$(CXX) $(CFLAGS) $(CXXFLAGS) -c $< -o $@"

ProgressCallback = Callable[[str, int, int], None]


def object_path(path: str | PurePath) -> PurePath:
    """Swap a recognized source extension for ``.o``."""
    path = PurePath(path)
    if source_kind(path) is None:
        raise ObjectPathError(f"cannot derive object path for {path}")
    return path.with_suffix(".o")


def _variable(name: str, values: list[str]) -> list[str]:
    if not values:
        return [f"{name}:=", ""]
    return [f"{name}:=\\", "  " + " \\\n  ".join(values), ""]


class MakefileGenerator:
    """Generate a make fragment with one compile rule per source file."""

    def __init__(
        self,
        search_paths: Iterable[str | Path] = ("src",),
        max_depth: int = DEFAULT_MAX_DEPTH,
        relative_to: str | Path | None = None,
    ):
        self.resolver = DependencyResolver(search_paths, max_depth=max_depth)
        self.relative_to = absolute_path(Path(relative_to)) if relative_to is not None else None

    def generate(
        self,
        sources: list[SourceFile],
        progress: ProgressCallback | None = None,
    ) -> str:
        objects = [object_path(source.path) for source in sources]

        lines: list[str] = []
        lines += _variable("SOURCES", [s.path.as_posix() for s in sources])
        lines += _variable("OBJECTS", [o.as_posix() for o in objects])

        for i, (source, obj) in enumerate(zip(sources, objects)):
            if progress:
                progress("Resolving", i, len(sources))
            deps = self.resolver.resolve(source.path)
            prerequisites = [source.path.as_posix()] + [self._render(d) for d in deps]
            lines.append(f"{obj.as_posix()}: {' '.join(prerequisites)}")
            lines.append("\t" + (CXX_RECIPE if source.is_cpp else CC_RECIPE))
            lines.append("")

        if progress:
            progress("Resolving", len(sources), len(sources))

        return "\n".join(lines) + "\n"

    def write(
        self,
        stream: TextIO,
        sources: list[SourceFile],
        progress: ProgressCallback | None = None,
    ) -> None:
        stream.write(self.generate(sources, progress=progress))

    def _render(self, dependency: Path) -> str:
        if self.relative_to is not None and self.relative_to in dependency.parents:
            return dependency.relative_to(self.relative_to).as_posix()
        return dependency.as_posix()


def generate_makefile(
    sources: list[SourceFile],
    search_paths: Iterable[str | Path] = ("src",),
    max_depth: int = DEFAULT_MAX_DEPTH,
    relative_to: str | Path | None = None,
) -> str:
    """Build the make fragment for *sources* in one call."""
    generator = MakefileGenerator(search_paths, max_depth=max_depth, relative_to=relative_to)
    return generator.generate(sources)
