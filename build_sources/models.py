"""Data models and errors for the build-sources generator."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path


class SourceKind(enum.Enum):
    C = "c"
    CPP = "cpp"


class IncludeScope(enum.Enum):
    LOCAL = "local"    # "path"
    SEARCH = "search"  # <path>


@dataclass(frozen=True)
class SourceFile:
    """A compilable source file found by the scanner."""
    path: Path
    kind: SourceKind

    @property
    def is_cpp(self) -> bool:
        return self.kind is SourceKind.CPP


@dataclass(frozen=True)
class IncludeDirective:
    """One parsed #include line."""
    scope: IncludeScope
    path: str
    line_number: int = 0


@dataclass
class UnresolvedInclude:
    """An include that matched no file on disk."""
    directive: IncludeDirective
    included_from: Path


@dataclass
class ResolvedDependencies:
    """Result from the dependency resolver for one root file."""
    root: Path
    dependencies: list[Path] = field(default_factory=list)
    unresolved: list[UnresolvedInclude] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.dependencies)

    def __iter__(self):
        return iter(self.dependencies)


@dataclass
class GeneratorConfig:
    """Configuration for the build file pipeline."""
    source_root: Path = field(default_factory=lambda: Path("src"))
    targets: list[str] = field(default_factory=list)
    search_paths: list[Path] = field(default_factory=lambda: [Path("src")])
    max_depth: int = 32
    relative_to: Path | None = None


class BuildSourcesError(Exception):
    """Base class for fatal generator errors."""


class MissingFileError(BuildSourcesError):
    """A path expected to be a readable file is missing or a directory."""


class DependencyDepthError(BuildSourcesError):
    """Include chain is deeper than the configured ceiling."""


class ObjectPathError(BuildSourcesError):
    """A source path has no recognized extension to swap for ``.o``."""


class TemplateError(BuildSourcesError):
    """Malformed ``key[=value]`` token given to the template formatter."""
