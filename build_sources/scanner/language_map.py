"""Shared extension-to-kind mapping for the scanner and the exporter."""

from __future__ import annotations

from pathlib import PurePath

from build_sources.models import SourceKind

# Lowercased extension -> compiler family
EXT_TO_KIND: dict[str, SourceKind] = {
    ".c": SourceKind.C,
    ".m": SourceKind.C,
    ".cc": SourceKind.CPP,
    ".cpp": SourceKind.CPP,
    ".cxx": SourceKind.CPP,
    ".c++": SourceKind.CPP,
    ".mm": SourceKind.CPP,
}


def source_kind(path: PurePath) -> SourceKind | None:
    """Return the compiler family for *path*, or None if it isn't a source file."""
    return EXT_TO_KIND.get(path.suffix.lower())
