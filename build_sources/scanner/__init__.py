"""Scanner entry points."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from build_sources.models import SourceFile
from build_sources.scanner.language_map import source_kind
from build_sources.scanner.source_scanner import SourceScanner


def scan_sources(
    directory: str | Path,
    targets: Iterable[str] = (),
) -> list[SourceFile]:
    """Scan a directory for sources buildable for the given OS tags."""
    return SourceScanner(targets).scan_directory(directory)


__all__ = [
    "SourceScanner",
    "scan_sources",
    "source_kind",
]
