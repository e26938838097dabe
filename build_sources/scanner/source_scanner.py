"""Source discovery: walk a tree and pick the files that should be compiled."""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePath
from typing import Iterable

from build_sources.models import MissingFileError, SourceFile
from build_sources.scanner.language_map import source_kind

logger = logging.getLogger(__name__)

EXCLUDE_MARKER = "exclude"
EXCLUDED_DIR_SUFFIX = ".exclude"

# Directory named like "impl.linux"; the tag is whatever follows the last dot
_OS_DIR_RE = re.compile(r"^[a-z0-9 \-_.@]+\.([^/\\]+)$", re.IGNORECASE)


def os_tag(segment: str) -> str | None:
    """Return the lowercased OS tag of a directory segment, if it has one."""
    m = _OS_DIR_RE.match(segment)
    return m.group(1).lower() if m else None


def is_hidden(segment: str) -> bool:
    return len(segment) > 1 and segment[0] == "." and segment[1] != "."


class SourceScanner:
    """Find compilable C/C++/Objective-C sources under a directory.

    Discovery runs in two passes. The first enumerates every file and
    records directories holding an ``exclude`` marker; the second drops
    candidates beneath any of them, since a marker may sit below files
    already seen.
    """

    def __init__(self, targets: Iterable[str] = ()):
        self.targets = {t.lower() for t in targets}

    def scan_directory(self, directory: str | Path) -> list[SourceFile]:
        root = Path(directory)
        if not root.exists():
            raise MissingFileError(f"file not found: {root}")
        if not root.is_dir():
            raise MissingFileError(f"not a directory: {root}")

        candidates: list[SourceFile] = []
        marked: set[Path] = set()

        for path in sorted(root.rglob("*")):
            if path.is_dir():
                continue
            relative = path.relative_to(root)
            if path.name.lower() == EXCLUDE_MARKER:
                if not any(is_hidden(part) for part in relative.parts):
                    marked.add(path.parent)
                    logger.info("Skipping <%s>", path.parent)
                continue
            kind = source_kind(path)
            if kind is None:
                continue
            if self._should_skip(relative):
                continue
            candidates.append(SourceFile(path=path, kind=kind))

        return [
            source for source in candidates
            if not any(parent in marked for parent in source.path.parents)
        ]

    def _should_skip(self, relative: PurePath) -> bool:
        parts = relative.parts
        if any(is_hidden(part) for part in parts):
            return True

        for part in parts[:-1]:
            if part.endswith(EXCLUDED_DIR_SUFFIX):
                return True
            tag = os_tag(part)
            if tag is not None and tag not in self.targets:
                return True
        return False
