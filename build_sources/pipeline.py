"""Two-stage pipeline: scan -> emit make rules."""

from __future__ import annotations

import logging
from typing import TextIO

from build_sources.exporter import MakefileGenerator
from build_sources.exporter.makefile_generator import ProgressCallback
from build_sources.models import GeneratorConfig, SourceFile
from build_sources.scanner import scan_sources

logger = logging.getLogger(__name__)


def run_scan(config: GeneratorConfig, progress: ProgressCallback | None = None) -> list[SourceFile]:
    """Stage 1: Discover the sources under the configured root."""
    if progress:
        progress("Scanning", 0, 1)
    sources = scan_sources(config.source_root, targets=config.targets)
    if progress:
        progress("Scanning", 1, 1)
    logger.info("Found %d source file(s) under %s", len(sources), config.source_root)
    return sources


def run_pipeline(
    config: GeneratorConfig,
    stream: TextIO,
    progress: ProgressCallback | None = None,
) -> list[SourceFile]:
    """Scan the source root and write the build file to *stream*."""
    sources = run_scan(config, progress=progress)

    generator = MakefileGenerator(
        config.search_paths,
        max_depth=config.max_depth,
        relative_to=config.relative_to,
    )
    # Nothing reaches the stream unless every source resolved
    text = generator.generate(sources, progress=progress)
    stream.write(text)

    logger.info("Wrote rules for %d source file(s)", len(sources))
    return sources
