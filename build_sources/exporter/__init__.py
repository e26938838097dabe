"""Exporter layer."""

from build_sources.exporter.makefile_generator import (
    MakefileGenerator,
    generate_makefile,
    object_path,
)

__all__ = ["MakefileGenerator", "generate_makefile", "object_path"]
