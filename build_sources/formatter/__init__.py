"""Template formatter."""

from build_sources.formatter.template import format_template, parse_formats

__all__ = ["format_template", "parse_formats"]
