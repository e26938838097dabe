"""Click CLI with generate and format subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from build_sources.analysis import DEFAULT_MAX_DEPTH
from build_sources.formatter import format_template, parse_formats
from build_sources.models import BuildSourcesError, GeneratorConfig
from build_sources.pipeline import run_pipeline

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", count=True, help="Log more to stderr (repeatable)")
def cli(verbose: int):
    """build-sources: generate make rules for C/C++ source trees."""
    # basicConfig logs to stderr; stdout carries the build file
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("build_sources").setLevel(
        _LOG_LEVELS[min(verbose, len(_LOG_LEVELS) - 1)]
    )


@cli.command()
@click.option("--root", "source_root", type=click.Path(path_type=Path), default="src", show_default=True, help="Directory to scan for sources")
@click.option("--target", "-t", "targets", multiple=True, help="OS tag to build for (repeatable)")
@click.option("--search-path", "-I", "search_paths", multiple=True, type=click.Path(path_type=Path), help="Directory for <...> includes (repeatable, default: src)")
@click.option("--max-depth", type=click.IntRange(min=1), default=DEFAULT_MAX_DEPTH, show_default=True, help="Deepest include chain allowed")
@click.option("--relative/--absolute", default=True, help="Print header paths relative to the working directory")
@click.option("-o", "--output", type=click.File("w"), default="-", help="Build file to write (default: stdout)")
def generate(
    source_root: Path,
    targets: tuple[str, ...],
    search_paths: tuple[Path, ...],
    max_depth: int,
    relative: bool,
    output,
):
    """Scan sources and write make rules with header dependencies."""
    config = GeneratorConfig(
        source_root=source_root,
        targets=[t.lower() for t in targets],
        search_paths=list(search_paths) or [Path("src")],
        max_depth=max_depth,
        relative_to=Path.cwd() if relative else None,
    )

    try:
        run_pipeline(config, output)
    except BuildSourcesError as e:
        raise click.ClickException(str(e))


@cli.command("format")
@click.argument("input_file", type=click.File("r"))
@click.argument("output_file", type=click.File("w"))
@click.argument("formats", nargs=-1)
def format_command(input_file, output_file, formats: tuple[str, ...]):
    """Replace ${key} placeholders in INPUT_FILE and write OUTPUT_FILE.

    Each FORMATS token is KEY or KEY=VALUE. Use - for stdin/stdout.
    """
    try:
        table = parse_formats(formats)
    except BuildSourcesError as e:
        raise click.UsageError(str(e))

    output_file.write(format_template(input_file.read(), table))


if __name__ == "__main__":
    cli()
