"""Command-line interface for rendering JSON / YAML records as text tables."""

from __future__ import annotations

import json
import logging
import sys
from typing import IO, Any

import click
import yaml

from .config import AMBIGUOUS_WIDTH_ENV_VAR, LOG_LEVEL_ENV_VAR, GridOptions
from .exceptions import TextGridError
from .grid import Grid
from .rendering import OutputFormat, format_grid

INPUT_FORMATS = ["json", "jsonl", "yaml"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.version_option(package_name="text-grid")
@click.option(
    "--log-level",
    default="WARNING",
    envvar=LOG_LEVEL_ENV_VAR,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (default: WARNING)",
)
def cli(log_level: str) -> None:
    """text-grid table rendering CLI."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _input_options(f: Any) -> Any:
    f = click.option(
        "--input",
        "-i",
        "input_format",
        default="json",
        type=click.Choice(INPUT_FORMATS),
        help="Input format: a JSON array, JSON Lines, or a YAML list (default: json)",
    )(f)
    f = click.option(
        "--ambiguous-width",
        type=click.IntRange(1, 2),
        default=1,
        envvar=AMBIGUOUS_WIDTH_ENV_VAR,
        help="Display width of East Asian ambiguous characters (1 or 2, default: 1)",
    )(f)
    f = click.argument("source", type=click.File("r"), default="-")(f)
    return f


@cli.command()
@_input_options
@click.option(
    "--format",
    "-f",
    "output_format",
    default="table",
    type=click.Choice([fmt.value for fmt in OutputFormat]),
    help="Output format (default: table)",
)
def render(
    source: IO[str],
    input_format: str,
    ambiguous_width: int,
    output_format: str,
) -> None:
    """Render records from SOURCE (default: stdin) as a table.

    Each record is one row. Mapping keys become columns, nested mappings
    become column groups and lists become numbered columns. Records with
    different keys are merged; missing values are left blank.
    """
    grid = _load_grid(source, input_format, ambiguous_width)
    click.echo(format_grid(grid, formatter=OutputFormat(output_format)), nl=False)


@cli.command()
@_input_options
def schema(source: IO[str], input_format: str, ambiguous_width: int) -> None:
    """Show the columns discovered in SOURCE (default: stdin), one per line."""
    grid = _load_grid(source, input_format, ambiguous_width)
    for path, node in grid.schema.walk():
        indent = "  " * (len(path) - 1)
        kind = "group" if node.keyed_children else "column"
        click.echo(f"{indent}{path[-1]} ({kind})")


def _load_grid(source: IO[str], input_format: str, ambiguous_width: int) -> Grid:
    records = _load_records(source, input_format)
    try:
        grid = Grid(options=GridOptions(ambiguous_width=ambiguous_width))
        grid.extend(records)
    except TextGridError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    return grid


def _load_records(source: IO[str], input_format: str) -> list[Any]:
    """Parse the input into a list of records."""
    text = source.read()
    try:
        if input_format == "jsonl":
            return [json.loads(line) for line in text.splitlines() if line.strip()]
        if input_format == "yaml":
            data = yaml.safe_load(text)
        else:
            data = json.loads(text) if text.strip() else []
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        click.echo(f"Error: Invalid {input_format} input: {e}", err=True)
        sys.exit(1)

    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        click.echo(f"Error: {input_format} input must contain a list of records", err=True)
        sys.exit(1)
    return data


def main() -> None:
    """Entry point for the ``text-grid`` console script."""
    cli()


if __name__ == "__main__":
    main()
