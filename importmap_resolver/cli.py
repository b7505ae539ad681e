"""Command-line interface for validating import maps and resolving specifiers.

Embeds the library: reads the map from a file (or stdin), then reports the
validation outcome or the resolution of each specifier.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.markup import escape
from rich.table import Table

from .console import console
from .console import err_console
from .exceptions import ImportMapLoadError
from .logging_setup import init_logging
from .loader import load_import_map
from .loader import parse_import_map
from .resolver import create_resolver
from .validation_result import ValidationOutcome
from .validator import validate

logger = logging.getLogger(__name__)

UNRESOLVED_LABEL = "(unresolved)"


def _read_import_map(source: str) -> Any:
    """Load the map named on the command line, exiting with status 2 on failure."""
    try:
        if source == "-":
            return parse_import_map(click.get_text_stream("stdin").read())
        return load_import_map(Path(source))
    except ImportMapLoadError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(2)


def _print_errors(outcome: ValidationOutcome) -> None:
    errors = outcome.errors
    table = Table(title=f"Import map is invalid ({len(errors)} error(s))", title_justify="left")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Error", style="red")
    for index, error in enumerate(errors, start=1):
        table.add_row(str(index), escape(error))
    err_console.print(table)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: $IMPORTMAP_LOG_LEVEL or WARNING)",
)
def cli(log_level: str | None):
    """Validate import maps and resolve module specifiers against them."""
    init_logging(log_level)


@cli.command(name="validate")
@click.argument("source", type=click.Path(dir_okay=False, allow_dash=True))
@click.option("--json", "as_json", is_flag=True, help="Print the outcome as JSON")
def validate_cmd(source: str, as_json: bool):
    """Validate the import map in SOURCE (a JSON/YAML file, or - for stdin)."""
    outcome = validate(_read_import_map(source))

    if as_json:
        click.echo(json.dumps({"valid": outcome.valid, "errors": outcome.errors}, indent=2, ensure_ascii=False))
    elif outcome.valid:
        console.print("[green]✓[/green] Import map is valid")
    else:
        _print_errors(outcome)

    if not outcome.valid:
        sys.exit(1)


@cli.command(name="resolve")
@click.argument("source", type=click.Path(dir_okay=False, allow_dash=True))
@click.argument("specifiers", nargs=-1, required=True)
@click.option("--importer", default=None, help="Path or URL of the importing module")
@click.option("--json", "as_json", is_flag=True, help="Print results as a JSON object")
def resolve_cmd(source: str, specifiers: tuple[str, ...], importer: str | None, as_json: bool):
    """Resolve SPECIFIERS using the import map in SOURCE."""
    resolver = create_resolver(_read_import_map(source))

    if not resolver.valid:
        _print_errors(resolver.validation_outcome)
        sys.exit(1)

    results = {specifier: resolver.resolve(specifier, importer) for specifier in specifiers}

    if as_json:
        click.echo(json.dumps(results, indent=2, ensure_ascii=False))
        return

    for specifier, resolved in results.items():
        shown = UNRESOLVED_LABEL if resolved is None else resolved
        console.print(f"{escape(specifier)} -> {escape(shown)}", soft_wrap=True, highlight=False)


__all__ = ["cli"]
