"""
Typer-based CLI for envregistry.

Inspect and validate configuration sources without writing any code:

- ``show``: print every flattened variable of a source
- ``get``: print one value by dotted path
- ``check``: verify that required variables are present
- ``export``: print ``NAME=value`` lines as they would be copied to the
  process environment

Exit codes follow ``envregistry.cli.exit_codes``: 1 for unreadable sources,
2 for missing required variables.
"""

import json
import shlex
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from envregistry.core.config import (
    DEFAULT_ENV_PREFIX,
    ConfigRegistry,
    ConfigSourceError,
    MissingVariableError,
    flatten,
    to_env_string,
)
from envregistry.core.utils.logger import setup_logging

from .exit_codes import CliExit

console = Console()
app = typer.Typer(
    name="envregistry",
    help="Inspect and validate nested configuration sources",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def callback(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="ENVREGISTRY_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    """Inspect and validate nested configuration sources."""
    try:
        setup_logging(level=log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e


def _load(source: Path, required: Optional[List[str]] = None) -> ConfigRegistry:
    registry = ConfigRegistry(required=required)
    try:
        registry.load(source)
    except ConfigSourceError as e:
        raise CliExit.error(str(e)) from e
    return registry


def _render(value: Any) -> str:
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, sort_keys=True)
    return str(value)


@app.command("show")
def show(
    source: Path = typer.Argument(..., help="Configuration file (.json, .py or .env)"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """Show every flattened variable of a source."""
    registry = _load(source)
    dotmap = flatten(registry.all())

    if json_output:
        typer.echo(json.dumps(dotmap, indent=2, default=str))
        return

    if not dotmap:
        console.print("[yellow]No variables defined.[/yellow]")
        return

    table = Table(title=str(source))
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_column("Type", style="dim")
    for key, value in dotmap.items():
        table.add_row(key, _render(value), type(value).__name__)
    console.print(table)


@app.command("get")
def get(
    source: Path = typer.Argument(..., help="Configuration file"),
    key: str = typer.Argument(..., help="Dotted path, e.g. db.host"),
    default: Optional[str] = typer.Option(
        None, "--default", "-d", help="Value printed when the key is missing"
    ),
) -> None:
    """Print one value by dotted path."""
    registry = _load(source)
    value = registry.get(key, default)
    if value is None:
        raise CliExit.error(f"Key '{key}' not found in {source}")
    typer.echo(_render(value))


@app.command("check")
def check(
    source: Path = typer.Argument(..., help="Configuration file"),
    require: List[str] = typer.Option(
        ..., "--require", "-r", help="Dotted path that must be present (repeatable)"
    ),
) -> None:
    """Verify that all required variables are present."""
    registry = ConfigRegistry(required=require)
    try:
        registry.load(source)
    except ConfigSourceError as e:
        raise CliExit.error(str(e)) from e
    except MissingVariableError:
        missing = registry.missing_required()
        for key in missing:
            console.print(f"[red]✗ missing:[/red] {key}")
        raise CliExit.config_error(
            f"{len(missing)} of {len(require)} required variables missing"
        )

    console.print(f"[green]✓ all {len(require)} required variables present[/green]")


@app.command("export")
def export(
    source: Path = typer.Argument(..., help="Configuration file"),
    prefix: str = typer.Option(
        DEFAULT_ENV_PREFIX, "--prefix", "-p", help="Prefix added to every variable name"
    ),
) -> None:
    """Print NAME=value lines as copied to the process environment."""
    registry = _load(source)
    for key, value in flatten(registry.all()).items():
        typer.echo(f"{prefix}{key}={shlex.quote(to_env_string(value))}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
