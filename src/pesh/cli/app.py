"""CLI main module for pesh."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from pesh.config import Settings, get_settings
from pesh.core.builtins import WorkingDirectory
from pesh.core.parser import Parser
from pesh.core.signals import interactive_signals_ignored
from pesh.core.supervisor import Supervisor
from pesh.errors import BuiltinError, ParseError, render_error
from pesh.logging_utils import configure_logging

from .interactive import InteractiveShell

app = typer.Typer(
    name="pesh",
    help="Operator-driven command interpreter: ## runs in order, && runs concurrently, > redirects.",
    add_completion=False,
)

PARSE_ERROR_EXIT = 2


def _load_settings(log_level: Optional[str]) -> Settings:
    overrides = {"log_level": log_level} if log_level else {}
    settings = get_settings(**overrides)
    configure_logging(settings.log_level, profile=settings.log_format)
    return settings


def _build_shell(settings: Settings, directory: Optional[Path]) -> InteractiveShell:
    if directory is not None and not directory.is_dir():
        typer.echo(render_error(BuiltinError("cd", f"not a directory: {directory}")), err=True)
        raise typer.Exit(1)
    return InteractiveShell(settings, Supervisor(WorkingDirectory(directory)))


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        shell(directory=None, log_level=None)


@app.command()
def shell(
    directory: Optional[Path] = typer.Option(None, "--directory", "-C", help="Starting directory"),  # noqa: B008
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override PESH_LOG_LEVEL"),
) -> None:
    """Start the interactive read loop."""
    settings = _load_settings(log_level)
    interactive = _build_shell(settings, directory)
    with interactive_signals_ignored():
        interactive.run()


@app.command()
def run(
    line: str = typer.Argument(..., help="Command line to execute"),
    directory: Optional[Path] = typer.Option(None, "--directory", "-C", help="Starting directory"),  # noqa: B008
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override PESH_LOG_LEVEL"),
) -> None:
    """Execute one command line and exit."""
    settings = _load_settings(log_level)
    interactive = _build_shell(settings, directory)
    with interactive_signals_ignored():
        interactive.run_line(line)
    if interactive.errors_reported:
        raise typer.Exit(1)


@app.command()
def parse(
    line: str = typer.Argument(..., help="Command line to parse"),
) -> None:
    """Show how a command line is parsed, without running it."""
    settings = _load_settings(None)
    try:
        command_set = Parser(settings).parse(line)
    except ParseError as exc:
        typer.echo(render_error(exc), err=True)
        raise typer.Exit(PARSE_ERROR_EXIT) from exc

    table = Table(title="Parsed Data", show_header=False)
    table.add_column("field", style="bold")
    table.add_column("value")
    for name, value in command_set.describe():
        table.add_row(name, Text(value))
    Console(highlight=False).print(table)
