"""
CLI Application.

Typer app for working with the remote record API from a terminal.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from crud_client.cli.commands import records_app, system_app
from crud_client.core.config import find_project_root, get_app_config
from crud_client.core.exceptions import ApplicationError
from crud_client.core.logging import setup_logging

app = typer.Typer(
    name="crud-client",
    help="Record API client - create, read, update and delete remote records.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(records_app, name="records")
app.add_typer(system_app, name="system")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging, record API wired)",
    ),
    release: bool = typer.Option(
        False,
        "--release",
        help="Run as a release build: the record API is wired only with --base-url",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        envvar="CRUD_BASE_URL",
        help="Remote API base URL. Wires the record API even outside debug mode.",
    ),
) -> None:
    """
    Record API client.

    Built with Typer for type-safe commands and Rich for formatted output.
    """
    try:
        find_project_root()
    except RuntimeError:
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)

    if debug and release:
        raise typer.BadParameter("--debug and --release are mutually exclusive")

    # None defers to `debug` in application.yaml
    mode = True if debug else False if release else None
    ctx.obj = {"debug": mode, "base_url": base_url}

    # Console logs go to stderr; stdout carries command output only
    try:
        effective_debug = mode if mode is not None else get_app_config().application.debug
        if effective_debug:
            setup_logging(level="DEBUG")
        elif verbose:
            setup_logging(level="INFO")
        else:
            setup_logging()
    except (ApplicationError, FileNotFoundError) as e:
        console.print(f"[red]Error loading configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)
