"""
System Commands.

Commands for application information and configuration.
"""

from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.tree import Tree

from crud_client.core.config import get_app_config, get_remote_base_url
from crud_client.core.exceptions import ApplicationError

app = typer.Typer(help="System information commands")
console = Console()


@app.command()
def info() -> None:
    """
    Display application information.

    Shows app name, version, and the remote API address.
    """
    try:
        application = get_app_config().application
        base_url, timeout = get_remote_base_url()
    except (ApplicationError, FileNotFoundError, RuntimeError) as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1)

    console.print(Panel(
        f"[bold]{application.name}[/bold]\n"
        f"Version: {application.version}\n"
        f"Description: {application.description}\n"
        f"Debug: {application.debug}\n"
        f"Remote API: {base_url} (timeout {timeout:g}s)",
        title="Application Info",
    ))


@app.command()
def config(
    section: Optional[str] = typer.Argument(None, help="Config section to show (application, logging)"),
) -> None:
    """
    Display configuration settings.

    Shows all configuration or a specific section.
    """
    try:
        app_config = get_app_config()
    except (ApplicationError, FileNotFoundError, RuntimeError) as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1)

    sections = {
        "application": app_config.application.model_dump(),
        "logging": app_config.logging.model_dump(),
    }

    if section:
        if section not in sections:
            console.print(f"[red]Unknown section: {section}[/red]")
            console.print(f"Available sections: {', '.join(sections.keys())}")
            raise typer.Exit(1)
        _display_config_section(section, sections[section])
        return

    for name, data in sections.items():
        _display_config_section(name, data)
        console.print()


def _display_config_section(name: str, data: dict[str, Any]) -> None:
    """Display a configuration section as a tree."""
    tree = Tree(f"[bold cyan]{name}[/bold cyan]")

    def add_items(parent: Tree, items: dict[str, Any]) -> None:
        for key, value in items.items():
            if isinstance(value, dict):
                add_items(parent.add(f"[yellow]{key}[/yellow]"), value)
            else:
                parent.add(f"[yellow]{key}[/yellow]: {value}")

    add_items(tree, data)
    console.print(tree)
