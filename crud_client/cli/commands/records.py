"""
Record Commands.

CRUD commands against the remote record API.
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any, Optional, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from crud_client.app.bootstrap import build_app
from crud_client.core.exceptions import ApplicationError, NetworkError
from crud_client.core.resilience import retry_transient
from crud_client.records.schemas import Record
from crud_client.records.service import RecordService

app = typer.Typer(help="Record CRUD commands")
console = Console()

T = TypeVar("T")


def _parse_fields(fields: list[str]) -> dict[str, Any]:
    """Parse KEY=VALUE pairs. Values are read as JSON when possible."""
    parsed: dict[str, Any] = {}
    for item in fields:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got {item!r}", param_hint="--field")
        try:
            parsed[key] = json.loads(raw)
        except json.JSONDecodeError:
            parsed[key] = raw
    return parsed


def _build_record(**values: Any) -> Record:
    try:
        return Record(**values)
    except ValidationError as e:
        raise typer.BadParameter(str(e))


def _run(ctx: typer.Context, operation: Callable[[RecordService], Awaitable[T]]) -> T:
    """Build the app, run one service call, always close the client."""
    options = ctx.obj or {}

    async def _execute() -> T:
        context = build_app(debug=options.get("debug"), base_url=options.get("base_url"))
        try:
            service = context.require_record_service()
            return await operation(service)
        finally:
            await context.aclose()

    try:
        return asyncio.run(_execute())
    except NetworkError as e:
        console.print(f"[red]Error: cannot reach the record API ({escape(e.message)})[/red]")
        raise typer.Exit(1)
    except ApplicationError as e:
        console.print(f"[red]Error [{e.code}]: {escape(e.message)}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _print_record(record: Record) -> None:
    console.print_json(data=record.model_dump(mode="json", by_alias=True, exclude_none=True))


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Record name"),
    description: Optional[str] = typer.Option(None, "--description", help="Record description"),
    record_id: Optional[str] = typer.Option(None, "--id", help="Client-assigned identifier"),
    field: list[str] = typer.Option([], "--field", "-f", help="Extra attribute as KEY=VALUE"),
) -> None:
    """
    Create a record.

    Examples:
        cli.py records create --name Widget
        cli.py records create -n Widget -f color=red -f size=3
    """
    record = _build_record(
        id=record_id, name=name, description=description, **_parse_fields(field),
    )
    _print_record(_run(ctx, lambda service: service.create_record(record)))


@app.command()
def get(
    ctx: typer.Context,
    record_id: str = typer.Argument(..., help="Record identifier"),
    retries: int = typer.Option(1, "--retries", "-r", min=1, help="Attempts on transient failures"),
) -> None:
    """
    Fetch one record by identifier.

    Examples:
        cli.py records get abc123
        cli.py records get abc123 --retries 3
    """
    async def _get(service: RecordService) -> Record:
        return await retry_transient(attempts=retries)(service.get_record)(record_id)

    _print_record(_run(ctx, _get))


@app.command("list")
def list_records(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table"),
) -> None:
    """
    List every record.

    Examples:
        cli.py records list
        cli.py records list --json
    """
    records = _run(ctx, lambda service: service.list_records())

    if as_json:
        console.print_json(data=[
            r.model_dump(mode="json", by_alias=True, exclude_none=True) for r in records
        ])
        return

    table = Table(title=f"Records ({len(records)})", show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Description")
    for record in records:
        table.add_row(record.id or "-", record.name, record.description or "-")
    console.print(table)


@app.command()
def update(
    ctx: typer.Context,
    record_id: str = typer.Argument(..., help="Record identifier"),
    name: str = typer.Option(..., "--name", "-n", help="Record name"),
    description: Optional[str] = typer.Option(None, "--description", help="Record description"),
    etag: Optional[str] = typer.Option(None, "--etag", help="Expected version (sent as If-Match)"),
    field: list[str] = typer.Option([], "--field", "-f", help="Extra attribute as KEY=VALUE"),
) -> None:
    """
    Replace a record.

    Examples:
        cli.py records update abc123 --name Gadget
        cli.py records update abc123 --name Gadget --etag '"0100"'
    """
    record = _build_record(
        name=name, description=description, etag=etag, **_parse_fields(field),
    )
    _print_record(_run(ctx, lambda service: service.update_record(record_id, record)))


@app.command()
def delete(
    ctx: typer.Context,
    record_id: str = typer.Argument(..., help="Record identifier"),
) -> None:
    """
    Delete a record.

    Examples:
        cli.py records delete abc123
    """
    _run(ctx, lambda service: service.delete_record(record_id))
    console.print(f"[green]✓ Deleted {record_id}[/green]")
