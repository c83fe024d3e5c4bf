"""
Round view commands: list, get, show
"""

import asyncio
from typing import Optional

import typer
from rich.table import Table

from registry.config import Settings
from registry.core.errors import ProviderError, StoreError
from registry.query import get_recipient as get_stored
from registry.query import list_recipients as list_stored
from registry.query import visible_recipients
from registry.snapshot import SnapshotReconciler
from registry.store import FileRecipientStore

from ._common import build_source, console, fail, flag_text, print_json


def list_command(
    registry: str = typer.Argument(..., help="Registry contract address"),
    start_time: Optional[int] = typer.Option(None, "--start", help="Round start timestamp"),
    end_time: Optional[int] = typer.Option(None, "--end", help="Round end timestamp"),
    events_path: Optional[str] = typer.Option(None, "--events", "-e", help="Read events from a local event log"),
    rpc_url: Optional[str] = typer.Option(None, "--rpc", help="Node JSON-RPC URL"),
    gateway: Optional[str] = typer.Option(None, "--gateway", help="IPFS gateway for image URLs"),
    show_hidden: bool = typer.Option(False, "--all", "-a", help="Include hidden recipients"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List recipients of a registry for a round window.

    Examples:
        registry list 0xRegistry --start 1700000000 --end 1701000000
        registry list 0xRegistry --events events.log --json
    """
    settings = Settings.from_env()
    try:
        source = build_source(events_path, rpc_url, settings)
        reconciler = SnapshotReconciler(source, gateway or settings.ipfs_gateway_url)
        projects = asyncio.run(reconciler.list_recipients(registry, start_time, end_time))
    except FileNotFoundError:
        fail(f"Event log not found: {events_path}", json_output)
        raise typer.Exit(2)
    except (ProviderError, StoreError) as e:
        fail(str(e), json_output)
        raise typer.Exit(2)

    if not show_hidden:
        projects = [p for p in projects if not p.is_hidden]

    if json_output:
        print_json({"recipients": [p.to_dict() for p in projects], "count": len(projects)})
        return

    table = Table(title=f"Recipients: {registry}")
    table.add_column("Index", style="cyan", justify="right")
    table.add_column("Name", style="green")
    table.add_column("Recipient ID", style="dim")
    table.add_column("Address", style="yellow")
    table.add_column("Status")
    for p in projects:
        table.add_row(str(p.index), p.name or "N/A", p.id[:18], p.address, flag_text(p.is_hidden, p.is_locked))
    console.print(table)
    console.print(f"\n[bold]Total recipients:[/bold] {len(projects)}")


def get_command(
    registry: str = typer.Argument(..., help="Registry contract address"),
    recipient_id: str = typer.Argument(..., help="32-byte recipient id (0x...)"),
    events_path: Optional[str] = typer.Option(None, "--events", "-e", help="Read events from a local event log"),
    rpc_url: Optional[str] = typer.Option(None, "--rpc", help="Node JSON-RPC URL"),
    gateway: Optional[str] = typer.Option(None, "--gateway", help="IPFS gateway for image URLs"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show a single recipient. Exits 1 when it is not found.
    """
    settings = Settings.from_env()
    try:
        source = build_source(events_path, rpc_url, settings)
        reconciler = SnapshotReconciler(source, gateway or settings.ipfs_gateway_url)
        project = asyncio.run(reconciler.get_recipient(registry, recipient_id))
    except FileNotFoundError:
        fail(f"Event log not found: {events_path}", json_output)
        raise typer.Exit(2)
    except (ProviderError, StoreError) as e:
        fail(str(e), json_output)
        raise typer.Exit(2)

    if project is None:
        if json_output:
            print_json({"recipient": None})
        else:
            console.print(f"[yellow]Recipient not found:[/yellow] {recipient_id}")
        raise typer.Exit(1)

    if json_output:
        print_json({"recipient": project.to_dict()})
        return

    table = Table(show_header=False, box=None)
    for key, value in project.to_dict().items():
        if key == "extra" or value is None:
            continue
        table.add_row(f"[bold]{key}[/bold]", str(value))
    console.print(table)


def show_command(
    store_path: Optional[str] = typer.Option(None, "--store", "-s", help="Recipient store path"),
    registry: Optional[str] = typer.Option(None, "--registry", "-r", help="Only this registry"),
    start_time: Optional[int] = typer.Option(None, "--start", help="Round start timestamp"),
    end_time: Optional[int] = typer.Option(None, "--end", help="Round end timestamp"),
    recipient_id: Optional[str] = typer.Option(None, "--id", help="Show a single stored recipient"),
    show_hidden: bool = typer.Option(False, "--all", "-a", help="Include hidden recipients"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the indexed recipient store with round flags.

    With --id, prints the stored record as-is and exits 1 when it is absent.
    """
    settings = Settings.from_env()
    try:
        store = FileRecipientStore(store_path or settings.store_path)
        if recipient_id is not None:
            record = get_stored(store, recipient_id)
        else:
            recipients = list_stored(store, registry, start_time, end_time)
    except StoreError as e:
        fail(str(e), json_output)
        raise typer.Exit(2)

    if recipient_id is not None:
        if record is None:
            if json_output:
                print_json({"recipient": None})
            else:
                console.print(f"[yellow]Recipient not found:[/yellow] {recipient_id}")
            raise typer.Exit(1)
        if json_output:
            print_json({"recipient": record.to_dict()})
        else:
            table = Table(show_header=False, box=None)
            for key, value in record.to_dict().items():
                table.add_row(f"[bold]{key}[/bold]", str(value))
            console.print(table)
        return

    if not show_hidden:
        recipients = visible_recipients(recipients)

    if json_output:
        print_json({"recipients": [r.to_dict() for r in recipients], "count": len(recipients)})
        return

    if not recipients:
        console.print("[yellow]No recipients to show[/yellow]")
        return

    table = Table(title=f"Recipient store: {store.path}")
    table.add_column("Index", style="cyan", justify="right")
    table.add_column("Recipient ID", style="dim")
    table.add_column("Address", style="yellow")
    table.add_column("Submitted", justify="right")
    table.add_column("Status")
    for r in recipients:
        table.add_row(str(r.index), r.id[:18], r.address, str(r.submitted_at), flag_text(r.is_hidden, r.is_locked))
    console.print(table)
    console.print(f"\n[bold]Total recipients:[/bold] {len(recipients)}")
