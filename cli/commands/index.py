"""
Index command: fetch registry history and reconcile it into the store.
"""

import asyncio
from typing import Optional

import typer

from registry.chain import Web3EventSource, connect
from registry.config import Settings
from registry.core.errors import InvalidEventError, ProviderError, StoreError
from registry.log import FileEventLog
from registry.replay import replay
from registry.store import FileRecipientStore
from registry.stream import RemovalStrategy, StreamReconciler

from ._common import console, fail, print_json


def index_command(
    registry: str = typer.Argument(..., help="Registry contract address"),
    rpc_url: Optional[str] = typer.Option(None, "--rpc", help="Node JSON-RPC URL"),
    log_path: Optional[str] = typer.Option(None, "--log", "-l", help="Local event log path"),
    store_path: Optional[str] = typer.Option(None, "--store", "-s", help="Recipient store path"),
    strategy: RemovalStrategy = typer.Option(RemovalStrategy.DELETE, "--strategy", help="Removal strategy"),
    from_block: Optional[int] = typer.Option(None, "--from-block", help="First block (default: resume from log)"),
    offline: bool = typer.Option(False, "--offline", help="Replay the local log only, no node access"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Append new registry events to the local log and apply them to the store.

    Without --from-block, fetching resumes after the last block logged for
    this registry. Events reach the log only after the store has applied them.
    With --offline, the whole log is replayed into the store.

    Examples:
        registry index 0xRegistry --rpc http://localhost:8545
        registry index 0xRegistry --offline --strategy flag
    """
    settings = Settings.from_env()
    event_log = FileEventLog(log_path or settings.event_log_path)
    store = FileRecipientStore(store_path or settings.store_path)
    reconciler = StreamReconciler(store, strategy=strategy)

    try:
        if offline:
            events = list(event_log.read(registry=registry))
            fetched = 0
            result = replay(events, reconciler)
        else:
            if from_block is None:
                last = event_log.last_block(registry)
                from_block = last + 1 if last is not None else 0
            source = Web3EventSource(connect(rpc_url or settings.rpc_url))
            events = asyncio.run(source.fetch_history(registry, from_block=from_block))
            # logged only once applied, so a failed batch is refetched next run
            result = replay(events, reconciler)
            fetched = event_log.extend(events)
    except (ProviderError, StoreError, InvalidEventError) as e:
        fail(str(e), json_output)
        raise typer.Exit(2)

    if json_output:
        print_json(
            {
                "registry": registry,
                "fetched": fetched,
                "applied": result.applied,
                "added": result.added,
                "removed": result.removed,
                "recipients": len(store.list()),
            }
        )
        return

    if not offline:
        console.print(f"Fetched [cyan]{fetched}[/cyan] events from block {from_block}")
    console.print(
        f"[green]✓ Applied {result.applied} events[/green] "
        f"({result.added} added, {result.removed} removed)"
    )
    console.print(f"  Recipients in store: [cyan]{len(store.list())}[/cyan]")
