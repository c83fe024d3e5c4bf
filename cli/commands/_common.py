"""
Shared helpers for CLI commands.
"""

import json
import os
from typing import Any, Optional

from rich.console import Console

from registry.chain import Web3EventSource, connect
from registry.config import Settings
from registry.log import FileEventLog
from registry.source import EventSource, MemoryEventSource

console = Console()


def build_source(events_path: Optional[str], rpc_url: Optional[str], settings: Settings) -> EventSource:
    """
    Event source for list/get.

    A local event log (--events) wins over a node (--rpc / REGISTRY_RPC_URL).
    """
    if events_path:
        if not os.path.exists(events_path):
            raise FileNotFoundError(events_path)
        return MemoryEventSource(FileEventLog(events_path).read())

    return Web3EventSource(connect(rpc_url or settings.rpc_url))


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def fail(message: str, json_output: bool) -> None:
    if json_output:
        print(json.dumps({"error": message}))
    else:
        console.print(f"[red]Error:[/red] {message}")


def flag_text(is_hidden: bool, is_locked: bool) -> str:
    if is_hidden:
        return "[dim]hidden[/dim]"
    if is_locked:
        return "[yellow]locked[/yellow]"
    return "[green]open[/green]"
