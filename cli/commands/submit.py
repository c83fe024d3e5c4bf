"""
Add command: submit a recipient registration to the registry contract.
"""

import asyncio
import json
from typing import Optional

import typer

from registry.chain import SIMPLE_REGISTRY, add_recipient, connect
from registry.config import Settings
from registry.core.errors import ProviderError

from ._common import console, fail, print_json


def add_command(
    registry: str = typer.Argument(..., help="Registry contract address"),
    recipient: str = typer.Argument(..., help="Payout address of the recipient"),
    metadata_path: str = typer.Option(..., "--metadata", "-m", help="Path to metadata JSON file"),
    sender: str = typer.Option(..., "--from", help="Transaction sender (unlocked on the node)"),
    rpc_url: Optional[str] = typer.Option(None, "--rpc", help="Node JSON-RPC URL"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Submit addRecipient and print the pending transaction hash.
    """
    settings = Settings.from_env()
    try:
        with open(metadata_path, "r", encoding="utf-8") as f:
            metadata = json.load(f)
    except (OSError, ValueError) as e:
        fail(f"Cannot read metadata {metadata_path}: {e}", json_output)
        raise typer.Exit(2)

    try:
        w3 = connect(rpc_url or settings.rpc_url)
        tx_hash = asyncio.run(add_recipient(w3, registry, recipient, metadata, sender))
    except ProviderError as e:
        fail(str(e), json_output)
        raise typer.Exit(2)

    if json_output:
        print_json({
            "tx_hash": tx_hash,
            "registration_open": SIMPLE_REGISTRY.registration_open,
            "requires_deposit": SIMPLE_REGISTRY.requires_deposit,
        })
    else:
        console.print(f"[green]✓ Submitted[/green] {tx_hash}")
        if not SIMPLE_REGISTRY.registration_open:
            console.print("[dim]Registration is owner-managed; the sender must own the registry[/dim]")
