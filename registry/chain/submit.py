"""
Registration submission.

Forwards a new recipient to the registry contract; no reconciliation
happens here. The resulting RecipientAdded event reaches the reconcilers
through the normal event path.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Union

from web3 import AsyncWeb3
from web3.exceptions import Web3Exception

from ..core.errors import ProviderError
from .abi import SIMPLE_RECIPIENT_REGISTRY_ABI


@dataclass(frozen=True)
class RegistryDescriptor:
    """What a registry variant asks of someone submitting a recipient."""

    registration_open: bool
    requires_deposit: bool


# Owner-managed: addRecipient only succeeds from the registry owner, no deposit.
SIMPLE_REGISTRY = RegistryDescriptor(registration_open=False, requires_deposit=False)


async def add_recipient(
    w3: AsyncWeb3,
    registry: str,
    recipient_address: str,
    metadata: Union[str, Dict[str, Any]],
    sender: str,
) -> str:
    """
    Submit addRecipient to the registry.

    Args:
        w3: Provider handle with an unlocked or middleware-signed sender
        registry: Registry contract address
        recipient_address: Payout address of the new recipient
        metadata: Metadata JSON object, or an already-encoded string
        sender: Transaction sender

    Returns:
        Pending transaction hash (0x-prefixed)

    Raises:
        ProviderError: If the node rejects the transaction
    """
    contract = w3.eth.contract(
        address=AsyncWeb3.to_checksum_address(registry),
        abi=SIMPLE_RECIPIENT_REGISTRY_ABI,
    )
    if not isinstance(metadata, str):
        metadata = json.dumps(metadata, separators=(",", ":"))
    try:
        tx_hash = await contract.functions.addRecipient(
            AsyncWeb3.to_checksum_address(recipient_address), metadata
        ).transact({"from": AsyncWeb3.to_checksum_address(sender)})
    except (Web3Exception, ValueError, OSError) as e:
        raise ProviderError(f"addRecipient failed on {registry}: {e}") from e
    return AsyncWeb3.to_hex(tx_hash)
