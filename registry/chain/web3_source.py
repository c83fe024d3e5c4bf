"""
Web3-backed event source.

Reads RecipientAdded / RecipientRemoved logs of a registry contract from a
node through web3's AsyncWeb3. The provider handle is always passed in by
the caller.
"""

import asyncio
from typing import Any, Dict, List, Optional

from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import Web3Exception

from ..core.errors import ProviderError
from ..core.events import RecipientAdded, RecipientRemoved, RegistryEvent, order_key
from ..source import EventSource
from .abi import SIMPLE_RECIPIENT_REGISTRY_ABI

_PROVIDER_ERRORS = (Web3Exception, ValueError, OSError, asyncio.TimeoutError)


def connect(rpc_url: str) -> AsyncWeb3:
    """Create an AsyncWeb3 handle for rpc_url."""
    return AsyncWeb3(AsyncHTTPProvider(rpc_url))


def _hex(value: Any) -> str:
    if isinstance(value, str):
        return value.lower()
    return AsyncWeb3.to_hex(value)


class Web3EventSource(EventSource):
    """
    EventSource over a node's JSON-RPC log queries.

    Queries always start at block 0; the recipient id filter is pushed down
    to the node as an indexed topic.
    """

    def __init__(self, w3: AsyncWeb3, from_block: int = 0) -> None:
        self.w3 = w3
        self.from_block = from_block
        self._senders: Dict[str, str] = {}

    def _registry(self, registry: str):
        return self.w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(registry),
            abi=SIMPLE_RECIPIENT_REGISTRY_ABI,
        )

    async def _get_logs(
        self,
        registry: str,
        event_name: str,
        recipient_id: Optional[str],
        from_block: int,
        to_block: Any = "latest",
    ) -> List[Any]:
        event = getattr(self._registry(registry).events, event_name)
        filters = {"_recipientId": recipient_id} if recipient_id is not None else None
        try:
            return list(
                await event.get_logs(
                    argument_filters=filters,
                    from_block=from_block,
                    to_block=to_block,
                )
            )
        except _PROVIDER_ERRORS as e:
            raise ProviderError(f"{event_name} query failed for {registry}: {e}") from e

    async def _sender(self, tx_hash: str) -> str:
        if tx_hash not in self._senders:
            try:
                tx = await self.w3.eth.get_transaction(tx_hash)
            except _PROVIDER_ERRORS as e:
                raise ProviderError(f"transaction lookup failed for {tx_hash}: {e}") from e
            self._senders[tx_hash] = tx["from"]
        return self._senders[tx_hash]

    async def _to_added(self, log: Any) -> RecipientAdded:
        args = log["args"]
        tx_hash = _hex(log["transactionHash"])
        return RecipientAdded(
            registry=log["address"],
            recipient_id=_hex(args["_recipientId"]),
            recipient=args["_recipient"],
            metadata=args["_metadata"],
            index=int(args["_index"]),
            timestamp=int(args["_timestamp"]),
            sender=await self._sender(tx_hash),
            tx_hash=tx_hash,
            block_number=int(log["blockNumber"]),
            log_index=int(log["logIndex"]),
        )

    @staticmethod
    def _to_removed(log: Any) -> RecipientRemoved:
        args = log["args"]
        return RecipientRemoved(
            registry=log["address"],
            recipient_id=_hex(args["_recipientId"]),
            timestamp=int(args["_timestamp"]),
            tx_hash=_hex(log["transactionHash"]),
            block_number=int(log["blockNumber"]),
            log_index=int(log["logIndex"]),
        )

    async def fetch_added(
        self, registry: str, recipient_id: Optional[str] = None
    ) -> List[RecipientAdded]:
        logs = await self._get_logs(registry, "RecipientAdded", recipient_id, self.from_block)
        return [await self._to_added(log) for log in logs]

    async def fetch_removed(
        self, registry: str, recipient_id: Optional[str] = None
    ) -> List[RecipientRemoved]:
        logs = await self._get_logs(registry, "RecipientRemoved", recipient_id, self.from_block)
        return [self._to_removed(log) for log in logs]

    async def fetch_history(
        self, registry: str, from_block: int = 0, to_block: Any = "latest"
    ) -> List[RegistryEvent]:
        """
        Both event sets for a block range merged into block order.

        This is the indexer's input: feed the result to a StreamReconciler
        one event at a time.
        """
        added_logs, removed_logs = await asyncio.gather(
            self._get_logs(registry, "RecipientAdded", None, from_block, to_block),
            self._get_logs(registry, "RecipientRemoved", None, from_block, to_block),
        )
        events: List[RegistryEvent] = [await self._to_added(log) for log in added_logs]
        events.extend(self._to_removed(log) for log in removed_logs)
        events.sort(key=order_key)
        return events
