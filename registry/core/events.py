"""
Registry event model.

Events are immutable records emitted by the registry contract. They are
delivered to the stream reconciler in block order and fetched in bulk by
the snapshot reconciler.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Tuple, Union

RECIPIENT_ADDED = "RecipientAdded"
RECIPIENT_REMOVED = "RecipientRemoved"


@dataclass(frozen=True)
class RecipientAdded:
    """
    Immutable RecipientAdded event.

    Fields:
        registry: Address of the emitting registry contract
        recipient_id: 0x-prefixed 32-byte recipient id (indexed topic)
        recipient: Payout address
        metadata: Raw metadata string as emitted
        index: Registry-assigned ordinal
        timestamp: On-chain submission time (seconds)
        sender: Address that submitted the registration transaction
        tx_hash: Registration transaction hash
        block_number: Block the log was emitted in
        log_index: Position of the log within the block
    """
    registry: str
    recipient_id: str
    recipient: str
    metadata: str
    index: int
    timestamp: int
    sender: str = ""
    tx_hash: str = ""
    block_number: int = 0
    log_index: int = 0
    type: str = field(default=RECIPIENT_ADDED, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RecipientRemoved:
    """
    Immutable RecipientRemoved event.

    Fields:
        registry: Address of the emitting registry contract
        recipient_id: 0x-prefixed 32-byte recipient id (indexed topic)
        timestamp: On-chain removal time (seconds)
        tx_hash: Removal transaction hash
        block_number: Block the log was emitted in
        log_index: Position of the log within the block
    """
    registry: str
    recipient_id: str
    timestamp: int
    tx_hash: str = ""
    block_number: int = 0
    log_index: int = 0
    type: str = field(default=RECIPIENT_REMOVED, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


RegistryEvent = Union[RecipientAdded, RecipientRemoved]

_EVENT_TYPES = {
    RECIPIENT_ADDED: RecipientAdded,
    RECIPIENT_REMOVED: RecipientRemoved,
}


def event_from_dict(data: Dict[str, Any]) -> RegistryEvent:
    """
    Rebuild an event from its to_dict() form.

    Raises:
        ValueError: If the type is missing or unknown
    """
    data = dict(data)
    event_type = data.pop("type", None)
    cls = _EVENT_TYPES.get(event_type)
    if cls is None:
        raise ValueError(f"Unknown registry event type: {event_type}")
    return cls(**data)


def order_key(event: RegistryEvent) -> Tuple[int, int]:
    """Block order: (block_number, log_index)."""
    return (event.block_number, event.log_index)
