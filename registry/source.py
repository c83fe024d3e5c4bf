"""
EventSource abstract interface.

A source returns the complete RecipientAdded / RecipientRemoved sets of a
registry from genesis, optionally filtered by the indexed recipient id.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from .core.events import RECIPIENT_ADDED, RECIPIENT_REMOVED, RecipientAdded, RecipientRemoved, RegistryEvent


class EventSource(ABC):
    """
    Read-only access to a registry's event log.

    Implementations must:
    - Return events in block order
    - Raise ProviderError when the backing node fails
    """

    @abstractmethod
    async def fetch_added(
        self, registry: str, recipient_id: Optional[str] = None
    ) -> List[RecipientAdded]:
        ...

    @abstractmethod
    async def fetch_removed(
        self, registry: str, recipient_id: Optional[str] = None
    ) -> List[RecipientRemoved]:
        ...


def _matches(ev: RegistryEvent, registry: str, recipient_id: Optional[str]) -> bool:
    if ev.registry.lower() != registry.lower():
        return False
    if recipient_id is not None and ev.recipient_id.lower() != recipient_id.lower():
        return False
    return True


class MemoryEventSource(EventSource):
    """
    In-memory event source.

    Backs tests and offline CLI use (events loaded from a FileEventLog).
    Counts fetches so callers can assert no query was issued.
    """

    def __init__(self, events: Iterable[RegistryEvent] = ()) -> None:
        self.events: List[RegistryEvent] = list(events)
        self.fetch_count = 0

    async def fetch_added(
        self, registry: str, recipient_id: Optional[str] = None
    ) -> List[RecipientAdded]:
        self.fetch_count += 1
        return [
            ev for ev in self.events
            if ev.type == RECIPIENT_ADDED and _matches(ev, registry, recipient_id)
        ]

    async def fetch_removed(
        self, registry: str, recipient_id: Optional[str] = None
    ) -> List[RecipientRemoved]:
        self.fetch_count += 1
        return [
            ev for ev in self.events
            if ev.type == RECIPIENT_REMOVED and _matches(ev, registry, recipient_id)
        ]
