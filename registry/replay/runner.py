"""
Replay runner: rebuild the recipient store from a registry event history.

Events are handed to the stream reconciler one by one in the order given.
"""

from dataclasses import dataclass
from typing import Iterable

from ..core.events import RECIPIENT_ADDED, RegistryEvent
from ..stream import StreamReconciler


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        applied: Number of events handed to the reconciler
        added: Number of RecipientAdded events among them
        removed: Number of RecipientRemoved events among them
    """
    applied: int
    added: int = 0
    removed: int = 0


def replay(events: Iterable[RegistryEvent], reconciler: StreamReconciler) -> ReplayResult:
    """
    Replay events into a stream reconciler.

    Args:
        events: Events in block order (e.g. FileEventLog.read())
        reconciler: Reconciler wrapping the target store

    Returns:
        ReplayResult with counts
    """
    applied = added = removed = 0
    for ev in events:
        reconciler.handle(ev)
        applied += 1
        if ev.type == RECIPIENT_ADDED:
            added += 1
        else:
            removed += 1
    return ReplayResult(applied=applied, added=added, removed=removed)
