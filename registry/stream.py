"""
Stream reconciler: applies registry events one at a time to a keyed store.

Per recipient id the record moves UNKNOWN -> ACTIVE -> REMOVED. The
external dispatcher delivers events in block order, one call per event;
nothing is buffered or reordered here.
"""

from dataclasses import replace
from enum import Enum
from typing import Optional

from .core.clock import SystemClock
from .core.decoder import normalize_recipient_id, recipient_from_event
from .core.events import RECIPIENT_ADDED, RECIPIENT_REMOVED, RecipientAdded, RecipientRemoved, RegistryEvent
from .core.recipient import Recipient
from .core.reducer import Reducer
from .logging_config import get_logger
from .store.store import RecipientStore


class RemovalStrategy(str, Enum):
    """What a consumer does with a record once its recipient is removed."""
    DELETE = "delete"
    FLAG = "flag"


def register_handlers(reducer: Reducer, clock, strategy: RemovalStrategy) -> None:
    """
    Register the recipient transition handlers.

    Args:
        reducer: Reducer to register on
        clock: Processing clock stamped as created_at
        strategy: Removal strategy, fixed for the lifetime of the reducer
    """

    def on_recipient_added(cur: Optional[Recipient], ev: RecipientAdded) -> Optional[Recipient]:
        if cur is not None and cur.removed:
            # REMOVED is terminal
            return cur
        if cur is not None:
            redelivered = recipient_from_event(ev, created_at=cur.created_at)
            if redelivered == cur:
                return cur
        return recipient_from_event(ev, created_at=clock.now())

    def on_recipient_removed(cur: Optional[Recipient], ev: RecipientRemoved) -> Optional[Recipient]:
        if cur is None:
            return None
        if strategy is RemovalStrategy.DELETE:
            return None
        if cur.removed:
            return cur
        return replace(cur, removed=True, removed_at=ev.timestamp)

    reducer.register(RECIPIENT_ADDED, on_recipient_added)
    reducer.register(RECIPIENT_REMOVED, on_recipient_removed)


class StreamReconciler:
    """
    Materializes one record per recipient from a block-ordered event stream.

    Handlers are idempotent: a duplicated add yields the same record (last
    write wins) and a removal of an unknown id leaves the store unchanged.
    The store must not be written by anyone else during a handler call.

    Usage:
        reconciler = StreamReconciler(MemoryRecipientStore())
        reconciler.handle(event)
    """

    def __init__(
        self,
        store: RecipientStore,
        strategy: RemovalStrategy = RemovalStrategy.DELETE,
        clock=None,
    ) -> None:
        self.store = store
        self.strategy = RemovalStrategy(strategy)
        self.clock = clock or SystemClock()
        self.reducer = Reducer()
        register_handlers(self.reducer, self.clock, self.strategy)

    def handle(self, event: RegistryEvent) -> None:
        """
        Apply one event to the store.

        Raises:
            InvalidEventError: If the event cannot be decoded
            InvalidTransitionError: If the event type is unknown
            StoreError: If the store write fails
        """
        recipient_id = normalize_recipient_id(event.recipient_id)
        logger = get_logger(__name__, trace_id=recipient_id)

        current = self.store.get(recipient_id)
        updated = self.reducer.apply(current, event)

        if updated is None:
            if current is None:
                logger.debug("Ignoring %s for unknown recipient", event.type)
                return
            self.store.delete(recipient_id)
            logger.info("Recipient deleted (removed at %d)", event.timestamp)
            return

        if updated == current:
            logger.debug("%s left recipient unchanged", event.type)
            return

        self.store.upsert(updated)
        if updated.removed:
            logger.info("Recipient flagged removed (removed at %d)", updated.removed_at)
        elif current is not None:
            logger.info("Recipient overwritten by repeated add")
        else:
            logger.info("Recipient added at index %d", updated.index)

    def handle_added(self, event: RecipientAdded) -> None:
        self.handle(event)

    def handle_removed(self, event: RecipientRemoved) -> None:
        self.handle(event)
