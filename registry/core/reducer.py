"""
Reducer: Pure per-recipient transition functions.

Handlers take the current record for a recipient id (or None when the id
is unknown) and the event, and return the next record (or None when the
record must not exist afterwards). They must be:
- Pure (no store access, no I/O)
- Idempotent (applying the same event twice is safe)
"""

from typing import Callable, Dict, Optional

from .errors import InvalidTransitionError
from .events import RegistryEvent
from .recipient import Recipient

# Handler signature: (current_record, event) -> next_record
Handler = Callable[[Optional[Recipient], RegistryEvent], Optional[Recipient]]


class Reducer:
    """
    Registry of event handlers for recipient transitions.

    Usage:
        reducer = Reducer()
        reducer.register("RecipientAdded", on_added)
        record = reducer.apply(current, event)
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register(self, event_type: str, handler: Handler) -> None:
        """
        Register event handler.

        Args:
            event_type: Event type string
            handler: Pure function (current_record, event) -> next_record
        """
        self._handlers[event_type] = handler

    def apply(self, current: Optional[Recipient], event: RegistryEvent) -> Optional[Recipient]:
        """
        Apply event to the current record using the registered handler.

        Raises:
            InvalidTransitionError: If no handler registered for event type
        """
        if event.type not in self._handlers:
            raise InvalidTransitionError(f"No handler for event type: {event.type}")
        return self._handlers[event.type](current, event)
