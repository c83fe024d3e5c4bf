"""
Core reconciliation primitives.

This module provides:
- Events: RecipientAdded / RecipientRemoved records from the registry
- Recipient / Project: reconciled record and decoded display view
- Decoder: event -> Recipient / Project
- Window: hidden/locked rules for a round window
- Reducer: pure per-recipient transitions
- Clock: processing time source
"""

from .events import (
    RECIPIENT_ADDED,
    RECIPIENT_REMOVED,
    RecipientAdded,
    RecipientRemoved,
    RegistryEvent,
    event_from_dict,
    order_key,
)
from .recipient import Project, Recipient
from .decoder import (
    RECIPIENT_ID_BYTES,
    is_hex_string,
    normalize_recipient_id,
    parse_metadata,
    project_from_event,
    recipient_from_event,
)
from .window import Visibility, derive_visibility, lock_on_any_removal
from .reducer import Reducer
from .clock import FixedClock, SystemClock
from .canonical import canonical_json_str, canonical_line
from .errors import (
    InvalidEventError,
    InvalidMetadataError,
    InvalidTransitionError,
    ProviderError,
    StoreError,
)

__all__ = [
    "RECIPIENT_ADDED",
    "RECIPIENT_REMOVED",
    "RecipientAdded",
    "RecipientRemoved",
    "RegistryEvent",
    "event_from_dict",
    "order_key",
    "Project",
    "Recipient",
    "RECIPIENT_ID_BYTES",
    "is_hex_string",
    "normalize_recipient_id",
    "parse_metadata",
    "project_from_event",
    "recipient_from_event",
    "Visibility",
    "derive_visibility",
    "lock_on_any_removal",
    "Reducer",
    "FixedClock",
    "SystemClock",
    "canonical_json_str",
    "canonical_line",
    "InvalidEventError",
    "InvalidMetadataError",
    "InvalidTransitionError",
    "ProviderError",
    "StoreError",
]
