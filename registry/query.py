"""
Query helpers over an indexed recipient store.
"""

from typing import List, Optional

from .core.decoder import is_hex_string, RECIPIENT_ID_BYTES
from .core.recipient import Recipient
from .core.window import derive_visibility
from .store.store import RecipientStore


def list_recipients(
    store: RecipientStore,
    registry_id: Optional[str] = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
) -> List[Recipient]:
    """
    Stored recipients with round flags derived for [start_time, end_time].

    Records removed under the flag strategy carry removed_at and go through
    the same window rules as the snapshot list view.
    """
    out = []
    for rec in store.list():
        if registry_id is not None and rec.registry_id != registry_id.lower():
            continue
        vis = derive_visibility(rec.submitted_at, rec.removed_at, start_time, end_time)
        out.append(rec.with_flags(vis.is_hidden, vis.is_locked))
    return out


def get_recipient(store: RecipientStore, recipient_id: str) -> Optional[Recipient]:
    if not is_hex_string(recipient_id, RECIPIENT_ID_BYTES):
        return None
    return store.get(recipient_id.lower())


def visible_recipients(recipients: List[Recipient]) -> List[Recipient]:
    return [r for r in recipients if not r.is_hidden]
