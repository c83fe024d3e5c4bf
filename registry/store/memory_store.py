"""
In-memory recipient store.
"""

from typing import Dict, List, Optional

from ..core.recipient import Recipient
from .store import RecipientStore, sort_recipients


class MemoryRecipientStore(RecipientStore):
    """Dict-backed store, for tests and one-shot replays."""

    def __init__(self) -> None:
        self._records: Dict[str, Recipient] = {}

    def get(self, recipient_id: str) -> Optional[Recipient]:
        return self._records.get(recipient_id)

    def upsert(self, recipient: Recipient) -> None:
        self._records[recipient.id] = recipient

    def delete(self, recipient_id: str) -> None:
        self._records.pop(recipient_id, None)

    def list(self) -> List[Recipient]:
        return sort_recipients(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
