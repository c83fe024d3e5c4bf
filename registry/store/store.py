"""
RecipientStore abstract interface.

The persistent sink the stream reconciler writes to: one record per
recipient id, upsert and delete by id.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.recipient import Recipient


class RecipientStore(ABC):
    """
    Abstract keyed recipient storage.

    All implementations must guarantee:
    - One record per id (upsert overwrites)
    - delete() of an unknown id is a no-op
    - list() ordered by index, then id
    """

    @abstractmethod
    def get(self, recipient_id: str) -> Optional[Recipient]:
        """
        Get recipient by id.

        Returns:
            Recipient or None if not found
        """
        ...

    @abstractmethod
    def upsert(self, recipient: Recipient) -> None:
        """
        Insert or overwrite the record for recipient.id.

        Raises:
            StoreError: If the write fails
        """
        ...

    @abstractmethod
    def delete(self, recipient_id: str) -> None:
        """
        Delete the record for recipient_id if present.

        Raises:
            StoreError: If the write fails
        """
        ...

    @abstractmethod
    def list(self) -> List[Recipient]:
        """All stored recipients ordered by (index, id)."""
        ...


def sort_recipients(recipients) -> List[Recipient]:
    return sorted(recipients, key=lambda r: (r.index, r.id))
