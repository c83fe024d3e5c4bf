"""
File-based registry event log using append-only JSONL format.

Each line is one RecipientAdded / RecipientRemoved event in canonical JSON.
The indexer appends fetched history here and replays it into a store.
"""

import json
import os
from typing import Iterable, Iterator, Optional

from ..core.canonical import canonical_line
from ..core.errors import StoreError
from ..core.events import RegistryEvent, event_from_dict

try:
    import fcntl
except ImportError:  # Windows or unsupported platform
    fcntl = None


class FileEventLog:
    """
    Append-only registry event log.

    Storage format: JSONL (newline-delimited JSON)
    Each line: {"type": "RecipientAdded", "recipient_id": "0x...", ...}

    Events are read back in file order; callers append in block order.
    """

    def __init__(self, path: str) -> None:
        self.path = path

        # Ensure directory exists
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        # Create empty file if not exists
        if not os.path.exists(path):
            with open(path, "wb") as f:
                f.write(b"")

    def append(self, event: RegistryEvent) -> None:
        self.extend([event])

    def extend(self, events: Iterable[RegistryEvent]) -> int:
        """
        Append events in the given order.

        Returns:
            Number of events written

        Raises:
            StoreError: If the write fails
        """
        lines = [canonical_line(ev.to_dict()) for ev in events]
        if not lines:
            return 0
        try:
            with open(self.path, "ab") as f:
                if fcntl:
                    fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                f.write("".join(lines).encode("utf-8"))
                f.flush()
                os.fsync(f.fileno())
                if fcntl:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except OSError as ex:
            raise StoreError(str(ex)) from ex
        return len(lines)

    def read(
        self, recipient_id: Optional[str] = None, registry: Optional[str] = None
    ) -> Iterator[RegistryEvent]:
        """
        Read events from log.

        Args:
            recipient_id: Filter by recipient id (None = all)
            registry: Filter by registry address (None = all)

        Yields:
            Events in file order

        Raises:
            StoreError: If a line cannot be decoded
        """
        with open(self.path, "rb") as f:
            for lineno, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    ev = event_from_dict(json.loads(line))
                except (ValueError, TypeError) as ex:
                    raise StoreError(f"{self.path}:{lineno}: {ex}") from ex
                if recipient_id is not None and ev.recipient_id.lower() != recipient_id.lower():
                    continue
                if registry is not None and ev.registry.lower() != registry.lower():
                    continue
                yield ev

    def last_block(self, registry: Optional[str] = None) -> Optional[int]:
        """Highest block number logged for registry (None = any), None if none."""
        last = None
        for ev in self.read(registry=registry):
            if last is None or ev.block_number > last:
                last = ev.block_number
        return last
