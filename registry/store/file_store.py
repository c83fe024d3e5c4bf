"""
File-based recipient store.

The whole collection is one canonical JSON document keyed by recipient id:
    {"0xabc...": {...recipient...}, ...}

Writes go to a temp file and are moved into place with os.replace().
"""

import json
import os
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from ..core.canonical import canonical_json_str
from ..core.errors import StoreError
from ..core.recipient import Recipient
from .store import RecipientStore, sort_recipients

try:
    import fcntl
except ImportError:  # Windows or unsupported platform
    fcntl = None


class FileRecipientStore(RecipientStore):
    """
    File-backed keyed recipient store.

    Guarantees:
    - Atomic replace on every write
    - Fsync before replace (durability)
    - Exclusive lock around read-modify-write where fcntl is available
    """

    def __init__(self, path: str) -> None:
        """
        Initialize file recipient store.

        Args:
            path: Path to JSON document
        """
        self.path = path
        self.lock_path = f"{self.path}.lock"

        # Ensure directory exists
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        if not os.path.exists(path):
            self._write({})

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with open(self.lock_path, "a+b") as lock:
            if fcntl:
                fcntl.flock(lock.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                if fcntl:
                    fcntl.flock(lock.fileno(), fcntl.LOCK_UN)

    def _read(self) -> Dict[str, Dict]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as ex:
            raise StoreError(str(ex)) from ex
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except ValueError as ex:
            raise StoreError(f"corrupt recipient store {self.path}: {ex}") from ex
        if not isinstance(data, dict):
            raise StoreError(f"corrupt recipient store {self.path}: expected object")
        return data

    def _write(self, data: Dict[str, Dict]) -> None:
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(canonical_json_str(data))
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as ex:
            raise StoreError(str(ex)) from ex

    def get(self, recipient_id: str) -> Optional[Recipient]:
        rec = self._read().get(recipient_id)
        return Recipient.from_dict(rec) if rec is not None else None

    def upsert(self, recipient: Recipient) -> None:
        with self._locked():
            data = self._read()
            data[recipient.id] = recipient.to_dict()
            self._write(data)

    def delete(self, recipient_id: str) -> None:
        with self._locked():
            data = self._read()
            if recipient_id not in data:
                return
            del data[recipient_id]
            self._write(data)

    def list(self) -> List[Recipient]:
        return sort_recipients(Recipient.from_dict(rec) for rec in self._read().values())
