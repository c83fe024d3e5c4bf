"""
Recipient storage.

This module provides:
- RecipientStore: Abstract keyed upsert/delete interface
- MemoryRecipientStore: Dict-backed storage
- FileRecipientStore: JSON document storage with atomic replace
"""

from .store import RecipientStore
from .memory_store import MemoryRecipientStore
from .file_store import FileRecipientStore

__all__ = [
    "RecipientStore",
    "MemoryRecipientStore",
    "FileRecipientStore",
]
