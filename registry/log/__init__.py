"""
Local registry event log.

This module provides:
- FileEventLog: Append-only JSONL storage of RecipientAdded/RecipientRemoved
"""

from .file_log import FileEventLog

__all__ = ["FileEventLog"]
