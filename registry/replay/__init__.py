"""
Replay of a registry event history into a recipient store.
"""

from .runner import ReplayResult, replay

__all__ = [
    "ReplayResult",
    "replay",
]
