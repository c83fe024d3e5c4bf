"""
Round window rules.

Derives hidden/locked flags for a recipient from its registration time,
its removal time (if any) and an optional round window. Both the snapshot
reconciler and store queries go through derive_visibility().
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Visibility:
    is_hidden: bool = False
    is_locked: bool = False


def derive_visibility(
    added_at: int,
    removed_at: Optional[int] = None,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
) -> Visibility:
    """
    Compute round visibility for one recipient.

    Rules:
    - added at or after end_time -> hidden
    - removed with no start_time, or at/before start_time -> hidden
    - removed after start_time -> locked (still listed)
    - never removed -> removal rules do not apply

    A missing start_time or end_time disables the rule that uses it.

    Args:
        added_at: Registration timestamp
        removed_at: Removal timestamp, None if never removed
        start_time: Round start (inclusive bound for hiding removals)
        end_time: Round end

    Returns:
        Visibility flags
    """
    hidden = False
    locked = False

    if end_time is not None and added_at >= end_time:
        hidden = True

    if removed_at is not None:
        if start_time is None or removed_at <= start_time:
            hidden = True
        else:
            locked = True

    return Visibility(is_hidden=hidden, is_locked=locked)


def lock_on_any_removal(removed: bool) -> Visibility:
    """
    Single-recipient lookup rule: locked whenever a removal exists.

    Ignores the round window entirely, unlike derive_visibility(). A removed
    recipient looked up directly is never hidden.
    """
    return Visibility(is_hidden=False, is_locked=removed)
