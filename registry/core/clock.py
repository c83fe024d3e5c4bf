"""
Processing clocks.

The stream reconciler stamps created_at from a clock so replays and tests
can pin processing time.
"""

import time
from dataclasses import dataclass


class SystemClock:
    """Wall-clock time in whole seconds."""

    def now(self) -> int:
        return int(time.time())


@dataclass(frozen=True)
class FixedClock:
    """
    Deterministic time source.

    Returns the same timestamp until advanced with tick().
    """
    current: int = 0

    def now(self) -> int:
        """Get current timestamp without advancing."""
        return self.current

    def tick(self, step: int = 1) -> "FixedClock":
        """
        Advance clock by step and return new clock instance.

        Since FixedClock is immutable, this returns a new instance.
        """
        return FixedClock(self.current + step)
