"""Time sources for TTL computations.

The cache never reads the wall clock directly; it asks a ``Clock`` for
"now" in seconds. ``SystemClock`` is monotonic so TTLs survive wall-clock
adjustments. ``ManualClock`` only moves when told to.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Anything that returns the current time in seconds."""

    def now(self) -> float: ...


class SystemClock:
    """Monotonic process clock."""

    __slots__ = ()

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """Clock advanced explicitly by the caller."""

    __slots__ = ("_now",)

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"Cannot move a clock backwards ({seconds}s)")
        self._now += seconds
