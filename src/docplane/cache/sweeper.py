"""Periodic background sweep of expired cache entries.

Lazy expiry only reclaims entries that are read again. The sweeper bounds
memory for entries nobody comes back for by calling ``ResourceCache.sweep``
on a fixed interval from the server's event loop.
"""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from docplane.cache.store import ResourceCache

log = structlog.get_logger(__name__)


@dataclass
class CacheSweeper:
    """Runs ``cache.sweep()`` every ``interval_seconds`` until stopped."""

    cache: ResourceCache
    interval_seconds: float

    _task: asyncio.Task[None] | None = field(default=None, init=False)
    _total_removed: int = field(default=0, init=False)
    _last_error: str | None = field(default=None, init=False)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def total_removed(self) -> int:
        return self._total_removed

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def start(self) -> None:
        """Start the sweep loop on the running event loop. No-op if running."""
        if self.running:
            return
        if self.interval_seconds <= 0:
            log.info("cache_sweeper_disabled")
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        log.info("cache_sweeper_started", interval_sec=self.interval_seconds)

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        self._task = None
        log.info("cache_sweeper_stopped", total_removed=self._total_removed)

    def sweep_once(self) -> int:
        """Run one sweep, recording failures instead of raising."""
        try:
            removed = self.cache.sweep()
        except Exception as e:
            self._last_error = str(e)
            log.error("cache_sweep_failed", error=str(e))
            return 0
        self._last_error = None
        self._total_removed += removed
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            self.sweep_once()
