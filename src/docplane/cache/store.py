"""In-memory TTL cache for fetched resource text.

Design:
- Keyed by caller-chosen string (by convention the external resource id)
- One entry per key; a later store overwrites, never merges
- Lazy expiry: ``get`` drops an entry it finds older than the TTL
- Active expiry: ``sweep`` drops every expired entry, accessed or not
- ``stats`` is read-only and never evicts
- A single lock guards the map so tool calls dispatched from worker
  threads see each store/get/sweep atomically
"""

from __future__ import annotations

import threading
from typing import Any

import structlog

from docplane.cache.clock import Clock, SystemClock
from docplane.cache.models import (
    CacheEntry,
    CacheEntryStats,
    CacheStats,
    ResourceKind,
    wrap_payload,
)
from docplane.config.constants import CACHE_TTL_SEC

log = structlog.get_logger(__name__)


class ResourceCache:
    """TTL-bound map from cache key to :class:`CacheEntry`.

    Usage::

        cache = ResourceCache(ttl_seconds=600)
        cache.store("doc1", raw_response, "Hello world", "document")
        entry = cache.get("doc1")      # None once the TTL has passed
        removed = cache.sweep()        # drop everything that expired

    An entry is live while ``now - fetched_at <= ttl``; it expires strictly
    after the TTL.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SEC,
        clock: Clock | None = None,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self._ttl = ttl_seconds
        self._clock: Clock = clock or SystemClock()
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def store(self, key: str, content: Any, text: str, kind: ResourceKind | str) -> None:
        """Store (or overwrite) the entry for *key* and reset its age."""
        resource_kind = ResourceKind(kind)
        entry = CacheEntry(
            content=wrap_payload(resource_kind, content),
            text=text,
            fetched_at=self._clock.now(),
            kind=resource_kind,
        )
        with self._lock:
            replaced = key in self._entries
            self._entries[key] = entry
        log.debug(
            "cache_store",
            key=key,
            kind=resource_kind.value,
            text_length=len(text),
            replaced=replaced,
        )

    def get(self, key: str) -> CacheEntry | None:
        """Return the live entry for *key*, or None.

        An expired entry is deleted as a side effect.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            age = entry.age(self._clock.now())
            if age > self._ttl:
                del self._entries[key]
            else:
                return entry
        log.debug("cache_expired", key=key, age_seconds=round(age, 1))
        return None

    def sweep(self) -> int:
        """Delete every expired entry. Returns the number removed."""
        with self._lock:
            now = self._clock.now()
            expired = [k for k, e in self._entries.items() if e.age(now) > self._ttl]
            for key in expired:
                del self._entries[key]
            remaining = len(self._entries)
        if expired:
            log.debug("cache_sweep", removed=len(expired), remaining=remaining)
        return len(expired)

    def stats(self) -> CacheStats:
        """Snapshot of all entries, expired or not. Does not evict."""
        with self._lock:
            now = self._clock.now()
            entries = [
                CacheEntryStats(
                    key=key,
                    kind=entry.kind,
                    age_seconds=round(entry.age(now)),
                    text_length=len(entry.text),
                )
                for key, entry in self._entries.items()
            ]
        return CacheStats(size=len(entries), entries=entries)

    def clear(self) -> int:
        """Drop all entries. Returns the number removed."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
