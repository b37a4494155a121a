"""Resource cache: TTL-bound storage of fetched document text."""

from docplane.cache.clock import Clock, ManualClock, SystemClock
from docplane.cache.models import (
    CacheEntry,
    CacheEntryStats,
    CacheStats,
    DocumentPayload,
    FilePayload,
    ResourceKind,
    ResourcePayload,
    SpreadsheetPayload,
)
from docplane.cache.store import ResourceCache
from docplane.cache.sweeper import CacheSweeper

__all__ = [
    "CacheEntry",
    "CacheEntryStats",
    "CacheStats",
    "CacheSweeper",
    "Clock",
    "DocumentPayload",
    "FilePayload",
    "ManualClock",
    "ResourceCache",
    "ResourceKind",
    "ResourcePayload",
    "SpreadsheetPayload",
    "SystemClock",
]
