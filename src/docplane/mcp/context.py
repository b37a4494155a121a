"""Application context for MCP handlers.

Single object passed to all tool handlers with access to the cache and the
services built on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docplane.cache.clock import Clock
    from docplane.cache.store import ResourceCache
    from docplane.cache.sweeper import CacheSweeper
    from docplane.config.models import DocPlaneConfig
    from docplane.delivery.ingest import IngestDelivery
    from docplane.resources.resolver import ContentResolver


@dataclass
class AppContext:
    """Context object passed to all MCP tool handlers.

    The resolver and the ingest delivery share one cache, so anything
    delivered in summary mode is readable by address until it expires.
    """

    config: DocPlaneConfig
    cache: ResourceCache
    resolver: ContentResolver
    delivery: IngestDelivery
    sweeper: CacheSweeper | None = None

    @classmethod
    def create(
        cls,
        config: DocPlaneConfig | None = None,
        clock: Clock | None = None,
    ) -> AppContext:
        """Factory to create context with all services wired together.

        Args:
            config: Loaded configuration; built-in defaults if None
            clock: Time source for TTL checks; the monotonic clock if None
        """
        from docplane.cache.store import ResourceCache
        from docplane.cache.sweeper import CacheSweeper
        from docplane.config.models import DocPlaneConfig
        from docplane.delivery.ingest import IngestDelivery
        from docplane.resources.resolver import ContentResolver

        config = config or DocPlaneConfig()
        scheme = config.server.scheme

        cache = ResourceCache(ttl_seconds=config.cache.ttl_sec, clock=clock)
        resolver = ContentResolver(cache, scheme=scheme)
        delivery = IngestDelivery(
            cache,
            scheme=scheme,
            character_limit=config.delivery.character_limit,
            chunk_size=config.delivery.chunk_size,
            default_return_mode=config.delivery.default_return_mode,
        )

        sweeper = None
        if config.cache.sweep_interval_sec > 0:
            sweeper = CacheSweeper(cache, interval_seconds=config.cache.sweep_interval_sec)

        return cls(
            config=config,
            cache=cache,
            resolver=resolver,
            delivery=delivery,
            sweeper=sweeper,
        )
