"""Tests for MCP AppContext."""

from dataclasses import fields, is_dataclass

from docplane.cache import ManualClock
from docplane.config.models import CacheConfig, DeliveryConfig, DocPlaneConfig, ServerConfig
from docplane.mcp.context import AppContext


class TestAppContext:
    """Tests for AppContext dataclass."""

    def test_is_dataclass(self) -> None:
        assert is_dataclass(AppContext)

    def test_has_required_fields(self) -> None:
        field_names = {f.name for f in fields(AppContext)}
        assert field_names == {"config", "cache", "resolver", "delivery", "sweeper"}


class TestCreate:
    def test_defaults(self) -> None:
        ctx = AppContext.create()

        assert ctx.cache.ttl_seconds == 1800
        assert ctx.resolver.parser.scheme == "gdrive"
        assert ctx.sweeper is not None
        assert ctx.sweeper.interval_seconds == 300
        assert ctx.sweeper.cache is ctx.cache

    def test_services_share_one_cache(self) -> None:
        ctx = AppContext.create()

        ctx.delivery.deliver(key="d", kind="document", content=None, text="shared")

        assert ctx.resolver.read("gdrive://docs/d/content") == "shared"

    def test_config_applied(self) -> None:
        clock = ManualClock()
        config = DocPlaneConfig(
            cache=CacheConfig(ttl_sec=10, sweep_interval_sec=0),
            delivery=DeliveryConfig(chunk_size=2),
            server=ServerConfig(scheme="gdocs"),
        )

        ctx = AppContext.create(config, clock=clock)
        response = ctx.delivery.deliver(key="d", kind="document", content=None, text="abcd")

        assert ctx.sweeper is None
        assert ctx.cache.ttl_seconds == 10
        assert response["chunks"] == ["gdocs://docs/d/chunk/0-2", "gdocs://docs/d/chunk/2-4"]
        clock.advance(11)
        assert ctx.resolver.read("gdocs://docs/d/content")["code"] == "CACHE_MISS"  # type: ignore[index]
