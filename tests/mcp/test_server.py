"""Tests for mcp/server.py: tool wiring and sweeper lifespan."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Any

import pytest
import structlog
from fastmcp import Client, FastMCP

from docplane.config.models import CacheConfig, DocPlaneConfig, LoggingConfig, ServerConfig
from docplane.mcp.context import AppContext
from docplane.mcp.server import _make_lifespan, create_mcp_server, run_server

EXPECTED_TOOLS = {
    "read_resource",
    "ingest_resource",
    "cache_stats",
    "sweep_cache",
    "describe_error",
}


def _payload(result: Any) -> dict[str, Any]:
    return json.loads(result.content[0].text)


class TestCreateMcpServer:
    def test_returns_named_server(self) -> None:
        context = AppContext.create(DocPlaneConfig(server=ServerConfig(name="docs-test")))

        mcp = create_mcp_server(context)

        assert isinstance(mcp, FastMCP)
        assert mcp.name == "docs-test"

    @pytest.mark.asyncio
    async def test_registers_resource_tools(self) -> None:
        mcp = create_mcp_server(AppContext.create())

        async with Client(mcp) as client:
            tools = await client.list_tools()

        assert EXPECTED_TOOLS <= {t.name for t in tools}

    @pytest.mark.asyncio
    async def test_ingest_then_read_through_client(self) -> None:
        mcp = create_mcp_server(AppContext.create())

        async with Client(mcp) as client:
            ingest = _payload(
                await client.call_tool(
                    "ingest_resource",
                    {
                        "resource_id": "doc1",
                        "kind": "document",
                        "content": {},
                        "text": "Hello world",
                    },
                )
            )
            read = _payload(await client.call_tool("read_resource", {"uri": ingest["chunks"][0]}))

        assert ingest["uri"] == "gdrive://docs/doc1/content"
        assert read["content"] == "Hello world"

    @pytest.mark.asyncio
    async def test_miss_returned_not_raised(self) -> None:
        mcp = create_mcp_server(AppContext.create())

        async with Client(mcp) as client:
            read = _payload(
                await client.call_tool("read_resource", {"uri": "gdrive://docs/none/content"})
            )

        assert read["code"] == "CACHE_MISS"

    @pytest.mark.asyncio
    async def test_lifespan_runs_sweeper(self) -> None:
        context = AppContext.create(DocPlaneConfig(cache=CacheConfig(sweep_interval_sec=60)))
        assert context.sweeper is not None
        lifespan = _make_lifespan(context)

        async with lifespan(create_mcp_server(context)):
            running = context.sweeper.running

        assert running
        assert not context.sweeper.running


@pytest.fixture
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def runs(monkeypatch: pytest.MonkeyPatch) -> list[FastMCP]:
    """Record FastMCP.run calls instead of serving stdio."""
    started: list[FastMCP] = []
    monkeypatch.setattr(FastMCP, "run", lambda self, *args, **kwargs: started.append(self))
    return started


@pytest.mark.usefixtures("restore_logging")
class TestRunServer:
    def test_applies_configured_log_level(self, runs: list[FastMCP]) -> None:
        # Given
        config = DocPlaneConfig(
            logging=LoggingConfig(level="WARNING"),
            cache=CacheConfig(sweep_interval_sec=0),
            server=ServerConfig(name="docs-run"),
        )

        # When
        run_server(config)

        # Then
        assert logging.getLogger().level == logging.WARNING
        assert [mcp.name for mcp in runs] == ["docs-run"]

    def test_loads_config_when_none_given(
        self, runs: list[FastMCP], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        loaded = DocPlaneConfig(logging=LoggingConfig(level="ERROR"))
        monkeypatch.setattr("docplane.config.loader.load_config", lambda: loaded)

        run_server()

        assert logging.getLogger().level == logging.ERROR
        assert len(runs) == 1
