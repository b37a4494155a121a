"""FastMCP server creation and wiring.

``create_mcp_server`` leaves transport and process concerns to the caller.
``run_server`` is the stdio entrypoint: it applies the logging config first.
The cache sweeper, when configured, runs for the lifetime of the server's
event loop.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from docplane.config.models import DocPlaneConfig
    from docplane.mcp.context import AppContext

log = structlog.get_logger(__name__)

INSTRUCTIONS = (
    "docplane serves large fetched documents piece by piece. Ingest calls in "
    "summary mode return addresses; read them with read_resource, one chunk "
    "at a time. Cached entries expire, and a CACHE_MISS means fetch again."
)


def _make_lifespan(context: AppContext) -> Any:
    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[dict[str, Any]]:
        sweeper = context.sweeper
        if sweeper is not None:
            sweeper.start()
        try:
            yield {}
        finally:
            if sweeper is not None:
                await sweeper.stop()
            log.info("mcp_server_stopped", cached_entries=len(context.cache))

    return lifespan


def create_mcp_server(context: AppContext) -> FastMCP:
    """Create FastMCP server with all tools wired to context.

    Args:
        context: AppContext with the cache and its services

    Returns:
        Configured FastMCP server ready to run
    """
    from fastmcp import FastMCP

    from docplane.mcp.tools import resources

    server_config = context.config.server
    log.info("mcp_server_creating", name=server_config.name, scheme=server_config.scheme)

    mcp = FastMCP(
        server_config.name,
        instructions=INSTRUCTIONS,
        lifespan=_make_lifespan(context),
    )
    resources.register_tools(mcp, context)

    log.info(
        "mcp_server_created",
        ttl_sec=context.cache.ttl_seconds,
        sweeper=context.sweeper is not None,
    )
    return mcp


def run_server(config: DocPlaneConfig | None = None) -> None:
    """Configure logging, then create and run the MCP server over stdio.

    Args:
        config: Loaded configuration; ``load_config()`` if None
    """
    from docplane.config.loader import load_config
    from docplane.core.logging import configure_logging
    from docplane.mcp.context import AppContext

    config = config or load_config()
    configure_logging(config=config.logging)

    log.info(
        "mcp_server_starting",
        level=config.logging.level,
        outputs=[output.destination for output in config.logging.outputs],
    )

    context = AppContext.create(config)
    mcp = create_mcp_server(context)

    log.info("mcp_server_running")
    mcp.run()
