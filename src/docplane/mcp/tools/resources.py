"""Resource tools - read cached content by address, ingest, cache admin."""

import time
from typing import TYPE_CHECKING, Any, Literal

import structlog
from fastmcp import Context
from pydantic import Field

from docplane.cache.models import ResourceKind
from docplane.core.logging import set_request_id
from docplane.delivery.ingest import composite_key
from docplane.mcp.errors import ERROR_CATALOG, InvalidParamsError, get_error_documentation

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from docplane.mcp.context import AppContext

log = structlog.get_logger(__name__)


# =============================================================================
# Handlers
# =============================================================================


def read_resource_response(app_ctx: "AppContext", uri: str) -> dict[str, Any]:
    """Resolve *uri* against the cache: the text, or an error object."""
    resolver = app_ctx.resolver
    result = resolver.resolve(resolver.parser.parse(uri))
    if not result.ok:
        return {
            "uri": uri,
            **result.to_error_dict(),
            "summary": f"{result.status.value.lower()}: {result.error or result.hint}",
        }
    content = result.content or ""
    return {
        "uri": uri,
        "content": content,
        "length": len(content),
        "summary": f"{len(content):,} chars",
    }


def ingest_resource_response(
    app_ctx: "AppContext",
    *,
    resource_id: str,
    kind: str,
    content: Any,
    text: str | None = None,
    return_mode: Literal["summary", "full"] | None = None,
    ranges: list[str] | None = None,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Deliver already-fetched content in summary or full mode."""
    accepted = [k.value for k in ResourceKind]
    if kind not in accepted:
        raise InvalidParamsError("kind", kind, accepted)
    if not resource_id:
        raise InvalidParamsError("resource_id", resource_id, ["a non-empty resource id"])

    ranges = ranges or []
    key = composite_key(resource_id, ranges) if kind == ResourceKind.SPREADSHEET else resource_id
    response = app_ctx.delivery.deliver(
        key=key,
        kind=kind,
        content=content,
        text=text,
        return_mode=return_mode,
        metadata=metadata,
        ranges=ranges,
    )
    if response["return_mode"] == "full":
        response["summary"] = "truncated" if response["truncated"] else "full text"
    else:
        response["summary"] = f"cached {response['text_length']:,} chars as {key}"
    return response


def cache_stats_response(app_ctx: "AppContext") -> dict[str, Any]:
    stats = app_ctx.cache.stats()
    sweeper = app_ctx.sweeper
    return {
        **stats.to_dict(),
        "ttl_seconds": app_ctx.cache.ttl_seconds,
        "sweeper": None
        if sweeper is None
        else {
            "running": sweeper.running,
            "interval_seconds": sweeper.interval_seconds,
            "total_removed": sweeper.total_removed,
            "last_error": sweeper.last_error,
        },
        "summary": f"{stats.size} entries",
    }


def sweep_cache_response(app_ctx: "AppContext") -> dict[str, Any]:
    removed = app_ctx.cache.sweep()
    remaining = len(app_ctx.cache)
    return {
        "removed": removed,
        "remaining": remaining,
        "summary": f"removed {removed}, {remaining} remaining",
    }


def describe_error_response(code: str) -> dict[str, Any]:
    doc = get_error_documentation(code)
    if doc is None:
        return {
            "found": False,
            "error": f"Unknown error code '{code}'",
            "available_codes": sorted(ERROR_CATALOG),
            "summary": f"error code '{code}' not found",
        }
    return {"found": True, **doc.to_dict(), "summary": f"{code}: {doc.description}"}


def _log_complete(tool: str, start: float, response: dict[str, Any]) -> None:
    log.info(
        "tool_complete",
        tool=tool,
        elapsed_ms=int((time.perf_counter() - start) * 1000),
        summary=response.get("summary"),
    )


# =============================================================================
# Tool Registration
# =============================================================================


def register_tools(mcp: "FastMCP", app_ctx: "AppContext") -> None:
    """Register resource tools with FastMCP server."""
    scheme = app_ctx.config.server.scheme

    @mcp.tool
    async def read_resource(
        ctx: Context,  # noqa: ARG001
        uri: str = Field(
            ...,
            description=f"Resource address, e.g. {scheme}://docs/<id>/chunk/0-10000",
        ),
    ) -> dict[str, Any]:
        """Read cached content by address.

        Addresses come from the summary response of an ingest call:
        - docs/<id>/content: whole document text
        - docs/<id>/chunk/<start>-<end>: characters [start, end), clamped to the text
        - files/<id>/content[/<start>-<end>]: whole file text, or a slice

        On failure returns {error, hint, suggestion, code} instead of content.
        CACHE_MISS means the entry was never stored or has expired: fetch again.
        """
        set_request_id()
        start = time.perf_counter()
        response = read_resource_response(app_ctx, uri)
        _log_complete("read_resource", start, response)
        return response

    @mcp.tool
    async def ingest_resource(
        ctx: Context,  # noqa: ARG001
        resource_id: str = Field(..., description="External resource id; becomes the address id"),
        kind: Literal["document", "spreadsheet", "file"] = Field(
            ..., description="Kind of the fetched content"
        ),
        content: dict[str, Any] | list[Any] | str = Field(
            ..., description="Raw API response (JSON) or file text"
        ),
        text: str | None = Field(
            None, description="Display text; extracted from content if omitted"
        ),
        return_mode: Literal["summary", "full"] | None = Field(
            None,
            description="summary caches the text and returns addresses; "
            "full returns the text inline, truncated if too long",
        ),
        ranges: list[str] | None = Field(
            None, description="Spreadsheet ranges covered by content (A1 notation)"
        ),
        metadata: dict[str, Any] | None = Field(
            None, description="Extra fields echoed in the response (title, mime type, ...)"
        ),
    ) -> dict[str, Any]:
        """Deliver content a fetch tool already retrieved.

        In summary mode the text is cached and the response lists a 'uri' for
        the whole text plus 'chunks' addresses to read with read_resource.
        """
        set_request_id()
        start = time.perf_counter()
        response = ingest_resource_response(
            app_ctx,
            resource_id=resource_id,
            kind=kind,
            content=content,
            text=text,
            return_mode=return_mode,
            ranges=ranges,
            metadata=metadata,
        )
        _log_complete("ingest_resource", start, response)
        return response

    @mcp.tool
    async def cache_stats(ctx: Context) -> dict[str, Any]:  # noqa: ARG001
        """List cached resources with their kind, age and text length.

        Expired entries stay listed until read or swept.
        """
        return cache_stats_response(app_ctx)

    @mcp.tool
    async def sweep_cache(ctx: Context) -> dict[str, Any]:  # noqa: ARG001
        """Drop every expired cache entry now."""
        set_request_id()
        start = time.perf_counter()
        response = sweep_cache_response(app_ctx)
        _log_complete("sweep_cache", start, response)
        return response

    @mcp.tool
    async def describe_error(
        ctx: Context,  # noqa: ARG001
        code: str = Field(..., description="Error code from a tool response, e.g. CACHE_MISS"),
    ) -> dict[str, Any]:
        """Explain an error code: causes and remediation."""
        return describe_error_response(code)
