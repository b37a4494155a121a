"""Serve parsed addresses from the resource cache.

The resolver only looks things up and slices text; every range it sees has
already been validated by the parser. Nothing here raises: misses,
unsupported actions and bad addresses come back as a :class:`ResolveResult`
with an ``error``, a ``hint`` and (for anything the caller can fix by making
another call) a ``suggestion``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog

from docplane.cache.store import ResourceCache
from docplane.config.constants import DEFAULT_SCHEME
from docplane.resources.address import (
    Action,
    AddressParser,
    AddressType,
    CachedAddress,
    DocAddress,
    InvalidAddress,
    LegacyAddress,
    ParsedAddress,
    SheetAddress,
    Span,
    address_templates,
)

log = structlog.get_logger(__name__)

# Ingest tools that populate the cache, per address type. These are the
# summary-mode fetch operations offered by the forwarding layer.
DEFAULT_INGEST_TOOLS: dict[AddressType, str] = {
    AddressType.DOC: "docs_getDocument",
    AddressType.SHEET: "sheets_batchGetValues",
    AddressType.FILE: "drive_exportFile",
}

LEGACY_HINT = "not cache-backed; use direct fetch path"
MISS_HINT = "fetch the resource via its ingest operation first to populate the cache"
NOT_IMPLEMENTED_ERROR = "not yet implemented"
NOT_IMPLEMENTED_HINT = "use content/chunk, or the narrower fetch tool, instead"


class ResolveStatus(StrEnum):
    OK = "OK"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    LEGACY_ADDRESS = "LEGACY_ADDRESS"
    CACHE_MISS = "CACHE_MISS"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"


@dataclass(frozen=True, slots=True)
class ResolveResult:
    """Outcome of resolving one address. ``content`` is None unless ``ok``."""

    content: str | None
    status: ResolveStatus = ResolveStatus.OK
    error: str | None = None
    hint: str | None = None
    suggestion: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is ResolveStatus.OK

    def to_error_dict(self) -> dict[str, Any]:
        """JSON error object for the read interface."""
        return {
            "error": self.error,
            "hint": self.hint,
            "suggestion": self.suggestion,
            "code": self.status.value,
        }


def _slice(text: str, span: Span | None) -> str:
    if span is None:
        return text
    # Clamp rather than fail: callers may probe past the end.
    return text[span.start : min(span.end, len(text))]


class ContentResolver:
    """Resolves parsed addresses against a :class:`ResourceCache`."""

    def __init__(
        self,
        cache: ResourceCache,
        *,
        scheme: str = DEFAULT_SCHEME,
        ingest_tools: Mapping[AddressType, str] | None = None,
    ) -> None:
        self._cache = cache
        self._parser = AddressParser(scheme)
        self._ingest_tools = dict(DEFAULT_INGEST_TOOLS if ingest_tools is None else ingest_tools)

    @property
    def parser(self) -> AddressParser:
        return self._parser

    def resolve(self, parsed: ParsedAddress) -> ResolveResult:
        if isinstance(parsed, InvalidAddress):
            return ResolveResult(
                content=None,
                status=ResolveStatus.INVALID_ADDRESS,
                error=parsed.error,
                hint="supported forms: " + ", ".join(address_templates(self._parser.scheme)),
                suggestion=f"{self._parser.scheme}://docs/<id>/chunk/0-5000",
            )

        if isinstance(parsed, LegacyAddress):
            return ResolveResult(
                content=None,
                status=ResolveStatus.LEGACY_ADDRESS,
                hint=LEGACY_HINT,
                suggestion=f"read {self._parser.format(parsed)} through the resource fetch path",
            )

        entry = self._cache.get(parsed.resource_id)
        if entry is None:
            log.debug("resolve_miss", resource_id=parsed.resource_id, type=parsed.type.value)
            return ResolveResult(
                content=None,
                status=ResolveStatus.CACHE_MISS,
                error=f"cache miss for {parsed.resource_id}",
                hint=MISS_HINT,
                suggestion=self._ingest_suggestion(parsed),
            )

        if parsed.action in (Action.STRUCTURE, Action.VALUES):
            return ResolveResult(
                content=None,
                status=ResolveStatus.NOT_IMPLEMENTED,
                error=NOT_IMPLEMENTED_ERROR,
                hint=NOT_IMPLEMENTED_HINT,
                suggestion=self._fallback_suggestion(parsed),
            )

        span = None if isinstance(parsed, SheetAddress) else parsed.span
        return ResolveResult(content=_slice(entry.text, span))

    def read(self, uri: str) -> str | dict[str, Any]:
        """Parse and resolve *uri*: the text, or a JSON error object."""
        result = self.resolve(self._parser.parse(uri))
        if result.ok:
            return result.content  # type: ignore[return-value]
        return result.to_error_dict()

    def _ingest_suggestion(self, address: CachedAddress) -> str:
        tool = self._ingest_tools.get(address.type)
        target = self._parser.format(address)
        if tool is None:
            return f"fetch '{address.resource_id}' in summary mode, then read {target} again"
        return (
            f"call {tool} for '{address.resource_id}' with returnMode 'summary', "
            f"then read {target} again"
        )

    def _fallback_suggestion(self, address: CachedAddress) -> str:
        if isinstance(address, SheetAddress):
            tool = self._ingest_tools.get(address.type, "the values fetch tool")
            return f"call {tool} with returnMode 'full' for the range '{address.range}'"
        content = self._parser.format(DocAddress(address.resource_id, Action.CONTENT))
        return f"read {content}, or a chunk of it"
