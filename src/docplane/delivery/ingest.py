"""Summary-mode delivery for fetch operations.

A fetch operation hands its raw response here together with a return mode:

- ``summary``: the text goes into the resource cache and the caller gets
  metadata plus addresses (whole content and fixed-width chunks) to read it
  back piece by piece.
- ``full``: the text is returned inline, bounded by the truncation guard.
  The cache is not touched.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

import structlog

from docplane.cache.models import ResourceKind
from docplane.cache.store import ResourceCache
from docplane.config.constants import CHARACTER_LIMIT, DEFAULT_CHUNK_SIZE, DEFAULT_SCHEME
from docplane.config.models import ReturnMode
from docplane.delivery.extraction import extract_text
from docplane.delivery.truncation import truncate
from docplane.resources.address import (
    Action,
    AddressParser,
    DocAddress,
    FileAddress,
    SheetAddress,
    Span,
)

log = structlog.get_logger(__name__)


def composite_key(resource_id: str, ranges: Sequence[str]) -> str:
    """Cache key for one resource narrowed to a set of ranges.

    The result is a single address segment, so it can be used verbatim as
    the ``<id>`` of any address.
    """
    if not ranges:
        return resource_id
    return f"{resource_id}:{quote(','.join(ranges), safe='!:,$')}"


def chunk_spans(length: int, chunk_size: int) -> list[Span]:
    """Consecutive spans of *chunk_size* covering ``[0, length)``."""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [Span(start, min(start + chunk_size, length)) for start in range(0, length, chunk_size)]


class IngestDelivery:
    """Stores or inlines fetched content according to the return mode."""

    def __init__(
        self,
        cache: ResourceCache,
        *,
        scheme: str = DEFAULT_SCHEME,
        character_limit: int = CHARACTER_LIMIT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        default_return_mode: ReturnMode = "summary",
    ) -> None:
        self._cache = cache
        self._parser = AddressParser(scheme)
        self._character_limit = character_limit
        self._chunk_size = chunk_size
        self._default_return_mode = default_return_mode

    def deliver(
        self,
        *,
        key: str,
        kind: ResourceKind | str,
        content: Any,
        text: str | None = None,
        return_mode: ReturnMode | None = None,
        metadata: Mapping[str, Any] | None = None,
        ranges: Sequence[str] = (),
        hint: str | None = None,
    ) -> dict[str, Any]:
        """Deliver one fetched resource.

        Args:
            key: Cache key; becomes the ``<id>`` of every returned address.
            kind: Resource kind of ``content``.
            content: Raw API response.
            text: Display text. Extracted from ``content`` when omitted.
            return_mode: ``summary`` or ``full``; the configured default if None.
            metadata: Extra fields echoed at the top of the response.
            ranges: Spreadsheet ranges covered by ``content``.
            hint: Truncation footer advice for ``full`` mode.
        """
        resource_kind = ResourceKind(kind)
        mode = return_mode or self._default_return_mode
        if text is None:
            text = extract_text(resource_kind, content)

        response: dict[str, Any] = {
            "return_mode": mode,
            "resource_id": key,
            "kind": resource_kind.value,
            **(metadata or {}),
        }

        if mode == "full":
            result = truncate(text, limit=self._character_limit, hint=hint)
            response.update(result.to_dict())
            log.debug("deliver_full", key=key, truncated=result.truncated)
            return response

        self._cache.store(key, content, text, resource_kind)
        response.update(self._summary(key, resource_kind, text, ranges))
        log.debug("deliver_summary", key=key, text_length=len(text))
        return response

    def _summary(
        self,
        key: str,
        kind: ResourceKind,
        text: str,
        ranges: Sequence[str],
    ) -> dict[str, Any]:
        spans = chunk_spans(len(text), self._chunk_size)
        if kind is ResourceKind.DOCUMENT:
            uri = self._parser.format(DocAddress(key, Action.CONTENT))
            chunks = [self._parser.format(DocAddress(key, Action.CHUNK, s)) for s in spans]
        else:
            uri = self._parser.format(FileAddress(key))
            chunks = [self._parser.format(FileAddress(key, s)) for s in spans]

        ttl_minutes = self._cache.ttl_seconds / 60
        summary: dict[str, Any] = {
            "text_length": len(text),
            "uri": uri,
            "chunks": chunks,
            "chunk_size": self._chunk_size,
            "ttl_seconds": self._cache.ttl_seconds,
            "hint": (
                f"Content cached for {ttl_minutes:g} minutes. Read 'uri' for the whole text "
                "or one entry of 'chunks' at a time; chunk ends past the text are clamped."
            ),
        }
        if kind is ResourceKind.SPREADSHEET and ranges:
            summary["ranges"] = [self._parser.format(SheetAddress(key, r)) for r in ranges]
            summary["ranges_note"] = (
                "values addresses are not served yet; read 'uri' or 'chunks' for the cached text"
            )
        return summary
