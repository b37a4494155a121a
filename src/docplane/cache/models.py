"""Cache entry and payload models.

A cache entry pairs the raw API response (``content``) with the flattened
text that chunk addresses slice. The raw response is wrapped in a payload
type per resource kind so callers that need it back know what shape to
expect.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar


class ResourceKind(StrEnum):
    """Kind of external resource a cache entry was fetched from."""

    DOCUMENT = "document"
    SPREADSHEET = "spreadsheet"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class DocumentPayload:
    """Raw document response (e.g. a Docs API ``documents.get`` body)."""

    kind: ClassVar[ResourceKind] = ResourceKind.DOCUMENT

    data: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SpreadsheetPayload:
    """Raw spreadsheet response (metadata or a batch of value ranges)."""

    kind: ClassVar[ResourceKind] = ResourceKind.SPREADSHEET

    data: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class FilePayload:
    """Raw file body, either exported text or downloaded bytes."""

    kind: ClassVar[ResourceKind] = ResourceKind.FILE

    data: bytes | str | Mapping[str, Any] = b""
    mime_type: str | None = None


ResourcePayload = DocumentPayload | SpreadsheetPayload | FilePayload

_PAYLOAD_TYPES: dict[ResourceKind, type[DocumentPayload | SpreadsheetPayload | FilePayload]] = {
    ResourceKind.DOCUMENT: DocumentPayload,
    ResourceKind.SPREADSHEET: SpreadsheetPayload,
    ResourceKind.FILE: FilePayload,
}


def wrap_payload(kind: ResourceKind | str, content: Any) -> ResourcePayload:
    """Wrap a raw API response in the payload type for ``kind``.

    Mappings are deep-copied so the cache owns its copy; later mutation of
    the caller's object does not leak into stored entries.
    """
    if isinstance(content, (DocumentPayload, SpreadsheetPayload, FilePayload)):
        return content

    payload_type = _PAYLOAD_TYPES[ResourceKind(kind)]
    if content is None:
        return payload_type()
    if isinstance(content, Mapping):
        return payload_type(data=copy.deepcopy(dict(content)))
    if payload_type is FilePayload and isinstance(content, (bytes, str)):
        return FilePayload(data=content)
    if payload_type is SpreadsheetPayload and isinstance(content, list):
        return SpreadsheetPayload(data={"valueRanges": copy.deepcopy(content)})
    # Anything else (scalars, other lists) is kept under a single key.
    return payload_type(data={"value": copy.deepcopy(content)})


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """One stored resource."""

    content: ResourcePayload
    text: str
    fetched_at: float
    kind: ResourceKind

    def age(self, now: float) -> float:
        """Seconds since the entry was stored."""
        return now - self.fetched_at


@dataclass(frozen=True, slots=True)
class CacheEntryStats:
    """Diagnostic view of one entry (no payload)."""

    key: str
    kind: ResourceKind
    age_seconds: int
    text_length: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "kind": self.kind.value,
            "age_seconds": self.age_seconds,
            "text_length": self.text_length,
        }


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Snapshot of the cache for diagnostics."""

    size: int
    entries: list[CacheEntryStats]

    @property
    def keys(self) -> list[str]:
        return [e.key for e in self.entries]

    def to_dict(self) -> dict[str, Any]:
        return {"size": self.size, "entries": [e.to_dict() for e in self.entries]}
