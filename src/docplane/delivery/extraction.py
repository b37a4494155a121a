"""Flatten raw API responses into the text that chunk addresses slice.

Only display text is produced here. Document structure (headings, named
ranges, styles) and typed cell values are not extracted.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from docplane.cache.models import (
    DocumentPayload,
    FilePayload,
    ResourceKind,
    SpreadsheetPayload,
)

_TEXTUAL_MIME_TYPES = frozenset(
    {
        "application/json",
        "application/xml",
        "application/javascript",
        "application/x-yaml",
    }
)


def _collect_elements(elements: Iterable[Mapping[str, Any]], parts: list[str]) -> None:
    for element in elements:
        if paragraph := element.get("paragraph"):
            for run in paragraph.get("elements", []):
                if text_run := run.get("textRun"):
                    parts.append(text_run.get("content", ""))
        elif table := element.get("table"):
            for row in table.get("tableRows", []):
                for cell in row.get("tableCells", []):
                    _collect_elements(cell.get("content", []), parts)
        elif toc := element.get("tableOfContents"):
            _collect_elements(toc.get("content", []), parts)


def _collect_tab(tab: Mapping[str, Any], parts: list[str]) -> None:
    body = tab.get("documentTab", {}).get("body", {})
    _collect_elements(body.get("content", []), parts)
    for child in tab.get("childTabs", []):
        _collect_tab(child, parts)


def document_text(document: Mapping[str, Any]) -> str:
    """Text runs of a document body, in reading order, tabs included."""
    parts: list[str] = []
    if body := document.get("body"):
        _collect_elements(body.get("content", []), parts)
    for tab in document.get("tabs", []):
        _collect_tab(tab, parts)
    return "".join(parts)


def values_text(value_ranges: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> str:
    """Render value ranges as a range header followed by tab-separated rows.

    Accepts a ``batchGet`` response (``{"valueRanges": [...]}``), a single
    value range, or a list of value ranges.
    """
    if isinstance(value_ranges, Mapping):
        ranges = value_ranges.get("valueRanges", [value_ranges])
    else:
        ranges = value_ranges

    blocks: list[str] = []
    for value_range in ranges:
        lines = [str(value_range.get("range", ""))]
        for row in value_range.get("values", []):
            lines.append("\t".join("" if cell is None else str(cell) for cell in row))
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def file_text(data: bytes | str | Mapping[str, Any], mime_type: str | None = None) -> str:
    """Decode a file body. Binary bodies become a one-line placeholder."""
    if isinstance(data, str):
        return data
    if isinstance(data, Mapping):
        return json.dumps(data, indent=2, default=str)
    if mime_type is None or mime_type.startswith("text/") or mime_type in _TEXTUAL_MIME_TYPES:
        return data.decode("utf-8", errors="replace")
    return f"[binary content: {mime_type}, {len(data):,} bytes]"


def extract_text(kind: ResourceKind | str, content: Any) -> str:
    """Display text for a raw response of the given kind."""
    resource_kind = ResourceKind(kind)
    if isinstance(content, (DocumentPayload, SpreadsheetPayload)):
        content = content.data
    elif isinstance(content, FilePayload):
        return file_text(content.data, content.mime_type)

    if resource_kind is ResourceKind.DOCUMENT:
        return document_text(content or {})
    if resource_kind is ResourceKind.SPREADSHEET:
        return values_text(content or [])
    return file_text(content if content is not None else b"")
