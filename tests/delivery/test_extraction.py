"""Tests for delivery/extraction.py module."""

from __future__ import annotations

from typing import Any

import pytest

from docplane.cache.models import DocumentPayload, FilePayload, ResourceKind
from docplane.delivery.extraction import document_text, extract_text, file_text, values_text


def _paragraph(*runs: str) -> dict[str, Any]:
    return {"paragraph": {"elements": [{"textRun": {"content": r}} for r in runs]}}


class TestDocumentText:
    def test_paragraph_runs_in_order(self) -> None:
        doc = {"body": {"content": [_paragraph("Hello ", "world\n"), _paragraph("Next\n")]}}
        assert document_text(doc) == "Hello world\nNext\n"

    def test_tables_and_toc(self) -> None:
        table = {
            "table": {
                "tableRows": [
                    {"tableCells": [{"content": [_paragraph("a")]}, {"content": [_paragraph("b")]}]}
                ]
            }
        }
        toc = {"tableOfContents": {"content": [_paragraph("Contents\n")]}}
        doc = {"body": {"content": [toc, table, {"sectionBreak": {}}]}}

        assert document_text(doc) == "Contents\nab"

    def test_tabs_and_child_tabs(self) -> None:
        doc = {
            "tabs": [
                {
                    "documentTab": {"body": {"content": [_paragraph("one\n")]}},
                    "childTabs": [{"documentTab": {"body": {"content": [_paragraph("two\n")]}}}],
                }
            ]
        }
        assert document_text(doc) == "one\ntwo\n"

    def test_non_text_runs_skipped(self) -> None:
        doc = {"body": {"content": [{"paragraph": {"elements": [{"inlineObjectElement": {}}]}}]}}
        assert document_text(doc) == ""

    def test_empty(self) -> None:
        assert document_text({}) == ""


class TestValuesText:
    def test_batch_get_response(self) -> None:
        response = {
            "valueRanges": [
                {"range": "Sheet1!A1:B2", "values": [["a", "b"], ["c", None]]},
                {"range": "Sheet2!A1", "values": [[1]]},
            ]
        }
        assert values_text(response) == "Sheet1!A1:B2\na\tb\nc\t\n\nSheet2!A1\n1"

    def test_single_range(self) -> None:
        assert values_text({"range": "A1:A2", "values": [["x"], ["y"]]}) == "A1:A2\nx\ny"

    def test_list_of_ranges(self) -> None:
        assert values_text([{"range": "A1"}, {"range": "B1"}]) == "A1\n\nB1"


class TestFileText:
    def test_str_passthrough(self) -> None:
        assert file_text("plain text", "text/plain") == "plain text"

    @pytest.mark.parametrize("mime", [None, "text/csv", "application/json"])
    def test_textual_bytes_decoded(self, mime: str | None) -> None:
        assert file_text("héllo".encode(), mime) == "héllo"

    def test_binary_placeholder(self) -> None:
        assert file_text(b"\x89PNG" + b"\x00" * 1996, "image/png") == (
            "[binary content: image/png, 2,000 bytes]"
        )

    def test_mapping_rendered_as_json(self) -> None:
        assert file_text({"a": 1}) == '{\n  "a": 1\n}'


class TestExtractText:
    def test_dispatch_by_kind(self) -> None:
        assert extract_text("document", {"body": {"content": [_paragraph("d")]}}) == "d"
        assert extract_text(ResourceKind.SPREADSHEET, {"range": "A1", "values": [["v"]]}) == (
            "A1\nv"
        )
        assert extract_text("file", b"bytes") == "bytes"

    def test_unwraps_payloads(self) -> None:
        payload = DocumentPayload(data={"body": {"content": [_paragraph("p")]}})
        assert extract_text("document", payload) == "p"
        assert extract_text("file", FilePayload(data=b"\x00", mime_type="application/pdf")) == (
            "[binary content: application/pdf, 1 bytes]"
        )

    def test_none_content(self) -> None:
        assert extract_text("document", None) == ""
        assert extract_text("file", None) == ""
