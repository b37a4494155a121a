"""Response delivery: truncation guard, text extraction, summary mode."""

from docplane.delivery.extraction import document_text, extract_text, file_text, values_text
from docplane.delivery.ingest import IngestDelivery, chunk_spans, composite_key
from docplane.delivery.truncation import (
    DEFAULT_TRUNCATION_HINT,
    TruncationResult,
    truncate,
)

__all__ = [
    "DEFAULT_TRUNCATION_HINT",
    "IngestDelivery",
    "TruncationResult",
    "chunk_spans",
    "composite_key",
    "document_text",
    "extract_text",
    "file_text",
    "truncate",
    "values_text",
]
