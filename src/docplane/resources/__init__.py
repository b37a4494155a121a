"""Resource addresses and the resolver that serves them from the cache."""

from docplane.resources.address import (
    Action,
    AddressParser,
    AddressType,
    DocAddress,
    FileAddress,
    InvalidAddress,
    LegacyAddress,
    ParsedAddress,
    ParseErrorReason,
    SheetAddress,
    Span,
    address_templates,
    format_address,
    parse_address,
    supported_routes,
)
from docplane.resources.resolver import ContentResolver, ResolveResult, ResolveStatus

__all__ = [
    "Action",
    "AddressParser",
    "AddressType",
    "ContentResolver",
    "DocAddress",
    "FileAddress",
    "InvalidAddress",
    "LegacyAddress",
    "ParseErrorReason",
    "ParsedAddress",
    "ResolveResult",
    "ResolveStatus",
    "SheetAddress",
    "Span",
    "address_templates",
    "format_address",
    "parse_address",
    "supported_routes",
]
