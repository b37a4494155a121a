"""Structured error system for MCP tools.

Provides typed exceptions with error codes and remediation hints.
Enables agents to understand failures and self-correct.

Address and cache failures from ``read_resource`` are returned as error
objects, not raised; their ``code`` field uses the same names as below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from fastmcp.exceptions import ToolError


class MCPErrorCode(StrEnum):
    """Machine-readable error codes for MCP tool failures."""

    # Address errors - agent should fix the address
    INVALID_ADDRESS = "INVALID_ADDRESS"
    LEGACY_ADDRESS = "LEGACY_ADDRESS"

    # Cache state - agent should fetch again
    CACHE_MISS = "CACHE_MISS"

    # Placeholder actions
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"

    # Validation errors
    INVALID_PARAMS = "INVALID_PARAMS"


@dataclass
class ErrorResponse:
    """Structured error response for MCP tools."""

    code: MCPErrorCode
    message: str
    remediation: str
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "remediation": self.remediation,
            "context": self.context,
        }


class MCPError(ToolError):
    """Base exception for MCP tool errors with structured response.

    Extends FastMCP's ToolError so FastMCP reports ``message`` to the client
    instead of masking it as an internal failure.
    """

    def __init__(
        self,
        code: MCPErrorCode,
        message: str,
        remediation: str,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.remediation = remediation
        self.context = context

    def to_response(self) -> ErrorResponse:
        """Convert to ErrorResponse."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            remediation=self.remediation,
            context=self.context,
        )


class InvalidParamsError(MCPError):
    """Raised when a tool argument is outside its accepted values."""

    def __init__(self, param: str, value: Any, accepted: list[str]) -> None:
        super().__init__(
            code=MCPErrorCode.INVALID_PARAMS,
            message=f"Invalid value {value!r} for '{param}'",
            remediation=f"Use one of: {', '.join(accepted)}.",
            param=param,
            accepted=accepted,
        )


# =============================================================================
# Error Catalog for Introspection
# =============================================================================


@dataclass
class ErrorDocumentation:
    """Documentation for an error code."""

    code: MCPErrorCode
    category: str  # address, cache, validation
    description: str
    causes: list[str]
    remediation: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "category": self.category,
            "description": self.description,
            "causes": self.causes,
            "remediation": self.remediation,
        }


ERROR_CATALOG: dict[str, ErrorDocumentation] = {
    MCPErrorCode.INVALID_ADDRESS.value: ErrorDocumentation(
        code=MCPErrorCode.INVALID_ADDRESS,
        category="address",
        description="The resource address could not be parsed.",
        causes=[
            "Wrong scheme or missing '//' after it",
            "Unknown resource type or action",
            "Chunk range missing, malformed, or empty",
        ],
        remediation=[
            "Copy addresses verbatim from the summary response of an ingest call",
            "Write chunk ranges as <start>-<end> with end greater than start",
        ],
    ),
    MCPErrorCode.LEGACY_ADDRESS.value: ErrorDocumentation(
        code=MCPErrorCode.LEGACY_ADDRESS,
        category="address",
        description="The address uses the legacy form, which the cache does not serve.",
        causes=["Address of the form <scheme>:///<id> with no type or action"],
        remediation=["Read the resource through the direct fetch path"],
    ),
    MCPErrorCode.CACHE_MISS.value: ErrorDocumentation(
        code=MCPErrorCode.CACHE_MISS,
        category="cache",
        description="No live cache entry exists for the addressed resource.",
        causes=[
            "The resource was never fetched in summary mode",
            "The entry outlived the cache TTL",
            "The id in the address differs from the key it was stored under",
        ],
        remediation=[
            "Call the ingest operation for the resource with returnMode 'summary'",
            "Read the addresses from the new summary response",
        ],
    ),
    MCPErrorCode.NOT_IMPLEMENTED.value: ErrorDocumentation(
        code=MCPErrorCode.NOT_IMPLEMENTED,
        category="address",
        description="The action is recognized but has no extraction yet.",
        causes=["structure or values action on a cached resource"],
        remediation=[
            "Read the content address or one of its chunks instead",
            "Use the narrower fetch tool with returnMode 'full'",
        ],
    ),
    MCPErrorCode.INVALID_PARAMS.value: ErrorDocumentation(
        code=MCPErrorCode.INVALID_PARAMS,
        category="validation",
        description="A tool argument is outside its accepted values.",
        causes=["Unknown resource kind or return mode"],
        remediation=["Retry with one of the values listed in the error"],
    ),
}


def get_error_documentation(code: str) -> ErrorDocumentation | None:
    """Get documentation for an error code."""
    return ERROR_CATALOG.get(code)
