"""Core module exports."""

from docplane.core.errors import (
    ConfigError,
    DocPlaneError,
    ErrorCode,
)
from docplane.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "DocPlaneError",
    "ErrorCode",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
