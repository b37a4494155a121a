"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (DOCPLANE__SECTION__KEY)
3. Project YAML (explicit path passed to load_config())
4. Global YAML (~/.config/docplane/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    DOCPLANE__<SECTION>__<KEY>=<VALUE>

Examples:
    DOCPLANE__LOGGING__LEVEL=DEBUG
    DOCPLANE__CACHE__TTL_SEC=600
    DOCPLANE__DELIVERY__CHARACTER_LIMIT=20000
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from docplane.config.constants import (
    CACHE_SWEEP_INTERVAL_SEC,
    CACHE_TTL_SEC,
    CHARACTER_LIMIT,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_SCHEME,
    SCHEME_PATTERN,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ReturnMode = Literal["summary", "full"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        DOCPLANE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every cache store and expiry.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CacheConfig(BaseModel):
    """Resource cache configuration.

    Env vars:
        DOCPLANE__CACHE__TTL_SEC: Entry lifetime in seconds
        DOCPLANE__CACHE__SWEEP_INTERVAL_SEC: Background sweep interval (0 disables)
    """

    ttl_sec: float = Field(
        default=CACHE_TTL_SEC,
        description="Seconds a stored document stays readable by address. "
        "TRADEOFF: Longer TTLs keep large texts in memory for longer.",
    )
    sweep_interval_sec: float = Field(
        default=CACHE_SWEEP_INTERVAL_SEC,
        description="Seconds between background sweeps of expired entries. "
        "0 disables the sweeper; expired entries are then only dropped when re-read.",
    )

    @field_validator("ttl_sec")
    @classmethod
    def validate_ttl(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"TTL must be positive, got {v}")
        return v

    @field_validator("sweep_interval_sec")
    @classmethod
    def validate_sweep_interval(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"Sweep interval must be >= 0, got {v}")
        return v


class DeliveryConfig(BaseModel):
    """Response sizing configuration.

    Env vars:
        DOCPLANE__DELIVERY__CHARACTER_LIMIT: Max characters for full responses
        DOCPLANE__DELIVERY__CHUNK_SIZE: Width of advertised chunk addresses
        DOCPLANE__DELIVERY__DEFAULT_RETURN_MODE: summary or full
    """

    character_limit: int = Field(
        default=CHARACTER_LIMIT,
        description="Full responses longer than this are truncated with a footer.",
    )
    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        description="Chunk width used when listing chunk addresses in summary responses. "
        "Keep below character_limit so each chunk fits in one response.",
    )
    default_return_mode: ReturnMode = Field(
        default="summary",
        description="Return mode used by ingest operations when the caller does not pick one.",
    )

    @field_validator("character_limit", "chunk_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Must be positive, got {v}")
        return v


class ServerConfig(BaseModel):
    """MCP server configuration.

    Env vars:
        DOCPLANE__SERVER__NAME: Server name advertised to MCP clients
        DOCPLANE__SERVER__SCHEME: URI scheme of resource addresses
    """

    name: str = Field(default="docplane", description="Server name advertised to clients.")
    scheme: str = Field(
        default=DEFAULT_SCHEME,
        description="URI scheme of resource addresses (e.g. gdrive://docs/<id>/content).",
    )

    @field_validator("scheme")
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        v = v.lower()
        if not re.fullmatch(SCHEME_PATTERN, v):
            raise ValueError(f"Invalid URI scheme: {v!r}")
        return v


class DocPlaneConfig(BaseModel):
    """Root configuration for docplane.

    All settings can be configured via:
    1. Environment variables: DOCPLANE__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    delivery: DeliveryConfig = Field(default_factory=DeliveryConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
