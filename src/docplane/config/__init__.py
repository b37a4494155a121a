"""Config module exports."""

from docplane.config.loader import DocPlaneSettings, load_config
from docplane.config.models import (
    CacheConfig,
    DeliveryConfig,
    DocPlaneConfig,
    LoggingConfig,
    ServerConfig,
)

__all__ = [
    "load_config",
    "DocPlaneConfig",
    "DocPlaneSettings",
    "CacheConfig",
    "DeliveryConfig",
    "LoggingConfig",
    "ServerConfig",
]
