"""Configuration management."""

from .config import (
    Config,
    DatabaseConfig,
    IntrospectionConfig,
    LoggingConfig,
    load_config,
)

__all__ = [
    "Config",
    "DatabaseConfig",
    "IntrospectionConfig",
    "LoggingConfig",
    "load_config",
]
