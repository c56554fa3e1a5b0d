"""Configuration management for feedshelf."""

from .loader import (
    CONFIG_ENV,
    DATABASE_ENV,
    LOG_LEVEL_ENV,
    Config,
    default_config_path,
    load_config,
    save_config,
)
from .models import ConfigModel, DatabaseConfig, FetchConfig, LoggingConfig, ReaderConfig

__all__ = [
    "CONFIG_ENV",
    "DATABASE_ENV",
    "LOG_LEVEL_ENV",
    "Config",
    "ConfigModel",
    "DatabaseConfig",
    "FetchConfig",
    "LoggingConfig",
    "ReaderConfig",
    "default_config_path",
    "load_config",
    "save_config",
]
