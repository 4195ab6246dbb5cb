"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_log_level, env_str
from .errors import ConfigurationError, InvalidSettingError
from .imports import DEFAULT_DATA_DELIMITER, ImportConfig, get_import_config
from .logging import DIAGNOSTICS_LOGGER, configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_DATA_DELIMITER",
    "DIAGNOSTICS_LOGGER",
    "ConfigurationError",
    "DatabaseConfig",
    "ImportConfig",
    "InvalidSettingError",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "env_log_level",
    "env_str",
    "get_database_config",
    "get_import_config",
    "get_storage_config",
]
