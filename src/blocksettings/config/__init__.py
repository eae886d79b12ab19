"""Application configuration helpers."""

from __future__ import annotations

from .blocks import (
    DEFAULT_COURSE_BLOCKS,
    BlockSettingsConfig,
    get_block_settings_config,
    validate_default_blocks,
)
from .errors import ConfigurationError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_COURSE_BLOCKS",
    "BlockSettingsConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "StorageConfig",
    "configure_logging",
    "get_block_settings_config",
    "get_database_config",
    "get_storage_config",
    "validate_default_blocks",
]
