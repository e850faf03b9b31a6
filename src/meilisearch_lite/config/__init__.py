"""Configuration module for meilisearch-lite.

Configuration is managed with Pydantic settings, loaded from a YAML file
and overridden by ``MEILI_*`` environment variables. YAML values support
${VAR} and ${VAR:-default} interpolation.

Example:
    >>> from meilisearch_lite.config import load_settings, get_settings
    >>>
    >>> settings = load_settings()
    >>> print(settings.meilisearch.host)
    http://localhost:7700
    >>> print(settings.polling.interval)
    0.05
    >>>
    >>> # Use cached singleton
    >>> settings = get_settings()
"""

from __future__ import annotations

from meilisearch_lite.config.exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    SettingIssue,
)
from meilisearch_lite.config.schema import (
    ConfigBaseModel,
    LoggingConfig,
    MeilisearchConfig,
    PollingConfig,
)
from meilisearch_lite.config.settings import (
    MASTER_KEY_ENV_VAR,
    Settings,
    clear_settings_cache,
    find_config_file,
    get_settings,
    load_settings,
)


__all__ = [
    "MASTER_KEY_ENV_VAR",
    "ConfigBaseModel",
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "LoggingConfig",
    "MeilisearchConfig",
    "PollingConfig",
    "SettingIssue",
    "Settings",
    "clear_settings_cache",
    "find_config_file",
    "get_settings",
    "load_settings",
]
