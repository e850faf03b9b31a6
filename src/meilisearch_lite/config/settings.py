"""Settings management for meilisearch-lite.

This module provides the main Settings class and functions for loading
configuration from YAML files and environment variables.

Example:
    >>> from meilisearch_lite.config import load_settings
    >>> settings = load_settings()
    >>> print(settings.meilisearch.host)
    http://localhost:7700
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import ValidationError, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from meilisearch_lite.config.exceptions import (
    ENV_NESTED_DELIMITER,
    ENV_PREFIX,
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
)
from meilisearch_lite.config.schema import (
    LoggingConfig,
    MeilisearchConfig,
    PollingConfig,
)


if TYPE_CHECKING:
    from collections.abc import Sequence


__all__ = [
    "MASTER_KEY_ENV_VAR",
    "Settings",
    "clear_settings_cache",
    "find_config_file",
    "get_settings",
    "load_settings",
]


MASTER_KEY_ENV_VAR = "MEILI_MASTER_KEY"


# ---------------------------------------------------------------------------
# Environment Variable Interpolation
# ---------------------------------------------------------------------------

# ${VAR} and ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _interpolate_env_vars(value: object) -> object:
    """Recursively interpolate ${VAR} and ${VAR:-default} in strings.

    Args:
        value: Value to interpolate (string, dict, list, or other).

    Returns:
        Value with environment variables interpolated. Dicts and lists are
        processed recursively; other values are returned unchanged.

    Example:
        >>> os.environ["MEILI_KEY"] = "secret123"
        >>> _interpolate_env_vars("${MEILI_KEY}")
        'secret123'
        >>> _interpolate_env_vars("${MISSING:-http://localhost:7700}")
        'http://localhost:7700'
    """
    if isinstance(value, str):

        def replace(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            return match.group(2) or ""

        return _ENV_VAR_PATTERN.sub(replace, value)

    if isinstance(value, dict):
        return {k: _interpolate_env_vars(v) for k, v in value.items()}

    if isinstance(value, list):
        return [_interpolate_env_vars(item) for item in value]

    return value


class _InterpolatingYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YAML settings source that interpolates environment variables."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | str | None = None,
    ) -> None:
        if yaml_file is not None:
            super().__init__(settings_cls, yaml_file=yaml_file)
        else:
            super().__init__(settings_cls)

    def _read_files(
        self,
        files: Path | str | Sequence[Path | str] | None,
    ) -> dict[str, Any]:
        interpolated = _interpolate_env_vars(super()._read_files(files))
        if not isinstance(interpolated, dict):  # pragma: no cover
            return {}
        return interpolated


# ---------------------------------------------------------------------------
# Settings Class
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Client settings loaded from a YAML file and environment variables.

    Settings are loaded in priority order (highest to lowest):
    1. Constructor arguments
    2. Environment variables (MEILI_*, nested with "__")
    3. YAML configuration file
    4. Default values

    Attributes:
        meilisearch: Server connection settings.
        polling: Defaults for waiting on asynchronous updates.
        logging: Log level and format.

    Example:
        >>> import os
        >>> os.environ["MEILI_MEILISEARCH__HOST"] = "http://search:7700"
        >>> load_settings().meilisearch.host
        'http://search:7700'
    """

    model_config = SettingsConfigDict(
        yaml_file=None,
        yaml_file_encoding="utf-8",
        env_prefix=ENV_PREFIX,
        env_nested_delimiter=ENV_NESTED_DELIMITER,
        extra="ignore",
        validate_default=True,
    )

    CONFIG_SEARCH_PATHS: ClassVar[list[Path]] = [
        Path("meilisearch.yaml"),
        Path("meilisearch.yml"),
        Path.home() / ".config" / "meilisearch-lite" / "config.yaml",
        Path("/etc/meilisearch-lite/config.yaml"),
    ]

    # Set by load_settings() before instantiation
    _yaml_file_override: ClassVar[Path | str | None] = None

    meilisearch: MeilisearchConfig = MeilisearchConfig()
    polling: PollingConfig = PollingConfig()
    logging: LoggingConfig = LoggingConfig()

    @model_validator(mode="after")
    def resolve_api_key(self) -> Settings:
        """Resolve the API key from its possible sources.

        Resolution order:
        1. Direct api_key value
        2. api_key_file contents
        3. MEILI_MASTER_KEY environment variable

        Raises:
            ValueError: If api_key_file is set but the file doesn't exist.
        """
        if self.meilisearch.api_key:
            return self

        key_path = self.meilisearch.api_key_file
        if key_path is not None:
            if not key_path.is_file():
                msg = f"API key file not found: {key_path}"
                raise ValueError(msg)
            object.__setattr__(
                self.meilisearch,
                "api_key",
                key_path.read_text().strip(),
            )
            return self

        env_key = os.environ.get(MASTER_KEY_ENV_VAR)
        if env_key:
            object.__setattr__(self.meilisearch, "api_key", env_key)

        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order sources as init, environment, YAML, then file secrets."""
        return (
            init_settings,
            env_settings,
            _InterpolatingYamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._yaml_file_override,
            ),
            file_secret_settings,
        )


# ---------------------------------------------------------------------------
# Settings Loading Functions
# ---------------------------------------------------------------------------

_cached_settings: Settings | None = None


def find_config_file(config_path: Path | str | None = None) -> Path | None:
    """Find the configuration file.

    Args:
        config_path: Explicit path to config file, or None to search
            default locations.

    Returns:
        Path to config file if found, None otherwise.
    """
    if config_path is not None:
        path = Path(config_path)
        return path if path.is_file() else None

    for search_path in Settings.CONFIG_SEARCH_PATHS:
        if search_path.is_file():
            return search_path

    return None


def load_settings(
    config_path: Path | str | None = None,
    *,
    require_config_file: bool = False,
) -> Settings:
    """Load and validate settings.

    The loaded settings are cached for subsequent calls to get_settings().

    Args:
        config_path: Path to YAML config file. If None, searches standard
            locations (./meilisearch.yaml, ./meilisearch.yml,
            ~/.config/meilisearch-lite/config.yaml,
            /etc/meilisearch-lite/config.yaml).
        require_config_file: If True, raise error when no config file found.

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationFileNotFoundError: When require_config_file=True and
            no config file is found.
        ConfigurationValidationError: When configuration validation fails.
    """
    global _cached_settings  # noqa: PLW0603

    config_file = find_config_file(config_path)

    if config_file is None and require_config_file:
        raise ConfigurationFileNotFoundError(
            path=str(config_path) if config_path else None,
            searched_paths=[str(p) for p in Settings.CONFIG_SEARCH_PATHS],
        )

    try:
        Settings._yaml_file_override = config_file  # noqa: SLF001
        try:
            settings = Settings()
        finally:
            Settings._yaml_file_override = None  # noqa: SLF001
    except ConfigurationError:
        raise
    except ValidationError as exc:
        raise ConfigurationValidationError.from_validation_error(
            exc, config_file=config_file
        ) from exc
    except Exception as exc:
        msg = f"Failed to load configuration: {exc}"
        raise ConfigurationValidationError(msg, config_file=config_file) from exc
    else:
        _cached_settings = settings
        return settings


def get_settings() -> Settings:
    """Get the cached settings instance, loading it on first use."""
    global _cached_settings  # noqa: PLW0603

    if _cached_settings is None:
        _cached_settings = load_settings()

    return _cached_settings


def clear_settings_cache() -> None:
    """Clear the cached settings instance (mostly useful in tests)."""
    global _cached_settings  # noqa: PLW0603
    _cached_settings = None
