"""Configuration schema models for meilisearch-lite.

This module defines Pydantic models for all configuration sections.
These models are used by the Settings class to validate and type-check
configuration loaded from YAML files and environment variables.
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - needed at runtime for Pydantic
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from meilisearch_lite.client.polling import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_WAIT_TIMEOUT,
    FetchFailurePolicy,
)
from meilisearch_lite.observability.logging import LogFormat, LogLevel


__all__ = [
    "ConfigBaseModel",
    "LoggingConfig",
    "MeilisearchConfig",
    "PollingConfig",
]


class ConfigBaseModel(BaseModel):
    """Base model for all configuration sections.

    Uses stricter settings than API models to catch configuration typos:
    - extra="forbid" raises errors for unknown fields
    - validate_default=True ensures defaults are validated
    """

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        validate_default=True,
    )


# ---------------------------------------------------------------------------
# Server Configuration
# ---------------------------------------------------------------------------


class MeilisearchConfig(ConfigBaseModel):
    """Meilisearch connection configuration.

    The API key is optional. If both `api_key` and `api_key_file` are set,
    `api_key` takes precedence. Environment variable interpolation is
    supported in the `api_key` field using ${VAR} syntax.

    Attributes:
        host: Base URL of the Meilisearch server.
        api_key: API key sent in the X-Meili-API-Key header.
        api_key_file: Path to a file containing the API key.
        timeout: Read/write/pool timeout for requests, in seconds.
        connect_timeout: Connection timeout, in seconds.
    """

    host: str = Field(
        default="http://localhost:7700",
        description="Base URL of the Meilisearch server",
    )
    api_key: str | None = Field(
        default=None,
        description="API key (supports ${VAR} interpolation)",
    )
    api_key_file: Path | None = Field(
        default=None,
        description="Path to file containing the API key",
    )
    timeout: Annotated[float, Field(gt=0, description="Request timeout")] = 30.0
    connect_timeout: Annotated[
        float,
        Field(gt=0, description="Connection timeout"),
    ] = 10.0

    @field_validator("host")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove trailing slash from URL to avoid double slashes."""
        return v.rstrip("/")


# ---------------------------------------------------------------------------
# Update Polling Configuration
# ---------------------------------------------------------------------------


class PollingConfig(ConfigBaseModel):
    """Defaults for waiting on asynchronous updates.

    Attributes:
        timeout: Seconds to wait for an update before giving up.
        interval: Seconds between two status polls.
        fetch_failure_policy: What a wait does when a status fetch fails.
    """

    timeout: Annotated[
        float,
        Field(gt=0, description="Wait deadline in seconds"),
    ] = DEFAULT_WAIT_TIMEOUT
    interval: Annotated[
        float,
        Field(gt=0, le=60, description="Poll interval in seconds"),
    ] = DEFAULT_POLL_INTERVAL
    fetch_failure_policy: FetchFailurePolicy = Field(
        default=FetchFailurePolicy.UNKNOWN,
    )


# ---------------------------------------------------------------------------
# Logging Configuration
# ---------------------------------------------------------------------------


class LoggingConfig(ConfigBaseModel):
    """Logging configuration.

    Attributes:
        level: Log verbosity level.
        format: Log output format.
    """

    level: LogLevel = Field(default=LogLevel.INFO)
    format: LogFormat = Field(default=LogFormat.AUTO)

    @field_validator("level", "format", mode="before")
    @classmethod
    def lowercase(cls, v: object) -> object:
        """Accept upper-case names such as "DEBUG" or "JSON"."""
        return v.lower() if isinstance(v, str) else v
