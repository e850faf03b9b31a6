"""Errors raised while locating and validating meilisearch-lite settings.

Validation failures are reported per setting, with the dotted setting name
used in YAML files and the ``MEILI_*`` environment variable that overrides
it, so the user can tell which source to fix.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Self


if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from pydantic import ValidationError


__all__ = [
    "ENV_NESTED_DELIMITER",
    "ENV_PREFIX",
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "SettingIssue",
]


ENV_PREFIX = "MEILI_"
ENV_NESTED_DELIMITER = "__"


@dataclass(frozen=True, slots=True)
class SettingIssue:
    """One rejected setting.

    Attributes:
        location: Dotted setting name (e.g. "polling.interval"); empty when
            the check spans several settings.
        message: Why the value was rejected.
    """

    location: str
    message: str

    @property
    def env_var(self) -> str | None:
        """Environment variable overriding this setting, if it has one."""
        if not self.location:
            return None
        parts = self.location.upper().split(".")
        return ENV_PREFIX + ENV_NESTED_DELIMITER.join(parts)

    def __str__(self) -> str:
        """Return the setting, its variable and the reason."""
        if self.env_var is None:
            return self.message
        return f"{self.location} ({self.env_var}): {self.message}"


class ConfigurationError(Exception):
    """Base exception for configuration errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception."""
        super().__init__(message)
        self.message = message


class ConfigurationFileNotFoundError(ConfigurationError):
    """Raised when a required YAML configuration file is missing.

    Attributes:
        path: The file passed with ``--config`` or ``load_settings``, or None
            when the default locations were searched.
        searched_paths: Default locations that were searched.
    """

    def __init__(
        self,
        path: str | None = None,
        searched_paths: Sequence[str] = (),
    ) -> None:
        """Initialize the exception.

        Args:
            path: The explicitly requested file.
            searched_paths: Default locations that were searched.
        """
        self.path = path
        self.searched_paths = list(searched_paths)

        if path:
            message = f"Configuration file not found: {path}"
        else:
            message = (
                "No meilisearch-lite configuration file found. Searched: "
                + ", ".join(self.searched_paths or ["(nothing)"])
                + f". Settings can also be given as {ENV_PREFIX}* "
                "environment variables."
            )
        super().__init__(message)


class ConfigurationValidationError(ConfigurationError):
    """Raised when settings fail to load or validate.

    Attributes:
        issues: One entry per rejected setting; empty when loading failed
            before validation (e.g. malformed YAML).
        config_file: The YAML file that was read, if any.
    """

    def __init__(
        self,
        message: str,
        issues: Sequence[SettingIssue] = (),
        *,
        config_file: Path | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable summary of the failure.
            issues: The rejected settings.
            config_file: The YAML file that was read.
        """
        super().__init__(message)
        self.issues = list(issues)
        self.config_file = config_file

    @classmethod
    def from_validation_error(
        cls,
        exc: ValidationError,
        *,
        config_file: Path | None = None,
    ) -> Self:
        """Build the error from a pydantic validation failure.

        Args:
            exc: The validation error raised while building ``Settings``.
            config_file: The YAML file that was read.

        Returns:
            An error listing every rejected setting.
        """
        issues = [
            SettingIssue(
                location=".".join(str(part) for part in error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        source = str(config_file) if config_file else "environment and defaults"
        message = f"Failed to load configuration from {source}: " + "; ".join(
            str(issue) for issue in issues
        )
        return cls(message, issues, config_file=config_file)
