"""
hurlkit Settings - built-in defaults for runner configuration and log files.

Defaults used by the configuration resolver when a flag is absent. Each can
be overridden through a HURLKIT_-prefixed environment variable.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunnerSettings(BaseSettings):
    """Runner defaults.

    Environment variables:
        HURLKIT_CONNECT_TIMEOUT_SECONDS: Default for --connect-timeout. Default: 300
        HURLKIT_TIMEOUT_SECONDS: Default for --max-time. Default: 300
        HURLKIT_MAX_REDIRECT: Default for --max-redirs. Default: 50
        HURLKIT_VARIABLE_ENV_PREFIX: Prefix marking environment variables that
            are injected as Hurl variables. Default: HURL_
    """

    connect_timeout_seconds: int = Field(
        default=300,
        ge=0,
        description="Maximum time in seconds allowed for connection",
    )
    timeout_seconds: int = Field(
        default=300,
        ge=0,
        description="Maximum time in seconds allowed for the transfer",
    )
    max_redirect: int = Field(
        default=50,
        ge=0,
        description="Maximum number of redirects followed when --max-redirs is absent",
    )
    variable_env_prefix: str = Field(
        default="HURL_",
        min_length=1,
        description="Environment variable prefix for user-defined variables",
    )

    model_config = SettingsConfigDict(env_prefix="HURLKIT_")


class LoggingSettings(BaseSettings):
    """Log file settings shared by hurl and hurlfmt.

    Environment variables:
        HURLKIT_LOGGING_DIRECTORY: Directory receiving hurlkit.log; no log
            file when unset. --log-dir takes precedence.
        HURLKIT_LOGGING_MAX_FILE_SIZE_MB: Rotation size. Default: 10
        HURLKIT_LOGGING_BACKUP_COUNT: Rotated files kept. Default: 5
    """

    directory: Optional[Path] = Field(default=None)
    max_file_size_mb: int = Field(default=10, ge=1)
    backup_count: int = Field(default=5, ge=0)

    model_config = SettingsConfigDict(env_prefix="HURLKIT_LOGGING_")


@lru_cache
def get_runner_settings() -> RunnerSettings:
    """Get runner settings with caching."""
    return RunnerSettings()


@lru_cache
def get_logging_settings() -> LoggingSettings:
    """Get logging settings with caching."""
    return LoggingSettings()


def clear_settings_cache() -> None:
    """Clear settings cache."""
    get_runner_settings.cache_clear()
    get_logging_settings.cache_clear()


__all__ = [
    "RunnerSettings",
    "LoggingSettings",
    "get_runner_settings",
    "get_logging_settings",
    "clear_settings_cache",
]
