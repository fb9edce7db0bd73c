"""Runtime settings for recordkit.

The record toolkit has a handful of conventions that applications sometimes
need to change without touching call sites: the tag namespace used for
external names, the env tag, the separator used for nested diff paths and the
layout of timestamps in query maps. ``RecordKitSettings`` exposes them as
environment-driven configuration.

Manifesto:
    - **Pydantic validation:** Type-checked when first loaded
    - **Environment-driven:** Reads ``RECORDKIT_*`` env vars and .env files
    - **Sensible defaults:** ``api`` tags, ``_`` separators, UTC wall-clock layout

Examples:
    >>> from recordkit.core.settings import get_settings
    >>> get_settings().path_separator
    '_'

Tags:
    settings, configuration, pydantic, environment, recordkit

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from recordkit.core.errors import ConfigError


class RecordKitSettings(BaseSettings):
    """Settings shared by every record operation.

    Fields
    ──────
    api_tag            : Tag namespace holding external field names
    env_tag            : Tag namespace holding environment variable names
    path_separator     : Joins nested field names in diff paths
    query_time_format  : strftime layout for timestamps in query maps
    debug              : Enable debug mode
    log_level          : Structlog log level
    """

    model_config = SettingsConfigDict(
        env_prefix="RECORDKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Tags ─────────────────────────────────────────────────────
    api_tag: str = "api"
    env_tag: str = "env"

    # ── Formatting ───────────────────────────────────────────────
    path_separator: str = Field(
        default="_",
        description="Nested diff path separator; periods are rejected by some document stores",
    )
    query_time_format: str = "%A %B %d %H:%M:%S %Y %z"

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("api_tag", "env_tag", "path_separator")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> RecordKitSettings:
    """Return the process-wide settings, loading them on first use."""
    try:
        return RecordKitSettings()
    except ValidationError as exc:
        raise ConfigError(f"invalid recordkit settings: {exc}", cause=exc) from exc


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()


__all__ = ["RecordKitSettings", "get_settings", "reset_settings"]
