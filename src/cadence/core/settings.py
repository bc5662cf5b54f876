"""
Environment-driven settings for cadence.

cadence wrappers are configured per call site (a debounce wait, a retry
budget); what is process-wide is how the library reports itself. Those knobs
live here and are read from ``CADENCE_``-prefixed environment variables or a
``.env`` file.

Features:
    - **CadenceSettings:** log_level, log_json, service_name
    - **env_prefix:** ``CADENCE_LOG_LEVEL=DEBUG`` etc.
    - **.env file support:** Automatic loading via pydantic-settings
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> from cadence.core.settings import get_settings
    >>> get_settings().log_level
    'INFO'

Tags:
    settings, configuration, pydantic, environment, cadence

Doc-Types:
    api-reference
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class CadenceSettings(BaseSettings):
    """Process-wide settings for cadence.

    Fields
    ──────
    log_level    : structlog filtering level used by ``configure_logging``
    log_json     : Force JSON (True) or console (False) rendering; None = auto
    service_name : ``service.name`` attached to every log line
    """

    model_config = SettingsConfigDict(
        env_prefix="CADENCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None
    service_name: str = Field(default="cadence", min_length=1)

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return value


@lru_cache(maxsize=1)
def get_settings() -> CadenceSettings:
    """Return the cached settings instance (``get_settings.cache_clear()`` resets it)."""
    return CadenceSettings()


__all__ = ["CadenceSettings", "get_settings"]
