"""Codec configuration loaded from environment variables."""

from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings loaded from environment variables with OLAP_HINTS_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="OLAP_HINTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    debug: bool = False

    # Logging
    structured_logging: bool = False
    log_level: str = "WARNING"

    # Profiling
    profile_max_results: int = 100

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @field_validator("profile_max_results")
    @classmethod
    def positive_max_results(cls, v: int) -> int:
        if v < 1:
            raise ValueError("profile_max_results must be at least 1")
        return v


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Loaded settings (structured_logging=%s)", settings.structured_logging)

    return settings


_settings_cache: Settings | None = None


def get_settings() -> Settings:
    """Return the cached :class:`Settings` singleton."""
    global _settings_cache  # noqa: PLW0603
    if _settings_cache is None:
        _settings_cache = load_settings()
    return _settings_cache


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings_cache  # noqa: PLW0603
    _settings_cache = None
