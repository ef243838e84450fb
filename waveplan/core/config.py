"""Configuration management using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    waveplan_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    waveplan_debug: bool = Field(
        default=False,
        description="Enable debug mode (forces DEBUG console logging)",
    )
    waveplan_log_dir: str | None = Field(
        default=None,
        description="Directory for rotating log files; console only when unset",
    )

    # Wave planning
    waveplan_war_separates_waves: bool = Field(
        default=False,
        description="Treat WAR hazards as wave ordering constraints like RAW/WAW",
    )
    waveplan_critical_first: bool = Field(
        default=True,
        description="Order critical-path tasks first within each wave",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance loaded from environment.

    Example:
        >>> settings = get_settings()
        >>> settings.waveplan_war_separates_waves
        False
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
