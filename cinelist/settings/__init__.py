"""Centralized configuration for cinelist.

All configuration values are sourced from environment variables
(.env file). The TMDB API key has no usable default: network calls
refuse to start until TMDB_API_KEY is set.

Usage:
    from cinelist.settings import settings

    settings.tmdb.api_key
    settings.watchlist.csv_path
"""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cinelist.settings.base import LoggingSettings, PathsSettings
from cinelist.settings.tmdb import TMDBSettings
from cinelist.settings.watchlist import WatchlistSettings

__all__ = [
    "Settings",
    "settings",
    "PathsSettings",
    "LoggingSettings",
    "TMDBSettings",
    "WatchlistSettings",
    "get_masked_settings",
]


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Global application settings.

    Aggregates all configuration sections into a single object.
    Access via the singleton: `from cinelist.settings import settings`
    """

    paths: PathsSettings = Field(default_factory=PathsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    tmdb: TMDBSettings = Field(default_factory=TMDBSettings)
    watchlist: WatchlistSettings = Field(default_factory=WatchlistSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_masked_settings() -> dict[str, Any]:
    """Return settings dict with sensitive values masked.

    Returns:
        Configuration dictionary safe for logging.
    """
    config = settings.model_dump()
    if config["tmdb"].get("api_key"):
        config["tmdb"]["api_key"] = "***MASKED***"
    return config
