"""TMDB API configuration settings."""

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOCALE_PATTERN = re.compile(r"^[a-z]{2}(-[A-Z]{2})?$")


class TMDBSettings(BaseSettings):
    """TMDB API configuration.

    Attributes:
        api_key: TMDB v3 API key (required for any network call).
        base_url: TMDB API base URL.
        small_image_base_url: Image CDN prefix for list/grid posters.
        large_image_base_url: Image CDN prefix for detail posters.
        search_language: Language hint sent with catalog searches.
        primary_locale: Locale tried first for overview and director.
        secondary_locale: Fallback locale when the primary lacks a field.
        timeout: Per-request timeout in seconds.
        max_retries: Attempts per request on timeouts and rate limiting.
        negative_cache_ttl: Seconds a "no match" search is remembered (0 disables).
    """

    api_key: str = Field(default="", alias="TMDB_API_KEY")
    base_url: str = Field(
        default="https://api.themoviedb.org/3",
        alias="TMDB_BASE_URL",
    )
    small_image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/w200",
        alias="TMDB_SMALL_IMAGE_BASE_URL",
    )
    large_image_base_url: str = Field(
        default="https://image.tmdb.org/t/p/w500",
        alias="TMDB_LARGE_IMAGE_BASE_URL",
    )

    # Locales
    search_language: str = Field(default="it", alias="TMDB_SEARCH_LANGUAGE")
    primary_locale: str = Field(default="it-IT", alias="TMDB_PRIMARY_LOCALE")
    secondary_locale: str = Field(default="en-US", alias="TMDB_SECONDARY_LOCALE")

    # Transport
    timeout: float = Field(default=10.0, alias="TMDB_TIMEOUT")
    max_retries: int = Field(default=3, alias="TMDB_MAX_RETRIES")

    # Rate limiting
    requests_per_period: int = Field(default=40, alias="TMDB_REQUESTS_PER_PERIOD")
    period_seconds: int = Field(default=10, alias="TMDB_PERIOD_SECONDS")
    min_request_delay: float = Field(default=0.0, alias="TMDB_MIN_REQUEST_DELAY")

    # Cache
    negative_cache_ttl: float = Field(default=600.0, alias="TMDB_NEGATIVE_CACHE_TTL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if TMDB API key is configured."""
        return bool(self.api_key and self.api_key != "your_api_key_here")

    @field_validator("search_language", "primary_locale", "secondary_locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Validate locale looks like 'it' or 'it-IT'."""
        if not _LOCALE_PATTERN.match(v):
            raise ValueError(f"Invalid locale tag: {v!r} (expected 'xx' or 'xx-YY')")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("TMDB_TIMEOUT must be > 0")
        return v

    @field_validator("max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """Validate at least one attempt is made."""
        if v < 1:
            raise ValueError("TMDB_MAX_RETRIES must be >= 1")
        return v

    @field_validator("negative_cache_ttl")
    @classmethod
    def validate_negative_cache_ttl(cls, v: float) -> float:
        """Clamp negative TTL values to zero (disabled)."""
        return max(v, 0.0)
