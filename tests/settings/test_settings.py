"""Unit tests for settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cinelist.settings import (
    LoggingSettings,
    PathsSettings,
    Settings,
    TMDBSettings,
    WatchlistSettings,
    get_masked_settings,
    settings,
)


@pytest.fixture
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear TMDB env vars and stop reading .env."""
    for var in (
        "TMDB_API_KEY",
        "TMDB_BASE_URL",
        "TMDB_SEARCH_LANGUAGE",
        "TMDB_PRIMARY_LOCALE",
        "TMDB_SECONDARY_LOCALE",
        "CINELIST_DATA_DIR",
    ):
        monkeypatch.delenv(var, raising=False)

    for cls in (TMDBSettings, PathsSettings, LoggingSettings, WatchlistSettings, Settings):
        new_config = cls.model_config.copy()
        new_config["env_file"] = None
        monkeypatch.setattr(cls, "model_config", new_config)


@pytest.mark.unit
@pytest.mark.usefixtures("clean_settings_env")
class TestTMDBSettings:
    @staticmethod
    def test_default_values() -> None:
        tmdb = TMDBSettings()

        assert tmdb.base_url == "https://api.themoviedb.org/3"
        assert tmdb.small_image_base_url == "https://image.tmdb.org/t/p/w200"
        assert tmdb.large_image_base_url == "https://image.tmdb.org/t/p/w500"
        assert tmdb.search_language == "it"
        assert tmdb.primary_locale == "it-IT"
        assert tmdb.secondary_locale == "en-US"
        assert tmdb.negative_cache_ttl == 600

    @staticmethod
    def test_not_configured_without_key() -> None:
        assert TMDBSettings().is_configured is False
        assert TMDBSettings(TMDB_API_KEY="your_api_key_here").is_configured is False
        assert TMDBSettings(TMDB_API_KEY="abc").is_configured is True

    @staticmethod
    def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TMDB_PRIMARY_LOCALE", "fr-FR")
        monkeypatch.setenv("TMDB_NEGATIVE_CACHE_TTL", "0")

        tmdb = TMDBSettings()

        assert tmdb.primary_locale == "fr-FR"
        assert tmdb.negative_cache_ttl == 0

    @staticmethod
    @pytest.mark.parametrize("locale", ["italian", "IT-it", "it_IT", ""])
    def test_invalid_locale(locale: str) -> None:
        with pytest.raises(ValidationError, match="locale"):
            TMDBSettings(TMDB_PRIMARY_LOCALE=locale)

    @staticmethod
    def test_invalid_timeout() -> None:
        with pytest.raises(ValidationError, match="TMDB_TIMEOUT"):
            TMDBSettings(TMDB_TIMEOUT=0)

    @staticmethod
    def test_invalid_max_retries() -> None:
        with pytest.raises(ValidationError, match="TMDB_MAX_RETRIES"):
            TMDBSettings(TMDB_MAX_RETRIES=0)

    @staticmethod
    def test_negative_ttl_clamped() -> None:
        assert TMDBSettings(TMDB_NEGATIVE_CACHE_TTL=-5).negative_cache_ttl == 0


@pytest.mark.unit
@pytest.mark.usefixtures("clean_settings_env")
class TestOtherSettings:
    @staticmethod
    def test_log_level_normalized() -> None:
        assert LoggingSettings(LOG_LEVEL="debug").level == "DEBUG"

    @staticmethod
    def test_invalid_log_level() -> None:
        with pytest.raises(ValidationError, match="LOG_LEVEL"):
            LoggingSettings(LOG_LEVEL="chatty")

    @staticmethod
    def test_data_dir_defaults_to_working_directory(
        tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert PathsSettings().data_dir == tmp_path / "data"

    @staticmethod
    def test_watchlist_paths_follow_data_dir(
        tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CINELIST_DATA_DIR", str(tmp_path / "films"))

        watchlist = WatchlistSettings(WATCHLIST_CSV_FILENAME="mine.csv")

        assert watchlist.csv_path == tmp_path / "films" / "mine.csv"
        assert watchlist.state_path == tmp_path / "films" / "watchlist_state.json"

    @staticmethod
    def test_loading_settings_creates_no_directory(
        tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)

        config = Settings()
        _ = config.watchlist.state_path

        assert list(tmp_path.iterdir()) == []


@pytest.mark.unit
class TestGlobalSettings:
    @staticmethod
    def test_sections() -> None:
        assert set(Settings.model_fields) == {"paths", "logging", "tmdb", "watchlist"}

    @staticmethod
    def test_masked_settings_hide_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "tmdb", TMDBSettings(TMDB_API_KEY="secret_value"))

        masked = get_masked_settings()

        assert masked["tmdb"]["api_key"] == "***MASKED***"
        assert "secret_value" not in str(masked)
