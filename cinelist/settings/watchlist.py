"""Watchlist file locations."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cinelist.settings.base import PathsSettings


class WatchlistSettings(BaseSettings):
    """Watchlist export and saved state configuration.

    Attributes:
        csv_filename: Letterboxd export filename under the data directory.
        state_filename: JSON file holding ranked and deleted IDs.
    """

    csv_filename: str = Field(default="watchlist.csv", alias="WATCHLIST_CSV_FILENAME")
    state_filename: str = Field(
        default="watchlist_state.json",
        alias="WATCHLIST_STATE_FILENAME",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def csv_path(self) -> Path:
        """Full path to the watchlist CSV export."""
        return PathsSettings().data_dir / self.csv_filename

    @property
    def state_path(self) -> Path:
        """Full path to the saved ranking state."""
        return PathsSettings().data_dir / self.state_filename
