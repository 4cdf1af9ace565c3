"""Letterboxd watchlist CSV reader.

Reads exports with the columns Date, Name, Year, Letterboxd URI
using Polars. Every column is read as text; quoted titles with
commas ("I, Tonya") are handled by the CSV parser.
"""

from pathlib import Path

import polars as pl

from cinelist.utils import setup_logger
from cinelist.watchlist.models import Movie

logger = setup_logger("watchlist.csv")


class WatchlistError(Exception):
    """Base exception for watchlist loading errors."""

    pass


class WatchlistFileNotFoundError(WatchlistError):
    """Raised when the export file does not exist."""

    pass


class WatchlistParseError(WatchlistError):
    """Raised when the export cannot be read as a watchlist."""

    pass


class WatchlistCSVReader:
    """Loads watchlist entries from a Letterboxd CSV export."""

    # -------------------------------------------------------------------------
    # Column Configuration
    # -------------------------------------------------------------------------

    DATE_COLUMN = "Date"
    TITLE_COLUMN = "Name"
    YEAR_COLUMN = "Year"
    ID_COLUMN = "Letterboxd URI"

    REQUIRED_COLUMNS: frozenset[str] = frozenset({TITLE_COLUMN, YEAR_COLUMN, ID_COLUMN})

    def __init__(self) -> None:
        self._skipped_rows: int = 0

    @property
    def skipped_rows(self) -> int:
        """Rows dropped by the last load for lacking a title or URI."""
        return self._skipped_rows

    def load(self, csv_path: Path) -> list[Movie]:
        """Read a watchlist export.

        Args:
            csv_path: Path to the CSV file.

        Returns:
            Movies in file order.

        Raises:
            WatchlistFileNotFoundError: If the file does not exist.
            WatchlistParseError: If the file is unreadable or lacks columns.
        """
        if not csv_path.exists():
            raise WatchlistFileNotFoundError(f"Watchlist CSV not found: {csv_path}")

        logger.info(f"Reading watchlist: {csv_path}")
        df = self._read_csv(csv_path)
        df = self._validate_and_filter(df)

        return [
            Movie(
                id=row[self.ID_COLUMN],
                title=row[self.TITLE_COLUMN],
                year=row[self.YEAR_COLUMN] or "",
                date_added=row.get(self.DATE_COLUMN) or "",
            )
            for row in df.iter_rows(named=True)
        ]

    # -------------------------------------------------------------------------
    # CSV Reading
    # -------------------------------------------------------------------------

    def _read_csv(self, csv_path: Path) -> pl.DataFrame:
        """Read CSV file with Polars, all columns as strings.

        Args:
            csv_path: Path to CSV file.

        Returns:
            Polars DataFrame.
        """
        try:
            df = pl.read_csv(csv_path, infer_schema_length=0, null_values=[""])
        except (pl.exceptions.PolarsError, OSError) as e:
            raise WatchlistParseError(f"Cannot read {csv_path}: {e}") from e

        missing = self.REQUIRED_COLUMNS - set(df.columns)
        if missing:
            raise WatchlistParseError(
                f"{csv_path} is missing columns: {', '.join(sorted(missing))}"
            )
        return df

    def _validate_and_filter(self, df: pl.DataFrame) -> pl.DataFrame:
        """Trim text columns and drop rows without a title or URI.

        Args:
            df: Raw DataFrame.

        Returns:
            Filtered DataFrame with valid rows only.
        """
        initial_count = len(df)

        text_columns = [c for c in df.columns if c in self.REQUIRED_COLUMNS | {self.DATE_COLUMN}]
        df = df.with_columns(pl.col(text_columns).str.strip_chars())
        df = df.filter(
            pl.col(self.TITLE_COLUMN).is_not_null()
            & (pl.col(self.TITLE_COLUMN) != "")
            & pl.col(self.ID_COLUMN).is_not_null()
            & (pl.col(self.ID_COLUMN) != "")
        )

        self._skipped_rows = initial_count - len(df)

        logger.info(f"Filtered: {len(df)} valid, {self._skipped_rows} skipped")
        return df
