"""Watchlist entry model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Movie:
    """One row of a Letterboxd watchlist export.

    Attributes:
        id: Letterboxd URI, unique per film.
        title: Film title.
        year: Release year as exported (kept as text).
        date_added: Date the film was added to the list.
    """

    id: str
    title: str
    year: str
    date_added: str = ""

    @property
    def year_sort_key(self) -> int:
        """Numeric year for ordering, 0 when the year has no digits."""
        digits = "".join(ch for ch in self.year if ch.isdigit())
        return int(digits) if digits else 0
