"""Value objects passed between the enrichment stages."""

import re
from dataclasses import dataclass
from enum import Enum

_NON_DIGITS = re.compile(r"\D")

CACHE_KEY_SEPARATOR = "-"


def normalize_year(year: str) -> str:
    """Keep only the digits of a free-form year ('2021 (film)' -> '2021')."""
    return _NON_DIGITS.sub("", year or "")


# =============================================================================
# QUERY
# =============================================================================


@dataclass(frozen=True)
class EnrichmentQuery:
    """Title and year as they appear in the watchlist.

    Attributes:
        title: Film title.
        year: Release year, possibly with non-digit noise.
    """

    title: str
    year: str

    @property
    def normalized_year(self) -> str:
        """Digit-only year, empty if the source year had no digits."""
        return normalize_year(self.year)

    @property
    def cache_key(self) -> str:
        """Canonical key shared by every query with the same title and digits."""
        return f"{self.title}{CACHE_KEY_SEPARATOR}{self.normalized_year}"


# =============================================================================
# STAGE RESULTS
# =============================================================================


@dataclass(frozen=True)
class CatalogMatch:
    """First search hit for a query.

    Attributes:
        catalog_id: TMDB movie ID.
        poster_path: Poster path relative to the image CDN, if any.
    """

    catalog_id: int
    poster_path: str | None = None


class SearchStatus(Enum):
    """How a catalog search ended."""

    MATCH = "match"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class SearchOutcome:
    """Search result that keeps 'nothing found' apart from 'could not search'."""

    status: SearchStatus
    match: CatalogMatch | None = None

    @classmethod
    def found(cls, match: CatalogMatch) -> "SearchOutcome":
        return cls(SearchStatus.MATCH, match)

    @classmethod
    def not_found(cls) -> "SearchOutcome":
        return cls(SearchStatus.NOT_FOUND)

    @classmethod
    def failed(cls) -> "SearchOutcome":
        return cls(SearchStatus.FAILED)


@dataclass(frozen=True)
class LocaleDetail:
    """Text metadata fetched in one locale.

    Attributes:
        overview: Synopsis, None when missing or blank.
        director: Name of the first crew member credited as Director.
    """

    overview: str | None = None
    director: str | None = None

    @property
    def has_overview(self) -> bool:
        return bool(self.overview)


# =============================================================================
# FINAL RESULT
# =============================================================================


@dataclass(frozen=True)
class EnrichmentResult:
    """Poster URLs and text metadata for one watchlist entry.

    Attributes:
        small_poster_url: Poster sized for lists and grids.
        large_poster_url: Poster sized for the detail view.
        overview: Synopsis in the primary locale, or the secondary as fallback.
        director: Director name from either locale.
    """

    small_poster_url: str | None = None
    large_poster_url: str | None = None
    overview: str | None = None
    director: str | None = None
