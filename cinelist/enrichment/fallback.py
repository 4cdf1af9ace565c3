"""Locale fallback: merge details from a primary and a secondary locale."""

from cinelist.enrichment.details import DetailFetchClient
from cinelist.enrichment.models import LocaleDetail
from cinelist.utils import setup_logger

logger = setup_logger("enrichment.fallback")


class LocaleFallbackResolver:
    """Resolves overview and director with a per-field locale fallback.

    The primary locale is always fetched. The secondary locale is
    fetched only when the primary lacks an overview or a director,
    and each field then falls back on its own: a primary overview is
    kept even when the secondary call was made for the director.
    """

    def __init__(
        self,
        details: DetailFetchClient,
        primary_locale: str,
        secondary_locale: str,
    ) -> None:
        """Initialize resolver.

        Args:
            details: Detail fetch client.
            primary_locale: Locale tried first (e.g. 'it-IT').
            secondary_locale: Fallback locale (e.g. 'en-US').
        """
        self._details = details
        self._primary_locale = primary_locale
        self._secondary_locale = secondary_locale

    async def resolve_details(self, catalog_id: int) -> tuple[str | None, str | None]:
        """Return (overview, director) for a catalog entry.

        Args:
            catalog_id: TMDB movie ID.

        Returns:
            Overview and director, each None if no locale had it.
        """
        primary = await self._details.fetch_detail(catalog_id, self._primary_locale)
        primary = primary or LocaleDetail()

        if primary.has_overview and primary.director:
            return primary.overview, primary.director

        logger.debug(
            f"TMDB {catalog_id}: incomplete {self._primary_locale} detail, "
            f"trying {self._secondary_locale}"
        )
        secondary = await self._details.fetch_detail(catalog_id, self._secondary_locale)
        secondary = secondary or LocaleDetail()

        overview = primary.overview if primary.has_overview else secondary.overview
        director = primary.director or secondary.director
        return overview or None, director
