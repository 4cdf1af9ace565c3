"""Detail fetch: overview and director for one movie in one locale."""

from typing import Any

from cinelist.enrichment.client import TMDBClient, TMDBClientError
from cinelist.enrichment.models import LocaleDetail
from cinelist.types import TMDBMovieDetailData
from cinelist.utils import setup_logger

logger = setup_logger("enrichment.details")


class DetailFetchClient:
    """Fetches localized text metadata for a catalog entry.

    Credits are requested in the same call through
    append_to_response, so one locale costs one request.
    """

    DIRECTOR_JOB = "Director"

    def __init__(self, client: TMDBClient) -> None:
        self._client = client

    async def fetch_detail(self, catalog_id: int, locale: str) -> LocaleDetail | None:
        """Fetch overview and director in a locale.

        Args:
            catalog_id: TMDB movie ID.
            locale: Locale tag, e.g. 'it-IT'.

        Returns:
            LocaleDetail, or None on transport or decode failure.
        """
        try:
            payload = await self._client.get_movie_with_credits(catalog_id, locale)
        except TMDBClientError as e:
            logger.warning(f"Detail fetch failed for TMDB {catalog_id} [{locale}]: {e}")
            return None

        return self.parse_detail(payload, catalog_id, locale)

    @classmethod
    def parse_detail(
        cls,
        payload: TMDBMovieDetailData,
        catalog_id: int,
        locale: str,
    ) -> LocaleDetail:
        """Extract overview and director from a detail payload.

        A malformed credits block only costs the director; the
        overview is kept.

        Args:
            payload: Raw /movie/{id} response with credits.
            catalog_id: TMDB movie ID (for logging).
            locale: Locale tag (for logging).

        Returns:
            Parsed LocaleDetail.
        """
        overview = cls._clean_string(payload.get("overview"))

        try:
            director = cls._find_director(payload.get("credits"))
        except (TypeError, AttributeError) as e:
            logger.warning(f"Malformed credits for TMDB {catalog_id} [{locale}]: {e}")
            director = None

        return LocaleDetail(overview=overview, director=director)

    @classmethod
    def _find_director(cls, credits_data: Any) -> str | None:
        """Return the first crew member credited as Director.

        Args:
            credits_data: The 'credits' block, possibly missing.

        Returns:
            Director name or None.
        """
        if credits_data is None:
            return None

        for member in credits_data.get("crew") or []:
            if member.get("job") == cls.DIRECTOR_JOB:
                return cls._clean_string(member.get("name"))
        return None

    @staticmethod
    def _clean_string(value: Any) -> str | None:
        """Strip a string value; blanks and non-strings become None."""
        if not isinstance(value, str):
            return None
        cleaned = value.strip()
        return cleaned or None
