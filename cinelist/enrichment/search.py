"""Catalog search: resolve a title and year to a TMDB movie ID."""

from typing import Any

from cinelist.enrichment.client import TMDBClient, TMDBClientError
from cinelist.enrichment.models import CatalogMatch, SearchOutcome
from cinelist.utils import setup_logger

logger = setup_logger("enrichment.search")


class CatalogSearchClient:
    """Finds the catalog entry for a watchlist title.

    Only the first search result is used; TMDB's own ordering is
    trusted. Failures never propagate: they are logged and reported
    as SearchStatus.FAILED (or None from search()).
    """

    def __init__(self, client: TMDBClient, language: str) -> None:
        """Initialize search client.

        Args:
            client: Shared TMDB transport.
            language: Language hint sent with each search.
        """
        self._client = client
        self._language = language

    async def search(self, title: str, normalized_year: str) -> CatalogMatch | None:
        """Return the first match for title/year, or None."""
        outcome = await self.lookup(title, normalized_year)
        return outcome.match

    async def lookup(self, title: str, normalized_year: str) -> SearchOutcome:
        """Search the catalog and report how the search ended.

        Args:
            title: Film title (non-empty).
            normalized_year: Digit-only year, may be empty.

        Returns:
            SearchOutcome with MATCH, NOT_FOUND or FAILED status.
        """
        if not title.strip():
            logger.warning("Catalog search skipped: empty title")
            return SearchOutcome.not_found()

        try:
            payload = await self._client.search_movies(
                title,
                year=normalized_year or None,
                language=self._language,
            )
        except TMDBClientError as e:
            logger.warning(f"Catalog search failed for '{title}' ({normalized_year}): {e}")
            return SearchOutcome.failed()

        results = payload.get("results")
        if not isinstance(results, list):
            logger.warning(f"Malformed search response for '{title}'")
            return SearchOutcome.failed()

        if not results:
            logger.info(f"No catalog match for '{title}' ({normalized_year})")
            return SearchOutcome.not_found()

        match = self._parse_result(results[0])
        if match is None:
            logger.warning(f"Malformed first search result for '{title}'")
            return SearchOutcome.failed()

        logger.debug(f"Matched '{title}' -> TMDB {match.catalog_id}")
        return SearchOutcome.found(match)

    @staticmethod
    def _parse_result(result: Any) -> CatalogMatch | None:
        """Build a CatalogMatch from one search result.

        Args:
            result: First entry of the results list.

        Returns:
            CatalogMatch, or None if the entry has no integer ID.
        """
        if not isinstance(result, dict):
            return None

        catalog_id = result.get("id")
        if not isinstance(catalog_id, int) or isinstance(catalog_id, bool):
            return None

        poster_path = result.get("poster_path")
        if not isinstance(poster_path, str) or not poster_path:
            poster_path = None

        return CatalogMatch(catalog_id=catalog_id, poster_path=poster_path)
