"""Enrichment service: the single entry point used by the CLI and pickers.

Usage:
    async with EnrichmentService.from_settings() as service:
        extras = await service.fetch_extras("Dune", "2021")
"""

from types import TracebackType

import httpx

from cinelist.enrichment.cache import EnrichmentCache
from cinelist.enrichment.client import TMDBClient
from cinelist.enrichment.details import DetailFetchClient
from cinelist.enrichment.fallback import LocaleFallbackResolver
from cinelist.enrichment.models import (
    CatalogMatch,
    EnrichmentQuery,
    EnrichmentResult,
    SearchStatus,
)
from cinelist.enrichment.search import CatalogSearchClient
from cinelist.settings import TMDBSettings, settings
from cinelist.utils import setup_logger

logger = setup_logger("enrichment.service")


class EnrichmentService:
    """Composes search, locale fallback and cache into fetch_extras().

    Build one instance at start-up and share it: the cache lives on
    the instance, so results are reused for the whole process.
    """

    def __init__(
        self,
        search_client: CatalogSearchClient,
        resolver: LocaleFallbackResolver,
        cache: EnrichmentCache,
        small_image_base_url: str,
        large_image_base_url: str,
        client: TMDBClient | None = None,
    ) -> None:
        """Initialize service from its collaborators.

        Args:
            search_client: Catalog search client.
            resolver: Locale fallback resolver.
            cache: Enrichment cache.
            small_image_base_url: Prefix for list/grid posters.
            large_image_base_url: Prefix for detail posters.
            client: Transport to close with the service, if owned.
        """
        self._search = search_client
        self._resolver = resolver
        self._cache = cache
        self._small_image_base_url = small_image_base_url.rstrip("/")
        self._large_image_base_url = large_image_base_url.rstrip("/")
        self._client = client

    @classmethod
    def from_settings(
        cls,
        tmdb_settings: TMDBSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "EnrichmentService":
        """Wire the full pipeline from configuration.

        Args:
            tmdb_settings: TMDB configuration. Defaults to global settings.
            http_client: Optional pre-built httpx client.

        Returns:
            Ready-to-use service (enter it as an async context manager).

        Raises:
            TMDBConfigurationError: If TMDB_API_KEY is not set.
        """
        cfg = tmdb_settings or settings.tmdb
        client = TMDBClient(cfg, http_client=http_client)
        return cls(
            search_client=CatalogSearchClient(client, language=cfg.search_language),
            resolver=LocaleFallbackResolver(
                DetailFetchClient(client),
                primary_locale=cfg.primary_locale,
                secondary_locale=cfg.secondary_locale,
            ),
            cache=EnrichmentCache(negative_ttl=cfg.negative_cache_ttl),
            small_image_base_url=cfg.small_image_base_url,
            large_image_base_url=cfg.large_image_base_url,
            client=client,
        )

    async def __aenter__(self) -> "EnrichmentService":
        if self._client is not None:
            await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def cache(self) -> EnrichmentCache:
        return self._cache

    async def fetch_extras(self, title: str, year: str) -> EnrichmentResult | None:
        """Return posters, overview and director for a watchlist entry.

        Failures at any stage are logged and reported as None; they
        are not cached, so a later call tries again.

        Args:
            title: Film title.
            year: Release year as written in the watchlist.

        Returns:
            EnrichmentResult, or None if the film could not be matched or enriched.
        """
        query = EnrichmentQuery(title=title, year=year)
        return await self._cache.get_or_compute(query, self._enrich)

    async def _enrich(self, query: EnrichmentQuery) -> EnrichmentResult | SearchStatus:
        """Cache-miss body. Unexpected errors become SearchStatus.FAILED."""
        try:
            return await self._run_pipeline(query)
        except Exception as e:
            logger.error(
                f"Enrichment failed for '{query.title}' ({query.normalized_year}): {e}"
            )
            return SearchStatus.FAILED

    async def _run_pipeline(self, query: EnrichmentQuery) -> EnrichmentResult | SearchStatus:
        """Search, build poster URLs, resolve details."""
        outcome = await self._search.lookup(query.title, query.normalized_year)
        if outcome.match is None:
            return outcome.status

        match = outcome.match
        small_url, large_url = self.build_poster_urls(match)
        overview, director = await self._resolver.resolve_details(match.catalog_id)

        logger.info(
            f"Enriched '{query.title}' ({query.normalized_year}) -> TMDB {match.catalog_id}"
        )
        return EnrichmentResult(
            small_poster_url=small_url,
            large_poster_url=large_url,
            overview=overview,
            director=director,
        )

    def build_poster_urls(self, match: CatalogMatch) -> tuple[str | None, str | None]:
        """Return (small, large) poster URLs, both None without a poster path."""
        if not match.poster_path:
            return None, None
        path = match.poster_path if match.poster_path.startswith("/") else f"/{match.poster_path}"
        return self._small_image_base_url + path, self._large_image_base_url + path
