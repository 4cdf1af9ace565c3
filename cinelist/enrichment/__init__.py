"""TMDB metadata enrichment package.

Resolves a watchlist (title, year) to poster URLs, synopsis and
director, with an Italian-then-English locale fallback and an
in-process single-flight cache.

Classes:
    EnrichmentService: Public entry point (fetch_extras).
    CatalogSearchClient: Title/year search.
    DetailFetchClient: Localized overview and director.
    LocaleFallbackResolver: Per-field primary/secondary locale merge.
    EnrichmentCache: Per-key memoization with in-flight sharing.
    TMDBClient: Async HTTP transport with rate limiting.

Exceptions:
    TMDBClientError: Base client error.
    TMDBConfigurationError: Missing API key.
    TMDBRateLimitError: Rate limit exceeded.
    TMDBNotFoundError: Resource not found.
    TMDBDecodeError: Response body is not a JSON object.
"""

from cinelist.enrichment.cache import EnrichmentCache
from cinelist.enrichment.client import (
    TMDBClient,
    TMDBClientError,
    TMDBConfigurationError,
    TMDBDecodeError,
    TMDBNotFoundError,
    TMDBRateLimitError,
)
from cinelist.enrichment.details import DetailFetchClient
from cinelist.enrichment.fallback import LocaleFallbackResolver
from cinelist.enrichment.models import (
    CatalogMatch,
    EnrichmentQuery,
    EnrichmentResult,
    LocaleDetail,
    SearchOutcome,
    SearchStatus,
)
from cinelist.enrichment.search import CatalogSearchClient
from cinelist.enrichment.service import EnrichmentService

__all__ = [
    "EnrichmentService",
    "CatalogSearchClient",
    "DetailFetchClient",
    "LocaleFallbackResolver",
    "EnrichmentCache",
    "TMDBClient",
    "TMDBClientError",
    "TMDBConfigurationError",
    "TMDBDecodeError",
    "TMDBNotFoundError",
    "TMDBRateLimitError",
    "CatalogMatch",
    "EnrichmentQuery",
    "EnrichmentResult",
    "LocaleDetail",
    "SearchOutcome",
    "SearchStatus",
]
