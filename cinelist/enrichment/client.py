"""Async TMDB API client with rate limiting.

Handles HTTP communication with The Movie Database API
including authentication, rate limiting, timeouts and retries.
"""

import asyncio
import time
from types import TracebackType
from typing import Any, cast

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from cinelist import __version__
from cinelist.settings import TMDBSettings, settings
from cinelist.types import TMDBMovieDetailData, TMDBSearchResponse
from cinelist.utils import setup_logger

logger = setup_logger("enrichment.client")

_USER_AGENT = f"cinelist/{__version__}"


class TMDBClientError(Exception):
    """Base exception for TMDB client errors."""

    pass


class TMDBConfigurationError(TMDBClientError):
    """Raised when the client is built without an API key."""

    pass


class TMDBRateLimitError(TMDBClientError):
    """Raised when rate limit is exceeded."""

    pass


class TMDBNotFoundError(TMDBClientError):
    """Raised when resource is not found."""

    pass


class TMDBDecodeError(TMDBClientError):
    """Raised when a 200 response does not carry a JSON object."""

    pass


class TMDBClient:
    """Async HTTP client for the TMDB API.

    Implements sliding-window rate limiting to respect
    TMDB's API limits (40 requests per 10 seconds by default).
    Every request carries a bounded timeout; timeouts and 429s are
    retried with exponential back-off, then surface as TMDBClientError.

    Use as an async context manager, or pass an existing
    httpx.AsyncClient which the caller keeps ownership of.

    Attributes:
        stats: Request counters (total_requests, failed_requests).
    """

    def __init__(
        self,
        tmdb_settings: TMDBSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
        retry_wait: wait_base | None = None,
    ) -> None:
        """Initialize TMDB client.

        Args:
            tmdb_settings: TMDB configuration. Defaults to global settings.
            http_client: Optional pre-built client (not closed by us).
            retry_wait: Tenacity wait strategy between retries.

        Raises:
            TMDBConfigurationError: If no API key is configured.
        """
        cfg = tmdb_settings or settings.tmdb
        if not cfg.is_configured:
            raise TMDBConfigurationError("TMDB_API_KEY is not set")

        self._base_url = cfg.base_url.rstrip("/")
        self._api_key = cfg.api_key
        self._timeout = cfg.timeout
        self._max_retries = cfg.max_retries
        self._retry_wait = retry_wait or wait_exponential(multiplier=1, min=2, max=10)

        # Rate limiting state
        self._requests_per_period = cfg.requests_per_period
        self._period_seconds = cfg.period_seconds
        self._min_delay = cfg.min_request_delay
        self._request_times: list[float] = []
        self._rate_lock = asyncio.Lock()

        # HTTP client
        self._client = http_client
        self._owns_client = http_client is None

        self.stats: dict[str, int] = {"total_requests": 0, "failed_requests": 0}

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "TMDBClient":
        """Enter context and create HTTP client if none was injected."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": _USER_AGENT},
            )
            self._owns_client = True
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close the HTTP client we created."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if owned."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------

    async def _wait_for_rate_limit(self) -> None:
        """Wait if necessary to respect rate limits."""
        async with self._rate_lock:
            now = time.monotonic()

            # Remove old request times outside the window
            cutoff = now - self._period_seconds
            self._request_times = [t for t in self._request_times if t > cutoff]

            if len(self._request_times) >= self._requests_per_period:
                oldest = self._request_times[0]
                wait_time = oldest + self._period_seconds - now
                if wait_time > 0:
                    logger.debug(f"Rate limit: waiting {wait_time:.2f}s")
                    await asyncio.sleep(wait_time)

            # Enforce minimum delay between requests
            if self._request_times and self._min_delay > 0:
                elapsed = time.monotonic() - self._request_times[-1]
                if elapsed < self._min_delay:
                    await asyncio.sleep(self._min_delay - elapsed)

            self._request_times.append(time.monotonic())

    # -------------------------------------------------------------------------
    # HTTP Methods
    # -------------------------------------------------------------------------

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute GET request with rate limiting and retries.

        Args:
            endpoint: API endpoint path.
            params: Optional query parameters.

        Returns:
            JSON response as dictionary.

        Raises:
            TMDBClientError: On transport errors, timeouts and API errors.
            TMDBNotFoundError: When resource not found.
            TMDBRateLimitError: When rate limit still exceeded after retries.
            TMDBDecodeError: When the body is not a JSON object.
        """
        retrying = AsyncRetrying(
            retry=retry_if_exception_type((httpx.TimeoutException, TMDBRateLimitError)),
            stop=stop_after_attempt(self._max_retries),
            wait=self._retry_wait,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    payload = await self._get_once(endpoint, params)
        except httpx.TimeoutException as e:
            self.stats["failed_requests"] += 1
            raise TMDBClientError(f"Request timeout: {endpoint}") from e
        except httpx.HTTPError as e:
            self.stats["failed_requests"] += 1
            raise TMDBClientError(f"Transport error on {endpoint}: {e}") from e
        except TMDBClientError:
            self.stats["failed_requests"] += 1
            raise

        return payload

    async def _get_once(
        self,
        endpoint: str,
        params: dict[str, Any] | None,
    ) -> dict[str, Any]:
        """Send a single GET request.

        Args:
            endpoint: API endpoint path.
            params: Optional query parameters.

        Returns:
            JSON response as dictionary.
        """
        if self._client is None:
            msg = "Client not initialized. Use async context manager."
            raise TMDBClientError(msg)

        await self._wait_for_rate_limit()

        request_params: dict[str, Any] = {"api_key": self._api_key}
        if params:
            request_params.update(params)

        url = f"{self._base_url}{endpoint}"
        self.stats["total_requests"] += 1

        try:
            response = await self._client.get(
                url,
                params=request_params,
                timeout=self._timeout,
            )
        except httpx.TimeoutException:
            logger.warning(f"Request timeout: {endpoint}")
            raise

        return self._handle_response(response, endpoint)

    @staticmethod
    def _handle_response(
        response: httpx.Response,
        endpoint: str,
    ) -> dict[str, Any]:
        """Handle HTTP response and extract JSON.

        Args:
            response: HTTP response object.
            endpoint: API endpoint (for logging).

        Returns:
            JSON response as dictionary.

        Raises:
            TMDBClientError: On API errors.
            TMDBNotFoundError: When resource not found (404).
            TMDBRateLimitError: When rate limit exceeded (429).
            TMDBDecodeError: When the body is not a JSON object.
        """
        if response.status_code == 200:
            try:
                payload = response.json()
            except ValueError as e:
                raise TMDBDecodeError(f"Invalid JSON from {endpoint}") from e
            if not isinstance(payload, dict):
                raise TMDBDecodeError(f"Unexpected JSON shape from {endpoint}")
            return payload

        if response.status_code == 404:
            raise TMDBNotFoundError(f"Not found: {endpoint}")

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After", "10")
            logger.warning(f"Rate limited. Retry after {retry_after}s")
            raise TMDBRateLimitError(f"Rate limited: {endpoint}")

        error_msg = f"TMDB API error {response.status_code}: {endpoint}"
        logger.error(error_msg)
        raise TMDBClientError(error_msg)

    # -------------------------------------------------------------------------
    # API Endpoints
    # -------------------------------------------------------------------------

    async def search_movies(
        self,
        query: str,
        year: str | None = None,
        language: str | None = None,
    ) -> TMDBSearchResponse:
        """Search movies by title.

        Args:
            query: Search query string.
            year: Optional digit-only release year.
            language: Optional language hint.

        Returns:
            Search results response.
        """
        params: dict[str, Any] = {"query": query}
        if year:
            params["year"] = year
        if language:
            params["language"] = language
        return cast(TMDBSearchResponse, await self.get("/search/movie", params))

    async def get_movie_with_credits(
        self,
        movie_id: int,
        language: str,
    ) -> TMDBMovieDetailData:
        """Get movie details with credits appended (single request).

        Args:
            movie_id: TMDB movie ID.
            language: Locale for localized text.

        Returns:
            Movie details with a 'credits' block.
        """
        params = {"language": language, "append_to_response": "credits"}
        data = await self.get(f"/movie/{movie_id}", params)
        return cast(TMDBMovieDetailData, data)
