"""Shared pytest fixtures for cinelist tests."""

import json
import re
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from cinelist.settings import TMDBSettings

TEST_API_KEY = "test_api_key_12345678901234567890"
SMALL_BASE = "https://image.tmdb.org/t/p/w200"
LARGE_BASE = "https://image.tmdb.org/t/p/w500"

_MOVIE_PATH = re.compile(r"/movie/(\d+)$")


@pytest.fixture(autouse=True)
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Mock env vars for reproducible settings."""
    monkeypatch.setenv("TMDB_API_KEY", TEST_API_KEY)
    monkeypatch.setenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")
    monkeypatch.setenv("TMDB_SEARCH_LANGUAGE", "it")
    monkeypatch.setenv("TMDB_PRIMARY_LOCALE", "it-IT")
    monkeypatch.setenv("TMDB_SECONDARY_LOCALE", "en-US")
    monkeypatch.setenv("CINELIST_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("LOG_LEVEL", "INFO")


@pytest.fixture
def tmdb_settings() -> TMDBSettings:
    """TMDB settings with fast, deterministic transport values."""
    return TMDBSettings(
        TMDB_API_KEY=TEST_API_KEY,
        TMDB_TIMEOUT=2.0,
        TMDB_MAX_RETRIES=2,
        TMDB_REQUESTS_PER_PERIOD=1000,
        TMDB_PERIOD_SECONDS=10,
        TMDB_MIN_REQUEST_DELAY=0.0,
        TMDB_NEGATIVE_CACHE_TTL=600,
    )


@pytest.fixture
def sample_search_response() -> dict[str, Any]:
    """Search response whose first hit is Dune (2021)."""
    return {
        "page": 1,
        "total_pages": 1,
        "total_results": 2,
        "results": [
            {"id": 438631, "title": "Dune", "poster_path": "/d5NXSklXo0qyIYkgV94XAgMIckC.jpg"},
            {"id": 841, "title": "Dune", "poster_path": "/a3nDwAnKAl0jsSmsGaOYcUPfrHC.jpg"},
        ],
    }


def make_detail(overview: str | None, director: str | None) -> dict[str, Any]:
    """Build a /movie/{id}?append_to_response=credits payload."""
    crew = [{"job": "Screenplay", "name": "Jon Spaihts", "department": "Writing"}]
    if director:
        crew.append({"job": "Director", "name": director, "department": "Directing"})
    return {"id": 438631, "overview": overview, "credits": {"cast": [], "crew": crew}}


class FakeTMDB:
    """Routes requests like the TMDB API and records them.

    Attributes:
        search_results: Results list returned by /search/movie.
        details: Detail payloads keyed by language.
        requests: Every request received.
    """

    def __init__(
        self,
        search_results: list[dict[str, Any]] | None = None,
        details: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self.search_results = search_results or []
        self.details = details or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/search/movie"):
            return httpx.Response(200, json={"results": self.search_results})

        if _MOVIE_PATH.search(path):
            language = request.url.params.get("language", "")
            if language in self.details:
                return httpx.Response(200, json=self.details[language])
            return httpx.Response(404, json={"status_message": "not found"})

        return httpx.Response(404)

    def calls_to(self, suffix: str) -> list[httpx.Request]:
        """Requests whose path ends with suffix."""
        return [r for r in self.requests if r.url.path.endswith(suffix)]

    @property
    def detail_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if _MOVIE_PATH.search(r.url.path)]


@pytest.fixture
def fake_tmdb(sample_search_response: dict[str, Any]) -> FakeTMDB:
    """Fake TMDB where Dune has a complete Italian detail."""
    return FakeTMDB(
        search_results=sample_search_response["results"],
        details={
            "it-IT": make_detail("Trama italiana", "Denis Villeneuve"),
            "en-US": make_detail("English plot", "Denis Villeneuve"),
        },
    )


@pytest.fixture
def make_http_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Factory for httpx.AsyncClient backed by a MockTransport."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def watchlist_csv(tmp_path):
    """Small Letterboxd export with a quoted comma title and a bad row."""
    path = tmp_path / "watchlist.csv"
    path.write_text(
        "Date,Name,Year,Letterboxd URI\n"
        "2023-01-05,Dune,2021,https://boxd.it/dune\n"
        '2023-02-10,"I, Tonya",2017,https://boxd.it/itonya\n'
        "2023-03-15,,1999,https://boxd.it/untitled\n"
        "2023-04-20,Parasite,2019,https://boxd.it/parasite\n",
        encoding="utf-8",
    )
    return path


def read_json(path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))
