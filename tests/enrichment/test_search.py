"""Unit tests for CatalogSearchClient."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from cinelist.enrichment.client import TMDBClientError, TMDBDecodeError
from cinelist.enrichment.models import CatalogMatch, SearchStatus
from cinelist.enrichment.search import CatalogSearchClient


def _search_client(response: Any = None, error: Exception | None = None) -> CatalogSearchClient:
    client = MagicMock()
    client.search_movies = AsyncMock(return_value=response, side_effect=error)
    return CatalogSearchClient(client, language="it")


@pytest.mark.unit
class TestLookup:
    @staticmethod
    @pytest.mark.asyncio
    async def test_uses_first_result(sample_search_response: dict[str, Any]) -> None:
        search = _search_client(sample_search_response)

        outcome = await search.lookup("Dune", "2021")

        assert outcome.status is SearchStatus.MATCH
        assert outcome.match == CatalogMatch(438631, "/d5NXSklXo0qyIYkgV94XAgMIckC.jpg")

    @staticmethod
    @pytest.mark.asyncio
    async def test_sends_year_and_language() -> None:
        search = _search_client({"results": []})

        await search.lookup("Dune", "2021")

        search._client.search_movies.assert_awaited_once_with("Dune", year="2021", language="it")

    @staticmethod
    @pytest.mark.asyncio
    async def test_empty_year_is_not_sent() -> None:
        search = _search_client({"results": []})

        await search.lookup("Metropolis", "")

        assert search._client.search_movies.call_args.kwargs["year"] is None

    @staticmethod
    @pytest.mark.asyncio
    async def test_null_poster_path() -> None:
        search = _search_client({"results": [{"id": 7, "poster_path": None}]})

        outcome = await search.lookup("Obscure", "1950")

        assert outcome.match == CatalogMatch(7, None)

    @staticmethod
    @pytest.mark.asyncio
    async def test_empty_poster_path_becomes_none() -> None:
        search = _search_client({"results": [{"id": 7, "poster_path": ""}]})

        outcome = await search.lookup("Obscure", "1950")

        assert outcome.match is not None
        assert outcome.match.poster_path is None

    @staticmethod
    @pytest.mark.asyncio
    async def test_no_results_is_not_found() -> None:
        search = _search_client({"results": []})

        outcome = await search.lookup("Zzzxq", "2099")

        assert outcome.status is SearchStatus.NOT_FOUND
        assert outcome.match is None

    @staticmethod
    @pytest.mark.asyncio
    async def test_blank_title_skips_request() -> None:
        search = _search_client({"results": []})

        outcome = await search.lookup("   ", "2021")

        assert outcome.status is SearchStatus.NOT_FOUND
        search._client.search_movies.assert_not_awaited()

    @staticmethod
    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [TMDBClientError("boom"), TMDBDecodeError("bad json")])
    async def test_client_error_is_failed(error: Exception) -> None:
        search = _search_client(error=error)

        outcome = await search.lookup("Dune", "2021")

        assert outcome.status is SearchStatus.FAILED

    @staticmethod
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"results": "nope"},
            {"results": [{"title": "no id"}]},
            {"results": [{"id": "438631"}]},
            {"results": [{"id": True}]},
            {"results": ["Dune"]},
        ],
    )
    async def test_malformed_payload_is_failed(payload: dict[str, Any]) -> None:
        search = _search_client(payload)

        outcome = await search.lookup("Dune", "2021")

        assert outcome.status is SearchStatus.FAILED


@pytest.mark.unit
class TestSearch:
    @staticmethod
    @pytest.mark.asyncio
    async def test_returns_match(sample_search_response: dict[str, Any]) -> None:
        match = await _search_client(sample_search_response).search("Dune", "2021")
        assert match is not None
        assert match.catalog_id == 438631

    @staticmethod
    @pytest.mark.asyncio
    async def test_returns_none_on_failure() -> None:
        assert await _search_client(error=TMDBClientError("boom")).search("Dune", "2021") is None
