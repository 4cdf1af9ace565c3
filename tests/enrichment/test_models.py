"""Unit tests for enrichment value objects."""

import dataclasses

import pytest

from cinelist.enrichment.models import (
    EnrichmentQuery,
    EnrichmentResult,
    LocaleDetail,
    SearchOutcome,
    SearchStatus,
    normalize_year,
)


@pytest.mark.unit
class TestNormalization:
    @staticmethod
    @pytest.mark.parametrize(
        "raw,expected",
        [("2021", "2021"), ("2021 (film)", "2021"), ("c. 1999", "1999"), ("n/a", ""), ("", "")],
    )
    def test_normalize_year(raw: str, expected: str) -> None:
        assert normalize_year(raw) == expected

    @staticmethod
    def test_same_key_regardless_of_year_noise() -> None:
        plain = EnrichmentQuery("Dune", "2021")
        noisy = EnrichmentQuery("Dune", "2021 (film)")
        assert plain.cache_key == noisy.cache_key == "Dune-2021"

    @staticmethod
    def test_different_titles_different_keys() -> None:
        assert EnrichmentQuery("Dune", "2021").cache_key != EnrichmentQuery("Dune", "1984").cache_key

    @staticmethod
    def test_key_without_year_digits() -> None:
        assert EnrichmentQuery("Metropolis", "unknown").cache_key == "Metropolis-"


@pytest.mark.unit
class TestValueObjects:
    @staticmethod
    def test_result_is_immutable() -> None:
        result = EnrichmentResult(overview="Plot")
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.overview = "Other"  # type: ignore[misc]

    @staticmethod
    def test_result_defaults_to_absent_fields() -> None:
        result = EnrichmentResult()
        assert result.small_poster_url is None
        assert result.large_poster_url is None
        assert result.overview is None
        assert result.director is None

    @staticmethod
    def test_locale_detail_has_overview() -> None:
        assert LocaleDetail(overview="Trama").has_overview
        assert not LocaleDetail(overview="").has_overview
        assert not LocaleDetail().has_overview

    @staticmethod
    def test_search_outcome_constructors() -> None:
        assert SearchOutcome.not_found().status is SearchStatus.NOT_FOUND
        assert SearchOutcome.failed().match is None
