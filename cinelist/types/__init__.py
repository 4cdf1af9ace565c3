"""Type definitions for raw TMDB payloads."""

from cinelist.types.tmdb import (
    TMDBCreditsData,
    TMDBCrewData,
    TMDBMovieDetailData,
    TMDBSearchResponse,
    TMDBSearchResultData,
)

__all__ = [
    "TMDBCreditsData",
    "TMDBCrewData",
    "TMDBMovieDetailData",
    "TMDBSearchResponse",
    "TMDBSearchResultData",
]
