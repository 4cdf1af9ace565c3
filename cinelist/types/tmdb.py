"""TMDB API data types.

TypedDict definitions for the subset of The Movie Database (TMDB)
payloads read by the enrichment clients.
"""

from typing import NotRequired, TypedDict


class TMDBSearchResultData(TypedDict):
    """One entry of the /search/movie results list."""

    id: int
    title: NotRequired[str]
    poster_path: NotRequired[str | None]
    overview: NotRequired[str | None]
    release_date: NotRequired[str | None]


class TMDBSearchResponse(TypedDict):
    """Response body of /search/movie."""

    page: NotRequired[int]
    results: list[TMDBSearchResultData]
    total_pages: NotRequired[int]
    total_results: NotRequired[int]


class TMDBCrewData(TypedDict):
    """Crew member data from the credits sub-resource."""

    name: str
    job: str
    department: NotRequired[str]
    id: NotRequired[int]


class TMDBCreditsData(TypedDict):
    """Credits block appended to a movie detail response."""

    cast: NotRequired[list[dict]]
    crew: list[TMDBCrewData]


class TMDBMovieDetailData(TypedDict):
    """Response body of /movie/{id}?append_to_response=credits."""

    id: NotRequired[int]
    title: NotRequired[str]
    overview: str | None
    credits: NotRequired[TMDBCreditsData]
