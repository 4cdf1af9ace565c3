"""Watchlist loading, saved ranking and random pick."""

from cinelist.watchlist.csv_reader import (
    WatchlistCSVReader,
    WatchlistError,
    WatchlistFileNotFoundError,
    WatchlistParseError,
)
from cinelist.watchlist.models import Movie
from cinelist.watchlist.picker import ListOrder, pick_random, visible_movies
from cinelist.watchlist.store import WatchlistStore

__all__ = [
    "Movie",
    "WatchlistCSVReader",
    "WatchlistError",
    "WatchlistFileNotFoundError",
    "WatchlistParseError",
    "WatchlistStore",
    "ListOrder",
    "pick_random",
    "visible_movies",
]
