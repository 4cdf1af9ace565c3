"""cinelist - watchlist browser with TMDB metadata enrichment."""

__version__ = "0.1.0"
