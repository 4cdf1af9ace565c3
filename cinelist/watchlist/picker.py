"""List ordering and random pick over a watchlist."""

import random
from enum import Enum

from cinelist.watchlist.models import Movie
from cinelist.watchlist.store import WatchlistStore


class ListOrder(str, Enum):
    """Ways to order the visible watchlist."""

    ADDED = "added"
    NEWEST = "newest"
    RANKED = "ranked"


def visible_movies(
    movies: list[Movie],
    store: WatchlistStore,
    order: ListOrder = ListOrder.ADDED,
) -> list[Movie]:
    """Return non-deleted movies in the requested order.

    ADDED keeps file order, NEWEST sorts by release year (newest
    first, stable), RANKED returns only ranked movies in rank order.
    """
    deleted = set(store.deleted_ids)
    visible = [m for m in movies if m.id not in deleted]

    if order is ListOrder.NEWEST:
        return sorted(visible, key=lambda m: m.year_sort_key, reverse=True)

    if order is ListOrder.RANKED:
        by_id = {m.id: m for m in visible}
        return [by_id[movie_id] for movie_id in store.ranked_ids if movie_id in by_id]

    return visible


def pick_random(
    movies: list[Movie],
    store: WatchlistStore,
    from_ranked: bool = False,
    rng: random.Random | None = None,
) -> Movie | None:
    """Pick a random movie from the ranking or the whole visible list.

    Returns:
        The picked movie, or None if the pool is empty.
    """
    order = ListOrder.RANKED if from_ranked else ListOrder.ADDED
    pool = visible_movies(movies, store, order)
    if not pool:
        return None
    return (rng or random).choice(pool)
