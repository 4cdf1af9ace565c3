"""Command-line entry point. Allows python -m cinelist."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cinelist.enrichment import EnrichmentResult
    from cinelist.watchlist import Movie, WatchlistStore

NO_OVERVIEW = "No synopsis available."
NO_DIRECTOR = "Unknown director"
NO_POSTER = "(no poster)"


def _load_movies(csv_path: Path | None) -> list["Movie"]:
    """Load the watchlist CSV, falling back to the configured path."""
    from cinelist.settings import settings
    from cinelist.watchlist import WatchlistCSVReader

    return WatchlistCSVReader().load(csv_path or settings.watchlist.csv_path)


def _open_store() -> "WatchlistStore":
    from cinelist.settings import settings
    from cinelist.watchlist import WatchlistStore

    return WatchlistStore(settings.watchlist.state_path)


def _print_extras(extras: "EnrichmentResult | None") -> None:
    """Print an EnrichmentResult with placeholders for missing fields."""
    if extras is None:
        print("❌ No match on TMDB")
        return
    print(f"  Poster (small): {extras.small_poster_url or NO_POSTER}")
    print(f"  Poster (large): {extras.large_poster_url or NO_POSTER}")
    print(f"  Director: {extras.director or NO_DIRECTOR}")
    print(f"  Synopsis: {extras.overview or NO_OVERVIEW}")


async def _fetch_extras(title: str, year: str) -> "EnrichmentResult | None":
    from cinelist.enrichment import EnrichmentService

    async with EnrichmentService.from_settings() as service:
        return await service.fetch_extras(title, year)


def run_extras(title: str, year: str) -> None:
    """Fetch and print TMDB extras for one film."""
    print(f"🔎 {title} ({year})")
    _print_extras(asyncio.run(_fetch_extras(title, year)))


def run_list(csv_path: Path | None, order: str) -> None:
    """Print the visible watchlist."""
    from cinelist.watchlist import ListOrder, visible_movies

    store = _open_store()
    movies = visible_movies(_load_movies(csv_path), store, ListOrder(order))

    for index, movie in enumerate(movies, start=1):
        marker = "★" if store.is_ranked(movie.id) else " "
        print(f"{index:4d} {marker} {movie.title} ({movie.year})  {movie.id}")
    print(f"\nTotal : {len(movies)}")


def run_pick(csv_path: Path | None, from_ranked: bool, with_extras: bool) -> None:
    """Pick a random film and optionally show its extras."""
    from cinelist.watchlist import pick_random

    movie = pick_random(_load_movies(csv_path), _open_store(), from_ranked=from_ranked)
    if movie is None:
        source = "ranking" if from_ranked else "watchlist"
        print(f"❌ Nothing to pick: the {source} is empty")
        sys.exit(1)

    source = "from your ranking" if from_ranked else "from your watchlist"
    print(f"🎲 Picked {source}: {movie.title} ({movie.year})")
    if with_extras:
        _print_extras(asyncio.run(_fetch_extras(movie.title, movie.year)))


def run_rank(movie_id: str, position: int | None) -> None:
    """Rank a film, optionally at a given 1-based position."""
    store = _open_store()
    if not store.is_ranked(movie_id):
        store.toggle_ranked(movie_id)
    if position is not None:
        store.move_ranked(movie_id, position - 1)
    rank = store.ranked_ids.index(movie_id) + 1
    print(f"✅ Ranked #{rank}: {movie_id}")


def run_unrank(movie_id: str) -> None:
    store = _open_store()
    if store.is_ranked(movie_id):
        store.toggle_ranked(movie_id)
        print(f"✅ Removed from ranking: {movie_id}")
    else:
        print(f"⚠️  Not ranked: {movie_id}")


def run_delete(movie_id: str) -> None:
    _open_store().delete(movie_id)
    print(f"🗑️  Deleted: {movie_id}")


def run_restore(movie_id: str) -> None:
    if _open_store().restore(movie_id):
        print(f"✅ Restored: {movie_id}")
    else:
        print(f"⚠️  Not deleted: {movie_id}")


def show_config() -> None:
    """Print configuration with secrets masked."""
    from cinelist.settings import get_masked_settings

    print(json.dumps(get_masked_settings(), indent=2, default=str))


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="cinelist",
        description="cinelist - watchlist browser with TMDB posters and synopses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cinelist extras "Dune" 2021       # Posters, synopsis, director
  python -m cinelist list --order newest      # Watchlist, newest films first
  python -m cinelist pick --ranked            # Random film from the ranking
  python -m cinelist rank <uri> --position 1  # Put a film at the top
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    extras_parser = subparsers.add_parser("extras", help="Fetch TMDB extras")
    extras_parser.add_argument("title")
    extras_parser.add_argument("year")

    list_parser = subparsers.add_parser("list", help="Show the watchlist")
    list_parser.add_argument("--csv", type=Path)
    list_parser.add_argument("--order", choices=["added", "newest", "ranked"], default="added")

    pick_parser = subparsers.add_parser("pick", help="Pick a random film")
    pick_parser.add_argument("--csv", type=Path)
    pick_parser.add_argument("--ranked", action="store_true")
    pick_parser.add_argument("--no-extras", action="store_true")

    rank_parser = subparsers.add_parser("rank", help="Add a film to the ranking")
    rank_parser.add_argument("movie_id")
    rank_parser.add_argument("--position", type=int)

    for name, help_text in (
        ("unrank", "Remove a film from the ranking"),
        ("delete", "Hide a film"),
        ("restore", "Unhide a film"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("movie_id")

    subparsers.add_parser("config", help="Show configuration")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "extras":
            run_extras(args.title, args.year)
        elif args.command == "list":
            run_list(args.csv, args.order)
        elif args.command == "pick":
            run_pick(args.csv, args.ranked, not args.no_extras)
        elif args.command == "rank":
            run_rank(args.movie_id, args.position)
        elif args.command == "unrank":
            run_unrank(args.movie_id)
        elif args.command == "delete":
            run_delete(args.movie_id)
        elif args.command == "restore":
            run_restore(args.movie_id)
        elif args.command == "config":
            show_config()

    except KeyboardInterrupt:
        print("\n⚠️  Interrupted")
        sys.exit(130)
    except Exception as e:
        print(f"\n❌ ERROR : {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
