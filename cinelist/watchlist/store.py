"""Saved watchlist state: ranked and deleted entry IDs.

Both lists are stored, in order, in a single JSON file.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from cinelist.utils import setup_logger

logger = setup_logger("watchlist.store")


class WatchlistStore:
    """Ordered ranking and deletion lists persisted to JSON.

    A deleted entry is removed from the ranking as well. Changes are
    written to disk immediately.
    """

    def __init__(self, state_path: Path) -> None:
        """Initialize store and load any saved state.

        Args:
            state_path: JSON file holding the state.
        """
        self._state_path = state_path
        self._ranked_ids: list[str] = []
        self._deleted_ids: list[str] = []
        self.load()

    @property
    def state_path(self) -> Path:
        """Return state file path."""
        return self._state_path

    @property
    def ranked_ids(self) -> list[str]:
        """Ranked IDs, best first (copy)."""
        return list(self._ranked_ids)

    @property
    def deleted_ids(self) -> list[str]:
        """Deleted IDs in deletion order (copy)."""
        return list(self._deleted_ids)

    def is_ranked(self, movie_id: str) -> bool:
        return movie_id in self._ranked_ids

    def is_deleted(self, movie_id: str) -> bool:
        return movie_id in self._deleted_ids

    # -------------------------------------------------------------------------
    # Ranking
    # -------------------------------------------------------------------------

    def toggle_ranked(self, movie_id: str) -> bool:
        """Add movie to the end of the ranking, or remove it if present.

        Args:
            movie_id: Watchlist entry ID.

        Returns:
            True if the movie is ranked after the call.
        """
        if movie_id in self._ranked_ids:
            self._ranked_ids.remove(movie_id)
            ranked = False
        else:
            self._ranked_ids.append(movie_id)
            ranked = True
        self.save()
        return ranked

    def move_ranked(self, movie_id: str, position: int) -> None:
        """Move a ranked movie to a new zero-based position.

        Positions past either end are clamped.

        Raises:
            KeyError: If the movie is not ranked.
        """
        if movie_id not in self._ranked_ids:
            raise KeyError(movie_id)
        self._ranked_ids.remove(movie_id)
        position = max(0, min(position, len(self._ranked_ids)))
        self._ranked_ids.insert(position, movie_id)
        self.save()

    # -------------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------------

    def delete(self, movie_id: str) -> None:
        """Hide a movie and drop it from the ranking."""
        if movie_id in self._ranked_ids:
            self._ranked_ids.remove(movie_id)
        if movie_id not in self._deleted_ids:
            self._deleted_ids.append(movie_id)
        self.save()

    def restore(self, movie_id: str) -> bool:
        """Undo a deletion.

        Returns:
            True if the movie was deleted before the call.
        """
        if movie_id not in self._deleted_ids:
            return False
        self._deleted_ids.remove(movie_id)
        self.save()
        return True

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """Load state from disk; a missing or corrupt file means empty state."""
        if not self._state_path.exists():
            return

        try:
            with self._state_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Watchlist state unreadable, starting empty: {e}")
            return

        self._ranked_ids = self._read_id_list(data, "ranked_ids")
        self._deleted_ids = self._read_id_list(data, "deleted_ids")
        logger.debug(
            f"State loaded: {len(self._ranked_ids)} ranked, {len(self._deleted_ids)} deleted"
        )

    def save(self) -> None:
        """Write state to disk."""
        payload = {
            "timestamp": datetime.now().isoformat(),
            "ranked_ids": self._ranked_ids,
            "deleted_ids": self._deleted_ids,
        }
        self._state_path.parent.mkdir(parents=True, exist_ok=True)
        with self._state_path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

    @staticmethod
    def _read_id_list(data: Any, key: str) -> list[str]:
        """Return data[key] as a de-duplicated list of strings."""
        if not isinstance(data, dict):
            return []
        values = data.get(key)
        if not isinstance(values, list):
            return []
        return list(dict.fromkeys(str(v) for v in values))
