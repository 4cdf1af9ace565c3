"""In-memory enrichment cache with single-flight computation.

One entry per normalized (title, year) key, kept for the life of the
process. Concurrent misses on the same key share one computation:
the first caller runs it, later callers await its future.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable

from cinelist.enrichment.models import EnrichmentQuery, EnrichmentResult, SearchStatus
from cinelist.utils import setup_logger

logger = setup_logger("enrichment.cache")

ComputeOutcome = EnrichmentResult | SearchStatus
ComputeFn = Callable[[EnrichmentQuery], Awaitable[ComputeOutcome]]


class EnrichmentCache:
    """Memoizes enrichment results per normalized query key.

    Positive results never expire. A confirmed "no match" is stored
    as a tombstone for negative_ttl seconds so titles missing from the
    catalog are not searched on every call. Failures are not cached.

    Only touched from the event loop thread, between awaits, so the
    dicts need no lock.

    Attributes:
        stats: Counters (hits, misses, coalesced, tombstone_hits).
    """

    def __init__(
        self,
        negative_ttl: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache.

        Args:
            negative_ttl: Seconds to remember "no match" (0 disables).
            clock: Monotonic time source.
        """
        self._entries: dict[str, EnrichmentResult] = {}
        self._tombstones: dict[str, float] = {}
        self._inflight: dict[str, asyncio.Future[EnrichmentResult | None]] = {}
        self._negative_ttl = negative_ttl
        self._clock = clock
        self.stats: dict[str, int] = {
            "hits": 0,
            "misses": 0,
            "coalesced": 0,
            "tombstone_hits": 0,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, query: EnrichmentQuery) -> bool:
        return query.cache_key in self._entries

    def get(self, query: EnrichmentQuery) -> EnrichmentResult | None:
        """Return the stored result without computing anything."""
        return self._entries.get(query.cache_key)

    async def get_or_compute(
        self,
        query: EnrichmentQuery,
        compute: ComputeFn,
    ) -> EnrichmentResult | None:
        """Return the cached result for query, computing it at most once.

        Args:
            query: Watchlist title and year.
            compute: Coroutine function producing an EnrichmentResult,
                SearchStatus.NOT_FOUND (tombstoned) or
                SearchStatus.FAILED (not cached).

        Returns:
            EnrichmentResult, or None when nothing was found.
        """
        key = query.cache_key

        while True:
            hit, cached = self._lookup(key)
            if hit:
                return cached

            pending = self._inflight.get(key)
            if pending is None:
                break

            self.stats["coalesced"] += 1
            try:
                return await asyncio.shield(pending)
            except asyncio.CancelledError:
                # Leader was cancelled: retry, possibly as the new leader.
                if not pending.cancelled():
                    raise

        return await self._compute(key, query, compute)

    async def _compute(
        self,
        key: str,
        query: EnrichmentQuery,
        compute: ComputeFn,
    ) -> EnrichmentResult | None:
        """Run compute as the single in-flight request for key."""
        self.stats["misses"] += 1
        future: asyncio.Future[EnrichmentResult | None] = (
            asyncio.get_running_loop().create_future()
        )
        self._inflight[key] = future

        try:
            outcome = await compute(query)
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            future.set_exception(e)
            # Waiters re-raise it; mark retrieved so asyncio does not warn.
            future.exception()
            raise
        else:
            result = self._store(key, outcome)
            future.set_result(result)
            return result
        finally:
            self._inflight.pop(key, None)

    def _lookup(self, key: str) -> tuple[bool, EnrichmentResult | None]:
        """Check entries then tombstones.

        Returns:
            (hit, result): hit is True for a stored result or a live tombstone.
        """
        if key in self._entries:
            self.stats["hits"] += 1
            return True, self._entries[key]

        expires_at = self._tombstones.get(key)
        if expires_at is not None:
            if self._clock() < expires_at:
                self.stats["tombstone_hits"] += 1
                return True, None
            del self._tombstones[key]

        return False, None

    def _store(self, key: str, outcome: ComputeOutcome) -> EnrichmentResult | None:
        """Record a computation outcome and return what callers get."""
        if isinstance(outcome, EnrichmentResult):
            self._entries[key] = outcome
            self._tombstones.pop(key, None)
            return outcome

        if outcome is SearchStatus.NOT_FOUND and self._negative_ttl > 0:
            self._tombstones[key] = self._clock() + self._negative_ttl
            logger.debug(f"Tombstoned '{key}' for {self._negative_ttl:.0f}s")

        return None
