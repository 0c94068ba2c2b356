"""Process-scoped cache for API reads.

Entries are keyed by tuples such as ``("secrets", "global")`` or
``("secret", "db-pass", "billing")``. Writers call ``invalidate`` with a key
prefix; the next read for a matching key goes back to the server.

Example:
    cache = QueryCache(ttl_seconds=60)
    names = await cache.fetch(("secrets", "global"), load_names)
    cache.invalidate(("secrets", "global"))
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from secretdesk.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")
CacheKey = tuple[str, ...]


@dataclass
class _Entry:
    expires_at: float | None
    value: Any


class QueryCache:
    """
    Keyed read cache with prefix invalidation.

    Concurrent reads of the same key share one in-flight load. A load that was
    started before its key was invalidated is returned to its callers but never
    stored, so a read after ``invalidate`` always reflects the server.
    """

    def __init__(
        self,
        ttl_seconds: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, _Entry] = {}
        self._inflight: dict[CacheKey, asyncio.Future[Any]] = {}
        self._versions: dict[CacheKey, int] = {}

    def __contains__(self, key: CacheKey) -> bool:
        return self._fresh(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def _fresh(self, key: CacheKey) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and entry.expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry

    def get(self, key: CacheKey, default: Any = None) -> Any:
        entry = self._fresh(key)
        return default if entry is None else entry.value

    def set(self, key: CacheKey, value: Any) -> None:
        expires_at = (
            self._clock() + self._ttl_seconds if self._ttl_seconds > 0 else None
        )
        self._entries[key] = _Entry(expires_at=expires_at, value=value)

    async def fetch(self, key: CacheKey, loader: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value for ``key``, loading it at most once at a time.

        The load runs in its own task. Cancelling one caller stops its wait
        only; other callers sharing the load still receive its result.
        """
        entry = self._fresh(key)
        if entry is not None:
            return entry.value

        load = self._inflight.get(key)
        if load is None:
            load = self._start_load(key, loader)
        return await asyncio.shield(load)

    def _start_load(
        self, key: CacheKey, loader: Callable[[], Awaitable[Any]]
    ) -> asyncio.Future[Any]:
        version = self._versions.get(key, 0)
        load = asyncio.ensure_future(loader())
        self._inflight[key] = load

        def _done(task: asyncio.Future[Any]) -> None:
            if self._inflight.get(key) is task:
                del self._inflight[key]
            # Retrieving the exception also keeps an unawaited load quiet.
            if task.cancelled() or task.exception() is not None:
                return
            if self._versions.get(key, 0) == version:
                self.set(key, task.result())
            else:
                logger.debug("Discarding stale load for %s", key)

        load.add_done_callback(_done)
        return load

    def invalidate(self, prefix: CacheKey = ()) -> int:
        """Drop every entry whose key starts with ``prefix``; returns the count."""
        n = len(prefix)
        matched = {k for k in self._entries if k[:n] == prefix}
        matched.update(k for k in self._inflight if k[:n] == prefix)
        dropped = 0
        for key in matched:
            self._versions[key] = self._versions.get(key, 0) + 1
            if self._entries.pop(key, None) is not None:
                dropped += 1
            # Later readers start a fresh load instead of joining a stale one.
            self._inflight.pop(key, None)
        if matched:
            logger.debug("Invalidated %d cached reads under %s", dropped, prefix)
        return dropped

    def clear(self) -> None:
        self.invalidate(())


_query_cache_singleton: QueryCache | None = None


def get_query_cache() -> QueryCache:
    """Get the process-wide read cache shared by repositories and views."""
    global _query_cache_singleton
    if _query_cache_singleton is None:
        _query_cache_singleton = QueryCache(
            ttl_seconds=get_settings().cache_ttl_seconds
        )
    return _query_cache_singleton
