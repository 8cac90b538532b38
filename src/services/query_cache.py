"""Keyed cache of server state with mutation-driven invalidation.

Every read of server data is addressed by a *query key*, a tuple whose
first element names the resource and whose remaining elements narrow it:

    ("projects", {"page": 1, "page_size": 20})
    ("conversation", "9f1c...")
    ("chapters", "<project-id>", {"page": 1, "page_size": 50})

The key is reduced to a stable string fingerprint (dict parameters are
order-independent) that indexes the backing :class:`ICacheProvider`.
Mutations name the key *prefixes* they make stale; invalidating
``("conversations",)`` drops the list for every page size at once.

Concurrent reads of the same key share one in-flight fetch.  A fetch that
was already running when its key got invalidated still returns its data
to the waiting callers, but the result is not stored.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Sequence, TypeVar

from src.interfaces.cache_provider import ICacheProvider
from src.utils.logging import get_logger

_T = TypeVar("_T")

QueryKey = tuple[Any, ...]


def fingerprint(key: Sequence[Any]) -> str:
    """Return a stable string for *key*; dict parts are sorted by key."""
    return json.dumps(list(key), sort_keys=True, separators=(",", ":"), default=str)


def matches_prefix(key: QueryKey, prefix: QueryKey) -> bool:
    return key[: len(prefix)] == prefix


@dataclass(frozen=True)
class _Entry:
    """Wrapper so a cached ``None`` is distinguishable from a miss."""

    data: Any


class QueryCache:
    """Server-state cache keyed by query fingerprints.

    Parameters
    ----------
    backend:
        Key-value store for the cached entries.
    ttl:
        Passed through to ``backend.set``.

    Only the fetch registered in ``_inflight`` for a key may store its
    result.  Invalidation unregisters the running fetch, so later readers
    start a fresh one and the orphaned fetch only answers its own waiters.
    ``_known`` is pruned against the backend's live keys on every
    invalidation, so expired and evicted entries are not tracked forever.
    """

    def __init__(self, backend: ICacheProvider, ttl: int | None = None) -> None:
        self._backend = backend
        self._ttl = ttl
        self._known: dict[str, QueryKey] = {}
        self._inflight: dict[str, asyncio.Task[Any]] = {}
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(self, key: Sequence[Any]) -> Any | None:
        """Return cached data for *key*, or ``None`` on a miss."""
        entry = await self._backend.get(fingerprint(key))
        return entry.data if isinstance(entry, _Entry) else None

    async def contains(self, key: Sequence[Any]) -> bool:
        return await self._backend.exists(fingerprint(key))

    async def fetch(self, key: Sequence[Any], fetcher: Callable[[], Awaitable[_T]]) -> _T:
        """Return cached data for *key*, calling *fetcher* on a miss.

        Callers only share a running fetch that started after the key's
        last invalidation.  Errors from *fetcher* propagate to every waiting
        caller and nothing is cached.
        """
        key = tuple(key)
        fp = fingerprint(key)
        entry = await self._backend.get(fp)
        if isinstance(entry, _Entry):
            return entry.data

        task = self._inflight.get(fp)
        if task is None:
            self._known[fp] = key
            task = asyncio.create_task(self._load(fp, fetcher))
            self._inflight[fp] = task
        else:
            self._logger.debug("query_joined_inflight", key=fp)
        return await asyncio.shield(task)

    async def _load(self, fp: str, fetcher: Callable[[], Awaitable[_T]]) -> _T:
        this = asyncio.current_task()
        try:
            data = await fetcher()
            if self._inflight.get(fp) is this:
                await self._backend.set(fp, _Entry(data), ttl=self._ttl)
            else:
                self._logger.debug("query_result_discarded", key=fp)
            return data
        finally:
            if self._inflight.get(fp) is this:
                del self._inflight[fp]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def set(self, key: Sequence[Any], data: Any) -> None:
        """Store *data* directly, e.g. after a mutation returned the new object."""
        key = tuple(key)
        fp = fingerprint(key)
        self._known[fp] = key
        await self._backend.set(fp, _Entry(data), ttl=self._ttl)

    async def invalidate(self, prefix: Sequence[Any]) -> int:
        """Drop every entry whose key starts with *prefix*; return how many keys matched."""
        prefix = tuple(prefix)
        matched = 0
        for fp, key in list(self._known.items()):
            if not matches_prefix(key, prefix):
                continue
            matched += 1
            del self._known[fp]
            self._inflight.pop(fp, None)
            await self._backend.delete(fp)
        await self._prune()
        self._logger.debug("query_invalidated", prefix=fingerprint(prefix), matched=matched)
        return matched

    async def _prune(self) -> None:
        """Forget keys the backend no longer holds and no fetch is loading."""
        live = set(await self._backend.keys())
        for fp in [fp for fp in self._known if fp not in live and fp not in self._inflight]:
            del self._known[fp]

    async def invalidate_many(self, prefixes: Iterable[Sequence[Any]]) -> int:
        total = 0
        for prefix in prefixes:
            total += await self.invalidate(prefix)
        return total

    async def mutate(
        self,
        mutation: Callable[[], Awaitable[_T]],
        invalidates: Iterable[Sequence[Any]] = (),
    ) -> _T:
        """Run *mutation*, then invalidate each prefix in *invalidates*.

        Invalidation only happens when the mutation succeeds.
        """
        result = await mutation()
        await self.invalidate_many(invalidates)
        return result

    async def clear(self) -> None:
        self._known.clear()
        self._inflight.clear()
        await self._backend.clear()
