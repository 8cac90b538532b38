"""Process-local backend for the query cache.

Entries live in a ``cachetools.TLRUCache`` so each fingerprint can carry
its own expiry; the query cache passes the configured staleness window on
every write and falls back to the provider default otherwise.
"""

from __future__ import annotations

import time
from typing import Any, Callable, NamedTuple

import structlog
from cachetools import TLRUCache

from src.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class _Slot(NamedTuple):
    value: Any
    ttl: float


def _expires_at(_key: str, slot: _Slot, now: float) -> float:
    return now + slot.ttl


class MemoryCacheProvider(ICacheProvider):
    """Bounded in-memory store keyed by query fingerprint.

    Parameters
    ----------
    max_size:
        Entry count above which the least recently used entry is dropped.
    ttl:
        Seconds an entry stays readable when ``set`` gives no ttl.
    timer:
        Clock used for expiry.  Tests pass a fake one.
    """

    def __init__(
        self,
        max_size: int = 256,
        ttl: float = 300,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = ttl
        self._cache: TLRUCache[str, _Slot] = TLRUCache(maxsize=max_size, ttu=_expires_at, timer=timer)

    async def get(self, key: str) -> Any | None:
        slot = self._cache.get(key)
        logger.debug("cache_miss" if slot is None else "cache_hit", key=key)
        return None if slot is None else slot.value

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        self._cache[key] = _Slot(value, self._default_ttl if ttl is None else ttl)

    async def delete(self, key: str) -> None:
        if self._cache.pop(key, None) is not None:
            logger.debug("cache_evict", key=key)

    async def exists(self, key: str) -> bool:
        return key in self._cache

    async def keys(self) -> list[str]:
        self._cache.expire()
        return list(self._cache)

    async def clear(self) -> None:
        self._cache.clear()
