"""Storage contract behind the server-state query cache.

The query cache owns fingerprinting, invalidation and in-flight dedupe; a
provider only stores opaque values under string keys.  Methods are async
so a network store could sit behind the same seam.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ICacheProvider(ABC):
    """Key-value store with expiry, addressed by query fingerprint."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the live value under *key*, or ``None`` when absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store *value*; *ttl* seconds overrides the provider's default lifetime."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Drop *key*.  Missing keys are ignored."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        ...

    @abstractmethod
    async def keys(self) -> list[str]:
        """Every unexpired key, for prefix invalidation."""

    @abstractmethod
    async def clear(self) -> None:
        ...
