"""Cache providers.

In-memory TTL-based cache backing the server-state query cache, so a list
of projects or a conversation transcript is fetched once and reused until
a related mutation invalidates it.

MemoryCacheProvider is a dict-based cache, fast but not shared across
processes.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
