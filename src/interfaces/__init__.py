"""Public interface definitions for swappable client collaborators.

Local state that outlives a request (cached server data, the device
identifier) is accessed exclusively through the abstract base classes
defined in this package.  Concrete adapters implement these interfaces and
are injected by the factories in ``src/main.py``, so unit tests can pass a
fake store without touching the filesystem.

CONCRETE PROVIDER MAP:
    Interface          →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    ICacheProvider     →  MemoryCacheProvider
    IDeviceIdStore     →  FileDeviceIdStore, MemoryDeviceIdStore
"""

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.device_store import IDeviceIdStore

__all__ = [
    "ICacheProvider",
    "IDeviceIdStore",
]
