"""Device identifier stores.

FileDeviceIdStore persists the ID across runs (the CLI default);
MemoryDeviceIdStore keeps it for the lifetime of one client object.
"""

from src.providers.device.file_store import FileDeviceIdStore
from src.providers.device.memory_store import MemoryDeviceIdStore

__all__ = ["FileDeviceIdStore", "MemoryDeviceIdStore"]
