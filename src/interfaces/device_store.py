"""Abstract base class for device identifier storage.

The device ID is generated once per client, persisted locally, and sent
with every request so the server can associate anonymous usage with a
device record.  The server may hand back a different ID in the
``X-Device-ID`` response header; the HTTP client then overwrites the
stored value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations: FileDeviceIdStore, MemoryDeviceIdStore
# Located in: src/providers/device/
class IDeviceIdStore(ABC):
    """Contract for reading and writing the local device identifier."""

    @abstractmethod
    def load(self) -> str | None:
        """Return the stored device ID, or ``None`` if none was saved yet."""

    @abstractmethod
    def save(self, device_id: str) -> None:
        """Persist *device_id*, replacing any previous value."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short label for logs (e.g. ``"file"``)."""
