"""In-process device ID store."""

from __future__ import annotations

from src.interfaces.device_store import IDeviceIdStore


class MemoryDeviceIdStore(IDeviceIdStore):
    """Holds the device ID in an attribute; nothing is written to disk."""

    def __init__(self, device_id: str | None = None) -> None:
        self._device_id = device_id

    def load(self) -> str | None:
        return self._device_id

    def save(self, device_id: str) -> None:
        self._device_id = device_id

    def get_provider_name(self) -> str:
        return "memory"
