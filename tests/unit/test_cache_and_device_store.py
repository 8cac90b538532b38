"""Unit tests for MemoryCacheProvider and the device ID stores."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.device.file_store import FileDeviceIdStore
from src.providers.device.memory_store import MemoryDeviceIdStore
from src.utils.errors import ConfigurationError


# ======================================================================
# MemoryCacheProvider
# ======================================================================


class TestMemoryCacheProvider:
    @pytest.fixture()
    def cache(self) -> MemoryCacheProvider:
        return MemoryCacheProvider(max_size=3, ttl=3600)

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache: MemoryCacheProvider) -> None:
        assert await cache.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_set_get_delete(self, cache: MemoryCacheProvider) -> None:
        await cache.set("k", "v")
        assert await cache.get("k") == "v"
        assert await cache.exists("k") is True
        await cache.delete("k")
        assert await cache.exists("k") is False

    @pytest.mark.asyncio
    async def test_delete_nonexistent_is_noop(self, cache: MemoryCacheProvider) -> None:
        await cache.delete("nonexistent")

    @pytest.mark.asyncio
    async def test_evicts_beyond_max_size(self, cache: MemoryCacheProvider) -> None:
        for i in range(4):
            await cache.set(f"k{i}", i)
        assert len(await cache.keys()) == 3

    @pytest.mark.asyncio
    async def test_entries_expire(self) -> None:
        clock = [0.0]
        cache = MemoryCacheProvider(max_size=10, ttl=1, timer=lambda: clock[0])
        await cache.set("k", "v")
        clock[0] = 5.0
        assert await cache.keys() == []
        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_per_entry_ttl_overrides_default(self) -> None:
        clock = [0.0]
        cache = MemoryCacheProvider(max_size=10, ttl=1, timer=lambda: clock[0])
        await cache.set("short", 1)
        await cache.set("long", 2, ttl=60)
        clock[0] = 5.0
        assert await cache.keys() == ["long"]
        assert await cache.get("long") == 2

    @pytest.mark.asyncio
    async def test_clear(self, cache: MemoryCacheProvider) -> None:
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.clear()
        assert await cache.keys() == []


# ======================================================================
# Device ID stores
# ======================================================================


class TestMemoryDeviceIdStore:
    def test_round_trip(self) -> None:
        store = MemoryDeviceIdStore()
        assert store.load() is None
        store.save("device_1")
        assert store.load() == "device_1"
        assert store.get_provider_name() == "memory"


class TestFileDeviceIdStore:
    def test_missing_file_loads_none(self, tmp_path: Path) -> None:
        assert FileDeviceIdStore(tmp_path / "device_id").load() is None

    def test_save_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "device_id"
        store = FileDeviceIdStore(path)
        store.save("device_123_abc")
        assert path.read_text(encoding="utf-8").strip() == "device_123_abc"
        assert FileDeviceIdStore(path).load() == "device_123_abc"

    def test_empty_file_loads_none(self, tmp_path: Path) -> None:
        path = tmp_path / "device_id"
        path.write_text("  \n", encoding="utf-8")
        assert FileDeviceIdStore(path).load() is None

    def test_unreadable_path_loads_none(self, tmp_path: Path) -> None:
        # A directory where the file should be raises IsADirectoryError.
        assert FileDeviceIdStore(tmp_path).load() is None

    def test_unwritable_path_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            FileDeviceIdStore(blocker / "device_id").save("device_1")

    def test_expands_home(self) -> None:
        store = FileDeviceIdStore("~/x-novel-device-id")
        assert "~" not in str(store.path)
