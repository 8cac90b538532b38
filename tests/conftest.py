"""Shared pytest fixtures for the x-novel client test suite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from src.client.client import XNovelClient
from src.client.http import XNovelHTTPClient
from src.config.settings import Settings
from src.providers.device.memory_store import MemoryDeviceIdStore
from src.utils.logging import configure_logging

BASE_URL = "http://testserver"
DEVICE_ID = "device_1700000000000_k3j9x0a1b"

Handler = Callable[[httpx.Request], Any]


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from the developer's .env, with no device-ID file."""
    values: dict[str, Any] = {
        "api_base_url": BASE_URL,
        "device_id_path": "",
        "app_env": "test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def _quiet_logging() -> None:
    """Send logs to the real stderr so cached loggers never hold a captured stream."""
    configure_logging(log_level="WARNING", stream=sys.__stderr__)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def device_store() -> MemoryDeviceIdStore:
    return MemoryDeviceIdStore(DEVICE_ID)


@pytest.fixture
def make_http(settings: Settings, device_store: MemoryDeviceIdStore) -> Callable[[Handler], XNovelHTTPClient]:
    """Return a factory building an XNovelHTTPClient over ``httpx.MockTransport``."""

    def _factory(handler: Handler) -> XNovelHTTPClient:
        transport = httpx.MockTransport(handler)
        return XNovelHTTPClient(settings, device_store, http_client=httpx.AsyncClient(transport=transport))

    return _factory


@pytest.fixture
def make_client(device_store: MemoryDeviceIdStore) -> Callable[..., XNovelClient]:
    """Return a factory building a fully wired XNovelClient over ``httpx.MockTransport``.

    Keyword arguments override Settings fields, e.g.
    ``make_client(handler, stream_fallback_enabled=False)``.
    """
    from src.main import build_client

    def _factory(handler: Handler, **overrides: Any) -> XNovelClient:
        transport = httpx.MockTransport(handler)
        return build_client(
            make_settings(**overrides),
            http_client=httpx.AsyncClient(transport=transport),
            device_store=device_store,
        )

    return _factory
