"""Client assembly: wires settings, device store, cache and HTTP transport.

Callers outside the CLI build a client with::

    async with build_client() as client:
        projects = await client.projects.list()

Every collaborator can be overridden (a pre-built ``httpx.AsyncClient``,
a device store, a cache backend), which is how the test-suite swaps in
in-memory fakes.
"""

from __future__ import annotations

import httpx

from src.client.client import XNovelClient
from src.client.http import XNovelHTTPClient
from src.config.loader import resolve_settings
from src.config.settings import Settings
from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.device_store import IDeviceIdStore
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.device.file_store import FileDeviceIdStore
from src.providers.device.memory_store import MemoryDeviceIdStore
from src.services.query_cache import QueryCache
from src.utils.logging import get_logger

_logger = get_logger(__name__)


def _build_device_store(app_settings: Settings) -> IDeviceIdStore:
    """File-backed when a path is configured, in-memory otherwise."""
    if app_settings.has_persistent_device_id():
        return FileDeviceIdStore(app_settings.device_id_path)
    return MemoryDeviceIdStore()


def _build_cache_backend(app_settings: Settings) -> ICacheProvider:
    return MemoryCacheProvider(max_size=app_settings.cache_max_size, ttl=app_settings.cache_ttl)


def build_client(
    app_settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    device_store: IDeviceIdStore | None = None,
    cache_backend: ICacheProvider | None = None,
) -> XNovelClient:
    """Build a fully wired :class:`XNovelClient`.

    Without *app_settings*, settings are resolved from the environment over
    ``config/config.yaml``.  Passed-in settings are used as given.
    """
    app_settings = app_settings or resolve_settings()
    store = device_store or _build_device_store(app_settings)
    backend = cache_backend or _build_cache_backend(app_settings)

    http = XNovelHTTPClient(app_settings, store, http_client=http_client)
    cache = QueryCache(backend, ttl=app_settings.cache_ttl)

    _logger.debug(
        "client_built",
        base_url=http.base_url,
        device_store=store.get_provider_name(),
        fallback_enabled=app_settings.stream_fallback_enabled,
    )
    return XNovelClient(http, cache, fallback_enabled=app_settings.stream_fallback_enabled)
