"""HTTP access to the x-novel API: the envelope-aware transport, typed
resources, and the :class:`XNovelClient` facade that bundles them."""

from src.client.client import XNovelClient
from src.client.http import DEVICE_ID_HEADER, XNovelHTTPClient, generate_device_id

__all__ = ["DEVICE_ID_HEADER", "XNovelClient", "XNovelHTTPClient", "generate_device_id"]
