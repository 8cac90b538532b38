"""Envelope-aware HTTP client for the x-novel REST API.

Every call goes through :class:`XNovelHTTPClient`, which:

  - injects the ``X-Device-ID`` header (generating and persisting an ID on
    first use, and adopting whatever ID the server echoes back);
  - maps transport failures to :class:`TransportError` and error statuses
    or error envelopes to :class:`APIError`;
  - unwraps ``{"code", "message", "data"}`` and validates ``data`` into the
    pydantic model the caller asks for.

The underlying ``httpx.AsyncClient`` is injectable for testability and
connection pooling, following the provider adapters elsewhere in the
codebase.  When none is given the client builds and owns one.
"""

from __future__ import annotations

import secrets
import string
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, TypeVar

import httpx
import pydantic
from pydantic import BaseModel, TypeAdapter

from src.config.settings import Settings
from src.interfaces.device_store import IDeviceIdStore
from src.models.envelope import Envelope
from src.utils.errors import APIError, TransportError
from src.utils.logging import get_logger

_T = TypeVar("_T")

DEVICE_ID_HEADER = "X-Device-ID"
PROVIDER_NAME = "x-novel-api"
_BASE36 = string.digits + string.ascii_lowercase
_DEVICE_SUFFIX_LEN = 9


def generate_device_id() -> str:
    """Return a fresh ``device_<epoch-ms>_<9 base-36 chars>`` identifier."""
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(_DEVICE_SUFFIX_LEN))
    return f"device_{millis}_{suffix}"


def to_body(body: BaseModel | dict[str, Any] | None) -> dict[str, Any] | None:
    """Serialise a request model to a JSON-ready dict, dropping unset fields."""
    if body is None:
        return None
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return {key: value for key, value in body.items() if value is not None}


class XNovelHTTPClient:
    """Typed REST access to the x-novel API.

    Parameters
    ----------
    settings:
        Supplies ``api_base_url`` and ``api_timeout``.
    device_store:
        Where the device ID is loaded from and saved to.
    http_client:
        Optional pre-built ``httpx.AsyncClient``.  The caller keeps
        ownership of an injected client; :meth:`aclose` only closes a
        client this object created.
    """

    def __init__(
        self,
        settings: Settings,
        device_store: IDeviceIdStore,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = settings.api_base_url.rstrip("/")
        self._device_store = device_store
        self._device_id: str | None = None
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.api_timeout, connect=10.0),
        )
        self._logger = get_logger(__name__)

    async def __aenter__(self) -> XNovelHTTPClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Device identity
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def device_id(self) -> str:
        """The current device ID, generated and persisted on first access."""
        if self._device_id is None:
            stored = self._device_store.load()
            if stored:
                self._device_id = stored
            else:
                self._device_id = generate_device_id()
                self._device_store.save(self._device_id)
                self._logger.info(
                    "device_id_generated",
                    device_id=self._device_id,
                    store=self._device_store.get_provider_name(),
                )
        return self._device_id

    def _headers(self, accept: str = "application/json") -> dict[str, str]:
        return {DEVICE_ID_HEADER: self.device_id, "Accept": accept}

    def _remember_device_id(self, response: httpx.Response) -> None:
        # Server-assigned IDs win over the locally generated one.
        echoed = response.headers.get(DEVICE_ID_HEADER)
        if echoed and echoed != self._device_id:
            self._device_id = echoed
            self._device_store.save(echoed)
            self._logger.info("device_id_updated", device_id=echoed)

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    # ------------------------------------------------------------------
    # Request primitives
    # ------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: BaseModel | dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        accept: str = "application/json",
    ) -> httpx.Response:
        started = time.monotonic()
        try:
            response = await self._http.request(
                method,
                self._url(path),
                params={k: v for k, v in (params or {}).items() if v is not None} or None,
                json=to_body(json),
                files=files,
                headers=self._headers(accept),
            )
        except httpx.HTTPError as exc:
            self._logger.warning("api_transport_error", method=method, path=path, error=str(exc))
            raise TransportError(
                message=f"{method} {path} failed: {exc}",
                provider_name=PROVIDER_NAME,
            ) from exc

        self._remember_device_id(response)
        self._logger.debug(
            "api_request",
            method=method,
            path=path,
            status=response.status_code,
            elapsed_ms=round((time.monotonic() - started) * 1000, 1),
        )
        if not response.is_success:
            raise self._error_from_response(response)
        return response

    def _error_from_response(self, response: httpx.Response) -> APIError:
        try:
            body: Any = response.json()
        except ValueError:
            body = None
        message = f"HTTP {response.status_code}"
        code = None
        errors = None
        if isinstance(body, dict):
            message = body.get("message") or message
            code = body.get("code")
            errors = body.get("errors")
        self._logger.warning(
            "api_error",
            path=response.request.url.path,
            status=response.status_code,
            message=message,
        )
        return APIError(
            message=message,
            provider_name=PROVIDER_NAME,
            status_code=response.status_code,
            code=code,
            errors=errors,
        )

    def _unwrap(self, response: httpx.Response) -> Any:
        try:
            envelope = Envelope.model_validate(response.json())
        except (ValueError, pydantic.ValidationError) as exc:
            raise APIError(
                message=f"Malformed response envelope: {exc}",
                provider_name=PROVIDER_NAME,
                status_code=response.status_code,
            ) from exc
        if not envelope.is_success():
            raise APIError(
                message=envelope.message or f"API code {envelope.code}",
                provider_name=PROVIDER_NAME,
                status_code=response.status_code,
                code=envelope.code,
                errors=[e.model_dump() for e in envelope.errors],
            )
        return envelope.data

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: BaseModel | dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the envelope's ``data`` (may be ``None``)."""
        response = await self._send(method, path, params=params, json=json, files=files)
        return self._unwrap(response)

    async def request_model(
        self,
        method: str,
        path: str,
        model: type[_T],
        *,
        params: dict[str, Any] | None = None,
        json: BaseModel | dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> _T | None:
        """Like :meth:`request`, validating ``data`` into *model*.

        *model* may be any type pydantic understands, e.g.
        ``list[ModelProvider]``.  Returns ``None`` when ``data`` is absent.
        """
        data = await self.request(method, path, params=params, json=json, files=files)
        if data is None:
            return None
        try:
            return TypeAdapter(model).validate_python(data)
        except pydantic.ValidationError as exc:
            raise APIError(
                message=f"Unexpected response shape for {getattr(model, '__name__', model)}: {exc}",
                provider_name=PROVIDER_NAME,
            ) from exc

    async def request_raw(self, method: str, path: str, *, accept: str = "*/*") -> bytes:
        """Send a request whose body is not enveloped (file downloads)."""
        response = await self._send(method, path, accept=accept)
        return response.content

    async def request_json(self, method: str, path: str) -> Any:
        """Send a request whose body is bare JSON without an envelope."""
        response = await self._send(method, path)
        try:
            return response.json()
        except ValueError as exc:
            raise APIError(
                message=f"Malformed JSON from {path}",
                provider_name=PROVIDER_NAME,
                status_code=response.status_code,
            ) from exc

    @asynccontextmanager
    async def stream(
        self,
        method: str,
        path: str,
        *,
        json: BaseModel | dict[str, Any] | None = None,
    ) -> AsyncIterator[httpx.Response]:
        """Open a streaming request and yield the live response.

        A non-2xx status raises :class:`APIError` before anything is yielded.
        Transport failures while connecting or while the caller reads the
        body surface as :class:`TransportError`.
        """
        try:
            async with self._http.stream(
                method,
                self._url(path),
                json=to_body(json),
                headers=self._headers("text/event-stream"),
            ) as response:
                self._remember_device_id(response)
                if not response.is_success:
                    await response.aread()
                    raise self._error_from_response(response)
                self._logger.debug("api_stream_opened", method=method, path=path)
                yield response
        except httpx.HTTPError as exc:
            self._logger.warning("api_stream_transport_error", path=path, error=str(exc))
            raise TransportError(
                message=f"{method} {path} stream failed: {exc}",
                provider_name=PROVIDER_NAME,
            ) from exc
