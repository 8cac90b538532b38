"""Custom exception hierarchy for the x-novel client.

All client exceptions inherit from :class:`XNovelError`, which carries an
optional ``provider_name`` so error handlers can tell which collaborator
(e.g. "x-novel-api", "stream", "device-store") caused the failure.

    XNovelError  (base -- catch-all for any client error)
    +-- ConfigurationError   (startup / missing or invalid config)
    +-- TransportError       (connect, read, or timeout failure)
    +-- APIError             (server answered with an error status or envelope)
    +-- StreamError          (streaming request failed with no fallback)
    +-- ValidationError      (request rejected before it was sent)
    +-- SessionBusyError     (a send is already running on the session)

Callers retry or fall back on TransportError, surface APIError messages to
the user, and abort on ConfigurationError.
"""

from __future__ import annotations

from typing import Any


class XNovelError(Exception):
    """Base exception for all x-novel client errors.

    The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[x-novel-api] HTTP 500``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class ConfigurationError(XNovelError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# HTTP errors
# ---------------------------------------------------------------------------

class TransportError(XNovelError):
    """Raised when the API cannot be reached or the connection drops.

    The streaming consumer catches this to fall back to the one-shot
    request for the same operation.
    """

    def __init__(
        self,
        message: str = "API is unreachable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class APIError(XNovelError):
    """Raised when the server answers with an error.

    Covers both a non-2xx HTTP status and a 2xx response whose envelope
    ``code`` is outside the success range.
    """

    def __init__(
        self,
        message: str = "API request failed",
        provider_name: str | None = None,
        status_code: int | None = None,
        code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._status_code = status_code
        self._code = code
        self._errors = list(errors or [])

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def code(self) -> int | None:
        return self._code

    @property
    def errors(self) -> list[dict[str, Any]]:
        return self._errors


class StreamError(XNovelError):
    """Raised when a streaming request fails and no fallback is configured."""

    def __init__(
        self,
        message: str = "Streaming request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Session errors
# ---------------------------------------------------------------------------

class ValidationError(XNovelError):
    """Raised when a request is rejected client-side before being sent."""

    def __init__(
        self,
        message: str = "Invalid request",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class SessionBusyError(XNovelError):
    """Raised when a session already has a send or generation in flight."""

    def __init__(
        self,
        message: str = "A request is already in progress",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
