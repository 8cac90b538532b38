"""Utility modules for the x-novel client.

- **errors** -- Exception hierarchy rooted at XNovelError; transport,
  API, stream and validation failures each raise their own subclass so
  callers can handle failures granularly.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

# -- Domain exception hierarchy --------------------------------------------
from src.utils.errors import (
    APIError,
    ConfigurationError,
    SessionBusyError,
    StreamError,
    TransportError,
    ValidationError,
    XNovelError,
)

# -- Structured logging setup ----------------------------------------------
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "APIError",
    "ConfigurationError",
    "SessionBusyError",
    "StreamError",
    "TransportError",
    "ValidationError",
    "XNovelError",
    "configure_logging",
    "get_logger",
]
