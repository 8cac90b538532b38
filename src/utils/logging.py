"""structlog setup for the x-novel client.

One processor chain feeds two renderers: a console renderer while
developing and JSON lines when ``XNOVEL_APP_ENV`` is ``production`` or the
caller asks for JSON.  Records from stdlib loggers (httpx, httpcore) are
routed through the same chain so a streamed request and the client's own
events read alike.

The CLI hands in ``stream=sys.stderr``; stdout is reserved for command
output and streamed text.
"""

import logging
import os
import sys
from typing import TextIO

import structlog

# Transport libraries log every connection at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _pick_renderer(json_output: bool, target: TextIO) -> structlog.types.Processor:
    if json_output or os.environ.get("XNOVEL_APP_ENV", "development") == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=target.isatty())


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> structlog.BoundLogger:
    """Install the structlog configuration and rewire the stdlib root logger.

    Args:
        log_level: Minimum level name, e.g. ``"DEBUG"`` or ``"WARNING"``.
        json_output: Render JSON regardless of environment.
        stream: Destination for every record.  Defaults to stdout.

    Returns:
        A logger bound to the new configuration.
    """
    target = stream or sys.stdout
    level = logging.getLevelName(log_level.upper())
    processors = _shared_processors()
    renderer = _pick_renderer(json_output, target)

    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=target),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *processors,
                renderer,
            ],
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a logger tagged with *name*, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(logger_name=name)
