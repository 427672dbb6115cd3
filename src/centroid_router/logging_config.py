"""Structured logging setup (structlog on top of stdlib logging).

Production renders one JSON object per line; every other environment gets
the colored console renderer. Library loggers (uvicorn, celery, httpx) go
through the same formatter via ProcessorFormatter.foreign_pre_chain.
"""

import logging
import sys
from typing import TextIO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from centroid_router import __version__

# Embedding vectors are long float lists; never write them out in full.
MAX_LOGGED_SEQUENCE = 8

NOISY_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "asyncio": logging.WARNING,
    "celery": logging.INFO,
}


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the service name and version."""
    event_dict.setdefault("app", "centroid-router")
    event_dict.setdefault("app_version", __version__)
    return event_dict


def truncate_vectors(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Shorten numeric lists (vectors) so log lines stay readable."""
    for key, value in event_dict.items():
        if (
            isinstance(value, (list, tuple))
            and len(value) > MAX_LOGGED_SEQUENCE
            and all(isinstance(item, (int, float)) for item in value)
        ):
            event_dict[key] = f"<{len(value)} numbers: {list(value[:3])}...>"
    return event_dict


def _build_renderer(is_production: bool, stream: TextIO) -> Processor:
    if is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        environment: "production" switches to JSON output
        stream: Destination (default stdout). The CLI passes stderr so
            stdout only carries command output.

    Safe to call more than once; the root handler is replaced each time.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    stream = stream or sys.stdout
    is_production = environment.lower() == "production"

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        truncate_vectors,
    ]
    if is_production:
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_build_renderer(is_production, stream),
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name, noisy_level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if is_production else "console",
    )
