"""
Structured logging configuration using structlog.

The API layer logs through structlog with keyword fields; adapters and
services use the standard library logger with formatted messages. Both
end up on stdout: JSON in production, coloured console lines otherwise.
Request IDs bound by the API middleware appear on every structlog line
emitted while the request is in flight.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from src.config.settings import Settings, get_settings

# Libraries that log every request at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "uvicorn.access")


def _processors(production: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if production:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    return processors


def setup_logging(settings: Settings | None = None) -> None:
    """
    Configure structlog and the standard library root logger.

    Safe to call more than once; the CLI calls it per invocation.

    Usage:
        setup_logging()
        logger = structlog.get_logger(__name__)
        logger.info("Trends served", platforms="reddit,news", hashtags=12)
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)

    structlog.configure(
        processors=_processors(settings.is_production),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(request_id: str, **fields) -> None:
    """Attach the request ID (and any extra fields) to subsequent log lines."""
    structlog.contextvars.bind_contextvars(request_id=request_id, **fields)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
