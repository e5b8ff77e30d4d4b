"""
Structured logging configuration using structlog.

Every event carries the service name and environment. Request handlers add
request_id, method and path through `bind_request_context`, so booking
rejections and occupancy anomalies can be traced back to the call that
produced them. JSON in production, console output elsewhere; the test
environment only shows warnings and up.
"""

import logging
import sys
import structlog
from studyhall.core.config import get_settings

NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "asyncio")


def _service_context(logger, method_name, event_dict):
    settings = get_settings()
    event_dict.setdefault("service", settings.APP_NAME)
    event_dict.setdefault("env", settings.ENVIRONMENT)
    return event_dict


def _level_for(settings) -> int:
    if settings.ENVIRONMENT == "test":
        return logging.WARNING
    return getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)


def setup_logging() -> None:
    settings = get_settings()

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        _service_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.ENVIRONMENT == "production":
        processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    # setup runs on every app startup; tests start the app many times
    for existing in list(root_logger.handlers):
        if isinstance(existing.formatter, structlog.stdlib.ProcessorFormatter):
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(_level_for(settings))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(**values) -> None:
    """Start a fresh per-request context; later log calls include these fields."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**values)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
