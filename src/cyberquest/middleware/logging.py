"""Structured logging configuration with structlog.

Every event carries the service name, environment and version, so log lines
from several deployments can share one sink.
"""

import logging

import structlog

from cyberquest.config import Settings

SERVICE_NAME = "cyberquest-api"

# Chatty third-party loggers that only matter when debugging.
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio")


def service_fields(settings: Settings) -> structlog.types.Processor:
    """Build a processor that stamps deployment fields onto each event."""
    static = {
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "version": settings.app_version,
    }

    def add_service_fields(
        _logger: object, _method: str, event_dict: structlog.types.EventDict
    ) -> structlog.types.EventDict:
        for key, value in static.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_service_fields


def setup_logging(settings: Settings) -> None:
    """Configure structlog for JSON or console output."""
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if settings.log_format == "json" else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            service_fields(settings),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level)
    if level > logging.DEBUG:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
