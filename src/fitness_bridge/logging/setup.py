"""
Structured logging for the bridge
"""

import logging
import sys
from typing import List, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from fitness_bridge.config import Settings

# Client libraries that log every reconnect at INFO
_CHATTY_LOGGERS = ("aiokafka", "kafka")


def service_context(settings: Settings) -> Processor:
    """Processor stamping each event with the service and environment."""

    def add_service_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("service", settings.service_name)
        event_dict.setdefault("environment", settings.environment)
        return event_dict

    return add_service_context


def select_renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(settings: Optional[Settings] = None) -> structlog.stdlib.BoundLogger:
    """
    Route structlog through stdlib logging at the configured level

    Per-sample events are logged at DEBUG, so INFO and above stay readable
    at sensor rates.

    Args:
        settings: Bridge settings; a fresh Settings() is read when omitted

    Returns:
        Logger bound to the service name
    """
    settings = settings or Settings()

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        service_context(settings),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        select_renderer(settings.log_format),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger(settings.service_name)
