"""
Structured logging for CardMax.

Call configure_logging() once from an entrypoint; modules obtain loggers with
get_logger(__name__) and log short snake_case events with key/value context.
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    level_value = getattr(logging, level.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if fmt.strip().lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger tagged with the given module name.

    The logger stays lazy, so module-level loggers created at import time
    still follow a later configure_logging() call.

        logger = get_logger(__name__)
        logger.info("card_created", card_id=3, issuer="HDFC")
    """
    return structlog.get_logger(logger_name=name)
