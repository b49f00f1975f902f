"""Structured logging setup.

Uses structlog on top of the standard library logger, with JSON or console
output selected by settings.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from protrade.config import LogFormat, get_settings


def setup_logging() -> None:
    """Configure structlog from current settings."""
    settings = get_settings()

    log_level = getattr(logging, settings.log_level)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == LogFormat.JSON:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structured logger.

    Args:
        name: Logger name. Defaults to the calling module.

    Returns:
        Bound structlog logger.
    """
    return structlog.get_logger(name)


def log_calculation(
    logger: structlog.stdlib.BoundLogger,
    *,
    side: str,
    policy: str,
    total_profit: float,
    **kwargs: Any,
) -> None:
    """Log a completed target calculation."""
    logger.info(
        "calculation_completed",
        side=side,
        policy=policy,
        total_profit=round(total_profit, 2),
        **kwargs,
    )


def log_rejection(
    logger: structlog.stdlib.BoundLogger,
    *,
    reason: str,
    field: str,
    **kwargs: Any,
) -> None:
    """Log an input that produced no result."""
    logger.debug(
        "calculation_rejected",
        reason=reason,
        field=field,
        **kwargs,
    )
