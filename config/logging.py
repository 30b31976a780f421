"""
Structured logging setup.

Call configure_logging() once from the embedding application.
"""

import logging
from typing import Optional

import structlog

from config.settings import settings


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    JSON output in production, colored console output otherwise.

    Args:
        level: Log level name, defaults to settings.log_level
    """
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, (level or settings.log_level).upper()),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if settings.is_production
                else structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
