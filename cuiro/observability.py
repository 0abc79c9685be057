"""Logging setup shared by applications embedding cuiro.

Library modules only ever call ``logging.getLogger(__name__)``; the host
application calls :func:`configure_logging` once at startup.
"""

from __future__ import annotations

import logging
import sys

import structlog

from cuiro.config import settings


def configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging and structlog with the console renderer.

    Args:
        level: Log level name. Defaults to ``settings.log_level``.
    """
    level_name = (level or settings.log_level).upper()
    if level_name not in logging.getLevelNamesMapping():
        msg = f"Invalid log level: {level}"
        raise ValueError(msg)

    logging.basicConfig(
        level=getattr(logging, level_name),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        stream=sys.stdout,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
