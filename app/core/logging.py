"""
Logging setup.

The application logs through loguru's global ``logger``; this module only
swaps the default sink for one at the configured level.
"""

import sys

from loguru import logger

from app.core.config import settings


def configure_logging(level: str | None = None) -> None:
    """Route loguru output to stderr at *level* (defaults to settings)."""
    logger.remove()
    logger.add(sys.stderr, level=(level or settings.LOG_LEVEL).upper(), backtrace=settings.DEBUG,
               diagnose=settings.DEBUG, )
