"""Logging configuration.

Uses loguru with a single stderr sink. Library modules log through
``from loguru import logger`` and never configure sinks themselves.
"""

from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

from .config import LOG_LEVEL

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def setup_logging(level: Optional[str] = None) -> None:
    """Replace loguru's default handler with the configured stderr sink.

    Should be called once by an entry point, not at import time.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or LOG_LEVEL),
        format=LOG_FORMAT,
        colorize=sys.stderr.isatty(),
    )
    logger.debug("Logging initialized (level={})", level or LOG_LEVEL)
