"""Logging configuration helpers for the trivia quiz service."""

from __future__ import annotations

import logging
from logging import Logger
import os

# Third-party loggers that are chatty at INFO.
_QUIET_LOGGERS = ("googleapiclient.discovery_cache", "httpx")


def configure_logging(level: str | None = None) -> Logger:
    """Set up root logging once and return the service logger.

    ``level`` wins over the ``LOG_LEVEL`` environment variable; unknown names
    fall back to INFO.
    """
    level_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logging.getLogger("trivia_quiz")
