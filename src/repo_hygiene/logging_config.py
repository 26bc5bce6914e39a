"""Logging configuration for repo-hygiene.

Log records go to stderr so that JSON and Markdown written to stdout stay
machine-readable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Final

LOGGER_NAME: Final[str] = "repo_hygiene"
LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL: Final[int] = logging.WARNING
LOG_LEVEL_ENV_VAR: Final[str] = "REPO_HYGIENE_LOG_LEVEL"


def _level_from_env(default: int) -> int:
    raw = os.getenv(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if not raw:
        return default
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


def setup_logging(level: int | None = None) -> logging.Logger:
    """Configure the package logger and return it.

    An explicit ``level`` wins over ``REPO_HYGIENE_LOG_LEVEL``; calling this
    twice replaces the handler rather than stacking a second one.
    """
    resolved = level if level is not None else _level_from_env(DEFAULT_LEVEL)

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(resolved)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``repo_hygiene`` namespace."""
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
