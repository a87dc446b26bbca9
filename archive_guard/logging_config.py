"""Logging setup for archive_guard.

Every module logs under the ``archive_guard`` namespace: rejected entries,
escaping symlinks and killed tools at WARNING, completed extractions at
INFO, raw tool output and command lines at DEBUG. Library code only asks for
loggers; the CLI (or an embedding service) calls `configure_logging` once,
with the level taken from ``ARCHIVE_GUARD_LOG_LEVEL`` unless given.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from .constants import LOG_LEVEL_ENV

_LEVEL_MAP = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Configure root logger.

    Order of precedence for level:
    1. Explicit `level` argument if given
    2. Environment variable `ARCHIVE_GUARD_LOG_LEVEL`
    3. Fallback to `INFO`
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")

    if isinstance(level, str):
        level = _LEVEL_MAP.get(level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=force,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a project logger. Configuration is left to the embedding application."""
    return logging.getLogger(name or "archive_guard")


__all__ = ["configure_logging", "get_logger"]
