"""Logging for the deadlink.* loggers.

Every logger comes from ``get_logger`` and writes plain messages to stderr.
The level is read from ``DEADLINK_LOG_LEVEL`` (default WARNING) until
``configure_logging`` pins one, after which existing and future deadlink
loggers all use the pinned level.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

_PACKAGE = "deadlink"
_pinned: Optional[int] = None


def _parse_level(raw: Union[int, str, None]) -> Optional[int]:
    if isinstance(raw, int):
        return raw
    if not raw:
        return None
    level = getattr(logging, raw.strip().upper(), None)
    return level if isinstance(level, int) else None


def _env_level() -> int:
    level = _parse_level(os.environ.get("DEADLINK_LOG_LEVEL"))
    return logging.WARNING if level is None else level


def _attach_stderr(logger: logging.Logger) -> None:
    if logger.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def _package_loggers():
    yield logging.getLogger(_PACKAGE)
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if name.startswith(f"{_PACKAGE}.") and isinstance(logger, logging.Logger):
            yield logger


def configure_logging(level: Union[int, str, None] = None, *, verbose: bool = False) -> int:
    """Pin the level of every deadlink logger; returns the level applied.

    verbose means DEBUG. Otherwise an explicit level (name or number) wins,
    then DEADLINK_LOG_LEVEL.
    """
    global _pinned
    if verbose:
        resolved = logging.DEBUG
    else:
        parsed = _parse_level(level)
        resolved = _env_level() if parsed is None else parsed
    _pinned = resolved
    for logger in _package_loggers():
        logger.setLevel(resolved)
    return resolved


def get_logger(name: str) -> logging.Logger:
    """Return the deadlink.<name> logger."""
    logger = logging.getLogger(f"{_PACKAGE}.{name}")
    _attach_stderr(logger)
    logger.setLevel(_env_level() if _pinned is None else _pinned)
    return logger
