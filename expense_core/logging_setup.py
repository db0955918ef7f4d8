"""Centralized logging configuration for the expense tracker packages.

``configure_logging(...)`` attaches a single ``StreamHandler`` to each package
root logger (``"expense_core"`` and ``"expense_tracker"``) and is called once
by the CLI at process startup. ``get_logger(name)`` acquires a logger and makes
sure the package roots carry a ``NullHandler`` until configuration happens.

Library modules never attach their own handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional, Union

_PKG_LOGGER_NAMES = ("expense_core", "expense_tracker")
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def parse_level(level: Union[int, str, None]) -> int:
    """Translate a level name or number into a ``logging`` level."""
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = logging.getLevelName(level)
        if isinstance(numeric, int):
            return numeric
        raise ValueError(f"Unknown log level: {level}")
    return logging.WARNING


def configure_logging(
    level: Union[int, str, None] = None,
    *,
    fmt: Optional[str] = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Configure the package root loggers exactly once."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    numeric = parse_level(level)
    formatter = logging.Formatter(fmt or _DEFAULT_FORMAT)
    for name in _PKG_LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            if isinstance(handler, logging.NullHandler):
                logger.removeHandler(handler)

        handler = logging.StreamHandler(stream)
        handler.setLevel(numeric)
        handler.setFormatter(formatter)
        logger.setLevel(numeric)
        logger.addHandler(handler)
        logger.propagate = False

    _CONFIGURED = True


def reset_logging() -> None:
    """Drop handlers installed by :func:`configure_logging`."""
    global _CONFIGURED
    for name in _PKG_LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name with silent defaults for library use."""
    if not _CONFIGURED:
        for pkg_name in _PKG_LOGGER_NAMES:
            pkg_logger = logging.getLogger(pkg_name)
            if not pkg_logger.handlers:
                pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
