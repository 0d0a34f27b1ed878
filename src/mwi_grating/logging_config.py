# src/mwi_grating/logging_config.py
"""
mwi_grating.logging_config

Logging for the package and for scripts that drive it.

Library modules only fetch a logger:

    from .logging_config import get_logger
    logger = get_logger(__name__)

Importing the package attaches a NullHandler to the "mwi_grating" logger and
nothing else; the caller's root logger is left alone. Applications (the
experiment scripts) call configure_logging() to get console output on stderr.
The console level comes from the MWI_GRATING_LOG_LEVEL environment variable
(DEBUG, INFO, WARNING, ERROR, CRITICAL; default INFO) or from set_log_level().
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import Dict, Optional

LOG_LEVEL_ENV: str = "MWI_GRATING_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_PACKAGE_LOGGER = "mwi_grating"
_DEFAULT_FORMAT = "%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s"
_DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_DEFAULT_LEVEL = logging.INFO

_loggers: Dict[str, logging.Logger] = {}
_console_handler: Optional[logging.StreamHandler] = None
_file_handler: Optional[logging.FileHandler] = None


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else _DEFAULT_LEVEL
    return level if isinstance(level, int) else _DEFAULT_LEVEL


def get_logger(name: str) -> logging.Logger:
    """Return the (cached) logger for a module. Never configures handlers."""
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def configure_logging(level: Optional[int] = None) -> logging.Logger:
    """
    Attach one stderr console handler to the root logger.

    For applications only; calling it again just updates the level.
    Returns the root logger.
    """
    global _console_handler

    if level is None:
        level = _level_from_env()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if _console_handler is None:
        _console_handler = logging.StreamHandler(sys.stderr)
        _console_handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATE_FORMAT))
        root_logger.addHandler(_console_handler)
    _console_handler.setLevel(level)

    silence_logger("matplotlib")
    silence_logger("matplotlib.font_manager")
    return root_logger


def set_log_level(level: int) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if _console_handler is not None:
        _console_handler.setLevel(level)


def enable_file_logging(filename: Optional[str] = None, level: int = logging.DEBUG) -> str:
    """
    Also write log records to a file (DEBUG by default).

    Returns the path of the log file; a timestamped name is generated when
    filename is not given.
    """
    global _file_handler

    if filename is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"mwi_grating_{timestamp}.log"

    disable_file_logging()

    _file_handler = logging.FileHandler(filename, encoding="utf-8")
    _file_handler.setLevel(level)
    _file_handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.addHandler(_file_handler)
    if root_logger.level > level or root_logger.level == logging.NOTSET:
        root_logger.setLevel(level)

    return filename


def disable_file_logging() -> None:
    global _file_handler

    if _file_handler is not None:
        root_logger = logging.getLogger()
        root_logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None


def silence_logger(name: str) -> None:
    """Restrict a (usually third-party) logger to WARNING and above."""
    logging.getLogger(name).setLevel(logging.WARNING)


logging.getLogger(_PACKAGE_LOGGER).addHandler(logging.NullHandler())
