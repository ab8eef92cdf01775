"""Logging helpers for the simulator packages.

Both ``carsim`` and ``dispatch`` are silent by default (``NullHandler``).
Drivers opt in explicitly:

    from carsim import logging_config

    logging_config.enable_console_logging(level="DEBUG")
    logging_config.enable_file_logging("logs/car.log")
    logging_config.configure_from_env()

Environment variables:
    LIFTDISPATCH_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    LIFTDISPATCH_LOG_FILE: Path to a rotating log file
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Literal, Union

__all__ = [
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "set_level",
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

LOGGER_NAMES = ("carsim", "dispatch")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _get_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_loggers() -> List[logging.Logger]:
    return [logging.getLogger(name) for name in LOGGER_NAMES]


def _attach(handler: logging.Handler, level: Union[str, int]) -> None:
    handler.setLevel(_get_level(level))
    for logger in _get_loggers():
        logger.setLevel(_get_level(level))
        logger.addHandler(handler)


def enable_console_logging(
    level: Union[LogLevel, int] = "INFO",
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Send simulator logs to stderr and return the handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format, date_format))
    _attach(handler, level)
    return handler


def enable_file_logging(
    path: Union[str, Path],
    level: Union[LogLevel, int] = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> RotatingFileHandler:
    """Write simulator logs to a rotating file.

    Parent directories are created. Once the file reaches ``max_bytes`` it is
    rolled over, keeping at most ``backup_count`` old files.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    handler.setFormatter(logging.Formatter(format, date_format))
    _attach(handler, level)
    return handler


def set_level(level: Union[LogLevel, int]) -> None:
    for logger in _get_loggers():
        logger.setLevel(_get_level(level))


def disable_logging() -> None:
    """Remove every handler except the library NullHandler."""
    for logger in _get_loggers():
        for handler in logger.handlers[:]:
            if not isinstance(handler, logging.NullHandler):
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(logging.NOTSET)


def configure_from_env() -> None:
    level = os.environ.get("LIFTDISPATCH_LOGGING")
    log_file = os.environ.get("LIFTDISPATCH_LOG_FILE")
    if not level and not log_file:
        return
    level = level or "INFO"
    if log_file:
        enable_file_logging(log_file, level=level)
    else:
        enable_console_logging(level=level)
