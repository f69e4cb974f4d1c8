"""Logging configuration for Mobile Version Lookup.

The library only ever logs through loggers under ``mobile_version``. Handlers
are attached by :func:`setup_logging`, which the CLI calls; applications that
embed the library configure logging themselves.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "mobile_version"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed by setup_logging so repeated calls replace them.
_HANDLER_FLAG = "_mobile_version_handler"


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance (usually ``get_logger(__name__)``)."""
    return logging.getLogger(name)


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the package logger.

    Calling this again replaces the handlers from the previous call rather
    than stacking new ones.

    Args:
        level: Level for the package logger. WARNING keeps CLI output clean;
            DEBUG shows cache hits and misses.
        log_file: Optional log file path, created with its parent directory.

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            package_logger.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_FLAG, True)
        package_logger.addHandler(handler)

    package_logger.setLevel(level)

    # Request logs from httpx would repeat what the fetchers already report.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return package_logger
