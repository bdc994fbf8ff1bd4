"""Shared logging utilities for the catanmap package."""

import logging

from . import settings

PACKAGE_LOGGER = 'catanmap'
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


class PackageHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Stream handler installed once on the package logger."""


def configure_logging(level: str | None = None) -> logging.Logger:
    """Configure the package logger and return it.

    Safe to call more than once: the handler is only installed the first time.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level or settings.LOG_LEVEL)
    if not any(isinstance(h, PackageHandler) for h in logger.handlers):
        handler = PackageHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
