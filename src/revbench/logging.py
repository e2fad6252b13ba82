"""Logging setup for revbench.

Progress notices and warnings go through the ``revbench`` logger to
stderr, so the report printed on stdout stays clean.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "revbench"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_CONSOLE_FORMAT = "%(message)s"
_VERBOSE_CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure and return the root revbench logger.

    Args:
        verbose: If True, the console shows DEBUG messages (including
            the command lines of every subprocess).
        quiet: If True, the console only shows warnings and errors.
            Ignored if *verbose* is True.
        log_file: If provided, also log everything at DEBUG to this path.

    Returns:
        The configured ``revbench`` logger.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Calling this twice (e.g. from tests) must not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    if verbose:
        console.setLevel(logging.DEBUG)
        console.setFormatter(logging.Formatter(_VERBOSE_CONSOLE_FORMAT))
    else:
        console.setLevel(logging.WARNING if quiet else logging.INFO)
        console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(fh)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child logger, e.g. ``get_logger("cache")`` -> ``revbench.cache``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")
