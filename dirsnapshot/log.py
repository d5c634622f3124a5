# dirsnapshot/log.py

"""
Logging configuration for dirsnapshot.

Diagnostics go to stderr through the ``dirsnapshot`` logger so that stdout
only carries the user-facing status line.
"""


from __future__ import annotations

import logging
import sys

LOGGER_NAME = "dirsnapshot"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """
    Configure the package logger.

    Parameters
    ----------
    level : str, default="WARNING"
        Logging level name (``"DEBUG"``, ``"INFO"``, ...).

    Returns
    -------
    logging.Logger
        The configured ``dirsnapshot`` logger.

    Raises
    ------
    ValueError
        If ``level`` is not a known logging level.
    """

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(numeric_level)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

    logger.debug("Logging initialized - Level: %s", level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``dirsnapshot.<name>`` logger."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
