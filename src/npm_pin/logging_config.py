"""
Centralized logging configuration for npm-pin.

Diagnostics go to stderr (and optionally a file) so the rendered report on
stdout can be piped or redirected untouched.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAME = "npm_pin"

_logger: logging.Logger | None = None


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    verbose: bool = False,
    quiet: bool = False,
    propagate: bool = False,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        verbose: Enable DEBUG output, including every skipped manifest
        quiet: Suppress console output (file only)
        propagate: Allow propagation to the root logger (useful for testing)

    Returns:
        Configured logger instance
    """
    global _logger

    if verbose:
        effective_level = "DEBUG"
    elif quiet:
        effective_level = "ERROR"
    else:
        effective_level = level.upper()

    logger = logging.getLogger(LOGGER_NAME)
    # The file handler records everything; console filtering is per handler.
    logger.setLevel(logging.DEBUG if log_file else getattr(logging, effective_level))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, effective_level))
        console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    logger.propagate = propagate

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """
    Get the configured package logger, initializing defaults on first use.
    """
    global _logger
    if _logger is None:
        _logger = setup_logging()
    return _logger
