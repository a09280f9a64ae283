"""
Centralized logging utilities for the portfolio builder.

All modules share one named logger. The imaging core only emits DEBUG
records (cache hits, variant writes); user-facing messages belong to the
CLI and the batch runner. Records go to stderr so commands that print
JSON on stdout stay machine readable.
"""

import logging
import sys

from portfolio_builder.constants import LOG_FORMAT, LOG_FORMAT_VERBOSE


def setup_logger(
        name: str = __name__,
        level: int = logging.INFO,
        formatter: logging.Formatter | None = None,
        handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Configure a logger with optional custom formatting and handler.

    Handlers are attached only once per logger name, so repeated calls
    return the same configured instance.

    Args:
        name: Logger name, typically the package name.
        level: Logging level (e.g., logging.INFO, logging.DEBUG).
        formatter: Optional custom formatter.
        handler: Optional custom handler. Defaults to a stderr stream.

    Returns:
        A configured logger instance.

    """
    logger_instance = logging.getLogger(name)
    logger_instance.setLevel(level)
    if not logger_instance.handlers:
        if formatter is None:
            formatter = logging.Formatter(LOG_FORMAT)
        if handler is None:
            handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        logger_instance.addHandler(handler)
        logger_instance.propagate = False
    return logger_instance


def set_verbosity(*, verbose: bool) -> None:
    """
    Switch the shared logger between INFO and DEBUG.

    Verbose output also names the worker thread, since batch records from
    different images interleave.
    """
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    fmt = LOG_FORMAT_VERBOSE if verbose else LOG_FORMAT
    for handler in logger.handlers:
        handler.setFormatter(logging.Formatter(fmt))


# Shared logger used across modules
logger = setup_logger("portfolio_builder")
