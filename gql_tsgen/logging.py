"""Logging for gql-tsgen.

Modules log through child loggers from get_logger(). Nothing is printed
until the CLI calls configure_logging; library users attach their own
handlers to the "gql_tsgen" logger instead.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "gql_tsgen"

_FORMAT = "[gql-tsgen] %(levelname)s %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the gql_tsgen logger or one of its children."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Send gql_tsgen log records to stderr.

    Warnings and errors are always shown; verbose adds debug output. Calling
    this again replaces the previous handler.
    """
    logger = get_logger()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    # stdout carries command output such as scrubbed documents
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    return logger


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]
