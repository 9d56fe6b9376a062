"""Logging for the interpreter, query builder, listing store and MCP server.

All output goes to stderr: stdout carries the JSON-RPC stream when the
server runs over stdio.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Every logger the package creates; configure_logging() sets them together.
LOGGER_NAMES = (
    "hava-search",
    "hava-search.interpreter",
    "hava-search.query",
    "hava-search.store",
    "mcp-server",
)


def get_logger(name: str = "hava-search", level: Optional[str] = None) -> logging.Logger:
    """Return the named logger with a single stderr handler attached.

    ``level`` overrides the current level; without it a fresh logger
    starts at INFO and an existing one keeps its level.
    """

    logger = logging.getLogger(name)
    logger.propagate = False

    if level is not None:
        logger.setLevel(level.upper())
    elif logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)

    if not logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def configure_logging(level: str) -> None:
    """Apply ``level`` (e.g. ``observability.log_level``) to every package logger."""
    for name in LOGGER_NAMES:
        get_logger(name, level)
