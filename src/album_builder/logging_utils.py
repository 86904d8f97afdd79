"""
Logging utilities: console setup for the command line.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbosity: int = 0, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Send album_builder logs to stderr.

    Args:
        verbosity: 0 = warnings only, 1 = info, 2+ = debug
        stream: Output stream (default sys.stderr)

    Returns:
        The installed handler
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger("album_builder")
    for existing in list(logger.handlers):
        if getattr(existing, "_album_console", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handler._album_console = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
