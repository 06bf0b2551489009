"""Logging setup for the command line tool."""

from __future__ import annotations

import logging
import sys

CONSOLE_FORMAT = logging.Formatter("%(levelname)s | %(name)s | %(message)s")

app_logger = logging.getLogger("clu")


def setup_logging(level: str = "WARNING") -> None:
    """Attach a stderr handler to the ``clu`` logger at the given level.

    A console handler left by an earlier call is replaced, so the logger always
    writes to the current ``sys.stderr`` and never holds more than one.
    """
    effective_level = getattr(logging, level.upper(), logging.WARNING)
    app_logger.setLevel(effective_level)

    for handler in list(app_logger.handlers):
        if isinstance(handler, logging.StreamHandler):
            # The old stream may already be closed; do not flush it.
            app_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(CONSOLE_FORMAT)
    console_handler.setLevel(effective_level)
    app_logger.addHandler(console_handler)
