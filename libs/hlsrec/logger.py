from __future__ import annotations

import logging
import sys
from typing import IO


FORMAT_BASE = "[{name}][{levelname}] {message}"
FORMAT_DATE = "%H:%M:%S"

LOG_LEVELS = ["none", "error", "warning", "info", "debug"]

root = logging.getLogger("hlsrec")


def basic_config(level: str = "info", stream: IO[str] | None = None, remove_handlers: bool = True) -> logging.Handler:
    """
    Set up a stream handler on the ``hlsrec`` root logger.

    :param level: one of :data:`LOG_LEVELS`, ``"none"`` disables logging
    :param stream: defaults to ``sys.stderr``, so that logging never interferes with output written to stdout
    :param remove_handlers: remove previously added handlers first
    """
    level = level.lower()
    if level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}")

    if remove_handlers:
        for handler in root.handlers[:]:
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(FORMAT_BASE, datefmt=FORMAT_DATE, style="{"))
    root.addHandler(handler)
    root.propagate = False
    root.setLevel(logging.CRITICAL + 1 if level == "none" else level.upper())

    return handler


__all__ = ["LOG_LEVELS", "basic_config"]
