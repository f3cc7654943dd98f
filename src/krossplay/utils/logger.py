"""Logging setup for the KrossPlay engine and desktop player."""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Route all records to stderr, one line each.

    Called once by ``krossplay.main``; ``--verbose`` passes ``logging.DEBUG``
    to trace selection moves and session transitions.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    # library modules never install handlers themselves
    return logging.getLogger(name or "krossplay")
