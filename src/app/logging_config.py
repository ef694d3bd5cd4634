# src/app/logging_config.py
"""
Central logging configuration for the route finder CLI.

    from app.logging_config import configure_logging, level_for
    configure_logging(level_for(verbose=1))

Levels:
- default: WARNING (only problems)
- -v:      INFO (search start / result)
- -vv:     DEBUG (arrivals, hazard waits, one line per trace record)
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def level_for(verbose: int = 0) -> int:
    """Map a -v count to a logging level."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(level: int = logging.INFO) -> None:
    """
    Attach a stdout handler to the root logger unless one exists.

    An already configured root logger only gets its level adjusted.
    """
    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root.addHandler(handler)
