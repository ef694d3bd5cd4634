# src/app/__init__.py
"""
Application entrypoints for the route finder.

Exposes:
- main: `route-finder` CLI (scenario file -> rendered route)
- configure_logging: root logger setup used by the CLI
"""

from __future__ import annotations

from .cli import main
from .logging_config import configure_logging

__all__ = [
    "main",
    "configure_logging",
]
