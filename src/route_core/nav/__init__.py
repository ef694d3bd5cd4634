# src/route_core/nav/__init__.py
"""
Navigation subsystem for route_core.

Provides:
- SearchStrategy: clockwise / counterclockwise direction cycling
- Node: discovery stack entries (exploration and wrapper nodes)
- PathFinder: depth-first round-trip search
"""

from __future__ import annotations

from .strategy import SearchStrategy
from .node import Node, NodeState, SearchContext, initial_effort
from .pathfinder import PathFinder, SearchStats

__all__ = [
    "SearchStrategy",
    "Node",
    "NodeState",
    "SearchContext",
    "initial_effort",
    "PathFinder",
    "SearchStats",
]
