# route_core package
# src/route_core/__init__.py
"""
route_core package.

Exports:
    - solve: validate a request and find a room -> kitchen -> room route
    - RouteRequestError: rejected-input error raised by solve()
    - PathFinder: the depth-first search itself
    - SearchLimits: step budget, outbound budget and kitchen dwell
    - simulate_route: independent replay/check of a route
"""

from __future__ import annotations

from .limits import DEFAULT_LIMITS, SearchLimits, load_search_limits
from .nav import PathFinder, SearchStats
from .simulate import RouteReplay, RouteStep, simulate_route
from .solution import RouteRequestError, solve, validate_request
from .tracing import SearchTracer, SearchTraceRecord

__all__ = [
    "DEFAULT_LIMITS",
    "SearchLimits",
    "load_search_limits",
    "PathFinder",
    "SearchStats",
    "RouteReplay",
    "RouteStep",
    "simulate_route",
    "RouteRequestError",
    "solve",
    "validate_request",
    "SearchTracer",
    "SearchTraceRecord",
]
