# validating entry point for the route search
# src/route_core/solution.py
"""
solve(): validate a route request and run the path finder.

Design constraints:
- Invalid requests raise RouteRequestError before any search happens.
- "No route" is not an error: solve() returns an empty list.
- Each call builds its own PathFinder; nothing is shared between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from world.grid import Grid
from world.types import Cell, Instruction

from .limits import SearchLimits
from .nav import PathFinder
from .tracing import SearchTracer

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


@dataclass
class RouteRequestError(ValueError):
    """
    Raised by solve() for a request the search must not run on.

    Codes:
        negative_time, grid_missing, cell_missing,
        cell_out_of_scope, room_is_kitchen
    """

    code: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"RouteRequestError(code={self.code!r}, details={self.details!r})"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _check_cell(name: str, cell: Optional[Cell], width: int, height: int) -> None:
    if cell is None:
        raise RouteRequestError("cell_missing", {"cell": name})

    if not (0 <= cell.x < width and 0 <= cell.y < height):
        raise RouteRequestError(
            "cell_out_of_scope",
            {"cell": name, "x": cell.x, "y": cell.y, "width": width, "height": height},
        )


def validate_request(grid: Optional[Grid], time: int) -> None:
    """Raise RouteRequestError if (grid, time) is not a valid request."""
    if time < 0:
        raise RouteRequestError("negative_time", {"time": time})

    if grid is None:
        raise RouteRequestError("grid_missing")

    width, height = grid.width, grid.height
    room, kitchen = grid.room, grid.kitchen

    _check_cell("room", room, width, height)
    _check_cell("kitchen", kitchen, width, height)

    if room == kitchen:
        raise RouteRequestError("room_is_kitchen", {"cell": [room.x, room.y]})


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def solve(
    grid: Optional[Grid],
    time: int,
    *,
    limits: Optional[SearchLimits] = None,
    tracer: Optional[SearchTracer] = None,
) -> List[Instruction]:
    """
    Find a route from the room to the kitchen and back.

    After the last instruction the agent is in the room again. The route
    has at most `limits.step_budget` (100) instructions and is not
    guaranteed to be the shortest.

    Args:
        grid: the grid to find a route on
        time: tick at which the agent leaves the room (>= 0)

    Returns:
        The instructions, or an empty list if no route was found.

    Raises:
        RouteRequestError: if the request is invalid.
    """
    validate_request(grid, time)
    assert grid is not None

    finder = PathFinder(grid, time, limits=limits, tracer=tracer)
    route = finder.find_route()

    if not route:
        log.info("solve(): no route for time=%s", time)
    return route
