# Grid interface + static implementation
# src/world/grid.py
"""
Grid: the static description of the apartment the route is planned in.

The route core only reads:
- width / height (cells 0..width-1, 0..height-1)
- room / kitchen cells
- holes (impassable cells)
- bug(tick): hazard position at a tick

StaticGrid is the concrete implementation used by the loader, the CLI
and the tests. Anything else satisfying the Grid protocol works too.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, FrozenSet, Protocol

from .hazards import BugPath, StationaryBug
from .types import Cell


class Grid(Protocol):
    """Read-only view of a grid, as consumed by the route core."""

    @property
    def width(self) -> int:
        ...

    @property
    def height(self) -> int:
        ...

    @property
    def room(self) -> Cell:
        ...

    @property
    def kitchen(self) -> Cell:
        ...

    @property
    def holes(self) -> AbstractSet[Cell]:
        ...

    def bug(self, tick: int) -> Cell:
        """Return the bug's cell at `tick`."""
        ...


@dataclass(frozen=True)
class StaticGrid:
    """
    Immutable grid with a fixed hole set and a BugPath.

    The default bug sits outside the grid, i.e. it never interferes.
    """

    width: int
    height: int
    room: Cell
    kitchen: Cell
    holes: FrozenSet[Cell] = frozenset()
    bug_path: BugPath = field(default=StationaryBug(Cell(-1, -1)))

    def bug(self, tick: int) -> Cell:
        return self.bug_path.position(tick)
