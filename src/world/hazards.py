# bug motion models
# src/world/hazards.py
"""
Bug motion models.

A bug is a single moving hazard whose cell is a deterministic function
of the tick. The grid only needs `position(tick) -> Cell`; these classes
are the shapes scenario files can describe:

- StationaryBug: never moves.
- PatrolBug: walks a closed loop of waypoints, one waypoint per tick.
- ScriptedBug: explicit tick -> cell table with a resting cell.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Protocol, Sequence, Tuple

from .types import Cell


class BugPath(Protocol):
    """Anything that can answer where the bug is at a given tick."""

    def position(self, tick: int) -> Cell:
        ...


@dataclass(frozen=True)
class StationaryBug:
    cell: Cell

    def position(self, tick: int) -> Cell:
        return self.cell


@dataclass(frozen=True)
class PatrolBug:
    """
    Bug cycling through `waypoints`.

    At tick t the bug is on waypoints[(t + offset) % len(waypoints)].
    Consecutive waypoints are expected to be neighbours, but nothing
    here enforces that.
    """

    waypoints: Tuple[Cell, ...]
    offset: int = 0

    def __post_init__(self) -> None:
        if not self.waypoints:
            raise ValueError("PatrolBug needs at least one waypoint")

    def position(self, tick: int) -> Cell:
        return self.waypoints[(tick + self.offset) % len(self.waypoints)]


@dataclass(frozen=True)
class ScriptedBug:
    """Bug at `positions[tick]` when scripted, otherwise at `default`."""

    default: Cell
    positions: Mapping[int, Cell] = field(default_factory=dict)

    def position(self, tick: int) -> Cell:
        return self.positions.get(tick, self.default)


def _cell(raw: Any) -> Cell:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"Expected [x, y] pair, got {raw!r}")
    return Cell(int(raw[0]), int(raw[1]))


def bug_from_config(cfg: Mapping[str, Any]) -> BugPath:
    """
    Build a BugPath from a scenario mapping.

    Recognized shapes:

        {kind: stationary, cell: [x, y]}
        {kind: patrol, waypoints: [[x, y], ...], offset: 0}
        {kind: scripted, default: [x, y], positions: {tick: [x, y]}}
    """
    kind = cfg.get("kind", "stationary")

    if kind == "stationary":
        return StationaryBug(cell=_cell(cfg.get("cell")))

    if kind == "patrol":
        raw_points: Sequence[Any] = cfg.get("waypoints") or []
        return PatrolBug(
            waypoints=tuple(_cell(p) for p in raw_points),
            offset=int(cfg.get("offset", 0)),
        )

    if kind == "scripted":
        raw_positions = cfg.get("positions") or {}
        positions: Dict[int, Cell] = {
            int(tick): _cell(cell) for tick, cell in raw_positions.items()
        }
        return ScriptedBug(default=_cell(cfg.get("default")), positions=positions)

    raise ValueError(f"Unknown bug kind: {kind!r}")
