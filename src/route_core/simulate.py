# replay instructions on a grid and check the route
# src/route_core/simulate.py
"""
Route replay.

Walks a list of instructions from the room, starting at `time`, and
reports the cells visited and the first rule the route breaks, if any:

    out_of_scope         stepped outside the grid
    hole                 stepped onto a hole
    bug                  shared a cell with the bug at some tick
    too_long             more instructions than the step budget
    kitchen_not_visited  never reached the kitchen
    not_home             did not end in the room

This module does not search; it is the independent check for routes
produced by PathFinder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from world.grid import Grid
from world.types import Cell, Instruction

from .limits import DEFAULT_LIMITS


@dataclass(frozen=True)
class RouteStep:
    tick: int
    cell: Cell
    instruction: Optional[Instruction]   # None for the starting position


@dataclass
class RouteReplay:
    steps: List[RouteStep] = field(default_factory=list)
    violation: Optional[str] = None
    violation_tick: Optional[int] = None

    @property
    def valid(self) -> bool:
        return self.violation is None

    @property
    def cells(self) -> List[Cell]:
        return [step.cell for step in self.steps]

    @property
    def final_cell(self) -> Optional[Cell]:
        return self.steps[-1].cell if self.steps else None

    def visits(self, cell: Cell) -> int:
        """Number of distinct arrivals on `cell` (waits do not count)."""
        count = 0
        previous: Optional[Cell] = None
        for step in self.steps:
            if step.cell == cell and step.cell != previous:
                count += 1
            previous = step.cell
        return count


def simulate_route(
    grid: Grid,
    time: int,
    instructions: Sequence[Instruction],
    *,
    step_budget: int = DEFAULT_LIMITS.step_budget,
) -> RouteReplay:
    """Replay `instructions` from the room at `time`."""
    replay = RouteReplay()
    cell = grid.room
    replay.steps.append(RouteStep(tick=time, cell=cell, instruction=None))

    def fail(reason: str, tick: int) -> RouteReplay:
        replay.violation = reason
        replay.violation_tick = tick
        return replay

    if len(instructions) > step_budget:
        return fail("too_long", time)

    seen_kitchen = False
    for offset, instruction in enumerate(instructions, start=1):
        tick = time + offset
        cell = instruction.execute(cell)
        replay.steps.append(RouteStep(tick=tick, cell=cell, instruction=instruction))

        if not (0 <= cell.x < grid.width and 0 <= cell.y < grid.height):
            return fail("out_of_scope", tick)
        if cell in grid.holes:
            return fail("hole", tick)
        if grid.bug(tick) == cell:
            return fail("bug", tick)
        if cell == grid.kitchen:
            seen_kitchen = True

    end_tick = time + len(instructions)
    if not seen_kitchen:
        return fail("kitchen_not_visited", end_tick)
    if cell != grid.room:
        return fail("not_home", end_tick)
    return replay
