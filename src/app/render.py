# rich rendering of grids and routes
# src/app/render.py
"""
Terminal rendering for the route finder (using `rich`).

- render_grid: the grid as a table, room R, kitchen K, holes #,
  route cells ., the bug at the start tick B
- instructions_to_text: compact run-length summary, e.g. "S W5 N"
- render_report: grid + summary + verification in one Panel
"""

from __future__ import annotations

from itertools import groupby
from typing import Optional, Sequence

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from route_core.simulate import RouteReplay
from world.grid import Grid
from world.types import Cell, Instruction

_SHORT = {
    Instruction.NORTH: "N",
    Instruction.EAST: "E",
    Instruction.SOUTH: "S",
    Instruction.WEST: "W",
    Instruction.WAIT: "W",
}


def instructions_to_text(instructions: Sequence[Instruction]) -> str:
    """
    Run-length summary of a route.

    Moves use their initial; waits are written as W<count> so they can't
    be confused with WEST:

        [SOUTH, WAIT, WAIT, NORTH] -> "S W2 N"
    """
    parts = []
    for instruction, run in groupby(instructions):
        count = len(list(run))
        if instruction is Instruction.WAIT:
            parts.append(f"W{count}")
        else:
            parts.append(_SHORT[instruction] * count)
    return " ".join(parts)


def _cell_text(grid: Grid, cell: Cell, visited: set, bug_cell: Optional[Cell]) -> Text:
    if cell == grid.room:
        return Text("R", style="bold green")
    if cell == grid.kitchen:
        return Text("K", style="bold yellow")
    if cell in grid.holes:
        return Text("#", style="dim")
    if cell == bug_cell:
        return Text("B", style="bold red")
    if cell in visited:
        return Text(".", style="cyan")
    return Text(" ")


def render_grid(grid: Grid, replay: Optional[RouteReplay] = None, *, time: int = 0) -> Table:
    """Grid as a rich Table, one column per x."""
    visited = set(replay.cells) if replay is not None else set()
    bug_cell = grid.bug(time)

    table = Table(box=box.SQUARE, show_header=False, padding=(0, 1))
    for _ in range(grid.width):
        table.add_column(justify="center")

    for y in range(grid.height):
        table.add_row(*[_cell_text(grid, Cell(x, y), visited, bug_cell) for x in range(grid.width)])
    return table


def render_report(
    title: str,
    grid: Grid,
    time: int,
    instructions: Sequence[Instruction],
    replay: Optional[RouteReplay],
) -> Panel:
    summary = Text()
    if instructions:
        summary.append("Route: ", style="bold")
        summary.append(f"{instructions_to_text(instructions)}\n")
        summary.append("Length: ", style="bold")
        summary.append(f"{len(instructions)}\n")
    else:
        summary.append("No route found\n", style="bold red")

    if replay is not None:
        summary.append("Check: ", style="bold")
        if replay.valid:
            summary.append("ok", style="green")
        else:
            summary.append(f"{replay.violation} at tick {replay.violation_tick}", style="red")

    border = "green" if instructions else "red"
    return Panel(Group(render_grid(grid, replay, time=time), summary), title=title, border_style=border)
