# core grid types: Cell, Instruction
# src/world/types.py
"""
Cell and Instruction: the coordinates and moves a route is made of.

Instructions are applied one per tick. WAIT keeps the agent on its cell.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Tuple


class Cell(NamedTuple):
    """Integer grid coordinate. Greater y is further south."""

    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Instruction(Enum):
    """
    One unit of a route: a single-cell move or a one-tick wait.

    The value of each member is its coordinate delta, so
    `Instruction.NORTH.value == (0, -1)`.
    """

    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)
    WAIT = (0, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    def execute(self, cell: Cell) -> Cell:
        """Return the cell reached by applying this instruction to `cell`."""
        dx, dy = self.value
        return Cell(cell.x + dx, cell.y + dy)


# The four moves, in clockwise order starting at NORTH.
CARDINALS: Tuple[Instruction, ...] = (
    Instruction.NORTH,
    Instruction.EAST,
    Instruction.SOUTH,
    Instruction.WEST,
)
