# rotation sense lookup tables
# src/route_core/nav/strategy.py
"""
SearchStrategy: the sense in which a node cycles through its neighbours.

Pure lookup tables, no state:
- next_direction: NORTH -> EAST -> SOUTH -> WEST (clockwise) or reverse
- opposite_direction: NORTH <-> SOUTH, EAST <-> WEST (sense-independent)
- reverse: the other sense
"""

from __future__ import annotations

from enum import Enum
from typing import Dict

from world.types import Instruction

N, E, S, W = Instruction.NORTH, Instruction.EAST, Instruction.SOUTH, Instruction.WEST

_CLOCKWISE_NEXT: Dict[Instruction, Instruction] = {N: E, E: S, S: W, W: N}
_COUNTERCLOCKWISE_NEXT: Dict[Instruction, Instruction] = {N: W, W: S, S: E, E: N}
_OPPOSITE: Dict[Instruction, Instruction] = {N: S, S: N, E: W, W: E}


class SearchStrategy(Enum):
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"

    def next_direction(self, instruction: Instruction) -> Instruction:
        """
        Next direction when rotating in this sense.

        WAIT has no place in the rotation and is returned unchanged.
        """
        table = _CLOCKWISE_NEXT if self is SearchStrategy.CLOCKWISE else _COUNTERCLOCKWISE_NEXT
        return table.get(instruction, instruction)

    @staticmethod
    def opposite_direction(instruction: Instruction) -> Instruction:
        """Geometric inverse of a move. Raises KeyError for WAIT."""
        return _OPPOSITE[instruction]

    def reverse(self) -> "SearchStrategy":
        if self is SearchStrategy.CLOCKWISE:
            return SearchStrategy.COUNTERCLOCKWISE
        return SearchStrategy.CLOCKWISE
