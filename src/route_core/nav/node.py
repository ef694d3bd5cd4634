# search nodes for the depth-first route search
# src/route_core/nav/node.py
"""
Node: one entry of the discovery stack.

Two kinds of node share this class:

- Exploration nodes (Node.explore) stand for a cell reached on the way to
  the kitchen. They know their four neighbours and offer them one at a
  time, starting with a heuristic direction towards the kitchen and
  rotating clockwise or counterclockwise from there.

- Wrapper nodes (Node.wrap) only carry an instruction and the cell it is
  executed from: hazard waits, the kitchen dwell and the mirrored steps
  of the way back to the room.

A node's instruction (`direction`) is executed from its own cell, so the
discovery stack read bottom to top is the route.

The parent link points from child to parent only. The discovery stack
owns the nodes; a parent never references its children.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Protocol, Sequence, Tuple

from world.grid import Grid
from world.types import CARDINALS, Cell, Instruction

from .strategy import SearchStrategy


class SearchContext(Protocol):
    """Search state a node reads while mapping its neighbourhood."""

    @property
    def grid(self) -> Grid:
        ...

    @property
    def scope(self) -> Tuple[Cell, Cell]:
        ...

    @property
    def discovery_stack(self) -> Sequence["Node"]:
        ...


class NodeState(Enum):
    EXPLORING = "exploring"
    # Exploration node on the kitchen cell; it turns back instead of
    # exploring further.
    ARRIVED = "arrived"
    WRAPPER = "wrapper"


# (horizontal effort, kitchen is north, kitchen is east) -> first guess
_EFFORT_TABLE: Dict[Tuple[bool, bool, bool], Tuple[Instruction, SearchStrategy]] = {
    (True, True, True): (Instruction.EAST, SearchStrategy.COUNTERCLOCKWISE),
    (True, True, False): (Instruction.WEST, SearchStrategy.CLOCKWISE),
    (True, False, True): (Instruction.EAST, SearchStrategy.CLOCKWISE),
    (True, False, False): (Instruction.WEST, SearchStrategy.COUNTERCLOCKWISE),
    (False, True, True): (Instruction.NORTH, SearchStrategy.CLOCKWISE),
    (False, True, False): (Instruction.NORTH, SearchStrategy.COUNTERCLOCKWISE),
    (False, False, True): (Instruction.SOUTH, SearchStrategy.COUNTERCLOCKWISE),
    (False, False, False): (Instruction.SOUTH, SearchStrategy.CLOCKWISE),
}


def initial_effort(cell: Cell, kitchen: Cell) -> Tuple[Instruction, SearchStrategy]:
    """
    First direction to try from `cell` and the sense to rotate in.

    The kitchen counts as east unless it lies strictly west of the cell,
    and as south unless it lies strictly north (smaller y). Equal
    horizontal and vertical distances favour the horizontal move.
    """
    kitchen_is_east = not cell.x > kitchen.x
    kitchen_is_north = cell.y > kitchen.y
    horizontal = abs(cell.x - kitchen.x) >= abs(cell.y - kitchen.y)
    return _EFFORT_TABLE[(horizontal, kitchen_is_north, kitchen_is_east)]


@dataclass(eq=False)
class Node:
    cell: Cell
    direction: Instruction
    parent: Optional["Node"] = field(default=None, repr=False)
    state: NodeState = NodeState.WRAPPER
    initial_direction: Optional[Instruction] = None
    strategy: Optional[SearchStrategy] = None
    # Direction -> neighbour cell still to be offered, None once unavailable.
    neighbors: Dict[Instruction, Optional[Cell]] = field(default_factory=dict)
    context: Optional[SearchContext] = field(default=None, repr=False)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def explore(
        cls,
        cell: Cell,
        parent: Optional["Node"],
        context: SearchContext,
    ) -> "Node":
        """Create an exploration node aware of its neighbours."""
        initial, strategy = initial_effort(cell, context.grid.kitchen)
        node = cls(
            cell=cell,
            direction=initial,
            parent=parent,
            state=NodeState.EXPLORING,
            initial_direction=initial,
            strategy=strategy,
            context=context,
        )
        node._map_neighbors()
        node._review_strategy()
        node._check_kitchen()
        return node

    @classmethod
    def wrap(cls, instruction: Instruction, cell: Cell) -> "Node":
        """Create a node that only wraps `instruction` executed from `cell`."""
        return cls(cell=cell, direction=instruction)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_wait(self) -> bool:
        return self.direction is Instruction.WAIT

    @property
    def destination(self) -> Cell:
        """Cell the agent is on after executing this node's instruction."""
        return self.direction.execute(self.cell)

    # ------------------------------------------------------------------
    # Search operations
    # ------------------------------------------------------------------

    def next_neighbor_to_visit(self) -> Optional["Node"]:
        """
        Offer the next unvisited neighbour as a new exploration node.

        The offered direction is consumed and becomes this node's
        instruction. Returns None once every direction is used up, which
        tells the path finder to backtrack.
        """
        if self.state is not NodeState.EXPLORING:
            return None

        direction = self._first_available_direction()
        if direction is None:
            return None

        neighbor = self.neighbors[direction]
        self.neighbors[direction] = None
        self.direction = direction

        assert neighbor is not None and self.context is not None
        return Node.explore(neighbor, self, self.context)

    def node_for_parent_return(self) -> Optional["Node"]:
        """
        Mirror the step that led here.

        The parent's instruction moved the agent onto this cell; its
        opposite, executed from this cell, moves the agent back onto the
        parent's cell. Returns None for the room node.
        """
        if self.parent is None:
            return None

        instruction = SearchStrategy.opposite_direction(self.parent.direction)
        node = Node.wrap(instruction, self.cell)
        node.parent = self
        return node

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _first_available_direction(self) -> Optional[Instruction]:
        assert self.initial_direction is not None and self.strategy is not None

        direction = self.initial_direction
        for _ in range(len(CARDINALS)):
            if self.neighbors.get(direction) is not None:
                return direction
            direction = self.strategy.next_direction(direction)
        return None

    def _map_neighbors(self) -> None:
        assert self.context is not None
        grid = self.context.grid
        low, high = self.context.scope
        on_path = {node.cell for node in self.context.discovery_stack}
        parent_cell = self.parent.cell if self.parent is not None else None

        for direction in CARDINALS:
            neighbor = direction.execute(self.cell)

            in_scope = low.x <= neighbor.x <= high.x and low.y <= neighbor.y <= high.y
            blocked = (
                not in_scope
                or neighbor in grid.holes
                or neighbor == parent_cell
                or neighbor in on_path
            )
            self.neighbors[direction] = None if blocked else neighbor

    def _review_strategy(self) -> None:
        """
        Turn the rotation around when the first two candidates are both
        blocked, so the search starts on the open side.
        """
        assert self.strategy is not None
        following = self.strategy.next_direction(self.direction)
        if self.neighbors.get(self.direction) is None and self.neighbors.get(following) is None:
            self.strategy = self.strategy.reverse()

    def _check_kitchen(self) -> None:
        """In the kitchen the node turns back towards the room."""
        assert self.context is not None
        if self.cell == self.context.grid.kitchen:
            self.state = NodeState.ARRIVED
            self.direction = SearchStrategy.opposite_direction(self.direction)

    def __str__(self) -> str:
        return f"{self.cell}\t{self.direction.name}"
