# depth-first round-trip search over the grid
# src/route_core/nav/pathfinder.py
"""
PathFinder: round trip room -> kitchen -> room in at most 100 instructions.

- Depth-first search driven by Node.next_neighbor_to_visit().
- The discovery stack is the route so far; backtracking pops it.
- Moves onto the bug's cell are delayed with inserted waits.
- The way back is the way in, mirrored, with its own hazard waits.
- Neighbours that can no longer lead to a round trip inside the budget
  are skipped before they are pushed.

Time accounting: tick == time + len(discovery_stack). During the
outbound search the top node's instruction is the move being decided,
so a neighbour is entered at `tick`. Once the kitchen is reached every
stacked instruction has been executed and the next move lands at
`tick + 1`.

The search never raises for "no route"; it returns an empty list.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from collections import deque
from dataclasses import dataclass
from typing import AbstractSet, Deque, FrozenSet, List, Optional, Set, Tuple

from world.grid import Grid
from world.types import CARDINALS, Cell, Instruction

from ..limits import DEFAULT_LIMITS, SearchLimits
from ..tracing import SearchTracer
from .node import Node, NodeState

log = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """Counters describing the last find_route() call."""

    iterations: int = 0
    backtracks: int = 0
    hazard_waits: int = 0
    return_attempts: int = 0
    pruned: int = 0
    found: bool = False


class PathFinder:
    """
    Finds a room -> kitchen -> room route for one grid and start time.

    One instance serves one caller at a time; find_route() resets all
    search state on entry.
    """

    def __init__(
        self,
        grid: Grid,
        time: int,
        *,
        limits: Optional[SearchLimits] = None,
        tracer: Optional[SearchTracer] = None,
    ) -> None:
        self._grid = grid
        self._time = time
        self._limits = limits or DEFAULT_LIMITS
        self._tracer = tracer

        self._scope: Tuple[Cell, Cell] = (
            Cell(0, 0),
            Cell(grid.width - 1, grid.height - 1),
        )
        self._stack: List[Node] = []
        self._instructions: List[Instruction] = []
        # Cells the search may never enter and the dwell start offsets
        # that keep the bug out of the kitchen; both set by _prepare().
        self._blocked: FrozenSet[Cell] = frozenset()
        self._arrival_offsets: List[int] = []
        self.stats = SearchStats()

    # ------------------------------------------------------------------
    # Search context (read by Node)
    # ------------------------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def scope(self) -> Tuple[Cell, Cell]:
        """Lowest and highest cell of the grid."""
        return self._scope

    @property
    def discovery_stack(self) -> List[Node]:
        return self._stack

    @property
    def tick(self) -> int:
        return self._time + len(self._stack)

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find_route(self) -> List[Instruction]:
        """
        Run the search.

        Returns the instruction list of a complete round trip, or an empty
        list if none fits in the step budget.
        """
        self._stack = []
        self._instructions = []
        self.stats = SearchStats()

        room, kitchen = self._grid.room, self._grid.kitchen
        log.info(
            "Route search started room=%s kitchen=%s time=%s grid=%sx%s",
            room,
            kitchen,
            self._time,
            self._grid.width,
            self._grid.height,
        )

        if not self._prepare():
            return []

        node: Optional[Node] = Node.explore(room, None, self)
        self._push(node)

        while node is not None:
            if self.stats.iterations >= self._limits.max_iterations:
                log.warning(
                    "Route search gave up after %d iterations", self.stats.iterations
                )
                return []
            self.stats.iterations += 1

            neighbor = node.next_neighbor_to_visit()
            if neighbor is None:
                node = self._backtrack()
                continue

            if not self._can_still_return(neighbor):
                self.stats.pruned += 1
                self._trace("prune", neighbor)
                continue

            if not self._clear_outbound_move(neighbor):
                continue

            self._push(neighbor)

            if neighbor.state is NodeState.ARRIVED:
                if self._attempt_return(neighbor):
                    self._instructions = self._assemble()
                    self.stats.found = True
                    self._trace("found")
                    log.info(
                        "Route found: %d instructions after %d iterations",
                        len(self._instructions),
                        self.stats.iterations,
                    )
                    return list(self._instructions)

            if self._no_time_to_return():
                node = self._backtrack()
            else:
                node = neighbor

        log.info(
            "No route found after %d iterations (%d backtracks, %d pruned)",
            self.stats.iterations,
            self.stats.backtracks,
            self.stats.pruned,
        )
        return []

    # ------------------------------------------------------------------
    # Stack operations
    # ------------------------------------------------------------------

    def _push(self, node: Node) -> None:
        self._stack.append(node)
        self._trace("push", node)

    def _wait_at(self, cell: Cell) -> None:
        self._push(Node.wrap(Instruction.WAIT, cell))

    def _backtrack(self) -> Optional[Node]:
        """
        Drop the current node and the waits it was delayed with.

        Returns the node to continue from, or None when the room itself
        has been dropped.
        """
        self._stack.pop()
        while self._stack and self._stack[-1].is_wait:
            self._stack.pop()

        self.stats.backtracks += 1
        node = self._stack[-1] if self._stack else None
        self._trace("backtrack", node)
        return node

    # ------------------------------------------------------------------
    # Hazard avoidance
    # ------------------------------------------------------------------

    def _clear_outbound_move(self, neighbor: Node) -> bool:
        """
        Delay the move onto `neighbor` until the bug is elsewhere.

        Each wait is slipped in under the current node, so the agent stays
        on the current cell for one more tick. The bug is on the
        neighbour's cell at that tick, so the wait itself is safe. If the
        step budget runs out first, the inserted waits are taken back and
        the move is refused.
        """
        inserted = 0
        while self._grid.bug(self.tick) == neighbor.cell:
            if len(self._stack) + 1 >= self._limits.step_budget:
                self._drop_waits_under_top(inserted)
                log.debug("Move onto %s refused: bug stays there", neighbor.cell)
                return False
            self._delay_departure()
            inserted += 1
        return True

    def _delay_departure(self) -> None:
        current = self._stack.pop()
        self._stack.append(Node.wrap(Instruction.WAIT, current.cell))
        self._stack.append(current)

        self.stats.hazard_waits += 1
        self._trace("wait", current)

    def _drop_waits_under_top(self, count: int) -> None:
        if count == 0:
            return
        current = self._stack.pop()
        del self._stack[-count:]
        self._stack.append(current)

    def _clear_return_move(self, step: Node) -> bool:
        """
        Wait on the current cell while the bug occupies the step's
        destination. Fails when the step budget is reached.
        """
        while self._grid.bug(self.tick + 1) == step.destination:
            if len(self._stack) >= self._limits.step_budget:
                return False
            self._wait_at(step.cell)
            self.stats.hazard_waits += 1
        return True

    # ------------------------------------------------------------------
    # Kitchen and the way back
    # ------------------------------------------------------------------

    def _attempt_return(self, kitchen_node: Node) -> bool:
        """
        Spend the dwell in the kitchen, then replay the way in backwards.

        On failure the discovery stack is restored to how it was on
        arrival, with the kitchen node on top.
        """
        self.stats.return_attempts += 1
        self._trace("arrival", kitchen_node)
        log.debug("Kitchen reached at tick %d", self.tick)

        saved = list(self._stack)

        # Way in, room excluded: the kitchen node mirrors first.
        steps_to_room = [node for node in self._stack[1:] if not node.is_wait]

        # The kitchen node's own instruction is never executed; the agent
        # is already standing in the kitchen.
        self._stack.pop()

        if self._dwell() and self._replay(steps_to_room):
            return True

        self._stack[:] = saved
        self._trace("return_failed", kitchen_node)
        log.debug("Way back does not fit in %d steps", self._limits.step_budget)
        return False

    def _dwell(self) -> bool:
        kitchen = self._grid.kitchen
        for _ in range(self._limits.dwell_ticks):
            if len(self._stack) >= self._limits.step_budget:
                return False
            if self._grid.bug(self.tick + 1) == kitchen:
                log.debug("Bug enters the kitchen during the dwell at tick %d", self.tick + 1)
                return False
            self._wait_at(kitchen)
        return True

    def _replay(self, steps_to_room: List[Node]) -> bool:
        for node in reversed(steps_to_room):
            step = node.node_for_parent_return()
            if step is None:
                continue

            if not self._clear_return_move(step):
                return False

            if len(self._stack) >= self._limits.step_budget:
                return False

            self._push(step)
        return True

    def _no_time_to_return(self) -> bool:
        # The top node's move has not been executed yet.
        return len(self._stack) - 1 > self._limits.outbound_budget

    # ------------------------------------------------------------------
    # Feasibility and assembly
    # ------------------------------------------------------------------

    def _prepare(self) -> bool:
        """
        Bug-aware lower bounds, computed once per search.

        A cell the bug never leaves during the trip is treated like a hole.
        The kitchen may be entered after `offset` instructions only if the
        bug stays out of it from that tick to the end of the dwell. When
        the kitchen cannot be reached, the shortest round trip does not
        fit the budget, or no entry offset is left, the depth-first
        search cannot succeed.
        """
        room, kitchen = self._grid.room, self._grid.kitchen
        budget, dwell = self._limits.step_budget, self._limits.dwell_ticks

        # positions[i] is the bug's cell at tick time + 1 + i.
        positions = [self._grid.bug(self._time + 1 + i) for i in range(budget)]
        parked = positions[0] if positions and all(c == positions[0] for c in positions) else None
        blocked: Set[Cell] = set(self._grid.holes)
        if parked is not None:
            blocked.add(parked)
        self._blocked = frozenset(blocked)
        self._arrival_offsets = []

        if parked == room:
            log.info("Bug is parked in the room %s; the agent cannot come back", room)
            return False

        distance = self._distance_to_kitchen(room, frozenset(), budget)
        if distance is None:
            log.info("Kitchen %s is not reachable from room %s", kitchen, room)
            return False

        shortest = 2 * distance + dwell
        if shortest > budget:
            log.info(
                "Shortest round trip needs %d instructions, budget is %d",
                shortest,
                budget,
            )
            return False

        self._arrival_offsets = [
            offset
            for offset in range(max(distance, 1), budget - dwell - distance + 1)
            if kitchen not in positions[offset - 1 : offset + dwell]
        ]
        if not self._arrival_offsets:
            log.info("Bug occupies the kitchen during every possible dwell")
            return False
        return True

    def _can_still_return(self, neighbor: Node) -> bool:
        """
        Cheap necessary condition for `neighbor` to lead to a round trip.

        With `taken` instructions executed up to the move onto `neighbor`,
        `moves` of them real moves, and `distance` the bug-free distance
        from `neighbor` to the kitchen around the cells already on the
        stack:
        - the kitchen is entered after at least taken + distance
          instructions, at an offset the dwell allows;
        - the way back has at least moves + distance instructions;
        - the cell before the kitchen is pushed with at least
          taken + distance - 1 instructions executed, capped by the
          outbound budget.
        """
        budget, dwell = self._limits.step_budget, self._limits.dwell_ticks
        taken = len(self._stack)
        moves = sum(1 for node in self._stack if not node.is_wait)

        limit = (budget - dwell - moves - taken) // 2
        if neighbor.cell != self._grid.kitchen:
            limit = min(limit, self._limits.outbound_budget - taken + 1)

        on_path = {node.cell for node in self._stack}
        distance = self._distance_to_kitchen(neighbor.cell, on_path, limit)
        if distance is None:
            return False

        earliest = taken + distance
        latest = budget - dwell - moves - distance
        index = bisect_left(self._arrival_offsets, earliest)
        return index < len(self._arrival_offsets) and self._arrival_offsets[index] <= latest

    def _distance_to_kitchen(
        self,
        start: Cell,
        avoid: AbstractSet[Cell],
        limit: int,
    ) -> Optional[int]:
        """
        Fewest moves from `start` to the kitchen, ignoring the bug's
        timing and keeping clear of blocked cells and `avoid`.

        Returns None when the kitchen is more than `limit` moves away.
        """
        kitchen = self._grid.kitchen
        if kitchen in self._blocked:
            return None
        if start == kitchen:
            return 0

        low, high = self._scope
        seen: Set[Cell] = {start}
        queue: Deque[Tuple[Cell, int]] = deque([(start, 0)])
        while queue:
            cell, distance = queue.popleft()
            if distance >= limit:
                break
            for direction in CARDINALS:
                nxt = direction.execute(cell)
                if nxt == kitchen:
                    return distance + 1
                if nxt in seen or nxt in avoid or nxt in self._blocked:
                    continue
                if not (low.x <= nxt.x <= high.x and low.y <= nxt.y <= high.y):
                    continue
                seen.add(nxt)
                queue.append((nxt, distance + 1))
        return None

    def _assemble(self) -> List[Instruction]:
        instructions: List[Instruction] = []
        for node in self._stack:
            if node.direction is None:
                log.warning("Node without instruction at %s; route truncated", node.cell)
                break
            instructions.append(node.direction)
        return instructions

    def _trace(self, kind: str, node: Optional[Node] = None) -> None:
        if self._tracer is None:
            return
        self._tracer.record(
            kind,
            tick=self.tick,
            stack_size=len(self._stack),
            cell=node.cell if node is not None else None,
            instruction=node.direction if node is not None else None,
        )
