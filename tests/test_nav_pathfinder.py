# tests/test_nav_pathfinder.py
"""
Unit tests for PathFinder.

Small synthetic grids with scripted bugs, so every expected route can be
worked out by hand. Routes are also replayed with simulate_route to check
the hazard / bounds / round-trip rules independently of the search.
"""

from __future__ import annotations

import pytest

from route_core import DEFAULT_LIMITS, PathFinder, SearchLimits, SearchTracer, simulate_route
from route_core.testing.fakes import RecordingGrid, open_grid, walled_kitchen_grid
from world.hazards import PatrolBug, ScriptedBug, StationaryBug
from world.types import Cell, Instruction

N, E, S, W = Instruction.NORTH, Instruction.EAST, Instruction.SOUTH, Instruction.WEST
WAIT = Instruction.WAIT


def test_two_cell_grid_dwells_and_returns() -> None:
    grid = open_grid(1, 2, (0, 0), (0, 1), bug=StationaryBug(Cell(5, 5)))

    route = PathFinder(grid, 0).find_route()

    assert route == [S, WAIT, WAIT, WAIT, WAIT, WAIT, N]


def test_open_3x3_round_trip() -> None:
    grid = open_grid(3, 3, (0, 0), (2, 2))

    route = PathFinder(grid, 0).find_route()

    assert route == [E, S, E, S] + [WAIT] * 5 + [N, W, N, W]
    replay = simulate_route(grid, 0, route)
    assert replay.valid
    assert replay.visits(Cell(2, 2)) == 1
    assert replay.final_cell == Cell(0, 0)


def test_route_properties_on_open_grid() -> None:
    grid = open_grid(6, 4, (5, 3), (0, 0))

    route = PathFinder(grid, 3).find_route()

    assert 0 < len(route) <= 100
    dx = sum(i.delta[0] for i in route)
    dy = sum(i.delta[1] for i in route)
    assert (dx, dy) == (0, 0)
    replay = simulate_route(grid, 3, route)
    assert replay.valid, replay.violation
    assert replay.visits(grid.kitchen) == 1


def test_route_goes_around_holes() -> None:
    # Wall at x == 2 with a gap at the bottom.
    grid = open_grid(5, 4, (0, 0), (4, 0), holes=[(2, 0), (2, 1), (2, 2)])

    route = PathFinder(grid, 0).find_route()

    replay = simulate_route(grid, 0, route)
    assert route
    assert replay.valid, replay.violation
    assert Cell(2, 3) in replay.cells


def test_longest_possible_round_trip_fits_budget() -> None:
    # 47 steps out, 5 dwell, 47 back = 99 instructions.
    grid = open_grid(48, 1, (0, 0), (47, 0))

    route = PathFinder(grid, 0).find_route()

    assert route == [E] * 47 + [WAIT] * 5 + [W] * 47


def test_kitchen_too_far_gives_empty_route() -> None:
    grid = open_grid(60, 1, (0, 0), (49, 0))

    assert PathFinder(grid, 0).find_route() == []


def test_unreachable_kitchen_gives_empty_route() -> None:
    finder = PathFinder(walled_kitchen_grid(7, 7), 0)

    assert finder.find_route() == []
    assert not finder.stats.found


def test_dead_end_branch_is_skipped() -> None:
    # The heuristic first heads east into a pocket closed by holes.
    #   R . . #
    #   . # . #
    #   . # # #
    #   . . . K
    grid = open_grid(
        4,
        4,
        (0, 0),
        (3, 3),
        holes=[(3, 0), (1, 1), (3, 1), (1, 2), (2, 2), (3, 2)],
    )
    finder = PathFinder(grid, 0)

    route = finder.find_route()

    assert finder.stats.pruned >= 1
    replay = simulate_route(grid, 0, route)
    assert replay.valid, replay.violation
    assert Cell(0, 3) in replay.cells
    assert Cell(1, 0) not in replay.cells


# ---------------------------------------------------------------------------
# Bug avoidance
# ---------------------------------------------------------------------------


def test_outbound_move_is_delayed_while_bug_blocks_it() -> None:
    # The bug sits on the middle cell exactly when the agent would step on it.
    bug = ScriptedBug(default=Cell(5, 5), positions={1: Cell(0, 1)})
    grid = open_grid(1, 3, (0, 0), (0, 2), bug=bug)
    finder = PathFinder(grid, 0)

    route = finder.find_route()

    assert route == [WAIT, S, S] + [WAIT] * 5 + [N, N]
    assert finder.stats.hazard_waits == 1
    assert simulate_route(grid, 0, route).valid


def test_return_move_is_delayed_while_bug_blocks_it() -> None:
    # Without the bug the agent would be back in the room at tick 7.
    bug = ScriptedBug(default=Cell(5, 5), positions={7: Cell(0, 0)})
    grid = open_grid(1, 2, (0, 0), (0, 1), bug=bug)

    route = PathFinder(grid, 0).find_route()

    assert route == [S] + [WAIT] * 6 + [N]
    assert simulate_route(grid, 0, route).valid


def test_start_time_shifts_bug_lookups() -> None:
    bug = ScriptedBug(default=Cell(5, 5), positions={11: Cell(0, 1)})
    grid = open_grid(1, 3, (0, 0), (0, 2), bug=bug)

    route = PathFinder(grid, 10).find_route()

    assert route[0] is WAIT
    assert simulate_route(grid, 10, route).valid


def test_bug_in_kitchen_during_dwell_fails_the_attempt() -> None:
    bug = ScriptedBug(default=Cell(5, 5), positions={3: Cell(0, 1)})
    grid = open_grid(1, 2, (0, 0), (0, 1), bug=bug)
    finder = PathFinder(grid, 0)

    assert finder.find_route() == []
    assert finder.stats.return_attempts == 1


def test_bug_parked_on_only_path_gives_empty_route() -> None:
    grid = open_grid(1, 3, (0, 0), (0, 2), bug=StationaryBug(Cell(0, 1)))

    assert PathFinder(grid, 0).find_route() == []


@pytest.mark.parametrize("size", [4, 6, 8])
def test_bug_parked_in_kitchen_ends_search_at_once(size: int) -> None:
    kitchen = Cell(size - 1, size - 1)
    grid = open_grid(size, size, (0, 0), kitchen, bug=StationaryBug(kitchen))
    finder = PathFinder(grid, 0)

    assert finder.find_route() == []
    assert finder.stats.iterations == 0


def test_no_dwell_window_free_of_the_bug_gives_empty_route() -> None:
    # The bug drops into the kitchen every third tick, so five quiet ticks
    # in a row never happen.
    bug = ScriptedBug(default=Cell(9, 9), positions={t: Cell(5, 5) for t in range(0, 200, 3)})
    grid = open_grid(6, 6, (0, 0), (5, 5), bug=bug)
    finder = PathFinder(grid, 0)

    assert finder.find_route() == []
    assert finder.stats.iterations == 0


def test_return_waits_running_out_of_budget_restore_the_stack() -> None:
    # From tick 7 on the bug never leaves the room.
    bug = ScriptedBug(default=Cell(5, 5), positions={t: Cell(0, 0) for t in range(7, 200)})
    grid = open_grid(1, 2, (0, 0), (0, 1), bug=bug)
    tracer = SearchTracer()
    finder = PathFinder(grid, 0, tracer=tracer)

    assert finder.find_route() == []
    assert finder.stats.return_attempts == 1
    assert finder.stats.hazard_waits > 0

    failed = [r for r in tracer.get_records() if r.kind == "return_failed"]
    assert len(failed) == 1
    # Room node plus the kitchen node, as on arrival.
    assert failed[0].stack_size == 2
    assert failed[0].cell == Cell(0, 1)


def test_detour_around_long_wall_is_found_quickly() -> None:
    # Wall at x == 10 from the top down to y == 10; the kitchen sits just
    # behind it, 33 moves away.
    grid = open_grid(12, 12, (0, 0), (11, 0), holes=[(10, y) for y in range(11)])
    finder = PathFinder(grid, 0)

    route = finder.find_route()

    assert route
    assert len(route) <= 100
    replay = simulate_route(grid, 0, route)
    assert replay.valid, replay.violation
    assert finder.stats.pruned > 0
    assert finder.stats.iterations < 200


def test_patrolling_bug_is_avoided() -> None:
    bug = PatrolBug(waypoints=(Cell(1, 2), Cell(2, 2), Cell(3, 2), Cell(2, 2)))
    grid = open_grid(5, 3, (0, 0), (4, 2), holes=[(2, 0), (2, 1)], bug=bug)

    route = PathFinder(grid, 0).find_route()

    assert route == [E, S, S, E, E, E] + [WAIT] * 5 + [W, WAIT, W, W, N, N, W]
    assert simulate_route(grid, 0, route).valid


# ---------------------------------------------------------------------------
# Search state
# ---------------------------------------------------------------------------


def test_tick_tracks_stack_length() -> None:
    grid = open_grid(3, 3, (0, 0), (2, 2))
    finder = PathFinder(grid, 4)

    route = finder.find_route()

    assert finder.tick == 4 + len(route)
    assert len(finder.discovery_stack) == len(route)
    assert finder.scope == (Cell(0, 0), Cell(2, 2))


def test_bug_is_only_asked_about_future_ticks() -> None:
    grid = RecordingGrid(open_grid(4, 4, (0, 0), (3, 2)))

    route = PathFinder(grid, 7).find_route()

    assert route
    assert grid.queried_ticks
    assert min(grid.queried_ticks) >= 8
    assert max(grid.queried_ticks) <= 7 + DEFAULT_LIMITS.step_budget


def test_find_route_can_be_called_again() -> None:
    grid = open_grid(4, 3, (0, 2), (3, 0))
    finder = PathFinder(grid, 0)

    first = finder.find_route()
    second = finder.find_route()

    assert first == second
    assert first


def test_custom_limits_are_honoured() -> None:
    grid = open_grid(1, 2, (0, 0), (0, 1))
    limits = SearchLimits(step_budget=10, outbound_budget=4, dwell_ticks=2)

    assert PathFinder(grid, 0, limits=limits).find_route() == [S, WAIT, WAIT, N]

    tight = SearchLimits(step_budget=3, outbound_budget=4, dwell_ticks=2)
    assert PathFinder(grid, 0, limits=tight).find_route() == []


def test_search_gives_up_after_max_iterations() -> None:
    grid = open_grid(3, 3, (0, 0), (2, 2))
    finder = PathFinder(grid, 0, limits=SearchLimits(max_iterations=2))

    assert finder.find_route() == []
    assert finder.stats.iterations == 2
    assert not finder.stats.found


def test_tracer_records_search_events() -> None:
    grid = open_grid(3, 3, (0, 0), (2, 2))
    tracer = SearchTracer()

    PathFinder(grid, 0, tracer=tracer).find_route()

    assert tracer.count("arrival") == 1
    assert tracer.count("found") == 1
    assert tracer.get_records()[-1].stack_size == 13
