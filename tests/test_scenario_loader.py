# tests/test_scenario_loader.py
"""
Tests for world.loader (YAML scenarios) and world.hazards.bug_from_config.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from world.hazards import PatrolBug, ScriptedBug, StationaryBug, bug_from_config
from world.loader import ScenarioError, load_scenario, scenario_from_dict
from world.types import Cell


def write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_load_scenario_from_path(tmp_path: Path) -> None:
    path = write_yaml(
        tmp_path / "corridor.yaml",
        {
            "time": 3,
            "width": 5,
            "height": 2,
            "room": [0, 0],
            "kitchen": [4, 1],
            "holes": [[2, 0]],
            "bug": {"kind": "patrol", "waypoints": [[1, 1], [2, 1]]},
        },
    )

    scenario = load_scenario(path)

    assert scenario.name == "corridor"
    assert scenario.time == 3
    grid = scenario.grid
    assert (grid.width, grid.height) == (5, 2)
    assert grid.room == Cell(0, 0)
    assert grid.kitchen == Cell(4, 1)
    assert grid.holes == frozenset({Cell(2, 0)})
    assert [grid.bug(t) for t in range(3)] == [Cell(1, 1), Cell(2, 1), Cell(1, 1)]


def test_load_bundled_scenario_by_name() -> None:
    scenario = load_scenario("hallway")

    assert scenario.name == "hallway"
    assert scenario.grid.kitchen == Cell(0, 1)
    assert scenario.grid.bug(0) == Cell(5, 5)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_scenario(tmp_path / "nope.yaml")


def test_non_mapping_rejected(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ScenarioError):
        load_scenario(path)


@pytest.mark.parametrize(
    "data",
    [
        {"width": 3, "height": 3, "room": [0, 0]},                          # no kitchen
        {"width": 0, "height": 3, "room": [0, 0], "kitchen": [1, 1]},       # empty grid
        {"width": 3, "height": 3, "room": [0], "kitchen": [1, 1]},          # bad pair
        {"width": 3, "height": 3, "room": ["a", 0], "kitchen": [1, 1]},     # not an int
        {"width": 3, "height": 3, "room": [0, 0], "kitchen": [1, 1], "bug": {"kind": "teleport"}},
        {"width": 3, "height": 3, "room": [0, 0], "kitchen": [1, 1], "bug": [1, 2]},
    ],
)
def test_malformed_scenarios_rejected(data) -> None:
    with pytest.raises(ScenarioError):
        scenario_from_dict(data)


def test_scenario_without_bug_keeps_it_off_grid() -> None:
    scenario = scenario_from_dict({"width": 2, "height": 1, "room": [0, 0], "kitchen": [1, 0]})

    assert scenario.grid.bug(42) == Cell(-1, -1)
    assert scenario.name == "scenario"
    assert scenario.time == 0


def test_bug_from_config_shapes() -> None:
    assert bug_from_config({"cell": [1, 2]}) == StationaryBug(Cell(1, 2))

    patrol = bug_from_config({"kind": "patrol", "waypoints": [[0, 0], [1, 0]], "offset": 1})
    assert isinstance(patrol, PatrolBug)
    assert patrol.position(0) == Cell(1, 0)

    scripted = bug_from_config(
        {"kind": "scripted", "default": [9, 9], "positions": {"4": [1, 1]}}
    )
    assert isinstance(scripted, ScriptedBug)
    assert scripted.position(4) == Cell(1, 1)
    assert scripted.position(5) == Cell(9, 9)


def test_patrol_needs_waypoints() -> None:
    with pytest.raises(ValueError):
        bug_from_config({"kind": "patrol", "waypoints": []})
