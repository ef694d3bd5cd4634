# YAML scenario loader
# src/world/loader.py
"""
Scenario loading.

A scenario is a grid plus the start time of the trip, stored as YAML:

    name: patrol
    time: 0
    width: 5
    height: 3
    room: [0, 0]
    kitchen: [4, 2]
    holes:
      - [2, 0]
      - [2, 1]
    bug:
      kind: patrol
      waypoints: [[1, 2], [2, 2], [3, 2], [2, 2]]

load_scenario() accepts a file path or a bare name, which is looked up
under config/grids/<name>.yaml.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .grid import StaticGrid
from .hazards import StationaryBug, bug_from_config
from .types import Cell


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class ScenarioError(ValueError):
    """Scenario file exists but its content cannot be turned into a grid."""


@dataclass(frozen=True)
class Scenario:
    name: str
    grid: StaticGrid
    time: int = 0


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
GRIDS_ROOT = CONFIG_ROOT / "grids"


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from `path`."""
    if not path.exists():
        raise FileNotFoundError(f"Missing scenario file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ScenarioError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _resolve(path_or_name: Union[str, Path]) -> Path:
    path = Path(path_or_name)
    if path.suffix in (".yaml", ".yml") or path.exists():
        return path
    return GRIDS_ROOT / f"{path_or_name}.yaml"


def _cell(raw: Any, key: str) -> Cell:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ScenarioError(f"'{key}' must be an [x, y] pair, got {raw!r}")
    try:
        return Cell(int(raw[0]), int(raw[1]))
    except (TypeError, ValueError) as exc:
        raise ScenarioError(f"'{key}' has non-integer coordinates: {raw!r}") from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def scenario_from_dict(data: Dict[str, Any], *, default_name: str = "scenario") -> Scenario:
    """Build a Scenario from an already-parsed mapping."""
    for key in ("width", "height", "room", "kitchen"):
        if key not in data:
            raise ScenarioError(f"Scenario must define '{key}'.")

    try:
        width = int(data["width"])
        height = int(data["height"])
        time = int(data.get("time", 0))
    except (TypeError, ValueError) as exc:
        raise ScenarioError(f"Scenario width/height/time must be integers: {exc}") from exc

    if width <= 0 or height <= 0:
        raise ScenarioError(f"Grid size must be positive, got {width}x{height}")

    holes = frozenset(_cell(raw, "holes") for raw in data.get("holes") or [])

    bug_cfg = data.get("bug")
    if bug_cfg is None:
        bug_path = StationaryBug(Cell(-1, -1))
    elif isinstance(bug_cfg, dict):
        try:
            bug_path = bug_from_config(bug_cfg)
        except ValueError as exc:
            raise ScenarioError(f"Invalid bug definition: {exc}") from exc
    else:
        raise ScenarioError(f"'bug' must be a mapping, got {type(bug_cfg)}")

    grid = StaticGrid(
        width=width,
        height=height,
        room=_cell(data["room"], "room"),
        kitchen=_cell(data["kitchen"], "kitchen"),
        holes=holes,
        bug_path=bug_path,
    )
    return Scenario(name=str(data.get("name", default_name)), grid=grid, time=time)


def load_scenario(path_or_name: Union[str, Path]) -> Scenario:
    """Main entry point: load a scenario file into a Scenario."""
    path = _resolve(path_or_name)
    data = _load_yaml(path)
    return scenario_from_dict(data, default_name=path.stem)
