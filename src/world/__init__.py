# src/world/__init__.py
"""
Grid world the route is planned in.

Provides:
- Cell / Instruction: coordinates and route instructions
- Grid / StaticGrid: grid description consumed by route_core
- StationaryBug / PatrolBug / ScriptedBug: bug motion models
- load_scenario: YAML scenario loading
"""

from __future__ import annotations

from .types import CARDINALS, Cell, Instruction
from .grid import Grid, StaticGrid
from .hazards import BugPath, PatrolBug, ScriptedBug, StationaryBug, bug_from_config
from .loader import Scenario, ScenarioError, load_scenario, scenario_from_dict

__all__ = [
    "CARDINALS",
    "Cell",
    "Instruction",
    "Grid",
    "StaticGrid",
    "BugPath",
    "PatrolBug",
    "ScriptedBug",
    "StationaryBug",
    "bug_from_config",
    "Scenario",
    "ScenarioError",
    "load_scenario",
    "scenario_from_dict",
]
