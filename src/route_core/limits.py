# search limits + YAML override
# src/route_core/limits.py
"""
SearchLimits: budgets of the round-trip search, optionally read from
config/search.yaml.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

log = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_LIMITS_PATH = PROJECT_ROOT / "config" / "search.yaml"


@dataclass(frozen=True)
class SearchLimits:
    """
    Fixed parameters of the round-trip search.

    step_budget:
        Maximum number of instructions in a route.
    outbound_budget:
        Executed outbound instructions after which a branch is abandoned,
        leaving room for the dwell, the way back and hazard waits.
    dwell_ticks:
        Ticks spent in the kitchen before heading back.
    max_iterations:
        Search loop iterations after which find_route() gives up.
    """

    step_budget: int = 100
    outbound_budget: int = 48
    dwell_ticks: int = 5
    max_iterations: int = 50_000


DEFAULT_LIMITS = SearchLimits()


def load_search_limits(path: Optional[Path] = None) -> SearchLimits:
    """
    Read SearchLimits from YAML (config/search.yaml by default).

    Missing keys keep their defaults. A missing default file yields
    DEFAULT_LIMITS; an explicitly given path must exist.
    """
    target = path or DEFAULT_LIMITS_PATH
    if not target.exists():
        if path is not None:
            raise FileNotFoundError(f"Missing search limits file: {target}")
        return DEFAULT_LIMITS

    with target.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {target}, got {type(data)}")

    section: Dict[str, Any] = data.get("search", data) or {}
    known = {f.name for f in fields(SearchLimits)}
    unknown = sorted(set(section) - known)
    if unknown:
        log.warning("Ignoring unknown search limit keys in %s: %s", target, unknown)

    overrides = {k: int(v) for k, v in section.items() if k in known}
    limits = replace(DEFAULT_LIMITS, **overrides)

    if (
        limits.step_budget <= 0
        or limits.outbound_budget < 0
        or limits.dwell_ticks < 0
        or limits.max_iterations <= 0
    ):
        raise ValueError(f"Invalid search limits in {target}: {limits}")
    return limits
