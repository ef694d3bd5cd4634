# src/app/cli.py
"""
route-finder: find a room -> kitchen -> room route for a scenario file.

    route-finder hallway
    route-finder path/to/grid.yaml --time 7 --json
    route-finder patrol -vv --trace

Exit codes: 0 route found, 1 no route, 2 invalid scenario or request.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from route_core import (
    RouteRequestError,
    SearchTracer,
    load_search_limits,
    simulate_route,
    solve,
)
from world.loader import ScenarioError, load_scenario

from .logging_config import configure_logging, level_for
from .render import render_report

log = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NO_ROUTE = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="route-finder",
        description="Plan a round trip from the room to the kitchen and back, avoiding the bug.",
    )
    parser.add_argument("scenario", help="Scenario YAML path, or a name under config/grids/")
    parser.add_argument("--time", type=int, default=None, help="Start tick (overrides the scenario)")
    parser.add_argument("--limits", type=Path, default=None, help="Search limits YAML file")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--trace", action="store_true", help="Print search event counts")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level_for(args.verbose))
    console = Console()

    try:
        scenario = load_scenario(args.scenario)
        limits = load_search_limits(args.limits)
    except (FileNotFoundError, ScenarioError, ValueError) as exc:
        log.error("Cannot load scenario: %s", exc)
        console.print(f"[red]{escape(str(exc))}[/red]")
        return EXIT_INVALID

    time = scenario.time if args.time is None else args.time
    tracer = SearchTracer() if args.trace else None

    try:
        route = solve(scenario.grid, time, limits=limits, tracer=tracer)
    except RouteRequestError as exc:
        console.print(f"[red]Invalid request: {escape(exc.code)} {escape(str(exc.details))}[/red]")
        return EXIT_INVALID

    replay = (
        simulate_route(scenario.grid, time, route, step_budget=limits.step_budget)
        if route
        else None
    )

    if args.json:
        print(json.dumps(
            {
                "scenario": scenario.name,
                "time": time,
                "found": bool(route),
                "instructions": [i.name for i in route],
                "valid": replay.valid if replay is not None else None,
            },
            indent=2,
            sort_keys=True,
        ))
    else:
        console.print(render_report(scenario.name, scenario.grid, time, route, replay))

    if tracer is not None:
        kinds = sorted({r.kind for r in tracer.get_records()})
        counts = ", ".join(f"{kind}={tracer.count(kind)}" for kind in kinds)
        console.print(f"[dim]trace: {counts}[/dim]")

    return EXIT_FOUND if route else EXIT_NO_ROUTE


if __name__ == "__main__":
    sys.exit(main())
