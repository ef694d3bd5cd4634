# src/route_core/tracing.py
"""
Tracing for the route search.

A thin, structured record of what the path finder did to its discovery
stack (push, backtrack, hazard wait, arrival, return attempt), so the
CLI and tests can inspect a search after the fact.

It does NOT:
- Influence the search
- Raise into the search loop
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from world.types import Cell, Instruction


@dataclass(frozen=True)
class SearchTraceRecord:
    """Single event of a search."""

    kind: str                         # "push", "backtrack", "wait", "arrival", ...
    tick: int                         # path finder tick after the event
    cell: Optional[Cell]
    instruction: Optional[Instruction]
    stack_size: int


class SearchTracer:
    """
    In-memory search tracer with optional logging.

    Keeps a rolling buffer of SearchTraceRecord entries and emits one
    debug line per record.
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        max_records: int = 10_000,
    ) -> None:
        self._logger = logger or logging.getLogger("route_core.search")
        self._records: Deque[SearchTraceRecord] = deque(maxlen=max_records)

    def record(
        self,
        kind: str,
        *,
        tick: int,
        stack_size: int,
        cell: Optional[Cell] = None,
        instruction: Optional[Instruction] = None,
    ) -> None:
        try:
            record = SearchTraceRecord(
                kind=kind,
                tick=tick,
                cell=cell,
                instruction=instruction,
                stack_size=stack_size,
            )
        except Exception:
            # Tracing must never crash the search.
            self._logger.exception("Failed to build SearchTraceRecord")
            return

        self._records.append(record)
        self._logger.debug(
            "search %s tick=%s cell=%s instruction=%s stack=%s",
            record.kind,
            record.tick,
            record.cell,
            record.instruction.name if record.instruction is not None else None,
            record.stack_size,
        )

    def get_records(self) -> List[SearchTraceRecord]:
        return list(self._records)

    def count(self, kind: str) -> int:
        return sum(1 for r in self._records if r.kind == kind)

    def clear(self) -> None:
        self._records.clear()
