"""
Debug output for the exploration scheduler.

Verbosity levels (``ExplorationScheduler(debug=...)``):
    0: warnings only
    1: per-tick summary: phase counts + total zones visited
    2: full detail: per-scout zone/phase/action/target

All lines are prefixed with ``[scouts:debug]`` and go to ``sys.stderr`` by
default so they stay out of trace output on stdout.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ScoutTickRecord:
    """Snapshot of one scout for a single tick."""

    scout_id: int
    zone: int
    phase: str
    action: str
    target_zone: Optional[int] = None
    pending_gates: int = 0
    visited: int = 0


class DebugLogger:
    """Collects per-scout tick records and emits them once per tick.

    Warnings are printed immediately at every level, including 0.
    """

    PREFIX = "[scouts:debug]"

    def __init__(self, level: int = 0, output: Any = None) -> None:
        self.level = level
        self._out = output or sys.stderr
        self._tick_records: list[ScoutTickRecord] = []
        self._current_step = 0
        self.warnings: list[str] = []

    def record_scout_tick(
        self,
        scout_id: int,
        zone: int,
        phase: str,
        action: str,
        target_zone: Optional[int] = None,
        pending_gates: int = 0,
        visited: int = 0,
        step: int = 0,
    ) -> None:
        self._current_step = max(self._current_step, step)
        if self.level < 1:
            return
        self._tick_records.append(
            ScoutTickRecord(
                scout_id=scout_id,
                zone=zone,
                phase=phase,
                action=action,
                target_zone=target_zone,
                pending_gates=pending_gates,
                visited=visited,
            )
        )

    def warn(self, scout_id: int, message: str) -> None:
        """Report an unexpected state. Never raises."""
        line = f"t={self._current_step} s={scout_id} WARN {message}"
        self.warnings.append(line)
        self._emit(line)

    def flush_tick(self) -> None:
        """Emit output for the current tick and reset the accumulator."""
        if not self._tick_records:
            return

        phase_counts: dict[str, int] = {}
        for rec in self._tick_records:
            phase_counts[rec.phase] = phase_counts.get(rec.phase, 0) + 1
        phases = " ".join(f"{name}={count}" for name, count in sorted(phase_counts.items()))
        visited = sum(rec.visited for rec in self._tick_records)
        self._emit(f"t={self._current_step} scouts={len(self._tick_records)} phases({phases}) visited={visited}")

        if self.level >= 2:
            for rec in sorted(self._tick_records, key=lambda r: r.scout_id):
                tgt = f" tgt=z{rec.target_zone}" if rec.target_zone is not None else ""
                self._emit(
                    f"  s={rec.scout_id} z={rec.zone} ph={rec.phase} "
                    f"gates={rec.pending_gates} visited={rec.visited} "
                    f"act={rec.action}{tgt}"
                )

        self._tick_records.clear()

    def _emit(self, msg: str) -> None:
        print(f"{self.PREFIX} {msg}", file=self._out, flush=True)
