"""Per-tick decision tracing for scouts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TraceEntry:
    """One decision check."""

    check: str
    satisfied: bool
    detail: str = ""


@dataclass
class TraceLog:
    """Collects what a scout considered during a single tick."""

    entries: list[TraceEntry] = field(default_factory=list)
    action_name: str = "idle"
    target_zone: Optional[int] = None
    confidence: Optional[float] = None

    def skip(self, check: str, reason: str = "ok") -> None:
        """Record a check that did not lead to an action."""
        self.entries.append(TraceEntry(check=check, satisfied=True, detail=reason))

    def activate(self, check: str, detail: str = "") -> None:
        """Record the check that produced this tick's action."""
        self.entries.append(TraceEntry(check=check, satisfied=False, detail=detail))

    @property
    def active_check(self) -> str:
        for entry in reversed(self.entries):
            if not entry.satisfied:
                return entry.check
        return "-"

    def format_line(
        self,
        step: int,
        scout_id: int,
        zone: int,
        phase: str,
        level: int,
    ) -> str:
        """Format the trace as a single line."""
        prefix = f"[t={step} s={scout_id} z={zone} {phase}]"
        target_str = f" ->z{self.target_zone}" if self.target_zone is not None else ""
        conf_str = f" conf={self.confidence:.2f}" if self.confidence is not None else ""

        if level <= 1:
            return f"{prefix} {self.active_check} → {self.action_name}{target_str}"

        if level == 2:
            skips = " ".join(f"skip:{e.check}({e.detail})" for e in self.entries if e.satisfied)
            skips = f"{skips} " if skips else ""
            return f"{prefix} {skips}→ {self.active_check}{target_str}{conf_str} → {self.action_name}"

        # Level 3: every entry
        all_entries = " ".join(f"{'skip' if e.satisfied else 'ACTIVE'}:{e.check}({e.detail})" for e in self.entries)
        return f"{prefix} {all_entries}{target_str}{conf_str} → {self.action_name}"
