"""Read-only text views of scout state for fleet panels."""

from __future__ import annotations

from .risk import label as risk_label
from .state import ScoutAgent
from .types import ScoutPhase

PHASE_SHORT_LABELS: dict[ScoutPhase, str] = {
    ScoutPhase.SCANNING: "Scan",
    ScoutPhase.TRAVELING_TO_GATE: "Travel",
    ScoutPhase.JUMPING: "Jump",
    ScoutPhase.COMPLETE: "Done",
}

PHASE_DESCRIPTIONS: dict[ScoutPhase, str] = {
    ScoutPhase.SCANNING: "Scanning area",
    ScoutPhase.TRAVELING_TO_GATE: "En route to gate",
    ScoutPhase.JUMPING: "Jumping...",
    ScoutPhase.COMPLETE: "Exploration complete",
}


def phase_short_label(phase: ScoutPhase) -> str:
    return PHASE_SHORT_LABELS[phase]


def phase_description(phase: ScoutPhase) -> str:
    return PHASE_DESCRIPTIONS[phase]


def fleet_line(index: int, scout: ScoutAgent) -> str:
    """One-line fleet list entry, e.g. ``Scout-1  Z7  Scan``."""
    return f"Scout-{index + 1}  Z{scout.current_zone}  {phase_short_label(scout.phase)}"


def detail_lines(scout: ScoutAgent) -> list[str]:
    """Detail panel for a selected scout."""
    return [
        f"Risk: {risk_label(scout.risk)}",
        f"Status: {phase_description(scout.phase)}",
        f"Gates queued: {len(scout.gates_to_explore)}",
        f"Zones visited: {len(scout.visited_zones)}",
    ]


def fleet_lines(scouts: list[ScoutAgent]) -> list[str]:
    if not scouts:
        return ["(no units)"]
    return [fleet_line(index, scout) for index, scout in enumerate(scouts)]
