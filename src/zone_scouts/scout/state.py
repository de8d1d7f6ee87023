"""
State for a single scout.

ScoutAgent holds everything a scout knows (visited zones, pending gates) and
the exploration phase. Only the scheduler and explicit risk adjustments
mutate it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .types import GateRef, RiskTolerance, ScoutPhase, ZoneId


@dataclass
class ScoutAgent:
    """Per-scout exploration state."""

    scout_id: int = 0
    risk: RiskTolerance = RiskTolerance.BALANCED
    current_zone: ZoneId = 0

    # Private knowledge
    visited_zones: set[ZoneId] = field(default_factory=set)
    gates_to_explore: list[GateRef] = field(default_factory=list)  # FIFO by discovery

    phase: ScoutPhase = ScoutPhase.SCANNING

    # Spatial target read by the movement collaborator
    target_gate: Optional[GateRef] = None
    target_position: Optional[tuple[float, float]] = None

    # Jump payload, only meaningful while JUMPING
    jump_destination: Optional[ZoneId] = None
    jump_remaining_seconds: float = 0.0

    # Dwell time left before the scout decides in a freshly entered zone
    scan_remaining_seconds: float = 0.0

    # Next zone on a frontier route through visited territory
    waypoint_zone: Optional[ZoneId] = None

    def __post_init__(self) -> None:
        self.visited_zones.add(self.current_zone)

    @classmethod
    def create(cls, zone: ZoneId, risk: RiskTolerance, scout_id: int = 0) -> ScoutAgent:
        """New scout in ``zone``: visited = {zone}, phase = SCANNING."""
        return cls(scout_id=scout_id, risk=risk, current_zone=zone, visited_zones={zone})

    # === Knowledge ===

    def is_zone_visited(self, zone: ZoneId) -> bool:
        return zone in self.visited_zones

    def mark_zone_visited(self, zone: ZoneId) -> None:
        self.visited_zones.add(zone)

    def has_gate(self, gate_id: int) -> bool:
        return any(g.gate_id == gate_id for g in self.gates_to_explore)

    def discover_gate(self, gate_id: int, destination: ZoneId) -> bool:
        """Queue a gate for exploration.

        Ignored when the destination is already visited or the gate is already
        queued. Returns True if the gate was added.
        """
        if destination in self.visited_zones:
            return False
        if self.has_gate(gate_id):
            return False
        self.gates_to_explore.append(GateRef(gate_id=gate_id, destination=destination))
        return True

    def next_gate_to_explore(self) -> Optional[GateRef]:
        """Oldest discovered pending gate, or None."""
        if not self.gates_to_explore:
            return None
        return self.gates_to_explore[0]

    def remove_gate(self, gate_id: int) -> None:
        self.gates_to_explore = [g for g in self.gates_to_explore if g.gate_id != gate_id]

    def prune_visited_gates(self) -> None:
        """Drop pending gates whose destination has since been visited."""
        self.gates_to_explore = [g for g in self.gates_to_explore if g.destination not in self.visited_zones]

    # === Scan dwell ===

    def start_scan(self, seconds: float) -> None:
        self.scan_remaining_seconds = max(0.0, seconds)

    def advance_scan(self, delta_seconds: float) -> bool:
        """Count down the dwell timer. Returns True once scanning is done."""
        if self.scan_remaining_seconds > 0.0:
            self.scan_remaining_seconds = max(0.0, self.scan_remaining_seconds - delta_seconds)
        return self.scan_remaining_seconds <= 0.0

    # === Targets ===

    def begin_travel(self, gate: GateRef, position: tuple[float, float]) -> None:
        """Commit to a pending gate."""
        self.target_gate = gate
        self.target_position = position
        self.waypoint_zone = None
        self.phase = ScoutPhase.TRAVELING_TO_GATE

    def set_waypoint(self, zone: ZoneId, relay_gate: Optional[GateRef], position: Optional[tuple[float, float]]) -> None:
        """Head for ``zone`` through visited territory without leaving SCANNING."""
        self.waypoint_zone = zone
        self.target_gate = relay_gate
        self.target_position = position
        self.phase = ScoutPhase.SCANNING

    def clear_target(self) -> None:
        self.target_gate = None
        self.target_position = None
        self.waypoint_zone = None

    # === Jumps ===

    def start_jump(self, destination: ZoneId, transition_seconds: float) -> None:
        """Enter the gate. The scout has no spatial target until it arrives."""
        self.phase = ScoutPhase.JUMPING
        self.jump_destination = destination
        self.jump_remaining_seconds = transition_seconds
        self.clear_target()

    def advance_jump(self, delta_seconds: float) -> bool:
        """Count down the jump. Returns True when the transition is over."""
        self.jump_remaining_seconds -= delta_seconds
        return self.jump_remaining_seconds <= 0.0

    def abort_jump(self) -> None:
        """Drop a jump without arriving anywhere (current_zone is unchanged)."""
        self.phase = ScoutPhase.SCANNING
        self.jump_destination = None
        self.jump_remaining_seconds = 0.0

    def complete_jump(self) -> bool:
        """Arrive at the jump destination.

        Returns False (and changes nothing) when the scout is not jumping or
        has no recorded destination.
        """
        if self.phase != ScoutPhase.JUMPING or self.jump_destination is None:
            return False
        destination = self.jump_destination
        self.current_zone = destination
        self.mark_zone_visited(destination)
        self.phase = ScoutPhase.SCANNING
        self.jump_destination = None
        self.jump_remaining_seconds = 0.0
        self.prune_visited_gates()
        return True
