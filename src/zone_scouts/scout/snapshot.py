"""
Save/load snapshots of scout state.

The persisted fields are exactly the scout's exploration state (risk, zone,
visited set, pending gates with destinations, phase, jump payload, dwell
timer, targets). Sets are written sorted so identical states produce
identical JSON.

Scheduler snapshots add movement positions, revealed zones, disabled ids and
the confidence of routes still in flight, so arrival messages after a load
match an uninterrupted run. The event log is not saved.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from pydantic import BaseModel, Field, ValidationError

from .state import ScoutAgent
from .types import GateRef, RiskTolerance, ScoutPhase

if TYPE_CHECKING:
    from .scheduler import ExplorationScheduler


class SnapshotError(ValueError):
    """Raised when a snapshot cannot be turned back into scout state."""


class GateSnapshot(BaseModel):
    gate_id: int
    destination: int


class ScoutSnapshot(BaseModel):
    scout_id: int = 0
    risk: RiskTolerance = RiskTolerance.BALANCED
    current_zone: int
    visited_zones: list[int] = Field(default_factory=list)
    gates_to_explore: list[GateSnapshot] = Field(default_factory=list)
    phase: ScoutPhase = ScoutPhase.SCANNING
    target_gate: Optional[GateSnapshot] = None
    target_position: Optional[tuple[float, float]] = None
    jump_destination: Optional[int] = None
    jump_remaining_seconds: float = 0.0
    scan_remaining_seconds: float = 0.0
    waypoint_zone: Optional[int] = None


class SchedulerSnapshot(BaseModel):
    step: int = 0
    scouts: list[ScoutSnapshot] = Field(default_factory=list)
    positions: list[tuple[float, float]] = Field(default_factory=list)
    revealed_zones: list[int] = Field(default_factory=list)
    disabled: list[int] = Field(default_factory=list)
    # Confidence of in-flight routes, keyed by scout id
    route_confidence: dict[int, float] = Field(default_factory=dict)


def _gate_snapshot(gate: GateRef) -> GateSnapshot:
    return GateSnapshot(gate_id=gate.gate_id, destination=gate.destination)


def _gate_ref(gate: GateSnapshot) -> GateRef:
    return GateRef(gate_id=gate.gate_id, destination=gate.destination)


def snapshot_scout(agent: ScoutAgent) -> ScoutSnapshot:
    return ScoutSnapshot(
        scout_id=agent.scout_id,
        risk=agent.risk,
        current_zone=agent.current_zone,
        visited_zones=sorted(agent.visited_zones),
        gates_to_explore=[_gate_snapshot(g) for g in agent.gates_to_explore],
        phase=agent.phase,
        target_gate=_gate_snapshot(agent.target_gate) if agent.target_gate is not None else None,
        target_position=agent.target_position,
        jump_destination=agent.jump_destination,
        jump_remaining_seconds=agent.jump_remaining_seconds,
        scan_remaining_seconds=agent.scan_remaining_seconds,
        waypoint_zone=agent.waypoint_zone,
    )


def restore_scout(snapshot: ScoutSnapshot) -> ScoutAgent:
    """Rebuild a scout, rejecting snapshots that break the pending-gate rules."""
    visited = set(snapshot.visited_zones)
    visited.add(snapshot.current_zone)

    seen: set[int] = set()
    for gate in snapshot.gates_to_explore:
        if gate.gate_id in seen:
            raise SnapshotError(f"duplicate pending gate {gate.gate_id} for scout {snapshot.scout_id}")
        if gate.destination in visited:
            raise SnapshotError(
                f"pending gate {gate.gate_id} leads to visited zone {gate.destination} for scout {snapshot.scout_id}"
            )
        seen.add(gate.gate_id)

    return ScoutAgent(
        scout_id=snapshot.scout_id,
        risk=snapshot.risk,
        current_zone=snapshot.current_zone,
        visited_zones=visited,
        gates_to_explore=[_gate_ref(g) for g in snapshot.gates_to_explore],
        phase=snapshot.phase,
        target_gate=_gate_ref(snapshot.target_gate) if snapshot.target_gate is not None else None,
        target_position=snapshot.target_position,
        jump_destination=snapshot.jump_destination,
        jump_remaining_seconds=snapshot.jump_remaining_seconds,
        scan_remaining_seconds=snapshot.scan_remaining_seconds,
        waypoint_zone=snapshot.waypoint_zone,
    )


def dump_scouts(agents: Iterable[ScoutAgent]) -> str:
    return SchedulerSnapshot(scouts=[snapshot_scout(agent) for agent in agents]).model_dump_json()


def _parse(text: str) -> SchedulerSnapshot:
    try:
        return SchedulerSnapshot.model_validate_json(text)
    except ValidationError as e:
        raise SnapshotError(f"malformed scout snapshot: {e}") from e


def load_scouts(text: str) -> list[ScoutAgent]:
    return [restore_scout(s) for s in _parse(text).scouts]


def snapshot_scheduler(scheduler: ExplorationScheduler) -> SchedulerSnapshot:
    positions: list[tuple[float, float]] = []
    position_of = getattr(scheduler.movement, "position_of", None)
    if position_of is not None:
        positions = [position_of(agent.scout_id) for agent in scheduler.scouts]
    return SchedulerSnapshot(
        step=scheduler.step,
        scouts=[snapshot_scout(agent) for agent in scheduler.scouts],
        positions=positions,
        revealed_zones=sorted(scheduler.revealed_zones),
        disabled=sorted(i for i in range(len(scheduler.scouts)) if scheduler.is_disabled(i)),
        route_confidence=dict(sorted(scheduler.route_confidence.items())),
    )


def restore_scheduler(snapshot: SchedulerSnapshot, scheduler: ExplorationScheduler) -> ExplorationScheduler:
    """Load scouts into an empty scheduler built over the same world."""
    if scheduler.scouts:
        raise SnapshotError("restore_scheduler needs a scheduler without scouts")
    scheduler.step = snapshot.step
    scheduler.revealed_zones = set(snapshot.revealed_zones)
    for index, scout_snapshot in enumerate(snapshot.scouts):
        position = snapshot.positions[index] if index < len(snapshot.positions) else None
        scheduler.attach_scout(restore_scout(scout_snapshot), position)
    scheduler.route_confidence = dict(snapshot.route_confidence)
    for scout_id in snapshot.disabled:
        scheduler.set_disabled(scout_id)
    return scheduler


def dump_scheduler(scheduler: ExplorationScheduler) -> str:
    return snapshot_scheduler(scheduler).model_dump_json()


def load_scheduler(text: str, scheduler: ExplorationScheduler) -> ExplorationScheduler:
    return restore_scheduler(_parse(text), scheduler)
