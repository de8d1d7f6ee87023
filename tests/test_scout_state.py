from __future__ import annotations

import pytest

from zone_scouts.scout import JUMP_TRANSITION_SECONDS, GateRef, RiskTolerance, ScoutAgent, ScoutPhase


@pytest.fixture
def scout() -> ScoutAgent:
    return ScoutAgent.create(100, RiskTolerance.BALANCED)


class TestCreate:
    def test_starts_scanning_in_spawn_zone(self, scout: ScoutAgent) -> None:
        assert scout.current_zone == 100
        assert scout.visited_zones == {100}
        assert scout.gates_to_explore == []
        assert scout.phase == ScoutPhase.SCANNING
        assert scout.target_gate is None
        assert scout.target_position is None

    def test_direct_construction_marks_current_zone(self) -> None:
        agent = ScoutAgent(current_zone=7)
        assert agent.is_zone_visited(7)


class TestDiscoverGate:
    def test_adds_unvisited_destination(self, scout: ScoutAgent) -> None:
        assert scout.discover_gate(1, 200)
        assert scout.gates_to_explore == [GateRef(gate_id=1, destination=200)]

    def test_is_idempotent(self, scout: ScoutAgent) -> None:
        scout.discover_gate(1, 200)
        assert not scout.discover_gate(1, 200)
        assert len(scout.gates_to_explore) == 1

    def test_ignores_visited_destination(self, scout: ScoutAgent) -> None:
        scout.mark_zone_visited(300)
        assert not scout.discover_gate(2, 300)
        assert not scout.discover_gate(3, 100), "gate back to the current zone is never queued"
        assert scout.gates_to_explore == []

    def test_next_gate_is_oldest(self, scout: ScoutAgent) -> None:
        assert scout.next_gate_to_explore() is None
        scout.discover_gate(5, 500)
        scout.discover_gate(4, 400)
        assert scout.next_gate_to_explore() == GateRef(gate_id=5, destination=500)

    def test_remove_missing_gate_is_noop(self, scout: ScoutAgent) -> None:
        scout.discover_gate(1, 200)
        scout.remove_gate(99)
        assert scout.has_gate(1)
        scout.remove_gate(1)
        assert not scout.has_gate(1)

    def test_prune_drops_gates_to_visited_zones(self, scout: ScoutAgent) -> None:
        scout.discover_gate(1, 200)
        scout.discover_gate(2, 300)
        scout.mark_zone_visited(200)
        scout.prune_visited_gates()
        assert [g.gate_id for g in scout.gates_to_explore] == [2]


class TestJump:
    def test_start_jump_clears_target(self, scout: ScoutAgent) -> None:
        gate = GateRef(gate_id=1, destination=200)
        scout.discover_gate(1, 200)
        scout.begin_travel(gate, (10.0, 0.0))
        assert scout.phase == ScoutPhase.TRAVELING_TO_GATE

        scout.start_jump(200, JUMP_TRANSITION_SECONDS)
        assert scout.phase == ScoutPhase.JUMPING
        assert scout.jump_destination == 200
        assert scout.jump_remaining_seconds == pytest.approx(JUMP_TRANSITION_SECONDS)
        assert scout.target_gate is None
        assert scout.target_position is None

    def test_advance_jump_counts_down(self, scout: ScoutAgent) -> None:
        scout.start_jump(200, 2.0)
        assert not scout.advance_jump(1.5)
        assert scout.advance_jump(0.5)

    def test_complete_jump_arrives_and_prunes(self, scout: ScoutAgent) -> None:
        scout.discover_gate(1, 200)
        scout.discover_gate(2, 300)
        scout.start_jump(200, 2.0)

        assert scout.complete_jump()
        assert scout.current_zone == 200
        assert scout.visited_zones == {100, 200}
        assert scout.phase == ScoutPhase.SCANNING
        assert scout.jump_destination is None
        assert [g.destination for g in scout.gates_to_explore] == [300]

    def test_complete_jump_outside_jump_changes_nothing(self, scout: ScoutAgent) -> None:
        scout.discover_gate(1, 200)
        assert not scout.complete_jump()
        assert scout.current_zone == 100
        assert scout.phase == ScoutPhase.SCANNING
        assert scout.has_gate(1)

    def test_complete_jump_without_destination_changes_nothing(self, scout: ScoutAgent) -> None:
        scout.phase = ScoutPhase.JUMPING
        assert not scout.complete_jump()
        assert scout.current_zone == 100
        assert scout.phase == ScoutPhase.JUMPING

    def test_abort_jump_returns_to_scanning(self, scout: ScoutAgent) -> None:
        scout.start_jump(200, 2.0)
        scout.abort_jump()
        assert scout.phase == ScoutPhase.SCANNING
        assert scout.current_zone == 100
        assert scout.jump_destination is None


class TestScanDwell:
    def test_zero_dwell_is_done_immediately(self, scout: ScoutAgent) -> None:
        scout.start_scan(0.0)
        assert scout.advance_scan(0.1)

    def test_dwell_counts_down_and_saturates(self, scout: ScoutAgent) -> None:
        scout.start_scan(1.0)
        assert not scout.advance_scan(0.5)
        assert scout.scan_remaining_seconds == pytest.approx(0.5)
        assert scout.advance_scan(2.0)
        assert scout.scan_remaining_seconds == 0.0

    def test_negative_dwell_clamps(self, scout: ScoutAgent) -> None:
        scout.start_scan(-3.0)
        assert scout.scan_remaining_seconds == 0.0


class TestWaypoint:
    def test_waypoint_keeps_scanning_phase(self, scout: ScoutAgent) -> None:
        relay = GateRef(gate_id=9, destination=50)
        scout.set_waypoint(50, relay, (1.0, 2.0))
        assert scout.phase == ScoutPhase.SCANNING
        assert scout.waypoint_zone == 50
        assert scout.target_gate == relay

        scout.clear_target()
        assert scout.waypoint_zone is None
        assert scout.target_gate is None
        assert scout.target_position is None

    def test_begin_travel_drops_waypoint(self, scout: ScoutAgent) -> None:
        scout.set_waypoint(50, None, None)
        scout.begin_travel(GateRef(gate_id=1, destination=200), (0.0, 0.0))
        assert scout.waypoint_zone is None
