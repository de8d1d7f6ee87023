from __future__ import annotations

import json

import pytest

from zone_scouts.scout import RiskTolerance, ScoutAgent, ScoutPhase, SnapshotError, dump_scouts, load_scouts
from zone_scouts.scout.snapshot import dump_scheduler, load_scheduler, snapshot_scheduler


class TestScoutSnapshots:
    def test_restored_scout_matches(self) -> None:
        agent = ScoutAgent.create(100, RiskTolerance.BOLD, scout_id=2)
        agent.mark_zone_visited(200)
        agent.discover_gate(7, 300)
        agent.discover_gate(3, 400)
        agent.start_jump(300, 1.5)

        (restored,) = load_scouts(dump_scouts([agent]))

        assert restored == agent
        assert [g.gate_id for g in restored.gates_to_explore] == [7, 3], "pending order is kept"

    def test_visited_written_sorted(self) -> None:
        agent = ScoutAgent.create(9, RiskTolerance.BALANCED)
        agent.mark_zone_visited(3)
        agent.mark_zone_visited(5)
        payload = json.loads(dump_scouts([agent]))
        assert payload["scouts"][0]["visited_zones"] == [3, 5, 9]
        assert payload["scouts"][0]["phase"] == "scanning"

    def test_malformed_json(self) -> None:
        with pytest.raises(SnapshotError):
            load_scouts("{not json")

    def test_missing_current_zone(self) -> None:
        with pytest.raises(SnapshotError):
            load_scouts('{"scouts": [{"risk": "bold"}]}')

    def test_duplicate_pending_gate(self) -> None:
        text = json.dumps(
            {
                "scouts": [
                    {
                        "current_zone": 1,
                        "gates_to_explore": [
                            {"gate_id": 4, "destination": 2},
                            {"gate_id": 4, "destination": 3},
                        ],
                    }
                ]
            }
        )
        with pytest.raises(SnapshotError, match="duplicate pending gate 4"):
            load_scouts(text)

    def test_pending_gate_to_visited_zone(self) -> None:
        text = json.dumps(
            {"scouts": [{"current_zone": 1, "visited_zones": [1, 2], "gates_to_explore": [{"gate_id": 4, "destination": 2}]}]}
        )
        with pytest.raises(SnapshotError, match="visited zone 2"):
            load_scouts(text)


class TestSchedulerSnapshots:
    def test_restored_scheduler_makes_same_decisions(self, make_scheduler, branching_world_data) -> None:
        live = make_scheduler(branching_world_data)
        live.add_scout(100)
        live.add_scout(300, risk=RiskTolerance.CAUTIOUS)
        live.set_disabled(1)
        live.run(5, 1.0)
        live.set_disabled(1, False)

        restored = load_scheduler(dump_scheduler(live), make_scheduler(branching_world_data))
        assert dump_scheduler(restored) == dump_scheduler(live)

        for _ in range(30):
            live.tick(1.0)
            restored.tick(1.0)
            assert snapshot_scheduler(restored) == snapshot_scheduler(live)

        assert all(s.phase == ScoutPhase.COMPLETE for s in restored.scouts)

    def test_restores_step_and_disabled(self, make_scheduler, line_world_data) -> None:
        live = make_scheduler(line_world_data)
        live.add_scout(100)
        live.add_scout(200)
        live.set_disabled(1)
        live.run(3, 1.0)

        restored = load_scheduler(dump_scheduler(live), make_scheduler(line_world_data))

        assert restored.step == 3
        assert restored.is_disabled(1)
        assert restored.revealed_zones == {100}
        assert restored.scouts[0].phase == ScoutPhase.JUMPING

    def test_arrival_confidence_survives_restore(self, make_scheduler, line_world_data) -> None:
        live = make_scheduler(line_world_data)
        live.add_scout(100)
        live.run(2, 1.0)
        assert live.route_confidence == {0: pytest.approx(0.65)}

        restored = load_scheduler(dump_scheduler(live), make_scheduler(line_world_data))
        restored.run(2, 1.0)

        assert restored.scouts[0].current_zone == 200
        assert restored.event_log.entries() == ["Scout arrived at zone 200 (confidence 0.65)"]
        assert restored.route_confidence == {}

    def test_restore_needs_empty_scheduler(self, make_scheduler, line_world_data) -> None:
        live = make_scheduler(line_world_data)
        live.add_scout(100)
        with pytest.raises(SnapshotError):
            load_scheduler(dump_scheduler(live), live)
