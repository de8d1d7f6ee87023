"""
Exploration scheduler - drives every scout once per simulation tick.

Phases:
  SCANNING / COMPLETE: dwell, discover local gates, commit to a gate, else walk
                       back to a pending gate or the nearest frontier
  TRAVELING_TO_GATE:   movement model steers to the gate; on arrival, jump
  JUMPING:             count down the transition, then arrive and rescan

Switches: trace=1 trace_level=1..3 trace_scout=-1 debug=0/1/2
"""

from __future__ import annotations

from typing import Any, Optional

from zone_scouts.common.geometry import Vec2Like

from . import risk as risk_policy
from .config import ExplorationConfig
from .debug_logger import DebugLogger
from .events import EventLog
from .services.movement import MovementModel, StraightLineMovement
from .services.pathfinder import find_frontier_path, find_zone_path
from .services.world import GateInfo, GateRegistry, ZoneGraph
from .state import ScoutAgent
from .trace import TraceLog
from .types import GateRef, RiskTolerance, ScoutPhase, ZoneId


class ExplorationScheduler:
    """Owns the scouts and advances their exploration state machines."""

    def __init__(
        self,
        graph: ZoneGraph,
        gates: GateRegistry,
        config: Optional[ExplorationConfig] = None,
        movement: Optional[MovementModel] = None,
        # Tracing
        trace: int = 0,
        trace_level: int = 1,
        trace_scout: int = -1,
        # Debug logging
        debug: int = 0,
        output: Any = None,
    ) -> None:
        self.graph = graph
        self.gates = gates
        self.config = config or ExplorationConfig()
        self.movement: MovementModel = movement or StraightLineMovement(
            speed=self.config.scout_speed,
            arrival_range=self.config.gate_range,
        )

        self._trace_enabled = bool(trace)
        self._trace_level = trace_level
        self._trace_scout = trace_scout
        self._debug_logger = DebugLogger(level=debug, output=output)

        self.scouts: list[ScoutAgent] = []
        self.event_log = EventLog(self.config.event_log_size)
        self.revealed_zones: set[ZoneId] = set()
        self.step = 0

        self._disabled: set[int] = set()
        # Confidence of the route each scout committed to, until it arrives
        self.route_confidence: dict[int, float] = {}
        self.last_traces: dict[int, TraceLog] = {}

    @property
    def debug_logger(self) -> DebugLogger:
        return self._debug_logger

    # -- Scouts --------------------------------------------------------------

    def add_scout(
        self,
        zone: ZoneId,
        risk: Optional[RiskTolerance] = None,
        position: Optional[Vec2Like] = None,
    ) -> ScoutAgent:
        """Create a scout in ``zone``. Its id is its index in ``scouts``."""
        agent = ScoutAgent.create(zone, risk or self.config.default_risk, scout_id=len(self.scouts))
        agent.start_scan(self.config.scan_seconds)
        return self.attach_scout(agent, position)

    def attach_scout(self, agent: ScoutAgent, position: Optional[Vec2Like] = None) -> ScoutAgent:
        """Adopt an existing scout (e.g. one restored from a save)."""
        agent.scout_id = len(self.scouts)
        self.scouts.append(agent)
        start = position if position is not None else self.graph.position_of(agent.current_zone) or (0.0, 0.0)
        self.movement.place(agent.scout_id, start)
        return agent

    def get_scout(self, scout_id: int) -> Optional[ScoutAgent]:
        if 0 <= scout_id < len(self.scouts):
            return self.scouts[scout_id]
        return None

    def set_disabled(self, scout_id: int, disabled: bool = True) -> None:
        if disabled:
            self._disabled.add(scout_id)
        else:
            self._disabled.discard(scout_id)

    def is_disabled(self, scout_id: int) -> bool:
        return scout_id in self._disabled

    def adjust_risk(self, delta: int) -> Optional[RiskTolerance]:
        """Step every scout's risk tolerance by ``delta``."""
        updated: Optional[RiskTolerance] = None
        for agent in self.scouts:
            agent.risk = risk_policy.adjust(agent.risk, delta)
            updated = agent.risk
        if updated is not None:
            self.event_log.push(f"Scout risk set to {risk_policy.label(updated)}")
        return updated

    def set_scout_risk(self, scout_id: int, risk: RiskTolerance) -> None:
        agent = self.get_scout(scout_id)
        if agent is None:
            self._debug_logger.warn(scout_id, "risk change for unknown scout")
            return
        agent.risk = risk
        self.event_log.push(f"Scout-{scout_id + 1} risk set to {risk_policy.label(risk)}")

    def complete_jump(self, agent: ScoutAgent) -> bool:
        """Finish a jump, reporting a warning if the scout was not mid-jump."""
        if agent.complete_jump():
            return True
        self._debug_logger.warn(
            agent.scout_id,
            f"complete_jump in phase={agent.phase.value} destination={agent.jump_destination}",
        )
        return False

    # -- Tick ------------------------------------------------------------------

    def tick(self, delta_seconds: float) -> None:
        """Advance every enabled scout once."""
        self.step += 1
        for agent in self.scouts:
            if agent.scout_id in self._disabled:
                continue
            trace = TraceLog()
            self._step_scout(agent, delta_seconds, trace)
            self._record(agent, trace)
        self._debug_logger.flush_tick()

    def run(self, ticks: int, delta_seconds: float) -> None:
        for _ in range(ticks):
            self.tick(delta_seconds)

    def _step_scout(self, agent: ScoutAgent, delta_seconds: float, trace: TraceLog) -> None:
        if agent.phase in (ScoutPhase.SCANNING, ScoutPhase.COMPLETE):
            self._scan(agent, delta_seconds, trace)
        elif agent.phase == ScoutPhase.TRAVELING_TO_GATE:
            self._travel_to_gate(agent, delta_seconds, trace)
        elif agent.phase == ScoutPhase.JUMPING:
            self._process_jump(agent, delta_seconds, trace)

    # -- Scanning ----------------------------------------------------------------

    def _scan(self, agent: ScoutAgent, delta_seconds: float, trace: TraceLog) -> None:
        if not agent.advance_scan(delta_seconds):
            trace.activate("scan", f"{agent.scan_remaining_seconds:.1f}s")
            trace.action_name = "scan"
            return
        trace.skip("scan")

        agent.mark_zone_visited(agent.current_zone)
        self._report_zone(agent.current_zone)
        self._discover_local_gates(agent, trace)
        self._drop_despawned_gates(agent, trace)

        local = self._local_pending_gates(agent)
        if local:
            self._commit_to_gate(agent, local, trace)
            return
        trace.skip("gate", "none_local")

        if agent.waypoint_zone is not None and agent.target_gate is not None:
            self._follow_waypoint(agent, delta_seconds, trace)
            return

        if self._route_to_pending_gate(agent, trace):
            return
        self._route_to_frontier(agent, trace)

    def _report_zone(self, zone: ZoneId) -> None:
        if zone in self.revealed_zones:
            return
        self.revealed_zones.add(zone)
        self.event_log.push(f"Scout reported zone {zone}")

    def _discover_local_gates(self, agent: ScoutAgent, trace: TraceLog) -> None:
        added = 0
        for gate in self.gates.gates_in_zone(agent.current_zone):
            if agent.discover_gate(gate.gate_id, gate.destination):
                added += 1
        if added:
            trace.skip("discover", f"+{added}")

    def _drop_despawned_gates(self, agent: ScoutAgent, trace: TraceLog) -> None:
        for gate in list(agent.gates_to_explore):
            if self.gates.lookup(gate.gate_id) is None:
                agent.remove_gate(gate.gate_id)
                trace.skip("despawned", f"g{gate.gate_id}")

    def _local_pending_gates(self, agent: ScoutAgent) -> list[tuple[GateRef, GateInfo]]:
        """Pending gates located in the scout's zone, in discovery order."""
        local: list[tuple[GateRef, GateInfo]] = []
        for gate in agent.gates_to_explore:
            info = self.gates.lookup(gate.gate_id)
            if info is not None and info.zone == agent.current_zone:
                local.append((gate, info))
        return local

    def _commit_to_gate(
        self,
        agent: ScoutAgent,
        local: list[tuple[GateRef, GateInfo]],
        trace: TraceLog,
    ) -> None:
        """Take the oldest gate within the risk threshold, else the oldest gate."""
        chosen = local[0]
        route_risk = self.graph.route_risk(agent.current_zone, chosen[0].destination)
        for gate, info in local:
            gate_risk = self.graph.route_risk(agent.current_zone, gate.destination)
            if risk_policy.accepts(agent.risk, gate_risk):
                chosen = (gate, info)
                route_risk = gate_risk
                break
        else:
            trace.skip("risk", f"all>{risk_policy.threshold(agent.risk):.2f}")

        gate, info = chosen
        conf = risk_policy.confidence(agent.risk, route_risk)
        self.route_confidence[agent.scout_id] = conf
        agent.begin_travel(gate, info.position)

        trace.activate("gate", f"g{gate.gate_id} risk={route_risk:.2f}")
        trace.action_name = "travel"
        trace.target_zone = gate.destination
        trace.confidence = conf

    def _route_to_frontier(self, agent: ScoutAgent, trace: TraceLog) -> None:
        path = find_frontier_path(agent.current_zone, agent.visited_zones, self.graph.edge_pairs())
        if path is None or len(path) < 2:
            agent.clear_target()
            reason = "no_frontier" if path is None else "frontier_here_no_gate"
            if agent.gates_to_explore:
                agent.phase = ScoutPhase.SCANNING
                trace.activate("idle", reason)
                trace.action_name = "wait"
                return
            if agent.phase != ScoutPhase.COMPLETE:
                self.event_log.push(f"Scout-{agent.scout_id + 1} exploration complete")
            agent.phase = ScoutPhase.COMPLETE
            trace.activate("complete", reason)
            trace.action_name = "idle"
            return

        waypoint = path[1]
        relay = self.gates.gate_between(agent.current_zone, waypoint)
        if relay is None:
            agent.set_waypoint(waypoint, None, self.graph.position_of(waypoint))
            trace.activate("frontier", f"->{path[-1]} no_relay")
            trace.action_name = "wait"
            trace.target_zone = waypoint
            return
        self._relay_toward(agent, relay, "frontier", f"->{path[-1]} hops={len(path) - 1}", trace)

    def _route_to_pending_gate(self, agent: ScoutAgent, trace: TraceLog) -> bool:
        """Walk back toward the zone holding the oldest reachable pending gate.

        Returns False when no pending gate can be reached through visited
        zones with a relay gate for the first hop.
        """
        if agent.next_gate_to_explore() is None:
            return False
        edges = self.graph.edge_pairs()
        for gate in agent.gates_to_explore:
            info = self.gates.lookup(gate.gate_id)
            if info is None:
                continue
            path = find_zone_path(agent.current_zone, info.zone, agent.visited_zones, edges)
            if path is None or len(path) < 2:
                continue
            relay = self.gates.gate_between(agent.current_zone, path[1])
            if relay is None:
                continue
            self._relay_toward(agent, relay, "pending", f"g{gate.gate_id}@z{info.zone} hops={len(path) - 1}", trace)
            return True
        trace.skip("pending", "unreachable")
        return False

    def _relay_toward(self, agent: ScoutAgent, relay: GateInfo, check: str, detail: str, trace: TraceLog) -> None:
        conf = risk_policy.confidence(agent.risk, self.graph.route_risk(agent.current_zone, relay.destination))
        self.route_confidence[agent.scout_id] = conf
        agent.set_waypoint(relay.destination, relay.ref(), relay.position)
        trace.activate(check, detail)
        trace.action_name = "relay"
        trace.target_zone = relay.destination
        trace.confidence = conf

    def _follow_waypoint(self, agent: ScoutAgent, delta_seconds: float, trace: TraceLog) -> None:
        relay = agent.target_gate
        info = self.gates.lookup(relay.gate_id) if relay is not None else None
        if info is None:
            # Relay gate vanished; pick a new route next tick
            agent.clear_target()
            trace.activate("relay", "gate_gone")
            trace.action_name = "wait"
            return

        agent.target_position = info.position
        trace.target_zone = agent.waypoint_zone
        if not self.movement.advance(agent.scout_id, info.position, delta_seconds):
            trace.activate("relay", f"g{info.gate_id}")
            trace.action_name = "move"
            return
        self._enter_gate(agent, info, trace)

    # -- Travel / jump -----------------------------------------------------------

    def _travel_to_gate(self, agent: ScoutAgent, delta_seconds: float, trace: TraceLog) -> None:
        gate = agent.target_gate
        if gate is None or agent.target_position is None:
            self._debug_logger.warn(agent.scout_id, "traveling without a target gate; rescanning")
            agent.clear_target()
            agent.phase = ScoutPhase.SCANNING
            trace.activate("travel", "no_target")
            trace.action_name = "rescan"
            return

        info = self.gates.lookup(gate.gate_id)
        if info is None:
            agent.remove_gate(gate.gate_id)
            agent.clear_target()
            agent.phase = ScoutPhase.SCANNING
            self.route_confidence.pop(agent.scout_id, None)
            self.event_log.push(f"Scout lost gate {gate.gate_id}; rescanning")
            trace.activate("travel", f"g{gate.gate_id}_gone")
            trace.action_name = "rescan"
            return

        # Gates may drift; always steer to the current position
        agent.target_position = info.position
        trace.target_zone = gate.destination
        if not self.movement.advance(agent.scout_id, info.position, delta_seconds):
            trace.activate("travel", f"g{gate.gate_id}")
            trace.action_name = "move"
            return
        self._enter_gate(agent, info, trace)

    def _enter_gate(self, agent: ScoutAgent, info: GateInfo, trace: TraceLog) -> None:
        agent.start_jump(info.destination, self.config.jump_transition_seconds)
        agent.remove_gate(info.gate_id)
        trace.activate("jump", f"g{info.gate_id}")
        trace.action_name = "jump"
        trace.target_zone = info.destination

    def _process_jump(self, agent: ScoutAgent, delta_seconds: float, trace: TraceLog) -> None:
        if agent.jump_destination is None:
            self.complete_jump(agent)
            agent.abort_jump()
            trace.activate("jump", "no_destination")
            trace.action_name = "rescan"
            return

        trace.target_zone = agent.jump_destination
        if not agent.advance_jump(delta_seconds):
            trace.activate("jump", f"{agent.jump_remaining_seconds:.1f}s")
            trace.action_name = "in_pipe"
            return

        origin = agent.current_zone
        destination = agent.jump_destination
        if not self.complete_jump(agent):
            agent.abort_jump()
            trace.action_name = "rescan"
            return

        self.movement.place(agent.scout_id, self._arrival_position(origin, destination))
        agent.start_scan(self.config.scan_seconds)

        conf = self.route_confidence.pop(agent.scout_id, None)
        if conf is None:
            self.event_log.push(f"Scout arrived at zone {destination}")
        else:
            self.event_log.push(f"Scout arrived at zone {destination} (confidence {conf:.2f})")
            trace.confidence = conf
        trace.activate("arrive", f"z{destination}")
        trace.action_name = "arrive"

    def _arrival_position(self, origin: ZoneId, destination: ZoneId) -> tuple[float, float]:
        # Exit through the paired gate when there is one
        back_gate = self.gates.gate_between(destination, origin)
        if back_gate is not None:
            return back_gate.position
        return self.graph.position_of(destination) or (0.0, 0.0)

    # -- Output ------------------------------------------------------------------

    def _record(self, agent: ScoutAgent, trace: TraceLog) -> None:
        self.last_traces[agent.scout_id] = trace
        self._debug_logger.record_scout_tick(
            scout_id=agent.scout_id,
            zone=agent.current_zone,
            phase=agent.phase.value,
            action=trace.action_name,
            target_zone=trace.target_zone,
            pending_gates=len(agent.gates_to_explore),
            visited=len(agent.visited_zones),
            step=self.step,
        )
        if not self._trace_enabled:
            return
        if self._trace_scout >= 0 and agent.scout_id != self._trace_scout:
            return
        line = trace.format_line(
            step=self.step,
            scout_id=agent.scout_id,
            zone=agent.current_zone,
            phase=agent.phase.value,
            level=self._trace_level,
        )
        print(f"[scouts] {line}")
