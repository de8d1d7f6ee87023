"""
Read-only world view consumed by the scheduler.

ZoneGraph carries the public zone topology (edges with traversal risk).
GateRegistry is the authoritative store of gate entities; scouts only keep
GateRef handles into it, and lookups may fail once a gate despawns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from zone_scouts.scout.types import GateRef, ZoneId


@dataclass(frozen=True)
class RouteEdge:
    """Undirected connection between two zones."""

    from_zone: ZoneId
    to_zone: ZoneId
    distance: float = 1.0
    risk: float = 0.0  # 0..1, feeds risk.confidence


@dataclass
class ZoneGraph:
    """Zone topology supplied by world generation."""

    edges: list[RouteEdge] = field(default_factory=list)
    positions: dict[ZoneId, tuple[float, float]] = field(default_factory=dict)

    def edge_pairs(self) -> list[tuple[ZoneId, ZoneId]]:
        """Edges as ``(a, b)`` pairs in declaration order."""
        return [(e.from_zone, e.to_zone) for e in self.edges]

    def zones(self) -> set[ZoneId]:
        found: set[ZoneId] = set(self.positions)
        for edge in self.edges:
            found.add(edge.from_zone)
            found.add(edge.to_zone)
        return found

    def neighbors(self, zone: ZoneId) -> list[ZoneId]:
        result: list[ZoneId] = []
        for edge in self.edges:
            if edge.from_zone == zone and edge.to_zone not in result:
                result.append(edge.to_zone)
            elif edge.to_zone == zone and edge.from_zone not in result:
                result.append(edge.from_zone)
        return result

    def find_edge(self, a: ZoneId, b: ZoneId) -> Optional[RouteEdge]:
        for edge in self.edges:
            if (edge.from_zone, edge.to_zone) in ((a, b), (b, a)):
                return edge
        return None

    def route_risk(self, a: ZoneId, b: ZoneId) -> float:
        """Traversal risk between two zones (0.0 when unannotated or unknown)."""
        edge = self.find_edge(a, b)
        return edge.risk if edge is not None else 0.0

    def position_of(self, zone: ZoneId) -> Optional[tuple[float, float]]:
        return self.positions.get(zone)


@dataclass(frozen=True)
class GateInfo:
    """A gate entity: sits in ``zone`` and leads to ``destination``."""

    gate_id: int
    zone: ZoneId
    destination: ZoneId
    position: tuple[float, float] = (0.0, 0.0)

    def ref(self) -> GateRef:
        return GateRef(gate_id=self.gate_id, destination=self.destination)


class GateRegistry:
    """Gate entities by id, in spawn order."""

    def __init__(self, gates: Iterable[GateInfo] = ()) -> None:
        self._gates: dict[int, GateInfo] = {}
        for gate in gates:
            self.spawn(gate)

    def __len__(self) -> int:
        return len(self._gates)

    def __contains__(self, gate_id: object) -> bool:
        return gate_id in self._gates

    def spawn(self, gate: GateInfo) -> None:
        self._gates[gate.gate_id] = gate

    def despawn(self, gate_id: int) -> Optional[GateInfo]:
        return self._gates.pop(gate_id, None)

    def lookup(self, gate_id: int) -> Optional[GateInfo]:
        return self._gates.get(gate_id)

    def gates_in_zone(self, zone: ZoneId) -> list[GateInfo]:
        return [g for g in self._gates.values() if g.zone == zone]

    def gate_between(self, zone: ZoneId, destination: ZoneId) -> Optional[GateInfo]:
        """First gate in ``zone`` leading to ``destination``."""
        for gate in self._gates.values():
            if gate.zone == zone and gate.destination == destination:
                return gate
        return None

    def all_gates(self) -> list[GateInfo]:
        return list(self._gates.values())


def _as_position(value: Any) -> tuple[float, float]:
    return (float(value[0]), float(value[1]))


def _gate_position(
    positions: Mapping[ZoneId, tuple[float, float]], zone: ZoneId, destination: ZoneId
) -> tuple[float, float]:
    # A quarter of the way toward the destination zone
    origin = positions.get(zone, (0.0, 0.0))
    target = positions.get(destination)
    if target is None:
        return origin
    return (origin[0] + (target[0] - origin[0]) * 0.25, origin[1] + (target[1] - origin[1]) * 0.25)


def load_world(data: Mapping[str, Any]) -> tuple[ZoneGraph, GateRegistry]:
    """Build a graph and gate registry from a JSON-compatible mapping.

    Expected shape::

        {
          "zones": {"100": [0, 0], ...},            # optional positions
          "edges": [{"from": 100, "to": 200, "risk": 0.3}, ...],
          "gates": [{"id": 1, "zone": 100, "to": 200, "pos": [40, 0]}, ...]
        }

    When ``gates`` is omitted, one gate is created on each side of every
    edge, a quarter of the way from its zone toward the destination.
    """
    positions = {int(zone): _as_position(pos) for zone, pos in (data.get("zones") or {}).items()}
    edges = [
        RouteEdge(
            from_zone=int(raw["from"]),
            to_zone=int(raw["to"]),
            distance=float(raw.get("distance", 1.0)),
            risk=float(raw.get("risk", 0.0)),
        )
        for raw in data.get("edges", [])
    ]
    graph = ZoneGraph(edges=edges, positions=positions)

    registry = GateRegistry()
    raw_gates = data.get("gates")
    if raw_gates is None:
        next_id = 1
        for edge in edges:
            for zone, destination in ((edge.from_zone, edge.to_zone), (edge.to_zone, edge.from_zone)):
                registry.spawn(
                    GateInfo(
                        gate_id=next_id,
                        zone=zone,
                        destination=destination,
                        position=_gate_position(positions, zone, destination),
                    )
                )
                next_id += 1
    else:
        for raw in raw_gates:
            registry.spawn(
                GateInfo(
                    gate_id=int(raw["id"]),
                    zone=int(raw["zone"]),
                    destination=int(raw["to"]),
                    position=_as_position(raw.get("pos", (0.0, 0.0))),
                )
            )
    return graph, registry
