"""Services used by the exploration scheduler."""

from .movement import MovementModel, StraightLineMovement
from .pathfinder import find_frontier_path, find_zone_path, frontier_zones
from .world import GateInfo, GateRegistry, RouteEdge, ZoneGraph, load_world

__all__ = [
    "MovementModel",
    "StraightLineMovement",
    "find_frontier_path",
    "find_zone_path",
    "frontier_zones",
    "GateInfo",
    "GateRegistry",
    "RouteEdge",
    "ZoneGraph",
    "load_world",
]
