"""
Frontier pathfinding over the visited part of the zone graph.

A frontier zone is a visited zone with at least one edge to an unvisited
zone. The search only walks edges whose endpoints are both visited, so the
route stays inside territory the scout has already scanned.
"""

from __future__ import annotations

from collections import deque
from typing import AbstractSet, Iterable, Optional

from zone_scouts.scout.types import ZoneId

Edge = tuple[ZoneId, ZoneId]


def visited_adjacency(visited: AbstractSet[ZoneId], edges: Iterable[Edge]) -> dict[ZoneId, list[ZoneId]]:
    """Adjacency restricted to visited endpoints.

    Neighbor lists keep first-seen edge order; BFS tie-breaks depend on it.
    """
    adjacency: dict[ZoneId, list[ZoneId]] = {}
    for a, b in edges:
        if a not in visited or b not in visited or a == b:
            continue
        neighbors_a = adjacency.setdefault(a, [])
        if b not in neighbors_a:
            neighbors_a.append(b)
        neighbors_b = adjacency.setdefault(b, [])
        if a not in neighbors_b:
            neighbors_b.append(a)
    return adjacency


def frontier_zones(visited: AbstractSet[ZoneId], edges: Iterable[Edge]) -> set[ZoneId]:
    """Visited zones bordering at least one unvisited zone."""
    frontier: set[ZoneId] = set()
    for a, b in edges:
        a_seen = a in visited
        b_seen = b in visited
        if a_seen and not b_seen:
            frontier.add(a)
        elif b_seen and not a_seen:
            frontier.add(b)
    return frontier


def find_frontier_path(
    current_zone: ZoneId,
    visited: AbstractSet[ZoneId],
    edges: Iterable[Edge],
) -> Optional[list[ZoneId]]:
    """Shortest path (by edge count) from ``current_zone`` to the nearest frontier zone.

    Returns ``[current_zone]`` when the scout already stands in a frontier
    zone, and None when no frontier exists or none is reachable through
    visited zones. Equidistant frontiers resolve to the first one dequeued,
    which follows the order of ``edges``; the same input always yields the
    same path.
    """
    edge_list = list(edges)
    frontier = frontier_zones(visited, edge_list)
    if not frontier:
        return None
    if current_zone in frontier:
        return [current_zone]
    return _shortest_path(current_zone, frontier, visited_adjacency(visited, edge_list))


def find_zone_path(
    current_zone: ZoneId,
    goal_zone: ZoneId,
    visited: AbstractSet[ZoneId],
    edges: Iterable[Edge],
) -> Optional[list[ZoneId]]:
    """Shortest path from ``current_zone`` to ``goal_zone`` through visited zones.

    Used to walk back to a zone holding a pending gate. Returns None when the
    goal is unvisited or cut off from the current zone.
    """
    if goal_zone not in visited:
        return None
    if goal_zone == current_zone:
        return [current_zone]
    return _shortest_path(current_zone, {goal_zone}, visited_adjacency(visited, edges))


def _shortest_path(
    start: ZoneId,
    goals: AbstractSet[ZoneId],
    adjacency: dict[ZoneId, list[ZoneId]],
) -> Optional[list[ZoneId]]:
    parents: dict[ZoneId, Optional[ZoneId]] = {start: None}
    queue: deque[ZoneId] = deque([start])

    while queue:
        zone = queue.popleft()
        if zone in goals:
            path: list[ZoneId] = []
            node: Optional[ZoneId] = zone
            while node is not None:
                path.append(node)
                node = parents[node]
            path.reverse()
            return path
        for neighbor in adjacency.get(zone, []):
            if neighbor in parents:
                continue
            parents[neighbor] = zone
            queue.append(neighbor)

    return None
