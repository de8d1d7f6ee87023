"""Shared fixtures for zone scout tests.

Worlds are built through ``load_world`` with no zone positions, so every gate
sits at the origin and scouts arrive at a gate on the first movement check.
That keeps tick counts small and exact: with ``dt=1.0`` and the default 2s
jump, a hop takes commit (1) + enter (1) + pipe (2) ticks.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from zone_scouts.scout.config import ExplorationConfig
from zone_scouts.scout.scheduler import ExplorationScheduler
from zone_scouts.scout.services.world import GateRegistry, ZoneGraph, load_world


def _world_data(edges: list[tuple[int, int]], risks: dict[tuple[int, int], float] | None = None) -> dict[str, Any]:
    risks = risks or {}
    return {"edges": [{"from": a, "to": b, "risk": risks.get((a, b), 0.0)} for a, b in edges]}


@pytest.fixture
def line_world_data() -> dict[str, Any]:
    """100 - 200 - 300"""
    return _world_data([(100, 200), (200, 300)])


@pytest.fixture
def branching_world_data() -> dict[str, Any]:
    """200 is a dead end off 100; 400 hangs off 300."""
    return _world_data([(100, 200), (100, 300), (300, 400)])


@pytest.fixture
def line_world(line_world_data) -> tuple[ZoneGraph, GateRegistry]:
    return load_world(line_world_data)


@pytest.fixture
def make_scheduler() -> Callable[..., ExplorationScheduler]:
    """Factory: ``make_scheduler(world_data, config=None, **scheduler_kwargs)``."""

    def _make(data: dict[str, Any], config: ExplorationConfig | None = None, **kwargs: Any) -> ExplorationScheduler:
        graph, gates = load_world(data)
        return ExplorationScheduler(graph, gates, config=config, **kwargs)

    return _make


@pytest.fixture
def world_data() -> Callable[..., dict[str, Any]]:
    """Factory: ``world_data(edges, risks=None)`` with auto-created gates."""
    return _world_data
