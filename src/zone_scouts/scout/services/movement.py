"""
Straight-line movement model.

Stand-in for the ship movement system: keeps one position per scout, steps it
toward the scout's target each tick, and reports arrival within a radius.
"""

from __future__ import annotations

from typing import Optional, Protocol

import numpy as np

from zone_scouts.common.geometry import Vec2Like, as_tuple, distance, step_toward, vec2
from zone_scouts.scout.types import SCOUT_GATE_RANGE, SCOUT_SPEED


class MovementModel(Protocol):
    """Interface the scheduler uses to steer scouts and detect arrival."""

    def place(self, scout_id: int, position: Vec2Like) -> None:
        """Put a scout at a position (spawn, jump exit)."""
        ...

    def advance(self, scout_id: int, target: Optional[Vec2Like], delta_seconds: float) -> bool:
        """Move toward target; True once the scout has arrived."""
        ...


class StraightLineMovement:
    """Moves scouts directly toward their target position."""

    def __init__(self, speed: float = SCOUT_SPEED, arrival_range: float = SCOUT_GATE_RANGE) -> None:
        self.speed = speed
        self.arrival_range = arrival_range
        self._positions: dict[int, np.ndarray] = {}

    def place(self, scout_id: int, position: Vec2Like) -> None:
        self._positions[scout_id] = vec2(position)

    def position_of(self, scout_id: int) -> tuple[float, float]:
        return as_tuple(self._positions.get(scout_id, np.zeros(2)))

    def has_arrived(self, scout_id: int, target: Vec2Like) -> bool:
        return distance(self.position_of(scout_id), target) <= self.arrival_range

    def advance(self, scout_id: int, target: Optional[Vec2Like], delta_seconds: float) -> bool:
        """Step toward ``target``. Returns True once within arrival range.

        Arrival is checked before moving, so a scout already at the gate does
        not spend a tick in transit.
        """
        if target is None:
            return False
        if self.has_arrived(scout_id, target):
            return True
        current = self._positions.get(scout_id, np.zeros(2))
        self._positions[scout_id] = step_toward(current, target, self.speed * delta_seconds)
        return False
