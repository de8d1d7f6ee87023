"""
Types and constants for zone scouts.

Enums, gate references, and movement/jump constants.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Zones are opaque integer ids; only equality/hash matter.
ZoneId = int


class RiskTolerance(Enum):
    """How much route risk a scout is willing to accept (ordered low to high)."""

    CAUTIOUS = "cautious"
    BALANCED = "balanced"
    BOLD = "bold"


# Total order used by stepwise adjustment
RISK_ORDER: tuple[RiskTolerance, ...] = (
    RiskTolerance.CAUTIOUS,
    RiskTolerance.BALANCED,
    RiskTolerance.BOLD,
)


class ScoutPhase(Enum):
    """Exploration phases."""

    SCANNING = "scanning"  # Idle in a zone, deciding next action
    TRAVELING_TO_GATE = "traveling_to_gate"  # En route to target_gate
    JUMPING = "jumping"  # In the pipe, payload in jump_destination / jump_remaining_seconds
    COMPLETE = "complete"  # Nothing reachable right now (advisory, re-enterable)


@dataclass(frozen=True)
class GateRef:
    """Weak reference to a gate entity owned by the world.

    Identity is ``gate_id`` alone; ``destination`` is cached so pending gates
    can be pruned without a registry lookup.
    """

    gate_id: int
    destination: ZoneId


# Movement / jump constants
JUMP_TRANSITION_SECONDS = 2.0
SCOUT_SPEED = 80.0
SCOUT_GATE_RANGE = 25.0
EVENT_LOG_SIZE = 8
