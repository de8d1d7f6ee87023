"""
Zone scouts: autonomous exploration of a partially known zone graph.

Each scout keeps its own visited zones and pending gates; the scheduler
advances every scout once per simulation tick.
"""

from .types import JUMP_TRANSITION_SECONDS, GateRef, RiskTolerance, ScoutPhase, ZoneId
from .config import ExplorationConfig
from .state import ScoutAgent
from .scheduler import ExplorationScheduler
from .snapshot import SnapshotError, dump_scouts, load_scouts

__all__ = [
    "JUMP_TRANSITION_SECONDS",
    "GateRef",
    "RiskTolerance",
    "ScoutPhase",
    "ZoneId",
    "ExplorationConfig",
    "ScoutAgent",
    "ExplorationScheduler",
    "SnapshotError",
    "dump_scouts",
    "load_scouts",
]
