"""Tunables for the exploration scheduler."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .types import EVENT_LOG_SIZE, JUMP_TRANSITION_SECONDS, SCOUT_GATE_RANGE, SCOUT_SPEED, RiskTolerance


class ExplorationConfig(BaseModel):
    """Timing, movement, and logging settings shared by all scouts."""

    jump_transition_seconds: float = Field(default=JUMP_TRANSITION_SECONDS, ge=0.0)
    scan_seconds: float = Field(default=0.0, ge=0.0)
    scout_speed: float = Field(default=SCOUT_SPEED, ge=0.0)
    gate_range: float = Field(default=SCOUT_GATE_RANGE, ge=0.0)
    event_log_size: int = Field(default=EVENT_LOG_SIZE, ge=1)
    default_risk: RiskTolerance = Field(default=RiskTolerance.BALANCED)
