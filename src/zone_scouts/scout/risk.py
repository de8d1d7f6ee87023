"""Risk policy: thresholds, route confidence, and clamped tolerance steps."""

from __future__ import annotations

from .types import RISK_ORDER, RiskTolerance

# Highest route risk each tolerance will accept
RISK_THRESHOLDS: dict[RiskTolerance, float] = {
    RiskTolerance.CAUTIOUS: 0.35,
    RiskTolerance.BALANCED: 0.60,
    RiskTolerance.BOLD: 0.85,
}

# Baseline confidence before the route-risk penalty
BASE_CONFIDENCE: dict[RiskTolerance, float] = {
    RiskTolerance.CAUTIOUS: 0.75,
    RiskTolerance.BALANCED: 0.65,
    RiskTolerance.BOLD: 0.55,
}

ROUTE_RISK_PENALTY = 0.4
MIN_CONFIDENCE = 0.20
MAX_CONFIDENCE = 0.90

RISK_LABELS: dict[RiskTolerance, str] = {
    RiskTolerance.CAUTIOUS: "Cautious",
    RiskTolerance.BALANCED: "Balanced",
    RiskTolerance.BOLD: "Bold",
}


def threshold(risk: RiskTolerance) -> float:
    """Highest route risk accepted at this tolerance."""
    return RISK_THRESHOLDS[risk]


def confidence(risk: RiskTolerance, route_risk: float) -> float:
    """Confidence in a route with the given risk, clamped to [0.20, 0.90].

    Bolder scouts start lower; the route-risk penalty is the same for every
    tolerance.
    """
    value = BASE_CONFIDENCE[risk] - route_risk * ROUTE_RISK_PENALTY
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, value))


def adjust(risk: RiskTolerance, delta: int) -> RiskTolerance:
    """Step ``risk`` by ``delta`` positions, clamped to the ends of the order."""
    index = RISK_ORDER.index(risk)
    next_index = max(0, min(len(RISK_ORDER) - 1, index + int(delta)))
    return RISK_ORDER[next_index]


def accepts(risk: RiskTolerance, route_risk: float) -> bool:
    return route_risk <= threshold(risk)


def label(risk: RiskTolerance) -> str:
    return RISK_LABELS[risk]
