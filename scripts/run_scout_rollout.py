#!/usr/bin/env python3
"""Run a short scout exploration rollout and sanity-check zone coverage."""

from __future__ import annotations

import argparse
import json
import math
from pathlib import Path
from typing import Any, Optional

from zone_scouts.scout import ExplorationConfig, ExplorationScheduler, RiskTolerance
from zone_scouts.scout.hud import detail_lines, fleet_lines
from zone_scouts.scout.services.world import load_world
from zone_scouts.scout.snapshot import dump_scheduler

RISK_CHOICES = {risk.value: risk for risk in RiskTolerance}


def demo_world(zones: int, radius: float = 400.0) -> dict[str, Any]:
    """Ring of zones with every third zone carrying a risky spur."""
    positions: dict[str, list[float]] = {}
    edges: list[dict[str, Any]] = []
    for index in range(zones):
        angle = 2.0 * math.pi * index / zones
        positions[str(100 + index)] = [radius * math.cos(angle), radius * math.sin(angle)]
    for index in range(zones):
        a = 100 + index
        b = 100 + (index + 1) % zones
        edges.append({"from": a, "to": b, "risk": 0.1})
    for index in range(0, zones, 3):
        spur = 500 + index
        anchor = positions[str(100 + index)]
        positions[str(spur)] = [anchor[0] * 1.5, anchor[1] * 1.5]
        edges.append({"from": 100 + index, "to": spur, "risk": 0.7})
    return {"zones": positions, "edges": edges}


def run_rollout(
    *,
    world: dict[str, Any],
    scouts: int,
    steps: int,
    dt: float,
    risk: RiskTolerance,
    scan_seconds: float,
    trace: int,
    trace_level: int,
    debug: int,
    save_path: Optional[Path],
) -> int:
    graph, gates = load_world(world)
    config = ExplorationConfig(scan_seconds=scan_seconds, default_risk=risk)
    scheduler = ExplorationScheduler(
        graph,
        gates,
        config=config,
        trace=trace,
        trace_level=trace_level,
        debug=debug,
    )

    zones = sorted(graph.zones())
    if not zones:
        print("[scouts] world has no zones")
        return 1
    for index in range(scouts):
        scheduler.add_scout(zones[index % len(zones)])
    start_zones = {agent.current_zone for agent in scheduler.scouts}

    scheduler.run(steps, dt)

    print("[scouts] === Fleet ===")
    for line in fleet_lines(scheduler.scouts):
        print(f"[scouts]   {line}")
    for agent in scheduler.scouts:
        print(f"[scouts] Scout-{agent.scout_id + 1}: " + " | ".join(detail_lines(agent)))
    print("[scouts] === Event log ===")
    for entry in scheduler.event_log.entries():
        print(f"[scouts]   {entry}")

    total = len(zones)
    revealed = len(scheduler.revealed_zones)
    print(f"[scouts] revealed {revealed}/{total} zones in {steps} ticks")

    if save_path is not None:
        save_path.parent.mkdir(parents=True, exist_ok=True)
        save_path.write_text(dump_scheduler(scheduler))
        print(f"[scouts] saved snapshot to {save_path}")

    if scheduler.debug_logger.warnings:
        print(f"[scouts] {len(scheduler.debug_logger.warnings)} warnings")
        return 1
    # Scouts must get past their spawn zones
    return 0 if revealed == total or revealed > len(start_zones) else 1


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--world", type=Path, default=None, help="World JSON (zones/edges/gates)")
    parser.add_argument("--demo-zones", type=int, default=9)
    parser.add_argument("--scouts", type=int, default=2)
    parser.add_argument("--steps", type=int, default=600)
    parser.add_argument("--dt", type=float, default=1.0 / 16.0)
    parser.add_argument("--risk", choices=sorted(RISK_CHOICES), default=RiskTolerance.BALANCED.value)
    parser.add_argument("--scan-seconds", type=float, default=0.5)
    parser.add_argument("--trace", action="store_true")
    parser.add_argument("--trace-level", type=int, default=1)
    parser.add_argument("--debug", type=int, default=0)
    parser.add_argument("--save", type=Path, default=None)
    args = parser.parse_args()

    world = json.loads(args.world.read_text()) if args.world else demo_world(args.demo_zones)

    return run_rollout(
        world=world,
        scouts=args.scouts,
        steps=args.steps,
        dt=args.dt,
        risk=RISK_CHOICES[args.risk],
        scan_seconds=args.scan_seconds,
        trace=int(args.trace),
        trace_level=args.trace_level,
        debug=args.debug,
        save_path=args.save,
    )


if __name__ == "__main__":
    raise SystemExit(main())
