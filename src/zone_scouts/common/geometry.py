from __future__ import annotations

from typing import Sequence, Union

import numpy as np

Vec2Like = Union[Sequence[float], np.ndarray]


def vec2(value: Vec2Like) -> np.ndarray:
    arr = np.asarray(value, dtype=np.float64).reshape(2)
    return arr.copy()


def distance(a: Vec2Like, b: Vec2Like) -> float:
    return float(np.linalg.norm(vec2(b) - vec2(a)))


def step_toward(position: Vec2Like, target: Vec2Like, max_step: float) -> np.ndarray:
    """Move ``position`` at most ``max_step`` toward ``target`` without overshooting."""
    pos = vec2(position)
    delta = vec2(target) - pos
    length = float(np.linalg.norm(delta))
    if length <= max_step or length == 0.0:
        return vec2(target)
    return pos + delta * (max_step / length)


def as_tuple(value: Vec2Like) -> tuple[float, float]:
    arr = vec2(value)
    return (float(arr[0]), float(arr[1]))
