"""Easing curves mapping normalized progress ``t`` in [0, 1] to eased progress."""

from __future__ import annotations

from typing import Callable


Easing = Callable[[float], float]


def clamp01(t: float) -> float:
    return max(0.0, min(1.0, float(t)))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def linear(t: float) -> float:
    return clamp01(t)


def ease_out_cubic(t: float) -> float:
    """Decelerating cubic: ``1 - (1 - t)^3``."""
    t = clamp01(t)
    return 1.0 - (1.0 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    """Symmetric cubic; accelerates to the midpoint (0.5 -> 0.5), then decelerates."""
    t = clamp01(t)
    if t < 0.5:
        return 4.0 * t * t * t
    return (t - 1.0) * (2.0 * t - 2.0) * (2.0 * t - 2.0) + 1.0
