"""Geometry and random helpers used across the game."""

from __future__ import annotations

import random
from typing import Sequence


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a numeric value into the inclusive range [lo, hi]."""
    return max(lo, min(hi, value))


def random_int(lo: int, hi: int, rng: random.Random | None = None) -> int:
    """Uniform integer in [lo, hi], both ends inclusive."""
    if lo > hi:
        raise ValueError(f"empty range [{lo}, {hi}]")
    return (rng or random).randint(lo, hi)


def circle_rect_collision(
    center: Sequence[float],
    radius: float,
    rect_pos: Sequence[float],
    rect_size: Sequence[float],
) -> bool:
    """True if the circle overlaps the axis-aligned rectangle.

    ``rect_pos`` is the rectangle's top-left corner and ``rect_size`` its
    (w, h). Touching counts as overlapping.
    """
    half_w = rect_size[0] / 2
    half_h = rect_size[1] / 2
    dist_x = abs(center[0] - rect_pos[0] - half_w)
    dist_y = abs(center[1] - rect_pos[1] - half_h)

    if dist_x > half_w + radius:
        return False
    if dist_y > half_h + radius:
        return False

    # Center lies inside the rectangle's extended cross
    if dist_x <= half_w:
        return True
    if dist_y <= half_h:
        return True

    dx = dist_x - half_w
    dy = dist_y - half_h
    return dx * dx + dy * dy <= radius * radius
