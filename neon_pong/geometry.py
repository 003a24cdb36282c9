"""Small geometry helpers shared by the physics, AI and particle code."""
from __future__ import annotations

import math
from typing import Tuple

Rect = Tuple[float, float, float, float]


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def deg_to_rad(degrees: float) -> float:
    return degrees * math.pi / 180.0


def rad_to_deg(radians: float) -> float:
    return radians * 180.0 / math.pi


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Strict overlap of two ``(x, y, width, height)`` boxes; touching edges do not count."""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def centered_rect(cx: float, cy: float, size: float) -> Rect:
    half = size / 2
    return (cx - half, cy - half, size, size)
