#!/usr/bin/env python3
"""
Vector helper functions for 2D integer-pixel geometry.

These are small, fast functions used by the motion engine and the drag
handling. Results are truncated toward zero so every projected point lands
on a whole pixel.
"""
import math
from typing import Tuple

from .data_models import Point


def clamp(x: int, a: int, b: int) -> int:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_sub(a: Tuple[float, float], b: Tuple[float, float]) -> Tuple[float, float]:
    return (a[0] - b[0], a[1] - b[1])


def vec_len(a: Tuple[float, float]) -> float:
    return math.hypot(a[0], a[1])


def distance(p1: Point, p2: Point) -> int:
    """Straight-line distance between two points, truncated to whole pixels."""
    return int(vec_len(vec_sub(p2, p1)))


def find_point(anchor: Point, radius: float, angle: float) -> Point:
    """
    Project a point on the circle around `anchor`.

    Uses the parametric equation of a circle:
        x = r * cos(theta) + ax
        y = r * sin(theta) + ay

    Args:
        anchor: centre of the circle
        radius: distance from the anchor in pixels
        angle: direction in degrees (screen axes, y grows downward)
    """
    theta = math.radians(angle)
    x = int(radius * math.cos(theta)) + anchor[0]
    y = int(radius * math.sin(theta)) + anchor[1]
    return (x, y)


def find_angle(p1: Point, p2: Point) -> int:
    """Heading of the vector p1 -> p2 in whole degrees, in (-180, 180]."""
    dx, dy = vec_sub(p2, p1)
    return int(math.degrees(math.atan2(dy, dx)))
