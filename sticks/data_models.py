#!/usr/bin/env python3
"""
Data models for Stick Mystify.

This module defines the small value types shared between the motion engine,
the scene coordinator and the renderer.

Units and usage
- Coordinates are integer pixels with the origin at the top-left of the canvas.
- Segments are immutable, so a stick's trail can be handed to the render thread
  as a plain tuple without copying each segment.
- Bounds describe the drawable canvas; a stick reads them on every step so a
  window resize takes effect immediately.
"""
import math
from dataclasses import dataclass
from typing import Tuple

Point = Tuple[int, int]
LineTuple = Tuple[int, int, int, int]

ORIGIN: Point = (0, 0)


@dataclass(frozen=True)
class Segment:
    """
    A single drawn line of a stick.

    Fields:
    - x1, y1: first endpoint in pixels
    - x2, y2: second endpoint in pixels
    """
    x1: int
    y1: int
    x2: int
    y2: int

    def length(self) -> int:
        """Euclidean length, truncated to whole pixels."""
        return int(math.hypot(self.x2 - self.x1, self.y2 - self.y1))

    def as_tuple(self) -> LineTuple:
        return (self.x1, self.y1, self.x2, self.y2)


@dataclass(frozen=True)
class Bounds:
    """Canvas extent in pixels. Zero-area bounds are allowed."""
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"bounds must be non-negative, got {self.width}x{self.height}")

    def contains(self, point: Point) -> bool:
        return 0 <= point[0] <= self.width and 0 <= point[1] <= self.height
