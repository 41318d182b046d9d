#!/usr/bin/env python3
"""
Motion engine for Stick Mystify.

Responsibilities
- Hold the kinematic state of one stick: current/previous point (which define
  its heading), segment length and angle, and the length direction.
- Advance a stick one step along its heading, reflecting off the canvas
  borders, and append the resulting segment to a bounded trail.
- Advance the interactive stick from consecutive pointer positions instead of
  a heading, sharing the same length/angle/segment logic.

Conventions
- Screen axes: x grows to the right, y grows downward; angles are degrees.
- A stick's trail is a deque with maxlen=SEGMENT_LIMIT, so appending past the
  limit drops the oldest segment.
- Apart from the random initial length and angle, every step is deterministic.

Threading
- A Stick has exactly one writer at a time: the pointer handler for the
  interactive stick, or its own worker thread once handed off. Nothing here
  takes a lock; publishing to the shared scene is done by the caller.
"""
import logging
import math
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Tuple

from .constants import (
    ANGLE_LIMIT,
    ANGLE_STEP,
    MAX_SEGMENT_LENGTH,
    MIN_SEGMENT_LENGTH,
    SEGMENT_LENGTH_STEP,
    SEGMENT_LIMIT,
    STEP_DISTANCE,
)
from .data_models import ORIGIN, Bounds, Point, Segment
from .vector_utils import clamp, distance, find_angle, find_point

logger = logging.getLogger(__name__)


def _random_length() -> int:
    return random.randrange(MIN_SEGMENT_LENGTH, MAX_SEGMENT_LENGTH)


def _random_angle() -> int:
    return random.randrange(0, ANGLE_LIMIT)


def _new_trail() -> Deque[Segment]:
    return deque(maxlen=SEGMENT_LIMIT)


def _reach(gap: float, component: float) -> float:
    """Distance along a heading that covers `gap` along one axis."""
    if component == 0:
        return 0.0
    return gap / abs(component)


@dataclass
class Stick:
    """
    An animated stick: a trail of segments plus the state that generates them.

    Fields:
    - index: slot of this stick in the scene's published collection
    - segment_length: distance from a segment's centre to either end (px)
    - segment_angle: orientation of the next segment in degrees, [0, 180)
    - current_point, previous_point: the heading is previous -> current
    - length_increasing: whether segment_length is growing or shrinking
    - segments: bounded trail, oldest first
    - line_prepared: a segment was computed but not yet published
    """
    index: int = 0
    segment_length: int = field(default_factory=_random_length)
    segment_angle: int = field(default_factory=_random_angle)
    current_point: Point = ORIGIN
    previous_point: Point = ORIGIN
    length_increasing: bool = False
    segments: Deque[Segment] = field(default_factory=_new_trail)
    line_prepared: bool = False

    def __post_init__(self):
        if not isinstance(self.segments, deque) or self.segments.maxlen != SEGMENT_LIMIT:
            self.segments = deque(self.segments, maxlen=SEGMENT_LIMIT)

    @property
    def heading(self) -> int:
        return find_angle(self.previous_point, self.current_point)

    def advance_one_step(self, bounds: Bounds) -> Segment:
        """
        Move one STEP_DISTANCE along the heading and append the next segment.

        If the projected point leaves the canvas, the stick lands exactly on the
        crossed border and its previous point is mirrored across that border so
        the next heading points back inside. Borders are checked left, right,
        top, bottom; only the first one crossed is resolved per step.
        """
        heading = self.heading
        candidate = find_point(self.current_point, STEP_DISTANCE, heading)
        if not self._reflect_off_border(candidate, heading, bounds):
            self.previous_point = self.current_point
            self.current_point = candidate
        return self._grow_trail()

    def _reflect_off_border(self, candidate: Point, heading: int, bounds: Bounds) -> bool:
        if bounds.contains(candidate):
            return False

        cx, cy = self.current_point
        px, py = self.previous_point
        cos_h = math.cos(math.radians(heading))
        sin_h = math.sin(math.radians(heading))

        if candidate[0] < 0:
            # left border
            _, y = find_point(self.current_point, _reach(cx, cos_h), heading)
            self.current_point = (0, y)
            prev_to_curr = px
            self.previous_point = (-prev_to_curr, py)
            border = "left"
        elif candidate[0] > bounds.width:
            # right border
            _, y = find_point(self.current_point, _reach(bounds.width - cx, cos_h), heading)
            self.current_point = (bounds.width, y)
            prev_to_curr = bounds.width - px
            self.previous_point = (bounds.width + prev_to_curr, py)
            border = "right"
        elif candidate[1] < 0:
            # top border
            x, _ = find_point(self.current_point, _reach(cy, sin_h), heading)
            self.current_point = (x, 0)
            prev_to_curr = py
            self.previous_point = (px, -prev_to_curr)
            border = "top"
        else:
            # bottom border
            x, _ = find_point(self.current_point, _reach(bounds.height - cy, sin_h), heading)
            self.current_point = (x, bounds.height)
            prev_to_curr = bounds.height - py
            self.previous_point = (px, bounds.height + prev_to_curr)
            border = "bottom"

        logger.debug("stick %d hit %s border at %s", self.index, border, self.current_point)
        return True

    def anchor_at(self, point: Point) -> None:
        """Start a drag: both points at the pointer, so there is no heading yet."""
        self.current_point = point
        self.previous_point = point

    def follow_pointer(self, point: Point) -> bool:
        """
        Advance the interactive stick towards a pointer sample.

        The sample only counts once it is more than STEP_DISTANCE away from the
        current point. Returns True if a segment was added.
        """
        if distance(self.current_point, point) <= STEP_DISTANCE:
            return False
        self.previous_point = self.current_point
        self.current_point = point
        self._grow_trail()
        return True

    def update_segment_length(self) -> None:
        """Oscillate the segment length between its bounds, reversing at each bound."""
        if self.length_increasing:
            if self.segment_length < MAX_SEGMENT_LENGTH:
                self.segment_length = clamp(self.segment_length + SEGMENT_LENGTH_STEP,
                                            MIN_SEGMENT_LENGTH, MAX_SEGMENT_LENGTH)
            else:
                self.length_increasing = False
        else:
            if self.segment_length > MIN_SEGMENT_LENGTH:
                self.segment_length = clamp(self.segment_length - SEGMENT_LENGTH_STEP,
                                            MIN_SEGMENT_LENGTH, MAX_SEGMENT_LENGTH)
            else:
                self.length_increasing = True

    def update_segment_angle(self) -> None:
        self.segment_angle += ANGLE_STEP
        if self.segment_angle >= ANGLE_LIMIT:
            self.segment_angle = 0

    def emit_segment(self) -> Segment:
        """Segment centred on the current point at the current length and angle."""
        x1, y1 = find_point(self.current_point, self.segment_length, self.segment_angle)
        x2, y2 = find_point(self.current_point, self.segment_length, self.segment_angle + 180)
        return Segment(x1, y1, x2, y2)

    def _grow_trail(self) -> Segment:
        self.update_segment_length()
        self.update_segment_angle()
        segment = self.emit_segment()
        self.segments.append(segment)
        return segment

    def segments_snapshot(self) -> Tuple[Segment, ...]:
        return tuple(self.segments)

    def clone_for_handoff(self, index: int) -> "Stick":
        """
        Copy this stick's kinematic state and trail into a new, independent stick.

        The trail is copied so the clone and this stick never share a buffer.
        """
        return Stick(
            index=index,
            segment_length=self.segment_length,
            segment_angle=self.segment_angle,
            current_point=self.current_point,
            previous_point=self.previous_point,
            length_increasing=self.length_increasing,
            segments=deque(self.segments, maxlen=SEGMENT_LIMIT),
        )

    def reset(self) -> None:
        """Return to the origin with an empty trail; length and angle carry over."""
        self.current_point = ORIGIN
        self.previous_point = ORIGIN
        self.segments = _new_trail()
        self.line_prepared = False
