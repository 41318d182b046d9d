#!/usr/bin/env python3
"""
Shared constants for Stick Mystify (pixels and milliseconds unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
motion engine, the stick workers and the viewport.
"""

# Motion
STEP_DISTANCE = 10  # px travelled by a stick per step
SEGMENT_LIMIT = 20  # max segments kept in a stick's trail
TICK_INTERVAL_MS = 40  # publish interval of an autonomous stick
TICK_INTERVAL_S = TICK_INTERVAL_MS / 1000.0

# Segment shape
MIN_SEGMENT_LENGTH = 10  # px from segment centre to either end
MAX_SEGMENT_LENGTH = 50
SEGMENT_LENGTH_STEP = 5
ANGLE_LIMIT = 180  # degrees; angles live in [0, ANGLE_LIMIT)
ANGLE_STEP = 5

# Rendering (viewport)
VIEW_WIDTH = 1000
VIEW_HEIGHT = 700
BACKGROUND_COLOR = (240, 240, 240)
STICK_COLOR = (0, 0, 0)
STICK_WIDTH = 2
HUD_TEXT_COLOR = (90, 90, 90)
TARGET_FPS = 60

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
