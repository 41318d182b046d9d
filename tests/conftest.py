"""
Pytest configuration and shared fixtures for Stick Mystify tests.

Provides canvas bounds, seeded sticks, a fake draw surface and a scene that is
always torn down so no worker thread outlives its test.
"""

from __future__ import annotations

import os
import sys
import threading
from pathlib import Path
from typing import List

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# pygame must not try to open a real display or audio device
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from sticks.data_models import Bounds
from sticks.motion import Stick
from sticks.scene import SceneCoordinator

# Short tick so threaded tests finish quickly
FAST_TICK = 0.005


@pytest.fixture
def bounds() -> Bounds:
    """200x200 canvas."""
    return Bounds(200, 200)


@pytest.fixture
def stick() -> Stick:
    """Stick heading right from (5, 100) with fixed length and angle."""
    return Stick(
        segment_length=20,
        segment_angle=90,
        current_point=(5, 100),
        previous_point=(0, 100),
        length_increasing=True,
    )


class FakeSurface:
    """Records every draw_lines call."""

    def __init__(self):
        self.calls: List[list] = []

    def draw_lines(self, lines):
        self.calls.append(list(lines))


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


class RedrawCounter:
    """Thread-safe request_redraw callback."""

    def __init__(self):
        self._lock = threading.Lock()
        self.count = 0
        self.event = threading.Event()

    def __call__(self):
        with self._lock:
            self.count += 1
        self.event.set()


@pytest.fixture
def redraw() -> RedrawCounter:
    return RedrawCounter()


@pytest.fixture
def scene(bounds, redraw):
    """Scene with a fast tick; every worker is joined after the test."""
    s = SceneCoordinator(bounds, request_redraw=redraw, tick_interval=FAST_TICK)
    yield s
    s.on_teardown(timeout=2.0)


def drag(scene: SceneCoordinator, points) -> None:
    """Feed a sequence of pointer samples to the scene."""
    for p in points:
        scene.on_pointer_drag(p)
