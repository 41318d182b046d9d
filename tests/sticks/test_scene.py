"""
Tests for the scene coordinator.

Tests for sticks/scene.py
"""

from __future__ import annotations

import time

import pytest

from conftest import FAST_TICK, drag
from sticks.data_models import Bounds, Segment
from sticks.scene import SceneCoordinator
from sticks.worker import WorkerState


def spawn(scene: SceneCoordinator, points=((50, 50), (70, 50), (90, 50), (90, 70))) -> int:
    drag(scene, points)
    return scene.on_pointer_release()


def wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(FAST_TICK)
    return predicate()


class TestPublish:
    """Test the shared collection."""

    def test_publish_replaces_slot(self, scene, redraw):
        scene.on_secondary_button_hold()
        index = spawn(scene)
        before = redraw.count

        segs = [Segment(0, 0, 10, 10), Segment(5, 5, 15, 15)]
        scene.publish(index, segs)

        assert scene.published_segments(index) == tuple(segs)
        assert redraw.count == before + 1

    def test_publish_unknown_index(self, scene):
        with pytest.raises(IndexError):
            scene.publish(0, [])

    def test_publish_copies_input(self, scene):
        scene.on_secondary_button_hold()
        index = spawn(scene)
        segs = [Segment(0, 0, 10, 10)]
        scene.publish(index, segs)
        segs.append(Segment(1, 1, 2, 2))
        assert len(scene.published_segments(index)) == 1


class TestRender:
    """Test snapshots handed to the draw surface."""

    def test_empty_scene(self, scene, surface):
        scene.render(surface)
        assert surface.calls == [[]]

    def test_autonomous_then_interactive(self, scene, surface):
        scene.on_secondary_button_hold()
        index = spawn(scene)
        scene.publish(index, [Segment(1, 2, 3, 4)])
        drag(scene, [(100, 100), (130, 100)])

        scene.render(surface)

        lines = surface.calls[0]
        assert lines[0] == (1, 2, 3, 4)
        assert len(lines) == 2
        assert lines[1] == scene.interactive.segments[0].as_tuple()

    def test_snapshot_is_a_copy(self, scene):
        drag(scene, [(100, 100), (130, 100)])
        lines = scene.snapshot()
        drag(scene, [(160, 100)])
        assert len(lines) == 1
        assert len(scene.snapshot()) == 2


class TestPointerDrag:
    """Test the interactive stick."""

    def test_first_sample_anchors(self, scene):
        assert scene.on_pointer_drag((40, 60)) is False
        assert scene.is_dragging
        assert scene.interactive.current_point == (40, 60)
        assert scene.interactive.previous_point == (40, 60)
        assert len(scene.interactive.segments) == 0

    def test_samples_beyond_step_add_segments(self, scene, redraw):
        drag(scene, [(40, 60), (45, 60), (60, 60)])
        assert len(scene.interactive.segments) == 1
        assert scene.interactive.previous_point == (40, 60)
        assert scene.interactive.current_point == (60, 60)
        assert redraw.count == 1

    def test_float_positions_truncated(self, scene):
        scene.on_pointer_drag((40.7, 60.2))
        assert scene.interactive.current_point == (40, 60)


class TestHandoff:
    """Test pointer release turning the interactive stick autonomous."""

    def test_release_without_drag(self, scene):
        assert scene.on_pointer_release() is None
        assert scene.stick_count == 0

    def test_release_spawns_one_stick(self, scene):
        scene.on_secondary_button_hold()  # keep the new worker from publishing
        drag(scene, [(50, 50), (70, 50), (90, 50), (90, 70)])
        expected = tuple(scene.interactive.segments)
        assert len(expected) == 3

        index = scene.on_pointer_release()

        assert index == 0
        assert scene.stick_count == 1
        assert scene.published_segments(0) == expected
        assert len(scene.workers) == 1
        assert scene.workers[0].is_alive()

        # interactive stick reset
        assert scene.interactive.current_point == (0, 0)
        assert scene.interactive.previous_point == (0, 0)
        assert len(scene.interactive.segments) == 0
        assert not scene.is_dragging

    def test_new_stick_carries_kinematic_state(self):
        """The worker continues exactly where the interactive stick left off."""
        # a long tick holds the worker in READY after its first step
        scene = SceneCoordinator(Bounds(200, 200), tick_interval=30.0)
        drag(scene, [(50, 50), (70, 50), (90, 50), (90, 70)])
        expected = scene.interactive.clone_for_handoff(0)
        expected.advance_one_step(scene.get_bounds())

        try:
            scene.on_pointer_release()
            worker = scene.workers[0]
            assert wait_for(lambda: worker.state is WorkerState.READY)
        finally:
            scene.on_teardown(timeout=2.0)

        stick = worker.stick
        assert stick.index == 0
        assert stick.current_point == expected.current_point == (90, 80)
        assert stick.previous_point == (90, 70)
        assert stick.segment_length == expected.segment_length
        assert stick.segment_angle == expected.segment_angle
        assert stick.length_increasing == expected.length_increasing
        assert list(stick.segments) == list(expected.segments)

    def test_indices_are_sequential(self, scene):
        scene.on_secondary_button_hold()
        assert spawn(scene) == 0
        assert spawn(scene) == 1
        assert spawn(scene) == 2
        assert scene.stick_count == 3

    def test_sticks_do_not_share_trails(self, scene):
        scene.on_secondary_button_hold()
        spawn(scene)
        drag(scene, [(10, 10), (40, 10)])
        assert len(scene.published_segments(0)) == 3
        assert len(scene.interactive.segments) == 1


class TestPause:
    """Test the secondary button pause."""

    def test_hold_and_release(self, scene):
        scene.on_secondary_button_hold()
        assert scene.is_paused
        scene.on_secondary_button_release()
        assert not scene.is_paused

    def test_set_paused(self, scene):
        scene.set_paused(True)
        assert scene.run_state.is_paused
        scene.set_paused(False)
        assert not scene.run_state.is_paused

    def test_stick_released_while_paused_stays_put(self, scene):
        scene.on_secondary_button_hold()
        index = spawn(scene)
        worker = scene.workers[index]

        for _ in range(20):
            time.sleep(FAST_TICK)
            assert len(worker.stick.segments) == 3
            assert len(scene.published_segments(index)) == 3
        assert worker.stick.current_point == (90, 70)

        scene.on_secondary_button_release()
        assert wait_for(lambda: len(scene.published_segments(index)) > 3)

    def test_no_segments_published_while_paused(self, scene):
        index = spawn(scene)
        assert wait_for(lambda: len(scene.published_segments(index)) > 3)

        scene.on_secondary_button_hold()
        time.sleep(FAST_TICK * 4)  # let an in-flight publish land
        frozen = scene.published_segments(index)
        time.sleep(FAST_TICK * 20)
        assert scene.published_segments(index) == frozen

        scene.on_secondary_button_release()
        assert wait_for(lambda: scene.published_segments(index) != frozen)


class TestBounds:
    """Test canvas bounds shared with the workers."""

    def test_set_bounds(self, scene):
        scene.set_bounds(640, 480)
        assert scene.get_bounds() == Bounds(640, 480)

    def test_negative_bounds_rejected(self, scene):
        with pytest.raises(ValueError):
            scene.set_bounds(-5, 480)

    def test_workers_read_current_bounds(self, scene):
        scene.set_bounds(100, 100)
        spawn(scene, points=((50, 50), (80, 50)))
        worker = scene.workers[0]
        assert worker.bounds_source() == Bounds(100, 100)
        scene.set_bounds(300, 300)
        assert worker.bounds_source() == Bounds(300, 300)


class TestTeardown:
    """Test shutting every worker down."""

    def test_teardown_joins_all_workers(self, scene):
        for _ in range(3):
            spawn(scene)
        assert wait_for(lambda: all(len(scene.published_segments(i)) > 3 for i in range(3)))

        scene.on_teardown(timeout=2.0)

        assert all(not w.is_alive() for w in scene.workers)
        frozen = scene.snapshot()
        time.sleep(FAST_TICK * 10)
        assert scene.snapshot() == frozen

    def test_teardown_while_paused(self, scene):
        scene.on_secondary_button_hold()
        spawn(scene)
        scene.on_teardown(timeout=2.0)
        assert not scene.workers[0].is_alive()

    def test_teardown_is_idempotent(self, scene):
        spawn(scene)
        scene.on_teardown(timeout=2.0)
        scene.on_teardown(timeout=2.0)
        assert scene.run_state.quit_requested

    def test_release_after_teardown_spawns_nothing(self, scene):
        scene.on_teardown(timeout=2.0)
        drag(scene, [(50, 50), (80, 50)])
        assert scene.on_pointer_release() is None
        assert scene.stick_count == 0
        assert scene.workers == []
        assert len(scene.interactive.segments) == 0
