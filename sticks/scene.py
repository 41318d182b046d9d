#!/usr/bin/env python3
"""
Scene coordinator for Stick Mystify.

What this module does
- Owns the published collection: one immutable trail per autonomous stick,
  indexed by the stick's index. Workers replace their own slot via publish();
  the renderer copies every slot via snapshot()/render(). Both go through a
  single coarse lock.
- Owns the interactive stick that follows the pointer while the primary button
  is held, and hands it off to a new StickWorker on release.
- Owns the RunState shared by all workers (pause/quit) and the current canvas
  bounds.

Threading model
- Pointer handlers and render() are called from the viewport thread.
- publish() is called from the worker threads.
- The interactive stick is read by render() without the lock: it has a single
  writer (the pointer handlers) and at worst renders one stale frame.
"""
import logging
import threading
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from .constants import TICK_INTERVAL_S
from .data_models import Bounds, LineTuple, Point, Segment
from .motion import Stick
from .run_state import RunState
from .worker import StickWorker

logger = logging.getLogger(__name__)


class LineSurface(Protocol):
    def draw_lines(self, lines: Sequence[LineTuple]) -> None:
        ...


def _no_redraw() -> None:
    pass


class SceneCoordinator:
    """
    Shared state between the viewport thread and the stick worker threads.
    The published collection is guarded by `lock`.
    """

    def __init__(self, bounds: Bounds, request_redraw: Optional[Callable[[], None]] = None,
                 run_state: Optional[RunState] = None, tick_interval: float = TICK_INTERVAL_S):
        self.lock = threading.Lock()
        self.run_state = run_state if run_state is not None else RunState()
        self.request_redraw = request_redraw or _no_redraw
        self.tick_interval = tick_interval
        self.interactive = Stick()
        self.dragging = False
        self._bounds = bounds
        self._published: List[Tuple[Segment, ...]] = []
        self._workers: List[StickWorker] = []

    # -----------------------
    # Shared collection
    # -----------------------

    def publish(self, index: int, segments: Sequence[Segment]) -> None:
        """Replace the trail stored for stick `index` and ask for a redraw."""
        with self.lock:
            if not 0 <= index < len(self._published):
                raise IndexError(f"no stick at index {index}")
            self._published[index] = tuple(segments)
            self.request_redraw()

    def snapshot(self) -> List[LineTuple]:
        """Point-in-time copy of every line to draw, autonomous sticks first."""
        with self.lock:
            lines = [seg.as_tuple() for trail in self._published for seg in trail]
        lines.extend(seg.as_tuple() for seg in tuple(self.interactive.segments))
        return lines

    def published_segments(self, index: int) -> Tuple[Segment, ...]:
        with self.lock:
            return self._published[index]

    def render(self, surface: LineSurface) -> None:
        surface.draw_lines(self.snapshot())

    @property
    def stick_count(self) -> int:
        with self.lock:
            return len(self._published)

    # -----------------------
    # Bounds
    # -----------------------

    def get_bounds(self) -> Bounds:
        return self._bounds

    def set_bounds(self, width: int, height: int) -> None:
        bounds = Bounds(width, height)
        with self.lock:
            self._bounds = bounds
        logger.debug("canvas resized to %dx%d", width, height)

    # -----------------------
    # Pointer input
    # -----------------------

    @property
    def is_dragging(self) -> bool:
        return self.dragging

    def on_pointer_drag(self, point: Point) -> bool:
        """
        Feed a pointer sample to the interactive stick.

        The first sample of a drag only anchors the stick. Returns True if a
        segment was added.
        """
        point = (int(point[0]), int(point[1]))
        if not self.dragging:
            self.dragging = True
            self.interactive.anchor_at(point)
            return False
        added = self.interactive.follow_pointer(point)
        if added:
            self.request_redraw()
        return added

    def on_pointer_release(self) -> Optional[int]:
        """
        Hand the interactive stick off to a new autonomous stick.

        Returns the new stick's index, or None if no drag was in progress or
        the scene is shutting down.
        """
        if not self.dragging:
            return None
        self.dragging = False

        index = None
        with self.lock:
            # teardown requests quit before collecting workers under this lock
            if not self.run_state.quit_requested:
                index = len(self._published)
                stick = self.interactive.clone_for_handoff(index)
                self._published.append(stick.segments_snapshot())
                worker = StickWorker(stick, self.publish, self.get_bounds,
                                     self.run_state, self.tick_interval)
                self._workers.append(worker)
                worker.start()
        if index is not None:
            logger.info("spawned stick %d at %s with %d segments",
                        index, stick.current_point, len(stick.segments))

        self.interactive.reset()
        self.request_redraw()
        return index

    def on_secondary_button_hold(self) -> None:
        if not self.run_state.is_paused:
            self.run_state.pause()
            logger.info("sticks paused")
            self.request_redraw()

    def on_secondary_button_release(self) -> None:
        if self.run_state.is_paused:
            self.run_state.resume()
            logger.info("sticks resumed")
            self.request_redraw()

    @property
    def is_paused(self) -> bool:
        return self.run_state.is_paused

    def set_paused(self, paused: bool) -> None:
        if paused:
            self.on_secondary_button_hold()
        else:
            self.on_secondary_button_release()

    # -----------------------
    # Shutdown
    # -----------------------

    def on_teardown(self, timeout: Optional[float] = None) -> None:
        """
        Stop every stick worker and wait for them to exit.

        Each worker notices the quit request within one tick. Safe to call
        more than once.
        """
        self.run_state.request_quit()
        with self.lock:
            workers = list(self._workers)
        for worker in workers:
            worker.join(timeout)
        alive = [w.name for w in workers if w.is_alive()]
        if alive:
            logger.warning("stick workers still running after teardown: %s", ", ".join(alive))
        logger.info("stopped %d stick workers", len(workers) - len(alive))

    @property
    def workers(self) -> List[StickWorker]:
        with self.lock:
            return list(self._workers)
