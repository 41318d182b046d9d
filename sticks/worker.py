#!/usr/bin/env python3
"""
Per-stick update loop.

Each autonomous stick gets its own StickWorker thread. The worker computes the
stick's next segment as soon as the previous one was published, then waits for
its tick before publishing the trail to the scene:

    COMPUTING -> READY -> PUBLISHED -> COMPUTING ...

While the shared RunState is paused the worker neither computes nor
publishes: it blocks before COMPUTING, and a tick already in progress is
suspended. Both waits return early once quit is requested, at which point the
loop exits without publishing again.
"""
import enum
import logging
import threading
from typing import Callable, Sequence

from .constants import TICK_INTERVAL_S
from .data_models import Bounds, Segment
from .motion import Stick
from .run_state import RunState

logger = logging.getLogger(__name__)

Publisher = Callable[[int, Sequence[Segment]], None]
BoundsSource = Callable[[], Bounds]


class WorkerState(enum.Enum):
    IDLE = "idle"
    COMPUTING = "computing"
    READY = "ready"
    PAUSED = "paused"
    PUBLISHED = "published"
    STOPPED = "stopped"


class StickWorker(threading.Thread):
    """
    Drives one autonomous stick until the run state asks to quit.

    The worker is the only writer of its stick; the scene only ever sees the
    immutable trail snapshots handed to `publish`.
    """

    def __init__(self, stick: Stick, publish: Publisher, bounds_source: BoundsSource,
                 run_state: RunState, tick_interval: float = TICK_INTERVAL_S):
        super().__init__(name=f"stick-{stick.index}", daemon=True)
        self.stick = stick
        self.publish = publish
        self.bounds_source = bounds_source
        self.run_state = run_state
        self.tick_interval = tick_interval
        self.state = WorkerState.IDLE
        self.publish_count = 0

    def run(self):
        logger.debug("stick %d worker started", self.stick.index)
        try:
            while not self.run_state.quit_requested:
                if self.run_state.is_paused:
                    self.state = WorkerState.PAUSED
                if not self.run_state.wait_while_paused():
                    break

                if not self.stick.line_prepared:
                    self.state = WorkerState.COMPUTING
                    self.stick.advance_one_step(self.bounds_source())
                    self.stick.line_prepared = True
                    self.state = WorkerState.READY

                if not self.run_state.wait_tick(self.tick_interval):
                    break

                self.publish(self.stick.index, self.stick.segments_snapshot())
                self.stick.line_prepared = False
                self.publish_count += 1
                self.state = WorkerState.PUBLISHED
        except Exception:
            logger.exception("stick %d worker failed", self.stick.index)
            raise
        finally:
            self.state = WorkerState.STOPPED
        logger.debug("stick %d worker stopped after %d publishes",
                     self.stick.index, self.publish_count)
