#!/usr/bin/env python3
"""
Pause/quit state shared by every stick worker.

One RunState is created by the scene and handed to each worker, so the
workers never reach for module-level flags. Pausing blocks the
workers on a condition variable, both before a step and during the tick
wait, rather than letting them spin; quitting wakes every waiter immediately.
"""
import threading
import time


class RunState:
    """Pause and quit flags guarded by a single condition variable."""

    def __init__(self):
        self._cond = threading.Condition()
        self._paused = False
        self._quit = False

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def quit_requested(self) -> bool:
        return self._quit

    def pause(self) -> None:
        with self._cond:
            self._paused = True
            self._cond.notify_all()

    def resume(self) -> None:
        with self._cond:
            self._paused = False
            self._cond.notify_all()

    def request_quit(self) -> None:
        """Set-once: there is no way back from a quit request."""
        with self._cond:
            self._quit = True
            self._cond.notify_all()

    def wait_while_paused(self) -> bool:
        """
        Block until the state is not paused.

        Returns False as soon as quit is requested, True once running.
        """
        with self._cond:
            while self._paused and not self._quit:
                self._cond.wait()
            return not self._quit

    def wait_tick(self, interval: float) -> bool:
        """
        Block for one tick of `interval` seconds.

        While paused the tick is suspended; after resume a full interval
        starts over. Returns False as soon as quit is requested, True when
        the tick elapsed.
        """
        deadline = None
        with self._cond:
            while not self._quit:
                if self._paused:
                    deadline = None
                    self._cond.wait()
                    continue
                now = time.monotonic()
                if deadline is None:
                    deadline = now + interval
                remaining = deadline - now
                if remaining <= 0:
                    return True
                self._cond.wait(remaining)
            return False
