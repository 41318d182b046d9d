#!/usr/bin/env python3
"""
Stick Mystify application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame viewport thread (drawing and pointer input)
  and the Dear PyGui control window (running on the main thread).
- Maintains a shared SceneCoordinator that owns the published sticks, the
  interactive stick and every stick worker thread.

Controls (viewport)
- Hold the left button and drag to draw a stick; release to set it loose.
- Hold the right button to pause every autonomous stick; release to resume.

Threading model
- PygameRenderer runs in a background thread and performs input handling and
  drawing. Pointer events are forwarded to the SceneCoordinator; drawing takes
  a snapshot of the scene under its lock.
- Each released stick runs on its own StickWorker thread and publishes its
  trail to the scene every tick.
- The UI class runs in the main thread via Dear PyGui and polls the scene for
  status on a periodic frame callback.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python mystify.py`
   Set MYSTIFY_LOG_LEVEL=DEBUG to log border hits and worker lifecycles.

Closing either window shuts down the application and joins every stick worker.
"""

import logging
import os
import threading

import pygame
import dearpygui.dearpygui as dpg

from sticks.constants import (
    BACKGROUND_COLOR,
    HUD_TEXT_COLOR,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from sticks.data_models import Bounds
from sticks.render import PygameSurface, draw_text
from sticks.scene import SceneCoordinator

logger = logging.getLogger("mystify")

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: forwards pointer input to the scene and redraws it on request.
    """
    def __init__(self, scene: SceneCoordinator):
        super().__init__(daemon=True)
        self.scene = scene
        self.surface = None
        self.clock = None
        self.running = True
        self.redraw_requested = threading.Event()

    def request_redraw(self):
        """Called from any thread; the next frame will repaint."""
        self.redraw_requested.set()

    def run(self):
        pygame.init()
        pygame.display.set_caption("Stick Mystify - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.scene.set_bounds(*self.surface.get_size())
        self.clock = pygame.time.Clock()
        self.request_redraw()

        while self.running:
            self.handle_events()

            if self.redraw_requested.is_set():
                self.redraw_requested.clear()
                self.draw()

            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self.running = False

        elif event.type == pygame.VIDEORESIZE:
            self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
            self.scene.set_bounds(event.w, event.h)
            self.request_redraw()

        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 3:  # right: pause
                self.scene.on_secondary_button_hold()

        elif event.type == pygame.MOUSEMOTION:
            # a stick only starts once the pointer moves with the left button held
            if event.buttons[0]:
                self.scene.on_pointer_drag(event.pos)
            elif self.scene.is_dragging:
                # left button was released outside the window
                self.scene.on_pointer_release()

        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == 1:
                self.scene.on_pointer_release()
            elif event.button == 3:
                self.scene.on_secondary_button_release()

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        self.scene.render(PygameSurface(surf))

        # HUD text
        draw_text(surf, "Left-drag: draw a stick | Right-hold: pause", 10, 10, HUD_TEXT_COLOR)
        state = "Paused" if self.scene.is_paused else "Running"
        draw_text(surf, f"Sticks: {self.scene.stick_count}  [{state}]", 10, 30, HUD_TEXT_COLOR)

        pygame.display.flip()

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui control window: stick count, pause/resume and quit.
    """
    def __init__(self, scene: SceneCoordinator, renderer: PygameRenderer):
        self.scene = scene
        self.renderer = renderer

        self.count_text_id = None
        self.state_text_id = None
        self.status_msg_id = None

        self._last_count = 0

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        current = dpg.get_frame_count()
        dpg.set_frame_callback(current + 6, self._sync_ui_with_scene)

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Stick Mystify - Controls', width=360, height=200)

        with dpg.window(label="Controls", width=340, height=180, pos=(10, 10), tag="main_window"):
            self.count_text_id = dpg.add_text("Sticks: 0")
            self.state_text_id = dpg.add_text("Running")
            dpg.add_separator()
            with dpg.group(horizontal=True):
                dpg.add_button(label="Pause/Resume", callback=self._toggle_pause)
                dpg.add_button(label="Quit", callback=self._quit)
            dpg.add_separator()
            self.status_msg_id = dpg.add_text("Left-drag in the viewport to draw a stick.")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _toggle_pause(self):
        paused = not self.scene.is_paused
        self.scene.set_paused(paused)
        self._set_status("Sticks paused." if paused else "Sticks resumed.")

    def _quit(self):
        self.renderer.running = False
        dpg.stop_dearpygui()

    def _sync_ui_with_scene(self):
        """Periodic UI update mirroring the scene's stick count and pause state."""
        if not self.renderer.is_alive():
            # viewport window was closed
            dpg.stop_dearpygui()
            return

        count = self.scene.stick_count
        dpg.set_value(self.count_text_id, f"Sticks: {count}")
        dpg.set_value(self.state_text_id, "Paused" if self.scene.is_paused else "Running")
        if count != self._last_count:
            self._set_status(f"Stick {count - 1} set loose.")
            self._last_count = count

        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def configure_logging():
    level_name = os.environ.get("MYSTIFY_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
    )


def main():
    configure_logging()

    renderer = None
    scene = SceneCoordinator(Bounds(VIEW_WIDTH, VIEW_HEIGHT),
                             request_redraw=lambda: renderer.request_redraw())
    renderer = PygameRenderer(scene)

    # Start Pygame renderer thread
    renderer.start()

    ui = UI(scene, renderer)
    logger.info("Stick Mystify started")

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        # Stop the viewport, then every stick worker
        renderer.running = False
        renderer.join(timeout=2.0)
        scene.on_teardown()
        dpg.destroy_context()
        logger.info("Stick Mystify stopped")


if __name__ == "__main__":
    main()
