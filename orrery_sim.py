#!/usr/bin/env python3
"""
Orrery application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui control
  panel (running on the main thread). With --no-panel only the viewport runs.
- Shares one SimulationController between them; every access goes through its lock.
- Translates pygame mouse events into camera input events and draws bodies, trails and
  the frame-rate overlay.

Threading model
- PygameRenderer runs in a background thread and performs: input handling, fixed-rate
  physics ticks, and drawing.
- The UI class runs in the main thread via Dear PyGui and refreshes its readouts on a
  periodic frame callback.

Controls (viewport)
- Right-drag: pan | Wheel: zoom | Space: pause/play | R: reset | T: trails | Esc: quit

Running
1) Install dependencies: `pip install -e .`
2) Run: `orrery` or `python orrery_sim.py [--template inner_planets.json]`
"""

import argparse
import logging
import math
import sys
import threading
from typing import List, Optional

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from orrery.camera import ButtonEvent, InputEvent, PointerButton, PointerMotion, ScrollEvent, ScrollUnit
from orrery.constants import (
    AU,
    BACKGROUND_COLOR,
    FPS_BOX_COLOR,
    FPS_FONT_SIZE,
    FPS_NEUTRAL_COLOR,
    HUD_TEXT_COLOR,
    MAX_BODY_PIXELS,
    MAX_TRAIL_SIZE,
    MIN_BODY_PIXELS,
    SAFE_COORD_LIMIT,
    TARGET_FPS,
    TICK_RATE_HZ,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from orrery.diagnostics import FpsMeter, fps_readout
from orrery.presets import SOLAR_SYSTEM
from orrery.presets_loader import PresetError, list_templates, load_template
from orrery.simulation import SimulationController

logger = logging.getLogger("orrery")

BUILTIN_SCENE = "Solar System"

_BUTTONS = {1: PointerButton.LEFT, 2: PointerButton.MIDDLE, 3: PointerButton.RIGHT}


def from_pygame(event) -> Optional[InputEvent]:
    """Translate a pygame mouse event into a camera input event (or None)."""
    if event.type == pygame.MOUSEMOTION:
        return PointerMotion(float(event.rel[0]), float(event.rel[1]))
    if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
        button = _BUTTONS.get(event.button)
        if button is None:  # legacy wheel buttons 4/5
            return None
        return ButtonEvent(button, event.type == pygame.MOUSEBUTTONDOWN)
    if event.type == pygame.MOUSEWHEEL:
        # Touchpads and other precise devices report through `touch`; notch wheels do not
        unit = ScrollUnit.PIXEL if getattr(event, "touch", False) else ScrollUnit.LINE
        return ScrollEvent(float(event.y), unit)
    return None


# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: ticks the simulation, draws bodies, trails and the FPS overlay.
    Handles camera panning and zoom.
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True, name="orrery-viewport")
        self.sim = sim
        self.surface = None
        self.clock = None
        self.font = None
        self.fps = FpsMeter()
        self.running = True
        self.error: Optional[BaseException] = None

    def run(self):
        pygame.init()
        pygame.display.set_caption("Orrery - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.sim.view.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", FPS_FONT_SIZE)
        logger.info("Viewport open (%dx%d)", VIEW_WIDTH, VIEW_HEIGHT)

        try:
            while self.running and self.sim.running:
                real_dt = self.clock.tick(TARGET_FPS) / 1000.0
                self.fps.tick(real_dt)

                self.handle_events()
                self.sim.advance(real_dt)
                self.draw()
        except Exception as exc:
            logger.exception("Viewport loop failed")
            self.error = exc
            self.sim.running = False
            raise
        finally:
            pygame.quit()

    def stop(self):
        self.running = False

    def handle_events(self):
        batch: List[InputEvent] = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.sim.view.set_viewport_size(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.sim.running = False
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.sim.toggle_playing()
                elif event.key == pygame.K_r:
                    self.sim.reset()
                elif event.key == pygame.K_t:
                    self.sim.set_show_trails(not self.sim.show_trails)

            else:
                translated = from_pygame(event)
                if translated is not None:
                    batch.append(translated)

        self.sim.apply_input(batch)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        view = self.sim.view

        # Copy what we need under the lock; drawing happens outside it
        with self.sim.lock:
            show_trails = self.sim.show_trails
            snapshot = [
                (b.color, b.size, (b.screen_transform.x, b.screen_transform.y), list(b.trail) if show_trails else [])
                for b in self.sim.registry
            ]
            playing = self.sim.playing
            days = self.sim.sim_time / 86400.0

        px_per_unit = view.pixel_scale()

        if show_trails:
            for color, _, _, trail in snapshot:
                pts = [p for p in (_safe_point(view.world_to_screen(t)) for t in trail) if p]
                if len(pts) > 1:
                    pygame.draw.aalines(surf, color, False, pts)

        for color, size, position, _ in snapshot:
            center = _safe_point(view.world_to_screen(position))
            if center is None:
                continue
            radius = int(size * 0.5 * px_per_unit)
            radius = max(MIN_BODY_PIXELS, min(MAX_BODY_PIXELS, radius))
            gfxdraw.filled_circle(surf, center[0], center[1], radius, color)
            gfxdraw.aacircle(surf, center[0], center[1], radius, color)

        self.draw_fps_overlay(surf)
        w, h = view.viewport_size
        status = f"Day {days:,.0f}  [{'Playing' if playing else 'Paused'}]  zoom {view.zoom:.3g}"
        draw_text(surf, self.font, status, 10, h - 24, HUD_TEXT_COLOR)

        pygame.display.flip()

    def draw_fps_overlay(self, surf):
        w, h = surf.get_size()
        value_text, value_color = fps_readout(self.fps.smoothed())
        label = self.font.render("FPS: ", True, FPS_NEUTRAL_COLOR)
        value = self.font.render(value_text, True, value_color)
        pad = 4
        box = pygame.Surface((label.get_width() + value.get_width() + 2 * pad,
                              max(label.get_height(), value.get_height()) + 2 * pad), pygame.SRCALPHA)
        box.fill(FPS_BOX_COLOR)
        x, y = int(w * 0.01), int(h * 0.01)
        surf.blit(box, (x, y))
        surf.blit(label, (x + pad, y + pad))
        surf.blit(value, (x + pad + label.get_width(), y + pad))


def draw_text(surface, font, text, x, y, color):
    img = font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    x, y = float(pt[0]), float(pt[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    x, y = int(x), int(y)
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui control panel: simulation controls, scene selection and live readouts.
    """
    def __init__(self, sim: SimulationController, renderer: PygameRenderer):
        self.sim = sim
        self.renderer = renderer
        self._template_map = {}

        self.status_msg_id = None
        self.play_button_id = None
        self.time_text_id = None
        self.momentum_text_id = None
        self.energy_text_id = None
        self.camera_text_id = None
        self.body_table_id = None

        self._build_ui()

        # Periodic UI sync using frame callbacks
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback (~10Hz at 60 FPS)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Orrery - Controls', width=460, height=640)

        with dpg.window(label="Controls", width=440, height=620, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Scene:")
                self._template_map = {BUILTIN_SCENE: None}
                for fn, display in list_templates():
                    self._template_map[display] = fn
                dpg.add_combo(list(self._template_map.keys()), default_value=BUILTIN_SCENE,
                              width=220, tag="scene_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_scene(dpg.get_value("scene_combo")))

            dpg.add_separator()

            with dpg.group(horizontal=True):
                self.play_button_id = dpg.add_button(label="Pause", callback=self._toggle_play)
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_button(label="Reset", callback=self._reset)

            dpg.add_input_float(label="Ticks per second", default_value=self.sim.tick_rate,
                                min_value=0.1, min_clamped=True, step=5.0, width=160,
                                callback=self._on_tick_rate)

            dpg.add_separator()
            with dpg.group(horizontal=True):
                dpg.add_checkbox(label="Show trails", default_value=self.sim.show_trails,
                                 callback=self._toggle_trails, tag="trails_checkbox")
                dpg.add_button(label="Clear trails", callback=self._clear_trails)
            dpg.add_input_int(label="Trail length", default_value=self.sim.trail_length,
                              min_value=1, min_clamped=True, step=100, width=160,
                              callback=self._on_trail_length)

            dpg.add_separator()
            self.time_text_id = dpg.add_text("")
            self.momentum_text_id = dpg.add_text("")
            self.energy_text_id = dpg.add_text("")
            self.camera_text_id = dpg.add_text("")

            with dpg.table(header_row=True, borders_innerH=True, borders_outerH=True) as self.body_table_id:
                dpg.add_table_column(label="Body")
                dpg.add_table_column(label="Distance (AU)")
                dpg.add_table_column(label="Speed (km/s)")

            dpg.add_separator()
            self.status_msg_id = dpg.add_text("", color=(180, 220, 180))

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        self._set_status(msg, color=(255, 120, 120))

    # -----------------------
    # Callbacks
    # -----------------------

    def load_scene(self, name: str):
        file_name = self._template_map.get(name)
        if file_name is None:
            self.sim.replace_specs(SOLAR_SYSTEM)
        else:
            try:
                specs, _ = load_template(file_name)
            except PresetError as exc:
                logger.warning("%s", exc)
                self._set_error(str(exc))
                return
            self.sim.replace_specs(specs)
        self._set_status(f"Loaded scene: {name}")

    def _toggle_play(self):
        playing = self.sim.toggle_playing()
        self._set_status(f"Simulation {'Playing' if playing else 'Paused'}.")

    def _step_once(self):
        self.sim.step_once()
        self._set_status("Stepped one tick.")

    def _reset(self):
        self.sim.reset()
        self._set_status("Reset to initial state.")

    def _on_tick_rate(self, sender, app_data, user_data=None):
        try:
            self.sim.set_tick_rate(float(app_data))
        except ValueError as exc:
            self._set_error(str(exc))

    def _toggle_trails(self, sender, value, user_data=None):
        self.sim.set_show_trails(value)
        self._set_status(f"Trails {'ON' if value else 'OFF'}.")

    def _clear_trails(self):
        self.sim.clear_trails()
        self._set_status("Trails cleared.")

    def _on_trail_length(self, sender, app_data, user_data=None):
        try:
            self.sim.set_trail_length(int(app_data))
        except ValueError as exc:
            self._set_error(str(exc))
            return
        self._set_status(f"Trail length set to {int(app_data)}.")

    def _sync_ui_with_sim(self):
        """Periodic refresh of the readouts."""
        with self.sim.lock:
            playing = self.sim.playing
            days = self.sim.sim_time / 86400.0
            ticks = self.sim.ticks
            px, py = self.sim.momentum()
            energy = self.sim.energy()
            zoom = self.sim.view.zoom
            pan = tuple(self.sim.view.pan)
            primary = self.sim.primary_body()
            rows = []
            for b in self.sim.registry:
                distance = math.hypot(b.position[0] - primary.position[0],
                                      b.position[1] - primary.position[1]) / AU if primary else 0.0
                rows.append((b.name, distance, math.hypot(*b.velocity) / 1000.0))

        dpg.configure_item(self.play_button_id, label="Pause" if playing else "Play")
        dpg.set_value(self.time_text_id, f"Simulated: {days:,.0f} days ({ticks} ticks)")
        dpg.set_value(self.momentum_text_id, f"Momentum: ({px:.3e}, {py:.3e}) kg m/s")
        dpg.set_value(self.energy_text_id, f"Energy: {energy:.6e} J")
        dpg.set_value(self.camera_text_id, f"Camera: pan ({pan[0]:.0f}, {pan[1]:.0f})  zoom {zoom:.3g}")

        dpg.delete_item(self.body_table_id, children_only=True, slot=1)
        for name, distance, speed in rows:
            with dpg.table_row(parent=self.body_table_id):
                dpg.add_text(name)
                dpg.add_text(f"{distance:.3f}")
                dpg.add_text(f"{speed:.2f}")

        if not self.sim.running:
            dpg.stop_dearpygui()
            return
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="N-body solar system simulator")
    parser.add_argument("--template", type=str, help="Load a JSON scene template instead of the solar system")
    parser.add_argument("--tick-rate", type=float, default=TICK_RATE_HZ, help="Physics ticks per real second")
    parser.add_argument("--trail-length", type=int, default=MAX_TRAIL_SIZE, help="Points kept per body trail")
    parser.add_argument("--no-panel", action="store_true", help="Run the viewport without the control panel")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING or ERROR")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="[%(name)s] %(levelname)s: %(message)s")

    specs = SOLAR_SYSTEM
    if args.template:
        try:
            specs, _ = load_template(args.template)
        except PresetError as exc:
            logger.error("%s", exc)
            return 2

    try:
        sim = SimulationController(specs, tick_rate=args.tick_rate, trail_length=args.trail_length)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    renderer = PygameRenderer(sim)

    if args.no_panel:
        renderer.run()
        return 0

    # Start Pygame renderer thread
    renderer.start()

    ui = UI(sim, renderer)

    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        # Stop simulation and renderer
        sim.running = False
        renderer.stop()
        renderer.join(timeout=2.0)
        dpg.destroy_context()

    return 1 if renderer.error else 0


if __name__ == "__main__":
    sys.exit(main())
