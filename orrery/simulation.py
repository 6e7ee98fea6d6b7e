#!/usr/bin/env python3
"""
Simulation controller: the shared state between the renderer thread and the control panel.

It owns the body registry, the gravity integrator, the trail recorder and the camera, and
drives the physics at a fixed tick rate that is independent of the display frame rate.
All public methods take the re-entrant lock, so the pygame thread and the Dear PyGui
thread can both call them.

Per tick, the phases run strictly in sequence:
1) integrator reads a snapshot and commits new positions/velocities
2) trail recorder reads the new positions and appends to every trail
Camera input is independent of both and can be applied at any point between ticks.
"""
import logging
import threading
from typing import Iterable, Optional

from .camera import CameraController, CameraView, InputEvent
from .constants import MAX_TICKS_PER_FRAME, MAX_TRAIL_SIZE, SCALE, TICK_RATE_HZ, TIMESTEP
from .data_models import Body, BodySpec
from .physics import GravityIntegrator, total_energy, total_momentum
from .registry import BodyRegistry
from .trails import TrailRecorder

logger = logging.getLogger(__name__)


class SimulationController:
    """
    Owns the simulation context. Includes thread-safe operations guarded by a lock.
    """

    def __init__(self, specs: Iterable[BodySpec], tick_rate: float = TICK_RATE_HZ,
                 trail_length: int = MAX_TRAIL_SIZE, timestep: float = TIMESTEP,
                 scale: float = SCALE, max_ticks_per_frame: int = MAX_TICKS_PER_FRAME):
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {tick_rate}")
        if max_ticks_per_frame < 1:
            raise ValueError(f"max_ticks_per_frame must be >= 1, got {max_ticks_per_frame}")
        self.lock = threading.RLock()
        self.registry = BodyRegistry.from_specs(specs, trail_size=trail_length)
        self.integrator = GravityIntegrator(timestep=timestep)
        self.trails = TrailRecorder(scale=scale)
        self.view = CameraView()
        self.camera = CameraController(self.view)

        self.running = True  # app running
        self.playing = True  # simulation running
        self.show_trails = True
        self.tick_rate = float(tick_rate)
        self.trail_length = int(trail_length)
        self.max_ticks_per_frame = int(max_ticks_per_frame)
        self.ticks = 0

        # Internal accumulator of real seconds not yet consumed by ticks
        self._accumulator = 0.0

        self.trails.sync_transforms(self.registry)
        logger.info("Simulation ready: %d bodies, %.0f s per tick, %.1f ticks/s",
                    len(self.registry), self.integrator.timestep, self.tick_rate)

    @property
    def sim_time(self) -> float:
        """Simulated seconds elapsed since spawn or the last reset."""
        return self.ticks * self.integrator.timestep

    def tick(self) -> None:
        """Advance the physics by exactly one timestep and record trails."""
        with self.lock:
            self.integrator.step(self.registry)
            self.trails.record(self.registry)
            self.ticks += 1

    def advance(self, dt_real_seconds: float) -> int:
        """
        Run as many fixed ticks as the elapsed real time allows.

        Returns the number of ticks run. Time beyond `max_ticks_per_frame` ticks is dropped
        so a stalled frame does not cause a burst of catch-up work.
        """
        with self.lock:
            if not self.playing or dt_real_seconds <= 0:
                return 0
            period = 1.0 / self.tick_rate
            self._accumulator += dt_real_seconds
            due = int(self._accumulator / period)
            steps = min(due, self.max_ticks_per_frame)
            for _ in range(steps):
                self.tick()
            if due > steps:
                logger.debug("Dropping %d ticks of backlog", due - steps)
                self._accumulator = 0.0
            else:
                self._accumulator -= steps * period
            return steps

    def step_once(self) -> None:
        with self.lock:
            self.tick()

    def apply_input(self, events: Iterable[InputEvent]) -> None:
        with self.lock:
            self.camera.process(events)

    def set_playing(self, playing: bool) -> None:
        with self.lock:
            self.playing = bool(playing)
            self._accumulator = 0.0

    def toggle_playing(self) -> bool:
        with self.lock:
            self.set_playing(not self.playing)
            return self.playing

    def set_tick_rate(self, rate: float) -> None:
        if rate <= 0:
            raise ValueError(f"tick rate must be positive, got {rate}")
        with self.lock:
            self.tick_rate = float(rate)
            self._accumulator = 0.0

    def set_show_trails(self, show: bool) -> None:
        with self.lock:
            self.show_trails = bool(show)

    def set_trail_length(self, n: int) -> None:
        with self.lock:
            self.trails.resize(self.registry, int(n))
            self.trail_length = int(n)

    def clear_trails(self) -> None:
        with self.lock:
            self.trails.clear(self.registry)

    def reset(self) -> None:
        """Return every body to its spawn state."""
        with self.lock:
            self.registry.reset()
            self.trails.sync_transforms(self.registry)
            self.ticks = 0
            self._accumulator = 0.0
        logger.info("Simulation reset")

    def replace_specs(self, specs: Iterable[BodySpec]) -> None:
        """Swap in a new scene; the camera view is kept."""
        with self.lock:
            self.registry = BodyRegistry.from_specs(specs, trail_size=self.trail_length)
            self.trails.sync_transforms(self.registry)
            self.ticks = 0
            self._accumulator = 0.0
        logger.info("Loaded scene with %d bodies", len(self.registry))

    def momentum(self):
        with self.lock:
            return total_momentum(self.registry)

    def energy(self) -> float:
        with self.lock:
            return total_energy(self.registry, self.integrator.g, self.integrator.min_distance)

    def primary_body(self) -> Optional[Body]:
        """The heaviest body, used as the reference point for readouts."""
        with self.lock:
            if not len(self.registry):
                return None
            return max(self.registry, key=lambda b: b.mass)
