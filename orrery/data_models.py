#!/usr/bin/env python3
"""
Data models for Orrery.

This module defines the body types shared between physics, trails, and rendering.

Units and usage
- BodySpec is one row of a scene's configuration table; it never changes after creation.
- Body.position is in meters [m], Body.velocity in meters per second [m/s], mass in kg.
  Both are tuples of Python floats (IEEE double precision).
- Body.screen_transform and Body.trail live in screen-space units and hold numpy.float32
  values. They are written by the trail recorder and read by the renderer only.
- Access to Body instances is coordinated by SimulationController using a lock.
"""
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Tuple

import numpy as np

from .constants import MAX_TRAIL_SIZE

Vec2 = Tuple[float, float]
ScreenPoint = Tuple[np.float32, np.float32]


@dataclass(frozen=True)
class BodySpec:
    """
    Immutable description of a body at spawn time.

    Fields:
    - name: Identifier for the body
    - mass: Mass in kilograms (positive, finite)
    - position: Initial 2D position (x, y) in meters
    - velocity: Initial 2D velocity (vx, vy) in meters/second
    - size: Rendered diameter in screen-space units
    - color: RGB tuple used for rendering
    """
    name: str
    mass: float
    position: Vec2
    velocity: Vec2
    size: float
    color: Tuple[int, int, int] = (200, 200, 255)

    def __post_init__(self):
        if not (math.isfinite(self.mass) and self.mass > 0):
            raise ValueError(f"{self.name}: mass must be a positive finite number, got {self.mass!r}")
        if not (math.isfinite(self.size) and self.size > 0):
            raise ValueError(f"{self.name}: size must be a positive finite number, got {self.size!r}")
        # Normalise to plain float tuples so physics never sees ints or numpy scalars
        object.__setattr__(self, "mass", float(self.mass))
        object.__setattr__(self, "position", (float(self.position[0]), float(self.position[1])))
        object.__setattr__(self, "velocity", (float(self.velocity[0]), float(self.velocity[1])))
        object.__setattr__(self, "size", float(self.size))
        object.__setattr__(self, "color", tuple(int(c) for c in self.color[:3]))


@dataclass
class ScreenTransform:
    """Render-facing position and uniform scale in screen-space units (single precision)."""
    x: np.float32 = np.float32(0.0)
    y: np.float32 = np.float32(0.0)
    scale: np.float32 = np.float32(1.0)


def _new_trail(maxlen: int = MAX_TRAIL_SIZE) -> Deque[ScreenPoint]:
    return deque(maxlen=maxlen)


@dataclass(eq=False)
class Body:
    """
    Represents a celestial body in the simulation.

    Physics state (position, velocity) is double precision and is only written by
    the integrator. The spec and therefore mass, size and color are read-only.
    """
    spec: BodySpec
    position: Vec2 = None
    velocity: Vec2 = None
    screen_transform: ScreenTransform = field(default_factory=ScreenTransform)
    trail: Deque[ScreenPoint] = field(default_factory=_new_trail)

    def __post_init__(self):
        if self.position is None:
            self.position = self.spec.position
        if self.velocity is None:
            self.velocity = self.spec.velocity
        self.screen_transform.scale = np.float32(self.spec.size)

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def mass(self) -> float:
        return self.spec.mass

    @property
    def size(self) -> float:
        return self.spec.size

    @property
    def color(self) -> Tuple[int, int, int]:
        return self.spec.color

    def add_trail_point(self, point: ScreenPoint) -> None:
        """Append a screen-space point to the trail, evicting the oldest when full."""
        self.trail.append(point)
