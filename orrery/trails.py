#!/usr/bin/env python3
"""
Trail recording for Orrery.

After every integration step each body's new position is converted to single precision
screen-space units and appended to that body's trail. Trails are bounded deques, so an
append on a full trail evicts the oldest point in O(1).
"""
import logging
from collections import deque

import numpy as np

from .constants import SCALE
from .data_models import ScreenPoint, Vec2
from .registry import BodyRegistry

logger = logging.getLogger(__name__)


def to_screen(position: Vec2, scale: float = SCALE) -> ScreenPoint:
    """Convert a world position in meters to float32 screen-space units."""
    return (np.float32(position[0] * scale), np.float32(position[1] * scale))


class TrailRecorder:
    """Refreshes screen transforms and appends trail points once per tick."""

    def __init__(self, scale: float = SCALE):
        self.scale = scale

    def record(self, registry: BodyRegistry) -> None:
        for b in registry:
            point = to_screen(b.position, self.scale)
            b.screen_transform.x, b.screen_transform.y = point
            b.add_trail_point(point)

    def sync_transforms(self, registry: BodyRegistry) -> None:
        """Refresh screen transforms without touching trails (used at spawn and reset)."""
        for b in registry:
            b.screen_transform.x, b.screen_transform.y = to_screen(b.position, self.scale)

    def clear(self, registry: BodyRegistry) -> None:
        for b in registry:
            b.trail.clear()

    def resize(self, registry: BodyRegistry, size: int) -> None:
        """Change the trail bound for every body, keeping the newest points."""
        if size < 1:
            raise ValueError(f"trail size must be >= 1, got {size}")
        for b in registry:
            b.trail = deque(b.trail, maxlen=size)
        logger.debug("Trail length set to %d", size)
