#!/usr/bin/env python3
"""
Built-in scene: the Sun and the eight planets.

Bodies start on the x-axis at their mean orbital distance with a purely tangential
velocity along y. Sizes are drawn relative to a fixed sun diameter, so the planets are
to scale with each other but not with their orbits.
"""
from typing import List

from .constants import AU, SUN_DIAMETER
from .data_models import BodySpec

SUN_RADIUS_KM = 69634.0


def _size(radius_km: float) -> float:
    return radius_km / SUN_RADIUS_KM * SUN_DIAMETER


SOLAR_SYSTEM: List[BodySpec] = [
    BodySpec("Sun", 1.98892e30, (0.0, 0.0), (0.0, 0.0), SUN_DIAMETER, (255, 255, 0)),
    BodySpec("Mercury", 3.3e23, (0.387 * AU, 0.0), (0.0, 47.4 * 1000.0), _size(2440.0), (255, 0, 0)),
    BodySpec("Venus", 4.87e24, (0.72 * AU, 0.0), (0.0, 35.0 * 1000.0), _size(6052.0), (245, 245, 220)),
    BodySpec("Earth", 5.9742e24, (-1.0 * AU, 0.0), (0.0, 29.783 * 1000.0), _size(6371.0), (0, 0, 255)),
    BodySpec("Mars", 6.39e23, (-1.524 * AU, 0.0), (0.0, 24.077 * 1000.0), _size(3390.0), (255, 69, 0)),
    BodySpec("Jupiter", 1898e24, (5.2 * AU, 0.0), (0.0, 13.1 * 1000.0), _size(69911.0), (0, 255, 0)),
    BodySpec("Saturn", 568e24, (9.54 * AU, 0.0), (0.0, 9.7 * 1000.0), _size(58232.0), (245, 245, 220)),
    BodySpec("Uranus", 86.8e24, (19.2 * AU, 0.0), (0.0, 6.8 * 1000.0), _size(25362.0), (0, 255, 255)),
    BodySpec("Neptune", 102e24, (30.06 * AU, 0.0), (0.0, 4.7 * 1000.0), _size(24622.0), (255, 255, 255)),
]
