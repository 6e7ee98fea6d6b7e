#!/usr/bin/env python3
"""
Gravity integrator for Orrery

Responsibilities
- Compute pairwise Newtonian gravitational forces between all bodies.
- Advance body states by one fixed step with explicit (forward) Euler integration.
- Provide conserved-quantity diagnostics (total momentum and energy).

Units and conventions
- World space positions are in meters [m].
- Velocities are in meters per second [m/s].
- Masses are in kilograms [kg].
- Time steps are in seconds [s].
- The gravitational constant G is expressed in SI: m^3 kg^-1 s^-2.

Numerical notes
- Two passes per tick. The force pass only reads a snapshot taken at the start of the
  tick; the write pass then computes every new state from that snapshot and the forces,
  and the registry commits them all at once. Iteration order therefore never matters.
- Euler update order is velocity first, then position with the new velocity.
- Distances below `min_distance` are clamped when computing the force magnitude.
  Exactly coincident bodies have no defined direction and contribute no force.
- Complexity: force computation is O(N^2) per tick (direct summation). This is fine for
  a handful of bodies; large N would need a Barnes-Hut tree or similar.
- Energy: because the position update uses the already updated velocity, total energy
  oscillates around its initial value instead of drifting away, but the error is first
  order in the timestep. One-day steps keep it to a few percent for the planets.
"""

import logging
import math
from typing import List, Sequence, Tuple

from .constants import G, MIN_DISTANCE, TIMESTEP
from .registry import BodyRegistry, BodyState
from .data_models import Vec2

logger = logging.getLogger(__name__)


def pairwise_force(pos_i: Vec2, mass_i: float, pos_j: Vec2, mass_j: float,
                   g: float = G, min_distance: float = MIN_DISTANCE) -> Vec2:
    """
    Gravitational force (Fx, Fy) in newtons acting on body i due to body j.

        F = G * m_i * m_j / d^2, directed from i towards j

    Args:
        pos_i, mass_i: Position (m) and mass (kg) of the body the force acts on.
        pos_j, mass_j: Position (m) and mass (kg) of the attracting body.
        g: Gravitational constant.
        min_distance: Lower bound for d in the magnitude term.

    Returns:
        (0.0, 0.0) when the bodies coincide exactly, otherwise the force vector.
    """
    dx = pos_j[0] - pos_i[0]
    dy = pos_j[1] - pos_i[1]
    if dx == 0.0 and dy == 0.0:
        return (0.0, 0.0)

    distance = math.sqrt(dx * dx + dy * dy)
    if distance < min_distance:
        logger.debug("Clamping separation %.3e m to %.3e m", distance, min_distance)
        distance = min_distance

    force = g * mass_i * mass_j / (distance * distance)
    theta = math.atan2(dy, dx)
    return (math.cos(theta) * force, math.sin(theta) * force)


class GravityIntegrator:
    """
    Fixed-step N-body integrator using explicit Euler.

    The timestep is fixed at construction; the tick driver decides how often
    `step` is called.
    """

    def __init__(self, g: float = G, timestep: float = TIMESTEP, min_distance: float = MIN_DISTANCE):
        if timestep <= 0:
            raise ValueError(f"timestep must be positive, got {timestep}")
        if min_distance < 0:
            raise ValueError(f"min_distance must be >= 0, got {min_distance}")
        self.g = float(g)
        self.timestep = float(timestep)
        self.min_distance = float(min_distance)

    def compute_forces(self, snapshot: Sequence[BodyState]) -> List[Vec2]:
        """
        Sum the force on every body from every other body.

        Args:
            snapshot: (mass, position, velocity) per body, as captured at the start of the tick.

        Returns:
            List of (Fx, Fy) in newtons, same order as the snapshot.
        """
        n = len(snapshot)
        forces: List[Vec2] = []
        for i in range(n):
            mass_i, pos_i, _ = snapshot[i]
            fx_total, fy_total = 0.0, 0.0
            for j in range(n):
                if i == j:
                    continue
                mass_j, pos_j, _ = snapshot[j]
                fx, fy = pairwise_force(pos_i, mass_i, pos_j, mass_j, self.g, self.min_distance)
                fx_total += fx
                fy_total += fy
            forces.append((fx_total, fy_total))
        return forces

    def integrate(self, snapshot: Sequence[BodyState], forces: Sequence[Vec2]) -> List[Tuple[Vec2, Vec2]]:
        """
        Explicit Euler update for every body.

            v' = v + F / m * dt
            x' = x + v' * dt

        Returns:
            List of (new_position, new_velocity), same order as the snapshot.
        """
        dt = self.timestep
        states: List[Tuple[Vec2, Vec2]] = []
        for (mass, position, velocity), (fx, fy) in zip(snapshot, forces):
            vx = velocity[0] + fx / mass * dt
            vy = velocity[1] + fy / mass * dt
            states.append(((position[0] + vx * dt, position[1] + vy * dt), (vx, vy)))
        return states

    def step(self, registry: BodyRegistry) -> None:
        """Advance every body in the registry by one timestep."""
        snapshot = registry.snapshot()
        forces = self.compute_forces(snapshot)
        registry.commit(self.integrate(snapshot, forces))


def total_momentum(registry: BodyRegistry) -> Vec2:
    """Sum of mass * velocity over all bodies, in kg m/s."""
    px = sum(b.mass * b.velocity[0] for b in registry)
    py = sum(b.mass * b.velocity[1] for b in registry)
    return (px, py)


def total_energy(registry: BodyRegistry, g: float = G, min_distance: float = MIN_DISTANCE) -> float:
    """
    Kinetic plus gravitational potential energy in joules.

    Uses the same distance rules as the force computation: separations are clamped to
    `min_distance` and exactly coincident pairs contribute nothing.
    """
    bodies = list(registry)
    kinetic = 0.0
    for b in bodies:
        vx, vy = b.velocity
        kinetic += 0.5 * b.mass * (vx * vx + vy * vy)

    potential = 0.0
    for i in range(len(bodies)):
        for j in range(i + 1, len(bodies)):
            dx = bodies[j].position[0] - bodies[i].position[0]
            dy = bodies[j].position[1] - bodies[i].position[1]
            if dx == 0.0 and dy == 0.0:
                continue
            distance = max(math.hypot(dx, dy), min_distance)
            potential -= g * bodies[i].mass * bodies[j].mass / distance
    return kinetic + potential
