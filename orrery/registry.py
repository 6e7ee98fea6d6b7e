#!/usr/bin/env python3
"""
Body registry: the ordered, authoritative collection of simulated bodies.

Bodies are created once from a configuration table and keep their index for the
lifetime of the registry; nothing is inserted or removed afterwards. The integrator
reads a snapshot of the registry at the start of a tick and commits all new states
in one pass at the end, so no body ever sees a partially advanced neighbour.
"""
import logging
from collections import deque
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .constants import MAX_TRAIL_SIZE
from .data_models import Body, BodySpec, Vec2

logger = logging.getLogger(__name__)

# (mass, position, velocity) as read at the start of a tick
BodyState = Tuple[float, Vec2, Vec2]


class BodyRegistry:
    """Ordered collection of Body objects with stable indices."""

    def __init__(self, bodies: Iterable[Body]):
        self._bodies: List[Body] = list(bodies)

    @classmethod
    def from_specs(cls, specs: Iterable[BodySpec], trail_size: int = MAX_TRAIL_SIZE) -> "BodyRegistry":
        """Spawn one Body (and its trail) per configuration row."""
        if trail_size < 1:
            raise ValueError(f"trail_size must be >= 1, got {trail_size}")
        bodies = [Body(spec=s, trail=deque(maxlen=trail_size)) for s in specs]
        logger.debug("Spawned %d bodies: %s", len(bodies), ", ".join(b.name for b in bodies))
        return cls(bodies)

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[Body]:
        return iter(self._bodies)

    def __getitem__(self, index: int) -> Body:
        return self._bodies[index]

    def names(self) -> List[str]:
        return [b.name for b in self._bodies]

    def find(self, name: str) -> Optional[Body]:
        for b in self._bodies:
            if b.name == name:
                return b
        return None

    def snapshot(self) -> Tuple[BodyState, ...]:
        """Capture (mass, position, velocity) of every body, in index order."""
        return tuple((b.mass, b.position, b.velocity) for b in self._bodies)

    def commit(self, states: Sequence[Tuple[Vec2, Vec2]]) -> None:
        """Write back (position, velocity) for every body, in index order."""
        if len(states) != len(self._bodies):
            raise ValueError(f"expected {len(self._bodies)} states, got {len(states)}")
        for body, (position, velocity) in zip(self._bodies, states):
            body.position = position
            body.velocity = velocity

    def reset(self) -> None:
        """Restore every body to its spawn state and clear its trail."""
        for b in self._bodies:
            b.position = b.spec.position
            b.velocity = b.spec.velocity
            b.trail.clear()
