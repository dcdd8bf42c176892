"""
Scheduled events for the collision system.

Each event snapshots the collision counters of the particles it involves.
A particle that bounces after the snapshot was taken makes the event stale,
and the engine drops it when it reaches the front of the queue.
"""

from dataclasses import dataclass, field
from typing import Tuple

from hardspheres.particle import Particle


@dataclass(frozen=True, eq=False)
class Event:
    """Base event: a time and the participants' counter snapshot."""
    time: float
    counts: Tuple[int, ...] = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'counts', tuple(p.count for p in self.participants()))

    def participants(self) -> Tuple[Particle, ...]:
        return ()

    def is_valid(self) -> bool:
        """True iff no participant has bounced since this event was created."""
        return all(p.count == c for p, c in zip(self.participants(), self.counts))

    def __lt__(self, other: 'Event') -> bool:
        return self.time < other.time


@dataclass(frozen=True, eq=False)
class ParticleCollision(Event):
    a: Particle
    b: Particle

    def participants(self) -> Tuple[Particle, ...]:
        return (self.a, self.b)


@dataclass(frozen=True, eq=False)
class VerticalWallCollision(Event):
    """`a` reaches the left or right wall."""
    a: Particle

    def participants(self) -> Tuple[Particle, ...]:
        return (self.a,)


@dataclass(frozen=True, eq=False)
class HorizontalWallCollision(Event):
    """`b` reaches the top or bottom wall."""
    b: Particle

    def participants(self) -> Tuple[Particle, ...]:
        return (self.b,)


@dataclass(frozen=True, eq=False)
class Redraw(Event):
    """Periodic tick with no participants; always valid."""
