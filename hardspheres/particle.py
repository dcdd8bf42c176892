"""
Hard-sphere particle: kinematic state plus exact collision physics.

- Constant velocity between collisions
- Closed-form time-to-contact with another particle or the box walls
- Elastic, frictionless response along the line of centres
- `count` is bumped on every bounce; events use it to detect stale predictions
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Tuple

import hardspheres as P

INFINITY = float('inf')


@dataclass(eq=False)
class Particle:
    """One rigid disc. Color is carried for the renderer only."""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = P.RADIUS
    mass: float = P.MASS
    color: Tuple[int, int, int] = P.PARTICLE_COLOR
    particle_id: int = 0
    count: int = 0

    def __post_init__(self):
        if not self.radius > 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        if not self.mass > 0:
            raise ValueError(f"mass must be positive, got {self.mass}")

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y])

    @property
    def velocity(self) -> np.ndarray:
        return np.array([self.vx, self.vy])

    @velocity.setter
    def velocity(self, v: np.ndarray):
        self.vx, self.vy = float(v[0]), float(v[1])

    @property
    def speed(self) -> float:
        return np.sqrt(self.vx**2 + self.vy**2)

    @property
    def state(self) -> np.ndarray:
        return np.array([self.x, self.y, self.vx, self.vy])

    @property
    def full_state(self) -> np.ndarray:
        return np.array([self.x, self.y, self.vx, self.vy, self.radius, self.mass])

    @property
    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * (self.vx**2 + self.vy**2)

    @property
    def momentum(self) -> np.ndarray:
        return self.mass * self.velocity

    def distance_to(self, other: 'Particle') -> float:
        return np.sqrt((other.x - self.x)**2 + (other.y - self.y)**2)

    # Prediction

    def time_to_hit(self, other: 'Particle') -> float:
        """
        Time until the two discs touch, or inf if they never do.

        Smallest positive root of |dp + t·dv| = sigma. Separating motion,
        zero relative velocity, discs that already overlap and a non-positive
        discriminant (grazing) all count as no collision.
        """
        if other is self:
            return INFINITY
        dx = other.x - self.x
        dy = other.y - self.y
        dvx = other.vx - self.vx
        dvy = other.vy - self.vy
        a = dvx * dvx + dvy * dvy
        b = 2.0 * (dx * dvx + dy * dvy)
        if a == 0 or b >= 0:
            return INFINITY
        sigma = self.radius + other.radius
        c = dx * dx + dy * dy - sigma * sigma
        if c < 0:
            return INFINITY
        disc = b * b - 4.0 * a * c
        if disc <= 0:
            return INFINITY
        return float(-(b + math.sqrt(disc)) / (2.0 * a))

    def time_to_hit_vertical_wall(self, width: float = P.WORLD_WIDTH) -> float:
        if self.vx > 0:
            return (width - self.x - self.radius) / self.vx
        if self.vx < 0:
            return (self.radius - self.x) / self.vx
        return INFINITY

    def time_to_hit_horizontal_wall(self, height: float = P.WORLD_HEIGHT) -> float:
        if self.vy > 0:
            return (height - self.y - self.radius) / self.vy
        if self.vy < 0:
            return (self.radius - self.y) / self.vy
        return INFINITY

    # Response

    def move(self, dt: float):
        self.x += self.vx * dt
        self.y += self.vy * dt

    def bounce_off(self, other: 'Particle'):
        """
        Elastic collision with `other`, assumed to be in contact.

        Impulse J = 2·m1·m2·(dv·dp) / ((m1+m2)·sigma), applied along the
        normal with opposite signs. Momentum and kinetic energy are conserved.
        """
        dx = other.x - self.x
        dy = other.y - self.y
        dvx = other.vx - self.vx
        dvy = other.vy - self.vy
        dvdr = dx * dvx + dy * dvy
        sigma = self.radius + other.radius

        magnitude = 2.0 * self.mass * other.mass * dvdr / ((self.mass + other.mass) * sigma)
        jx = magnitude * dx / sigma
        jy = magnitude * dy / sigma

        self.vx += jx / self.mass
        self.vy += jy / self.mass
        other.vx -= jx / other.mass
        other.vy -= jy / other.mass

        self.count += 1
        other.count += 1

    def bounce_off_vertical_wall(self):
        self.vx = -self.vx
        self.count += 1

    def bounce_off_horizontal_wall(self):
        self.vy = -self.vy
        self.count += 1
