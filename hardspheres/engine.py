"""
Event-driven hard-sphere collision system.

- N discs in a rectangular box, constant velocity between events
- Time jumps straight to the next predicted collision or redraw tick
- Stale predictions are dropped lazily via per-particle collision counters
- Nothing past the horizon is scheduled, so the queue drains and the run ends
"""

import copy
import logging
import numpy as np
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

import hardspheres as P
from hardspheres.config import SimulationConfig, random_particles
from hardspheres.event import (Event, HorizontalWallCollision, ParticleCollision,
                               Redraw, VerticalWallCollision)
from hardspheres.particle import Particle
from hardspheres.pq import MinPQ
from hardspheres.recorder import TrajectoryRecorder

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    NOT_STARTED = 'not started'
    RUNNING = 'running'
    FINISHED = 'finished'


class CollisionSystem:
    """
    Owns simulated time, the particles and the event queue.

    `renderer` is any object with `draw(particles, time)`; it is called once
    per redraw tick. Redraw ticks fire every 1/hz units of simulated time.
    """

    def __init__(self, particles: Sequence[Particle], hz: float = P.HZ,
                 renderer=None, width: float = P.WORLD_WIDTH,
                 height: float = P.WORLD_HEIGHT):
        if hz <= 0:
            raise ValueError(f"hz must be positive, got {hz}")
        self.particles: List[Particle] = list(particles)
        self.hz = hz
        self.renderer = renderer
        self.width = width
        self.height = height
        self.time: float = 0.0
        self.state = SimulationState.NOT_STARTED
        self.pq: Optional[MinPQ] = None
        self.collision_log: List[Dict] = []
        self.n_processed = 0
        self.n_stale = 0
        self.n_redraws = 0

    # Prediction

    def predict(self, a: Particle, limit: float):
        """Queue every future event for `a` that falls within `limit`."""
        for b in self.particles:
            if b is a:
                continue
            dt = a.time_to_hit(b)
            if self.time + dt <= limit:
                self.pq.insert(ParticleCollision(self.time + dt, a, b))

        # Wall events use a strict bound, pair events an inclusive one.
        dtx = a.time_to_hit_vertical_wall(self.width)
        dty = a.time_to_hit_horizontal_wall(self.height)
        if self.time + dtx < limit:
            self.pq.insert(VerticalWallCollision(self.time + dtx, a))
        if self.time + dty < limit:
            self.pq.insert(HorizontalWallCollision(self.time + dty, b=a))

    def redraw(self, limit: float):
        self.n_redraws += 1
        if self.renderer is not None:
            self.renderer.draw(self.particles, self.time)
        if self.time < limit:
            self.pq.insert(Redraw(self.time + 1.0 / self.hz))

    # Main loop

    def simulate(self, limit: float):
        """Run until no event at or before `limit` remains."""
        if self.state is SimulationState.RUNNING:
            raise RuntimeError("simulate() called while the simulation is running")
        if not np.isfinite(limit):
            raise ValueError(f"limit must be finite, got {limit}")

        self.state = SimulationState.RUNNING
        self.pq = MinPQ(key=lambda e: e.time)
        for particle in self.particles:
            self.predict(particle, limit)
        self.pq.insert(Redraw(self.time))

        logger.info(
            f"Simulating {len(self.particles)} particles from t={self.time:.4f} "
            f"to limit={limit} ({len(self.pq)} initial events)."
        )

        try:
            while self.pq:
                event = self.pq.del_min()
                if not event.is_valid():
                    self.n_stale += 1
                    continue

                for particle in self.particles:
                    particle.move(event.time - self.time)
                self.time = event.time

                self._process(event, limit)
                for participant in event.participants():
                    self.predict(participant, limit)

                self.n_processed += 1
                if self.n_processed % P.LOG_THROTTLE == 0:
                    logger.debug(
                        f"t={self.time:.4f} | processed={self.n_processed} "
                        f"stale={self.n_stale} queued={len(self.pq)}"
                    )
        finally:
            self.state = SimulationState.FINISHED

        logger.info(
            f"Simulation finished at t={self.time:.4f}: {self.n_processed} events, "
            f"{len(self.collision_log)} collisions, {self.n_stale} stale, "
            f"{self.n_redraws} redraws."
        )

    def _process(self, event: Event, limit: float):
        if isinstance(event, ParticleCollision):
            event.a.bounce_off(event.b)
        elif isinstance(event, VerticalWallCollision):
            event.a.bounce_off_vertical_wall()
        elif isinstance(event, HorizontalWallCollision):
            event.b.bounce_off_horizontal_wall()
        elif isinstance(event, Redraw):
            self.redraw(limit)
            return
        else:
            raise TypeError(f"Unknown event type: {type(event).__name__}")

        self.collision_log.append({
            'time': self.time, 'kind': type(event).__name__,
            'particles': tuple(p.particle_id for p in event.participants()),
        })

    # State access

    def get_state(self) -> np.ndarray:
        """(n, 4) → [x, y, vx, vy]"""
        return np.array([p.state for p in self.particles]).reshape(-1, 4)

    def get_full_state(self) -> np.ndarray:
        """(n, 6) → [x, y, vx, vy, radius, mass]"""
        return np.array([p.full_state for p in self.particles]).reshape(-1, 6)

    # Conserved quantities

    def total_kinetic_energy(self) -> float:
        return sum(p.kinetic_energy for p in self.particles)

    def total_momentum(self) -> np.ndarray:
        px = sum(p.mass * p.vx for p in self.particles)
        py = sum(p.mass * p.vy for p in self.particles)
        return np.array([px, py])

    def center_of_mass(self) -> np.ndarray:
        total_mass = sum(p.mass for p in self.particles)
        if total_mass == 0:
            return np.zeros(2)
        cx = sum(p.mass * p.x for p in self.particles) / total_mass
        cy = sum(p.mass * p.y for p in self.particles) / total_mass
        return np.array([cx, cy])

    def invariants(self) -> Dict[str, Union[float, np.ndarray]]:
        return {
            'energy': self.total_kinetic_energy(),
            'momentum': self.total_momentum(),
        }


def generate_trajectory(source: Union[SimulationConfig, Sequence[Particle]],
                        limit: Optional[float] = None,
                        hz: Optional[float] = None) -> Dict:
    """Run one simulation, recording every redraw tick.

    `source` is either a config (random particles) or explicit particles,
    which are copied so the caller's objects are left untouched.
    Returns dict with times, states, full_states, colors, energy, momentum,
    collisions.
    """
    if isinstance(source, SimulationConfig):
        particles = random_particles(source)
        limit = source.limit if limit is None else limit
        hz = source.hz if hz is None else hz
        width, height = source.width, source.height
    else:
        particles = [copy.deepcopy(p) for p in source]
        width, height = P.WORLD_WIDTH, P.WORLD_HEIGHT
    limit = P.LIMIT if limit is None else limit
    hz = P.HZ if hz is None else hz

    recorder = TrajectoryRecorder()
    system = CollisionSystem(particles, hz=hz, renderer=recorder,
                             width=width, height=height)
    system.simulate(limit)

    trajectory = recorder.to_trajectory()
    trajectory['collisions'] = system.collision_log
    return trajectory
