"""
Initial particle configuration.

Either `n` random particles, or an explicit listing:

    n
    x y vx vy radius mass r g b      (n lines)

Anything malformed raises ConfigurationError before an engine is built.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import IO, List, Optional, Sequence, Union

import hardspheres as P
from hardspheres.particle import Particle

logger = logging.getLogger(__name__)

FIELDS_PER_PARTICLE = 9


class ConfigurationError(ValueError):
    """Malformed or insufficient initial-state input."""


@dataclass
class SimulationConfig:
    n_particles: int = P.N_PARTICLES
    radius: float = P.RADIUS
    mass: float = P.MASS
    speed: float = P.SPEED
    hz: float = P.HZ
    limit: float = P.LIMIT
    width: float = P.WORLD_WIDTH
    height: float = P.WORLD_HEIGHT
    pause_ms: int = P.PAUSE_MS
    seed: Optional[int] = None


def random_particles(config: SimulationConfig) -> List[Particle]:
    """Uniform positions inside the box, velocity components in [-speed, speed]."""
    if config.n_particles < 0:
        raise ConfigurationError(f"particle count must be non-negative, got {config.n_particles}")
    if 2 * config.radius >= min(config.width, config.height):
        raise ConfigurationError(f"radius {config.radius} does not fit in the box")

    rng = np.random.RandomState(config.seed)
    particles: List[Particle] = []
    for i in range(config.n_particles):
        particle = _create_random_particle(rng, config, i)
        for _ in range(100):
            if not _overlaps_any(particle, particles):
                break
            particle = _create_random_particle(rng, config, i)
        particles.append(particle)

    logger.info(f"Created {len(particles)} random particles (seed={config.seed}).")
    return particles


def _create_random_particle(rng: np.random.RandomState, config: SimulationConfig,
                            particle_id: int) -> Particle:
    r = config.radius
    x = rng.uniform(r, config.width - r)
    y = rng.uniform(r, config.height - r)
    vx = rng.uniform(-config.speed, config.speed)
    vy = rng.uniform(-config.speed, config.speed)
    return Particle(x=x, y=y, vx=vx, vy=vy, radius=r, mass=config.mass,
                    particle_id=particle_id)


def _overlaps_any(particle: Particle, others: Sequence[Particle]) -> bool:
    for other in others:
        if particle.distance_to(other) < particle.radius + other.radius:
            return True
    return False


def parse_particles(text: str, width: float = P.WORLD_WIDTH,
                    height: float = P.WORLD_HEIGHT) -> List[Particle]:
    tokens = text.split()
    if not tokens:
        raise ConfigurationError("empty configuration: expected a particle count")

    try:
        n = int(tokens[0])
    except ValueError:
        raise ConfigurationError(f"particle count must be an integer, got {tokens[0]!r}") from None
    if n < 0:
        raise ConfigurationError(f"particle count must be non-negative, got {n}")

    expected = 1 + n * FIELDS_PER_PARTICLE
    if len(tokens) < expected:
        raise ConfigurationError(
            f"expected {n} particle records ({expected - 1} values), "
            f"got {len(tokens) - 1} values"
        )
    if len(tokens) > expected:
        raise ConfigurationError(f"{len(tokens) - expected} unexpected trailing values")

    particles = []
    for i in range(n):
        record = tokens[1 + i * FIELDS_PER_PARTICLE: 1 + (i + 1) * FIELDS_PER_PARTICLE]
        particles.append(_parse_record(record, i, width, height))

    logger.info(f"Parsed {n} particles from configuration.")
    return particles


def _parse_record(record: Sequence[str], index: int, width: float,
                  height: float) -> Particle:
    try:
        x, y, vx, vy, radius, mass = (float(v) for v in record[:6])
        color = tuple(int(v) for v in record[6:])
    except ValueError as e:
        raise ConfigurationError(f"particle {index}: {e}") from None

    if any(not 0 <= c <= 255 for c in color):
        raise ConfigurationError(f"particle {index}: color channels must be 0-255, got {color}")
    if not all(np.isfinite([x, y, vx, vy])):
        raise ConfigurationError(f"particle {index}: position and velocity must be finite")

    try:
        particle = Particle(x=x, y=y, vx=vx, vy=vy, radius=radius, mass=mass,
                            color=color, particle_id=index)
    except ValueError as e:
        raise ConfigurationError(f"particle {index}: {e}") from None

    if not (radius <= x <= width - radius and radius <= y <= height - radius):
        raise ConfigurationError(
            f"particle {index}: disc at ({x}, {y}) with radius {radius} "
            f"does not fit in the {width}x{height} box"
        )
    return particle


def load_particles(source: Union[str, IO[str]], width: float = P.WORLD_WIDTH,
                   height: float = P.WORLD_HEIGHT) -> List[Particle]:
    """Parse from a file path or an open text stream."""
    if isinstance(source, str):
        logger.info(f"Loading particles from {source}...")
        try:
            with open(source, 'r') as f:
                text = f.read()
        except OSError as e:
            raise ConfigurationError(f"cannot read {source}: {e}") from e
    else:
        text = source.read()
    return parse_particles(text, width, height)


def format_particles(particles: Sequence[Particle]) -> str:
    lines = [str(len(particles))]
    for p in particles:
        r, g, b = p.color
        values = (float(v) for v in (p.x, p.y, p.vx, p.vy, p.radius, p.mass))
        lines.append(" ".join(repr(v) for v in values) + f" {r} {g} {b}")
    return "\n".join(lines) + "\n"
