import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pytest

from hardspheres.particle import Particle


@pytest.fixture
def head_on_pair():
    """Equal unit masses on a collision course along y = 0.5."""
    a = Particle(x=0.25, y=0.5, vx=0.5, vy=0.0, radius=0.05, mass=1.0, particle_id=0)
    b = Particle(x=0.75, y=0.5, vx=-0.5, vy=0.0, radius=0.05, mass=1.0, particle_id=1)
    return a, b


class FrameLog:
    """Renderer stand-in that keeps (time, [state]) per redraw."""

    def __init__(self):
        self.frames = []

    def draw(self, particles, time):
        self.frames.append((time, [p.state.copy() for p in particles]))


@pytest.fixture
def frame_log():
    return FrameLog()
