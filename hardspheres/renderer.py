import logging
import numpy as np
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass
import os

import hardspheres as P
from hardspheres.particle import Particle

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame

logger = logging.getLogger(__name__)


@dataclass
class AppearanceConfig:
    """Pixels only; never touches the physics."""
    resolution: int = P.RESOLUTION
    bg_color: Tuple[int, int, int] = P.BG_COLOR
    outline: bool = False
    pause_ms: int = P.PAUSE_MS
    caption: str = 'Hard-sphere collisions'


class Renderer:
    """Draws the particle population once per redraw tick."""

    def __init__(self, world_width: float = P.WORLD_WIDTH,
                 world_height: float = P.WORLD_HEIGHT,
                 config: Optional[AppearanceConfig] = None):
        self.world_w = world_width
        self.world_h = world_height
        self.config = config or AppearanceConfig()
        self.closed = False
        self.n_frames = 0
        self._screen = None

    def _world_to_pixel(self, wx: float, wy: float) -> Tuple[int, int]:
        res = self.config.resolution
        px = int(wx / self.world_w * res)
        py = int((1.0 - wy / self.world_h) * res)
        return px, py

    def _world_radius_to_pixel(self, r: float) -> int:
        return max(1, int(r / self.world_w * self.config.resolution))

    def _paint(self, surface: 'pygame.Surface', particles: Sequence[Particle]):
        surface.fill(self.config.bg_color)
        width = 2 if self.config.outline else 0
        for p in particles:
            center = self._world_to_pixel(p.x, p.y)
            pygame.draw.circle(surface, p.color, center,
                               self._world_radius_to_pixel(p.radius), width)

    def render(self, particles: Sequence[Particle]) -> np.ndarray:
        """Render single frame offscreen → (res, res, 3) uint8."""
        res = self.config.resolution
        surface = pygame.Surface((res, res))
        self._paint(surface, particles)
        return pygame.surfarray.array3d(surface).transpose(1, 0, 2)

    def draw(self, particles: Sequence[Particle], time: float):
        """Present one frame in the window, then pause. Close the window to stop drawing."""
        if self.closed:
            return
        if self._screen is None:
            pygame.init()
            res = self.config.resolution
            self._screen = pygame.display.set_mode((res, res))
            pygame.display.set_caption(self.config.caption)

        for event in pygame.event.get():
            if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN
                                             and event.key == pygame.K_q):
                logger.info(f"Window closed at t={time:.2f}; rendering stopped.")
                self.close()
                return

        self._paint(self._screen, particles)
        pygame.display.flip()
        self.n_frames += 1
        pygame.time.wait(self.config.pause_ms)

    def close(self):
        self.closed = True
        if self._screen is not None:
            pygame.quit()
            self._screen = None


def render_frames(states: np.ndarray, radii: np.ndarray,
                  colors: List[Tuple[int, int, int]],
                  world_width: float = P.WORLD_WIDTH,
                  world_height: float = P.WORLD_HEIGHT,
                  config: Optional[AppearanceConfig] = None) -> np.ndarray:
    """Render a recorded (T, n, 4) trajectory → (T, res, res, 3) uint8."""
    renderer = Renderer(world_width, world_height, config)
    res = renderer.config.resolution
    frames = np.zeros((len(states), res, res, 3), dtype=np.uint8)
    for t in range(len(states)):
        particles = [Particle(x=s[0], y=s[1], vx=s[2], vy=s[3], radius=r, color=c)
                     for s, r, c in zip(states[t], radii, colors)]
        frames[t] = renderer.render(particles)
    return frames


def save_frames(frames: np.ndarray, path: str):
    """Save frames as individual PNGs."""
    os.makedirs(path, exist_ok=True)
    for t in range(len(frames)):
        surf = pygame.surfarray.make_surface(frames[t].transpose(1, 0, 2))
        pygame.image.save(surf, os.path.join(path, f'frame_{t:05d}.png'))
