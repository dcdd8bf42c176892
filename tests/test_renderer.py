"""Offscreen rendering tests (SDL dummy driver, see conftest)."""

import numpy as np
import pytest

from hardspheres.particle import Particle
from hardspheres.renderer import AppearanceConfig, Renderer, render_frames, save_frames

RED = (200, 0, 0)


@pytest.fixture
def renderer():
    return Renderer(1.0, 1.0, AppearanceConfig(resolution=100, pause_ms=0))


class TestRender:

    def test_frame_shape_and_colors(self, renderer):
        p = Particle(x=0.5, y=0.5, vx=0.0, vy=0.0, radius=0.1, color=RED)
        frame = renderer.render([p])
        assert frame.shape == (100, 100, 3)
        assert frame.dtype == np.uint8
        assert tuple(frame[50, 50]) == RED
        assert tuple(frame[0, 0]) == renderer.config.bg_color

    def test_y_axis_points_up(self, renderer):
        p = Particle(x=0.5, y=0.8, vx=0.0, vy=0.0, radius=0.05, color=RED)
        frame = renderer.render([p])
        assert tuple(frame[20, 50]) == RED
        assert tuple(frame[80, 50]) == renderer.config.bg_color

    def test_empty_population(self, renderer):
        frame = renderer.render([])
        assert (frame == np.array(renderer.config.bg_color, dtype=np.uint8)).all()


class TestWindow:

    def test_draw_and_close(self, renderer):
        p = Particle(x=0.5, y=0.5, vx=0.0, vy=0.0, radius=0.1, color=RED)
        renderer.draw([p], 0.0)
        renderer.draw([p], 2.0)
        assert renderer.n_frames == 2
        renderer.close()
        assert renderer.closed
        renderer.draw([p], 4.0)
        assert renderer.n_frames == 2


class TestFrames:

    def test_render_and_save(self, tmp_path):
        states = np.array([[[0.5, 0.5, 0.0, 0.0]], [[0.2, 0.2, 0.0, 0.0]]])
        frames = render_frames(states, [0.1], [RED], config=AppearanceConfig(resolution=40))
        assert frames.shape == (2, 40, 40, 3)
        save_frames(frames, str(tmp_path / 'frames'))
        assert sorted(f.name for f in (tmp_path / 'frames').iterdir()) == [
            'frame_00000.png', 'frame_00001.png']
