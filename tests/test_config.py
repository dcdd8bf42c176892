"""Tests for reading and generating the initial particle configuration."""

import io

import pytest

from hardspheres.config import (ConfigurationError, SimulationConfig,
                                format_particles, load_particles,
                                parse_particles, random_particles)

TWO_PARTICLES = """2
0.25 0.5  0.5 0.0  0.05 1.0  255 0 0
0.75 0.5 -0.5 0.0  0.05 2.0  0 0 255
"""


class TestParse:

    def test_valid(self):
        a, b = parse_particles(TWO_PARTICLES)
        assert (a.x, a.y, a.vx, a.vy, a.radius, a.mass) == (0.25, 0.5, 0.5, 0.0, 0.05, 1.0)
        assert a.color == (255, 0, 0)
        assert b.mass == 2.0
        assert b.color == (0, 0, 255)
        assert (a.particle_id, b.particle_id) == (0, 1)
        assert a.count == b.count == 0

    def test_zero_particles(self):
        assert parse_particles("0\n") == []

    @pytest.mark.parametrize('text', [
        "",
        "two\n",
        "-1\n",
        "2\n0.25 0.5 0.5 0.0 0.05 1.0 255 0 0\n",
        "1\n0.25 0.5 0.5 0.0 0.05 1.0 255 0 0 7\n",
        "1\n0.25 0.5 fast 0.0 0.05 1.0 255 0 0\n",
        "1\n0.25 0.5 0.5 0.0 0.05 1.0 255 0 0.5\n",
        "1\n0.25 0.5 0.5 0.0 0.05 1.0 256 0 0\n",
        "1\n0.25 0.5 0.5 0.0 0.0 1.0 255 0 0\n",
        "1\n0.25 0.5 0.5 0.0 0.05 -1.0 255 0 0\n",
        "1\nnan 0.5 0.5 0.0 0.05 1.0 255 0 0\n",
    ])
    def test_malformed(self, text):
        with pytest.raises(ConfigurationError):
            parse_particles(text)

    @pytest.mark.parametrize('record', [
        "0.999 0.5 1 0 0.01 1 0 0 0",
        "0.005 0.5 1 0 0.01 1 0 0 0",
        "0.5 -0.2 0 1 0.01 1 0 0 0",
        "0.5 0.995 0 1 0.01 1 0 0 0",
    ])
    def test_disc_outside_box(self, record):
        with pytest.raises(ConfigurationError):
            parse_particles("1\n" + record + "\n")

    def test_disc_touching_walls_is_accepted(self):
        (p,) = parse_particles("1\n0.25 0.75 0 0 0.25 1 0 0 0\n")
        assert (p.x, p.y) == (0.25, 0.75)

    def test_custom_box(self):
        (p,) = parse_particles("1\n1.5 1.5 0 0 0.25 1 0 0 0\n", width=2.0, height=2.0)
        assert p.x == 1.5
        with pytest.raises(ConfigurationError):
            parse_particles("1\n1.5 1.5 0 0 0.25 1 0 0 0\n")

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_particles("x")


class TestLoad:

    def test_from_stream(self):
        assert len(load_particles(io.StringIO(TWO_PARTICLES))) == 2

    def test_from_path(self, tmp_path):
        path = tmp_path / 'particles.txt'
        path.write_text(TWO_PARTICLES)
        assert len(load_particles(str(path))) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_particles(str(tmp_path / 'missing.txt'))

    def test_format_reads_back(self):
        particles = parse_particles(TWO_PARTICLES)
        again = parse_particles(format_particles(particles))
        assert [p.full_state.tolist() for p in again] == [p.full_state.tolist() for p in particles]
        assert [p.color for p in again] == [p.color for p in particles]


class TestRandom:

    def test_count_and_bounds(self):
        config = SimulationConfig(n_particles=30, seed=0)
        particles = random_particles(config)
        assert len(particles) == 30
        for p in particles:
            assert p.radius <= p.x <= 1.0 - p.radius
            assert p.radius <= p.y <= 1.0 - p.radius
            assert abs(p.vx) <= config.speed and abs(p.vy) <= config.speed
            assert (p.radius, p.mass) == (config.radius, config.mass)

    def test_no_overlap(self):
        particles = random_particles(SimulationConfig(n_particles=30, seed=0))
        for i, a in enumerate(particles):
            for b in particles[i + 1:]:
                assert a.distance_to(b) >= a.radius + b.radius

    def test_seeded(self):
        first = random_particles(SimulationConfig(n_particles=5, seed=11))
        second = random_particles(SimulationConfig(n_particles=5, seed=11))
        assert [p.state.tolist() for p in first] == [p.state.tolist() for p in second]

    def test_unique_ids(self):
        particles = random_particles(SimulationConfig(n_particles=5, seed=1))
        assert [p.particle_id for p in particles] == list(range(5))

    def test_rejects_negative_count(self):
        with pytest.raises(ConfigurationError):
            random_particles(SimulationConfig(n_particles=-1))

    def test_rejects_radius_too_large(self):
        with pytest.raises(ConfigurationError):
            random_particles(SimulationConfig(n_particles=1, radius=0.6))
