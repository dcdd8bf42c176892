"""Renderer-compatible sink that keeps every redraw tick in memory."""

import numpy as np
from typing import Dict, List, Sequence, Tuple

from hardspheres.metrics import compute_energy, compute_momentum
from hardspheres.particle import Particle


class TrajectoryRecorder:
    """Records (time, state) snapshots instead of drawing them."""

    def __init__(self):
        self.times: List[float] = []
        self.states: List[np.ndarray] = []
        self.full_states: List[np.ndarray] = []
        self.colors: List[Tuple[int, int, int]] = []

    def draw(self, particles: Sequence[Particle], time: float):
        self.times.append(time)
        self.states.append(np.array([p.state for p in particles]).reshape(-1, 4))
        self.full_states.append(np.array([p.full_state for p in particles]).reshape(-1, 6))
        if not self.colors:
            self.colors = [tuple(p.color) for p in particles]

    def __len__(self) -> int:
        return len(self.times)

    def to_trajectory(self) -> Dict:
        """(T, n, 4) states, (T, n, 6) full states, per-frame energy and momentum."""
        if self.states:
            states = np.array(self.states)
            full_states = np.array(self.full_states)
        else:
            states = np.zeros((0, 0, 4))
            full_states = np.zeros((0, 0, 6))
        masses = full_states[0, :, 5] if len(full_states) else None
        return {
            'times': np.array(self.times),
            'states': states,
            'full_states': full_states,
            'colors': list(self.colors),
            'energy': compute_energy(states, masses),
            'momentum': compute_momentum(states, masses),
        }
