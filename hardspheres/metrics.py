"""Conserved quantities over recorded (T, n, 4) state arrays."""
import numpy as np


def _masses_for(states, masses):
    if masses is None:
        return np.ones(states.shape[1])
    return np.asarray(masses, dtype=float)


def compute_energy(states, masses=None):
    """Total kinetic energy per frame → (T,)"""
    m = _masses_for(states, masses)
    vel = states[:, :, 2:]
    return (0.5 * m[None, :, None] * vel ** 2).sum(axis=(1, 2))


def compute_momentum(states, masses=None, vector=False):
    """Total momentum per frame → (T,) magnitudes, or (T, 2) if `vector`."""
    m = _masses_for(states, masses)
    p = (m[None, :, None] * states[:, :, 2:]).sum(axis=1)
    if vector:
        return p
    return np.linalg.norm(p, axis=1)


def energy_drift(trajectory):
    """Largest deviation of total kinetic energy from the first frame."""
    energy = trajectory['energy']
    if len(energy) == 0:
        return 0.0
    return float(np.max(np.abs(energy - energy[0])))
