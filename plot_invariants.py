"""
Invariant check: energy and momentum at every redraw tick of one run.

Kinetic energy must stay flat: collisions are elastic and walls only flip a
velocity component. Momentum is not conserved (walls absorb it) and is
plotted for reference.
"""
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import os

import hardspheres as P
from hardspheres.config import SimulationConfig
from hardspheres.engine import generate_trajectory
from hardspheres.metrics import energy_drift
from hardspheres.utils import setup_logging


def plot(n_particles=P.N_PARTICLES, limit=500.0, seed=P.SEED, out_dir='results/plots'):
    os.makedirs(out_dir, exist_ok=True)
    config = SimulationConfig(n_particles=n_particles, limit=limit, seed=seed)
    traj = generate_trajectory(config)

    print(f"Frames: {len(traj['times'])}, collisions: {len(traj['collisions'])}")
    print(f"Energy drift: {energy_drift(traj):.3e}")

    fig, axes = plt.subplots(2, 1, figsize=(10, 8), sharex=True)
    axes[0].plot(traj['times'], traj['energy'], color='black')
    axes[0].set_ylabel('Kinetic energy')
    axes[0].set_title(f'{n_particles} particles, seed {seed}')
    axes[1].plot(traj['times'], traj['momentum'], color='tab:blue')
    axes[1].set_ylabel('|Momentum|')
    axes[1].set_xlabel('Simulated time')
    path = os.path.join(out_dir, 'invariants.png')
    fig.savefig(path)
    plt.close(fig)
    print(f"Saved {path}")
    return path


if __name__ == "__main__":
    setup_logging('INFO')
    plot()
