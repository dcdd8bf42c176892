"""
Watch the particles collide.
Run: python demo.py 20            (20 random particles)
     python demo.py < brownian.txt (explicit configuration on stdin)
Press Q or close the window to stop drawing; the simulation still runs to the limit.
"""
import argparse
import sys

import hardspheres as P
from hardspheres.config import (ConfigurationError, SimulationConfig,
                                load_particles, random_particles)
from hardspheres.engine import CollisionSystem
from hardspheres.metrics import energy_drift
from hardspheres.recorder import TrajectoryRecorder
from hardspheres.utils import setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Event-driven hard-sphere collision simulation')
    parser.add_argument('n', type=int, nargs='?',
                        help='number of random particles; omit to read a configuration')
    parser.add_argument('--input', help='configuration file (default: stdin)')
    parser.add_argument('--limit', type=float, default=P.LIMIT, help='simulated-time horizon')
    parser.add_argument('--hz', type=float, default=P.HZ, help='redraw ticks per unit time')
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--pause-ms', type=int, default=P.PAUSE_MS)
    parser.add_argument('--resolution', type=int, default=P.RESOLUTION)
    parser.add_argument('--headless', action='store_true',
                        help='record redraw ticks instead of opening a window')
    parser.add_argument('--frames', help='with --headless, save recorded frames as PNGs here')
    parser.add_argument('--log-level', default='INFO')
    parser.add_argument('--log-file', default=None)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    config = SimulationConfig(hz=args.hz, limit=args.limit,
                              pause_ms=args.pause_ms, seed=args.seed)
    try:
        if args.n is not None:
            config.n_particles = args.n
            particles = random_particles(config)
        else:
            particles = load_particles(args.input if args.input else sys.stdin,
                                       config.width, config.height)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.headless:
        renderer = TrajectoryRecorder()
    else:
        from hardspheres.renderer import AppearanceConfig, Renderer
        renderer = Renderer(config.width, config.height,
                            AppearanceConfig(resolution=args.resolution,
                                             pause_ms=args.pause_ms))

    system = CollisionSystem(particles, hz=config.hz, renderer=renderer,
                             width=config.width, height=config.height)
    energy_before = system.total_kinetic_energy()
    try:
        system.simulate(config.limit)
    finally:
        if not args.headless:
            renderer.close()

    print(f"Collisions: {len(system.collision_log)}")
    print(f"Stale events discarded: {system.n_stale}")
    print(f"Energy drift: {abs(system.total_kinetic_energy() - energy_before):.10f}")

    if args.headless:
        traj = renderer.to_trajectory()
        print(f"Recorded frames: {len(traj['times'])} (max drift {energy_drift(traj):.10f})")
        if args.frames:
            from hardspheres.renderer import AppearanceConfig, render_frames, save_frames
            radii = traj['full_states'][0, :, 4] if len(traj['full_states']) else []
            frames = render_frames(traj['states'], radii, traj['colors'],
                                   config.width, config.height,
                                   AppearanceConfig(resolution=args.resolution))
            save_frames(frames, args.frames)
            print(f"Saved {len(frames)} frames to {args.frames}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
