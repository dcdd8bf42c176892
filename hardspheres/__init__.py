# ── Central defaults (tune here, not scattered across files) ──

# World
WORLD_WIDTH = 1.0
WORLD_HEIGHT = 1.0
N_PARTICLES = 20
RADIUS = 0.02
MASS = 0.5
SPEED = 0.005

# Events
HZ = 0.5
LIMIT = 10000.0

# Rendering
RESOLUTION = 600
BG_COLOR = (255, 255, 255)
PARTICLE_COLOR = (0, 0, 0)
PAUSE_MS = 20

# Run
SEED = 42
LOG_THROTTLE = 1000
