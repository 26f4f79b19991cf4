"""
Central Configuration
All simulation defaults and display constants in one place
"""

# === FIELD ===
# Simulation bounds in field units (pixels when rendered 1:1)
FIELD_WIDTH = 800.0
FIELD_HEIGHT = 600.0

# === POPULATION ===
POPULATION_COUNT = 100
MIN_POPULATION = 1
MAX_POPULATION = 2000

# === FLOCKING RULES ===
VISUAL_RANGE = 75.0        # Neighbor radius for cohesion and alignment
CENTERING_FACTOR = 0.005   # Adjust velocity by this % toward center of mass
MIN_DISTANCE = 20.0        # Distance to stay away from other agents
AVOID_FACTOR = 0.05        # Adjust velocity by this % away from close agents
MATCHING_FACTOR = 0.05     # Adjust by this % of average velocity
SPEED_LIMIT = 15.0
MARGIN = 200.0             # Boundary band that triggers turning
TURN_FACTOR = 1.0

# Initial velocity, per axis
INITIAL_VELOCITY_MIN = -5.0
INITIAL_VELOCITY_MAX = 5.0

# Update ordering
UPDATE_MODE_SEQUENTIAL = 'sequential'  # In place, stored order (reference dynamics)
UPDATE_MODE_SNAPSHOT = 'snapshot'      # Against a frozen copy of the previous tick
UPDATE_MODES = (UPDATE_MODE_SEQUENTIAL, UPDATE_MODE_SNAPSHOT)
DEFAULT_UPDATE_MODE = UPDATE_MODE_SEQUENTIAL

# === FRAME CLOCK ===
SIM_HZ = 60
STATS_LOG_INTERVAL = 120   # ticks between stats debug lines (2s at 60Hz)

# === DISPLAY ===
MARK_WIDTH = 10.0
MARK_HEIGHT = 15.0
BACKGROUND_COLOR = '#101418'
OVERLAY_TEXT_COLOR = '#9aa5b1'
WINDOW_TITLE = 'Flock Sim'
