"""Game configuration constants."""

from dataclasses import dataclass
from types import MappingProxyType

# Grid dimensions
GRID_SIZE = 24

# Turn structure
PHASE_COUNT = 4

# Match status
STATUS_PLANNING = "planning"
STATUS_EXECUTING = "executing"
STATUS_FINISHED = "finished"
STATUSES = (STATUS_PLANNING, STATUS_EXECUTING, STATUS_FINISHED)

# Map modes
MAP_MODE_DEFAULT = "default"
MAP_MODE_PROCEDURAL = "procedural"
MAP_MODES = (MAP_MODE_DEFAULT, MAP_MODE_PROCEDURAL)

# Procedural map generation
PROCEDURAL_CONFIG = MappingProxyType(
    {
        "wind_count": 6,
        "whirlpool_count": 2,
        "large_rock_count": 3,
        "small_rock_count": 5,
        "spawn_buffer": 2,  # Chebyshev radius kept clear around spawns
        "edge_padding": 1,
        "max_attempts": 200,  # Placement attempts per hazard/rock
    }
)

# Moves
MOVE_NONE = "none"
MOVE_FORWARD = "forward"
MOVE_TURN_LEFT = "turn_left"
MOVE_TURN_RIGHT = "turn_right"
MOVES = (MOVE_NONE, MOVE_FORWARD, MOVE_TURN_LEFT, MOVE_TURN_RIGHT)

# Legacy single-action plan values
ACTION_NONE = "none"
ACTION_SHOOT_PORT = "shoot_port"
ACTION_SHOOT_STARBOARD = "shoot_starboard"
ACTION_GRAPPLE_PORT = "grapple_port"
ACTION_GRAPPLE_STARBOARD = "grapple_starboard"
ACTIONS = (
    ACTION_NONE,
    ACTION_SHOOT_PORT,
    ACTION_SHOOT_STARBOARD,
    ACTION_GRAPPLE_PORT,
    ACTION_GRAPPLE_STARBOARD,
)

# Per-side action kinds
KIND_NONE = "none"
KIND_FIRE = "fire"
KIND_GRAPPLE = "grapple"
ACTION_KINDS = (KIND_NONE, KIND_FIRE, KIND_GRAPPLE)

# Ship sides
SIDE_PORT = "port"
SIDE_STARBOARD = "starboard"
SIDES = (SIDE_PORT, SIDE_STARBOARD)

# Hazards and rocks
HAZARD_WIND = "wind"
HAZARD_WHIRLPOOL = "whirlpool"
SPIN_CW = "cw"
SPIN_CCW = "ccw"
DEFAULT_WHIRLPOOL_SIZE = 2
ROCK_SMALL = "small"
ROCK_LARGE = "large"

# Cannonballs
CANNONBALL_SMALL = "small"
CANNONBALL_MEDIUM = "medium"
CANNONBALL_LARGE = "large"
CANNONBALL_DAMAGE = MappingProxyType(
    {
        CANNONBALL_SMALL: 1,
        CANNONBALL_MEDIUM: 2,
        CANNONBALL_LARGE: 4,
    }
)
DEFAULT_CANNONBALL_SIZE = CANNONBALL_SMALL
DEFAULT_SHOTS_PER_ATTACK = 1
SHOOT_RANGE = 3
SHOOT_DAMAGE = 1
GRAPPLE_RANGE = 1


@dataclass(frozen=True)
class ShipType:
    """Preset stats for a hull class."""

    id: str
    label: str
    hp: int
    cannon_range: int
    cannonball_size: str
    shots_per_attack: int
    grapple_range: int = GRAPPLE_RANGE


SHIP_TYPES = MappingProxyType(
    {
        "sloop": ShipType("sloop", "Sloop", 10, 2, CANNONBALL_SMALL, 1),
        "cutter": ShipType("cutter", "Cutter", 16, 3, CANNONBALL_SMALL, 2),
        "war_brig": ShipType("war_brig", "War Brig", 20, 3, CANNONBALL_MEDIUM, 2),
        "dhow": ShipType("dhow", "Dhow", 14, 3, CANNONBALL_MEDIUM, 1),
        "war_frigate": ShipType("war_frigate", "War Frigate", 30, 4, CANNONBALL_LARGE, 2),
        "baghlah": ShipType("baghlah", "Baghlah", 24, 4, CANNONBALL_LARGE, 1),
    }
)
DEFAULT_SHIP_TYPE = "cutter"

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing
