"""Utility functions and constants for Broadside."""

from .constants import (
    CANNONBALL_DAMAGE,
    DEFAULT_SHIP_TYPE,
    GRID_SIZE,
    PHASE_COUNT,
    RNG_SEED_DEFAULT,
    SHIP_TYPES,
    ShipType,
)
from .directions import (
    DIRECTION_VECTORS,
    FACINGS,
    TURN_LEFT,
    TURN_RIGHT,
    side_direction,
    step,
    trace_line,
)
from .rng import GameRNG

__all__ = [
    "CANNONBALL_DAMAGE",
    "DEFAULT_SHIP_TYPE",
    "GRID_SIZE",
    "PHASE_COUNT",
    "RNG_SEED_DEFAULT",
    "SHIP_TYPES",
    "ShipType",
    "DIRECTION_VECTORS",
    "FACINGS",
    "TURN_LEFT",
    "TURN_RIGHT",
    "side_direction",
    "step",
    "trace_line",
    "GameRNG",
]
