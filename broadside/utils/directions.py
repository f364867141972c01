"""Cardinal direction tables and grid stepping helpers.

The grid uses screen coordinates: x grows to the east, y grows to the south.
"""

from types import MappingProxyType

from .constants import SIDE_PORT

FACINGS = ("N", "E", "S", "W")

DIRECTION_VECTORS = MappingProxyType(
    {
        "N": (0, -1),
        "E": (1, 0),
        "S": (0, 1),
        "W": (-1, 0),
    }
)

TURN_LEFT = MappingProxyType({"N": "W", "W": "S", "S": "E", "E": "N"})
TURN_RIGHT = MappingProxyType({"N": "E", "E": "S", "S": "W", "W": "N"})


def step(x: int, y: int, direction: str, distance: int = 1) -> tuple[int, int]:
    """Return the tile `distance` steps from (x, y) along `direction`."""
    dx, dy = DIRECTION_VECTORS[direction]
    return x + dx * distance, y + dy * distance


def side_direction(facing: str, side: str) -> str:
    """Resolve port/starboard into an absolute direction.

    Port is a left-hand rotation of the facing, starboard a right-hand one.
    """
    if side == SIDE_PORT:
        return TURN_LEFT[facing]
    return TURN_RIGHT[facing]


def trace_line(x: int, y: int, direction: str, length: int) -> list[tuple[int, int, int]]:
    """Trace a straight line of tiles outward from (x, y).

    The origin tile is not included. Tiles beyond the grid are still
    returned; callers decide whether that matters.

    Args:
        x: Origin x coordinate
        y: Origin y coordinate
        direction: Cardinal direction to trace along
        length: Number of tiles to trace

    Returns:
        List of (x, y, step) tuples, step starting at 1
    """
    tiles = []
    for distance in range(1, length + 1):
        tx, ty = step(x, y, direction, distance)
        tiles.append((tx, ty, distance))
    return tiles
