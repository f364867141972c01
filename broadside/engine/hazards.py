"""Phase step 2: Environmental hazards.

Hazards are applied in two ordered passes after movement:
1. Whirlpools - every ship inside a whirlpool footprint is spun (facing
   rotated by the whirlpool's spin) and thrown to the point reflection of
   its tile through the footprint. Destinations are computed for all ships
   from the pre-pass positions before any ship is moved.
2. Wind - ships not caught by a whirlpool this phase that sit on a wind
   tile are pushed one tile along the wind direction.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..models.grid import Grid, Hazard
from ..models.ship import Ship
from ..utils.constants import SPIN_CCW
from ..utils.directions import TURN_LEFT, TURN_RIGHT, step

logger = logging.getLogger(__name__)


@dataclass
class WhirlpoolMove:
    """A pending whirlpool displacement for one ship."""

    ship_id: str
    whirlpool: Hazard
    dest: tuple[int, int]


def whirlpool_destination(x: int, y: int, whirlpool: Hazard) -> tuple[int, int]:
    """Reflect (x, y) through the center of the whirlpool footprint.

    Each axis maps local offset d to (size - 1 - d), so a corner tile lands
    on the diagonally opposite corner.
    """
    dx = x - whirlpool.x
    dy = y - whirlpool.y
    return (
        whirlpool.x + (whirlpool.size - 1 - dx),
        whirlpool.y + (whirlpool.size - 1 - dy),
    )


def spin_facing(facing: str, whirlpool: Hazard) -> str:
    """Clockwise whirlpools rotate right, counter-clockwise ones rotate left."""
    if whirlpool.spin == SPIN_CCW:
        return TURN_LEFT[facing]
    return TURN_RIGHT[facing]


def _ship_at(x: int, y: int, ships: list[Ship], exclude_id: str) -> Optional[Ship]:
    for ship in ships:
        if ship.id != exclude_id and ship.x == x and ship.y == y:
            return ship
    return None


def apply_hazards(ships: list[Ship], grid: Grid) -> tuple[list[Ship], list[str]]:
    """Apply whirlpools, then wind, to ships after movement.

    Args:
        ships: Ship snapshots after movement
        grid: Static world holding the hazards

    Returns:
        Tuple of (new ship snapshots in input order, hazard events)
    """
    next_ships = [replace(ship) for ship in ships]
    events: list[str] = []

    if not grid.hazards:
        return next_ships, events

    spun_ids = _apply_whirlpools(next_ships, grid, events)
    _apply_wind(next_ships, grid, events, skip_ids=spun_ids)

    return next_ships, events


def _apply_whirlpools(ships: list[Ship], grid: Grid, events: list[str]) -> set[str]:
    """Spin and displace every ship inside a whirlpool.

    Mutates the given ship snapshots in place.

    Returns:
        Ids of ships caught by a whirlpool this phase
    """
    pending: list[WhirlpoolMove] = []
    for ship in ships:
        whirlpool = grid.whirlpool_at(ship.x, ship.y)
        if whirlpool is None:
            continue
        pending.append(
            WhirlpoolMove(
                ship_id=ship.id,
                whirlpool=whirlpool,
                dest=whirlpool_destination(ship.x, ship.y, whirlpool),
            )
        )

    caught_ids = {move.ship_id for move in pending}
    by_id = {ship.id: ship for ship in ships}

    for move in pending:
        ship = by_id[move.ship_id]
        ship.facing = spin_facing(ship.facing, move.whirlpool)
        dest_x, dest_y = move.dest

        if not grid.in_bounds(dest_x, dest_y):
            events.append(f"{ship.name} is spun but cannot move.")
            continue
        if grid.is_blocked(dest_x, dest_y):
            events.append(f"{ship.name} is spun but blocked by rocks.")
            continue
        blocker = _ship_at(dest_x, dest_y, ships, ship.id)
        if blocker is not None and blocker.id not in caught_ids:
            events.append(f"{ship.name} is spun but cannot move.")
            continue

        ship.x, ship.y = dest_x, dest_y
        events.append(f"{ship.name} is spun through the whirlpool.")
        logger.debug(f"{ship.id} spun to {move.dest} facing {ship.facing}")

    return caught_ids


def _apply_wind(ships: list[Ship], grid: Grid, events: list[str], skip_ids: set[str]) -> None:
    """Push ships standing on wind tiles one step downwind.

    Mutates the given ship snapshots in place.
    """
    for ship in ships:
        if ship.id in skip_ids:
            continue
        wind = grid.wind_at(ship.x, ship.y)
        if wind is None:
            continue

        nx, ny = step(ship.x, ship.y, wind.direction)
        if (
            not grid.in_bounds(nx, ny)
            or grid.is_blocked(nx, ny)
            or _ship_at(nx, ny, ships, ship.id) is not None
        ):
            events.append(f"{ship.name} resists the wind.")
            continue

        ship.x, ship.y = nx, ny
        events.append(f"{ship.name} is pushed by wind.")
