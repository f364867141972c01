"""Map setup: default layout, seeded procedural layout, initial match state."""

import random
from typing import Optional

from ..models import Grid, Hazard, MatchState, Rock, build_ship
from ..utils import GRID_SIZE, FACINGS, GameRNG
from ..utils.constants import (
    DEFAULT_WHIRLPOOL_SIZE,
    MAP_MODE_DEFAULT,
    MAP_MODE_PROCEDURAL,
    PROCEDURAL_CONFIG,
    ROCK_LARGE,
    ROCK_SMALL,
    SPIN_CCW,
    SPIN_CW,
)

# Spawn points (deterministic)
DEFAULT_SPAWNS = (
    {"id": "P1", "x": 5, "y": 12, "facing": "E"},
    {"id": "P2", "x": 18, "y": 12, "facing": "W"},
)


def build_default_map() -> Grid:
    """Return the fixed, symmetric default layout."""
    return Grid(
        width=GRID_SIZE,
        height=GRID_SIZE,
        mode=MAP_MODE_DEFAULT,
        hazards=(
            Hazard.wind(7, 5, "E"),
            Hazard.wind(7, 18, "E"),
            Hazard.wind(16, 5, "W"),
            Hazard.wind(16, 18, "W"),
            Hazard.wind(11, 4, "S"),
            Hazard.wind(12, 19, "N"),
            Hazard.whirlpool(9, 8, size=2, spin=SPIN_CW),
            Hazard.whirlpool(13, 13, size=2, spin=SPIN_CCW),
        ),
        rocks=(
            Rock(11, 11, ROCK_LARGE),
            Rock(12, 12, ROCK_LARGE),
            Rock(6, 9, ROCK_SMALL),
            Rock(6, 15, ROCK_SMALL),
            Rock(17, 9, ROCK_SMALL),
            Rock(17, 15, ROCK_SMALL),
        ),
    )


def generate_map(
    seed: Optional[int | str] = None,
    width: int = GRID_SIZE,
    height: int = GRID_SIZE,
    spawn_points: tuple[dict, ...] = DEFAULT_SPAWNS,
) -> Grid:
    """Generate a seeded random hazard/rock layout.

    Algorithm:
    1. Reserve every tile within spawn_buffer (Chebyshev) of a spawn point
    2. Place whirlpools (2x2, clear footprint, padded from the edges)
    3. Place single-tile winds with a random direction (padded)
    4. Place large rocks, then small rocks
    Each item gets a bounded number of placement attempts and is skipped if
    none succeeds. Nothing overlaps.

    Args:
        seed: RNG seed; a fresh one is drawn and recorded when omitted
        width: Grid width
        height: Grid height
        spawn_points: Positions to keep clear

    Returns:
        Grid in procedural mode with the seed recorded for replay
    """
    if seed is None:
        seed = random.randrange(2**32)
    rng = GameRNG(seed)

    reserved = _reserve_spawn_tiles(spawn_points, width, height, PROCEDURAL_CONFIG["spawn_buffer"])
    occupied: set[tuple[int, int]] = set()
    hazards: list[Hazard] = []
    rocks: list[Rock] = []

    def is_free(x: int, y: int) -> bool:
        return (x, y) not in reserved and (x, y) not in occupied

    for _ in range(PROCEDURAL_CONFIG["whirlpool_count"]):
        whirlpool = _place_whirlpool(rng, width, height, is_free)
        if whirlpool is not None:
            hazards.append(whirlpool)
            for dx in range(whirlpool.size):
                for dy in range(whirlpool.size):
                    occupied.add((whirlpool.x + dx, whirlpool.y + dy))

    for _ in range(PROCEDURAL_CONFIG["wind_count"]):
        wind = _place_wind(rng, width, height, is_free)
        if wind is not None:
            hazards.append(wind)
            occupied.add((wind.x, wind.y))

    for size, count_key in ((ROCK_LARGE, "large_rock_count"), (ROCK_SMALL, "small_rock_count")):
        for _ in range(PROCEDURAL_CONFIG[count_key]):
            rock = _place_rock(rng, width, height, size, is_free)
            if rock is not None:
                rocks.append(rock)
                occupied.add((rock.x, rock.y))

    return Grid(
        width=width,
        height=height,
        hazards=tuple(hazards),
        rocks=tuple(rocks),
        mode=MAP_MODE_PROCEDURAL,
        seed=seed,
    )


def _reserve_spawn_tiles(
    spawn_points: tuple[dict, ...], width: int, height: int, buffer: int
) -> set[tuple[int, int]]:
    """Keep spawn neighbourhoods clear so early turns are never blocked."""
    reserved = set()
    for spawn in spawn_points:
        for dx in range(-buffer, buffer + 1):
            for dy in range(-buffer, buffer + 1):
                nx, ny = spawn["x"] + dx, spawn["y"] + dy
                if 0 <= nx < width and 0 <= ny < height:
                    reserved.add((nx, ny))
    return reserved


def _place_whirlpool(rng: GameRNG, width: int, height: int, is_free) -> Optional[Hazard]:
    size = DEFAULT_WHIRLPOOL_SIZE
    padding = PROCEDURAL_CONFIG["edge_padding"]
    for _ in range(PROCEDURAL_CONFIG["max_attempts"]):
        x = rng.randint(padding, width - size - padding)
        y = rng.randint(padding, height - size - padding)
        if all(is_free(x + dx, y + dy) for dx in range(size) for dy in range(size)):
            return Hazard.whirlpool(x, y, size=size, spin=rng.choice([SPIN_CW, SPIN_CCW]))
    return None


def _place_wind(rng: GameRNG, width: int, height: int, is_free) -> Optional[Hazard]:
    padding = PROCEDURAL_CONFIG["edge_padding"]
    for _ in range(PROCEDURAL_CONFIG["max_attempts"]):
        x = rng.randint(padding, width - 1 - padding)
        y = rng.randint(padding, height - 1 - padding)
        if is_free(x, y):
            return Hazard.wind(x, y, rng.choice(FACINGS))
    return None


def _place_rock(rng: GameRNG, width: int, height: int, size: str, is_free) -> Optional[Rock]:
    for _ in range(PROCEDURAL_CONFIG["max_attempts"]):
        x = rng.randint(0, width - 1)
        y = rng.randint(0, height - 1)
        if is_free(x, y):
            return Rock(x, y, size)
    return None


def create_initial_state(
    p1_type_id: str = "cutter",
    p2_type_id: str = "war_brig",
    p1_name: str = "Captain Tide",
    p2_name: str = "Captain Ember",
    map_mode: str = MAP_MODE_DEFAULT,
    map_seed: Optional[int | str] = None,
) -> MatchState:
    """Create a brand new match at turn 1, ready for planning.

    Raises:
        ValueError: If map_mode is not "default" or "procedural"
    """
    if map_mode == MAP_MODE_PROCEDURAL:
        grid = generate_map(map_seed)
    elif map_mode == MAP_MODE_DEFAULT:
        grid = build_default_map()
    else:
        raise ValueError(f"Invalid map mode: {map_mode} (must be 'default' or 'procedural')")

    p1_spawn, p2_spawn = DEFAULT_SPAWNS
    ships = [
        build_ship(p1_spawn["id"], p1_name, p1_spawn["x"], p1_spawn["y"], p1_spawn["facing"], p1_type_id),
        build_ship(p2_spawn["id"], p2_name, p2_spawn["x"], p2_spawn["y"], p2_spawn["facing"], p2_type_id),
    ]
    return MatchState(grid=grid, ships=ships)
