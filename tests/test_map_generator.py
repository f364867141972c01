"""Tests for map setup and initial match state."""

import pytest

from broadside.engine.map_generator import (
    DEFAULT_SPAWNS,
    build_default_map,
    create_initial_state,
    generate_map,
)
from broadside.utils.constants import GRID_SIZE, PROCEDURAL_CONFIG


def occupied_tiles(grid):
    tiles = []
    for hazard in grid.hazards:
        if hazard.kind == "whirlpool":
            tiles.extend(
                (hazard.x + dx, hazard.y + dy)
                for dx in range(hazard.size)
                for dy in range(hazard.size)
            )
        else:
            tiles.append((hazard.x, hazard.y))
    tiles.extend((rock.x, rock.y) for rock in grid.rocks)
    return tiles


def test_default_map_layout():
    grid = build_default_map()

    assert (grid.width, grid.height) == (GRID_SIZE, GRID_SIZE)
    assert grid.mode == "default"
    assert grid.seed is None
    assert sum(1 for h in grid.hazards if h.kind == "whirlpool") == 2
    assert sum(1 for h in grid.hazards if h.kind == "wind") == 6
    assert grid.has_large_rock(11, 11)


def test_default_map_keeps_spawns_clear():
    grid = build_default_map()
    tiles = set(occupied_tiles(grid))

    for spawn in DEFAULT_SPAWNS:
        assert (spawn["x"], spawn["y"]) not in tiles


class TestProceduralMap:
    """Test seeded procedural generation."""

    def test_same_seed_same_map(self):
        assert generate_map(7) == generate_map(7)

    def test_string_seed_is_accepted(self):
        assert generate_map("harbor") == generate_map("harbor")

    def test_different_seeds_differ(self):
        assert generate_map(1) != generate_map(2)

    def test_seed_is_recorded(self):
        grid = generate_map(7)

        assert grid.mode == "procedural"
        assert grid.seed == 7

    def test_missing_seed_is_drawn_and_recorded(self):
        grid = generate_map()

        assert grid.seed is not None
        assert generate_map(grid.seed) == grid

    @pytest.mark.parametrize("seed", [0, 1, 7, 42, 1234])
    def test_nothing_overlaps(self, seed):
        tiles = occupied_tiles(generate_map(seed))

        assert len(tiles) == len(set(tiles))

    @pytest.mark.parametrize("seed", [0, 1, 7, 42, 1234])
    def test_spawn_neighbourhoods_stay_clear(self, seed):
        tiles = set(occupied_tiles(generate_map(seed)))
        buffer = PROCEDURAL_CONFIG["spawn_buffer"]

        for spawn in DEFAULT_SPAWNS:
            for dx in range(-buffer, buffer + 1):
                for dy in range(-buffer, buffer + 1):
                    assert (spawn["x"] + dx, spawn["y"] + dy) not in tiles

    @pytest.mark.parametrize("seed", [0, 1, 7, 42, 1234])
    def test_everything_on_grid_within_counts(self, seed):
        grid = generate_map(seed)

        assert all(grid.in_bounds(x, y) for x, y in occupied_tiles(grid))
        whirlpools = [h for h in grid.hazards if h.kind == "whirlpool"]
        winds = [h for h in grid.hazards if h.kind == "wind"]
        assert len(whirlpools) <= PROCEDURAL_CONFIG["whirlpool_count"]
        assert len(winds) <= PROCEDURAL_CONFIG["wind_count"]
        total_rocks = PROCEDURAL_CONFIG["large_rock_count"] + PROCEDURAL_CONFIG["small_rock_count"]
        assert len(grid.rocks) <= total_rocks


class TestInitialState:
    """Test match creation."""

    def test_default_match(self):
        state = create_initial_state()

        assert state.turn_number == 1
        assert state.status == "planning"
        p1, p2 = state.ships
        assert (p1.id, p1.position, p1.facing, p1.type_id) == ("P1", (5, 12), "E", "cutter")
        assert (p2.id, p2.position, p2.facing, p2.type_id) == ("P2", (18, 12), "W", "war_brig")
        assert p1.hp == p1.max_hp

    def test_hull_types_and_names(self):
        state = create_initial_state(
            p1_type_id="dhow", p2_type_id="baghlah", p1_name="Nadia", p2_name="Omar"
        )

        assert state.get_ship("P1").type_id == "dhow"
        assert state.get_ship("P2").name == "Omar"

    def test_procedural_match_uses_seed(self):
        state = create_initial_state(map_mode="procedural", map_seed=99)

        assert state.grid == generate_map(99)

    def test_unknown_map_mode(self):
        with pytest.raises(ValueError, match="Invalid map mode"):
            create_initial_state(map_mode="archipelago")
