"""Tests for data models."""

import pytest

from broadside.models.grid import Grid, Hazard, Rock
from broadside.models.match import MatchState
from broadside.models.plan import PhasePlan, SideAction
from broadside.models.ship import Ship, build_ship
from broadside.utils.constants import RNG_SEED_DEFAULT
from broadside.utils.directions import side_direction, step, trace_line
from broadside.utils.rng import GameRNG


class TestShip:
    """Test Ship model."""

    def test_create_valid_ship(self):
        ship = Ship(id="P1", name="Tide", x=3, y=4, facing="E", hp=5, max_hp=16)

        assert ship.position == (3, 4)
        assert ship.alive is True
        assert ship.cannon_range == 3
        assert ship.damage_per_shot == 1

    def test_invalid_facing(self):
        with pytest.raises(ValueError, match="Invalid facing"):
            Ship(id="P1", name="Tide", x=0, y=0, facing="NE", hp=5, max_hp=5)

    def test_hp_above_max(self):
        with pytest.raises(ValueError, match="Invalid hp"):
            Ship(id="P1", name="Tide", x=0, y=0, facing="N", hp=6, max_hp=5)

    def test_non_positive_max_hp(self):
        with pytest.raises(ValueError, match="Invalid max_hp"):
            Ship(id="P1", name="Tide", x=0, y=0, facing="N", hp=0, max_hp=0)

    def test_zero_shots_per_attack(self):
        with pytest.raises(ValueError, match="Invalid shots_per_attack"):
            Ship(id="P1", name="Tide", x=0, y=0, facing="N", hp=5, max_hp=5, shots_per_attack=0)

    def test_empty_id(self):
        with pytest.raises(ValueError, match="id cannot be empty"):
            Ship(id="", name="Tide", x=0, y=0, facing="N", hp=5, max_hp=5)

    def test_damage_per_shot_by_cannonball(self):
        medium = Ship(
            id="P1", name="Tide", x=0, y=0, facing="N", hp=5, max_hp=5, cannonball_size="medium"
        )
        large = Ship(
            id="P1", name="Tide", x=0, y=0, facing="N", hp=5, max_hp=5, cannonball_size="large"
        )

        assert medium.damage_per_shot == 2
        assert large.damage_per_shot == 4


class TestBuildShip:
    """Test hull presets."""

    def test_war_frigate_preset(self):
        ship = build_ship("P2", "Ember", 1, 2, "W", "war_frigate")

        assert ship.hp == ship.max_hp == 30
        assert ship.cannon_range == 4
        assert ship.cannonball_size == "large"
        assert ship.shots_per_attack == 2
        assert ship.type_label == "War Frigate"

    def test_unknown_type_falls_back_to_cutter(self):
        ship = build_ship("P1", "Tide", 0, 0, "N", "galleon")

        assert ship.type_id == "cutter"
        assert ship.max_hp == 16


class TestGrid:
    """Test Grid, Hazard and Rock models."""

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError, match="Invalid grid size"):
            Grid(width=0, height=5)

    def test_collections_are_frozen_to_tuples(self):
        grid = Grid(width=5, height=5, rocks=[Rock(1, 1)])

        assert isinstance(grid.rocks, tuple)
        assert isinstance(grid.hazards, tuple)

    def test_in_bounds(self):
        grid = Grid(width=5, height=4)

        assert grid.in_bounds(0, 0)
        assert grid.in_bounds(4, 3)
        assert not grid.in_bounds(5, 0)
        assert not grid.in_bounds(0, -1)

    def test_rock_queries(self):
        grid = Grid(width=5, height=5, rocks=(Rock(1, 1, "small"), Rock(2, 2, "large")))

        assert grid.is_blocked(1, 1)
        assert grid.is_blocked(2, 2)
        assert not grid.is_blocked(3, 3)
        assert not grid.has_large_rock(1, 1)
        assert grid.has_large_rock(2, 2)

    def test_hazard_lookup(self):
        whirlpool = Hazard.whirlpool(1, 1, size=2, spin="ccw")
        wind = Hazard.wind(4, 0, "S")
        grid = Grid(width=5, height=5, hazards=(whirlpool, wind))

        assert grid.whirlpool_at(2, 2) == whirlpool
        assert grid.whirlpool_at(3, 3) is None
        assert grid.wind_at(4, 0) == wind
        assert grid.wind_at(2, 2) is None

    def test_invalid_hazards(self):
        with pytest.raises(ValueError, match="Invalid hazard kind"):
            Hazard(kind="storm", x=0, y=0)
        with pytest.raises(ValueError, match="Invalid wind direction"):
            Hazard.wind(0, 0, "up")
        with pytest.raises(ValueError, match="Invalid whirlpool size"):
            Hazard.whirlpool(0, 0, size=0)
        with pytest.raises(ValueError, match="Invalid whirlpool spin"):
            Hazard.whirlpool(0, 0, spin="left")

    def test_invalid_rock_size(self):
        with pytest.raises(ValueError, match="Invalid rock size"):
            Rock(0, 0, "huge")


class TestMatchState:
    """Test MatchState model."""

    def make_state(self):
        return MatchState(
            grid=Grid(width=5, height=5),
            ships=[
                Ship(id="P1", name="Tide", x=0, y=0, facing="E", hp=5, max_hp=5),
                Ship(id="P2", name="Ember", x=4, y=4, facing="W", hp=5, max_hp=5),
            ],
        )

    def test_defaults(self):
        state = self.make_state()

        assert state.turn_number == 1
        assert state.status == "planning"
        assert state.phase_index is None
        assert not state.is_finished

    def test_lookups(self):
        state = self.make_state()

        assert state.get_ship("P2").name == "Ember"
        assert state.get_ship("P3") is None
        assert state.opponent_of("P1").id == "P2"

    def test_living_ships(self):
        state = self.make_state()
        state.ships[0].alive = False

        assert [s.id for s in state.living_ships()] == ["P2"]

    def test_invalid_turn_number(self):
        with pytest.raises(ValueError, match="Invalid turn_number"):
            MatchState(grid=Grid(width=5, height=5), turn_number=0)

    def test_invalid_status(self):
        with pytest.raises(ValueError, match="Invalid status"):
            MatchState(grid=Grid(width=5, height=5), status="paused")

    def test_duplicate_ship_ids(self):
        ship = Ship(id="P1", name="Tide", x=0, y=0, facing="E", hp=5, max_hp=5)

        with pytest.raises(ValueError, match="Duplicate ship ids"):
            MatchState(grid=Grid(width=5, height=5), ships=[ship, ship])


class TestPlans:
    """Test canonical plan types."""

    def test_neutral_plan(self):
        plan = PhasePlan.neutral()

        assert plan.move == "none"
        assert plan.port.is_none
        assert plan.starboard.is_none

    def test_side_lookup(self):
        plan = PhasePlan(port=SideAction.fire(2), starboard=SideAction.grapple())

        assert plan.side("port") == SideAction(kind="fire", shots=2)
        assert plan.side("starboard").kind == "grapple"


class TestDirections:
    """Test direction helpers."""

    def test_step(self):
        assert step(2, 2, "N") == (2, 1)
        assert step(2, 2, "E", 3) == (5, 2)

    def test_side_direction(self):
        assert side_direction("N", "port") == "W"
        assert side_direction("N", "starboard") == "E"
        assert side_direction("W", "port") == "S"
        assert side_direction("S", "starboard") == "W"

    def test_trace_line_excludes_origin(self):
        assert trace_line(0, 0, "S", 3) == [(0, 1, 1), (0, 2, 2), (0, 3, 3)]


def test_rng_is_reproducible():
    first = GameRNG(RNG_SEED_DEFAULT)
    second = GameRNG(RNG_SEED_DEFAULT)

    assert [first.randint(0, 100) for _ in range(5)] == [second.randint(0, 100) for _ in range(5)]
    assert first.choice("NESW") == second.choice("NESW")
