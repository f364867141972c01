"""Tests for phase step 3: Cannon fire and grapples."""

from broadside.engine.combat import (
    IMPACT_MISS,
    IMPACT_OBSTACLE,
    IMPACT_SHIP,
    TRACE_GRAPPLE,
    TRACE_SHOT,
    TraceTile,
    apply_line_of_sight,
    clamp_shots,
    resolve_combat,
)
from broadside.models.grid import Grid, Rock
from broadside.models.plan import PhasePlan, SideAction
from broadside.models.ship import Ship


def make_ship(ship_id, x, y, facing="N", **kwargs):
    return Ship(
        id=ship_id, name=f"Ship {ship_id}", x=x, y=y, facing=facing, hp=10, max_hp=10, **kwargs
    )


def open_grid():
    return Grid(width=10, height=10)


def plans(a_plan=None, b_plan=None):
    return {"A": a_plan or PhasePlan(), "B": b_plan or PhasePlan()}


class TestFire:
    """Test broadside cannon fire."""

    def test_starboard_fire_hits_target_in_range(self):
        """Facing north, starboard points east."""
        ships = [make_ship("A", 2, 5, "N"), make_ship("B", 4, 5, "S")]

        result = resolve_combat(ships, plans(PhasePlan(starboard=SideAction.fire())), open_grid())

        assert result.damage_by_ship_id == {"A": 0, "B": 1}
        assert result.events == ["Ship A fires starboard and hits Ship B."]
        trace = result.traces[0]
        assert trace.kind == TRACE_SHOT
        assert trace.side == "starboard"
        assert trace.impact.type == IMPACT_SHIP
        assert (trace.impact.x, trace.impact.y) == (4, 5)

    def test_port_fire_points_left_of_facing(self):
        ships = [make_ship("A", 5, 5, "E"), make_ship("B", 5, 3, "S")]

        result = resolve_combat(ships, plans(PhasePlan(port=SideAction.fire())), open_grid())

        assert result.damage_by_ship_id["B"] == 1
        assert [(t.x, t.y) for t in result.traces[0].line] == [(5, 4), (5, 3), (5, 2)]

    def test_target_beyond_range_is_missed(self):
        ships = [make_ship("A", 0, 5, "N"), make_ship("B", 4, 5)]

        result = resolve_combat(ships, plans(PhasePlan(starboard=SideAction.fire())), open_grid())

        assert result.damage_by_ship_id["B"] == 0
        assert result.events == ["Ship A fires starboard and misses."]
        assert result.traces[0].impact.type == IMPACT_MISS
        assert len(result.traces[0].line) == 3

    def test_wrong_side_misses(self):
        ships = [make_ship("A", 2, 5, "N"), make_ship("B", 4, 5)]

        result = resolve_combat(ships, plans(PhasePlan(port=SideAction.fire())), open_grid())

        assert result.damage_by_ship_id["B"] == 0

    def test_large_rock_blocks_line_of_sight(self):
        grid = Grid(width=10, height=10, rocks=(Rock(3, 5, "large"),))
        ships = [make_ship("A", 2, 5, "N"), make_ship("B", 4, 5)]

        result = resolve_combat(ships, plans(PhasePlan(starboard=SideAction.fire())), grid)

        assert result.damage_by_ship_id["B"] == 0
        assert result.events == ["Ship A fires starboard into a large rock."]
        trace = result.traces[0]
        assert trace.impact.type == IMPACT_OBSTACLE
        assert [(t.x, t.y) for t in trace.line] == [(3, 5)]

    def test_small_rock_does_not_block(self):
        grid = Grid(width=10, height=10, rocks=(Rock(3, 5, "small"),))
        ships = [make_ship("A", 2, 5, "N"), make_ship("B", 4, 5)]

        result = resolve_combat(ships, plans(PhasePlan(starboard=SideAction.fire())), grid)

        assert result.damage_by_ship_id["B"] == 1

    def test_both_sides_fire_from_same_snapshot(self):
        """Port and starboard resolve against the same target position."""
        ships = [make_ship("A", 5, 5, "N"), make_ship("B", 6, 5)]
        plan = PhasePlan(port=SideAction.fire(), starboard=SideAction.fire())

        result = resolve_combat(ships, plans(plan), open_grid())

        assert result.damage_by_ship_id["B"] == 1
        assert [t.side for t in result.traces] == ["port", "starboard"]
        assert result.events[0] == "Ship A fires port and misses."

    def test_mutual_fire_both_take_damage(self):
        ships = [make_ship("A", 5, 5, "N"), make_ship("B", 6, 5, "N")]
        a_plan = PhasePlan(starboard=SideAction.fire())
        b_plan = PhasePlan(port=SideAction.fire())

        result = resolve_combat(ships, plans(a_plan, b_plan), open_grid())

        assert result.damage_by_ship_id == {"A": 1, "B": 1}


class TestShots:
    """Test multi-shot clamping and damage scaling."""

    def test_clamp_shots(self):
        assert clamp_shots(None, 3) == 3
        assert clamp_shots(0, 3) == 1
        assert clamp_shots(-2, 3) == 1
        assert clamp_shots(2, 3) == 2
        assert clamp_shots(9, 3) == 3

    def test_requested_shots_scale_damage(self):
        attacker = make_ship("A", 2, 5, "N", shots_per_attack=3, cannonball_size="medium")
        ships = [attacker, make_ship("B", 4, 5)]

        result = resolve_combat(
            ships, plans(PhasePlan(starboard=SideAction.fire(2))), open_grid()
        )

        assert result.damage_by_ship_id["B"] == 4
        assert result.traces[0].shots == 2
        assert result.traces[0].cannonball_size == "medium"
        assert result.events == ["Ship A fires starboard (2 shots) and hits Ship B."]

    def test_unspecified_shots_fire_everything(self):
        attacker = make_ship("A", 2, 5, "N", shots_per_attack=2, cannonball_size="large")
        ships = [attacker, make_ship("B", 4, 5)]

        result = resolve_combat(ships, plans(PhasePlan(starboard=SideAction.fire())), open_grid())

        assert result.damage_by_ship_id["B"] == 8

    def test_single_shot_from_multi_shot_ship_is_labelled(self):
        attacker = make_ship("A", 2, 5, "N", shots_per_attack=2)
        ships = [attacker, make_ship("B", 9, 9)]

        result = resolve_combat(
            ships, plans(PhasePlan(starboard=SideAction.fire(1))), open_grid()
        )

        assert result.events == ["Ship A fires starboard (1 shot) and misses."]


class TestGrapple:
    """Test grapple attempts."""

    def test_adjacent_grapple_connects(self):
        ships = [make_ship("A", 2, 5, "N"), make_ship("B", 1, 5)]

        result = resolve_combat(ships, plans(PhasePlan(port=SideAction.grapple())), open_grid())

        assert result.grapple_by_ship_id == {"A": True, "B": False}
        assert result.events == ["Ship A lands a port grapple."]
        assert result.traces[0].kind == TRACE_GRAPPLE
        assert result.damage_by_ship_id == {"A": 0, "B": 0}

    def test_grapple_out_of_reach_fails(self):
        ships = [make_ship("A", 2, 5, "N"), make_ship("B", 0, 5)]

        result = resolve_combat(ships, plans(PhasePlan(port=SideAction.grapple())), open_grid())

        assert result.grapple_by_ship_id["A"] is False
        assert result.events == ["Ship A attempts port grapple but fails."]
        assert result.traces[0].impact.type == IMPACT_MISS

    def test_rocks_do_not_stop_grapple(self):
        grid = Grid(width=10, height=10, rocks=(Rock(3, 5, "large"),))
        attacker = make_ship("A", 2, 5, "N", grapple_range=2)
        ships = [attacker, make_ship("B", 4, 5)]

        result = resolve_combat(ships, plans(PhasePlan(starboard=SideAction.grapple())), grid)

        assert result.grapple_by_ship_id["A"] is True


def test_no_actions_produce_no_traces():
    ships = [make_ship("A", 2, 5), make_ship("B", 3, 5)]

    result = resolve_combat(ships, plans(), open_grid())

    assert result.traces == []
    assert result.events == []
    assert result.damage_by_ship_id == {"A": 0, "B": 0}


def test_line_of_sight_keeps_rock_tile():
    grid = Grid(width=10, height=10, rocks=(Rock(2, 0, "large"),))
    line = [TraceTile(1, 0, 1), TraceTile(2, 0, 2), TraceTile(3, 0, 3)]

    truncated, blocked = apply_line_of_sight(line, grid)

    assert blocked is True
    assert truncated == line[:2]


def test_line_of_sight_without_rocks_is_unchanged():
    line = [TraceTile(1, 0, 1), TraceTile(2, 0, 2)]

    truncated, blocked = apply_line_of_sight(line, open_grid())

    assert blocked is False
    assert truncated == line
