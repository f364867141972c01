"""Phase step 3: Cannon fire and grapples.

This module handles:
1. Deriving each broadside's absolute direction from the ship's facing
2. Tracing fire lines with line-of-sight truncation at large rocks
3. Clamping requested shot counts and totalling damage
4. Tracing grapple lines (rocks never stop a grapple)

Every attacker, and both sides of every attacker, read the same post-hazard
snapshot. Damage is only totalled here; it is applied by the win evaluator.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..models.grid import Grid
from ..models.plan import PhasePlan, SideAction
from ..models.ship import Ship
from ..utils.constants import KIND_FIRE, KIND_GRAPPLE, SIDES
from ..utils.directions import side_direction, trace_line

logger = logging.getLogger(__name__)

TRACE_SHOT = "shot"
TRACE_GRAPPLE = "grapple"

IMPACT_SHIP = "ship"
IMPACT_OBSTACLE = "obstacle"
IMPACT_MISS = "miss"


@dataclass(frozen=True)
class TraceTile:
    x: int
    y: int
    step: int


@dataclass(frozen=True)
class Impact:
    """Where a traced line ends for display purposes."""

    index: int
    type: str  # "ship", "obstacle" or "miss"
    x: Optional[int] = None
    y: Optional[int] = None


@dataclass
class CombatTrace:
    """Record of one fire or grapple attempt, for rendering and logs.

    Attributes:
        attacker_id: Ship that acted
        kind: "shot" or "grapple"
        side: "port" or "starboard"
        line: Tiles considered, after any line-of-sight truncation
        impact: Where the line ends and what it hit
        shots: Shots used (fire only)
        cannonball_size: Ammunition size (fire only)
    """

    attacker_id: str
    kind: str
    side: str
    line: list[TraceTile]
    impact: Impact
    shots: Optional[int] = None
    cannonball_size: Optional[str] = None


@dataclass
class CombatResult:
    """Aggregated outcome of all attacks in one phase.

    Attributes:
        damage_by_ship_id: Damage each ship receives this phase
        grapple_by_ship_id: Whether each ship landed a grapple this phase
        traces: Ordered fire/grapple traces
        events: Human-readable combat messages
    """

    damage_by_ship_id: dict[str, int] = field(default_factory=dict)
    grapple_by_ship_id: dict[str, bool] = field(default_factory=dict)
    traces: list[CombatTrace] = field(default_factory=list)
    events: list[str] = field(default_factory=list)


def clamp_shots(requested: Optional[int], shots_per_attack: int) -> int:
    """Clamp a requested shot count to [1, shots_per_attack].

    An unspecified request fires everything the ship has.
    """
    if requested is None:
        return shots_per_attack
    return min(shots_per_attack, max(1, requested))


def apply_line_of_sight(line: list[TraceTile], grid: Grid) -> tuple[list[TraceTile], bool]:
    """Cut a fire line at the first large rock, keeping the rock tile.

    Returns:
        Tuple of (possibly truncated line, whether it was truncated)
    """
    for index, tile in enumerate(line):
        if grid.has_large_rock(tile.x, tile.y):
            return line[: index + 1], True
    return line, False


def _trace(attacker: Ship, direction: str, length: int) -> list[TraceTile]:
    return [TraceTile(x, y, s) for x, y, s in trace_line(attacker.x, attacker.y, direction, length)]


def _hit_index(line: list[TraceTile], target: Ship) -> int:
    for index, tile in enumerate(line):
        if tile.x == target.x and tile.y == target.y:
            return index
    return -1


def _shot_suffix(shots_used: int, max_shots: int) -> str:
    if shots_used > 1:
        return f" ({shots_used} shots)"
    if max_shots > 1:
        return " (1 shot)"
    return ""


def resolve_combat(
    ships: list[Ship], plans_by_ship_id: dict[str, PhasePlan], grid: Grid
) -> CombatResult:
    """Resolve every fire and grapple intent for the phase.

    Each ship attacks the other ship only. Port is evaluated before
    starboard, but both read the same snapshot so the order only affects
    the ordering of traces and events.

    Args:
        ships: Ship snapshots after hazards
        plans_by_ship_id: Canonical plan for each ship this phase
        grid: Static world, used for line of sight

    Returns:
        CombatResult with damage totals, grapple flags, traces and events
    """
    result = CombatResult(
        damage_by_ship_id={ship.id: 0 for ship in ships},
        grapple_by_ship_id={ship.id: False for ship in ships},
    )

    for attacker in ships:
        defender = next((ship for ship in ships if ship.id != attacker.id), None)
        if defender is None:
            continue
        plan = plans_by_ship_id.get(attacker.id, PhasePlan.neutral())

        for side in SIDES:
            action = plan.side(side)
            if action.kind == KIND_FIRE:
                _resolve_fire(attacker, defender, side, action, grid, result)
            elif action.kind == KIND_GRAPPLE:
                _resolve_grapple(attacker, defender, side, result)

    return result


def _resolve_fire(
    attacker: Ship,
    defender: Ship,
    side: str,
    action: SideAction,
    grid: Grid,
    result: CombatResult,
) -> None:
    direction = side_direction(attacker.facing, side)
    shots_used = clamp_shots(action.shots, attacker.shots_per_attack)
    total_damage = attacker.damage_per_shot * shots_used

    line, blocked = apply_line_of_sight(_trace(attacker, direction, attacker.cannon_range), grid)
    hit_index = _hit_index(line, defender)

    if hit_index >= 0:
        impact_index, impact_type = hit_index, IMPACT_SHIP
    elif blocked:
        impact_index, impact_type = len(line) - 1, IMPACT_OBSTACLE
    else:
        impact_index, impact_type = len(line) - 1, IMPACT_MISS

    impact_tile = line[impact_index] if 0 <= impact_index < len(line) else None
    result.traces.append(
        CombatTrace(
            attacker_id=attacker.id,
            kind=TRACE_SHOT,
            side=side,
            line=line,
            impact=Impact(
                index=max(impact_index, 0),
                type=impact_type,
                x=impact_tile.x if impact_tile else None,
                y=impact_tile.y if impact_tile else None,
            ),
            shots=shots_used,
            cannonball_size=attacker.cannonball_size,
        )
    )

    suffix = _shot_suffix(shots_used, attacker.shots_per_attack)
    if impact_type == IMPACT_SHIP:
        result.damage_by_ship_id[defender.id] += total_damage
        result.events.append(f"{attacker.name} fires {side}{suffix} and hits {defender.name}.")
        logger.debug(f"{attacker.id} hits {defender.id} for {total_damage}")
    elif impact_type == IMPACT_OBSTACLE:
        result.events.append(f"{attacker.name} fires {side}{suffix} into a large rock.")
    else:
        result.events.append(f"{attacker.name} fires {side}{suffix} and misses.")


def _resolve_grapple(attacker: Ship, defender: Ship, side: str, result: CombatResult) -> None:
    direction = side_direction(attacker.facing, side)
    line = _trace(attacker, direction, attacker.grapple_range)
    connected = _hit_index(line, defender) >= 0
    last = line[-1] if line else None

    result.traces.append(
        CombatTrace(
            attacker_id=attacker.id,
            kind=TRACE_GRAPPLE,
            side=side,
            line=line,
            impact=Impact(
                index=max(len(line) - 1, 0),
                type=IMPACT_SHIP if connected else IMPACT_MISS,
                x=last.x if last else None,
                y=last.y if last else None,
            ),
        )
    )

    if connected:
        result.grapple_by_ship_id[attacker.id] = True
        result.events.append(f"{attacker.name} lands a {side} grapple.")
    else:
        result.events.append(f"{attacker.name} attempts {side} grapple but fails.")
