"""Greedy heuristic planner for a computer-controlled ship.

The planner produces the same plan shape a human planner would: an ordered
list of PHASE_COUNT PhasePlan entries. It assumes the enemy stays where it
is for the whole turn and walks its own ship through a lightweight preview
of each chosen move.
"""

import logging
from dataclasses import replace

from ..models.grid import Grid
from ..models.match import MatchState
from ..models.plan import PhasePlan, SideAction
from ..models.ship import Ship
from ..utils.constants import (
    MOVE_FORWARD,
    MOVE_NONE,
    MOVE_TURN_LEFT,
    MOVE_TURN_RIGHT,
    PHASE_COUNT,
    SIDE_PORT,
    SIDE_STARBOARD,
)
from ..utils.directions import TURN_LEFT, TURN_RIGHT, side_direction, step, trace_line

logger = logging.getLogger(__name__)


def in_line_range(attacker: Ship, target: Ship, direction: str, length: int) -> bool:
    """Check whether target sits on the straight line out to `length` tiles."""
    return any(
        (x, y) == target.position for x, y, _ in trace_line(attacker.x, attacker.y, direction, length)
    )


def desired_facing_toward(attacker: Ship, target: Ship) -> str:
    """Face along the dominant axis toward the target (ties favour east/west)."""
    dx = target.x - attacker.x
    dy = target.y - attacker.y
    if abs(dx) >= abs(dy):
        return "E" if dx >= 0 else "W"
    return "S" if dy >= 0 else "N"


def choose_turn(current: str, desired: str) -> str:
    if current == desired:
        return MOVE_NONE
    if TURN_LEFT[current] == desired:
        return MOVE_TURN_LEFT
    return MOVE_TURN_RIGHT


def can_move_forward(ship: Ship, grid: Grid, enemy: Ship) -> bool:
    """Forward-only check used for previews. Rocks are not considered."""
    nx, ny = step(ship.x, ship.y, ship.facing)
    return grid.in_bounds(nx, ny) and (nx, ny) != enemy.position


def choose_action(attacker: Ship, target: Ship) -> tuple[str, SideAction]:
    """Pick the best side action: grapple beats fire, port beats starboard.

    Returns:
        Tuple of (side, action); the action is none when nothing lines up
    """
    port_dir = side_direction(attacker.facing, SIDE_PORT)
    starboard_dir = side_direction(attacker.facing, SIDE_STARBOARD)

    if in_line_range(attacker, target, port_dir, attacker.grapple_range):
        return SIDE_PORT, SideAction.grapple()
    if in_line_range(attacker, target, starboard_dir, attacker.grapple_range):
        return SIDE_STARBOARD, SideAction.grapple()
    if in_line_range(attacker, target, port_dir, attacker.cannon_range):
        return SIDE_PORT, SideAction.fire(attacker.shots_per_attack)
    if in_line_range(attacker, target, starboard_dir, attacker.cannon_range):
        return SIDE_STARBOARD, SideAction.fire(attacker.shots_per_attack)
    return SIDE_PORT, SideAction()


def choose_move(attacker: Ship, target: Ship, grid: Grid) -> str:
    """Turn toward the target, otherwise advance when the bow tile is clear."""
    desired = desired_facing_toward(attacker, target)
    if attacker.facing == desired:
        return MOVE_FORWARD if can_move_forward(attacker, grid, target) else MOVE_NONE
    return choose_turn(attacker.facing, desired)


def preview_move(ship: Ship, move: str, grid: Grid, enemy: Ship) -> Ship:
    """Approximate the effect of a move: advance one tile, or rotate in place."""
    if move == MOVE_FORWARD and can_move_forward(ship, grid, enemy):
        nx, ny = step(ship.x, ship.y, ship.facing)
        return replace(ship, x=nx, y=ny)
    if move == MOVE_TURN_LEFT:
        return replace(ship, facing=TURN_LEFT[ship.facing])
    if move == MOVE_TURN_RIGHT:
        return replace(ship, facing=TURN_RIGHT[ship.facing])
    return ship


def generate_ai_plan(match_state: MatchState, ship_id: str) -> list[PhasePlan]:
    """Generate a deterministic PHASE_COUNT-entry plan for one ship.

    Args:
        match_state: Current match state (read only)
        ship_id: Ship to plan for

    Returns:
        List of PhasePlan, empty if either ship is missing
    """
    ship = match_state.get_ship(ship_id)
    enemy = match_state.opponent_of(ship_id)
    if ship is None or enemy is None:
        logger.warning(f"Cannot plan for {ship_id}: ship or opponent missing")
        return []

    plan = []
    simulated = replace(ship)
    for _ in range(PHASE_COUNT):
        side, action = choose_action(simulated, enemy)
        move = choose_move(simulated, enemy, match_state.grid)
        if side == SIDE_PORT:
            plan.append(PhasePlan(move=move, port=action))
        else:
            plan.append(PhasePlan(move=move, starboard=action))
        simulated = preview_move(simulated, move, match_state.grid, enemy)

    return plan
