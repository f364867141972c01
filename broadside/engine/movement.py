"""Phase step 1: Simultaneous ship movement.

This module handles:
1. Building a movement proposal per ship from the pre-phase snapshot
2. Static validation of each step (map edge, rocks)
3. Collision arbitration between the two proposals
4. Applying final positions and facings

Both proposals are computed from the same frozen snapshot and then run
through a fixed arbitration table, so neither ship gains anything from
being listed first.

A turn is an L-shaped path: step 1 is the bow tile along the current
facing, step 2 is one tile along the new facing. If the bow tile is
blocked the whole turn is aborted and the ship keeps its old facing. If
only step 2 is blocked the ship stops on step 1 but still takes the new
facing.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..models.grid import Grid
from ..models.plan import PhasePlan
from ..models.ship import Ship
from ..utils.constants import MOVE_FORWARD, MOVE_TURN_LEFT, MOVE_TURN_RIGHT
from ..utils.directions import TURN_LEFT, TURN_RIGHT, step

logger = logging.getLogger(__name__)

BLOCKED_EDGE = "edge"
BLOCKED_OBSTACLE = "obstacle"

BLOCKED_REASON_TEXT = {
    BLOCKED_EDGE: "the edge of the map",
    BLOCKED_OBSTACLE: "rocks",
}

Tile = tuple[int, int]


@dataclass
class MoveProposal:
    """Where a ship wants to go this phase, before arbitration.

    Attributes:
        ship_id: Ship making the proposal
        move: Requested move
        start: Position at the start of the phase
        facing_start: Facing at the start of the phase
        facing_end: Facing the ship takes if the move goes through
        step1: Bow tile (forward and turn moves), None for no move
        step1_blocked: "edge" or "obstacle" if step 1 fails static checks
        step2: Lateral tile completing a turn, None otherwise
        step2_blocked: "edge" or "obstacle" if step 2 fails static checks
    """

    ship_id: str
    move: str
    start: Tile
    facing_start: str
    facing_end: str
    step1: Optional[Tile] = None
    step1_blocked: Optional[str] = None
    step2: Optional[Tile] = None
    step2_blocked: Optional[str] = None

    @property
    def is_turn(self) -> bool:
        return is_turn_move(self.move)

    @property
    def step1_clear(self) -> bool:
        return self.step1 is not None and self.step1_blocked is None

    @property
    def step2_clear(self) -> bool:
        return self.step2 is not None and self.step2_blocked is None


def is_turn_move(move: str) -> bool:
    return move in (MOVE_TURN_LEFT, MOVE_TURN_RIGHT)


def _static_block(tile: Tile, grid: Grid) -> Optional[str]:
    if not grid.in_bounds(*tile):
        return BLOCKED_EDGE
    if grid.is_blocked(*tile):
        return BLOCKED_OBSTACLE
    return None


def compute_proposal(ship: Ship, move: str, grid: Grid) -> MoveProposal:
    """Build a movement proposal for one ship.

    Forward moves fill step 1 only. Turn moves fill step 1 and, when the bow
    tile is clear, step 2 along the new facing.

    Args:
        ship: Ship at its pre-phase position
        move: Requested move
        grid: Static world used for edge and rock checks

    Returns:
        MoveProposal with static blocking already applied
    """
    proposal = MoveProposal(
        ship_id=ship.id,
        move=move,
        start=ship.position,
        facing_start=ship.facing,
        facing_end=ship.facing,
    )

    if move == MOVE_FORWARD:
        proposal.step1 = step(ship.x, ship.y, ship.facing)
        proposal.step1_blocked = _static_block(proposal.step1, grid)
        return proposal

    if is_turn_move(move):
        turn_table = TURN_LEFT if move == MOVE_TURN_LEFT else TURN_RIGHT
        proposal.facing_end = turn_table[ship.facing]

        proposal.step1 = step(ship.x, ship.y, ship.facing)
        proposal.step1_blocked = _static_block(proposal.step1, grid)
        if proposal.step1_blocked:
            return proposal

        proposal.step2 = step(*proposal.step1, proposal.facing_end)
        proposal.step2_blocked = _static_block(proposal.step2, grid)

    return proposal


def resolve_movement(
    ships: list[Ship], plans_by_ship_id: dict[str, PhasePlan], grid: Grid
) -> tuple[list[Ship], list[str]]:
    """Resolve movement for both ships simultaneously.

    Step 1 arbitration, in precedence order:
    1. Same bow tile: both hold position
    2. Head-on swap (each bow tile is the other's start): both hold position
    3. Moving into a ship whose own step 1 did not go through: mover holds

    Step 2 arbitration, against the other ship's resolved step-1 position:
    - Same lateral tile: both turns stop at step 1
    - Lateral tile equals the other ship's step-1 position: that turn stops

    Args:
        ships: The two ships at their pre-phase positions
        plans_by_ship_id: Canonical plan for each ship this phase
        grid: Static world

    Returns:
        Tuple of (new ship snapshots in input order, movement events)
    """
    a, b = ships
    a_move = plans_by_ship_id.get(a.id, PhasePlan.neutral()).move
    b_move = plans_by_ship_id.get(b.id, PhasePlan.neutral()).move
    a_prop = compute_proposal(a, a_move, grid)
    b_prop = compute_proposal(b, b_move, grid)

    events: list[str] = []

    # Step 1: bow tiles (forward move or the first leg of a turn)
    for ship, prop in ((a, a_prop), (b, b_prop)):
        if prop.step1_blocked:
            reason = BLOCKED_REASON_TEXT[prop.step1_blocked]
            if prop.is_turn:
                events.append(f"{ship.name} pivots but the bow is blocked by {reason}.")
            else:
                events.append(f"{ship.name} cannot move forward: blocked by {reason}.")

    a_step1 = a_prop.step1_clear
    b_step1 = b_prop.step1_clear

    if a_step1 and b_step1:
        if a_prop.step1 == b_prop.step1:
            a_step1 = b_step1 = False
            events.append("Both ships clash in maneuvering and remain in place.")
        elif a_prop.step1 == b_prop.start and b_prop.step1 == a_prop.start:
            a_step1 = b_step1 = False
            events.append("Both ships collide head-on and remain in place.")

    if a_step1 and a_prop.step1 == b_prop.start and not b_step1:
        a_step1 = False
        events.append(f"{a.name} cannot move into {b.name}.")
    if b_step1 and b_prop.step1 == a_prop.start and not a_step1:
        b_step1 = False
        events.append(f"{b.name} cannot move into {a.name}.")

    a_pos1 = a_prop.step1 if a_step1 else a_prop.start
    b_pos1 = b_prop.step1 if b_step1 else b_prop.start

    # Step 2: lateral leg completing a turn
    a_step2 = a_prop.is_turn and a_step1 and a_prop.step2_clear
    b_step2 = b_prop.is_turn and b_step1 and b_prop.step2_clear

    for ship, prop, step1_ok in ((a, a_prop, a_step1), (b, b_prop, b_step1)):
        if prop.is_turn and step1_ok and prop.step2_blocked:
            reason = BLOCKED_REASON_TEXT[prop.step2_blocked]
            events.append(f"{ship.name} cannot complete the turn: blocked by {reason}.")

    if a_step2 and b_step2 and a_prop.step2 == b_prop.step2:
        a_step2 = b_step2 = False
        events.append("Both ships collide during their turns and hold position.")

    if a_step2 and a_prop.step2 == b_pos1:
        a_step2 = False
        events.append(f"{a.name} cannot complete the turn into {b.name}.")
    if b_step2 and b_prop.step2 == a_pos1:
        b_step2 = False
        events.append(f"{b.name} cannot complete the turn into {a.name}.")

    moved = [
        _apply_proposal(a, a_prop, a_pos1, a_step1, a_step2),
        _apply_proposal(b, b_prop, b_pos1, b_step1, b_step2),
    ]

    for before, after in zip(ships, moved):
        if before.position != after.position or before.facing != after.facing:
            logger.debug(
                f"{after.id} moves {before.position}/{before.facing} -> "
                f"{after.position}/{after.facing}"
            )

    return moved, events


def _apply_proposal(
    ship: Ship, prop: MoveProposal, pos1: Tile, step1_ok: bool, step2_ok: bool
) -> Ship:
    """Return a new ship snapshot with the arbitrated result applied."""
    final = prop.step2 if step2_ok else pos1
    facing = ship.facing
    if prop.is_turn and step1_ok:
        facing = prop.facing_end
    return replace(ship, x=final[0], y=final[1], facing=facing)
