"""Phase step 4: Damage application and win condition checking.

This module handles:
1. Applying the phase's accumulated damage (hp floored at 0)
2. Updating alive flags
3. Determining winner (ship id, draw, or no decision)

Grapples outrank destruction: a landed grapple decides the match even if
the grappling ship sank in the same phase.
"""

from dataclasses import dataclass, replace
from typing import Optional

from ..models.ship import Ship
from .combat import CombatResult


@dataclass
class PhaseOutcome:
    """Decision reached at the end of a phase.

    Attributes:
        winner_id: Winning ship id, or None
        draw: True if the match ended in a draw
        reason: Human-readable explanation, None when undecided
    """

    winner_id: Optional[str] = None
    draw: bool = False
    reason: Optional[str] = None

    @property
    def decided(self) -> bool:
        return self.winner_id is not None or self.draw


def check_victory(
    ships: list[Ship], combat: CombatResult
) -> tuple[list[Ship], PhaseOutcome, list[str]]:
    """Apply combat damage and evaluate win conditions.

    Precedence:
    1. Both ships grappled -> draw
    2. One ship grappled -> that ship wins
    3. Both sunk -> draw; one sunk -> the other wins; otherwise continue

    Args:
        ships: The two ship snapshots after hazards
        combat: Damage and grapple results for the phase

    Returns:
        Tuple of (damaged ship snapshots, outcome, result events)
    """
    next_ships = []
    events: list[str] = []

    for ship in ships:
        damage = combat.damage_by_ship_id.get(ship.id, 0)
        hp = ship.hp
        if damage > 0:
            hp = max(0, ship.hp - damage)
            events.append(f"{ship.name} takes {damage} damage (HP {hp}).")
        next_ships.append(replace(ship, hp=hp, alive=hp > 0))

    a, b = next_ships
    a_grappled = combat.grapple_by_ship_id.get(a.id, False)
    b_grappled = combat.grapple_by_ship_id.get(b.id, False)

    if a_grappled and b_grappled:
        outcome = PhaseOutcome(draw=True, reason="Both grapples connected simultaneously.")
    elif a_grappled:
        outcome = PhaseOutcome(winner_id=a.id, reason=f"{a.name} wins by grapple.")
    elif b_grappled:
        outcome = PhaseOutcome(winner_id=b.id, reason=f"{b.name} wins by grapple.")
    elif not a.alive and not b.alive:
        outcome = PhaseOutcome(draw=True, reason="Both ships were destroyed in the same phase.")
    elif not a.alive:
        outcome = PhaseOutcome(winner_id=b.id, reason=f"{b.name} sinks {a.name}.")
    elif not b.alive:
        outcome = PhaseOutcome(winner_id=a.id, reason=f"{a.name} sinks {b.name}.")
    else:
        outcome = PhaseOutcome()

    return next_ships, outcome, events
