"""Match state container."""

from dataclasses import dataclass, field
from typing import Optional

from ..utils.constants import STATUS_FINISHED, STATUS_PLANNING, STATUSES
from .grid import Grid
from .ship import Ship


@dataclass
class MatchState:
    """Complete state of a two-ship match.

    Created once at match start. Turn resolution never mutates the state it
    is handed; it returns a new MatchState per turn.
    """

    grid: Grid
    ships: list[Ship] = field(default_factory=list)  # Exactly two in a real match
    turn_number: int = 1
    phase_index: Optional[int] = None  # 0-based phase being executed, None while planning
    status: str = STATUS_PLANNING  # "planning", "executing" or "finished"
    winner_id: Optional[str] = None  # Ship id of the winner, None for draw/undecided
    draw: bool = False

    def __post_init__(self):
        """Validate match data after initialization."""
        if self.turn_number < 1:
            raise ValueError(f"Invalid turn_number: {self.turn_number} (must be >= 1)")
        if self.status not in STATUSES:
            raise ValueError(f"Invalid status: {self.status} (must be one of {STATUSES})")
        ids = [ship.id for ship in self.ships]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate ship ids: {ids}")

    @property
    def is_finished(self) -> bool:
        return self.status == STATUS_FINISHED

    def get_ship(self, ship_id: str) -> Optional[Ship]:
        for ship in self.ships:
            if ship.id == ship_id:
                return ship
        return None

    def opponent_of(self, ship_id: str) -> Optional[Ship]:
        for ship in self.ships:
            if ship.id != ship_id:
                return ship
        return None

    def living_ships(self) -> list[Ship]:
        return [ship for ship in self.ships if ship.alive]
