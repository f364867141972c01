"""Ship data model."""

from dataclasses import dataclass

from ..utils.constants import (
    CANNONBALL_DAMAGE,
    DEFAULT_CANNONBALL_SIZE,
    DEFAULT_SHIP_TYPE,
    DEFAULT_SHOTS_PER_ATTACK,
    GRAPPLE_RANGE,
    SHIP_TYPES,
    SHOOT_DAMAGE,
    SHOOT_RANGE,
)
from ..utils.directions import FACINGS


@dataclass
class Ship:
    """A combatant on the grid.

    Ships are owned by the match state. Resolvers never mutate a ship they
    were handed; they work on copies made with dataclasses.replace.
    """

    id: str  # Owner identity, e.g. "P1"
    name: str  # Display name
    x: int
    y: int
    facing: str  # "N", "E", "S" or "W"
    hp: int
    max_hp: int
    cannon_range: int = SHOOT_RANGE
    cannonball_size: str = DEFAULT_CANNONBALL_SIZE
    shots_per_attack: int = DEFAULT_SHOTS_PER_ATTACK
    grapple_range: int = GRAPPLE_RANGE
    type_id: str = DEFAULT_SHIP_TYPE
    type_label: str = ""
    alive: bool = True

    def __post_init__(self):
        """Validate ship data after initialization."""
        if not self.id:
            raise ValueError("Ship id cannot be empty")
        if self.facing not in FACINGS:
            raise ValueError(f"Invalid facing: {self.facing} (must be one of {FACINGS})")
        if self.max_hp <= 0:
            raise ValueError(f"Invalid max_hp: {self.max_hp} (must be > 0)")
        if not (0 <= self.hp <= self.max_hp):
            raise ValueError(f"Invalid hp: {self.hp} (must be 0-{self.max_hp})")
        if self.shots_per_attack < 1:
            raise ValueError(f"Invalid shots_per_attack: {self.shots_per_attack} (must be >= 1)")

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def damage_per_shot(self) -> int:
        return CANNONBALL_DAMAGE.get(self.cannonball_size, SHOOT_DAMAGE)


def build_ship(
    ship_id: str,
    name: str,
    x: int,
    y: int,
    facing: str,
    type_id: str = DEFAULT_SHIP_TYPE,
) -> Ship:
    """Create a full-health ship from a hull preset.

    Unknown type ids fall back to the default preset.
    """
    ship_type = SHIP_TYPES.get(type_id) or SHIP_TYPES[DEFAULT_SHIP_TYPE]
    return Ship(
        id=ship_id,
        name=name,
        x=x,
        y=y,
        facing=facing,
        hp=ship_type.hp,
        max_hp=ship_type.hp,
        cannon_range=ship_type.cannon_range,
        cannonball_size=ship_type.cannonball_size,
        shots_per_attack=ship_type.shots_per_attack,
        grapple_range=ship_type.grapple_range,
        type_id=ship_type.id,
        type_label=ship_type.label,
    )
