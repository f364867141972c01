"""Static world: grid dimensions, hazard tiles and rocks."""

from dataclasses import dataclass, field
from typing import Optional

from ..utils.constants import (
    DEFAULT_WHIRLPOOL_SIZE,
    HAZARD_WHIRLPOOL,
    HAZARD_WIND,
    MAP_MODE_DEFAULT,
    ROCK_LARGE,
    ROCK_SMALL,
    SPIN_CCW,
    SPIN_CW,
)
from ..utils.directions import FACINGS


@dataclass(frozen=True)
class Hazard:
    """A hazard anchored at (x, y).

    Wind hazards occupy a single tile and push along `direction`.
    Whirlpools occupy a `size` x `size` footprint whose top-left corner is
    (x, y) and spin ships in place.
    """

    kind: str  # "wind" or "whirlpool"
    x: int
    y: int
    direction: Optional[str] = None  # Wind only
    size: int = DEFAULT_WHIRLPOOL_SIZE  # Whirlpool only
    spin: str = SPIN_CW  # Whirlpool only

    def __post_init__(self):
        """Validate hazard data after initialization."""
        if self.kind not in (HAZARD_WIND, HAZARD_WHIRLPOOL):
            raise ValueError(f"Invalid hazard kind: {self.kind} (must be 'wind' or 'whirlpool')")
        if self.kind == HAZARD_WIND and self.direction not in FACINGS:
            raise ValueError(f"Invalid wind direction: {self.direction}")
        if self.kind == HAZARD_WHIRLPOOL:
            if self.size < 1:
                raise ValueError(f"Invalid whirlpool size: {self.size} (must be >= 1)")
            if self.spin not in (SPIN_CW, SPIN_CCW):
                raise ValueError(f"Invalid whirlpool spin: {self.spin} (must be 'cw' or 'ccw')")

    @classmethod
    def wind(cls, x: int, y: int, direction: str) -> "Hazard":
        return cls(kind=HAZARD_WIND, x=x, y=y, direction=direction)

    @classmethod
    def whirlpool(
        cls, x: int, y: int, size: int = DEFAULT_WHIRLPOOL_SIZE, spin: str = SPIN_CW
    ) -> "Hazard":
        return cls(kind=HAZARD_WHIRLPOOL, x=x, y=y, size=size, spin=spin)

    def covers(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies within this hazard's footprint."""
        if self.kind == HAZARD_WIND:
            return x == self.x and y == self.y
        return self.x <= x < self.x + self.size and self.y <= y < self.y + self.size


@dataclass(frozen=True)
class Rock:
    """A rock obstacle. Every rock blocks movement; large ones also block shots."""

    x: int
    y: int
    size: str = ROCK_SMALL  # "small" or "large"

    def __post_init__(self):
        """Validate rock data after initialization."""
        if self.size not in (ROCK_SMALL, ROCK_LARGE):
            raise ValueError(f"Invalid rock size: {self.size} (must be 'small' or 'large')")


@dataclass(frozen=True)
class Grid:
    """Immutable playing field shared read-only by every resolver."""

    width: int
    height: int
    hazards: tuple[Hazard, ...] = field(default_factory=tuple)
    rocks: tuple[Rock, ...] = field(default_factory=tuple)
    mode: str = MAP_MODE_DEFAULT  # How the layout was produced
    seed: Optional[int | str] = None  # Procedural seed, kept for replay

    def __post_init__(self):
        """Validate dimensions and freeze hazard/rock collections."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid grid size: {self.width}x{self.height} (must be positive)")
        object.__setattr__(self, "hazards", tuple(self.hazards))
        object.__setattr__(self, "rocks", tuple(self.rocks))

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_blocked(self, x: int, y: int) -> bool:
        """Check whether a rock of any size sits on (x, y)."""
        return any(rock.x == x and rock.y == y for rock in self.rocks)

    def has_large_rock(self, x: int, y: int) -> bool:
        return any(rock.x == x and rock.y == y and rock.size == ROCK_LARGE for rock in self.rocks)

    def whirlpool_at(self, x: int, y: int) -> Optional[Hazard]:
        """Return the first whirlpool whose footprint covers (x, y), if any."""
        for hazard in self.hazards:
            if hazard.kind == HAZARD_WHIRLPOOL and hazard.covers(x, y):
                return hazard
        return None

    def wind_at(self, x: int, y: int) -> Optional[Hazard]:
        for hazard in self.hazards:
            if hazard.kind == HAZARD_WIND and hazard.covers(x, y):
                return hazard
        return None
