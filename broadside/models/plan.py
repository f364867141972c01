"""Canonical per-phase plans.

Resolvers only ever see these types. Raw plan data (dicts, legacy
single-action entries) is normalized in broadside.schemas.plans first.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..utils.constants import KIND_FIRE, KIND_GRAPPLE, KIND_NONE, MOVE_NONE, SIDE_PORT


@dataclass(frozen=True)
class SideAction:
    """What one broadside (port or starboard) does this phase."""

    kind: str = KIND_NONE  # "none", "fire" or "grapple"
    shots: Optional[int] = None  # Requested shots for fire; None means "all"

    @classmethod
    def fire(cls, shots: Optional[int] = None) -> "SideAction":
        return cls(kind=KIND_FIRE, shots=shots)

    @classmethod
    def grapple(cls) -> "SideAction":
        return cls(kind=KIND_GRAPPLE)

    @property
    def is_none(self) -> bool:
        return self.kind == KIND_NONE


@dataclass(frozen=True)
class PhasePlan:
    """One ship's move and side actions for a single phase."""

    move: str = MOVE_NONE
    port: SideAction = field(default_factory=SideAction)
    starboard: SideAction = field(default_factory=SideAction)

    @classmethod
    def neutral(cls) -> "PhasePlan":
        """No move, no action."""
        return cls()

    def side(self, side: str) -> SideAction:
        return self.port if side == SIDE_PORT else self.starboard
