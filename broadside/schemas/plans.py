"""Pydantic schemas for raw phase plans supplied by planners.

Planners (a human planning UI, the heuristic planner, test fixtures) may
hand the engine either canonical plans with independent port/starboard
actions or legacy plans with a single combined action. Both shapes are
parsed here and adapted to broadside.models.PhasePlan before any resolver
sees them.

Parsing never raises. Unknown moves, kinds and actions collapse to "none";
unusable shot counts collapse to "unspecified" and are clamped later by the
combat resolver.
"""

import logging
import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..models.plan import PhasePlan, SideAction
from ..utils.constants import (
    ACTION_GRAPPLE_PORT,
    ACTION_GRAPPLE_STARBOARD,
    ACTION_KINDS,
    ACTION_NONE,
    ACTION_SHOOT_PORT,
    ACTION_SHOOT_STARBOARD,
    ACTIONS,
    KIND_FIRE,
    KIND_GRAPPLE,
    KIND_NONE,
    MOVE_NONE,
    MOVES,
    SIDE_PORT,
    SIDE_STARBOARD,
)

logger = logging.getLogger(__name__)

# Legacy action -> (side, kind)
LEGACY_ACTION_MAP = {
    ACTION_SHOOT_PORT: (SIDE_PORT, KIND_FIRE),
    ACTION_SHOOT_STARBOARD: (SIDE_STARBOARD, KIND_FIRE),
    ACTION_GRAPPLE_PORT: (SIDE_PORT, KIND_GRAPPLE),
    ACTION_GRAPPLE_STARBOARD: (SIDE_STARBOARD, KIND_GRAPPLE),
}


def coerce_shots(value: Any) -> Optional[int]:
    """Turn a requested shot count into an int, or None when unusable.

    Numeric strings are accepted. Booleans, NaN, infinities and anything
    non-numeric mean "unspecified".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return math.floor(value)
    return None


def _coerce_move(value: Any) -> str:
    return value if value in MOVES else MOVE_NONE


class SideActionInput(BaseModel):
    """Raw action for one side of a ship."""

    model_config = ConfigDict(extra="ignore")

    kind: str = KIND_NONE
    shots: Optional[int] = None

    @field_validator("kind", mode="before")
    @classmethod
    def _known_kind(cls, value: Any) -> str:
        return value if value in ACTION_KINDS else KIND_NONE

    @field_validator("shots", mode="before")
    @classmethod
    def _usable_shots(cls, value: Any) -> Optional[int]:
        return coerce_shots(value)

    def to_side_action(self) -> SideAction:
        if self.kind == KIND_FIRE:
            return SideAction.fire(self.shots)
        if self.kind == KIND_GRAPPLE:
            return SideAction.grapple()
        return SideAction()


class CanonicalPlanInput(BaseModel):
    """Raw plan with independent port and starboard actions."""

    model_config = ConfigDict(extra="ignore")

    move: str = MOVE_NONE
    port: SideActionInput = SideActionInput()
    starboard: SideActionInput = SideActionInput()

    @field_validator("move", mode="before")
    @classmethod
    def _known_move(cls, value: Any) -> str:
        return _coerce_move(value)

    @field_validator("port", "starboard", mode="before")
    @classmethod
    def _side_shape(cls, value: Any) -> Any:
        if isinstance(value, SideAction):
            return {"kind": value.kind, "shots": value.shots}
        if isinstance(value, str):
            return {"kind": value}
        if not isinstance(value, dict):
            return {}
        return value

    def to_phase_plan(self) -> PhasePlan:
        return PhasePlan(
            move=self.move,
            port=self.port.to_side_action(),
            starboard=self.starboard.to_side_action(),
        )


class LegacyPlanInput(BaseModel):
    """Raw plan with a single combined action such as "shoot_port"."""

    model_config = ConfigDict(extra="ignore")

    move: str = MOVE_NONE
    action: str = ACTION_NONE
    shots: Optional[int] = None

    @field_validator("move", mode="before")
    @classmethod
    def _known_move(cls, value: Any) -> str:
        return _coerce_move(value)

    @field_validator("action", mode="before")
    @classmethod
    def _known_action(cls, value: Any) -> str:
        return value if value in ACTIONS else ACTION_NONE

    @field_validator("shots", mode="before")
    @classmethod
    def _usable_shots(cls, value: Any) -> Optional[int]:
        return coerce_shots(value)

    def to_phase_plan(self) -> PhasePlan:
        """Map the combined action onto the side named by the action.

        The other side is always forced to none.
        """
        if self.action not in LEGACY_ACTION_MAP:
            return PhasePlan(move=self.move)
        side, kind = LEGACY_ACTION_MAP[self.action]
        if kind == KIND_FIRE:
            side_action = SideAction.fire(self.shots)
        else:
            side_action = SideAction.grapple()
        if side == SIDE_PORT:
            return PhasePlan(move=self.move, port=side_action)
        return PhasePlan(move=self.move, starboard=side_action)


def is_legacy_plan(raw: dict) -> bool:
    """Legacy plans carry an `action` and neither side key."""
    return raw.get("port") is None and raw.get("starboard") is None and "action" in raw


def parse_phase_plan(raw: Any) -> PhasePlan:
    """Normalize one raw phase plan into the canonical shape.

    Args:
        raw: A PhasePlan, a canonical dict, a legacy dict, or anything else

    Returns:
        Canonical PhasePlan; neutral when `raw` is missing or unusable.
        PhasePlan objects are revalidated like dicts.
    """
    if isinstance(raw, PhasePlan):
        raw = {"move": raw.move, "port": raw.port, "starboard": raw.starboard}
    if not isinstance(raw, dict):
        if raw is not None:
            logger.debug(f"Ignoring malformed phase plan {raw!r}")
        return PhasePlan.neutral()

    schema = LegacyPlanInput if is_legacy_plan(raw) else CanonicalPlanInput
    try:
        return schema.model_validate(raw).to_phase_plan()
    except ValidationError as e:
        logger.debug(f"Phase plan {raw!r} failed validation, using neutral plan: {e}")
        return PhasePlan.neutral()


def plan_for_phase(raw_plans: Any, phase_index: int) -> PhasePlan:
    """Pick and normalize a ship's plan entry for one phase.

    Args:
        raw_plans: The ship's ordered plan sequence (may be missing or short)
        phase_index: 0-based phase index

    Returns:
        Canonical PhasePlan for that phase
    """
    if not isinstance(raw_plans, (list, tuple)):
        if raw_plans is not None:
            logger.debug(f"Ignoring malformed plan sequence {raw_plans!r}")
        return PhasePlan.neutral()
    if phase_index >= len(raw_plans):
        return PhasePlan.neutral()
    return parse_phase_plan(raw_plans[phase_index])
