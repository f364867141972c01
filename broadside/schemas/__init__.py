"""Boundary schemas for plan data entering the engine."""

from .plans import (
    CanonicalPlanInput,
    LegacyPlanInput,
    SideActionInput,
    parse_phase_plan,
    plan_for_phase,
)

__all__ = [
    "CanonicalPlanInput",
    "LegacyPlanInput",
    "SideActionInput",
    "parse_phase_plan",
    "plan_for_phase",
]
