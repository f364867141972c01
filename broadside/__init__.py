"""Broadside - deterministic turn resolution for two-ship naval duels."""

from .engine import TurnResult, create_initial_state, resolve_turn
from .models import MatchState, PhasePlan, SideAction

__all__ = [
    "TurnResult",
    "create_initial_state",
    "resolve_turn",
    "MatchState",
    "PhasePlan",
    "SideAction",
]
