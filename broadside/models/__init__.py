"""Data models for Broadside."""

from .grid import Grid, Hazard, Rock
from .match import MatchState
from .plan import PhasePlan, SideAction
from .ship import Ship, build_ship

__all__ = [
    "Grid",
    "Hazard",
    "Rock",
    "MatchState",
    "PhasePlan",
    "SideAction",
    "Ship",
    "build_ship",
]
