"""Turn resolution engine components."""

from .map_generator import build_default_map, create_initial_state, generate_map
from .turn_executor import PhaseResult, TurnExecutor, TurnResult, resolve_turn

__all__ = [
    "build_default_map",
    "create_initial_state",
    "generate_map",
    "PhaseResult",
    "TurnExecutor",
    "TurnResult",
    "resolve_turn",
]
