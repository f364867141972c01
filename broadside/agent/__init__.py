"""Computer-controlled planners."""

from .planner import generate_ai_plan

__all__ = ["generate_ai_plan"]
