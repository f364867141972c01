"""Text interface for Broadside."""

from .display import DisplayManager

__all__ = ["DisplayManager"]
