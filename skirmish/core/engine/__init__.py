"""Game state snapshot owned by the turn engine."""

from .game_state import GameState

__all__ = ["GameState"]
