"""AI strategies for the opposing faction."""

from .ai_behaviors import (
    AIActionKind,
    AIBehavior,
    AIDecision,
    AIInvariantError,
    AIType,
    BasicAI,
    create_ai_behavior,
)

__all__ = [
    "AIActionKind",
    "AIBehavior",
    "AIDecision",
    "AIInvariantError",
    "AIType",
    "BasicAI",
    "create_ai_behavior",
]
