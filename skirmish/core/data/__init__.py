"""Core data structures and definitions.

This package contains fundamental data types and game definitions:
- data_structures.py: Vector2, flat-index conversion and rounding helpers
- game_enums.py: Centralized enums for factions, character classes, phases
"""

from .data_structures import Vector2, index_grid, round_half_up
from .game_enums import (
    Faction,
    CharacterClass,
    TurnPhase,
    Theme,
    HighlightColor,
    PointerIcon,
    Severity,
    IntentOutcome,
    RejectReason,
    InputLockPolicy,
    PLAYER_CLASSES,
    NPC_CLASSES,
    CHARACTER_CLASS_NAMES,
    FACTION_NAMES,
    TERMINAL_PHASES,
)

__all__ = [
    "Vector2",
    "index_grid",
    "round_half_up",
    "Faction",
    "CharacterClass",
    "TurnPhase",
    "Theme",
    "HighlightColor",
    "PointerIcon",
    "Severity",
    "IntentOutcome",
    "RejectReason",
    "InputLockPolicy",
    "PLAYER_CLASSES",
    "NPC_CLASSES",
    "CHARACTER_CLASS_NAMES",
    "FACTION_NAMES",
    "TERMINAL_PHASES",
]
