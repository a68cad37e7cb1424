"""Centralized game enums and constants.

This module contains all core game enums that are used across multiple modules,
eliminating duplication and providing a single source of truth.
"""

from enum import Enum, auto


class Faction(Enum):
    """Faction affiliations for characters."""
    PLAYER = "player"
    NPC = "npc"


class CharacterClass(Enum):
    """Character archetypes. Values are the persisted class tags."""
    BOWMAN = "bowman"
    SWORDSMAN = "swordsman"
    MAGICIAN = "magician"
    VAMPIRE = "vampire"
    UNDEAD = "undead"
    DAEMON = "daemon"


class TurnPhase(Enum):
    """Phases of the turn engine state machine."""
    IDLE = auto()            # Nothing selected
    SELECTED = auto()        # A player character is chosen
    ACTION_PENDING = auto()  # A legal move or attack target is hovered
    PLAYER_WON = auto()      # Terminal: final level cleared
    PLAYER_LOST = auto()     # Terminal: player roster wiped out


class Theme(Enum):
    """Visual board themes, one per level."""
    PRAIRIE = "prairie"
    DESERT = "desert"
    ARCTIC = "arctic"
    MOUNTAIN = "mountain"


class HighlightColor(Enum):
    """Cell highlight colors understood by renderers."""
    YELLOW = "yellow"  # Selected character
    GREEN = "green"    # Legal step destination
    RED = "red"        # Legal attack target


class PointerIcon(Enum):
    """Pointer (cursor) icons understood by renderers."""
    AUTO = "auto"
    POINTER = "pointer"
    CROSSHAIR = "crosshair"
    NOT_ALLOWED = "not-allowed"


class Severity(Enum):
    """Tooltip severity levels."""
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class IntentOutcome(Enum):
    """Result kinds of resolving a player intent."""
    MOVED = auto()
    ATTACKED = auto()
    REJECTED = auto()
    IGNORED = auto()


class RejectReason(Enum):
    """Reasons an intent is rejected."""
    DESTINATION_UNREACHABLE = "Impossible to go here!"
    TARGET_TOO_FAR = "Too far..."
    INVALID_TARGET = "Not a valid target!"


class InputLockPolicy(Enum):
    """Which resolved actions lock cell input while feedback is shown."""
    ATTACKS = "attacks"
    ALL_ACTIONS = "all_actions"


PLAYER_CLASSES = (CharacterClass.BOWMAN, CharacterClass.SWORDSMAN, CharacterClass.MAGICIAN)
NPC_CLASSES = (CharacterClass.VAMPIRE, CharacterClass.UNDEAD, CharacterClass.DAEMON)

CHARACTER_CLASS_NAMES = {
    CharacterClass.BOWMAN: "Bowman",
    CharacterClass.SWORDSMAN: "Swordsman",
    CharacterClass.MAGICIAN: "Magician",
    CharacterClass.VAMPIRE: "Vampire",
    CharacterClass.UNDEAD: "Undead",
    CharacterClass.DAEMON: "Daemon",
}

FACTION_NAMES = {
    Faction.PLAYER: "Player",
    Faction.NPC: "Enemy",
}

TERMINAL_PHASES = frozenset({TurnPhase.PLAYER_WON, TurnPhase.PLAYER_LOST})
