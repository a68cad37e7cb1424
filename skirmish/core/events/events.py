"""Game events and the event type registry.

Event Design Principles:
- Events are immutable dataclasses carrying plain values (cell indices,
  character snapshots) so subscribers never hold live engine state
- Every event records the level it happened on
- Keep event types focused and avoid over-granular events
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ..data import Faction

if TYPE_CHECKING:
    from ...game.entities.character import Character


class EventType(Enum):
    """Types of game events that managers can subscribe to."""
    # Game lifecycle
    GAME_STARTED = auto()
    GAME_ENDED = auto()
    LEVEL_STARTED = auto()

    # Turn events
    TURN_STARTED = auto()
    TURN_ENDED = auto()

    # Character events
    UNIT_SELECTED = auto()
    UNIT_MOVED = auto()
    UNIT_ATTACKED = auto()
    UNIT_DEFEATED = auto()

    # Persistence
    GAME_SAVED = auto()
    GAME_LOADED = auto()

    # Logging
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all game events."""
    level: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class GameStarted(GameEvent):
    """Event emitted when a fresh game is prepared."""
    board_size: int

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.GAME_STARTED)


@dataclass(frozen=True)
class GameEnded(GameEvent):
    """Event emitted when the match reaches a terminal outcome."""
    result: str  # "victory" or "defeat"
    final_score: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.GAME_ENDED)


@dataclass(frozen=True)
class LevelStarted(GameEvent):
    """Event emitted after level progression repopulates the board."""
    player_count: int
    npc_count: int
    score: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LEVEL_STARTED)


@dataclass(frozen=True)
class TurnStarted(GameEvent):
    """Event emitted when a faction gains the turn."""
    faction: Faction

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_STARTED)


@dataclass(frozen=True)
class TurnEnded(GameEvent):
    """Event emitted when a faction's turn ends."""
    faction: Faction

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_ENDED)


@dataclass(frozen=True)
class UnitSelected(GameEvent):
    """Event emitted when the player selects a character."""
    position: int
    character: "Character"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_SELECTED)


@dataclass(frozen=True)
class UnitMoved(GameEvent):
    """Event emitted when a character steps to a new cell."""
    character: "Character"
    from_position: int
    to_position: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_MOVED)


@dataclass(frozen=True)
class UnitAttacked(GameEvent):
    """Event emitted when an attack has been resolved."""
    attacker_position: int
    defender_position: int
    damage: int
    remaining_health: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_ATTACKED)


@dataclass(frozen=True)
class UnitDefeated(GameEvent):
    """Event emitted when a character's health reaches zero."""
    character: "Character"
    position: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_DEFEATED)


@dataclass(frozen=True)
class GameSaved(GameEvent):
    """Event emitted after a snapshot is handed to the state service."""
    score: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.GAME_SAVED)


@dataclass(frozen=True)
class GameLoaded(GameEvent):
    """Event emitted after a snapshot replaced the current state."""
    score: int
    character_count: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.GAME_LOADED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event for centralized logging."""
    message: str
    category: str
    level_name: str
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(GameEvent):
    """Event for debug-only messages."""
    message: str
    source: str
    context: Optional[dict] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)
