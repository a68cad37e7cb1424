"""
Basic test fixtures for the skirmish test suite.

Provides boards, event buses, renderers and small roster builders.
"""

import io
import os
import random
import sys

import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from skirmish.core.config import GameConfig
from skirmish.core.data import CharacterClass, InputLockPolicy
from skirmish.core.engine import GameState
from skirmish.core.events import EventManager
from skirmish.core.renderer import RendererConfig
from skirmish.game.ai import BasicAI
from skirmish.game.board import Board
from skirmish.game.entities import Character, PositionedCharacter, Roster
from skirmish.game.level_manager import LevelManager
from skirmish.game.turn_manager import TurnManager
from skirmish.renderers.ascii_renderer import AsciiRenderer


@pytest.fixture
def rng():
    """Seeded random source for reproducible AI and spawns."""
    return random.Random(1234)


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager()


@pytest.fixture
def board():
    """Standard 8x8 board."""
    return Board(8)


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def renderer():
    """ASCII renderer writing to a buffer; damage feedback completes at once."""
    return AsciiRenderer(RendererConfig(board_size=8), output=io.StringIO())


@pytest.fixture
def make_unit():
    """Factory for positioned characters with optional stat overrides."""
    def _make(character_class: CharacterClass, position: int, level: int = 1, **stats) -> PositionedCharacter:
        character = Character.create(character_class, level)
        if stats:
            fields = character.to_dict()
            fields.update(stats)
            fields["class_tag"] = character_class.value
            character = Character.from_dict(fields)
        return PositionedCharacter(character, position)
    return _make


@pytest.fixture
def make_state():
    """Factory for a player-turn state from positioned characters."""
    def _make(*entries: PositionedCharacter, **changes) -> GameState:
        return GameState(teams=Roster(entries)).evolve(**changes)
    return _make


@pytest.fixture
def level_manager(board, config, renderer, event_manager, rng):
    return LevelManager(board, config, renderer, event_manager, rng)


@pytest.fixture
def make_engine(board, renderer, event_manager, level_manager, rng):
    """Factory for a TurnManager over a given state.

    ``ai`` defaults to a seeded BasicAI; pass a Mock to script the opposing
    faction.
    """
    def _make(state: GameState, ai=None, input_lock: InputLockPolicy = InputLockPolicy.ATTACKS,
              arm_input=None, renderer_override=None) -> TurnManager:
        engine = TurnManager(
            board,
            renderer_override or renderer,
            event_manager,
            ai or BasicAI(rng),
            level_manager,
            input_lock=input_lock,
            arm_input=arm_input,
        )
        engine.reset(state)
        return engine
    return _make
