"""
Game controller.

Wires a renderer's input listeners to the turn engine and handles the
session-level commands (new game, save, load) and score display. The
controller owns exactly one TurnManager, which in turn owns the state.
"""
import random
from typing import Optional, TYPE_CHECKING

from ..core.config import GameConfig
from ..core.data import Severity
from ..core.engine import GameState
from ..core.events import EventManager, GameLoaded, GameSaved, LogMessage
from ..core.state_service import SnapshotError
from .ai import BasicAI
from .board import Board
from .level_manager import LevelManager
from .log_manager import LogLevel, LogManager
from .turn_manager import TurnManager

if TYPE_CHECKING:
    from ..core.renderer import Renderer
    from ..core.state_service import StateService


class Game:
    """One game session bound to a renderer and a state service."""

    def __init__(
        self,
        renderer: "Renderer",
        state_service: "StateService",
        config: Optional[GameConfig] = None,
        event_manager: Optional[EventManager] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or GameConfig.load()
        self.renderer = renderer
        self.state_service = state_service
        self.event_manager = event_manager or EventManager()
        self.rng = rng or random.Random()

        try:
            log_level = LogLevel[self.config.log_level]
        except KeyError:
            log_level = LogLevel.INFO
        self.log_manager = LogManager(self.event_manager, self.config.max_log_messages, log_level)

        self.board = Board(self.config.board_size)
        self.level_manager = LevelManager(
            self.board, self.config, renderer, self.event_manager, self.rng
        )
        self.turn_manager = TurnManager(
            self.board,
            renderer,
            self.event_manager,
            BasicAI(self.rng),
            self.level_manager,
            input_lock=self.config.input_lock,
            arm_input=self.subscribe_cell_listeners,
        )

    @property
    def state(self) -> GameState:
        return self.turn_manager.state

    def _emit_log(self, message: str, category: str = "SYSTEM", level: str = "INFO") -> None:
        self.event_manager.publish(
            LogMessage(level=self.state.current_level, message=message, category=category,
                       level_name=level, source="Game"),
            source="Game",
        )

    def init(self) -> None:
        """Start the first game and register every listener."""
        if self.config.loaded_from is None:
            self._emit_log("No configuration file found, using defaults", "WARNING", "WARNING")
        self.turn_manager.reset(self.level_manager.new_game_state(record=0))
        self.subscribe_cell_listeners()
        self.renderer.add_new_game_listener(self.on_new_game)
        self.renderer.add_save_game_listener(self.on_save_game)
        self.renderer.add_load_game_listener(self.on_load_game)
        self.render_score()

    def subscribe_cell_listeners(self) -> None:
        """(Re-)register the cell listeners, replacing any already present."""
        self.renderer.unsubscribe_cell_listeners()
        self.renderer.add_cell_click_listener(self.on_cell_click)
        self.renderer.add_cell_enter_listener(self.on_cell_enter)
        self.renderer.add_cell_leave_listener(self.on_cell_leave)

    def render_score(self) -> None:
        state = self.state
        self.renderer.render_score(state.current_level, state.number_of_points, state.record)

    # Listeners

    def on_cell_click(self, index: int) -> None:
        self.turn_manager.handle_click(index)
        self.render_score()

    def on_cell_enter(self, index: int) -> None:
        self.turn_manager.enter_cell(index)

    def on_cell_leave(self, index: int) -> None:
        self.turn_manager.leave_cell(index)

    def on_new_game(self) -> None:
        self.renderer.unsubscribe_cell_listeners()
        self.turn_manager.reset(self.level_manager.new_game_state(record=self.state.record))
        self.subscribe_cell_listeners()
        self.render_score()
        self.renderer.show_tooltip("Information", "A new game has begun", Severity.INFO)

    def on_save_game(self) -> None:
        state = self.state
        self.state_service.save(state.to_snapshot())
        self.renderer.show_tooltip("Information", "Game saved", Severity.INFO)
        self.event_manager.publish(
            GameSaved(level=state.current_level, score=state.number_of_points), source="Game"
        )
        self._emit_log("Game saved", "PERSISTENCE")

    def on_load_game(self) -> None:
        """Replace the state with the saved snapshot, keeping it on failure."""
        try:
            snapshot = self.state_service.load()
            loaded = GameState.from_snapshot(
                snapshot,
                record=self.state.record,
                cell_count=self.board.cell_count,
                max_level=self.config.max_level,
            )
        except SnapshotError as e:
            self._report_load_failure(str(e))
            return
        except (KeyError, TypeError, ValueError) as e:
            self._report_load_failure(f"Invalid state: {e}")
            return

        self.turn_manager.reset(loaded)
        self.renderer.clear_highlights()
        self.renderer.draw_board(self.config.theme_for(loaded.current_level))
        self.renderer.redraw(loaded.teams)
        self.subscribe_cell_listeners()
        self.render_score()
        self.renderer.show_tooltip("Information", "Game loaded", Severity.INFO)
        self.event_manager.publish(
            GameLoaded(level=loaded.current_level, score=loaded.number_of_points,
                       character_count=len(loaded.teams)),
            source="Game",
        )
        self._emit_log("Game loaded", "PERSISTENCE")
        self.turn_manager.resume()

    def _report_load_failure(self, message: str) -> None:
        self.renderer.show_tooltip("Information", message, Severity.DANGER)
        self._emit_log(f"Load failed: {message}", "PERSISTENCE", "WARNING")
