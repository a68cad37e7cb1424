"""
Level progression.

Runs once the opposing faction is wiped out: scores the level, levels up
the survivors, reinforces the player faction, repositions it and spawns a
scaled opposing wave. Clearing the last level ends the match in victory.
"""
import random
from typing import Optional, TYPE_CHECKING

from ..core.data import Faction, Severity, TurnPhase
from ..core.engine import GameState
from ..core.events import GameEnded, GameStarted, LevelStarted, LogMessage
from .entities import Roster, classes_for, generate_characters, generate_roster, generate_start_cells
from .entities.character import PositionedCharacter

if TYPE_CHECKING:
    from ..core.config import GameConfig
    from ..core.events import EventManager
    from ..core.renderer import Renderer
    from .board import Board


class LevelManager:
    """Builds level-1 states and advances finished levels."""

    def __init__(
        self,
        board: "Board",
        config: "GameConfig",
        renderer: "Renderer",
        event_manager: "EventManager",
        rng: Optional[random.Random] = None,
    ):
        self.board = board
        self.config = config
        self.renderer = renderer
        self.event_manager = event_manager
        self.rng = rng or random.Random()

    def _emit_log(self, level: int, message: str, category: str = "LEVEL") -> None:
        self.event_manager.publish(
            LogMessage(level=level, message=message, category=category, level_name="INFO",
                       source="LevelManager"),
            source="LevelManager",
        )

    def new_game_state(self, record: int = 0) -> GameState:
        """Fresh level-1 state with both factions on their start columns."""
        size = self.board.size
        player_team = generate_roster(
            classes_for(Faction.PLAYER), self.config.initial_max_level,
            self.config.initial_team_size, size, self.rng,
        )
        npc_team = generate_roster(
            classes_for(Faction.NPC), self.config.initial_max_level,
            self.config.initial_team_size, size, self.rng,
        )
        state = GameState(
            current_level=1,
            teams=Roster(player_team + npc_team),
            number_of_points=0,
            player_turn=True,
            record=record,
        )

        self.renderer.draw_board(self.config.theme_for(1))
        self.renderer.redraw(state.teams)
        self.event_manager.publish(GameStarted(level=1, board_size=size), source="LevelManager")
        self._emit_log(1, f"New game on {self.board!r}", "SYSTEM")
        return state

    @staticmethod
    def wave_size(level: int) -> int:
        """Number of reinforcements the player faction receives on ``level``."""
        return 1 if level <= 3 else 2

    def advance(self, state: GameState) -> GameState:
        """Move to the next level, or end the match after the last one."""
        level = state.current_level + 1
        survivors_health = state.teams.total_health(Faction.PLAYER)

        if level > self.config.max_level:
            return self._finish(state, survivors_health)

        state = state.evolve(current_level=level).with_points(survivors_health)
        self._emit_log(level, f"Level cleared, +{survivors_health} points")

        survivors = [entry.with_character(entry.character.level_up()) for entry in state.teams]

        # Reinforcements are drawn at the tier just cleared
        reinforcements = generate_characters(
            classes_for(Faction.PLAYER), level - 1, self.wave_size(level), self.rng
        )
        player_characters = [e.character for e in survivors if e.is_player] + reinforcements
        npc_remnants = [e for e in survivors if not e.is_player]

        cells = generate_start_cells(Faction.PLAYER, self.board.size, (e.position for e in npc_remnants))
        player_team = []
        for character in player_characters:
            position = cells.pop(self.rng.randrange(len(cells)))
            player_team.append(PositionedCharacter(character, position))

        occupied = [e.position for e in player_team] + [e.position for e in npc_remnants]
        npc_team = [
            self._scale(entry)
            for entry in generate_roster(
                classes_for(Faction.NPC), level, len(player_team), self.board.size, self.rng, occupied
            )
        ]

        teams = Roster(player_team + npc_remnants + npc_team)
        state = state.evolve(
            teams=teams,
            player_turn=True,
            selected_position=None,
            phase=TurnPhase.IDLE,
        )

        self.renderer.draw_board(self.config.theme_for(level))
        self.renderer.redraw(teams)
        self.renderer.render_score(state.current_level, state.number_of_points, state.record)
        self.renderer.show_tooltip("Information", "Next level", Severity.INFO)
        self.event_manager.publish(
            LevelStarted(
                level=level,
                player_count=len(teams.player_units),
                npc_count=len(teams.npc_units),
                score=state.number_of_points,
            ),
            source="LevelManager",
        )
        self._emit_log(level, f"Level {level}: {len(teams.player_units)} vs {len(teams.npc_units)}")
        return state

    def _scale(self, entry: PositionedCharacter) -> PositionedCharacter:
        """Apply one stat increment per level above the first."""
        character = entry.character
        for _ in range(character.level - 1):
            character = character.stats_up()
        return entry.with_character(character)

    def _finish(self, state: GameState, survivors_health: int) -> GameState:
        # The displayed level stays at the last one played
        state = state.with_points(survivors_health).evolve(
            phase=TurnPhase.PLAYER_WON,
            selected_position=None,
        )
        self.renderer.redraw(state.teams)
        self.renderer.render_score(state.current_level, state.number_of_points, state.record)
        self.renderer.show_banner("You Won!")
        self.event_manager.publish(
            GameEnded(level=state.current_level, result="victory", final_score=state.number_of_points),
            source="LevelManager",
        )
        self._emit_log(state.current_level, f"Victory with {state.number_of_points} points")
        return state
