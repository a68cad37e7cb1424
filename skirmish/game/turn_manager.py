"""
Turn engine.

The TurnManager is the only writer of the game state. It validates player
intents (select, hover, resolve), applies moves and attacks, runs the
end-of-turn procedure and hands control to the AI and to level progression.

State machine:

    IDLE --select--> SELECTED --enter legal target--> ACTION_PENDING
    ACTION_PENDING --leave--> SELECTED
    SELECTED/ACTION_PENDING --resolve--> (action, opponent replies) --> SELECTED or IDLE

PLAYER_WON and PLAYER_LOST are terminal and freeze every intent.
"""
from dataclasses import dataclass
from typing import Callable, Optional, TYPE_CHECKING

from ..core.data import (
    FACTION_NAMES,
    Faction,
    HighlightColor,
    InputLockPolicy,
    IntentOutcome,
    PointerIcon,
    RejectReason,
    Severity,
    TurnPhase,
)
from ..core.engine import GameState
from ..core.events import (
    DebugMessage,
    GameEnded,
    LogMessage,
    TurnEnded,
    TurnStarted,
    UnitAttacked,
    UnitDefeated,
    UnitMoved,
    UnitSelected,
)
from .ai import AIActionKind
from .combat_resolver import resolve_attack
from .entities.character import PositionedCharacter

if TYPE_CHECKING:
    from ..core.events import EventManager
    from ..core.renderer import Renderer
    from .ai import AIBehavior
    from .board import Board
    from .level_manager import LevelManager


NOT_PLAYABLE_MESSAGE = "This is not a playable character!"


@dataclass(frozen=True)
class HoverResult:
    """What hovering a cell would allow for the current selection."""
    index: int
    occupant: Optional[PositionedCharacter]
    can_step: bool
    can_attack: bool
    is_enemy: bool = False

    @property
    def is_legal_target(self) -> bool:
        return self.can_step or self.can_attack

    @property
    def highlight(self) -> Optional[HighlightColor]:
        if self.can_step:
            return HighlightColor.GREEN
        if self.can_attack:
            return HighlightColor.RED
        return None

    @property
    def pointer_icon(self) -> Optional[PointerIcon]:
        if self.can_step:
            return PointerIcon.POINTER
        if self.can_attack:
            return PointerIcon.CROSSHAIR
        if self.is_enemy:
            return PointerIcon.NOT_ALLOWED
        return None

    @property
    def cell_info(self) -> Optional[str]:
        return self.occupant.character.cell_info() if self.occupant else None


@dataclass(frozen=True)
class IntentResult:
    """Outcome of resolving a player intent."""
    outcome: IntentOutcome
    reason: Optional[RejectReason] = None
    damage: Optional[int] = None

    @property
    def accepted(self) -> bool:
        return self.outcome in (IntentOutcome.MOVED, IntentOutcome.ATTACKED)


IGNORED = IntentResult(IntentOutcome.IGNORED)


class TurnManager:
    """Owns the game state and applies every action to it."""

    def __init__(
        self,
        board: "Board",
        renderer: "Renderer",
        event_manager: "EventManager",
        ai: "AIBehavior",
        level_manager: "LevelManager",
        input_lock: InputLockPolicy = InputLockPolicy.ATTACKS,
        arm_input: Optional[Callable[[], None]] = None,
        state: Optional[GameState] = None,
    ):
        """Initialize the turn manager.

        Args:
            board: Board geometry for step and attack legality
            renderer: Presentation adapter receiving display directives
            event_manager: Event bus for game and log events
            ai: Strategy choosing the opposing faction's actions
            level_manager: Level progression run when the opposing faction is wiped out
            input_lock: Which actions lock cell input while their feedback plays
            arm_input: Callback re-registering cell listeners after a lock
            state: Initial state (default: an empty level-1 state)
        """
        self.board = board
        self.renderer = renderer
        self.event_manager = event_manager
        self.ai = ai
        self.level_manager = level_manager
        self.input_lock = input_lock
        self._arm_input = arm_input or (lambda: None)
        self._state = state or GameState()
        self._input_locked = False
        # Bumped on reset so feedback started on a replaced state is dropped
        self._generation = 0

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def input_locked(self) -> bool:
        """True while action feedback is pending."""
        return self._input_locked

    def reset(self, state: GameState) -> None:
        """Replace the state wholesale (new game or load).

        Feedback still pending for the old state will not resume its turn.
        """
        self._state = state
        self._input_locked = False
        self._generation += 1

    def resume(self) -> None:
        """Continue a replaced state from where it was saved.

        A finished match only shows its banner again. A state saved before
        its end of turn ran (a wiped faction, or the opposing turn) gets that
        end of turn now.
        """
        state = self._state
        if state.is_over:
            self.renderer.unsubscribe_cell_listeners()
            self.renderer.show_banner("You Won!" if state.phase == TurnPhase.PLAYER_WON else "You Lose!")
            return
        if not state.teams.player_units:
            self._lose()
        elif not state.teams.npc_units:
            self._state = state.evolve(player_turn=False)
            self._advance_level()
        elif not state.player_turn:
            self._run_ai()

    def _accepts_input(self) -> bool:
        return not self._state.is_over and not self._input_locked and self._state.player_turn

    def _emit_log(self, message: str, category: str = "BATTLE", level: str = "INFO") -> None:
        self.event_manager.publish(
            LogMessage(
                level=self._state.current_level,
                message=message,
                category=category,
                level_name=level,
                source="TurnManager",
            ),
            source="TurnManager",
        )

    # Player intents

    def handle_click(self, index: int) -> Optional[IntentResult]:
        """Route a cell click to selection or intent resolution.

        Clicking one of the active faction's characters (or anything while
        nothing is selected) is a selection; any other click is an intent.
        """
        selected = self._state.selected
        occupant = self._state.teams.find(index)
        if selected is None or (occupant is not None and occupant.is_player == selected.is_player):
            self.select_cell(index)
            return None
        return self.resolve_intent(index)

    def select_cell(self, index: int) -> bool:
        """Select the character at ``index`` if it belongs to the active faction.

        Returns:
            True if the selection changed
        """
        if not self._accepts_input():
            return False

        occupant = self._state.teams.find(index)
        if occupant is None:
            return False

        if occupant.character.faction != self._state.active_faction:
            if self._state.selected is None:
                self.renderer.show_tooltip("Information", NOT_PLAYABLE_MESSAGE, Severity.DANGER)
            return False

        self.renderer.clear_highlights(HighlightColor.YELLOW)
        self.renderer.highlight_cell(index, HighlightColor.YELLOW)
        self.renderer.set_pointer_icon(PointerIcon.POINTER)
        self._state = self._state.with_selection(index)

        self.event_manager.publish(
            UnitSelected(level=self._state.current_level, position=index, character=occupant.character),
            source="TurnManager",
        )
        self._emit_log(f"Selected {occupant.character.name} at {index}", "INPUT")
        return True

    def hover(self, index: int) -> HoverResult:
        """Evaluate the cell under the pointer without changing any state."""
        state = self._state
        occupant = state.teams.find(index)
        selected = state.selected

        if selected is None or state.is_over:
            return HoverResult(index, occupant, can_step=False, can_attack=False)

        if occupant is None:
            can_step = self.board.can_step(selected.position, index, selected.character.step)
            return HoverResult(index, None, can_step=can_step, can_attack=False)

        is_enemy = occupant.is_player != selected.is_player
        can_attack = is_enemy and self.board.can_attack(
            selected.position, index, selected.character.attack_range
        )
        return HoverResult(index, occupant, can_step=False, can_attack=can_attack, is_enemy=is_enemy)

    def enter_cell(self, index: int) -> HoverResult:
        """Render hover feedback and mark a legal target as pending."""
        result = self.hover(index)
        if result.highlight is not None:
            self.renderer.highlight_cell(index, result.highlight)
        if result.pointer_icon is not None:
            self.renderer.set_pointer_icon(result.pointer_icon)
        if result.cell_info is not None:
            self.renderer.show_cell_info(result.cell_info, index)

        if self._state.phase in (TurnPhase.SELECTED, TurnPhase.ACTION_PENDING):
            phase = TurnPhase.ACTION_PENDING if result.is_legal_target else TurnPhase.SELECTED
            if phase != self._state.phase:
                self._state = self._state.evolve(phase=phase)
        return result

    def leave_cell(self, index: int) -> None:
        """Remove hover feedback from a cell."""
        self.renderer.set_pointer_icon(PointerIcon.POINTER)
        self.renderer.clear_highlights(HighlightColor.GREEN, HighlightColor.RED)
        self.renderer.hide_cell_info(index)
        if self._state.phase == TurnPhase.ACTION_PENDING:
            self._state = self._state.evolve(phase=TurnPhase.SELECTED)

    def resolve_intent(self, index: int) -> IntentResult:
        """Apply the selected character's move or attack on ``index``."""
        if not self._accepts_input():
            return IGNORED

        selected = self._state.selected
        if selected is None or selected.position == index:
            return IGNORED

        target = self._state.teams.find(index)
        character = selected.character

        if target is None:
            if not self.board.can_step(selected.position, index, character.step):
                return self._reject(RejectReason.DESTINATION_UNREACHABLE)
            self._apply_move(selected.position, index)
            return IntentResult(IntentOutcome.MOVED)

        if target.is_player == selected.is_player:
            return self._reject(RejectReason.INVALID_TARGET)

        if not self.board.can_attack(selected.position, index, character.attack_range):
            return self._reject(RejectReason.TARGET_TOO_FAR)

        damage = self._apply_attack(selected.position, index)
        return IntentResult(IntentOutcome.ATTACKED, damage=damage)

    def _reject(self, reason: RejectReason) -> IntentResult:
        self.renderer.show_tooltip("Information", reason.value, Severity.WARNING)
        self._emit_log(f"Intent rejected: {reason.value}", "INPUT", "WARNING")
        return IntentResult(IntentOutcome.REJECTED, reason=reason)

    # Actions, shared by the player and the AI

    def _apply_move(self, from_position: int, to_position: int) -> None:
        state = self._state
        mover = state.teams.find(from_position)
        selected_position = state.selected_position
        if selected_position == from_position:
            selected_position = to_position

        self._state = state.evolve(
            teams=state.teams.moved(from_position, to_position),
            selected_position=selected_position,
        )
        self.event_manager.publish(
            UnitMoved(
                level=state.current_level,
                character=mover.character,
                from_position=from_position,
                to_position=to_position,
            ),
            source="TurnManager",
        )
        self._emit_log(f"{mover.character.name} moves {from_position} -> {to_position}", "MOVEMENT")

        if self.input_lock == InputLockPolicy.ALL_ACTIONS:
            self._with_input_lock(
                lambda done: self.renderer.animate_move(from_position, to_position, done)
            )
        else:
            self._end_of_turn()

    def _apply_attack(self, attacker_position: int, defender_position: int) -> int:
        state = self._state
        attacker = state.teams.find(attacker_position)
        defender = state.teams.find(defender_position)
        result = resolve_attack(attacker.character, defender.character)

        wounded = defender.with_character(defender.character.take_damage(result.damage))
        teams = state.teams.without(defender_position)
        if wounded.character.is_alive:
            teams = teams.with_added(wounded)
        self._state = state.evolve(teams=teams)

        self.event_manager.publish(
            UnitAttacked(
                level=state.current_level,
                attacker_position=attacker_position,
                defender_position=defender_position,
                damage=result.damage,
                remaining_health=result.remaining_health,
            ),
            source="TurnManager",
        )
        self._emit_log(
            f"{attacker.character.name} hits {defender.character.name} for {result.damage} "
            f"({result.remaining_health} left)"
        )
        if result.is_lethal:
            self.event_manager.publish(
                UnitDefeated(level=state.current_level, character=wounded.character,
                             position=defender_position),
                source="TurnManager",
            )
            self._emit_log(f"{defender.character.name} is defeated")

        self._with_input_lock(
            lambda done: self.renderer.animate_damage(defender_position, result.damage, done)
        )
        return result.damage

    def _with_input_lock(self, feedback: Callable[[Callable[[], None]], None]) -> None:
        """Lock cell input, run ``feedback`` and finish the turn when it completes."""
        self._input_locked = True
        self.renderer.unsubscribe_cell_listeners()
        generation = self._generation
        resumed = False

        def on_complete() -> None:
            nonlocal resumed
            # Feedback resumes the turn exactly once
            if resumed or generation != self._generation:
                return
            resumed = True
            self._input_locked = False
            self._arm_input()
            self._end_of_turn()

        feedback(on_complete)

    # End of turn

    def _end_of_turn(self) -> None:
        state = self._state
        if state.selected_position is not None and state.selected is None:
            state = state.with_selection(None)
            self._state = state

        if not state.teams.player_units:
            self._lose()
            return

        if not state.teams.npc_units:
            self.renderer.clear_highlights()
            self.renderer.set_pointer_icon(PointerIcon.AUTO)
            self._state = state.evolve(player_turn=False)
            self._advance_level()
            return

        self.renderer.clear_highlights(HighlightColor.YELLOW)
        self.renderer.redraw(state.teams)
        if state.selected_position is not None:
            self.renderer.highlight_cell(state.selected_position, HighlightColor.YELLOW)

        ending = state.active_faction
        self._state = state.evolve(player_turn=not state.player_turn).with_selection(state.selected_position)
        self.event_manager.publish(TurnEnded(level=state.current_level, faction=ending), source="TurnManager")
        self.event_manager.publish(
            TurnStarted(level=state.current_level, faction=self._state.active_faction),
            source="TurnManager",
        )
        self._emit_log(f"{FACTION_NAMES[self._state.active_faction]} turn", "TURN")

        if self._state.active_faction == Faction.NPC:
            self._run_ai()

    def _run_ai(self) -> None:
        decision = self.ai.choose_action(self._state.teams, self.board)
        self.event_manager.publish(
            DebugMessage(
                level=self._state.current_level,
                message=f"{decision!r}: {decision.reasoning}",
                source=f"{self.ai.get_behavior_name()}AI",
            ),
            source="TurnManager",
        )
        if decision.kind == AIActionKind.ATTACK:
            self._apply_attack(decision.actor_position, decision.target_position)
        else:
            self._apply_move(decision.actor_position, decision.target_position)

    def _lose(self) -> None:
        state = self._state
        self.renderer.redraw(state.teams)
        self._state = state.evolve(phase=TurnPhase.PLAYER_LOST, selected_position=None)
        self.renderer.unsubscribe_cell_listeners()
        self.renderer.show_banner("You Lose!")
        self.event_manager.publish(
            GameEnded(level=state.current_level, result="defeat", final_score=state.number_of_points),
            source="TurnManager",
        )
        self._emit_log("Player faction wiped out", "LEVEL")

    def _advance_level(self) -> None:
        self.renderer.unsubscribe_cell_listeners()
        self._state = self.level_manager.advance(self._state)
        if self._state.is_over:
            self.renderer.unsubscribe_cell_listeners()
        else:
            self._arm_input()
