"""
Authoritative game state.

``GameState`` is a frozen snapshot. The turn engine and level progression
never mutate it; they derive a new snapshot with ``evolve`` and swap it in,
so renderers and the persistence layer always see a consistent value.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from ..data import Faction, TurnPhase, TERMINAL_PHASES
from ...game.entities.character import PositionedCharacter
from ...game.entities.roster import Roster


@dataclass(frozen=True)
class GameState:
    """One snapshot of the match."""

    current_level: int = 1
    teams: Roster = field(default_factory=Roster)
    number_of_points: int = 0
    player_turn: bool = True
    record: int = 0
    phase: TurnPhase = TurnPhase.IDLE
    selected_position: Optional[int] = None

    def evolve(self, **changes: Any) -> "GameState":
        """Return a copy of this state with ``changes`` applied."""
        return replace(self, **changes)

    # Selection

    @property
    def selected(self) -> Optional[PositionedCharacter]:
        """The selected character, or None if nothing (alive) is selected."""
        if self.selected_position is None:
            return None
        return self.teams.find(self.selected_position)

    def with_selection(self, position: Optional[int]) -> "GameState":
        phase = self.phase
        if phase not in TERMINAL_PHASES:
            phase = TurnPhase.IDLE if position is None else TurnPhase.SELECTED
        return self.evolve(selected_position=position, phase=phase)

    # Turn ownership

    @property
    def active_faction(self) -> Faction:
        return Faction.PLAYER if self.player_turn else Faction.NPC

    @property
    def is_over(self) -> bool:
        return self.phase in TERMINAL_PHASES

    # Scoring

    def with_points(self, points: int) -> "GameState":
        """Add ``points`` to the score, raising the record if it is beaten."""
        total = self.number_of_points + points
        return self.evolve(number_of_points=total, record=max(self.record, total))

    # Persistence

    def to_snapshot(self) -> dict[str, Any]:
        """Plain-data form handed to the state service.

        Selection is not saved; only a finished match keeps its phase.
        """
        return {
            "current_level": self.current_level,
            "teams": [entry.to_dict() for entry in self.teams],
            "number_of_points": self.number_of_points,
            "player_turn": self.player_turn,
            "phase": (self.phase if self.is_over else TurnPhase.IDLE).name,
        }

    @classmethod
    def from_snapshot(
        cls,
        data: dict[str, Any],
        record: int = 0,
        cell_count: Optional[int] = None,
        max_level: Optional[int] = None,
    ) -> "GameState":
        """Rebuild a state from plain data, rehydrating every character.

        The process-wide ``record`` is not part of a snapshot and is carried
        over from the caller. When ``cell_count`` is given every position must
        fall inside the board; when ``max_level`` is given the level must not
        exceed it. Snapshots without a ``phase`` load as idle.

        Raises:
            KeyError, TypeError, ValueError: If the snapshot is malformed
        """
        teams = Roster(PositionedCharacter.from_dict(entry) for entry in data["teams"])
        if cell_count is not None:
            for entry in teams:
                if not 0 <= entry.position < cell_count:
                    raise ValueError(f"Position {entry.position} is off the board")

        current_level = int(data["current_level"])
        if current_level < 1 or (max_level is not None and current_level > max_level):
            raise ValueError(f"Level {current_level} is out of range")

        player_turn = data["player_turn"]
        if not isinstance(player_turn, bool):
            raise TypeError(f"player_turn must be a bool, got {type(player_turn).__name__}")

        phase = TurnPhase[data.get("phase", TurnPhase.IDLE.name)]
        if phase != TurnPhase.IDLE and phase not in TERMINAL_PHASES:
            raise ValueError(f"Phase {phase.name} cannot be restored")

        points = int(data["number_of_points"])
        return cls(
            current_level=current_level,
            teams=teams,
            number_of_points=points,
            player_turn=player_turn,
            record=max(record, points),
            phase=phase,
        )
