"""AI Behavior Strategy Classes

This module implements the Strategy design pattern for the opposing faction.
A behavior looks at the roster and returns exactly one decision; the turn
engine applies it.
"""

import random
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    from ..board import Board
    from ..entities.character import PositionedCharacter
    from ..entities.roster import Roster


class AIInvariantError(RuntimeError):
    """The AI could not produce an action for a non-empty roster.

    This means the board is saturated or the roster is misconfigured; it is
    never a legal game outcome.
    """


class AIType(Enum):
    """Available AI behavior types."""
    BASIC = auto()


class AIActionKind(Enum):
    ATTACK = auto()
    MOVE = auto()


class AIDecision:
    """Represents an AI decision: who acts and on which cell."""

    def __init__(self, kind: AIActionKind, actor_position: int, target_position: int,
                 reasoning: str = ""):
        self.kind = kind
        self.actor_position = actor_position
        self.target_position = target_position
        self.reasoning = reasoning

    def __repr__(self) -> str:
        return (f"AIDecision({self.kind.name}, {self.actor_position} -> "
                f"{self.target_position})")


class AIBehavior(ABC):
    """Abstract base class for AI behavior strategies."""

    @abstractmethod
    def choose_action(self, roster: "Roster", board: "Board") -> AIDecision:
        """Choose one action for the opposing faction.

        Args:
            roster: The current roster; both factions must be non-empty
            board: The board the roster stands on

        Returns:
            AIDecision describing an attack or a move
        """
        pass

    @abstractmethod
    def get_behavior_name(self) -> str:
        """Get the name of this AI behavior."""
        pass


class BasicAI(AIBehavior):
    """Attacks a random reachable player unit, otherwise steps at random.

    All randomness comes from ``rng`` so tests can seed it.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def choose_action(self, roster: "Roster", board: "Board") -> AIDecision:
        if not roster.npc_units or not roster.player_units:
            raise AIInvariantError(
                f"AI invoked with an empty faction: {len(roster.npc_units)} npc, "
                f"{len(roster.player_units)} player"
            )

        attack_options = self._attack_options(roster, board)
        if attack_options:
            attacker, targets = self.rng.choice(attack_options)
            target = self.rng.choice(targets)
            return AIDecision(
                AIActionKind.ATTACK,
                attacker.position,
                target.position,
                reasoning=f"{attacker.character.name} has {len(targets)} target(s) in range",
            )

        mover = self.rng.choice(roster.npc_units)
        destination = self._find_step(mover, roster, board)
        return AIDecision(
            AIActionKind.MOVE,
            mover.position,
            destination,
            reasoning=f"No targets in range, {mover.character.name} repositions",
        )

    def _attack_options(
        self, roster: "Roster", board: "Board"
    ) -> list[tuple["PositionedCharacter", list["PositionedCharacter"]]]:
        options = []
        for npc in roster.npc_units:
            targets = [
                player for player in roster.player_units
                if board.can_attack(npc.position, player.position, npc.character.attack_range)
            ]
            if targets:
                options.append((npc, targets))
        return options

    def _find_step(self, mover: "PositionedCharacter", roster: "Roster", board: "Board") -> int:
        """Sample free cells until one is a legal step for ``mover``.

        Failed candidates are removed from the pool, so the loop ends after
        at most one pass over the free cells.
        """
        occupied = np.zeros(board.cell_count, dtype=bool)
        occupied[np.fromiter(roster.occupied_positions(), dtype=np.intp)] = True
        pool = [int(cell) for cell in np.flatnonzero(~occupied)]

        while pool:
            index = self.rng.randrange(len(pool))
            candidate = pool[index]
            if board.can_step(mover.position, candidate, mover.character.step):
                return candidate
            # Swap-remove the failed candidate
            pool[index] = pool[-1]
            pool.pop()

        raise AIInvariantError(
            f"{mover.character.name} at {mover.position} has no legal step on {board!r}"
        )

    def get_behavior_name(self) -> str:
        return "Basic"


def create_ai_behavior(ai_type: AIType, rng: Optional[random.Random] = None) -> AIBehavior:
    """Factory function to create AI behavior instances.

    Raises:
        ValueError: If ai_type is not supported
    """
    if ai_type == AIType.BASIC:
        return BasicAI(rng)
    else:
        raise ValueError(f"Unsupported AI type: {ai_type}")
