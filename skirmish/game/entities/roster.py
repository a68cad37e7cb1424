"""The active roster of positioned characters.

A ``Roster`` is immutable: every operation returns a new roster. The player
and opposing faction views are derived once when the roster is built, so
turn logic never rescans the full roster to partition it.
"""

from typing import Iterable, Iterator, Optional

from ...core.data import Faction
from .character import PositionedCharacter


class Roster:
    """Immutable set of positioned characters with per-faction views.

    Dead characters are dropped when a roster is built. No two entries may
    share a position.
    """

    __slots__ = ("_by_position", "_player", "_npc")

    def __init__(self, entries: Iterable[PositionedCharacter] = ()):
        by_position: dict[int, PositionedCharacter] = {}
        for entry in entries:
            if not isinstance(entry, PositionedCharacter):
                raise TypeError(f"Roster entries must be PositionedCharacter, got {type(entry).__name__}")
            if not entry.character.is_alive:
                continue
            if entry.position in by_position:
                raise ValueError(f"Position {entry.position} is already occupied")
            by_position[entry.position] = entry

        self._by_position = by_position
        self._player = tuple(e for e in by_position.values() if e.is_player)
        self._npc = tuple(e for e in by_position.values() if not e.is_player)

    def __iter__(self) -> Iterator[PositionedCharacter]:
        return iter(self._by_position.values())

    def __len__(self) -> int:
        return len(self._by_position)

    def __contains__(self, position: object) -> bool:
        return position in self._by_position

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Roster):
            return NotImplemented
        return self._by_position == other._by_position

    def __hash__(self) -> int:
        return hash(frozenset(self._by_position.values()))

    def __repr__(self) -> str:
        return f"Roster(player={len(self._player)}, npc={len(self._npc)})"

    @property
    def player_units(self) -> tuple[PositionedCharacter, ...]:
        return self._player

    @property
    def npc_units(self) -> tuple[PositionedCharacter, ...]:
        return self._npc

    def faction(self, faction: Faction) -> tuple[PositionedCharacter, ...]:
        return self._player if faction == Faction.PLAYER else self._npc

    def find(self, position: int) -> Optional[PositionedCharacter]:
        return self._by_position.get(position)

    def occupied_positions(self) -> frozenset[int]:
        return frozenset(self._by_position)

    def total_health(self, faction: Faction) -> int:
        return sum(entry.character.health for entry in self.faction(faction))

    def without(self, position: int) -> "Roster":
        """Return a roster with the entry at ``position`` removed."""
        return Roster(e for p, e in self._by_position.items() if p != position)

    def with_added(self, *entries: PositionedCharacter) -> "Roster":
        """Return a roster with ``entries`` added.

        Raises:
            ValueError: If an entry lands on an occupied position
        """
        return Roster((*self._by_position.values(), *entries))

    def moved(self, from_position: int, to_position: int) -> "Roster":
        """Return a roster with the entry at ``from_position`` relocated."""
        entry = self._by_position.get(from_position)
        if entry is None:
            raise KeyError(f"No character at position {from_position}")
        return self.without(from_position).with_added(entry.moved_to(to_position))
