"""Square game board and its geometry predicates.

Cells are addressed by flat index ``row * size + col``. Movement is queen-like
(straight or diagonal lines) and attacks cover the full square around the
attacker; both are bounded by a Chebyshev radius.
"""

import numpy as np
from numpy.typing import NDArray

from ..core.data import Faction, Vector2, index_grid


class Board:
    """Square board of ``size * size`` cells."""

    def __init__(self, size: int = 8):
        if size < 2:
            raise ValueError(f"Board size must be at least 2, got {size}")
        self.size = size
        self.cell_count = size * size
        self._rows, self._cols = index_grid(size)

    def __repr__(self) -> str:
        return f"Board({self.size}x{self.size})"

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < self.cell_count

    def to_vector(self, index: int) -> Vector2:
        return Vector2.from_index(index, self.size)

    def to_index(self, position: Vector2) -> int:
        return position.to_index(self.size)

    def can_step(self, from_index: int, to_index: int, radius: int) -> bool:
        """Whether a unit at ``from_index`` may step to ``to_index``.

        The destination must lie on the same row, column or diagonal, at most
        ``radius`` cells away.
        """
        if from_index == to_index:
            return False
        if not (self.is_valid_index(from_index) and self.is_valid_index(to_index)):
            return False
        start = self.to_vector(from_index)
        end = self.to_vector(to_index)
        return start.is_straight_or_diagonal_to(end) and start.chebyshev_distance_to(end) <= radius

    def can_attack(self, from_index: int, to_index: int, radius: int) -> bool:
        """Whether a unit at ``from_index`` may attack ``to_index``."""
        if from_index == to_index:
            return False
        if not (self.is_valid_index(from_index) and self.is_valid_index(to_index)):
            return False
        return self.to_vector(from_index).chebyshev_distance_to(self.to_vector(to_index)) <= radius

    def _distances(self, from_index: int) -> tuple[NDArray[np.int16], NDArray[np.int16]]:
        origin = self.to_vector(from_index)
        return np.abs(self._rows - origin.y), np.abs(self._cols - origin.x)

    def step_mask(self, from_index: int, radius: int) -> NDArray[np.bool_]:
        """Boolean mask over every cell index, True where ``can_step`` holds."""
        dy, dx = self._distances(from_index)
        in_line = (dy == 0) | (dx == 0) | (dy == dx)
        mask = in_line & (np.maximum(dy, dx) <= radius)
        mask[from_index] = False
        return mask

    def attack_mask(self, from_index: int, radius: int) -> NDArray[np.bool_]:
        """Boolean mask over every cell index, True where ``can_attack`` holds."""
        dy, dx = self._distances(from_index)
        mask = np.maximum(dy, dx) <= radius
        mask[from_index] = False
        return mask

    def start_columns(self, faction: Faction) -> tuple[int, int]:
        """The two board columns a faction starts in."""
        if faction == Faction.PLAYER:
            return (0, 1)
        return (self.size - 2, self.size - 1)

    def start_mask(self, faction: Faction) -> NDArray[np.bool_]:
        return np.isin(self._cols, self.start_columns(faction))
