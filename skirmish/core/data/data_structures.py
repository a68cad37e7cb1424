"""Grid coordinate structures and conversion utilities.

Board cells are addressed two ways: by a flat integer cell index in
``[0, size**2)`` (what the renderers and the persisted snapshot use) and by a
``Vector2`` row/column pair (what the geometry predicates use). This module
provides the conversions between the two.
"""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Vector2:
    """2D grid coordinate.

    Uses (y, x) ordering for direct alignment with 2D array access patterns.
    First parameter is row (y-coordinate), second is column (x-coordinate).
    """
    y: int
    x: int

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.y + other.y, self.x + other.x)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.y - other.y, self.x - other.x)

    def __iter__(self):
        """Make Vector2 iterable for unpacking (y, x order)."""
        yield self.y
        yield self.x

    def __repr__(self) -> str:
        return f"Vector2({self.y}, {self.x})"

    def chebyshev_distance_to(self, other: "Vector2") -> int:
        """King-move distance: the larger of the row and column deltas."""
        return max(abs(self.y - other.y), abs(self.x - other.x))

    def is_straight_or_diagonal_to(self, other: "Vector2") -> bool:
        """True when ``other`` lies on the same row, column or diagonal."""
        dy = abs(self.y - other.y)
        dx = abs(self.x - other.x)
        return dy == 0 or dx == 0 or dy == dx

    @classmethod
    def from_index(cls, index: int, board_size: int) -> "Vector2":
        """Create Vector2 from a flat cell index on a square board."""
        return cls(index // board_size, index % board_size)

    def to_index(self, board_size: int) -> int:
        """Convert to a flat cell index on a square board."""
        return self.y * board_size + self.x

    def to_tuple(self) -> tuple[int, int]:
        return (self.y, self.x)


def index_grid(board_size: int) -> tuple[NDArray[np.int16], NDArray[np.int16]]:
    """Return (rows, cols) arrays for every flat cell index of a square board.

    Both arrays have shape ``(board_size**2,)`` so that ``rows[i], cols[i]``
    is the coordinate of cell ``i``.
    """
    indices = np.arange(board_size * board_size, dtype=np.int16)
    return indices // board_size, indices % board_size


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up.

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``);
    stat and damage arithmetic always rounds ``.5`` upward.
    """
    return math.floor(value + 0.5)
