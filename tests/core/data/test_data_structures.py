"""
Unit tests for core data structures.

Tests Vector2, flat-index conversion and the rounding helper.
"""

import pytest

from skirmish.core.data.data_structures import Vector2, index_grid, round_half_up


class TestVector2:
    """Test Vector2 functionality."""

    def test_vector2_creation(self):
        v = Vector2(3, 4)
        assert v.y == 3
        assert v.x == 4

    def test_vector2_addition_and_subtraction(self):
        assert Vector2(1, 2) + Vector2(3, 4) == Vector2(4, 6)
        assert Vector2(5, 7) - Vector2(2, 3) == Vector2(3, 4)

    def test_vector2_unpacking(self):
        y, x = Vector2(2, 5)
        assert (y, x) == (2, 5)

    def test_index_conversion(self):
        """Flat indices are row-major on a square board."""
        assert Vector2.from_index(0, 8) == Vector2(0, 0)
        assert Vector2.from_index(9, 8) == Vector2(1, 1)
        assert Vector2.from_index(63, 8) == Vector2(7, 7)
        assert Vector2(3, 5).to_index(8) == 29

    def test_chebyshev_distance(self):
        assert Vector2(0, 0).chebyshev_distance_to(Vector2(7, 7)) == 7
        assert Vector2(2, 2).chebyshev_distance_to(Vector2(3, 5)) == 3

    def test_straight_or_diagonal(self):
        origin = Vector2(3, 3)
        assert origin.is_straight_or_diagonal_to(Vector2(3, 7))
        assert origin.is_straight_or_diagonal_to(Vector2(0, 3))
        assert origin.is_straight_or_diagonal_to(Vector2(5, 1))
        assert not origin.is_straight_or_diagonal_to(Vector2(4, 5))


class TestIndexGrid:

    def test_index_grid_shapes(self):
        rows, cols = index_grid(4)
        assert rows.shape == (16,)
        assert cols.shape == (16,)
        assert (rows[5], cols[5]) == (1, 1)
        assert (rows[15], cols[15]) == (3, 3)


class TestRoundHalfUp:

    @pytest.mark.parametrize("value,expected", [
        (0.4, 0),
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (4.0, 4),
        (32.5, 33),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected
