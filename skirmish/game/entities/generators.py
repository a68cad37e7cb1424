"""Factories for fresh characters and faction start cells."""

import random
from typing import Iterable, Optional, Sequence

import numpy as np

from ...core.data import CharacterClass, Faction
from ..board import Board
from .character import Character, PositionedCharacter


def generate_start_cells(
    faction: Faction,
    board_size: int,
    occupied: Iterable[int] = (),
) -> list[int]:
    """Cell indices reserved for a faction's starting placement.

    Players start in the two leftmost columns, the opposing faction in the
    two rightmost. Cells in ``occupied`` are left out.
    """
    board = Board(board_size)
    cells = np.flatnonzero(board.start_mask(faction))
    taken = set(occupied)
    return [int(cell) for cell in cells if int(cell) not in taken]


def generate_characters(
    allowed_classes: Sequence[CharacterClass],
    max_level: int,
    count: int,
    rng: Optional[random.Random] = None,
) -> list[Character]:
    """Create ``count`` characters of random class and level.

    Each character's class is drawn from ``allowed_classes`` and its level
    uniformly from ``1..max_level``.
    """
    if not allowed_classes:
        raise ValueError("At least one character class is required")
    rng = rng or random.Random()
    max_level = max(1, max_level)
    return [
        Character.create(rng.choice(allowed_classes), rng.randint(1, max_level))
        for _ in range(count)
    ]


def generate_roster(
    allowed_classes: Sequence[CharacterClass],
    max_level: int,
    count: int,
    board_size: int,
    rng: Optional[random.Random] = None,
    occupied: Iterable[int] = (),
) -> list[PositionedCharacter]:
    """Create ``count`` characters placed on their faction's start cells.

    Positions are drawn without replacement from the unused start cells of
    the faction the classes belong to.

    Raises:
        ValueError: If there are fewer free start cells than characters
    """
    rng = rng or random.Random()
    characters = generate_characters(allowed_classes, max_level, count, rng)
    if not characters:
        return []

    faction = characters[0].faction
    cells = generate_start_cells(faction, board_size, occupied)
    if len(cells) < len(characters):
        raise ValueError(
            f"Not enough start cells for {len(characters)} characters ({len(cells)} free)"
        )

    positions = rng.sample(cells, len(characters))
    return [PositionedCharacter(character, position) for character, position in zip(characters, positions)]
