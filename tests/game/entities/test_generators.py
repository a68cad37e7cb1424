"""
Unit tests for the roster and start-cell generators.
"""

import pytest

from skirmish.core.data import CharacterClass, Faction
from skirmish.game.entities import classes_for, generate_characters, generate_roster, generate_start_cells


class TestStartCells:

    def test_player_cells(self):
        cells = generate_start_cells(Faction.PLAYER, 8)

        assert len(cells) == 16
        assert all(cell % 8 in (0, 1) for cell in cells)

    def test_npc_cells(self):
        cells = generate_start_cells(Faction.NPC, 8)

        assert len(cells) == 16
        assert all(cell % 8 in (6, 7) for cell in cells)

    def test_occupied_cells_are_excluded(self):
        cells = generate_start_cells(Faction.PLAYER, 8, occupied=[0, 1, 8])

        assert 0 not in cells and 1 not in cells and 8 not in cells
        assert len(cells) == 13


class TestGenerateCharacters:

    def test_count_and_classes(self, rng):
        characters = generate_characters(classes_for(Faction.NPC), 3, 10, rng)

        assert len(characters) == 10
        assert all(c.character_class in classes_for(Faction.NPC) for c in characters)
        assert all(1 <= c.level <= 3 for c in characters)
        assert all(not c.is_player for c in characters)

    def test_spawned_stats_are_baseline(self, rng):
        """Fresh characters keep class baselines whatever their level."""
        characters = generate_characters((CharacterClass.BOWMAN,), 4, 5, rng)

        assert all((c.attack, c.defence, c.health) == (25, 25, 50) for c in characters)

    def test_requires_classes(self, rng):
        with pytest.raises(ValueError):
            generate_characters((), 1, 1, rng)


class TestGenerateRoster:

    def test_positions_are_unique_start_cells(self, rng):
        team = generate_roster(classes_for(Faction.PLAYER), 1, 6, 8, rng)

        positions = [entry.position for entry in team]
        assert len(set(positions)) == 6
        assert all(position % 8 in (0, 1) for position in positions)
        assert all(entry.character.level == 1 for entry in team)

    def test_respects_occupied(self, rng):
        occupied = generate_start_cells(Faction.NPC, 8)[:15]

        team = generate_roster(classes_for(Faction.NPC), 1, 1, 8, rng, occupied)

        assert team[0].position not in occupied

    def test_not_enough_cells(self, rng):
        with pytest.raises(ValueError):
            generate_roster(classes_for(Faction.PLAYER), 1, 17, 8, rng)

    def test_empty_roster(self, rng):
        assert generate_roster(classes_for(Faction.PLAYER), 1, 0, 8, rng) == []
