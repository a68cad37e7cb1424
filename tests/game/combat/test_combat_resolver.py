"""
Unit tests for combat resolution.

Tests the damage formula, its 10% chip-damage floor and health clamping.
"""
import math

import pytest

from skirmish.core.data import CharacterClass
from skirmish.game.combat_resolver import AttackResult, calculate_damage, resolve_attack
from skirmish.game.entities import Character


def fighter(attack: int, defence: int, health: int = 50, is_player: bool = True) -> Character:
    character_class = CharacterClass.SWORDSMAN if is_player else CharacterClass.UNDEAD
    return Character(character_class, level=1, attack=attack, defence=defence,
                     health=health, is_player=is_player)


class TestDamageFormula:

    def test_attack_minus_defence(self):
        """attack 20 vs defence 15 deals 5 and leaves a 10-health defender at 5."""
        attacker = fighter(attack=20, defence=5)
        defender = fighter(attack=10, defence=15, health=10, is_player=False)

        result = resolve_attack(attacker, defender)

        assert result == AttackResult(damage=5, remaining_health=5)
        assert not result.is_lethal

    def test_chip_damage_floor(self):
        """attack 10 vs defence 50 still deals 10% of the attack."""
        attacker = fighter(attack=10, defence=10)
        defender = fighter(attack=10, defence=50, is_player=False)

        assert calculate_damage(attacker, defender) == 1

    def test_floor_rounds_half_up(self):
        attacker = fighter(attack=25, defence=10)
        defender = fighter(attack=10, defence=100, is_player=False)

        assert calculate_damage(attacker, defender) == 3

    def test_lethal_attack_clamps_to_zero(self):
        attacker = fighter(attack=20, defence=5)
        defender = fighter(attack=10, defence=15, health=3, is_player=False)

        result = resolve_attack(attacker, defender)

        assert result.damage == 5
        assert result.remaining_health == 0
        assert result.is_lethal

    def test_resolver_does_not_touch_characters(self):
        attacker = fighter(attack=40, defence=10)
        defender = fighter(attack=10, defence=10, is_player=False)

        resolve_attack(attacker, defender)

        assert defender.health == 50


class TestDamageProperties:

    @pytest.mark.parametrize("attack", [1, 9, 10, 25, 40, 77, 100])
    @pytest.mark.parametrize("defence", [0, 10, 25, 40, 99])
    @pytest.mark.parametrize("health", [1, 5, 50, 100])
    def test_damage_floor_and_non_negative_health(self, attack, defence, health):
        attacker = fighter(attack=attack, defence=10)
        defender = fighter(attack=10, defence=defence, health=health, is_player=False)

        result = resolve_attack(attacker, defender)

        # The floor is 10% of the attack, rounded half up
        assert result.damage >= math.floor(attack * 0.1 + 0.5)
        assert result.damage >= attack - defence
        assert result.remaining_health >= 0
        assert result.remaining_health == max(health - result.damage, 0)

    @pytest.mark.parametrize("attack", [10, 20, 50, 100])
    def test_whole_number_floor_matches_ceiling(self, attack):
        """When 10% of the attack is whole the floor equals its ceiling."""
        attacker = fighter(attack=attack, defence=10)
        defender = fighter(attack=10, defence=100, is_player=False)

        assert resolve_attack(attacker, defender).damage >= math.ceil(attack * 0.1)
