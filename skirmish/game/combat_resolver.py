"""
Combat resolution for a single attack.

The resolver is a pure calculation over two characters' stats. Applying the
result to the roster (and removing a defeated defender) is the turn engine's
job.
"""
from dataclasses import dataclass

from ..core.data import round_half_up
from .entities.character import Character

# Minimum damage as a fraction of the attacker's attack stat
CHIP_DAMAGE_RATIO = 0.1


@dataclass(frozen=True)
class AttackResult:
    """Outcome of one attack."""
    damage: int
    remaining_health: int

    @property
    def is_lethal(self) -> bool:
        return self.remaining_health == 0


def calculate_damage(attacker: Character, defender: Character) -> int:
    """Damage dealt by ``attacker`` to ``defender``.

    Attack minus defence, but never less than 10% of the attack so that
    high-defence targets still take chip damage.
    """
    raw = max(attacker.attack - defender.defence, attacker.attack * CHIP_DAMAGE_RATIO)
    return round_half_up(raw)


def resolve_attack(attacker: Character, defender: Character) -> AttackResult:
    """Compute the damage of an attack and the defender's remaining health."""
    damage = calculate_damage(attacker, defender)
    return AttackResult(damage=damage, remaining_health=max(defender.health - damage, 0))
