"""Characters and their board placement.

A ``Character`` is an immutable value: damage, stat increments and leveling
all return a new character. Class behaviour (attack range, step radius,
baseline stats) comes from the template registry keyed by ``CharacterClass``,
so a character rebuilt from plain persisted fields has the same capabilities
as one created in play.
"""

from dataclasses import dataclass, replace
from typing import Any

from ...core.data import CharacterClass, Faction, round_half_up
from ...core.data.game_enums import CHARACTER_CLASS_NAMES
from .character_templates import CharacterTemplate, get_template

MAX_HEALTH = 100
STARTING_HEALTH = 50
LEVEL_UP_HEAL = 80


@dataclass(frozen=True)
class Character:
    """A single unit's class, level and combat stats."""

    character_class: CharacterClass
    level: int
    attack: int
    defence: int
    health: int = STARTING_HEALTH
    is_player: bool = True

    def __post_init__(self):
        if not isinstance(self.character_class, CharacterClass):
            raise TypeError(f"Unknown character class: {self.character_class!r}")
        if self.level < 1:
            raise ValueError(f"Character level must be >= 1, got {self.level}")
        # Frozen dataclass: clamp through object.__setattr__
        object.__setattr__(self, "health", max(0, min(MAX_HEALTH, int(self.health))))

    @classmethod
    def create(cls, character_class: CharacterClass, level: int = 1) -> "Character":
        """Create a fresh character with its class baseline stats."""
        template = get_template(character_class)
        return cls(
            character_class=character_class,
            level=level,
            attack=template.attack,
            defence=template.defence,
            health=STARTING_HEALTH,
            is_player=template.faction == Faction.PLAYER,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Character":
        """Rehydrate a character from plain persisted fields.

        Raises:
            KeyError: If a field or the class tag is missing or unknown
            ValueError: If the faction flag disagrees with the class
        """
        try:
            character_class = CharacterClass(data["class_tag"])
        except ValueError:
            raise KeyError(f"Unknown character class tag: {data['class_tag']!r}")

        is_player = bool(data["is_player"])
        if is_player != (get_template(character_class).faction == Faction.PLAYER):
            raise ValueError(
                f"{CHARACTER_CLASS_NAMES[character_class]} cannot have is_player={is_player}"
            )

        return cls(
            character_class=character_class,
            level=int(data["level"]),
            attack=int(data["attack"]),
            defence=int(data["defence"]),
            health=int(data["health"]),
            is_player=is_player,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "class_tag": self.character_class.value,
            "level": self.level,
            "attack": self.attack,
            "defence": self.defence,
            "health": self.health,
            "is_player": self.is_player,
        }

    @property
    def template(self) -> CharacterTemplate:
        return get_template(self.character_class)

    @property
    def attack_range(self) -> int:
        return self.template.attack_range

    @property
    def step(self) -> int:
        return self.template.step

    @property
    def faction(self) -> Faction:
        return Faction.PLAYER if self.is_player else Faction.NPC

    @property
    def name(self) -> str:
        return CHARACTER_CLASS_NAMES[self.character_class]

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def take_damage(self, points: int) -> "Character":
        """Return this character with ``points`` of health removed."""
        return replace(self, health=max(self.health - points, 0))

    def stats_up(self) -> "Character":
        """Return this character after a single-level stat increment.

        Attack and defence grow with the remaining health; level and health
        are untouched.
        """
        return replace(
            self,
            attack=max(self.attack, round_half_up(self.attack * (80 + self.health) / 100)),
            defence=max(self.defence, round_half_up(self.defence * (80 + self.health) / 100)),
        )

    def level_up(self) -> "Character":
        """Return this character one level higher, stats raised and healed."""
        raised = self.stats_up()
        return replace(
            raised,
            level=raised.level + 1,
            health=min(raised.health + LEVEL_UP_HEAL, MAX_HEALTH),
        )

    def cell_info(self) -> str:
        """Short stat line shown when hovering the character's cell."""
        return f"🎖 {self.level} ⚔ {self.attack} 🛡 {self.defence} ❤ {self.health}"


@dataclass(frozen=True)
class PositionedCharacter:
    """A character placed on a board cell.

    Raises:
        TypeError: If ``character`` is not a Character or ``position`` is not an int
    """

    character: Character
    position: int

    def __post_init__(self):
        if not isinstance(self.character, Character):
            raise TypeError(
                f"PositionedCharacter requires a Character, got {type(self.character).__name__}"
            )
        # bool is an int subclass but never a cell index
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise TypeError(
                f"PositionedCharacter position must be an int, got {type(self.position).__name__}"
            )

    @property
    def is_player(self) -> bool:
        return self.character.is_player

    def moved_to(self, position: int) -> "PositionedCharacter":
        return PositionedCharacter(self.character, position)

    def with_character(self, character: Character) -> "PositionedCharacter":
        return PositionedCharacter(character, self.position)

    def to_dict(self) -> dict[str, Any]:
        return {"character": self.character.to_dict(), "position": self.position}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PositionedCharacter":
        return cls(Character.from_dict(data["character"]), data["position"])
