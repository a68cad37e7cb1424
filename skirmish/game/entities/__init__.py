"""Character entities, templates and the active roster.

- character.py: Character and PositionedCharacter value objects
- character_templates.py: YAML-backed per-class baselines
- roster.py: Immutable roster with player and opposing faction views
- generators.py: Roster and start-cell factories
"""

from .character import Character, PositionedCharacter
from .character_templates import CHARACTER_TEMPLATES, CharacterTemplate, get_template, classes_for
from .roster import Roster
from .generators import generate_characters, generate_roster, generate_start_cells

__all__ = [
    "Character",
    "PositionedCharacter",
    "CHARACTER_TEMPLATES",
    "CharacterTemplate",
    "get_template",
    "classes_for",
    "Roster",
    "generate_characters",
    "generate_roster",
    "generate_start_cells",
]
