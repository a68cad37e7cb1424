"""Character class templates.

This module defines the baseline stats of every character archetype
(Bowman, Vampire, etc.). Templates are loaded from a YAML file and converted
to data structures that the Character factory reads when a character is
created or rehydrated from a saved snapshot.
"""

import os
from dataclasses import dataclass

import yaml

from ...core.data import CharacterClass, Faction


@dataclass(frozen=True)
class CharacterTemplate:
    """Baseline stats for one character class."""

    attack: int
    defence: int
    attack_range: int
    step: int
    faction: Faction


def _load_character_templates() -> dict[CharacterClass, CharacterTemplate]:
    """Load character templates from YAML file.

    Returns:
        Dictionary mapping CharacterClass enums to CharacterTemplate objects
    """
    # Package root is two levels up from this file
    current_dir = os.path.dirname(os.path.abspath(__file__))
    package_root = os.path.dirname(os.path.dirname(current_dir))
    yaml_path = os.path.join(package_root, "assets", "data", "characters.yaml")

    try:
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Character templates file not found: {yaml_path}")

    try:
        templates = {}
        for class_name, template_data in data["character_templates"].items():
            character_class = getattr(CharacterClass, class_name)
            templates[character_class] = CharacterTemplate(
                attack=int(template_data["combat"]["attack"]),
                defence=int(template_data["combat"]["defence"]),
                attack_range=int(template_data["combat"]["attack_range"]),
                step=int(template_data["movement"]["step"]),
                faction=Faction[template_data["faction"]],
            )

        return templates

    except KeyError as e:
        raise KeyError(f"Invalid template structure in {yaml_path}: {e}")
    except AttributeError as e:
        raise ValueError(f"Invalid character class name in {yaml_path}: {e}")


CHARACTER_TEMPLATES: dict[CharacterClass, CharacterTemplate] = _load_character_templates()


def get_template(character_class: CharacterClass) -> CharacterTemplate:
    """Get the template for a character class.

    Raises:
        KeyError: If character_class is not recognized
    """
    if character_class not in CHARACTER_TEMPLATES:
        raise KeyError(f"No template found for character class: {character_class}")

    return CHARACTER_TEMPLATES[character_class]


def classes_for(faction: Faction) -> tuple[CharacterClass, ...]:
    """Character classes a faction may spawn, in declaration order."""
    return tuple(
        character_class
        for character_class, template in CHARACTER_TEMPLATES.items()
        if template.faction == faction
    )
