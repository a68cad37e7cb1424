"""
Game configuration loaded from YAML.

Settings live in ``assets/config/game.yaml`` inside the package. A missing
file is not an error: the built-in defaults are used and ``loaded_from`` is
left as None so the caller can report it.
"""
import os
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from .data import InputLockPolicy, Theme

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "assets", "config", "game.yaml"
)


@dataclass(frozen=True)
class GameConfig:
    """Tunable settings for one game session."""

    board_size: int = 8
    max_level: int = 4
    themes: tuple[Theme, ...] = (Theme.PRAIRIE, Theme.DESERT, Theme.ARCTIC, Theme.MOUNTAIN)
    initial_team_size: int = 2
    initial_max_level: int = 1
    input_lock: InputLockPolicy = InputLockPolicy.ATTACKS
    save_path: str = "skirmish_save.json"
    log_level: str = "INFO"
    max_log_messages: int = 1000
    loaded_from: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if self.board_size < 4:
            raise ValueError(f"board_size must be at least 4, got {self.board_size}")
        if self.max_level < 1:
            raise ValueError(f"max_level must be at least 1, got {self.max_level}")
        if not self.themes:
            raise ValueError("At least one theme is required")

    def theme_for(self, level: int) -> Theme:
        """Theme for a level; levels past the theme list reuse the last one."""
        index = min(max(level, 1), len(self.themes)) - 1
        return self.themes[index]

    @classmethod
    def from_dict(cls, data: dict[str, Any], loaded_from: Optional[str] = None) -> "GameConfig":
        """Build a config from the nested YAML structure.

        Raises:
            ValueError: If a value has the wrong type or an unknown name
        """
        defaults = cls()
        board = data.get("board") or {}
        levels = data.get("levels") or {}
        teams = data.get("teams") or {}
        input_section = data.get("input") or {}
        persistence = data.get("persistence") or {}
        logging_section = data.get("logging") or {}

        try:
            themes = tuple(Theme(name) for name in levels.get("themes", [t.value for t in defaults.themes]))
            input_lock = InputLockPolicy(input_section.get("lock", defaults.input_lock.value))
        except ValueError as e:
            raise ValueError(f"Invalid configuration value: {e}")

        return cls(
            board_size=int(board.get("size", defaults.board_size)),
            max_level=int(levels.get("max_level", defaults.max_level)),
            themes=themes,
            initial_team_size=int(teams.get("initial_size", defaults.initial_team_size)),
            initial_max_level=int(teams.get("initial_max_level", defaults.initial_max_level)),
            input_lock=input_lock,
            save_path=str(persistence.get("save_path", defaults.save_path)),
            log_level=str(logging_section.get("level", defaults.log_level)).upper(),
            max_log_messages=int(logging_section.get("max_messages", defaults.max_log_messages)),
            loaded_from=loaded_from,
        )

    @classmethod
    def load(cls, path: Optional[str] = None) -> "GameConfig":
        """Load configuration from ``path`` (default: the packaged game.yaml)."""
        yaml_path = path or DEFAULT_CONFIG_PATH
        try:
            with open(yaml_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            return cls()

        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration structure in {yaml_path}")
        return cls.from_dict(data, loaded_from=yaml_path)
