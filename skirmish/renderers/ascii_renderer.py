import sys
from typing import Iterable, Optional, TextIO, TYPE_CHECKING

from ..core.data import CharacterClass, HighlightColor, PointerIcon, Severity, Theme
from ..core.renderer import ActionListener, Renderer, RendererConfig

if TYPE_CHECKING:
    from ..game.entities.character import PositionedCharacter


class AsciiRenderer(Renderer):
    """Text renderer for terminals and tests.

    Player characters are upper-case letters, opposing ones lower-case.
    Damage feedback completes immediately.
    """

    def __init__(self, config: Optional[RendererConfig] = None, output: Optional[TextIO] = None):
        super().__init__(config)
        self.output = output or sys.stdout
        self.theme: Optional[Theme] = None
        self.cells: dict[int, "PositionedCharacter"] = {}
        self.highlights: dict[int, HighlightColor] = {}
        self.pointer_icon = PointerIcon.AUTO
        self.cell_info: dict[int, str] = {}
        self.tooltips: list[tuple[str, str, Severity]] = []
        self.banner: Optional[str] = None
        self.score: tuple[int, int, int] = (1, 0, 0)

        self.class_symbols = {
            CharacterClass.BOWMAN: "B",
            CharacterClass.SWORDSMAN: "S",
            CharacterClass.MAGICIAN: "M",
            CharacterClass.VAMPIRE: "v",
            CharacterClass.UNDEAD: "u",
            CharacterClass.DAEMON: "d",
        }

        self.highlight_symbols = {
            HighlightColor.YELLOW: "*",
            HighlightColor.GREEN: "+",
            HighlightColor.RED: "!",
        }

        self.theme_symbols = {
            Theme.PRAIRIE: ".",
            Theme.DESERT: ":",
            Theme.ARCTIC: "_",
            Theme.MOUNTAIN: "^",
        }

    def _write(self, text: str) -> None:
        self.output.write(text + "\n")

    def draw_board(self, theme: Theme) -> None:
        self.theme = theme
        self.highlights.clear()
        self.cell_info.clear()
        self._write(f"=== {self.config.title}: {theme.value} ===")

    def redraw(self, roster: Iterable["PositionedCharacter"]) -> None:
        self.cells = {entry.position: entry for entry in roster}

    def highlight_cell(self, index: int, color: HighlightColor = HighlightColor.YELLOW) -> None:
        self.highlights[index] = color

    def clear_highlights(self, *colors: HighlightColor) -> None:
        if not colors:
            self.highlights.clear()
            return
        self.highlights = {i: c for i, c in self.highlights.items() if c not in colors}

    def set_pointer_icon(self, icon: PointerIcon) -> None:
        self.pointer_icon = icon

    def show_tooltip(self, title: str, message: str, severity: Severity) -> None:
        self.tooltips.append((title, message, severity))
        self._write(f"[{severity.value.upper()}] {title}: {message}")

    def show_cell_info(self, text: str, index: int) -> None:
        self.cell_info[index] = text
        self._write(f"  cell {index}: {text}")

    def hide_cell_info(self, index: int) -> None:
        self.cell_info.pop(index, None)

    def show_banner(self, text: str) -> None:
        self.banner = text
        self._write(f"*** {text} ***")

    def render_score(self, level: int, points: int, record: int) -> None:
        self.score = (level, points, record)

    def animate_damage(self, index: int, amount: int, on_complete: ActionListener) -> None:
        self._write(f"  -{amount} at cell {index}")
        on_complete()

    def render_board(self) -> str:
        """The board as text, one row per line, with a score header."""
        size = self.config.board_size
        empty = self.theme_symbols.get(self.theme, ".") if self.theme else "."
        level, points, record = self.score
        lines = [f"Level {level}  Score {points}  Record {record}"]
        lines.append("    " + "".join(f"{col:>3}" for col in range(size)))
        for row in range(size):
            symbols = []
            for col in range(size):
                index = row * size + col
                entry = self.cells.get(index)
                symbol = self.class_symbols[entry.character.character_class] if entry else empty
                mark = self.highlight_symbols.get(self.highlights.get(index), " ")
                symbols.append(f"{mark}{symbol} ")
            lines.append(f"{row * size:>3} " + "".join(symbols))
        return "\n".join(lines)

    def present(self) -> None:
        self._write(self.render_board())
