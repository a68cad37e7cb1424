"""
Presentation adapter contract.

The turn engine never touches presentation state. It issues display
directives through this interface and receives input as cell indices through
the listener registry every renderer shares.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterable, Optional, TYPE_CHECKING

from .data import HighlightColor, PointerIcon, Severity, Theme

if TYPE_CHECKING:
    from ..game.entities.character import PositionedCharacter


CellListener = Callable[[int], None]
ActionListener = Callable[[], None]


class InputEventType(Enum):
    """Input notifications a renderer can dispatch to the controller."""
    CELL_CLICKED = auto()
    CELL_ENTERED = auto()
    CELL_LEFT = auto()
    NEW_GAME = auto()
    SAVE_GAME = auto()
    LOAD_GAME = auto()


CELL_EVENTS = (InputEventType.CELL_CLICKED, InputEventType.CELL_ENTERED, InputEventType.CELL_LEFT)


@dataclass
class RendererConfig:
    board_size: int = 8
    title: str = "Skirmish"


class Renderer(ABC):

    def __init__(self, config: Optional[RendererConfig] = None):
        self.config = config or RendererConfig()
        self._cell_listeners: dict[InputEventType, list[CellListener]] = {
            event_type: [] for event_type in CELL_EVENTS
        }
        self._action_listeners: dict[InputEventType, list[ActionListener]] = {
            InputEventType.NEW_GAME: [],
            InputEventType.SAVE_GAME: [],
            InputEventType.LOAD_GAME: [],
        }

    # Display directives

    @abstractmethod
    def draw_board(self, theme: Theme) -> None:
        pass

    @abstractmethod
    def redraw(self, roster: Iterable["PositionedCharacter"]) -> None:
        pass

    @abstractmethod
    def highlight_cell(self, index: int, color: HighlightColor = HighlightColor.YELLOW) -> None:
        pass

    @abstractmethod
    def clear_highlights(self, *colors: HighlightColor) -> None:
        """Remove highlights of the given colors, or all highlights if none given."""
        pass

    @abstractmethod
    def set_pointer_icon(self, icon: PointerIcon) -> None:
        pass

    @abstractmethod
    def show_tooltip(self, title: str, message: str, severity: Severity) -> None:
        pass

    @abstractmethod
    def show_cell_info(self, text: str, index: int) -> None:
        pass

    @abstractmethod
    def hide_cell_info(self, index: int) -> None:
        pass

    @abstractmethod
    def show_banner(self, text: str) -> None:
        pass

    @abstractmethod
    def render_score(self, level: int, points: int, record: int) -> None:
        pass

    @abstractmethod
    def animate_damage(self, index: int, amount: int, on_complete: ActionListener) -> None:
        """Show a damage number over ``index``; call ``on_complete`` exactly once when done."""
        pass

    def animate_move(self, from_index: int, to_index: int, on_complete: ActionListener) -> None:
        """Show a step from one cell to another; renderers without move feedback finish at once."""
        on_complete()

    # Listener registry

    def add_cell_click_listener(self, listener: CellListener) -> None:
        self._cell_listeners[InputEventType.CELL_CLICKED].append(listener)

    def add_cell_enter_listener(self, listener: CellListener) -> None:
        self._cell_listeners[InputEventType.CELL_ENTERED].append(listener)

    def add_cell_leave_listener(self, listener: CellListener) -> None:
        self._cell_listeners[InputEventType.CELL_LEFT].append(listener)

    def add_new_game_listener(self, listener: ActionListener) -> None:
        self._action_listeners[InputEventType.NEW_GAME].append(listener)

    def add_save_game_listener(self, listener: ActionListener) -> None:
        self._action_listeners[InputEventType.SAVE_GAME].append(listener)

    def add_load_game_listener(self, listener: ActionListener) -> None:
        self._action_listeners[InputEventType.LOAD_GAME].append(listener)

    def unsubscribe_cell_listeners(self) -> None:
        """Drop every cell listener; new game, save and load stay active."""
        for listeners in self._cell_listeners.values():
            listeners.clear()

    def unsubscribe_all_listeners(self) -> None:
        self.unsubscribe_cell_listeners()
        for listeners in self._action_listeners.values():
            listeners.clear()

    def has_cell_listeners(self) -> bool:
        return any(self._cell_listeners.values())

    # Dispatch, called by concrete adapters when input arrives

    def dispatch_cell(self, event_type: InputEventType, index: int) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._cell_listeners[event_type]):
            listener(index)

    def dispatch_action(self, event_type: InputEventType) -> None:
        for listener in list(self._action_listeners[event_type]):
            listener()

    def click_cell(self, index: int) -> None:
        self.dispatch_cell(InputEventType.CELL_CLICKED, index)

    def enter_cell(self, index: int) -> None:
        self.dispatch_cell(InputEventType.CELL_ENTERED, index)

    def leave_cell(self, index: int) -> None:
        self.dispatch_cell(InputEventType.CELL_LEFT, index)
