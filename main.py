#!/usr/bin/env python3

import argparse
import random

from skirmish.core.config import GameConfig
from skirmish.core.renderer import InputEventType, RendererConfig
from skirmish.core.state_service import JsonFileStateService
from skirmish.game.game import Game
from skirmish.renderers.ascii_renderer import AsciiRenderer

HELP = """Commands:
  click N   click cell N (select a character, move or attack)
  hover N   point at cell N
  leave N   move the pointer off cell N
  new       start a new game
  save      save the game
  load      load the saved game
  log       show recent log messages
  debug     toggle debug messages (AI decisions, selections) in the log
  savelog   write the full log to a file under logs/
  events    show the most recent game events
  help      show this help
  quit      leave the game"""


def run_command(game: Game, renderer: AsciiRenderer, line: str) -> bool:
    """Execute one command line. Returns False when the player quits."""
    parts = line.split()
    if not parts:
        return True
    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit"):
        return False
    if command == "help":
        print(HELP)
    elif command in ("click", "hover", "leave"):
        if len(args) != 1 or not args[0].isdigit():
            print(f"Usage: {command} N")
            return True
        event_type = {
            "click": InputEventType.CELL_CLICKED,
            "hover": InputEventType.CELL_ENTERED,
            "leave": InputEventType.CELL_LEFT,
        }[command]
        renderer.dispatch_cell(event_type, int(args[0]))
    elif command == "new":
        renderer.dispatch_action(InputEventType.NEW_GAME)
    elif command == "save":
        renderer.dispatch_action(InputEventType.SAVE_GAME)
    elif command == "load":
        renderer.dispatch_action(InputEventType.LOAD_GAME)
    elif command == "log":
        for message in game.log_manager.get_messages(count=15):
            print(message.format(include_timestamp=True))
        return True
    elif command == "debug":
        game.log_manager.toggle_debug()
        print(f"Debug messages {'on' if game.log_manager.is_debug_enabled() else 'off'}")
        return True
    elif command == "savelog":
        path = game.log_manager.save_log_to_file()
        print(f"Log written to {path}" if path else "Could not write the log file")
        return True
    elif command == "events":
        for event in game.event_manager.get_recent_events(count=15):
            print(f"  {event['event_type']:<14} level {event['level']}  from {event['source']}")
        return True
    else:
        print(f"Unknown command: {command} (type 'help')")
        return True

    renderer.present()
    return True


def main():
    parser = argparse.ArgumentParser(description="Skirmish: turn-based tactical battle")
    parser.add_argument("--config", help="Path to a game.yaml configuration file")
    parser.add_argument("--seed", type=int, help="Seed for reproducible AI and spawns")
    parser.add_argument("--save", help="Save file path (overrides the configuration)")
    args = parser.parse_args()

    config = GameConfig.load(args.config)
    renderer = AsciiRenderer(RendererConfig(board_size=config.board_size, title="Skirmish"))
    state_service = JsonFileStateService(args.save or config.save_path)
    rng = random.Random(args.seed) if args.seed is not None else None

    game = Game(renderer, state_service, config=config, rng=rng)
    game.init()
    renderer.present()
    print(HELP)

    try:
        while True:
            try:
                line = input("> ")
            except EOFError:
                break
            if not run_command(game, renderer, line):
                break
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user")
    finally:
        print("\n\nThanks for playing!")


if __name__ == "__main__":
    main()
