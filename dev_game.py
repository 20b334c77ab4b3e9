#!/usr/bin/env python3
"""
Cabinet Game Launcher

Opens a pygame window hosting the arcade canvas. Games are found through
the game registry; one can be preselected on the command line, the rest
are picked from the keyboard.

Usage:
    # List available games
    python dev_game.py --list

    # Open the cabinet with a game selected and started
    python dev_game.py viper
    python dev_game.py pong --log-level DEBUG

    # Tuning file and window size
    python dev_game.py guidedowl --config cabinet.yaml --resolution 1024x600

Keys in the window:
    1/2/3   select a game (registry order)
    Enter   start, or continue the running round
    Tab     show/hide the arcade screen (hiding pauses)
    F1      list games in the console
"""

import argparse
import sys

from cabinet.config import ConfigError, load_settings
from cabinet.controller import ArcadeController
from cabinet.engine import ArcadeEngine
from cabinet.host.pygame_host import PygameHost
from cabinet.logging import configure_logging
from games.registry import UnknownGameError, get_registry


def parse_resolution(value: str):
    """Parse WIDTHxHEIGHT into an (int, int) tuple."""
    try:
        width, height = value.lower().split('x')
        return int(width), int(height)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid resolution format: {value} (expected WIDTHxHEIGHT, e.g. 1280x720)"
        )


def build_parser(available_games):
    parser = argparse.ArgumentParser(
        description='Cabinet - arcade games on a tick-driven engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Available games: {', '.join(available_games)}

Examples:
  python dev_game.py --list              # List available games
  python dev_game.py viper               # Play Viper
  python dev_game.py pong --config cabinet.yaml
        """
    )
    parser.add_argument('game', nargs='?', choices=available_games, help='Game to select and start')
    parser.add_argument('--list', '-l', action='store_true', help='List all available games and exit')
    parser.add_argument('--config', '-c', type=str, default=None,
                        help='YAML settings file (default: $CABINET_CONFIG)')
    parser.add_argument('--resolution', '-r', type=parse_resolution, default=None,
                        help='Window resolution as WIDTHxHEIGHT (default from settings)')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Default log level (TRACE, DEBUG, INFO, WARNING, ERROR, OFF)')
    return parser


def print_games(registry) -> None:
    print("\nAvailable Games")
    print("=" * 50)
    for index, slug in enumerate(registry.list_games(), start=1):
        info = registry.get_game_info(slug)
        print(f"\n  [{index}] {slug}")
        print(f"    Name: {info.name}")
        print(f"    Description: {info.description}")
        print(f"    Version: {info.version}")
        if info.controls:
            print(f"    Controls: {', '.join(info.controls)}")
    print()


def bind_menu_keys(host, controller: ArcadeController, registry) -> None:
    """Bind the launcher's own keys. Game keys are bound by the engine."""
    for index, slug in enumerate(controller.games[:9], start=1):
        host.register_key_bind(f"key_{index}", lambda slug=slug: controller.select(slug))
    host.register_key_bind('key_Return', controller.start)
    host.register_key_bind('key_Tab', controller.toggle_menu)
    host.register_key_bind('key_F1', lambda: print_games(registry))


def main():
    """Main entry point for the cabinet launcher."""
    registry = get_registry()
    available_games = registry.list_games()
    args = build_parser(available_games).parse_args()

    if args.list:
        print_games(registry)
        return 0

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 1

    configure_logging(level=args.log_level or settings.log_level)
    width, height = args.resolution or (settings.window_width, settings.window_height)

    host = PygameHost(width, height, caption="Cabinet")
    engine = ArcadeEngine(
        host,
        tick_interval=settings.tick_interval,
        canvas_size=(settings.canvas_width, settings.canvas_height),
    )
    canvas_x = max(0, (width - settings.canvas_width) // 2)
    canvas_y = max(0, (height - settings.canvas_height) // 2)
    engine.canvas.set_style('position', f"{canvas_x}px {canvas_y}px 0px")

    controller = ArcadeController(engine, registry, settings)
    bind_menu_keys(host, controller, registry)
    host.hud_lines = lambda: [
        controller.status_line(),
        "1-3 select  Enter start  Tab menu  F1 list",
    ]

    print("=" * 60)
    print("Cabinet")
    print("=" * 60)
    print(f"Resolution: {width}x{height}")
    print(f"Games: {', '.join(available_games)}")
    print("=" * 60)

    engine.set_open(True)
    if args.game:
        try:
            controller.select(args.game)
        except (UnknownGameError, ConfigError) as e:
            print(f"ERROR: Failed to create game: {e}")
            return 1
        controller.start()

    host.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
