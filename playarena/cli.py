"""
PlayArena CLI - Play the engines from a terminal.

Usage:
    playarena games                          List games
    playarena new <game> [--difficulty ...]  Start a new saved game
    playarena show <game>                    Show the saved game
    playarena act <game> <action> [--payload JSON]
                                             Apply an action to the saved game
    playarena clear <game>                   Delete the saved game

Every command that touches a game prints its state as JSON.
"""

import argparse
import json
import logging
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="PlayArena - Casual game rule engines",
        prog="playarena",
    )
    parser.add_argument("--store-dir", help="Directory for saved games")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("games", help="List games")

    new_parser = subparsers.add_parser("new", help="Start a new game")
    new_parser.add_argument("game", help="Game type")
    new_parser.add_argument("--seed", type=int, help="Random seed")
    new_parser.add_argument("--difficulty", choices=["easy", "medium", "hard"], help="Sudoku difficulty")
    new_parser.add_argument("--challenge", action="store_true", help="Sudoku challenge mode")

    show_parser = subparsers.add_parser("show", help="Show the saved game")
    show_parser.add_argument("game", help="Game type")

    act_parser = subparsers.add_parser("act", help="Apply an action")
    act_parser.add_argument("game", help="Game type")
    act_parser.add_argument("action", help="Action name (move, flip, swap, ...)")
    act_parser.add_argument("--payload", default="{}", help="Action payload as JSON")

    clear_parser = subparsers.add_parser("clear", help="Delete the saved game")
    clear_parser.add_argument("game", help="Game type")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "games": cmd_games,
        "new": cmd_new,
        "show": cmd_show,
        "act": cmd_act,
        "clear": cmd_clear,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        command(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


def _store(args):
    from .store import LocalGameStore
    return LocalGameStore(store_dir=args.store_dir)


def _print_state(state):
    print(json.dumps(state.to_dict(), ensure_ascii=False, indent=2))


def cmd_games(args):
    """List games."""
    from .games import GAMES

    for info in GAMES.values():
        print(f"{info.game_type.value:<8} {info.name:<16} {info.description}")
        print(f"{'':<8} actions: {', '.join(info.actions)}")


def cmd_new(args):
    """Start a new game and save it."""
    from .engine_core.randomness import make_rng
    from .games import GameType, create_engine, get_game_type

    game_type = get_game_type(args.game)
    options = {}
    if game_type is GameType.SUDOKU:
        options = {"difficulty": args.difficulty, "challenge_mode": args.challenge}

    engine = create_engine(game_type, rng=make_rng(args.seed), **options)
    store = _store(args)
    store.save_game(game_type, engine.get_state())
    _print_state(engine.get_state())


def cmd_show(args):
    """Show the saved game, starting one if there is none."""
    store = _store(args)
    engine = store.load_engine(args.game)
    store.save_game(args.game, engine.get_state())
    _print_state(engine.get_state())


def cmd_act(args):
    """Apply an action to the saved game."""
    from .engine_core.action import ActionType

    try:
        payload = json.loads(args.payload)
    except json.JSONDecodeError as e:
        raise ValueError(f"Payload is not valid JSON: {e}") from None
    if not isinstance(payload, dict):
        raise ValueError("Payload must be a JSON object")

    if ActionType.parse(args.action) is None:
        raise ValueError(f"Unknown action: {args.action}")

    store = _store(args)
    engine = store.load_engine(args.game)
    state = engine.handle_action(args.action, payload)
    store.save_game(args.game, state)
    _print_state(state)


def cmd_clear(args):
    """Delete the saved game."""
    store = _store(args)
    store.clear_game(args.game)
    print(f"Cleared saved {args.game} game")


if __name__ == "__main__":
    main()
