#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--level {beginner,intermediate,expert}] [--layout NAME]
    python main.py demo [--games N] [--delay SECONDS] [--seed N]

Commands inside `play`:
    u ROW COL   uncover a square
    g ROW COL   cycle guess (mine / question / covered) on a square
    n           new game with the same settings
    q           quit
"""
import argparse
import logging
import time

import numpy as np

from minefield import (
    BEGINNER,
    EXPERT,
    INTERMEDIATE,
    FieldConfig,
    GameSession,
    GameState,
    MinefieldError,
    MinesweeperEnv,
)


# Hardcoded layouts for trying out specific situations
LAYOUTS = {
    "small": [
        [False, False, False, False],
        [True, False, False, False],
        [False, True, True, False],
        [False, True, False, True],
    ],
    "empty": [
        [False, False, False, False],
        [False, False, False, False],
        [False, False, False, False],
        [False, False, False, False],
    ],
    "almost-empty": [
        [False, False, False, False],
        [False, False, False, False],
        [False, False, False, False],
        [False, True, False, False],
    ],
}

LEVELS = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


def build_config(args: argparse.Namespace) -> FieldConfig:
    """Start from the level preset and apply any explicit overrides."""
    preset = LEVELS[args.level]
    return FieldConfig(
        rows=args.rows or preset.rows,
        cols=args.cols or preset.cols,
        num_mines=args.mines if args.mines is not None else preset.num_mines,
    )


def print_board(session: GameSession) -> None:
    """Print the visible field with row and column labels."""
    header = "    " + " ".join(str(col % 10) for col in range(session.cols))
    print(header)
    for row, line in enumerate(session.visible.render().splitlines()):
        print(f"{row:>3} {line}")
    print(f"Mines left: {session.mines_left()}")


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    if args.layout:
        session = GameSession.from_grid(LAYOUTS[args.layout])
    else:
        rng = np.random.default_rng(args.seed)
        session = GameSession(build_config(args), rng=rng)

    while True:
        print_board(session)
        if not session.is_playing:
            if session.game_state is GameState.WON:
                print("*** WIN! ***")
            else:
                print("*** LOST (hit mine) ***")
            print("n = new game, q = quit")

        try:
            command = input("> ").split()
        except EOFError:
            break
        if not command:
            continue

        action = command[0].lower()
        if action == "q":
            break
        if action == "n":
            session.new_game()
            continue
        if action not in ("u", "g") or len(command) != 3:
            print("Expected: u ROW COL | g ROW COL | n | q")
            continue

        try:
            row, col = int(command[1]), int(command[2])
            if action == "u":
                session.uncover(row, col)
            else:
                session.guess_cycle(row, col)
        except ValueError:
            print("ROW and COL must be integers")
        except MinefieldError as error:
            print(error)


def demo(args: argparse.Namespace) -> None:
    """Watch a random player uncover squares."""
    config = build_config(args)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)

    density = 100 * config.num_mines / (config.rows * config.cols)
    print(f"Field: {config.rows}x{config.cols} with {config.num_mines} "
          f"mines ({density:.1f}% density)")

    wins = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        _, info = env.reset(seed=seed)
        done = False
        step = 0

        while not done:
            valid = np.flatnonzero(env.get_action_mask())
            action = int(rng.choice(valid))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            print(f"\n=== Game {game + 1}/{args.games} | Step {step} ===")
            print(env.render())
            time.sleep(args.delay)

        if info["game_state"] == "WON":
            wins += 1
            print("\n*** WIN! ***")
        else:
            print("\n*** LOST (hit mine) ***")

    print(f"\n=== Final: {wins}/{args.games} wins ===")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Minefield puzzle")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_field_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--level", choices=sorted(LEVELS), default="beginner")
        sub.add_argument("--rows", type=int, default=None)
        sub.add_argument("--cols", type=int, default=None)
        sub.add_argument("--mines", type=int, default=None)
        sub.add_argument("--seed", type=int, default=None)

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_field_args(play_parser)
    play_parser.add_argument(
        "--layout", choices=sorted(LAYOUTS), default=None,
        help="Use a hardcoded mine layout instead of a random one",
    )

    demo_parser = subparsers.add_parser("demo", help="Watch random play")
    add_field_args(demo_parser)
    demo_parser.add_argument("--games", type=int, default=3)
    demo_parser.add_argument("--delay", type=float, default=0.2)

    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    else:
        demo(args)


if __name__ == "__main__":
    main()
