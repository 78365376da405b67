"""Entry point for playing the Tank Battle maze shooter."""

import argparse
import itertools
import logging

from tank_battle.core import GameRules, GameSession, IDLE, SaveData, run_frames


def run_headless(frames: int, seed=None) -> GameSession:
    """Play ``frames`` idle ticks without a window and return the session."""
    session = GameSession(GameRules(seed=seed), SaveData(), persist=lambda _data: None)
    session.start_game()
    run_frames(session, itertools.repeat(IDLE, frames))
    return session


def main() -> None:
    parser = argparse.ArgumentParser(description="Tank Battle maze shooter")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="print additional debug information to the console",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed enemy behaviour")
    parser.add_argument(
        "--headless",
        type=int,
        metavar="FRAMES",
        default=None,
        help="simulate FRAMES ticks without opening a window and print the board",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    if args.headless is not None:
        session = run_headless(args.headless, seed=args.seed)
        if session.game is not None:
            print(session.game.render())
        print(
            f"phase={session.phase.value} level={session.current_level} "
            f"score={session.score} lives={session.lives} "
            f"enemies={session.enemies_remaining}"
        )
        return

    try:
        from tank_battle.pygame import run_pygame
    except ImportError as exc:
        raise RuntimeError(
            "The graphical client requires pygame. "
            "Install pygame or run with --headless FRAMES."
        ) from exc

    run_pygame(seed=args.seed, debug=args.debug)


if __name__ == "__main__":
    main()
