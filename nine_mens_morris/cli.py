import argparse
import sys
from typing import Optional, Sequence

from loguru import logger

from . import players
from .config import config
from .controller import GameController
from .render import render_board, render_status


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Nine Men's Morris in the terminal")
    for seat, default in ((1, "human"), (2, "human")):
        parser.add_argument(
            f"--player{seat}",
            type=str,
            default=default,
            choices=players.available(),
            help=f"Type of player {seat}",
        )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.SEED,
        help="Seed for random players (player 2 uses seed + 1)",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=config.MAX_TURNS,
        help="Stop the game after this many turns",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.LOG_LEVEL,
        help="Log level for messages written to stderr",
    )
    return parser.parse_args(argv)


def build_players(args: argparse.Namespace) -> list[players.BasePlayer]:
    built = []
    for seat, type_name in enumerate((args.player1, args.player2)):
        kwargs = {}
        if type_name == players.RandomPlayer.type_name and args.seed is not None:
            kwargs["rng_seed"] = args.seed + seat
        built.append(players.create(type_name, f"PLAYER {seat + 1}", **kwargs))
    return built


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    print("Nine Men's Morris")
    print("=================")
    controller = GameController(players=build_players(args), max_turns=args.max_turns)
    try:
        winner = controller.play()
    except (EOFError, KeyboardInterrupt):
        print("\nGame abandoned")
        return 1

    print(render_board(controller.board))
    print(render_status(controller.board))
    if winner is None:
        print(f"No winner after {controller.turns} turns")
    else:
        print(f"{winner} wins!")
    return 0
