"""Command-line entry point: play one game, or benchmark many seeded ones."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import List, Optional, Sequence

import numpy as np

from . import config as _cfg
from .board import Board, BoardFormatError, BoardGenerationError
from .fleet import CATALOG, DEFAULT_FLEET, ShipKind, kind_by_name
from .render import render_board
from .reporter import EventReporter
from .solver import GameResult, Outcome, solve

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="salvo", description="Probabilistic Battleship hunter")
    parser.add_argument("--seed", type=int, default=_cfg.SEED, help="Seed for the random board layout")
    parser.add_argument("--size", type=int, default=_cfg.BOARD_SIZE, help="Board width and height")
    parser.add_argument(
        "--fixed",
        action="store_true",
        help="Play the canned 12x12 layout instead of a random one (ignores --size/--fleet)",
    )
    parser.add_argument(
        "--fleet",
        nargs="+",
        metavar="KIND",
        help=f"Ships to hide, duplicates allowed ({', '.join(k.name for k in CATALOG)})",
    )
    parser.add_argument("--games", type=int, default=1, help="Benchmark: play N seeded games and summarise")
    parser.add_argument("--show-grid", action="store_true", help="Print the observed grid every round")
    parser.add_argument("--show-heat", action="store_true", help="Print the heat map every round")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress per-round output")
    return parser


def _configure_logging(debug: bool, quiet: bool) -> int:
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format=_cfg.LOG_FORMAT)
    return level


def play_one(board: Board, fleet: Sequence[ShipKind], reporter: EventReporter) -> GameResult:
    logger.debug("Hidden board:\n%s", render_board(board))
    return solve(board, fleet, emit=reporter)


def benchmark(games: int, fleet: Sequence[ShipKind], size: int, seed: int) -> List[GameResult]:
    """Play *games* random boards seeded ``seed, seed+1, ...`` and print a summary."""
    results = []
    for offset in range(games):
        board = Board.random(fleet, size, seed + offset)
        result = solve(board, fleet)
        logger.debug("seed %d: %s in %d rounds", seed + offset, result.outcome.value, result.rounds)
        results.append(result)

    won = np.array([r.rounds for r in results if r.outcome is Outcome.WON])
    stuck = sum(r.outcome is Outcome.STUCK for r in results)
    if won.size:
        print(
            f"{games} games: mean {won.mean():.1f} rounds, min {won.min()}, max {won.max()}, stuck {stuck}"
        )
    else:
        print(f"{games} games: no wins, stuck {stuck}")
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    _configure_logging(args.debug or _cfg.DEBUG, args.quiet)

    try:
        fleet = [kind_by_name(name) for name in args.fleet] if args.fleet else list(DEFAULT_FLEET)
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    seed = args.seed if args.seed is not None else random.randrange(2**31)
    try:
        if args.games > 1:
            results = benchmark(args.games, fleet, args.size, seed)
            return 0 if all(r.won for r in results) else 1

        if args.fixed:
            board, fleet = Board.canned(), list(DEFAULT_FLEET)
        else:
            logger.info("Generating %dx%d board with seed %d", args.size, args.size, seed)
            board = Board.random(fleet, args.size, seed)
    except (BoardGenerationError, BoardFormatError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    reporter = EventReporter(show_grid=args.show_grid, show_heat=args.show_heat)
    result = play_one(board, fleet, reporter)
    return 0 if result.won else 1


def run() -> None:  # pragma: no cover – console script
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
