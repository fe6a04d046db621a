"""Run greedy-versus-greedy duels and log the outcomes.

Run with::

    PYTHONPATH=src python examples/simulate_duel.py

Pass ``--help`` to see options for the number of matches, the slide cap of
each side and periodic logging summaries.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Optional

from puyo.ai import choose_move
from puyo.events import ChainResolved
from puyo.match import Duel


LOGGER = logging.getLogger(__name__)


@dataclass
class DuelResult:
    winner: Optional[int]
    pieces: int
    best_chain: int
    garbage_sent: int


def run_duel(seed: int, *, max_pieces: int, max_slide: Optional[int] = None) -> DuelResult:
    duel = Duel(seeds=(seed, seed + 1))
    best_chain = 0
    garbage_sent = 0
    placed = 0
    while placed < max_pieces and not duel.finished:
        for player_id in (1, 2):
            state = duel.player(player_id)
            if duel.finished or state.active is None:
                break
            target = choose_move(state.board, state.active, duel.config, max_slide=max_slide)
            for event in duel.place(player_id, target):
                if isinstance(event, ChainResolved):
                    best_chain = max(best_chain, event.cascade_depth)
                    garbage_sent += event.garbage_rows_for_opponent
        placed += 1
    return DuelResult(
        winner=duel.winner,
        pieces=placed,
        best_chain=best_chain,
        garbage_sent=garbage_sent,
    )


def _format_summary(results: list[DuelResult]) -> str:
    if not results:
        return "No duels played."
    wins = {1: 0, 2: 0}
    for result in results:
        if result.winner in wins:
            wins[result.winner] += 1
    draws = len(results) - wins[1] - wins[2]
    best = max(r.best_chain for r in results)
    avg_pieces = sum(r.pieces for r in results) / len(results)
    return (
        f"p1={wins[1]}, p2={wins[2]}, unfinished={draws}, "
        f"best_chain={best}, avg_pieces={avg_pieces:.1f}"
    )


def log_summary(results: list[DuelResult], *, index: int) -> str:
    message = _format_summary(results)
    LOGGER.info("After %d duels: %s", index, message)
    return message


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--duels", type=int, default=10, help="Number of duels to play.")
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first duel.")
    parser.add_argument(
        "--max-pieces",
        type=int,
        default=200,
        help="Stop a duel after this many pieces per player.",
    )
    parser.add_argument(
        "--max-slide",
        type=int,
        default=None,
        help="Cap the opponent's slide distance in each direction.",
    )
    parser.add_argument(
        "--log-interval",
        type=int,
        default=5,
        help="Emit a summary every N duels (0 disables periodic logging).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    results: list[DuelResult] = []
    for idx in range(1, args.duels + 1):
        results.append(
            run_duel(args.seed + 2 * idx, max_pieces=args.max_pieces, max_slide=args.max_slide)
        )
        if (args.log_interval > 0 and idx % args.log_interval == 0) or idx == args.duels:
            log_summary(results, index=idx)


if __name__ == "__main__":
    main()
