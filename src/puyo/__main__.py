"""Simple ASCII demo for the chain puzzle engine.

Run with: `python -m puyo`

Two greedy opponents play a short match and the final boards are printed
side by side, useful as a minimal smoke test of the whole engine.
"""

from __future__ import annotations

from . import Duel, choose_move, format_grid, render_grid

MAX_PIECES = 40


def main() -> None:
    duel = Duel(seeds=(1, 2))
    for _ in range(MAX_PIECES):
        for player_id in (1, 2):
            state = duel.player(player_id)
            if duel.finished or state.active is None:
                break
            duel.place(player_id, choose_move(state.board, state.active, duel.config))
        if duel.finished:
            break

    left, right = (
        format_grid(render_grid(duel.player(pid).board, duel.player(pid).active)).splitlines()
        for pid in (1, 2)
    )
    for l_row, r_row in zip(left, right):
        print(f"{l_row}   {r_row}")
    for pid in (1, 2):
        state = duel.player(pid)
        print(f"P{pid}: score={state.score} best_chain={state.best_chain}")
    if duel.winner is not None:
        print(f"Winner: player {duel.winner}")


if __name__ == "__main__":
    main()
