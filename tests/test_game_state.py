from __future__ import annotations

import logging

import pytest

from puyo.config import EngineConfig
from puyo.events import (
    ChainResolved,
    Command,
    CommandType,
    GameOver,
    GarbageDropped,
    PieceMoved,
    RotationRejected,
)
from puyo.features import garbage_count
from puyo.game_state import PlayerState
from puyo.matching import find_matches
from puyo.piece import Color, Piece


def _command(kind: CommandType, player_id: int = 1) -> Command:
    return Command(player_id=player_id, kind=kind)


def test_new_game_spawns_a_vertical_pair() -> None:
    state = PlayerState(seed=1)
    assert state.active is not None
    assert state.active.position == (0, 2)
    assert state.active.is_vertical
    assert state.upcoming is not None
    assert state.board.cell_count() == 0
    assert not state.game_over


def test_same_seed_same_pieces() -> None:
    first = PlayerState(seed=42)
    second = PlayerState(seed=42)
    assert first.active == second.active
    assert first.upcoming == second.upcoming


def test_palette_size_limits_colours() -> None:
    state = PlayerState(config=EngineConfig(palette_size=1), seed=0)
    assert state.active.colors == (Color.RED, Color.RED)


def test_moves_emit_piece_moved() -> None:
    state = PlayerState(seed=1)
    events = state.apply(_command(CommandType.MOVE_LEFT))
    assert events == [PieceMoved(1, state.active)]
    assert state.active.column == 1


def test_blocked_move_emits_nothing() -> None:
    state = PlayerState(seed=1)
    state.apply(_command(CommandType.MOVE_LEFT))
    state.apply(_command(CommandType.MOVE_LEFT))
    assert state.apply(_command(CommandType.MOVE_LEFT)) == []
    assert state.active.column == 0


def test_rejected_rotation_keeps_piece() -> None:
    state = PlayerState(seed=1)
    for col in (0, 1, 3, 4, 5):
        for row in range(state.board.height):
            state.board.set_cell(row, col, Color.GARBAGE)
    before = state.active
    events = state.apply(_command(CommandType.ROTATE))
    assert events == [RotationRejected(1, before)]
    assert state.active == before


def test_command_for_other_player_is_rejected() -> None:
    state = PlayerState(player_id=1, seed=1)
    with pytest.raises(ValueError):
        state.apply(_command(CommandType.MOVE_LEFT, player_id=2))


def test_lock_reports_chain_and_spawns_next() -> None:
    state = PlayerState(seed=5)
    upcoming = state.upcoming
    state.apply(_command(CommandType.HARD_DROP))
    events = state.apply(_command(CommandType.LOCK))
    assert events == [ChainResolved(1, 0, 0, 0)]
    assert state.pieces == 1
    assert state.board.cell_count() == 2
    assert state.active == upcoming


def test_lock_with_chain_updates_counters() -> None:
    state = PlayerState(seed=5)
    state.board.set_cell(11, 2, state.active.colors[0])
    state.board.set_cell(10, 2, state.active.colors[0])
    state.active = Piece((state.active.colors[0],) * 2, position=(0, 2))
    events = state.lock()
    assert events[0] == ChainResolved(1, 1, 200, 1)
    assert state.score == 200
    assert state.chain_count == 1
    assert state.best_chain == 1
    assert state.attack_meter == 20


def test_attack_meter_is_capped() -> None:
    state = PlayerState(seed=5)
    state.attack_meter = 95
    state.board.set_cell(11, 0, Color.BLUE)
    state.board.set_cell(10, 0, Color.BLUE)
    state.active = Piece((Color.BLUE, Color.BLUE), position=(0, 0))
    state.lock()
    assert state.attack_meter == 100


def test_pending_garbage_lands_on_next_lock() -> None:
    state = PlayerState(seed=3)
    state.receive_garbage(1)
    assert state.pending_garbage == 1
    assert garbage_count(state.board) == 0

    events = state.apply(_command(CommandType.LOCK))
    assert GarbageDropped(1, 1) in events
    assert state.pending_garbage == 0
    assert garbage_count(state.board) == state.board.width - 1


def test_negative_garbage_is_rejected() -> None:
    with pytest.raises(ValueError):
        PlayerState(seed=1).receive_garbage(-1)


def test_top_out_ends_the_game(caplog: pytest.LogCaptureFixture) -> None:
    state = PlayerState(seed=2)
    for row, color in zip(range(2, 12), (Color.GREEN, Color.YELLOW) * 5):
        state.board.set_cell(row, 2, color)
    state.active = Piece((Color.RED, Color.RED), position=(0, 2))

    with caplog.at_level(logging.INFO, logger="puyo.game_state"):
        events = state.lock()

    assert events[-1] == GameOver(1)
    assert state.game_over
    assert state.active is None
    assert "topped out" in caplog.text
    assert state.apply(_command(CommandType.MOVE_LEFT)) == []
    with pytest.raises(RuntimeError):
        state.place(Piece((Color.RED, Color.RED), position=(0, 0)))


def test_place_drops_and_locks() -> None:
    state = PlayerState(seed=8)
    target = state.active.moved(-2, 0)
    events = state.place(target)
    assert isinstance(events[0], ChainResolved)
    assert state.board.cell_count() == 2
    assert not state.board.is_empty(11, 0)


def test_place_rejects_wrong_colours() -> None:
    state = PlayerState(seed=8)
    colors = state.active.colors
    other = Color.PURPLE if colors[0] is not Color.PURPLE else Color.RED
    with pytest.raises(ValueError):
        state.place(Piece((other, colors[1]), position=(0, 0)))


def test_reset_clears_everything() -> None:
    state = PlayerState(seed=4)
    state.lock()
    state.receive_garbage(3)
    state.score = 900
    state.reset_game(seed=4)
    assert state.pieces == 0
    assert state.pending_garbage == 0
    assert state.score == 0
    assert state.board.cell_count() == 0
    assert state.active == PlayerState(seed=4).active


def test_board_has_no_group_after_garbage_lands() -> None:
    for seed in range(6):
        state = PlayerState(seed=seed)
        for row in (10, 11):
            state.board.set_cell(row, 0, Color.RED)
            state.board.set_cell(row, 1, Color.GREEN)
        for row in (8, 9):
            state.board.set_cell(row, 1, Color.RED)
        state.active = Piece((Color.BLUE, Color.YELLOW), position=(0, 5))
        state.receive_garbage(1)

        events = state.lock()

        assert GarbageDropped(1, 1) in events
        assert find_matches(state.board) == []
