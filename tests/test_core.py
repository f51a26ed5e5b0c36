from __future__ import annotations

import pytest

from picture_puzzle.errors import PlacementRejected
from picture_puzzle.game.core import DropKind, GameConfig, PuzzleGame
from picture_puzzle.game.pieces import NORMAL_SHAPES
from picture_puzzle.game.validation import PlacementFailure


def _ground(piece):
    return [(x, 0, z) for x, z in piece.cells]


def _kinds(game, n):
    out = []
    for _ in range(n):
        drop = game.next_drop()
        out.append(drop.kind)
    return out


def test_easy_cycle_is_three_puzzle_one_normal():
    game = PuzzleGame(GameConfig(grid_size=6, seed=12345, difficulty="easy"))
    kinds = _kinds(game, 8)
    assert kinds == [DropKind.PUZZLE] * 3 + [DropKind.NORMAL] + [DropKind.PUZZLE] * 3 + [DropKind.NORMAL]


def test_hard2_cycle():
    game = PuzzleGame(GameConfig(grid_size=10, seed=1, difficulty="hard2"))
    assert _kinds(game, 8) == ([DropKind.PUZZLE] + [DropKind.NORMAL] * 3) * 2


def test_normal_drops_use_tetrominoes():
    game = PuzzleGame(GameConfig(grid_size=6, seed=9, difficulty="hard2"))
    for _ in range(20):
        drop = game.next_drop()
        if drop.kind == DropKind.NORMAL:
            assert drop.piece is None
            assert drop.shape in NORMAL_SHAPES
        else:
            assert drop.piece in game.remaining_pieces
            assert drop.shape == drop.piece.type


def test_full_play_through_completes():
    game = PuzzleGame(GameConfig(grid_size=6, seed=12345, difficulty="medium2"))
    total = len(game.pattern.pieces)
    while not game.is_complete:
        drop = game.next_drop()
        if drop.kind == DropKind.PUZZLE:
            assert game.place(_ground(drop.piece)).is_valid
    assert game.next_drop() is None
    assert len(game.placed_pieces) == total
    assert all(p.placed for p in game.placed_pieces)
    state = game.get_state()
    assert state["complete"] and state["pieces_placed"] == total


def test_rejected_piece_stays_remaining():
    game = PuzzleGame(GameConfig(grid_size=6, seed=3))
    drop = game.next_drop()
    cells = [(x, 1, z) for x, z in drop.piece.cells]
    with pytest.raises(PlacementRejected) as exc:
        game.place(cells)
    assert exc.value.reason == PlacementFailure.WRONG_Y
    assert drop.piece in game.remaining_pieces
    assert not drop.piece.placed
    assert game.current_piece is None


def test_check_without_falling_piece():
    game = PuzzleGame(GameConfig(grid_size=6, seed=3))
    with pytest.raises(RuntimeError):
        game.check_placement([(0, 0, 0)])


def test_session_reproducible_from_seed():
    def trace(seed):
        game = PuzzleGame(GameConfig(grid_size=8, seed=seed, difficulty="medium2"))
        out = []
        for _ in range(30):
            drop = game.next_drop()
            out.append((drop.kind, drop.shape, drop.piece.id if drop.piece else None))
        return out

    assert trace(77) == trace(77)


def test_board_matches_standalone_generation():
    from picture_puzzle.game.pattern import generate_puzzle_pattern

    game = PuzzleGame(GameConfig(grid_size=6, seed=12345, difficulty="hard"))
    assert game.pattern.pieces == generate_puzzle_pattern(6, 12345).pieces


def test_lines_charges_and_score():
    game = PuzzleGame(GameConfig(grid_size=6, seed=1, difficulty="easy"))
    game.record_lines_cleared(2)
    assert game.score(250).total_score == 250
    with pytest.raises(ValueError):
        game.record_lines_cleared(-1)
    assert game.clear_charges == 5
    assert all(game.use_clear_charge() for _ in range(5))
    assert not game.use_clear_charge()


def test_reset_restores_pieces():
    game = PuzzleGame(GameConfig(grid_size=4, seed=2))
    drop = game.next_drop()
    game.place(_ground(drop.piece))
    game.reset()
    assert len(game.remaining_pieces) == len(game.pattern.pieces)
    assert not any(p.placed for p in game.pattern.pieces)
