from __future__ import annotations

from dataclasses import replace

import pytest

from picture_puzzle.errors import GenerationIntegrityError
from picture_puzzle.game.binder import bind_tiles, check_piece, validate_pieces
from picture_puzzle.game.pattern import (
    build_pattern,
    format_pattern,
    generate_puzzle_pattern,
    pattern_summary,
)
from picture_puzzle.game.pieces import ShapeType
from picture_puzzle.game.rng import SeededRandom
from picture_puzzle.game.tiler import PuzzlePiece
from picture_puzzle.game.tiles import are_tiles_connected, build_tile_grid, board_to_image


def test_scenario_6x6_seed_12345(pattern_6x6):
    assert pattern_6x6.is_complete
    assert sum(len(p.cells) for p in pattern_6x6.pieces) == 36


@pytest.mark.parametrize("size", [1, 4, 6, 8, 10])
@pytest.mark.parametrize("seed", [0, 42, 12345, 987654321])
def test_generated_patterns_hold_invariants(size, seed):
    pattern = generate_puzzle_pattern(size, seed)
    assert pattern.is_complete
    assert (pattern.piece_map() >= 0).all()
    for piece in pattern.pieces:
        assert len(piece.tiles) == len(piece.cells)
        assert all(t.orientation == (1, 2, 3, 4) for t in piece.tiles)
        if len(piece.tiles) >= 2:
            assert are_tiles_connected(piece.tiles)
        for (x, z), tile in zip(piece.cells, piece.tiles):
            assert (tile.row, tile.column) == board_to_image(x, z, size)
            assert tile.grid_position == (x, z)


def test_deterministic_generation():
    a = generate_puzzle_pattern(8, 2024)
    b = generate_puzzle_pattern(8, 2024)
    assert a.tile_grid == b.tile_grid
    assert a.pieces == b.pieces
    assert format_pattern(a) == format_pattern(b)


def test_tile_grid_independent_of_seed():
    assert generate_puzzle_pattern(6, 1).tile_grid == generate_puzzle_pattern(6, 2).tile_grid


def test_budget_exhaustion_is_fatal():
    with pytest.raises(GenerationIntegrityError) as exc:
        build_pattern(6, SeededRandom(1), attempt_factor=0)
    assert exc.value.kind == "incomplete_coverage"


def test_invalid_grid_size():
    with pytest.raises(ValueError):
        generate_puzzle_pattern(0, 1)


def test_format_pattern_shape(pattern_6x6):
    lines = format_pattern(pattern_6x6).splitlines()
    assert len(lines) == 6
    assert all(len(line.split()) == 6 for line in lines)
    assert "·" not in format_pattern(pattern_6x6)
    assert sum(pattern_summary(pattern_6x6).values()) == len(pattern_6x6.pieces)


def test_piece_by_id(pattern_6x6):
    first = pattern_6x6.pieces[0]
    assert pattern_6x6.piece_by_id(first.id) is first
    assert pattern_6x6.piece_by_id(10_000) is None


def _piece(cells, piece_id=0):
    return PuzzlePiece(id=piece_id, type=ShapeType.I2, rotation=0, origin=cells[0], cells=list(cells))


def test_binder_rejects_disconnected_tiles():
    grid = build_tile_grid(4)
    piece = _piece([(0, 0), (2, 0)], piece_id=3)
    bind_tiles([piece], grid)
    failure = check_piece(piece)
    assert failure.kind == "tiles_not_connected"
    with pytest.raises(GenerationIntegrityError) as exc:
        validate_pieces([piece])
    assert exc.value.piece_id == 3
    assert set(exc.value.tile_ids) == {"tile-3-0", "tile-3-2"}


def test_binder_rejects_rotated_tiles():
    grid = build_tile_grid(4)
    piece = _piece([(0, 0), (0, 1)])
    bind_tiles([piece], grid)
    piece.tiles[1] = replace(piece.tiles[1], orientation=(4, 1, 2, 3))
    with pytest.raises(GenerationIntegrityError) as exc:
        validate_pieces([piece])
    assert exc.value.kind == "wrong_orientation"
    assert exc.value.tile_ids == (piece.tiles[1].id,)


def test_binder_rejects_cells_off_the_image():
    grid = build_tile_grid(2)
    with pytest.raises(GenerationIntegrityError):
        bind_tiles([_piece([(1, 1), (1, 2)])], grid)


def test_binder_accepts_good_piece():
    grid = build_tile_grid(4)
    piece = _piece([(1, 1), (1, 2)])
    bind_tiles([piece], grid)
    assert check_piece(piece) is None
    validate_pieces([piece])
