from __future__ import annotations

import pytest

from picture_puzzle.game.grid import OccupancyGrid
from picture_puzzle.game.pieces import ShapeType, shape_cells
from picture_puzzle.game.rng import SeededRandom
from picture_puzzle.game.tiler import tile_board

SIZES = [1, 2, 3, 5, 6, 8, 10]
SEEDS = [0, 1, 7, 12345, 2 ** 31 + 5]


@pytest.mark.parametrize("size", SIZES)
@pytest.mark.parametrize("seed", SEEDS)
def test_full_coverage_exactly_once(size, seed):
    result = tile_board(size, SeededRandom(seed))
    assert result.is_complete
    cells = [c for p in result.pieces for c in p.cells]
    assert len(cells) == size * size
    assert set(cells) == {(x, z) for x in range(size) for z in range(size)}


@pytest.mark.parametrize("seed", SEEDS)
def test_pieces_match_their_shape(seed):
    result = tile_board(6, SeededRandom(seed))
    for i, piece in enumerate(result.pieces):
        assert piece.id == i
        assert piece.cells == shape_cells(piece.type, piece.rotation, piece.origin)
        assert 1 <= len(piece.cells) <= 4
        assert not piece.tiles
        assert not piece.placed
        for x, z in piece.cells:
            assert result.grid.piece_at(x, z) == piece.id


def test_deterministic():
    a = tile_board(8, SeededRandom(555))
    b = tile_board(8, SeededRandom(555))
    assert [(p.type, p.rotation, p.origin, p.cells) for p in a.pieces] == [
        (p.type, p.rotation, p.origin, p.cells) for p in b.pieces
    ]


def test_different_seeds_usually_differ():
    layouts = {tuple(tuple(p.cells) for p in tile_board(6, SeededRandom(s)).pieces) for s in range(10)}
    assert len(layouts) > 1


def test_one_cell_board_uses_singleton():
    result = tile_board(1, SeededRandom(3))
    assert len(result.pieces) == 1
    assert result.pieces[0].type == ShapeType.I1


def test_attempt_budget_exhausted_leaves_board_incomplete():
    result = tile_board(6, SeededRandom(1), attempt_factor=0)
    assert result.attempts == 0
    assert not result.is_complete
    assert result.pieces == []


def test_occupancy_grid():
    grid = OccupancyGrid(3)
    assert grid.empty_cells()[:3] == [(0, 0), (0, 1), (0, 2)]
    grid.place([(0, 0), (0, 1)], piece_id=4)
    cell = grid.cell(0, 1)
    assert cell.occupied and cell.piece_id == 4
    assert not grid.cell(2, 2).occupied
    assert not grid.can_place([(0, 1)])
    assert not grid.can_place([(3, 0)])
    assert grid.empty_count() == 7
    with pytest.raises(ValueError):
        grid.place([(0, 0)], piece_id=5)
    assert grid.piece_map()[2, 2] == -1
    grid.reset()
    assert grid.empty_count() == 9
