from __future__ import annotations

from dataclasses import replace

import pytest

from picture_puzzle.game.tiles import (
    CANONICAL_ORIENTATION,
    are_tiles_connected,
    are_tiles_neighbors,
    board_to_image,
    build_tile_grid,
    format_orientation,
    image_to_board,
    is_canonical,
    iter_tiles,
    rotate_orientation_clockwise,
    rotation_difference,
    tile_at,
    tile_at_board,
    validate_grid_orientation,
)


def test_row_axis_inverted():
    grid = build_tile_grid(6)
    top_left = grid[0][0]
    assert top_left.id == "tile-0-0"
    assert top_left.grid_position == (0, 5)
    assert grid[5][3].grid_position == (3, 0)


@pytest.mark.parametrize("size", [1, 2, 6, 8])
def test_conversion_round_trip(size):
    for row in range(size):
        for column in range(size):
            x, z = image_to_board(row, column, size)
            assert board_to_image(x, z, size) == (row, column)


def test_all_tiles_canonical():
    grid = build_tile_grid(8)
    assert all(t.orientation == (1, 2, 3, 4) for t in iter_tiles(grid))
    report = validate_grid_orientation(grid)
    assert report.is_valid
    assert report.total_tiles == 64
    assert report.valid_tiles == 64


def test_neighbors_without_wraparound():
    grid = build_tile_grid(3)
    corner = grid[0][0].neighbors
    assert corner.top is None and corner.left is None
    assert corner.right == "tile-0-1"
    assert corner.bottom == "tile-1-0"
    center = grid[1][1].neighbors
    assert center.ids() == ["tile-0-1", "tile-1-2", "tile-2-1", "tile-1-0"]


def test_lookup_by_board_position():
    grid = build_tile_grid(6)
    assert tile_at_board(grid, 2, 5).id == "tile-0-2"
    assert tile_at_board(grid, 0, 0).id == "tile-5-0"
    assert tile_at_board(grid, 6, 0) is None
    assert tile_at(grid, -1, 0) is None
    assert tile_at_board([], 0, 0) is None


def test_connectivity():
    grid = build_tile_grid(4)
    line = [grid[0][0], grid[0][1], grid[0][2]]
    assert are_tiles_connected(line)
    assert are_tiles_neighbors(grid[0][0], grid[0][1])
    assert not are_tiles_neighbors(grid[0][0], grid[1][1])
    assert not are_tiles_connected([grid[0][0], grid[0][2]])
    assert not are_tiles_connected([grid[0][0], grid[1][1]])
    assert are_tiles_connected([grid[2][2]])
    assert are_tiles_connected([])


def test_orientation_helpers():
    turned = rotate_orientation_clockwise(CANONICAL_ORIENTATION)
    assert turned == (4, 1, 2, 3)
    assert not is_canonical(turned)
    assert rotation_difference(CANONICAL_ORIENTATION, turned) == 1
    assert rotation_difference(CANONICAL_ORIENTATION, (3, 4, 1, 2)) == 2
    assert rotation_difference(CANONICAL_ORIENTATION, (1, 3, 2, 4)) == -1
    assert format_orientation(CANONICAL_ORIENTATION) == "1, 2\n4, 3"


def test_rotated_tile_reported():
    grid = build_tile_grid(3)
    grid[1][2] = replace(grid[1][2], orientation=(2, 3, 4, 1))
    report = validate_grid_orientation(grid)
    assert not report.is_valid
    assert [t.id for t in report.invalid_tiles] == ["tile-1-2"]
    assert report.valid_tiles == 8


def test_invalid_size():
    with pytest.raises(ValueError):
        build_tile_grid(0)
