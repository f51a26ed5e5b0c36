"""Reference-image tiles.

The picture is cut into a ``size x size`` grid of tiles indexed ``[row][column]``
with row 0 at the top of the image. Board space uses ``(x, z)``; the mapping
between the two inverts the row axis so that the top of the image sits at the
highest Z:

    x = column
    z = size - 1 - row

`image_to_board` and `board_to_image` are the only places that arithmetic
lives. Everything else goes through them.

Each tile carries a corner labelling, clockwise from the top-left corner. The
canonical (unrotated) labelling is ``(1, 2, 3, 4)``; one clockwise quarter turn
gives ``(4, 1, 2, 3)``. Tiles are never rotated by the builder, so a
non-canonical tile always means something upstream is broken.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


Orientation = Tuple[int, int, int, int]

CANONICAL_ORIENTATION: Orientation = (1, 2, 3, 4)


class BoardPosition(NamedTuple):
    x: int
    z: int


@dataclass(frozen=True)
class TileNeighbors:
    top: Optional[str] = None
    right: Optional[str] = None
    bottom: Optional[str] = None
    left: Optional[str] = None

    def ids(self) -> List[str]:
        return [n for n in (self.top, self.right, self.bottom, self.left) if n is not None]


@dataclass(frozen=True)
class Tile:
    id: str
    row: int
    column: int
    grid_position: BoardPosition
    orientation: Orientation = CANONICAL_ORIENTATION
    neighbors: TileNeighbors = field(default_factory=TileNeighbors)


TileGrid = List[List[Tile]]


def tile_id(row: int, column: int) -> str:
    return f"tile-{row}-{column}"


def image_to_board(row: int, column: int, size: int) -> BoardPosition:
    return BoardPosition(x=column, z=size - 1 - row)


def board_to_image(x: int, z: int, size: int) -> Tuple[int, int]:
    """Inverse of `image_to_board`, returns ``(row, column)``."""
    return size - 1 - z, x


def build_tile_grid(size: int) -> TileGrid:
    """Cut the image into ``size x size`` canonical tiles with 4-neighbour links.

    Neighbours come from row/column adjacency only, without wraparound, so
    border tiles simply omit the missing directions. The result does not depend
    on any seed.
    """
    if size < 1:
        raise ValueError(f"grid size must be positive, got {size}")
    grid: TileGrid = []
    for row in range(size):
        tiles: List[Tile] = []
        for column in range(size):
            neighbors = TileNeighbors(
                top=tile_id(row - 1, column) if row > 0 else None,
                right=tile_id(row, column + 1) if column < size - 1 else None,
                bottom=tile_id(row + 1, column) if row < size - 1 else None,
                left=tile_id(row, column - 1) if column > 0 else None,
            )
            tiles.append(
                Tile(
                    id=tile_id(row, column),
                    row=row,
                    column=column,
                    grid_position=image_to_board(row, column, size),
                    orientation=CANONICAL_ORIENTATION,
                    neighbors=neighbors,
                )
            )
        grid.append(tiles)
    return grid


def tile_at(grid: TileGrid, row: int, column: int) -> Optional[Tile]:
    if row < 0 or row >= len(grid):
        return None
    if column < 0 or column >= len(grid[row]):
        return None
    return grid[row][column]


def tile_at_board(grid: TileGrid, x: int, z: int) -> Optional[Tile]:
    if not grid:
        return None
    row, column = board_to_image(x, z, len(grid))
    return tile_at(grid, row, column)


def iter_tiles(grid: TileGrid) -> Iterable[Tile]:
    for row in grid:
        yield from row


def are_tiles_neighbors(a: Tile, b: Tile) -> bool:
    return b.id in a.neighbors.ids()


def are_tiles_connected(tiles: Sequence[Tile]) -> bool:
    """BFS over the neighbour links, restricted to `tiles` themselves."""
    if len(tiles) <= 1:
        return True
    by_id: Dict[str, Tile] = {t.id: t for t in tiles}
    start = tiles[0]
    visited = {start.id}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor_id in current.neighbors.ids():
            if neighbor_id in by_id and neighbor_id not in visited:
                visited.add(neighbor_id)
                queue.append(by_id[neighbor_id])
    return len(visited) == len(by_id)


def is_canonical(orientation: Sequence[int]) -> bool:
    return tuple(orientation) == CANONICAL_ORIENTATION


def rotate_orientation_clockwise(orientation: Orientation) -> Orientation:
    return orientation[3], orientation[0], orientation[1], orientation[2]


def rotation_difference(start: Orientation, target: Orientation) -> int:
    """Clockwise quarter turns taking `start` to `target`, or -1 if none does."""
    current = tuple(start)
    for turns in range(4):
        if current == tuple(target):
            return turns
        current = rotate_orientation_clockwise(current)
    return -1


def format_orientation(orientation: Orientation) -> str:
    """Two-line view of the corners, e.g. ``"1, 2\\n4, 3"`` for canonical."""
    return f"{orientation[0]}, {orientation[1]}\n{orientation[3]}, {orientation[2]}"


@dataclass
class GridOrientationReport:
    is_valid: bool
    total_tiles: int
    valid_tiles: int
    invalid_tiles: List[Tile]


def validate_grid_orientation(grid: TileGrid) -> GridOrientationReport:
    invalid = [t for t in iter_tiles(grid) if not is_canonical(t.orientation)]
    total = sum(len(row) for row in grid)
    for t in invalid:
        logger.error(
            f"Tile {t.id} (row {t.row}, column {t.column}) has orientation "
            f"{list(t.orientation)}, expected {list(CANONICAL_ORIENTATION)}"
        )
    return GridOrientationReport(
        is_valid=not invalid,
        total_tiles=total,
        valid_tiles=total - len(invalid),
        invalid_tiles=invalid,
    )
