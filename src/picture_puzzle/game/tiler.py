from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .grid import Coordinate, OccupancyGrid
from .pieces import TILING_CATALOG, ShapeType, shape_cells
from .rng import SeededRandom
from .tiles import Tile

logger = logging.getLogger(__name__)

ATTEMPT_FACTOR = 10


@dataclass
class PuzzlePiece:
    id: int
    type: ShapeType
    rotation: int  # 0..3
    origin: Coordinate
    cells: List[Coordinate]
    tiles: List[Tile] = field(default_factory=list)
    placed: bool = False

    @property
    def size(self) -> int:
        return len(self.cells)

    def cell_set(self) -> set:
        return set(self.cells)


@dataclass
class TilingResult:
    pieces: List[PuzzlePiece]
    grid: OccupancyGrid
    attempts: int

    @property
    def is_complete(self) -> bool:
        return self.grid.is_full()


def _fit(grid: OccupancyGrid, shape: ShapeType, origin: Coordinate) -> Optional[Tuple[int, List[Coordinate]]]:
    for rotation in range(4):
        cells = shape_cells(shape, rotation, origin)
        if grid.can_place(cells):
            return rotation, cells
    return None


def _fallback(grid: OccupancyGrid, origin: Coordinate) -> Tuple[ShapeType, int, List[Coordinate]]:
    # I2 vertical, then I2 horizontal, then the singleton which always fits
    for rotation in (0, 1):
        cells = shape_cells(ShapeType.I2, rotation, origin)
        if grid.can_place(cells):
            return ShapeType.I2, rotation, cells
    return ShapeType.I1, 0, shape_cells(ShapeType.I1, 0, origin)


def tile_board(grid_size: int, rng: SeededRandom, attempt_factor: int = ATTEMPT_FACTOR) -> TilingResult:
    """Greedily cover a ``grid_size x grid_size`` board with catalog pieces.

    Each attempt picks a random empty cell and tries the shuffled catalog in
    every rotation anchored there. When nothing fits, an I2 (then a single
    cell) goes on the first empty cell in scan order. Every attempt covers at
    least one cell, so the board is full long before the attempt budget of
    ``grid_size**2 * attempt_factor`` runs out.
    """
    grid = OccupancyGrid(grid_size)
    pieces: List[PuzzlePiece] = []
    max_attempts = grid_size * grid_size * attempt_factor
    attempts = 0

    while attempts < max_attempts:
        empty = grid.empty_cells()
        if not empty:
            break
        attempts += 1

        start = empty[rng.next_int(0, len(empty) - 1)]
        placement = None
        for shape in rng.shuffle(TILING_CATALOG):
            fit = _fit(grid, shape, start)
            if fit is not None:
                placement = (shape, fit[0], start, fit[1])
                break

        if placement is None:
            anchor = empty[0]
            shape, rotation, cells = _fallback(grid, anchor)
            placement = (shape, rotation, anchor, cells)
            logger.debug(f"No catalog shape fits at {start}, placed {shape.value} at {anchor}")

        shape, rotation, origin, cells = placement
        piece = PuzzlePiece(id=len(pieces), type=shape, rotation=rotation, origin=origin, cells=cells)
        grid.place(cells, piece.id)
        pieces.append(piece)

    result = TilingResult(pieces=pieces, grid=grid, attempts=attempts)
    logger.debug(
        f"Tiled {grid_size}x{grid_size} board with {len(pieces)} pieces in {attempts} attempts "
        f"(seed {rng.seed}, complete={result.is_complete})"
    )
    return result
