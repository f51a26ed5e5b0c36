from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np


Coordinate = Tuple[int, int]  # (x, z)


@dataclass
class GridCell:
    x: int
    z: int
    occupied: bool
    piece_id: Optional[int] = None


class OccupancyGrid:
    """Square occupancy record used while tiling the board.

    Cells hold 0 when empty and ``piece_id + 1`` once covered, indexed
    ``[x, z]``. The grid only lives for the duration of one tiling run.
    """

    def __init__(self, size: int) -> None:
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int32)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, z: int) -> bool:
        return 0 <= x < self.size and 0 <= z < self.size

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, z in cells:
            if not self.is_inside(x, z):
                return False
            if self.grid[x, z] != 0:
                return False
        return True

    def place(self, cells: Iterable[Coordinate], piece_id: int) -> None:
        cells = list(cells)
        if not self.can_place(cells):
            raise ValueError(f"piece {piece_id} does not fit at {cells}")
        for x, z in cells:
            self.grid[x, z] = piece_id + 1

    def piece_at(self, x: int, z: int) -> Optional[int]:
        value = int(self.grid[x, z])
        return value - 1 if value else None

    def cell(self, x: int, z: int) -> GridCell:
        piece_id = self.piece_at(x, z)
        return GridCell(x=x, z=z, occupied=piece_id is not None, piece_id=piece_id)

    def empty_cells(self) -> List[Coordinate]:
        # x outer, z inner: the scan order the fallback step relies on
        xs, zs = np.nonzero(self.grid == 0)
        return [(int(x), int(z)) for x, z in zip(xs, zs)]

    def empty_count(self) -> int:
        return int(np.count_nonzero(self.grid == 0))

    def is_full(self) -> bool:
        return bool(np.all(self.grid != 0))

    def piece_map(self) -> np.ndarray:
        """Copy of the grid with piece ids, -1 where a cell is still empty."""
        return self.grid.astype(np.int32) - 1
