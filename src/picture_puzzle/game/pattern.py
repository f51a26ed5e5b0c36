from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from ..errors import GenerationIntegrityError
from .binder import bind_tiles, validate_pieces
from .rng import SeededRandom
from .tiler import ATTEMPT_FACTOR, PuzzlePiece, tile_board
from .tiles import TileGrid, build_tile_grid, validate_grid_orientation

logger = logging.getLogger(__name__)


@dataclass
class PuzzlePattern:
    """A seeded board: the image grid plus the pieces drawn over it."""

    grid_size: int
    seed: int
    tile_grid: TileGrid
    pieces: List[PuzzlePiece]

    @property
    def is_complete(self) -> bool:
        covered = sum(len(p.cells) for p in self.pieces)
        return covered == self.grid_size * self.grid_size and not np.any(self.piece_map() < 0)

    def piece_map(self) -> np.ndarray:
        """``[x, z]`` array of piece ids, -1 where no piece covers the cell."""
        out = np.full((self.grid_size, self.grid_size), -1, dtype=np.int32)
        for piece in self.pieces:
            for x, z in piece.cells:
                out[x, z] = piece.id
        return out

    def piece_by_id(self, piece_id: int) -> Optional[PuzzlePiece]:
        for piece in self.pieces:
            if piece.id == piece_id:
                return piece
        return None


def validate_grid_size(grid_size: int) -> int:
    grid_size = int(grid_size)
    if grid_size < 1:
        raise ValueError(f"grid size must be positive, got {grid_size}")
    return grid_size


def build_pattern(grid_size: int, rng: SeededRandom, attempt_factor: int = ATTEMPT_FACTOR) -> PuzzlePattern:
    """Tile the board with `rng`, bind image tiles and check every piece.

    Raises GenerationIntegrityError if the board is not fully covered or any
    piece fails connectivity or orientation. A partial board is never returned.
    """
    grid_size = validate_grid_size(grid_size)
    tiling = tile_board(grid_size, rng, attempt_factor=attempt_factor)
    if not tiling.is_complete:
        missing = tiling.grid.empty_cells()
        logger.error(
            f"Tiling of {grid_size}x{grid_size} (seed {rng.seed}) stopped after "
            f"{tiling.attempts} attempts with {len(missing)} empty cells: {missing}"
        )
        raise GenerationIntegrityError(
            f"board not covered after {tiling.attempts} attempts ({len(missing)} cells empty)",
            kind="incomplete_coverage",
        )

    tile_grid = build_tile_grid(grid_size)
    report = validate_grid_orientation(tile_grid)
    if not report.is_valid:
        raise GenerationIntegrityError(
            f"{len(report.invalid_tiles)} of {report.total_tiles} tiles are rotated",
            tile_ids=[t.id for t in report.invalid_tiles],
            kind="wrong_orientation",
        )

    bind_tiles(tiling.pieces, tile_grid)
    validate_pieces(tiling.pieces)
    logger.info(f"Generated {grid_size}x{grid_size} pattern (seed {rng.seed}) with {len(tiling.pieces)} pieces")
    return PuzzlePattern(grid_size=grid_size, seed=rng.seed, tile_grid=tile_grid, pieces=tiling.pieces)


def generate_puzzle_pattern(grid_size: int, seed: int) -> PuzzlePattern:
    return build_pattern(grid_size, SeededRandom(seed))


def format_pattern(pattern: PuzzlePattern) -> str:
    """Text view of the board, top row is the highest Z (the top of the image)."""
    symbols = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
    pieces = pattern.piece_map()
    lines = []
    for z in range(pattern.grid_size - 1, -1, -1):
        row = []
        for x in range(pattern.grid_size):
            pid = int(pieces[x, z])
            row.append("·" if pid < 0 else symbols[pid % len(symbols)])
        lines.append(" ".join(row))
    return "\n".join(lines)


def pattern_summary(pattern: PuzzlePattern) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for piece in pattern.pieces:
        counts[piece.type.value] = counts.get(piece.type.value, 0) + 1
    return counts
