from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..errors import GenerationIntegrityError
from .tiler import PuzzlePiece
from .tiles import TileGrid, are_tiles_connected, is_canonical, tile_at_board

logger = logging.getLogger(__name__)

MISSING_TILE = "missing_tile"
NOT_CONNECTED = "tiles_not_connected"
WRONG_ORIENTATION = "wrong_orientation"


@dataclass
class IntegrityFailure:
    piece_id: int
    kind: str
    tile_ids: List[str]

    def describe(self) -> str:
        return f"piece {self.piece_id}: {self.kind} ({', '.join(self.tile_ids) or 'no tiles'})"


def bind_tiles(pieces: Sequence[PuzzlePiece], tile_grid: TileGrid) -> None:
    """Attach to each piece the tiles under its cells, position for position."""
    for piece in pieces:
        tiles = []
        for x, z in piece.cells:
            tile = tile_at_board(tile_grid, x, z)
            if tile is None:
                raise GenerationIntegrityError(
                    f"piece {piece.id} covers ({x}, {z}) which has no tile",
                    piece_id=piece.id,
                    kind=MISSING_TILE,
                )
            tiles.append(tile)
        piece.tiles = tiles


def check_piece(piece: PuzzlePiece) -> Optional[IntegrityFailure]:
    if len(piece.tiles) != len(piece.cells):
        return IntegrityFailure(piece.id, MISSING_TILE, [t.id for t in piece.tiles])
    if not are_tiles_connected(piece.tiles):
        return IntegrityFailure(piece.id, NOT_CONNECTED, [t.id for t in piece.tiles])
    rotated = [t.id for t in piece.tiles if not is_canonical(t.orientation)]
    if rotated:
        return IntegrityFailure(piece.id, WRONG_ORIENTATION, rotated)
    return None


def validate_pieces(pieces: Sequence[PuzzlePiece]) -> None:
    """Raise on the first piece whose tiles are disconnected or rotated."""
    for piece in pieces:
        failure = check_piece(piece)
        if failure is None:
            continue
        logger.error(
            f"Generation integrity failure on piece {piece.id} ({piece.type.value}, "
            f"rotation {piece.rotation}, cells {piece.cells}): {failure.kind}, "
            f"tiles {failure.tile_ids}"
        )
        raise GenerationIntegrityError(
            failure.describe(),
            piece_id=failure.piece_id,
            tile_ids=failure.tile_ids,
            kind=failure.kind,
        )
