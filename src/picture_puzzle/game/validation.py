from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from ..errors import PlacementRejected
from .tiler import PuzzlePiece
from .tiles import Tile, are_tiles_connected, is_canonical

logger = logging.getLogger(__name__)


class PlacementFailure(str, Enum):
    WRONG_Y = "wrong_y"
    WRONG_POSITION = "wrong_position"
    WRONG_ORIENTATION = "wrong_orientation"
    TILES_NOT_CONNECTED = "tiles_not_connected"


@dataclass
class PlacementValidation:
    is_valid: bool
    reason: Optional[PlacementFailure] = None

    def raise_for_reason(self) -> None:
        if not self.is_valid:
            raise PlacementRejected(self.reason)


@dataclass
class DetailedPlacementValidation(PlacementValidation):
    tiles: List[Tile] = field(default_factory=list)
    tiles_connected: bool = True
    orientation_correct: bool = True


def _reject(reason: PlacementFailure, target: PuzzlePiece) -> PlacementValidation:
    logger.debug(f"Placement against piece {target.id} rejected: {reason.value}")
    return PlacementValidation(is_valid=False, reason=reason)


def validate_puzzle_placement(active_cells: Iterable[Sequence[int]], target: PuzzlePiece) -> PlacementValidation:
    """Check the landed active piece against one target piece.

    Rules run in order and the first failure wins: every cell at ``y == 0``,
    same ``(x, z)`` set as the target, target tiles connected, target tiles
    unrotated. The last two only fail on a generation defect, but a defect
    must never award a match.
    """
    cells = [tuple(c) for c in active_cells]
    if any(y != 0 for _, y, _ in cells):
        return _reject(PlacementFailure.WRONG_Y, target)

    active = {(x, z) for x, _, z in cells}
    expected = target.cell_set()
    if active != expected:
        return _reject(PlacementFailure.WRONG_POSITION, target)

    if target.tiles:
        if not are_tiles_connected(target.tiles):
            return _reject(PlacementFailure.TILES_NOT_CONNECTED, target)
        if not all(is_canonical(t.orientation) for t in target.tiles):
            return _reject(PlacementFailure.WRONG_ORIENTATION, target)

    return PlacementValidation(is_valid=True)


def validate_puzzle_placement_detailed(
    active_cells: Iterable[Sequence[int]], target: PuzzlePiece
) -> DetailedPlacementValidation:
    active_cells = list(active_cells)
    basic = validate_puzzle_placement(active_cells, target)
    tiles = list(target.tiles)
    return DetailedPlacementValidation(
        is_valid=basic.is_valid,
        reason=basic.reason,
        tiles=tiles,
        tiles_connected=are_tiles_connected(tiles),
        orientation_correct=all(is_canonical(t.orientation) for t in tiles),
    )


def validation_debug_info(active_cells: Iterable[Sequence[int]], target: PuzzlePiece) -> str:
    active_cells = list(active_cells)
    result = validate_puzzle_placement_detailed(active_cells, target)
    lines = [
        f"Piece: {target.id} ({target.type.value})",
        f"Valid: {result.is_valid}",
    ]
    if result.reason is not None:
        lines.append(f"Reason: {result.reason.value}")
    lines.extend(
        [
            f"Cells at y=0: {all(c[1] == 0 for c in active_cells)}",
            f"Tiles connected: {result.tiles_connected}",
            f"Orientation correct: {result.orientation_correct}",
            f"Tiles: {', '.join(t.id for t in result.tiles)}",
        ]
    )
    return "\n".join(lines)
