from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple


class ShapeType(str, Enum):
    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"
    I3 = "I3"
    L2 = "L2"
    I2 = "I2"
    O2 = "O2"
    I1 = "I1"


Offset = Tuple[int, int]  # (x, z); the board is a single layer, y is always 0
Shape = List[Offset]


BASE_SHAPES: Dict[ShapeType, Tuple[Offset, ...]] = {
    ShapeType.I: ((-2, 0), (-1, 0), (0, 0), (1, 0)),
    ShapeType.O: ((0, 0), (1, 0), (0, 1), (1, 1)),
    ShapeType.T: ((-1, 0), (0, 0), (1, 0), (0, 1)),
    ShapeType.S: ((0, 0), (1, 0), (-1, 1), (0, 1)),
    ShapeType.Z: ((-1, 0), (0, 0), (0, 1), (1, 1)),
    ShapeType.J: ((-1, 0), (0, 0), (1, 0), (-1, 1)),
    ShapeType.L: ((-1, 0), (0, 0), (1, 0), (1, 1)),
    ShapeType.I3: ((0, 0), (0, 1), (0, 2)),
    ShapeType.L2: ((0, 0), (0, 1), (1, 1)),
    ShapeType.I2: ((0, 0), (0, 1)),
    ShapeType.O2: ((0, 0), (1, 0)),
    ShapeType.I1: ((0, 0),),
}

# Order matters: the tiler shuffles this list with the seeded stream.
TILING_CATALOG: Tuple[ShapeType, ...] = (
    ShapeType.I,
    ShapeType.O,
    ShapeType.T,
    ShapeType.S,
    ShapeType.Z,
    ShapeType.J,
    ShapeType.L,
    ShapeType.I3,
    ShapeType.I2,
    ShapeType.O2,
    ShapeType.L2,
)

NORMAL_SHAPES: Tuple[ShapeType, ...] = TILING_CATALOG[:7]


def rotate_offset(offset: Offset, k: int) -> Offset:
    x, z = offset
    for _ in range(k % 4):
        x, z = -z, x
    return x, z


def rotate_shape(shape_type: ShapeType, k: int) -> Shape:
    """Base offsets of `shape_type` turned `k` quarter steps around the origin."""
    return [rotate_offset(offset, k) for offset in BASE_SHAPES[shape_type]]


def shape_cells(shape_type: ShapeType, rotation: int, origin: Offset) -> List[Offset]:
    ox, oz = origin
    return [(ox + dx, oz + dz) for dx, dz in rotate_shape(shape_type, rotation)]


def shape_size(shape_type: ShapeType) -> int:
    return len(BASE_SHAPES[shape_type])
