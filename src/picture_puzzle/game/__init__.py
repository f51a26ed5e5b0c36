"""Puzzle engine.

Exports the board generation, validation and scoring pieces:
- ShapeType / rotate_shape: polyomino catalog
- SeededRandom: deterministic generator behind every board
- build_tile_grid / Tile: the cut-up reference image
- generate_puzzle_pattern / PuzzlePattern / PuzzlePiece: seeded boards
- validate_puzzle_placement: landed-piece check
- calculate_score / difficulty lookups: rules
- PuzzleGame: one play-through of a board
"""

from .pieces import ShapeType, rotate_shape, shape_cells
from .rng import SeededRandom
from .tiles import Tile, build_tile_grid, tile_at_board, image_to_board, board_to_image
from .tiler import PuzzlePiece, tile_board
from .pattern import PuzzlePattern, generate_puzzle_pattern, build_pattern, format_pattern
from .validation import PlacementFailure, PlacementValidation, validate_puzzle_placement
from .rules import (
    Difficulty,
    DifficultyProfile,
    ScoreBreakdown,
    calculate_score,
    get_difficulty_profile,
    get_normal_pieces_count,
    get_puzzle_pieces_count,
)
from .core import GameConfig, PuzzleGame, Drop, DropKind

__all__ = [
    "ShapeType",
    "rotate_shape",
    "shape_cells",
    "SeededRandom",
    "Tile",
    "build_tile_grid",
    "tile_at_board",
    "image_to_board",
    "board_to_image",
    "PuzzlePiece",
    "tile_board",
    "PuzzlePattern",
    "generate_puzzle_pattern",
    "build_pattern",
    "format_pattern",
    "PlacementFailure",
    "PlacementValidation",
    "validate_puzzle_placement",
    "Difficulty",
    "DifficultyProfile",
    "ScoreBreakdown",
    "calculate_score",
    "get_difficulty_profile",
    "get_normal_pieces_count",
    "get_puzzle_pieces_count",
    "GameConfig",
    "PuzzleGame",
    "Drop",
    "DropKind",
]
