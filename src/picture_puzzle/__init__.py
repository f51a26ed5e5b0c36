"""Seeded picture-puzzle board generation, placement validation and scoring."""

from .game import (
    Difficulty,
    GameConfig,
    PuzzleGame,
    PuzzlePattern,
    PuzzlePiece,
    ScoreBreakdown,
    SeededRandom,
    calculate_score,
    generate_puzzle_pattern,
    get_normal_pieces_count,
    get_puzzle_pieces_count,
    validate_puzzle_placement,
)
from .errors import (
    GenerationIntegrityError,
    PlacementRejected,
    SessionEndFailed,
    SessionStartFailed,
)

__all__ = [
    "Difficulty",
    "GameConfig",
    "PuzzleGame",
    "PuzzlePattern",
    "PuzzlePiece",
    "ScoreBreakdown",
    "SeededRandom",
    "calculate_score",
    "generate_puzzle_pattern",
    "get_normal_pieces_count",
    "get_puzzle_pieces_count",
    "validate_puzzle_placement",
    "GenerationIntegrityError",
    "PlacementRejected",
    "SessionEndFailed",
    "SessionStartFailed",
]
