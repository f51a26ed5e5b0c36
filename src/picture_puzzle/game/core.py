from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Union

from .pattern import PuzzlePattern, build_pattern
from .pieces import NORMAL_SHAPES, ShapeType
from .rng import SeededRandom
from .rules import (
    Difficulty,
    ScoreBreakdown,
    as_difficulty,
    calculate_score,
    get_difficulty_profile,
    get_normal_pieces_count,
)
from .tiler import ATTEMPT_FACTOR, PuzzlePiece
from .validation import PlacementValidation, validate_puzzle_placement

logger = logging.getLogger(__name__)


class DropKind(str, Enum):
    PUZZLE = "puzzle"
    NORMAL = "normal"


@dataclass
class Drop:
    kind: DropKind
    shape: ShapeType
    piece: Optional[PuzzlePiece] = None


@dataclass
class GameConfig:
    grid_size: int = 6
    seed: int = 0
    difficulty: Union[str, Difficulty] = Difficulty.EASY
    attempt_factor: int = ATTEMPT_FACTOR


class PuzzleGame:
    """Tracks one play-through of a seeded board.

    A single SeededRandom is threaded through board tiling first and then the
    drop schedule, so the seed reproduces the whole session and not only the
    board. Drops follow the difficulty's puzzle:normal cycle; a puzzle drop
    targets a random piece that has not been placed yet.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.difficulty = as_difficulty(self.config.difficulty)
        self.profile = get_difficulty_profile(self.difficulty)
        self.rng = SeededRandom(self.config.seed)
        self.pattern: PuzzlePattern = build_pattern(
            self.config.grid_size, self.rng, attempt_factor=self.config.attempt_factor
        )
        self.remaining_pieces: List[PuzzlePiece] = []
        self.placed_pieces: List[PuzzlePiece] = []
        self.current_piece: Optional[PuzzlePiece] = None
        self.drops = 0
        self.lines_cleared = 0
        self.clear_charges = 0
        self._cycle: List[DropKind] = []
        self.reset()

    def reset(self) -> None:
        for piece in self.pattern.pieces:
            piece.placed = False
        self.remaining_pieces = list(self.pattern.pieces)
        self.placed_pieces = []
        self.current_piece = None
        self.drops = 0
        self.lines_cleared = 0
        self.clear_charges = self.profile.clear_charges
        self._cycle = []

    @property
    def is_complete(self) -> bool:
        return not self.remaining_pieces

    def _refill_cycle(self) -> None:
        normal = get_normal_pieces_count(self.difficulty, self.rng)
        self._cycle = [DropKind.PUZZLE] * self.profile.puzzle_count + [DropKind.NORMAL] * normal

    def next_drop(self) -> Optional[Drop]:
        """Next piece to fall, or None once every puzzle piece is placed."""
        if self.is_complete:
            return None
        if not self._cycle:
            self._refill_cycle()
        kind = self._cycle.pop(0)
        self.drops += 1
        if kind == DropKind.NORMAL:
            self.current_piece = None
            return Drop(kind=kind, shape=self.rng.choice(NORMAL_SHAPES))
        piece = self.rng.choice(self.remaining_pieces)
        self.current_piece = piece
        return Drop(kind=kind, shape=piece.type, piece=piece)

    def check_placement(self, active_cells: Iterable[Sequence[int]]) -> PlacementValidation:
        """Validate the landed puzzle piece; a match moves it to `placed_pieces`.

        A rejected piece stays in `remaining_pieces` and falls again later.
        """
        if self.current_piece is None:
            raise RuntimeError("no puzzle piece is falling")
        piece = self.current_piece
        self.current_piece = None
        result = validate_puzzle_placement(active_cells, piece)
        if result.is_valid:
            piece.placed = True
            self.remaining_pieces.remove(piece)
            self.placed_pieces.append(piece)
            logger.debug(f"Piece {piece.id} placed, {len(self.remaining_pieces)} remaining")
        return result

    def place(self, active_cells: Iterable[Sequence[int]]) -> PlacementValidation:
        result = self.check_placement(active_cells)
        result.raise_for_reason()
        return result

    def record_lines_cleared(self, lines: int) -> None:
        if lines < 0:
            raise ValueError(f"lines cleared cannot be negative: {lines}")
        self.lines_cleared += lines

    def use_clear_charge(self) -> bool:
        if self.clear_charges <= 0:
            return False
        self.clear_charges -= 1
        return True

    def score(self, elapsed_seconds: float) -> ScoreBreakdown:
        return calculate_score(
            self.difficulty, self.lines_cleared, elapsed_seconds, self.profile.time_limit_seconds
        )

    def get_state(self) -> dict:
        return {
            "grid_size": self.pattern.grid_size,
            "seed": self.pattern.seed,
            "difficulty": self.difficulty.value,
            "pieces_total": len(self.pattern.pieces),
            "pieces_remaining": len(self.remaining_pieces),
            "pieces_placed": len(self.placed_pieces),
            "current_piece": self.current_piece.id if self.current_piece else None,
            "drops": self.drops,
            "lines_cleared": self.lines_cleared,
            "clear_charges": self.clear_charges,
            "complete": self.is_complete,
        }
