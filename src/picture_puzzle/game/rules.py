from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from .rng import SeededRandom


class Difficulty(str, Enum):
    EASY = "easy"
    EASY2 = "easy2"
    MEDIUM = "medium"
    MEDIUM2 = "medium2"
    HARD = "hard"
    HARD2 = "hard2"


@dataclass(frozen=True)
class FixedCount:
    count: int


@dataclass(frozen=True)
class CountRange:
    low: int
    high: int


NormalCount = Union[FixedCount, CountRange]


@dataclass(frozen=True)
class DifficultyProfile:
    label: str
    puzzle_count: int  # puzzle pieces per cycle
    normal_count: NormalCount  # normal pieces following them
    clear_charges: int
    time_limit_seconds: int
    base_score: int
    show_target_indicator: bool
    backend_name: str


DIFFICULTY_PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile("Aprendiz", 3, FixedCount(1), 5, 10 * 60, 100, True, "aprendiz"),
    Difficulty.EASY2: DifficultyProfile("Novato", 2, FixedCount(1), 4, 8 * 60, 200, True, "novato"),
    Difficulty.MEDIUM: DifficultyProfile("Aventurero", 1, FixedCount(1), 4, 8 * 60, 350, True, "aventurero"),
    Difficulty.MEDIUM2: DifficultyProfile("Veterano", 1, CountRange(1, 2), 4, 8 * 60, 500, True, "veterano"),
    Difficulty.HARD: DifficultyProfile("Maestro", 1, FixedCount(2), 4, 7 * 60, 750, True, "maestro"),
    Difficulty.HARD2: DifficultyProfile("Leyenda", 1, FixedCount(3), 3, 6 * 60, 1000, False, "leyenda"),
}

GRID_SIZES: Dict[Difficulty, int] = {
    Difficulty.EASY: 6,
    Difficulty.EASY2: 6,
    Difficulty.MEDIUM: 8,
    Difficulty.MEDIUM2: 8,
    Difficulty.HARD: 10,
    Difficulty.HARD2: 10,
}

LINE_CLEAR_POINTS = 50


def as_difficulty(value: Union[str, Difficulty]) -> Difficulty:
    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(value)
    except ValueError:
        for difficulty, profile in DIFFICULTY_PROFILES.items():
            if profile.backend_name == value:
                return difficulty
        raise KeyError(f"unknown difficulty: {value!r}")


def get_difficulty_profile(difficulty: Union[str, Difficulty]) -> DifficultyProfile:
    return DIFFICULTY_PROFILES[as_difficulty(difficulty)]


def get_difficulty_label(difficulty: Union[str, Difficulty]) -> str:
    return get_difficulty_profile(difficulty).label


def grid_size_for(difficulty: Union[str, Difficulty]) -> int:
    return GRID_SIZES[as_difficulty(difficulty)]


def get_puzzle_pieces_count(difficulty: Union[str, Difficulty]) -> int:
    return get_difficulty_profile(difficulty).puzzle_count


def get_normal_pieces_count(difficulty: Union[str, Difficulty], rng: Optional[SeededRandom] = None) -> int:
    """Normal pieces for the next cycle.

    A range draws from `rng` when given, so a whole session stays reproducible
    from its seed; without one the draw uses the `random` module.
    """
    spec = get_difficulty_profile(difficulty).normal_count
    if isinstance(spec, FixedCount):
        return spec.count
    if rng is not None:
        return rng.next_int(spec.low, spec.high)
    return random.randint(spec.low, spec.high)


@dataclass(frozen=True)
class ScoreBreakdown:
    base_score: int
    lines_cleared_score: int
    time_bonus: int
    total_score: int


def time_bonus(base_score: int, elapsed_seconds: float, time_limit_seconds: float) -> int:
    fraction = elapsed_seconds / time_limit_seconds
    if fraction <= 0.5:
        return math.floor(base_score * 0.5)
    if fraction <= 0.75:
        return math.floor(base_score * 0.25)
    return 0


def calculate_score(
    difficulty: Union[str, Difficulty],
    lines_cleared: int,
    elapsed_seconds: float,
    time_limit_seconds: float,
) -> ScoreBreakdown:
    if time_limit_seconds <= 0:
        raise ValueError(f"time limit must be positive, got {time_limit_seconds}")
    base = get_difficulty_profile(difficulty).base_score
    lines_score = int(lines_cleared) * LINE_CLEAR_POINTS
    bonus = time_bonus(base, elapsed_seconds, time_limit_seconds)
    return ScoreBreakdown(
        base_score=base,
        lines_cleared_score=lines_score,
        time_bonus=bonus,
        total_score=base + lines_score + bonus,
    )


def format_time(seconds: int) -> str:
    seconds = int(seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"
