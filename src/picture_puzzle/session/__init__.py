"""Seed/hash session envelope shared with the game backend."""

from .envelope import GameSessionManager, SessionBackend, SessionEnvelope, SessionState
from .messages import (
    EndGameRequest,
    EndGameResult,
    GameResultStatus,
    StartGameRequest,
    StartGameResponse,
    parse_grid_size,
)
from .seeds import generate_game_seed, is_valid_seed, seed_to_int

__all__ = [
    "GameSessionManager",
    "SessionBackend",
    "SessionEnvelope",
    "SessionState",
    "EndGameRequest",
    "EndGameResult",
    "GameResultStatus",
    "StartGameRequest",
    "StartGameResponse",
    "parse_grid_size",
    "generate_game_seed",
    "is_valid_seed",
    "seed_to_int",
]
