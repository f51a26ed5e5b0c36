"""Session integrity envelope.

The client picks the seed, the backend answers with an opaque hash, and the
pair travels unchanged from game start to game end so the backend can rebuild
the board that the reported outcome was played on.

    IDLE -> STARTING -> ACTIVE -> ENDING -> CLOSED

A failed start drops back to IDLE and never leaves a half-built session. A
failed end stays ACTIVE with the same hash, so the caller may retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional, Protocol, Union

from ..errors import (
    BackendError,
    GenerationIntegrityError,
    SessionEndFailed,
    SessionStartFailed,
    SessionStateError,
)
from ..game.core import GameConfig, PuzzleGame
from ..game.rules import Difficulty, as_difficulty
from .messages import (
    EndGameRequest,
    EndGameResult,
    GameResultStatus,
    StartGameRequest,
    StartGameResponse,
)
from .seeds import generate_game_seed, is_valid_seed, seed_to_int

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    STARTING = "starting"
    ACTIVE = "active"
    ENDING = "ending"
    CLOSED = "closed"


class SessionBackend(Protocol):
    def start_game(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def end_game(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class SessionEnvelope:
    level_id: str
    difficulty: Difficulty
    seed: str
    hash: str
    grid_size: int
    started_at: str
    session_id: int

    @property
    def board_seed(self) -> int:
        return seed_to_int(self.seed)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GameSessionManager:
    """Drives one session at a time against a backend collaborator."""

    def __init__(
        self,
        backend: SessionBackend,
        clock: Optional[Callable[[], datetime]] = None,
        seed_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self.backend = backend
        self.clock = clock or _utc_now
        self.seed_factory = seed_factory or generate_game_seed
        self.state = SessionState.IDLE
        self.envelope: Optional[SessionEnvelope] = None
        self.result: Optional[EndGameResult] = None

    def _require(self, *states: SessionState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise SessionStateError("invalid_state", f"session is {self.state.value}, expected {allowed}")

    def start(self, level_id: str, difficulty: Union[str, Difficulty]) -> SessionEnvelope:
        self._require(SessionState.IDLE, SessionState.CLOSED)
        difficulty = as_difficulty(difficulty)
        self.state = SessionState.STARTING
        self.envelope = None
        self.result = None

        seed = self.seed_factory()
        if not is_valid_seed(seed):
            self.state = SessionState.IDLE
            raise SessionStartFailed("invalid_seed", f"seed {seed!r} is not a valid session seed")
        request = StartGameRequest(
            level_id=level_id,
            difficulty=difficulty,
            seed=seed,
            start_at=self.clock().isoformat(),
        )
        logger.info(f"Starting session for level {level_id} ({difficulty.value})")
        try:
            response = StartGameResponse.from_payload(self.backend.start_game(request.to_payload()))
        except BackendError as e:
            self.state = SessionState.IDLE
            logger.warning(f"Session start rejected for level {level_id}: {e.reason}")
            raise SessionStartFailed(e.reason, str(e)) from e
        except (ValueError, TypeError) as e:
            self.state = SessionState.IDLE
            logger.warning(f"Unexpected session start response for level {level_id}: {e}")
            raise SessionStartFailed("unexpected_response", str(e)) from e
        except Exception as e:
            self.state = SessionState.IDLE
            logger.error(f"Session start failed for level {level_id}: {e}")
            raise SessionStartFailed("transport_error", str(e)) from e

        self.envelope = SessionEnvelope(
            level_id=level_id,
            difficulty=difficulty,
            seed=seed,
            hash=response.hash,
            grid_size=response.grid_size,
            started_at=response.started_at,
            session_id=response.session_id,
        )
        self.state = SessionState.ACTIVE
        logger.info(f"Session {response.session_id} active, grid {response.grid_size}x{response.grid_size}")
        return self.envelope

    def build_game(self) -> PuzzleGame:
        """Generate the board for the active session.

        A generation defect aborts the session: it is discarded and the error
        propagates.
        """
        self._require(SessionState.ACTIVE)
        env = self.envelope
        try:
            return PuzzleGame(GameConfig(grid_size=env.grid_size, seed=env.board_seed, difficulty=env.difficulty))
        except GenerationIntegrityError:
            logger.error(f"Aborting session {env.session_id}: board generation failed (seed {env.seed})")
            self.reset()
            raise

    def end(self, status: Union[str, GameResultStatus], bonus_points: int = 0) -> EndGameResult:
        self._require(SessionState.ACTIVE)
        env = self.envelope
        request = EndGameRequest(
            level_id=env.level_id,
            difficulty=env.difficulty,
            end_at=self.clock().isoformat(),
            hash=env.hash,
            status=GameResultStatus(status),
            bonus_points=int(bonus_points),
        )
        self.state = SessionState.ENDING
        logger.info(f"Ending session {env.session_id} as {request.status.value}")
        try:
            result = EndGameResult.from_payload(self.backend.end_game(request.to_payload()))
        except BackendError as e:
            self.state = SessionState.ACTIVE
            logger.warning(f"Session end rejected for {env.session_id}: {e.reason}")
            raise SessionEndFailed(e.reason, str(e)) from e
        except (ValueError, TypeError) as e:
            self.state = SessionState.ACTIVE
            logger.warning(f"Unexpected session end response for {env.session_id}: {e}")
            raise SessionEndFailed("unexpected_response", str(e)) from e
        except Exception as e:
            self.state = SessionState.ACTIVE
            logger.error(f"Session end failed for {env.session_id}: {e}")
            raise SessionEndFailed("transport_error", str(e)) from e

        self.result = result
        self.envelope = None
        self.state = SessionState.CLOSED
        logger.info(f"Session {env.session_id} closed with score {result.score}")
        return result

    def reset(self) -> None:
        self.envelope = None
        self.result = None
        self.state = SessionState.IDLE
