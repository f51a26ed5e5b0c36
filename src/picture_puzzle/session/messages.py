"""Request/response shapes exchanged with the game backend.

Payloads use the backend's camelCase keys and its difficulty names
(``aprendiz`` ... ``leyenda``). Responses wrap their content in ``data``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..game.rules import Difficulty, get_difficulty_profile


class GameResultStatus(str, Enum):
    WON = "won"
    LOST = "lost"
    ABANDONED = "abandoned"


def backend_difficulty(difficulty: Difficulty) -> str:
    return get_difficulty_profile(difficulty).backend_name


def parse_grid_size(value: Any) -> int:
    """Accept ``6``, ``"6"`` or ``"6x6x6"``."""
    if isinstance(value, bool):
        raise ValueError(f"invalid grid size: {value!r}")
    if isinstance(value, int):
        size = value
    elif isinstance(value, str):
        parts = value.lower().split("x")
        if len(set(parts)) != 1 or not parts[0].isdigit():
            raise ValueError(f"invalid grid size: {value!r}")
        size = int(parts[0])
    else:
        raise ValueError(f"invalid grid size: {value!r}")
    if size < 1:
        raise ValueError(f"invalid grid size: {value!r}")
    return size


def _data(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
        raise ValueError("response has no 'data' object")
    return payload["data"]


@dataclass(frozen=True)
class StartGameRequest:
    level_id: str
    difficulty: Difficulty
    seed: str
    start_at: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            "levelUuid": self.level_id,
            "difficulty": backend_difficulty(self.difficulty),
            "startAt": self.start_at,
            "seed": self.seed,
        }


@dataclass(frozen=True)
class StartGameResponse:
    hash: str
    grid_size: int
    started_at: str
    session_id: int

    @classmethod
    def from_payload(cls, payload: Any) -> "StartGameResponse":
        data = _data(payload)
        try:
            hash_ = data["hash"]
            if not isinstance(hash_, str) or not hash_:
                raise ValueError("empty session hash")
            return cls(
                hash=hash_,
                grid_size=parse_grid_size(data["gridSize"]),
                started_at=str(data["startedAt"]),
                session_id=int(data["gameHistoryId"]),
            )
        except KeyError as e:
            raise ValueError(f"missing field {e.args[0]!r}") from e


@dataclass(frozen=True)
class EndGameRequest:
    level_id: str
    difficulty: Difficulty
    end_at: str
    hash: str
    status: GameResultStatus
    bonus_points: int = 0

    def to_payload(self) -> Dict[str, Any]:
        return {
            "levelUuid": self.level_id,
            "difficulty": backend_difficulty(self.difficulty),
            "endAt": self.end_at,
            "hash": self.hash,
            "status": self.status.value,
            "bonusPoints": self.bonus_points,
        }


@dataclass(frozen=True)
class EndGameResult:
    status: GameResultStatus
    score: int
    duration: int
    completed_at: str
    level_status: str
    already_completed: Optional[bool] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "EndGameResult":
        data = _data(payload)
        try:
            return cls(
                status=GameResultStatus(data["status"]),
                score=int(data["score"]),
                duration=int(data["duration"]),
                completed_at=str(data["completedAt"]),
                level_status=str(data["levelStatus"]),
                already_completed=data.get("alreadyCompleted"),
            )
        except KeyError as e:
            raise ValueError(f"missing field {e.args[0]!r}") from e
