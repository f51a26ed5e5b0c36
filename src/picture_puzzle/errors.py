from __future__ import annotations

from typing import Optional, Sequence


class PuzzleError(Exception):
    """Base class for every error raised by the puzzle core."""


class GenerationIntegrityError(PuzzleError):
    """A generated board broke a coverage, connectivity or orientation invariant.

    This is a defect in generation, never a gameplay state. Callers must abort
    the session start instead of continuing with a broken puzzle.
    """

    def __init__(
        self,
        message: str,
        piece_id: Optional[int] = None,
        tile_ids: Sequence[str] = (),
        kind: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.piece_id = piece_id
        self.tile_ids = tuple(tile_ids)
        self.kind = kind


class PlacementRejected(PuzzleError):
    """The active piece does not match its target. Play continues."""

    def __init__(self, reason) -> None:
        super().__init__(f"placement rejected: {reason.value}")
        self.reason = reason


class BackendError(PuzzleError):
    """Raised by session backends when a round-trip fails.

    `reason` is the backend's machine code (e.g. ``level_not_found``).
    """

    def __init__(self, reason: str, message: str = "") -> None:
        super().__init__(message or reason)
        self.reason = reason


class SessionError(PuzzleError):
    def __init__(self, reason: str, message: str = "") -> None:
        super().__init__(message or reason)
        self.reason = reason


class SessionStartFailed(SessionError):
    pass


class SessionEndFailed(SessionError):
    pass


class SessionStateError(SessionError):
    """An envelope operation was called from the wrong state."""
