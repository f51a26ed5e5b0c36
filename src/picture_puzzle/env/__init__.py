"""Gymnasium environment over the puzzle engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Default 6x6 board; pass config=GameConfig(...) to gym.make for others
register(
    id="PicturePuzzle-6x6-v0",
    entry_point="picture_puzzle.env.placement_env:PuzzlePlacementEnv",
)

__all__ = ["PicturePuzzle-6x6-v0"]
