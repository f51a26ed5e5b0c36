from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from picture_puzzle.game import GameConfig, PuzzleGame, ShapeType, shape_cells
from picture_puzzle.game.core import DropKind

SHAPE_INDEX = {shape: i for i, shape in enumerate(ShapeType)}


class PuzzlePlacementEnv(gym.Env):
    """Drop the current target piece of a seeded board.

    Action is ``(x, z, rotation)``: the piece's base shape is turned by
    `rotation` and anchored at ``(x, z)`` on the ground layer, then checked
    by the placement validator. Normal filler drops are skipped, only puzzle
    pieces reach the agent. The episode ends once every piece is placed.
    """

    metadata = {"render_modes": []}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        invalid_action_penalty: float = -0.1,
        step_penalty: float = 0.0,
        max_steps: Optional[int] = None,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = PuzzleGame(self.config)
        self.render_mode = render_mode

        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        size = self.game.pattern.grid_size
        self.max_steps = int(max_steps) if max_steps is not None else size * size * 4

        self.observation_space = spaces.Dict(
            {
                "placed": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "target": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "shape": spaces.Discrete(len(ShapeType)),
            }
        )
        self.action_space = spaces.MultiDiscrete((size, size, 4))
        self._steps = 0

    def _advance(self) -> None:
        while True:
            drop = self.game.next_drop()
            if drop is None or drop.kind == DropKind.PUZZLE:
                return

    def _get_obs(self) -> Dict[str, Any]:
        size = self.game.pattern.grid_size
        placed = np.zeros((size, size), dtype=np.int8)
        for piece in self.game.placed_pieces:
            for x, z in piece.cells:
                placed[x, z] = 1
        target = np.zeros((size, size), dtype=np.int8)
        shape = 0
        piece = self.game.current_piece
        if piece is not None:
            for x, z in piece.cells:
                target[x, z] = 1
            shape = SHAPE_INDEX[piece.type]
        return {"placed": placed, "target": target, "shape": shape}

    def _get_info(self) -> Dict[str, Any]:
        piece = self.game.current_piece
        target_action = None
        if piece is not None:
            target_action = (piece.origin[0], piece.origin[1], piece.rotation)
        return {
            "target_action": target_action,
            "pieces_remaining": len(self.game.remaining_pieces),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.config = replace(self.config, seed=seed)
            self.game = PuzzleGame(self.config)
        else:
            self.game.reset()
        self._steps = 0
        self._advance()
        return self._get_obs(), self._get_info()

    def step(self, action):
        x, z, rotation = map(int, action)
        piece = self.game.current_piece
        if piece is None:
            raise RuntimeError("episode is over, call reset() before step()")
        active = [(cx, 0, cz) for cx, cz in shape_cells(piece.type, rotation, (x, z))]
        result = self.game.check_placement(active)

        reward = (1.0 if result.is_valid else self.invalid_action_penalty) + self.step_penalty
        self._steps += 1
        terminated = self.game.is_complete
        if not terminated:
            self._advance()
        truncated = not terminated and self._steps >= self.max_steps

        info = self._get_info()
        info["is_valid"] = result.is_valid
        info["reason"] = result.reason.value if result.reason else None
        return self._get_obs(), reward, terminated, truncated, info

    def close(self) -> None:
        pass
