from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_block.game import Action, FallingBlockGame, GameConfig, ScoringRules, TetrominoType
from falling_block.visualization.palette import color_for_value


class FallingBlockEnv(gym.Env):
    """Gravity-driven environment: every step applies one action, then one tick.

    Reward is the engine score delta, so landing bonuses and line clears
    come straight from ``ScoringRules``.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = FallingBlockGame(config, rules)
        self.render_mode = render_mode
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.game.config.height, self.game.config.width
        n_kinds = len(TetrominoType)

        # Board: 0 empty, 1..7 locked piece types, -1..-7 the falling piece
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_kinds, high=n_kinds, shape=(h, w), dtype=np.int8),
                "next_piece": spaces.Discrete(n_kinds + 1),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        snap = self.game.snapshot()
        next_kind = int(snap.next_piece.kind) if snap.next_piece is not None else 0
        return {
            "board": snap.display_grid().astype(np.int8),
            "next_piece": next_kind,
        }

    def _get_info(self) -> Dict[str, Any]:
        grid = self.game.grid
        return {
            "score": self.game.score,
            "level": self.game.level,
            "lines": self.game.lines,
            "holes": grid.count_holes(),
            "max_height": grid.get_max_height(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.seed(seed)
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.game.score
        self.game.dispatch(Action(int(action)))
        lock = self.game.tick()
        self._steps += 1

        reward = float(self.game.score - score_before)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        if terminated:
            reward += self.terminal_penalty

        info = self._get_info()
        info["lines_cleared"] = lock.lines_cleared if lock is not None else 0
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        board = self.game.snapshot().display_grid()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(board[y, x]))
        return img

    def close(self) -> None:
        pass
