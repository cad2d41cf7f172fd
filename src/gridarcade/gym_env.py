"""Gymnasium-compatible wrapper around the arcade action surface.

Observation is the ``(20, 10)`` grid of cell codes with every live entity
overlaid (see :func:`gridarcade.utils.render_grid`).  Each action is one input
intent followed by a single ``tick``:

  0 noop, 1 left, 2 right, 3 down, 4 up, 5 act, 6 hard drop

Reward is the score gained during the step.  Construction sessions pick the
first offered power-up automatically so an episode only ends on game over.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import CELL_VALUES, Board
from .catalog import GameMode, GameStatus
from .config import ArcadeConfig
from .game_state import GameState
from .utils import render_grid


_MOVES = {1: (-1, 0), 2: (1, 0), 3: (0, 1), 4: (0, -1)}
NUM_ACTIONS = 7


class ArcadeGymEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 10,
    }

    def __init__(
        self,
        *,
        mode: GameMode = GameMode.PUZZLE,
        max_steps: Optional[int] = None,
        config: Optional[ArcadeConfig] = None,
    ) -> None:
        super().__init__()
        self.mode = GameMode(mode)
        self._config = config or ArcadeConfig()
        self._state = GameState(config=self._config)
        self.action_space = spaces.Discrete(NUM_ACTIONS)
        self.observation_space = spaces.Box(
            low=0,
            high=max(CELL_VALUES.values()),
            shape=(Board.height, Board.width),
            dtype=np.uint8,
        )
        self._steps = 0
        self._max_steps = max_steps

    @property
    def state(self) -> GameState:
        return self._state

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        if seed is not None:
            self._config = replace(self._config, random_seed=seed)
        self._state = GameState(config=self._config)
        self._state.start(self.mode)
        self._steps = 0
        return self._observation(), self._info()

    def step(self, action: int):
        state = self._state
        before = state.score
        action = int(action)
        if action in _MOVES:
            state.move(*_MOVES[action])
        elif action == 5:
            state.act()
        elif action == 6:
            state.hard_drop()
        state.tick()
        if state.status is GameStatus.POWERUP_SELECT and state.powerup_pool:
            state.select_powerup(state.powerup_pool[0].id)
        self._steps += 1
        terminated = state.status is GameStatus.GAME_OVER
        truncated = self._max_steps is not None and self._steps >= self._max_steps
        reward = float(state.score - before)
        return self._observation(), reward, terminated, truncated, self._info()

    def render(self):
        return "\n".join(
            "".join("#" if cell else "." for cell in row) for row in render_grid(self._state)
        )

    def close(self):
        return None

    # -------------------- Helpers -------------------------
    def _observation(self) -> np.ndarray:
        return np.asarray(render_grid(self._state), dtype=np.uint8)

    def _info(self) -> Dict:
        return {
            "score": self._state.score,
            "level": self._state.level,
            "status": self._state.status.value,
        }
