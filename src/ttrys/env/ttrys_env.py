from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from ttrys.game import Action, CellState, Game, GameConfig
from ttrys.game.levels import NUM_LEVELS
from ttrys.visualization.palette import EMPTY_RGB, xterm_to_rgb

# Discrete action index -> engine intent
ACTIONS: Tuple[Action, ...] = (
    Action.NONE,
    Action.LEFT,
    Action.RIGHT,
    Action.ROTATE_CW,
    Action.ROTATE_CCW,
    Action.SOFT_DROP,
)


class TTrYsEnv(gym.Env):
    """One env step applies an intent and then advances the game clock one tick."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 ticks_per_step: int = 1,
                 max_steps: int = 10000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = Game(self.config)
        self.render_mode = render_mode
        self.ticks_per_step = int(ticks_per_step)
        self.max_steps = int(max_steps)

        height, width = self.config.height, self.config.width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=int(CellState.LOCKED), shape=(height, width), dtype=np.int8),
                "next_shape": spaces.Discrete(8),
                "level": spaces.Discrete(NUM_LEVELS + 1),
            }
        )
        self.action_space = spaces.Discrete(len(ACTIONS))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.game.board.state_array(),
            "next_shape": int(self.game.next_piece.shape),
            "level": self.game.level.number,
        }

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.snapshot()
        info["steps"] = self._steps
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        # Game seed comes from the env RNG so seedless resets continue a seeded run
        game_seed = int(self.np_random.integers(2**31))
        self.game = Game(replace(self.config, random_seed=game_seed))
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.game.stats.score
        self.game.step(ACTIONS[int(action)])
        for _ in range(self.ticks_per_step):
            self.game.on_tick()
        self._steps += 1

        reward = float(self.game.stats.score - score_before)
        terminated = bool(self.game.game_over)
        truncated = bool(self.game.wants_to_quit) or self._steps >= self.max_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            # human rendering delegated to external UI; noop
            return None
        cell = 12
        states = self.game.board.states
        colors = self.game.board.colors
        h, w = states.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            # Board row 0 is the bottom; image row 0 is the top
            top = (h - 1 - y) * cell
            for x in range(w):
                color = EMPTY_RGB if states[y, x] == CellState.EMPTY else xterm_to_rgb(colors[y, x])
                img[top : top + cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
