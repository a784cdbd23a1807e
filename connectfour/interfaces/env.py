"""
env.py - Gymnasium environment over the Connect Four engine

Exposes a match through the standard ``reset``/``step`` interface. In
HUMAN_VS_AUTOMATED mode the agent plays Red and the engine's automated
contestant replies within the same step; in HUMAN_VS_HUMAN mode the agent
plays both sides and rewards are given from the mover's point of view.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connectfour.debug import debug
from connectfour.errors import InvalidConfigurationError
from connectfour.game.engine import Engine
from connectfour.utils import COLS, ROWS, GameMode, GameResult


class ConnectFourEnv(gym.Env):
    """Connect Four environment following the Gymnasium interface."""

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 mode: GameMode = GameMode.HUMAN_VS_AUTOMATED):
        """
        Args:
            render_mode: "ascii" to return the board from render(), "human"
                to print it after every reset and step
            mode: HUMAN_VS_HUMAN or HUMAN_VS_AUTOMATED
        """
        if GameMode(mode) == GameMode.AUTOMATED_VS_AUTOMATED:
            raise InvalidConfigurationError("The agent needs a side to play")

        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.engine = Engine(mode)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        debug.debug("Resetting environment", "env")

        # The automated contestant draws its moves from the env's seeded generator
        self.engine.rng = self.np_random
        self.engine.reset()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        result = self.engine.drop_piece(int(action))
        if not result.ok:
            debug.debug(f"Rejected action {action}: {result.error.value}", "env")
            info = self._get_info()
            info['error'] = result.error.value
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward, terminated = self._score(opponent_moved=False)
        info: Dict[str, Any] = {}

        if not terminated and self.engine.active.is_automated:
            reply = self.engine.drop_piece(self.engine.valid_columns()[0])
            info['opponent_column'] = reply.column
            reward, terminated = self._score(opponent_moved=True)

        if self.render_mode == "human":
            self.render()

        info.update(self._get_info())
        return self._get_observation(), reward, terminated, False, info

    def _score(self, opponent_moved: bool) -> Tuple[float, bool]:
        outcome = self.engine.get_outcome()
        if outcome == GameResult.WON:
            return (self.reward_lose if opponent_moved else self.reward_win), True
        if outcome == GameResult.DRAWN:
            return self.reward_draw, True
        return self.reward_step, False

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.engine.render()
        if self.render_mode == "human":
            print(self.engine.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.engine.get_state().grid

    def _get_info(self) -> Dict[str, Any]:
        match = self.engine.get_state()
        valid_moves = self.engine.valid_columns()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': match.active.color.value,
            'game_result': match.result.name,
            'moves_made': match.moves_made,
            'winning_line': match.winning_line,
            'last_move': match.last_drop,
        }
