"""
Gymnasium environment wrapper for the minefield game.

Provides a standard RL interface over a GameSession.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .field import FieldConfig
from .overlay import GameState
from .session import GameSession
from .status import COVERED, QUESTION


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for the minefield game.

    Observation:
        2D int8 array of SquareStatus.to_observation() codes:
        - -1 = covered, -2 = mine guess, -3 = question
        - 0-8 = uncovered square with adjacent mine count
        - 9 / 10 / 11 = revealed mine / incorrect guess / exploded mine

    Actions:
        Discrete action space of size rows * cols.
        Action i uncovers the square at (i // cols, i % cols).

    Rewards:
        - +1 for uncovering a safe square
        - +10 for winning the game
        - -10 for uncovering a mine
        - -0.1 for invalid action (already uncovered or guessed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Field configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or FieldConfig()
        self.session = GameSession(self.config)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-3,
            high=11,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        # One action per square
        self.action_space = spaces.Discrete(self.config.rows * self.config.cols)

        self._steps = 0
        self._total_safe_squares = (
            self.config.rows * self.config.cols - self.config.num_mines
        )

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        # mine placement draws from the env's seeded generator
        self.session = GameSession(self.config, rng=self.np_random)
        self._steps = 0

        return self.session.visible.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Square index to uncover (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)

        observation = self.session.visible.get_observation()
        terminated = not self.session.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.config.cols, int(action) % self.config.cols

    def _calculate_reward(self, row: int, col: int) -> float:
        """Uncover a square and score the result."""
        if self.session.status(row, col) not in (COVERED, QUESTION):
            return -0.1

        self.session.uncover(row, col)

        if self.session.game_state is GameState.WON:
            return 10.0
        if self.session.game_state is GameState.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        covered = len(self.session.visible.covered_squares())
        uncovered = sum(
            1 for r in range(self.config.rows)
            for c in range(self.config.cols)
            if self.session.visible.is_uncovered(r, c)
        )

        return {
            "steps": self._steps,
            "uncovered": uncovered,
            "total_safe": self._total_safe_squares,
            "mines_left": self.session.mines_left(),
            "game_state": self.session.game_state.name,
            "valid_actions": covered,
        }

    def render(self) -> Optional[str]:
        """Render the current visible field."""
        if self.render_mode == "ansi":
            return self.session.visible.render()
        if self.render_mode == "human":
            print(self.session.visible.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = square can still be uncovered.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.session.visible.covered_squares():
            mask[row * self.config.cols + col] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[FieldConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel rollouts.

    Args:
        n_envs: Number of parallel environments.
        config: Field configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    return gym.vector.AsyncVectorEnv([make_env for _ in range(n_envs)])
