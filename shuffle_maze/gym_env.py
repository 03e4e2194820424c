"""Gymnasium environment wrapper for Shuffle Maze.

Exposes a :class:`shuffle_maze.game.Game` as a standard ``gym.Env`` so
agents (or a keyboard loop) can act as the input collaborator. Each env
step applies one action, then lets ``step_ms`` milliseconds of game time
pass so the countdown and the block scheduler keep running.

Observation schema:

``{"grid": np.ndarray(rows, cols) int8, "level": int64, "time_left": int64}``

with grid codes ``0`` empty, ``1`` wall, ``2`` block, ``3`` player and
``4`` exit. Reward is ``+1`` per level cleared. The game has no terminal
state, so ``terminated`` is always ``False``; ``truncated`` is ``True`` on
the step in which the countdown ran out (the board has already been
regenerated at the same level by then).

Usage:

``env = ShuffleMazeEnv(config=GameConfig(rows=8, cols=8), step_ms=250)``
"""

import gymnasium as gym
import numpy as np
from gymnasium import spaces
from typing import Any, Dict, List, Optional, Tuple

from shuffle_maze.actions import GYM_TO_ACTION, Action, GymAction
from shuffle_maze.config import DEFAULT_CONFIG, GameConfig
from shuffle_maze.game import Game, Notification
from shuffle_maze.state import State
from shuffle_maze.types import Cell, GameEvent
from shuffle_maze.utils.grid import agent_position, exit_position
from shuffle_maze.utils.render import render_ascii

ObsType = Dict[str, Any]

GRID_CODES: Dict[Cell, int] = {
    Cell.EMPTY: 0,
    Cell.WALL: 1,
    Cell.BLOCK: 2,
}
AGENT_CODE = 3
EXIT_CODE = 4

MAX_LEVEL = 1_000_000


def grid_observation(state: State) -> np.ndarray:
    """Encode the board as an ``(height, width)`` int8 array."""
    grid = np.zeros((state.height, state.width), dtype=np.int8)
    for pos, cell in state.cell.items():
        grid[pos.y, pos.x] = GRID_CODES[cell]
    goal = exit_position(state)
    if goal is not None:
        grid[goal.y, goal.x] = EXIT_CODE
    player = agent_position(state)
    if player is not None:
        grid[player.y, player.x] = AGENT_CODE
    return grid


def _int_box(low: int, high: int) -> spaces.Box:
    return spaces.Box(
        low=np.array(low, dtype=np.int64),
        high=np.array(high, dtype=np.int64),
        shape=(),
        dtype=np.int64,
    )


class ShuffleMazeEnv(gym.Env[ObsType, np.integer]):
    """Gymnasium ``Env`` implementation for Shuffle Maze.

    The action space is ``Discrete(len(GymAction))``; see
    :mod:`shuffle_maze.actions`.
    """

    metadata = {"render_modes": ["ansi"]}

    def __init__(
        self,
        render_mode: Optional[str] = "ansi",
        config: GameConfig = DEFAULT_CONFIG,
        step_ms: int = 250,
    ):
        """Create a new environment instance.

        Arguments:
            render_mode: ``"ansi"`` to return a text board from ``render``.
            config: Grid size and difficulty curves for the wrapped game.
            step_ms: Game time that passes per env step (milliseconds).
        """
        if step_ms < 0:
            raise ValueError(f"step_ms must be non-negative, got {step_ms}")
        self.render_mode = render_mode
        self.config = config
        self.step_ms = step_ms
        self.game: Optional[Game] = None
        self._events: List[Notification] = []

        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(
                    low=0,
                    high=EXIT_CODE,
                    shape=(config.rows, config.cols),
                    dtype=np.int8,
                ),
                "level": _int_box(1, MAX_LEVEL),
                "time_left": _int_box(0, config.base_time),
            }
        )
        self.action_space = spaces.Discrete(len(GymAction))

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, object]] = None
    ) -> Tuple[ObsType, Dict[str, object]]:
        """Start a new game at level 1.

        Arguments:
            seed: Seeds ``self.np_random``, from which the game seed is drawn.
            options: Gymnasium options (unused).
        """
        super().reset(seed=seed)
        game_seed = int(self.np_random.integers(0, 2**31 - 1))
        self._events = []
        self.game = Game(config=self.config, seed=game_seed)
        self.game.subscribe(self._record)
        return self._get_obs(), self._get_info(moved=False)

    def _record(self, notification: Notification) -> None:
        self._events.append(notification)

    def step(
        self, action: np.integer
    ) -> Tuple[ObsType, float, bool, bool, Dict[str, object]]:
        """Apply one environment step.

        Arguments:
            action: Integer index into the ``GymAction`` enum.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        assert self.game is not None, "Call reset() before step()"
        if not 0 <= int(action) < len(GymAction):
            raise ValueError(f"Invalid action: {action}")
        step_action: Action = GYM_TO_ACTION[GymAction(int(action))]

        self._events = []
        moved = False
        if step_action != Action.WAIT:
            moved = self.game.move(step_action)
        self.game.advance(self.step_ms)
        self.game.frame()

        reward = float(
            sum(1 for n in self._events if n.event == GameEvent.LEVEL_UP)
        )
        truncated = any(n.event == GameEvent.TIME_UP for n in self._events)
        return self._get_obs(), reward, False, truncated, self._get_info(moved=moved)

    def render(self) -> Optional[str]:  # type: ignore[override]
        """Return the board as text in ``"ansi"`` mode."""
        assert self.game is not None
        if self.render_mode == "ansi":
            return render_ascii(self.game.state)
        if self.render_mode is None:
            return None
        raise NotImplementedError(f"Render mode '{self.render_mode}' not supported.")

    def _get_obs(self) -> ObsType:
        assert self.game is not None
        return {
            "grid": grid_observation(self.game.state),
            "level": np.array(self.game.level, dtype=np.int64),
            "time_left": np.array(self.game.time_left, dtype=np.int64),
        }

    def _get_info(self, moved: bool) -> Dict[str, object]:
        assert self.game is not None
        return {
            "level": self.game.level,
            "time_left": self.game.time_left,
            "phase": str(self.game.phase),
            "moved": moved,
            "events": [str(n.event) for n in self._events],
        }

    def close(self) -> None:
        """Drop the wrapped game."""
        self.game = None
