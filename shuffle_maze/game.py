"""Level/round state machine.

:class:`Game` is the single owner of the current board. It holds one
``State`` reference and replaces it after every synchronous system call:

* player input goes through :func:`shuffle_maze.step.step`;
* the block scheduler fires on a level-dependent interval and runs
  :func:`shuffle_maze.systems.blocks.block_system`;
* the countdown fires once per time unit;
* the rendering collaborator calls :meth:`Game.frame` whenever it draws.

Phases::

    PLAYING --(player on exit)--> LEVEL_TRANSITION --(level + 1)--> PLAYING
    PLAYING --(countdown at 0)--> TIME_UP --(same level)----------> PLAYING

Entering ``PLAYING`` always generates a fresh board, re-arms the block
timer for the new level's interval and restarts the countdown. There is
no terminal phase.

All mutation and timer re-arming happens under a re-entrant lock, so an
input thread and a clock thread may drive the same game without either
observing a half-finished transition.
"""

import logging
import random
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from shuffle_maze.actions import Action
from shuffle_maze.clock import Clock, ScheduledTask
from shuffle_maze.config import DEFAULT_CONFIG, GameConfig
from shuffle_maze.levels.generator import generate
from shuffle_maze.state import State
from shuffle_maze.step import step
from shuffle_maze.systems.blocks import block_system
from shuffle_maze.systems.interpolation import interpolation_system
from shuffle_maze.types import GameEvent, GamePhase
from shuffle_maze.utils.validation import invariant_violations

logger = logging.getLogger(__name__)

EVENT_MESSAGES = {
    GameEvent.LEVEL_UP: "Level Up!",
    GameEvent.TIME_UP: "Time Up!",
}


@dataclass(frozen=True)
class Notification:
    """User-facing event for the display collaborator.

    Attributes:
        event: What happened.
        level: Level number the game continues with.
        message: Short default text; front ends may format their own.
    """

    event: GameEvent
    level: int
    message: str


Listener = Callable[[Notification], None]


class Game:
    config: GameConfig
    clock: Clock
    rng: random.Random
    seed: Optional[int]
    level: int
    phase: GamePhase
    state: State
    time_left: int

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        clock: Optional[Clock] = None,
        seed: Optional[int] = None,
        level: int = 1,
    ):
        """Create a game and immediately enter ``PLAYING`` at ``level``.

        Arguments:
            config: Grid size and difficulty curves.
            clock: Clock driving the timers; a fresh virtual clock by default.
            seed: Seed for every random decision (generation and shuffles).
            level: Starting level number.
        """
        if level < 1:
            raise ValueError(f"Level must be at least 1, got {level}")
        self.config = config
        self.clock = clock if clock is not None else Clock()
        self.seed = seed
        self.rng = random.Random(seed)
        self.level = level
        self.phase = GamePhase.PLAYING
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._countdown_task: Optional[ScheduledTask] = None
        self._block_task: Optional[ScheduledTask] = None
        self._enter_playing()

    # -------------------------
    # Collaborator surface
    # -------------------------

    @property
    def block_interval(self) -> int:
        """Current block scheduler period in milliseconds."""
        return self.config.block_interval(self.level)

    def subscribe(self, listener: Listener) -> None:
        """Register ``listener`` for level-up / time-up notifications."""
        self._listeners.append(listener)

    def move(self, action: Action) -> bool:
        """Apply a player action.

        Returns:
            bool: True if the player moved (possibly pushing a block). An
            illegal move leaves everything untouched and returns False.
        """
        with self._lock:
            next_state = step(self.state, action)
            if next_state is self.state:
                return False
            self._set_state(next_state)
            if next_state.win:
                self._level_up()
            return True

    def advance(self, ms: int) -> int:
        """Let ``ms`` milliseconds of game time pass; returns callbacks fired."""
        with self._lock:
            return self.clock.advance(ms)

    def frame(self) -> State:
        """Run one interpolation pass for the renderer and return the board."""
        with self._lock:
            self.state = interpolation_system(
                self.state, self.config.interpolation_rate
            )
            return self.state

    # -------------------------
    # Transitions
    # -------------------------

    def _enter_playing(self) -> None:
        self.state = generate(
            self.level,
            self.config.rows,
            self.config.cols,
            rng=self.rng,
            config=self.config,
            seed=self.seed,
        )
        self.time_left = self.state.time_limit
        self._rearm_timers()
        self.phase = GamePhase.PLAYING

    def _rearm_timers(self) -> None:
        if self._countdown_task is not None:
            self._countdown_task.cancel()
        if self._block_task is not None:
            self._block_task.cancel()
        self._countdown_task = self.clock.schedule_interval(
            self.config.countdown_period_ms, self._on_countdown
        )
        self._block_task = self.clock.schedule_interval(
            self.block_interval, self._on_block_tick
        )
        logger.debug(
            "Armed timers for level %d: block interval %d ms, %d time units",
            self.level,
            self.block_interval,
            self.time_left,
        )

    def _level_up(self) -> None:
        self.phase = GamePhase.LEVEL_TRANSITION
        self.level += 1
        logger.info("Exit reached, advancing to level %d", self.level)
        self._notify(GameEvent.LEVEL_UP)
        self._enter_playing()

    def _time_up(self) -> None:
        self.phase = GamePhase.TIME_UP
        logger.info("Time up on level %d, regenerating", self.level)
        self._notify(GameEvent.TIME_UP)
        self._enter_playing()

    def _notify(self, event: GameEvent) -> None:
        notification = Notification(event, self.level, EVENT_MESSAGES[event])
        for listener in list(self._listeners):
            listener(notification)

    # -------------------------
    # Timer callbacks
    # -------------------------

    def _on_countdown(self) -> None:
        with self._lock:
            self.time_left -= 1
            if self.time_left <= 0:
                self._time_up()

    def _on_block_tick(self) -> None:
        with self._lock:
            self._set_state(block_system(self.state, self.rng))

    def _set_state(self, state: State) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            problems = invariant_violations(state)
            if problems:
                logger.warning(
                    "Board invariant broken: %s; state %s",
                    "; ".join(problems),
                    dict(state.description),
                )
        self.state = state
