"""Game tuning knobs.

:class:`GameConfig` collects every constant that shapes difficulty: grid
size, how many walls and blocks a level gets, the countdown budget and how
often the block scheduler fires. The defaults reproduce the classic game
(10x10 grid, 120 s for level 1, a block shuffle every 2 s).

All difficulty curves are functions of the 1-based level number::

    walls(level)    = floor(level * wall_factor)
    attempts        = floor(rows * cols * placement_attempt_factor)
    blocks(level)   = min(base_blocks + level * blocks_per_level,
                          rows * cols // block_cap_divisor)
    time(level)     = max(min_time, base_time - (level - 1) * time_step)
    interval(level) = max(base_interval_ms - (level - 1) * interval_step_ms,
                          min_interval_ms)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GameConfig:
    rows: int = 10
    cols: int = 10

    # Generation
    wall_factor: float = 3
    base_blocks: int = 10
    blocks_per_level: int = 2
    block_cap_divisor: int = 3
    placement_attempt_factor: float = 2

    # Countdown
    base_time: int = 120
    time_step: int = 5
    min_time: int = 30
    countdown_period_ms: int = 1000

    # Block scheduler
    base_interval_ms: int = 2000
    interval_step_ms: int = 150
    min_interval_ms: int = 400

    # Rendering collaborator
    interpolation_rate: float = 0.2

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1 or self.rows * self.cols < 2:
            raise ValueError(
                f"Grid must have at least two cells, got {self.rows}x{self.cols}"
            )
        if self.wall_factor < 0:
            raise ValueError("wall_factor must be non-negative")
        if self.base_blocks < 0 or self.blocks_per_level < 0:
            raise ValueError("Block counts must be non-negative")
        if self.block_cap_divisor < 1:
            raise ValueError("block_cap_divisor must be at least 1")
        if self.placement_attempt_factor < 0:
            raise ValueError("placement_attempt_factor must be non-negative")
        if self.min_time < 1 or self.base_time < self.min_time:
            raise ValueError("Time budget must satisfy 1 <= min_time <= base_time")
        if self.countdown_period_ms <= 0:
            raise ValueError("countdown_period_ms must be positive")
        if self.min_interval_ms <= 0 or self.base_interval_ms < self.min_interval_ms:
            raise ValueError(
                "Block interval must satisfy 0 < min_interval_ms <= base_interval_ms"
            )
        if not 0.0 < self.interpolation_rate <= 1.0:
            raise ValueError("interpolation_rate must be in (0, 1]")

    def wall_count(self, level: int) -> int:
        """Number of wall draws for ``level`` (duplicates may collapse)."""
        return math.floor(level * self.wall_factor)

    def block_count(
        self, level: int, rows: Optional[int] = None, cols: Optional[int] = None
    ) -> int:
        """Number of blocks requested for ``level`` (on this grid by default)."""
        rows = self.rows if rows is None else rows
        cols = self.cols if cols is None else cols
        cap = (rows * cols) // self.block_cap_divisor
        return min(self.base_blocks + level * self.blocks_per_level, cap)

    def placement_attempts(
        self, rows: Optional[int] = None, cols: Optional[int] = None
    ) -> int:
        """Total random draws allowed when placing blocks."""
        rows = self.rows if rows is None else rows
        cols = self.cols if cols is None else cols
        return math.floor(rows * cols * self.placement_attempt_factor)

    def time_budget(self, level: int) -> int:
        """Countdown length for ``level`` in time units."""
        return max(self.min_time, self.base_time - (level - 1) * self.time_step)

    def block_interval(self, level: int) -> int:
        """Block scheduler period for ``level`` in milliseconds."""
        return max(
            self.base_interval_ms - (level - 1) * self.interval_step_ms,
            self.min_interval_ms,
        )


DEFAULT_CONFIG = GameConfig()
