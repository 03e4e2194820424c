"""Cooperative virtual clock.

The game has several repeating actions on independent cadences (the
1-second countdown, the level-dependent block shuffle). Rather than hidden
timers with closures, each one is an explicit :class:`ScheduledTask`
handle owned by whoever armed it. Re-arming is always *cancel, then
schedule again*, which guarantees a level change never leaves two block
ticks pending.

Time only moves when :meth:`Clock.advance` is called, so the whole
simulation is deterministic under test. A real-time front end simply
calls ``advance`` with the elapsed wall-clock milliseconds each frame.
Callbacks run one at a time, in due-time order (ties in scheduling
order), and each runs to completion before the next starts.
"""

import heapq
import itertools
from typing import Callable, List, Tuple

TaskCallback = Callable[[], None]


class ScheduledTask:
    """Handle for a repeating callback registered on a :class:`Clock`."""

    period: int
    callback: TaskCallback
    due: int
    cancelled: bool

    def __init__(self, period: int, callback: TaskCallback, due: int):
        self.period = period
        self.callback = callback
        self.due = due
        self.cancelled = False

    def cancel(self) -> None:
        """Stop future firings. Safe to call more than once."""
        self.cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else f"due={self.due}"
        return f"ScheduledTask(period={self.period}, {state})"


class Clock:
    """Virtual millisecond clock with repeating tasks."""

    now: int

    def __init__(self, start: int = 0):
        self.now = start
        self._queue: List[Tuple[int, int, ScheduledTask]] = []
        self._sequence = itertools.count()

    def schedule_interval(self, period: int, callback: TaskCallback) -> ScheduledTask:
        """Run ``callback`` every ``period`` ms, first at ``now + period``.

        Raises:
            ValueError: If ``period`` is not positive.
        """
        if period <= 0:
            raise ValueError(f"Interval period must be positive, got {period}")
        task = ScheduledTask(period, callback, self.now + period)
        self._push(task)
        return task

    def _push(self, task: ScheduledTask) -> None:
        heapq.heappush(self._queue, (task.due, next(self._sequence), task))

    def pending(self) -> List[ScheduledTask]:
        """Live tasks in firing order."""
        return [task for _, _, task in sorted(self._queue) if not task.cancelled]

    def advance(self, ms: int) -> int:
        """Move time forward by ``ms``, firing every task that falls due.

        Tasks scheduled by a callback are honored within the same call if
        they fall due before the end of the window.

        Returns:
            int: Number of callbacks fired.

        Raises:
            ValueError: If ``ms`` is negative.
        """
        if ms < 0:
            raise ValueError(f"Cannot advance clock backwards by {ms} ms")
        end = self.now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= end:
            due, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self.now = due
            task.callback()
            fired += 1
            if not task.cancelled:
                task.due = due + task.period
                self._push(task)
        self.now = end
        return fired
