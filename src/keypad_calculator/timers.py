"""
Single-threaded queue of deferred one-shot callbacks.

The engine schedules its error auto-clear here; whoever owns the event loop
(the web adapter, the CLI) pumps ``run_due()`` between events.
"""

import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple


class TimerHandle:
    """Cancelable reference to a scheduled callback."""

    def __init__(self, deadline: float, callback: Callable[[], None]):
        self.deadline = deadline
        self._callback: Optional[Callable[[], None]] = callback

    @property
    def cancelled(self) -> bool:
        return self._callback is None

    def cancel(self) -> None:
        self._callback = None

    def _fire(self) -> bool:
        callback, self._callback = self._callback, None
        if callback is None:
            return False
        callback()
        return True


class TimerQueue:
    """
    Deadline-ordered one-shot timers driven by an injectable clock.

    Args:
        clock: Zero-argument callable returning the current time in seconds
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._heap: List[Tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """
        Schedule ``callback`` to fire once ``delay`` seconds from now.

        Returns:
            Handle whose ``cancel()`` drops the callback
        """
        handle = TimerHandle(self.clock() + delay, callback)
        heapq.heappush(self._heap, (handle.deadline, next(self._counter), handle))
        return handle

    def run_due(self) -> int:
        """
        Fire every live timer whose deadline has passed.

        Returns:
            Number of callbacks invoked
        """
        now = self.clock()
        fired = 0
        while self._heap and self._heap[0][0] <= now:
            _, _, handle = heapq.heappop(self._heap)
            if handle._fire():
                fired += 1
        return fired

    def pending(self) -> int:
        return sum(1 for _, _, handle in self._heap if not handle.cancelled)
