"""
Deterministic manual timer.

Stands in for an external timer facility (setTimeout, loop.call_later).
Time only moves when advance() is called, so delayed dispatches are
reproducible in tests and in the CLI.

The container core never references this module; procedure commands
capture a timer in their closure.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimerHandle:
    """
    Handle for a scheduled callback.

    Fields:
        due: Timestamp at which the callback fires
        seq: Scheduling order (tie breaker for equal due times)
    """
    due: int
    seq: int


@dataclass
class ManualTimer:
    """
    Single-threaded scheduler driven by an integer clock.

    In production: wire a real event loop instead.
    In tests: call advance() to fire due callbacks.

    Callbacks fire in (due time, scheduling order). A callback may schedule
    further callbacks; those fire in the same advance() if they fall due.
    """
    current: int = 0
    _queue: List[Tuple[int, int, Callable[[], Any]]] = field(default_factory=list, repr=False)
    _cancelled: set = field(default_factory=set, repr=False)
    _counter: Any = field(default_factory=itertools.count, repr=False)

    def now(self) -> int:
        """Get current timestamp without advancing."""
        return self.current

    @property
    def pending(self) -> int:
        return sum(1 for due, seq, _ in self._queue if seq not in self._cancelled)

    def call_later(self, delay: int, callback: Callable[[], Any]) -> TimerHandle:
        """
        Schedule callback to run delay ticks from now.

        Args:
            delay: Non-negative number of ticks
            callback: Zero-argument callable

        Returns:
            TimerHandle usable with cancel()
        """
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        handle = TimerHandle(due=self.current + delay, seq=next(self._counter))
        heapq.heappush(self._queue, (handle.due, handle.seq, callback))
        logger.debug("Scheduled callback seq=%d due=%d", handle.seq, handle.due)
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        self._cancelled.add(handle.seq)

    def advance(self, step: int = 1) -> int:
        """
        Advance clock by step and fire every callback that falls due.

        Args:
            step: Non-negative number of ticks

        Returns:
            Number of callbacks fired
        """
        if step < 0:
            raise ValueError(f"step must be >= 0, got {step}")
        target = self.current + step
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, seq, callback = heapq.heappop(self._queue)
            if seq in self._cancelled:
                self._cancelled.discard(seq)
                continue
            self.current = due
            callback()
            fired += 1
        self.current = target
        return fired
