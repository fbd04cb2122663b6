"""
Cooperative frame/timer primitive for the headless scene substrate.

The scheduler owns a millisecond clock that only moves when the host advances it.
Nothing here blocks or sleeps: a host event loop (or a test) calls advance() and
due callbacks run synchronously, in due-time order, ties broken by registration order.

Examples:
    >>> fired = []
    >>> s = FrameScheduler()
    >>> h = s.call_later(100, lambda: fired.append("a"))
    >>> _ = s.call_later(50, lambda: fired.append("b"))
    >>> s.advance(100)
    >>> fired
    ['b', 'a']
"""

from __future__ import annotations

import heapq
import itertools
import logging
from collections.abc import Callable

__all__ = [
    "FrameScheduler",
    "TimerHandle",
]

logger = logging.getLogger(__name__)


class TimerHandle:
    """Handle for one scheduled callback; cancel() is idempotent."""

    __slots__ = ("due", "_callback", "_cancelled", "_fired")

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self._callback = callback
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        self._cancelled = True

    def _run(self) -> None:
        self._fired = True
        self._callback()

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else ("fired" if self._fired else "pending")
        return f"TimerHandle(due={self.due:.1f}, {state})"


class FrameScheduler:
    """Manually advanced clock with cancellable timers.

    Args:
        start_ms (float): Initial clock value.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._queue: list[tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule callback to run once the clock reaches now + delay_ms."""
        handle = TimerHandle(self._now + max(0.0, float(delay_ms)), callback)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    def pending(self) -> int:
        """Number of scheduled, not cancelled, not yet fired callbacks."""
        return sum(1 for _, _, h in self._queue if h.active)

    def advance(self, ms: float) -> None:
        """Move the clock forward by ms, firing every callback that falls due.

        Callbacks scheduled while advancing are honoured if they fall inside the window.
        The clock reads each callback's due time while it runs.
        """
        target = self._now + max(0.0, float(ms))
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._now = max(self._now, due)
            handle._run()
        self._now = target

    def flush(self, limit: int = 10_000) -> None:
        """Advance until no active timers remain (settles every animation)."""
        for _ in range(limit):
            live = [h for _, _, h in self._queue if h.active]
            if not live:
                return
            self.advance(max(h.due for h in live) - self._now)
        logger.warning("FrameScheduler.flush stopped after %d rounds with timers pending", limit)
