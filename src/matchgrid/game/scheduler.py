"""Deterministic virtual-time scheduler.

Nothing runs until :meth:`VirtualScheduler.advance` moves the virtual clock,
which makes timer-driven game rules testable without wall-clock waits.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable

from matchgrid.game.interfaces import IScheduler, ScheduledCall


class VirtualCall(ScheduledCall):
    """Pending callback inside a :class:`VirtualScheduler`."""

    __slots__ = ("due_ms", "_callback", "_cancelled", "_done")

    def __init__(self, due_ms: int, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self._callback = callback
        self._cancelled = False
        self._done = False

    def cancel(self) -> None:
        if not self._done:
            self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    def _run(self) -> None:
        self._done = True
        self._callback()


class VirtualScheduler(IScheduler):
    """Scheduler driven by explicit calls to :meth:`advance`.

    Callbacks due at the same instant run in the order they were scheduled.
    """

    __slots__ = ("_now_ms", "_queue", "_seq")

    def __init__(self) -> None:
        self._now_ms = 0
        self._queue: list[tuple[int, int, VirtualCall]] = []
        self._seq = itertools.count()

    # ── IScheduler implementation ────────────────────────────────────────

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> VirtualCall:
        if delay_ms < 0:
            raise ValueError("Delay must be >= 0 ms")
        call = VirtualCall(self._now_ms + delay_ms, callback)
        heapq.heappush(self._queue, (call.due_ms, next(self._seq), call))
        return call

    # ── Virtual time ─────────────────────────────────────────────────────

    @property
    def now_ms(self) -> int:
        return self._now_ms

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to run."""
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def advance(self, ms: int) -> int:
        """Move virtual time forward by *ms*, running every callback due.

        Callbacks scheduled by other callbacks run too if they fall inside
        the window.  Returns the number of callbacks executed.
        """
        if ms < 0:
            raise ValueError("Cannot move virtual time backwards")
        target = self._now_ms + ms
        executed = 0
        while self._queue and self._queue[0][0] <= target:
            due_ms, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now_ms = due_ms
            call._run()
            executed += 1
        self._now_ms = target
        return executed

    def run_pending(self) -> int:
        """Run callbacks already due at the current instant."""
        return self.advance(0)
