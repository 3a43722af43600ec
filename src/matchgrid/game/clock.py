"""Countdown clock ticking once per interval on an injected scheduler."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from matchgrid.game.interfaces import IClock, IScheduler, ScheduledCall

TickCallback = Callable[[int], None]  # remaining seconds
ExpiredCallback = Callable[[], None]


@dataclass
class ClockEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_tick: list[TickCallback] = field(default_factory=list)
    on_expired: list[ExpiredCallback] = field(default_factory=list)


class GameClock(IClock):
    """Whole-second countdown with pause/resume.

    Each tick schedules the next one, so there is never more than one tick
    pending.  Pausing keeps the unplayed part of the current interval and
    resuming waits only that long for the next tick, so time played before
    a pause is never lost.
    """

    __slots__ = (
        "_scheduler",
        "_interval_ms",
        "_remaining",
        "_running",
        "_expired",
        "_pending",
        "_due_ms",
        "_carry_ms",
        "events",
    )

    def __init__(self, scheduler: IScheduler, tick_interval_ms: int = 1000) -> None:
        self._scheduler = scheduler
        self._interval_ms = tick_interval_ms
        self._remaining = 0
        self._running = False
        self._expired = False
        self._pending: ScheduledCall | None = None
        self._due_ms = 0
        self._carry_ms = tick_interval_ms
        self.events = ClockEvents()

    # ── IClock implementation ────────────────────────────────────────────

    def start(self, initial_seconds: int) -> None:
        if initial_seconds < 0:
            raise ValueError("Initial time must be >= 0 seconds")
        self._cancel_pending()
        self._remaining = initial_seconds
        self._expired = False
        if initial_seconds == 0:
            self._expire()
            return
        self._running = True
        self._schedule_tick()

    def pause(self) -> None:
        if not self._running:
            return
        self._running = False
        self._carry_ms = max(0, self._due_ms - self._scheduler.now_ms)
        self._cancel_pending()

    def resume(self) -> None:
        if self._running or self._expired or self._remaining <= 0:
            return
        self._running = True
        self._schedule_tick(self._carry_ms)

    def cancel(self) -> None:
        self._running = False
        self._cancel_pending()

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._running

    # ── Extra helpers ────────────────────────────────────────────────────

    @property
    def is_expired(self) -> bool:
        return self._expired

    @property
    def tick_interval_ms(self) -> int:
        return self._interval_ms

    # ── Internal ─────────────────────────────────────────────────────────

    def _schedule_tick(self, delay_ms: int | None = None) -> None:
        if delay_ms is None:
            delay_ms = self._interval_ms
        self._due_ms = self._scheduler.now_ms + delay_ms
        self._pending = self._scheduler.call_later(delay_ms, self._tick)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _tick(self) -> None:
        self._pending = None
        if not self._running:
            return
        self._due_ms = self._scheduler.now_ms + self._interval_ms
        self._remaining -= 1
        for cb in self.events.on_tick:
            cb(self._remaining)
        # A tick handler may have paused or cancelled us.
        if not self._running:
            return
        if self._remaining <= 0:
            self._expire()
        elif self._pending is None:
            self._schedule_tick()

    def _expire(self) -> None:
        self._running = False
        self._expired = True
        self._cancel_pending()
        for cb in self.events.on_expired:
            cb()
