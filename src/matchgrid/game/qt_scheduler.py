"""Qt-backed scheduler running callbacks on the Qt event loop."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QElapsedTimer, QObject, QTimer

from matchgrid.game.interfaces import IScheduler, ScheduledCall

_LOGGER = logging.getLogger(__name__)


class QtCall(ScheduledCall):
    """Single-shot ``QTimer`` wrapped as a :class:`ScheduledCall`."""

    __slots__ = ("_timer", "_callback", "_cancelled", "_done")

    def __init__(
        self,
        delay_ms: int,
        callback: Callable[[], None],
        parent: QObject | None = None,
    ) -> None:
        self._callback = callback
        self._cancelled = False
        self._done = False

        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self._fire)
        self._timer.start()

    def cancel(self) -> None:
        if self._cancelled or self._done:
            return
        self._cancelled = True
        self._timer.stop()
        self._timer.deleteLater()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    @property
    def is_active(self) -> bool:
        return not (self._cancelled or self._done) and self._timer.isActive()

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._done = True
        self._timer.deleteLater()
        self._callback()


class QtScheduler(IScheduler):
    """Schedules callbacks with ``QTimer`` on the thread owning *parent*.

    A ``QApplication`` (or ``QCoreApplication``) event loop must be running
    for callbacks to fire.
    """

    __slots__ = ("_parent", "_elapsed")

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent
        self._elapsed = QElapsedTimer()
        self._elapsed.start()

    @property
    def now_ms(self) -> int:
        return self._elapsed.elapsed()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> QtCall:
        if delay_ms < 0:
            raise ValueError("Delay must be >= 0 ms")
        _LOGGER.debug("Scheduling Qt callback in %d ms", delay_ms)
        return QtCall(delay_ms, callback, self._parent)
