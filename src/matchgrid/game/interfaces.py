"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the MatchEngine, GameClock and GameController
depend on these ABCs, never on a concrete timer or event loop.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import Any

from matchgrid.core.errors import InvalidSizeError

# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for one game."""

    IDLE = auto()
    PLAYING = auto()
    PAUSED = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.WON, GamePhase.LOST)


# ── Configuration ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable game configuration.

    Args:
        cols: Grid columns.
        rows: Grid rows.  ``cols * rows`` must be even and at least 2.
        time_limit_seconds: Countdown length.
        mismatch_delay_ms: How long a mismatched pair stays face up.
        tick_interval_ms: Length of one clock second.
    """

    cols: int
    rows: int
    time_limit_seconds: int
    mismatch_delay_ms: int = 600
    tick_interval_ms: int = 1000

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise InvalidSizeError(self.cols * self.rows)
        size = self.cols * self.rows
        if size < 2 or size % 2:
            raise InvalidSizeError(size)
        if self.time_limit_seconds < 1:
            raise ValueError("Time limit must be >= 1 second")
        if self.mismatch_delay_ms < 0:
            raise ValueError("Mismatch delay must be >= 0 ms")
        if self.tick_interval_ms < 1:
            raise ValueError("Tick interval must be >= 1 ms")

    @property
    def size(self) -> int:
        return self.cols * self.rows

    # Common presets
    @classmethod
    def classic(cls) -> GameConfig:
        return cls(cols=3, rows=4, time_limit_seconds=100)

    @classmethod
    def quick(cls) -> GameConfig:
        return cls(cols=3, rows=4, time_limit_seconds=10)

    @classmethod
    def tiny(cls) -> GameConfig:
        return cls(cols=2, rows=2, time_limit_seconds=10)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GameConfig:
        """Build a config from camelCase or snake_case keys.

        Presentation keys such as ``width``, ``height`` and ``theme`` are
        ignored.
        """

        def pick(*names: str, default: Any = None) -> Any:
            for name in names:
                if name in data:
                    return data[name]
            if default is None:
                raise KeyError(names[0])
            return default

        return cls(
            cols=int(pick("cols")),
            rows=int(pick("rows")),
            time_limit_seconds=int(
                pick("time_limit_seconds", "timeLimitSeconds", "timeLimit")
            ),
            mismatch_delay_ms=int(
                pick("mismatch_delay_ms", "mismatchDelayMs", default=600)
            ),
            tick_interval_ms=int(
                pick("tick_interval_ms", "tickIntervalMs", default=1000)
            ),
        )

    def __repr__(self) -> str:
        return (
            f"GameConfig({self.cols}x{self.rows}, {self.time_limit_seconds}s, "
            f"mismatch={self.mismatch_delay_ms}ms)"
        )


# ── Abstract interfaces ─────────────────────────────────────────────────────


class ScheduledCall(ABC):
    """Handle to a callback registered with an :class:`IScheduler`."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running.  Safe to call repeatedly."""

    @property
    @abstractmethod
    def cancelled(self) -> bool: ...

    @property
    @abstractmethod
    def done(self) -> bool:
        """True once the callback has run."""


class IScheduler(ABC):
    """Capability to run a callback once after a delay."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        """Run *callback* once, *delay_ms* milliseconds from now."""

    @property
    @abstractmethod
    def now_ms(self) -> int:
        """Milliseconds elapsed on this scheduler's clock."""


class IClock(ABC):
    """Interface for a countdown clock."""

    @abstractmethod
    def start(self, initial_seconds: int) -> None:
        """Begin counting down from *initial_seconds*."""

    @abstractmethod
    def pause(self) -> None:
        """Stop ticking, keeping the remaining time."""

    @abstractmethod
    def resume(self) -> None:
        """Continue ticking from the paused remaining time."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop ticking permanently."""

    @property
    @abstractmethod
    def remaining(self) -> int: ...

    @property
    @abstractmethod
    def is_running(self) -> bool: ...


class IGameController(ABC):
    """Interface for the game orchestrator (the intent API)."""

    @abstractmethod
    def start(self) -> None:
        """Deal a fresh deck and start the clock."""

    @abstractmethod
    def flip(self, card_id: int) -> bool:
        """Request that *card_id* be turned face up.  Returns True if it was."""

    @abstractmethod
    def pause(self) -> None:
        """Toggle between playing and paused."""

    @abstractmethod
    def replay(self) -> None:
        """Abandon the current game and start a new one."""

    @abstractmethod
    def reset(self) -> None:
        """Abandon the current game and return to idle."""
