"""GameController — the central orchestrator of a pairs game.

Coordinates: DeckGenerator, MatchEngine, GameClock.
Emits events via simple callbacks so the view / tests can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from matchgrid.core.card import Card
from matchgrid.core.deck import DeckGenerator
from matchgrid.core.errors import InvalidTransitionError
from matchgrid.core.match_engine import MatchEngine
from matchgrid.game.clock import GameClock
from matchgrid.game.interfaces import (
    GameConfig,
    GamePhase,
    IGameController,
    IScheduler,
)

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

RevealedCallback = Callable[[int, int], None]  # card_id, value
PairCallback = Callable[[int, int], None]  # first_id, second_id
TickCallback = Callable[[int], None]  # remaining seconds
PhaseCallback = Callable[[GamePhase, GamePhase], None]  # old, new
GameOverCallback = Callable[[], None]
CardsCallback = Callable[[tuple[Card, ...]], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event.

    ``on_unveiled`` fires right after ``on_lost`` with every unmatched card,
    including a mismatched pair still waiting to turn back over.  That
    pair's ``on_reverted`` still arrives later: recovery is only cancelled by
    ``reset``/``replay``/``start``, never by the game ending.  A view that
    shows unveiled cards should ignore ``on_reverted`` once the phase is
    LOST.
    """

    on_card_revealed: list[RevealedCallback] = field(default_factory=list)
    on_matched: list[PairCallback] = field(default_factory=list)
    on_mismatch_pending: list[PairCallback] = field(default_factory=list)
    on_reverted: list[PairCallback] = field(default_factory=list)
    on_tick: list[TickCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_won: list[GameOverCallback] = field(default_factory=list)
    on_lost: list[GameOverCallback] = field(default_factory=list)
    on_dealt: list[CardsCallback] = field(default_factory=list)
    on_unveiled: list[CardsCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full game: deals cards, runs the clock, forwards
    flips, decides win/loss and notifies listeners.

    Thread-safety: every intent and every scheduler callback must run on
    the same thread (the event-loop thread).  No locking is done.

    Args:
        scheduler: Drives both the clock and mismatch recovery.
        config: Grid size and timings.  Defaults to :meth:`GameConfig.classic`.
        rng: Randomness for shuffling.  Pass a seeded ``random.Random`` for
            reproducible deals.
    """

    __slots__ = (
        "_config",
        "_phase",
        "_deck_generator",
        "_engine",
        "_clock",
        "events",
    )

    def __init__(
        self,
        scheduler: IScheduler,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config if config is not None else GameConfig.classic()
        self._phase = GamePhase.IDLE
        self._deck_generator = DeckGenerator(rng)
        self._engine = MatchEngine(scheduler, self._config.mismatch_delay_ms)
        self._clock = GameClock(scheduler, self._config.tick_interval_ms)
        self.events = GameEvents()

        engine_events = self._engine.events
        engine_events.on_revealed.append(self._on_engine_revealed)
        engine_events.on_matched.append(self._on_engine_matched)
        engine_events.on_mismatch.append(self._on_engine_mismatch)
        engine_events.on_reverted.append(self._on_engine_reverted)
        engine_events.on_all_matched.append(self._on_all_matched)
        self._clock.events.on_tick.append(self._on_clock_tick)
        self._clock.events.on_expired.append(self._on_clock_expired)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def engine(self) -> MatchEngine:
        return self._engine

    @property
    def clock(self) -> GameClock:
        return self._clock

    @property
    def cards(self) -> tuple[Card, ...]:
        return self._engine.cards

    @property
    def remaining(self) -> int:
        return self._clock.remaining

    @property
    def matched_count(self) -> int:
        return self._engine.matched_count

    @property
    def is_over(self) -> bool:
        return self._phase.is_terminal

    # ── IGameController impl ─────────────────────────────────────────────

    def start(self) -> None:
        if self._phase not in (GamePhase.IDLE, GamePhase.WON, GamePhase.LOST):
            raise InvalidTransitionError("start", self._phase)
        self._deal_and_play()

    def flip(self, card_id: int) -> bool:
        if self._phase != GamePhase.PLAYING:
            return False
        return self._engine.request_flip(card_id)

    def pause(self) -> None:
        if self._phase == GamePhase.PLAYING:
            self._clock.pause()
            self._set_phase(GamePhase.PAUSED)
        elif self._phase == GamePhase.PAUSED:
            self._clock.resume()
            self._set_phase(GamePhase.PLAYING)

    def focus_lost(self) -> None:
        """Pause automatically when the player leaves the play area."""
        if self._phase != GamePhase.PLAYING:
            return
        self.pause()

    def replay(self) -> None:
        self._clock.cancel()
        self._deal_and_play()

    def reset(self) -> None:
        self._clock.cancel()
        self._engine.clear()
        if self._phase != GamePhase.IDLE:
            self._set_phase(GamePhase.IDLE)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _deal_and_play(self) -> None:
        deck = self._deck_generator.generate(self._config.size)
        self._engine.load(deck)
        _LOGGER.debug("Dealt %r", self._config)
        cards = self._engine.cards
        for cb in self.events.on_dealt:
            cb(cards)
        self._clock.start(self._config.time_limit_seconds)
        self._set_phase(GamePhase.PLAYING)

    def _set_phase(self, phase: GamePhase) -> None:
        old = self._phase
        self._phase = phase
        _LOGGER.debug("Phase %s -> %s", old.name, phase.name)
        for cb in self.events.on_phase_changed:
            cb(old, phase)

    def _on_engine_revealed(self, card_id: int, value: int) -> None:
        for cb in self.events.on_card_revealed:
            cb(card_id, value)

    def _on_engine_matched(self, first: int, second: int) -> None:
        for cb in self.events.on_matched:
            cb(first, second)

    def _on_engine_mismatch(self, first: int, second: int) -> None:
        for cb in self.events.on_mismatch_pending:
            cb(first, second)

    def _on_engine_reverted(self, first: int, second: int) -> None:
        for cb in self.events.on_reverted:
            cb(first, second)

    def _on_all_matched(self) -> None:
        if self._phase != GamePhase.PLAYING:
            return
        self._clock.cancel()
        self._set_phase(GamePhase.WON)
        for cb in self.events.on_won:
            cb()

    def _on_clock_tick(self, remaining: int) -> None:
        for cb in self.events.on_tick:
            cb(remaining)

    def _on_clock_expired(self) -> None:
        if self._phase != GamePhase.PLAYING:
            return
        self._set_phase(GamePhase.LOST)
        for cb in self.events.on_lost:
            cb()
        unveiled = tuple(self._engine.unmatched())
        for cb in self.events.on_unveiled:
            cb(unveiled)
