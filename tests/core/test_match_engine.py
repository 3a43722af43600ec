"""Tests for MatchEngine — flip rules, matching and mismatch recovery."""

from __future__ import annotations

import pytest

from matchgrid.core.enums import CardStatus
from matchgrid.core.match_engine import MatchEngine
from matchgrid.game.scheduler import VirtualScheduler

# ids:       1  2  3  4  5  6
_DECK = [1, 2, 1, 3, 2, 3]


class _Recorder:
    """Collects every engine event as a tuple."""

    def __init__(self, engine: MatchEngine) -> None:
        self.log: list[tuple[object, ...]] = []
        ev = engine.events
        ev.on_revealed.append(lambda i, v: self.log.append(("revealed", i, v)))
        ev.on_matched.append(lambda a, b: self.log.append(("matched", a, b)))
        ev.on_mismatch.append(lambda a, b: self.log.append(("mismatch", a, b)))
        ev.on_reverted.append(lambda a, b: self.log.append(("reverted", a, b)))
        ev.on_all_matched.append(lambda: self.log.append(("all_matched",)))

    def of(self, kind: str) -> list[tuple[object, ...]]:
        return [e for e in self.log if e[0] == kind]


@pytest.fixture
def engine(scheduler: VirtualScheduler) -> MatchEngine:
    eng = MatchEngine(scheduler, mismatch_delay_ms=600)
    eng.load(_DECK)
    return eng


def _status(engine: MatchEngine, card_id: int) -> CardStatus:
    card = engine.card(card_id)
    assert card is not None
    return card.status


class TestLoad:
    def test_cards_hidden_after_load(self, engine: MatchEngine) -> None:
        assert engine.size == 6
        assert all(c.is_hidden for c in engine.cards)
        assert engine.selection == ()
        assert engine.matched_count == 0

    def test_card_lookup(self, engine: MatchEngine) -> None:
        card = engine.card(4)
        assert card is not None and card.value == 3
        assert engine.card(0) is None
        assert engine.card(7) is None


class TestRejectedFlips:
    def test_unknown_id(self, engine: MatchEngine) -> None:
        rec = _Recorder(engine)
        assert not engine.request_flip(0)
        assert not engine.request_flip(99)
        assert not engine.request_flip("1")  # type: ignore[arg-type]
        assert rec.log == []

    def test_no_deck_loaded(self, scheduler: VirtualScheduler) -> None:
        eng = MatchEngine(scheduler)
        assert not eng.request_flip(1)

    def test_same_card_twice(self, engine: MatchEngine) -> None:
        rec = _Recorder(engine)
        assert engine.request_flip(1)
        assert not engine.request_flip(1)
        assert rec.of("revealed") == [("revealed", 1, 1)]
        assert engine.selection == (1,)

    def test_matched_card(self, engine: MatchEngine) -> None:
        engine.request_flip(1)
        engine.request_flip(3)
        assert not engine.request_flip(1)
        assert not engine.request_flip(3)

    def test_third_flip_during_pending_mismatch(
        self, engine: MatchEngine, scheduler: VirtualScheduler
    ) -> None:
        rec = _Recorder(engine)
        engine.request_flip(1)
        engine.request_flip(2)
        assert not engine.request_flip(4)
        assert _status(engine, 4) == CardStatus.HIDDEN
        assert len(rec.of("revealed")) == 2
        assert len(engine.selection) == 2

        scheduler.advance(600)
        assert engine.request_flip(4)


class TestMatch:
    def test_match_marks_both(self, engine: MatchEngine) -> None:
        rec = _Recorder(engine)
        engine.request_flip(1)
        engine.request_flip(3)
        assert _status(engine, 1) == CardStatus.MATCHED
        assert _status(engine, 3) == CardStatus.MATCHED
        assert engine.matched_count == 2
        assert engine.selection == ()
        assert rec.log == [
            ("revealed", 1, 1),
            ("revealed", 3, 1),
            ("matched", 1, 3),
        ]

    def test_all_matched_fires_once_at_end(self, engine: MatchEngine) -> None:
        rec = _Recorder(engine)
        for a, b in ((1, 3), (2, 5)):
            engine.request_flip(a)
            engine.request_flip(b)
        assert rec.of("all_matched") == []
        engine.request_flip(4)
        engine.request_flip(6)
        assert rec.log[-2:] == [("matched", 4, 6), ("all_matched",)]
        assert engine.matched_count == 6
        assert engine.is_complete

    def test_unmatched_lists_remaining(self, engine: MatchEngine) -> None:
        engine.request_flip(1)
        engine.request_flip(3)
        assert [c.card_id for c in engine.unmatched()] == [2, 4, 5, 6]


class TestMismatch:
    def test_pair_stays_revealed_until_delay(
        self, engine: MatchEngine, scheduler: VirtualScheduler
    ) -> None:
        rec = _Recorder(engine)
        engine.request_flip(1)
        engine.request_flip(2)
        assert rec.of("mismatch") == [("mismatch", 1, 2)]
        assert engine.has_pending_recovery

        scheduler.advance(599)
        assert _status(engine, 1) == CardStatus.REVEALED
        assert _status(engine, 2) == CardStatus.REVEALED
        assert rec.of("reverted") == []

        scheduler.advance(1)
        assert _status(engine, 1) == CardStatus.HIDDEN
        assert _status(engine, 2) == CardStatus.HIDDEN
        assert engine.selection == ()
        assert rec.of("reverted") == [("reverted", 1, 2)]
        assert not engine.has_pending_recovery

    def test_recovery_fires_exactly_once(
        self, engine: MatchEngine, scheduler: VirtualScheduler
    ) -> None:
        rec = _Recorder(engine)
        engine.request_flip(1)
        engine.request_flip(2)
        scheduler.advance(5000)
        assert len(rec.of("reverted")) == 1
        assert engine.matched_count == 0

    def test_custom_delay(self, scheduler: VirtualScheduler) -> None:
        eng = MatchEngine(scheduler, mismatch_delay_ms=100)
        eng.load(_DECK)
        eng.request_flip(1)
        eng.request_flip(2)
        scheduler.advance(100)
        assert eng.selection == ()


class TestResetAndClear:
    def test_reset_cancels_recovery(
        self, engine: MatchEngine, scheduler: VirtualScheduler
    ) -> None:
        rec = _Recorder(engine)
        engine.request_flip(1)
        engine.request_flip(3)
        engine.request_flip(2)
        engine.request_flip(4)
        engine.reset()
        scheduler.advance(1000)
        assert rec.of("reverted") == []
        assert all(c.is_hidden for c in engine.cards)
        assert engine.matched_count == 0
        assert engine.selection == ()
        assert engine.size == 6

    def test_clear_drops_deck(self, engine: MatchEngine) -> None:
        engine.request_flip(1)
        engine.clear()
        assert engine.size == 0
        assert engine.cards == ()
        assert not engine.is_complete

    def test_load_cancels_recovery(
        self, engine: MatchEngine, scheduler: VirtualScheduler
    ) -> None:
        rec = _Recorder(engine)
        engine.request_flip(1)
        engine.request_flip(2)
        engine.load([1, 1])
        scheduler.advance(1000)
        assert rec.of("reverted") == []
        assert engine.size == 2
