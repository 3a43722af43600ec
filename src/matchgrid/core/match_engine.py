"""MatchEngine — flip sequencing, pair evaluation and mismatch recovery.

The engine owns the card set and the current selection.  It never decides
that a game is won; it only reports that every card has been matched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from matchgrid.core.card import Card, build_cards
from matchgrid.core.enums import CardStatus

if TYPE_CHECKING:
    from matchgrid.game.interfaces import IScheduler, ScheduledCall

_LOGGER = logging.getLogger(__name__)

DEFAULT_MISMATCH_DELAY_MS = 600

# ── Event definitions ────────────────────────────────────────────────────────

RevealedCallback = Callable[[int, int], None]  # card_id, value
PairCallback = Callable[[int, int], None]  # first_id, second_id
AllMatchedCallback = Callable[[], None]


@dataclass
class EngineEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_revealed: list[RevealedCallback] = field(default_factory=list)
    on_matched: list[PairCallback] = field(default_factory=list)
    on_mismatch: list[PairCallback] = field(default_factory=list)
    on_reverted: list[PairCallback] = field(default_factory=list)
    on_all_matched: list[AllMatchedCallback] = field(default_factory=list)


# ── Engine ───────────────────────────────────────────────────────────────────


class MatchEngine:
    """Holds the cards of one deal and applies the flip rules.

    At most two cards are face up and unresolved at any time.  While a
    mismatched pair waits for recovery the selection stays full, so every
    further flip is rejected until the pair turns back over.

    Args:
        scheduler: Used to defer mismatch recovery.
        mismatch_delay_ms: How long a mismatched pair stays face up.
    """

    __slots__ = (
        "_scheduler",
        "_delay_ms",
        "_cards",
        "_selection",
        "_matched_count",
        "_recovery",
        "events",
    )

    def __init__(
        self,
        scheduler: IScheduler,
        mismatch_delay_ms: int = DEFAULT_MISMATCH_DELAY_MS,
    ) -> None:
        self._scheduler = scheduler
        self._delay_ms = mismatch_delay_ms
        self._cards: list[Card] = []
        self._selection: list[int] = []
        self._matched_count = 0
        self._recovery: ScheduledCall | None = None
        self.events = EngineEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    @property
    def selection(self) -> tuple[int, ...]:
        return tuple(self._selection)

    @property
    def matched_count(self) -> int:
        return self._matched_count

    @property
    def size(self) -> int:
        return len(self._cards)

    @property
    def is_complete(self) -> bool:
        return bool(self._cards) and self._matched_count == len(self._cards)

    @property
    def has_pending_recovery(self) -> bool:
        return self._recovery is not None

    @property
    def mismatch_delay_ms(self) -> int:
        return self._delay_ms

    def card(self, card_id: int) -> Card | None:
        if not self._has_card(card_id):
            return None
        return self._cards[card_id - 1]

    def unmatched(self) -> list[Card]:
        """Cards not yet matched, in identity order."""
        return [c for c in self._cards if not c.is_matched]

    # ── Lifecycle ────────────────────────────────────────────────────────

    def load(self, deck: Sequence[int]) -> None:
        """Replace the card set with a fresh, face-down deal of *deck*."""
        self._cancel_recovery()
        self._cards = list(build_cards(deck))
        self._selection.clear()
        self._matched_count = 0
        _LOGGER.debug("Loaded deck of %d cards", len(self._cards))

    def reset(self) -> None:
        """Turn every card face down and forget all progress."""
        self._cancel_recovery()
        self._cards = [c.with_status(CardStatus.HIDDEN) for c in self._cards]
        self._selection.clear()
        self._matched_count = 0

    def clear(self) -> None:
        """Drop the deck entirely."""
        self._cancel_recovery()
        self._cards = []
        self._selection.clear()
        self._matched_count = 0

    # ── Flip ─────────────────────────────────────────────────────────────

    def request_flip(self, card_id: int) -> bool:
        """Turn *card_id* face up if the rules allow it.

        Returns False, without raising or emitting anything, for unknown
        ids, cards already face up or matched, and any flip while two
        cards are awaiting resolution.
        """
        if not self._has_card(card_id):
            return False
        if len(self._selection) >= 2 or card_id in self._selection:
            return False
        card = self._cards[card_id - 1]
        if not card.is_hidden:
            return False

        self._set_status(card_id, CardStatus.REVEALED)
        self._selection.append(card_id)
        for cb in self.events.on_revealed:
            cb(card_id, card.value)

        if len(self._selection) == 2:
            self._evaluate_pair()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _has_card(self, card_id: object) -> bool:
        if isinstance(card_id, bool) or not isinstance(card_id, int):
            return False
        return 1 <= card_id <= len(self._cards)

    def _set_status(self, card_id: int, status: CardStatus) -> None:
        self._cards[card_id - 1] = self._cards[card_id - 1].with_status(status)

    def _evaluate_pair(self) -> None:
        first, second = self._selection
        if first == second:
            return

        if self._cards[first - 1].value == self._cards[second - 1].value:
            self._set_status(first, CardStatus.MATCHED)
            self._set_status(second, CardStatus.MATCHED)
            self._matched_count += 2
            self._selection.clear()
            for cb in self.events.on_matched:
                cb(first, second)
            if self._matched_count == len(self._cards):
                for cb in self.events.on_all_matched:
                    cb()
            return

        self._recovery = self._scheduler.call_later(
            self._delay_ms, lambda: self._recover(first, second)
        )
        for cb in self.events.on_mismatch:
            cb(first, second)

    def _recover(self, first: int, second: int) -> None:
        self._recovery = None
        for card_id in (first, second):
            if self._cards[card_id - 1].is_revealed:
                self._set_status(card_id, CardStatus.HIDDEN)
        self._selection = [i for i in self._selection if i not in (first, second)]
        _LOGGER.debug("Reverted mismatched pair %d/%d", first, second)
        for cb in self.events.on_reverted:
            cb(first, second)

    def _cancel_recovery(self) -> None:
        if self._recovery is not None:
            self._recovery.cancel()
            self._recovery = None
