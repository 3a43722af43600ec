"""Card value object and card-set construction."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from matchgrid.core.enums import CardStatus


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable snapshot of one grid cell.

    ``card_id`` is the 1-based position in the dealt deck and never changes
    for the lifetime of a deal.
    """

    card_id: int
    value: int
    status: CardStatus = CardStatus.HIDDEN

    @property
    def is_hidden(self) -> bool:
        return self.status == CardStatus.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.status == CardStatus.REVEALED

    @property
    def is_matched(self) -> bool:
        return self.status == CardStatus.MATCHED

    def with_status(self, status: CardStatus) -> Card:
        return replace(self, status=status)

    def __str__(self) -> str:
        shown = "?" if self.is_hidden else str(self.value)
        return f"#{self.card_id}:{shown}"


def build_cards(deck: Sequence[int]) -> tuple[Card, ...]:
    """Create face-down cards with identities 1..N in deck order."""
    return tuple(Card(index, value) for index, value in enumerate(deck, start=1))
