"""Deck generation — paired card values in uniformly random order."""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Iterable

from matchgrid.core.errors import InvalidSizeError


def validate_size(size: object) -> int:
    """Return *size* if it is a usable grid size, else raise InvalidSizeError."""
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidSizeError(size)
    if size < 2 or size % 2:
        raise InvalidSizeError(size)
    return size


def pair_counts(deck: Iterable[int]) -> dict[int, int]:
    """Map each value in *deck* to the number of cards holding it."""
    return dict(Counter(deck))


class DeckGenerator:
    """Produces shuffled decks where every value appears exactly twice.

    Args:
        rng: Source of randomness.  Pass a seeded ``random.Random`` for
            reproducible decks.
    """

    __slots__ = ("_rng",)

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def generate(self, size: int) -> list[int]:
        """Return *size* values: 1..size/2, each twice, in uniform random order.

        ``random.shuffle`` is Fisher–Yates, so every arrangement is equally
        likely.
        """
        validate_size(size)
        deck = [value for value in range(1, size // 2 + 1) for _ in range(2)]
        self._rng.shuffle(deck)
        return deck
