"""Core enumerations for the card domain."""

from __future__ import annotations

from enum import IntEnum


class CardStatus(IntEnum):
    """Visibility of a single card."""

    HIDDEN = 0
    REVEALED = 1
    MATCHED = 2

    def __str__(self) -> str:
        return self.name.lower()
