"""Core domain layer — cards, decks and the match rules.

Quick start::

    from matchgrid.core import DeckGenerator, MatchEngine

    engine = MatchEngine(scheduler)
    engine.load(DeckGenerator().generate(12))
    engine.request_flip(1)
"""

from matchgrid.core.card import Card, build_cards
from matchgrid.core.deck import DeckGenerator, pair_counts, validate_size
from matchgrid.core.enums import CardStatus
from matchgrid.core.errors import (
    InvalidSizeError,
    InvalidTransitionError,
    MatchGridError,
)
from matchgrid.core.match_engine import (
    DEFAULT_MISMATCH_DELAY_MS,
    EngineEvents,
    MatchEngine,
)

__all__ = [
    # Enums
    "CardStatus",
    # Errors
    "InvalidSizeError",
    "InvalidTransitionError",
    "MatchGridError",
    # Domain
    "Card",
    "DEFAULT_MISMATCH_DELAY_MS",
    "DeckGenerator",
    "EngineEvents",
    "MatchEngine",
    "build_cards",
    "pair_counts",
    "validate_size",
]
