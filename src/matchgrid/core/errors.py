"""Exception types raised by matchgrid.

Rejected flips are not errors: they are reported as ``False`` and produce
no event.
"""

from __future__ import annotations

from typing import Any


class MatchGridError(Exception):
    """Base class for every matchgrid error."""


class InvalidSizeError(MatchGridError, ValueError):
    """Grid size is odd, smaller than two, or not an integer."""

    def __init__(self, size: object) -> None:
        super().__init__(f"Grid size must be an even integer >= 2, got {size!r}")
        self.size = size


class InvalidTransitionError(MatchGridError, RuntimeError):
    """An intent was issued in a phase that forbids it."""

    def __init__(self, intent: str, phase: Any) -> None:
        super().__init__(f"Cannot {intent}() while {phase.name}")
        self.intent = intent
        self.phase = phase
