"""Exception hierarchy for the cribbage engine."""

from __future__ import annotations


class CribbageError(RuntimeError):
    """Base class for rule violations raised by the engine."""


class InvalidSelection(CribbageError):
    """Raised when a discard selection is malformed or made in the wrong phase."""


class IllegalPlay(CribbageError):
    """Raised when a pegging play or go declaration breaks the rules."""


class OutOfSequence(CribbageError):
    """Raised when an action is attempted out of turn or in the wrong phase."""


class EmptyDeckViolation(CribbageError):
    """Raised when cards are requested from a deck that cannot supply them."""
