# CribbageErrors.py
"""Exceptions raised by the cribbage scorer, pegging engine and game loop."""


class CribbageError(Exception):
    """Base class for every cribbage error."""


class InvalidHandError(CribbageError, ValueError):
    """Scorer called with a malformed hand (wrong size, rank outside 0..12)."""


class InvalidCardError(CribbageError, ValueError):
    """Card name that does not read as '<Rank> of <Suit>', or a rank with no counting slot."""


class ControllerError(CribbageError):
    """A controller picked an index outside the offered cards, or nothing at all."""


class GameStateError(CribbageError):
    """Game loop invariant broken: empty deck while dealing, stuck turns or rounds."""
