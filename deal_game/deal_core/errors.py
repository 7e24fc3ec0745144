"""
Errors
======

Exceptions raised by the game engine and the high score store.

Each error also derives from the closest builtin exception so callers
can catch either the specific type or the builtin one.
"""

from __future__ import annotations


class DealGameError(Exception):
    """Base class for all game engine errors."""


class InvalidValueError(DealGameError, ValueError):
    """A box was created with a negative or non-numeric value."""


class IndexOutOfRangeError(DealGameError, IndexError):
    """A box index outside 0..N-1 was used."""


class ReselectionError(DealGameError, ValueError):
    """An already opened box, or the player's own box, was selected again."""


class NoBoxSelectedError(DealGameError, RuntimeError):
    """The player's box was queried before the player chose one."""


class RoundOverflowError(DealGameError, RuntimeError):
    """Play tried to go past the last round or past a round's quota."""


class RoundNotCompleteError(DealGameError, RuntimeError):
    """The next round was started before the current one was finished."""


class CorruptHighScoreDataError(DealGameError):
    """The persisted high score exists but does not hold a valid number."""


class WriteFailureError(DealGameError, OSError):
    """The high score could not be written."""
