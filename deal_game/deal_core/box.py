"""
Box
===

A single sealed box holding one monetary value.
"""

from __future__ import annotations

import math

from deal_game.deal_core.errors import InvalidValueError


class Box:
    """
    Sealed box with a fixed value and an open flag.

    Opening is one-way: once open, a box stays open.
    """

    def __init__(self, value: float):
        """
        Initialize a closed box.

        Args:
            value: Monetary amount in the box. Must be non-negative.

        Raises:
            InvalidValueError: If value is negative or not a finite number.
        """
        try:
            value = float(value)
        except (TypeError, ValueError) as e:
            raise InvalidValueError(f"Box value must be a number, got {value!r}") from e

        if not math.isfinite(value) or value < 0:
            raise InvalidValueError(f"Box value must be non-negative, got {value}")

        self._value = value
        self._is_open = False

    @property
    def value(self) -> float:
        """Monetary amount in the box (readable whether open or not)."""
        return self._value

    def get_value(self) -> float:
        """Get the monetary amount in the box."""
        return self._value

    @property
    def is_open(self) -> bool:
        """True once the box has been opened."""
        return self._is_open

    def open(self) -> None:
        """Open the box. Opening an open box does nothing."""
        self._is_open = True

    def __str__(self) -> str:
        return f"Open: {self._is_open} Value: {self._value}"

    def __repr__(self) -> str:
        return f"Box(value={self._value}, is_open={self._is_open})"
