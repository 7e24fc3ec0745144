"""
Tests for a single box.
"""

import pytest

from deal_game.deal_core.box import Box
from deal_game.deal_core.errors import InvalidValueError


class TestBox:
    """Test box value and open state."""

    def test_new_box_is_closed(self):
        """A new box starts closed with its value."""
        box = Box(250.0)

        assert not box.is_open
        assert box.value == 250.0
        assert box.get_value() == 250.0

    def test_open_is_idempotent(self):
        """Opening twice leaves the box open without error."""
        box = Box(5)

        box.open()
        box.open()

        assert box.is_open

    def test_value_readable_after_open(self):
        """Value does not change when the box is opened."""
        box = Box(0.01)
        box.open()

        assert box.value == pytest.approx(0.01)

    def test_zero_value_allowed(self):
        """Zero is a valid amount."""
        assert Box(0).value == 0.0

    @pytest.mark.parametrize("value", [-1, -0.01, float("nan"), float("inf"), "lots"])
    def test_invalid_value_rejected(self, value):
        """Negative or non-numeric amounts are rejected."""
        with pytest.raises(InvalidValueError):
            Box(value)

    def test_invalid_value_is_value_error(self):
        """InvalidValueError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Box(-5)

    def test_str_shows_state_and_value(self):
        """Text form combines open state and value."""
        box = Box(1000)
        assert str(box) == "Open: False Value: 1000.0"

        box.open()
        assert str(box) == "Open: True Value: 1000.0"
