"""
Tests for the box list: queries, averages and shuffling.
"""

import random
from collections import Counter

import pytest

from deal_game.deal_core.box_list import BoxList
from deal_game.deal_core.config_loader import load_config
from deal_game.deal_core.errors import IndexOutOfRangeError, InvalidValueError


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def values(config):
    return list(config.boxes.values)


@pytest.fixture
def boxes(values):
    return BoxList(values, seed=42)


class TestBoxListQueries:
    """Test per-index access."""

    def test_values_in_given_order(self, boxes, values):
        """Box i holds values[i] before any shuffle."""
        for i, value in enumerate(values):
            assert boxes.get_value(i) == value
        assert boxes.values() == tuple(values)

    def test_size_fixed(self, boxes, values):
        """Size equals the number of values."""
        assert len(boxes) == len(values)

    def test_open_is_monotonic(self, boxes):
        """An opened box stays open through later operations."""
        boxes.open(3)
        assert boxes.is_open(3)

        boxes.open(4)
        boxes.open(3)
        boxes.average_value_of_unopened_boxes()

        assert boxes.is_open(3)
        assert boxes.opened_count == 2

    @pytest.mark.parametrize("index", [-1, 26, 100])
    def test_index_out_of_range(self, boxes, index):
        """Indices outside 0..N-1 are rejected, negatives included."""
        with pytest.raises(IndexOutOfRangeError):
            boxes.get_value(index)
        with pytest.raises(IndexOutOfRangeError):
            boxes.is_open(index)
        with pytest.raises(IndexOutOfRangeError):
            boxes.open(index)

    def test_index_out_of_range_is_index_error(self, boxes):
        """IndexOutOfRangeError can be caught as IndexError."""
        with pytest.raises(IndexError):
            boxes.get_value(26)

    def test_negative_value_rejected(self):
        """A negative amount fails construction."""
        with pytest.raises(InvalidValueError):
            BoxList([1.0, -2.0, 3.0])

    def test_unopened_indices(self):
        """Closed boxes are listed in board order."""
        boxes = BoxList([1, 2, 3, 4])
        boxes.open(1)

        assert boxes.unopened_indices() == [0, 2, 3]
        assert boxes.unopened_values() == [1.0, 3.0, 4.0]

    def test_str_one_line_per_box(self):
        """Text form has one line per box."""
        boxes = BoxList([1, 2])
        boxes.open(0)

        assert str(boxes) == "Open: True Value: 1.0\nOpen: False Value: 2.0\n"


class TestAverage:
    """Test average of unopened boxes."""

    @pytest.mark.parametrize("values", [[5.0], [1, 2, 3, 4], [0.01, 1000000], [7] * 10])
    def test_average_before_opening(self, values):
        """Nothing opened: average equals the mean of all values."""
        boxes = BoxList(values)
        assert boxes.average_value_of_unopened_boxes() == pytest.approx(sum(values) / len(values))

    def test_reference_average(self, boxes):
        """Reference board averages 131,477.54."""
        assert boxes.average_value_of_unopened_boxes() == pytest.approx(131477.5388, abs=0.01)

    def test_average_excludes_opened(self):
        """Opened boxes drop out of the average."""
        boxes = BoxList([10, 20, 30, 40])
        boxes.open(3)

        assert boxes.average_value_of_unopened_boxes() == pytest.approx(20.0)

    def test_average_zero_when_all_open(self, boxes):
        """Every box open gives 0, not a division error."""
        for i in range(len(boxes)):
            boxes.open(i)

        assert boxes.average_value_of_unopened_boxes() == 0.0

    def test_average_is_plain_float(self, boxes):
        """Average is returned as a Python float."""
        assert type(boxes.average_value_of_unopened_boxes()) is float


class TestShuffle:
    """Test both shuffle methods."""

    @pytest.mark.parametrize("swaps", [0, 1, 2, 25, 500])
    def test_swaps_preserve_values(self, values, swaps):
        """Swap shuffle keeps the same multiset and size."""
        boxes = BoxList(values, seed=7)
        boxes.shuffle(swaps)

        assert len(boxes) == len(values)
        assert Counter(boxes.values()) == Counter(values)

    def test_zero_swaps_is_identity(self, boxes, values):
        """No swaps leaves the order untouched."""
        boxes.shuffle(0)
        assert boxes.values() == tuple(values)

    def test_single_swap_moves_exactly_two(self, boxes, values):
        """One swap exchanges two distinct positions."""
        boxes.shuffle(1)

        moved = [i for i, v in enumerate(boxes.values()) if v != values[i]]
        assert len(moved) == 2

    def test_swaps_deterministic_with_seed(self, values):
        """Same seed gives the same arrangement."""
        b1 = BoxList(values, seed=123)
        b2 = BoxList(values, seed=123)
        b1.shuffle(500)
        b2.shuffle(500)

        assert b1.values() == b2.values()

    def test_swaps_use_injected_rng(self, values):
        """A supplied generator is used instead of a fresh one."""
        b1 = BoxList(values, rng=random.Random(99))
        b2 = BoxList(values, rng=random.Random(99))
        b1.shuffle(10)
        b2.shuffle(10)

        assert b1.values() == b2.values()

    def test_negative_swaps_rejected(self, boxes):
        """A negative swap count is an error."""
        with pytest.raises(ValueError):
            boxes.shuffle(-1)

    def test_single_box_swap_is_noop(self):
        """No distinct pair exists with one box."""
        boxes = BoxList([42.0])
        boxes.shuffle(10)

        assert boxes.values() == (42.0,)

    def test_shuffle_moves_opened_state_with_box(self):
        """Open flags travel with their boxes."""
        boxes = BoxList([1, 2, 3, 4, 5], seed=3)
        boxes.open(0)
        boxes.shuffle(20)

        opened = [boxes.get_value(i) for i in range(len(boxes)) if boxes.is_open(i)]
        assert opened == [1.0]

    def test_uniform_preserves_values(self, values):
        """Uniform shuffle keeps the same multiset and size."""
        boxes = BoxList(values, seed=5)
        boxes.shuffle_uniform()

        assert len(boxes) == len(values)
        assert Counter(boxes.values()) == Counter(values)

    def test_uniform_deterministic_with_seed(self, values):
        """Same seed gives the same permutation."""
        b1 = BoxList(values, seed=11)
        b2 = BoxList(values, seed=11)
        b1.shuffle_uniform()
        b2.shuffle_uniform()

        assert b1.values() == b2.values()

    def test_uniform_spreads_first_position(self):
        """Every value reaches position 0 over many shuffles."""
        values = [1, 2, 3, 4]
        counts = Counter()
        rng = random.Random(2024)
        for _ in range(2000):
            boxes = BoxList(values, rng=rng)
            boxes.shuffle_uniform()
            counts[boxes.get_value(0)] += 1

        for value in values:
            # Expected 500 each
            assert 400 < counts[float(value)] < 600
