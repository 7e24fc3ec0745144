"""
Box List
========

Fixed-size, ordered collection of boxes with seeded shuffling and the
unopened-average statistic the banker's offer is based on.
"""

from __future__ import annotations

import logging
import random
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from deal_game.deal_core.box import Box
from deal_game.deal_core.errors import IndexOutOfRangeError

logger = logging.getLogger(__name__)


class BoxList:
    """
    Ordered list of boxes.

    The number of boxes is fixed at construction. Boxes are only reordered
    by shuffling, which is expected to happen before any box is opened.
    """

    def __init__(
        self,
        values: Sequence[float],
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize box list.

        Args:
            values: Monetary amounts; box i gets values[i].
            rng: Random generator used for shuffling. Created from seed if None.
            seed: Random seed for reproducibility. Random if None.

        Raises:
            InvalidValueError: If any value is negative.
        """
        self._boxes: List[Box] = [Box(value) for value in values]
        self._rng = rng if rng is not None else random.Random(seed)

    def __len__(self) -> int:
        return len(self._boxes)

    def __iter__(self) -> Iterator[Box]:
        return iter(self._boxes)

    def _box(self, index: int) -> Box:
        """Get box at index, without Python's negative index wrapping."""
        if not isinstance(index, (int, np.integer)) or isinstance(index, bool):
            raise IndexOutOfRangeError(f"Box index must be an integer, got {index!r}")
        if 0 <= index < len(self._boxes):
            return self._boxes[index]
        raise IndexOutOfRangeError(f"Box index {index} out of range [0, {len(self._boxes)})")

    def get_value(self, index: int) -> float:
        """Get the value in the box at index."""
        return self._box(index).value

    def is_open(self, index: int) -> bool:
        """Check whether the box at index has been opened."""
        return self._box(index).is_open

    def open(self, index: int) -> None:
        """Open the box at index."""
        self._box(index).open()

    def values(self) -> Tuple[float, ...]:
        """All box values in current order."""
        return tuple(box.value for box in self._boxes)

    def unopened_indices(self) -> List[int]:
        """Indices of boxes that are still closed."""
        return [i for i, box in enumerate(self._boxes) if not box.is_open]

    def unopened_values(self) -> List[float]:
        """Values of boxes that are still closed, in board order."""
        return [box.value for box in self._boxes if not box.is_open]

    @property
    def opened_count(self) -> int:
        """Number of boxes opened so far."""
        return sum(1 for box in self._boxes if box.is_open)

    def average_value_of_unopened_boxes(self) -> float:
        """
        Mean value of the boxes that have not been opened.

        Returns:
            The average, or 0.0 when every box is open.
        """
        remaining = self.unopened_values()
        if not remaining:
            return 0.0
        return float(np.mean(remaining))

    def shuffle(self, number_of_swaps: int) -> None:
        """
        Reorder boxes by repeated random pair swaps.

        Each swap picks a random index, then a second random index
        (resampled until it differs from the first) and exchanges the two
        boxes. This is not an unbiased permutation for small swap counts;
        it is kept to reproduce historical game traces. Use
        shuffle_uniform() otherwise.

        Args:
            number_of_swaps: Exact number of swaps to perform.

        Raises:
            ValueError: If number_of_swaps is negative.
        """
        if number_of_swaps < 0:
            raise ValueError(f"number_of_swaps must be non-negative, got {number_of_swaps}")

        num_boxes = len(self._boxes)
        if num_boxes < 2:
            # No distinct pair to swap
            return

        for _ in range(number_of_swaps):
            first = self._rng.randrange(num_boxes)
            second = first
            while second == first:
                second = self._rng.randrange(num_boxes)
            self._boxes[first], self._boxes[second] = self._boxes[second], self._boxes[first]

        logger.debug("Shuffled %d boxes with %d swaps", num_boxes, number_of_swaps)

    def shuffle_uniform(self) -> None:
        """Reorder boxes with an unbiased random permutation."""
        self._rng.shuffle(self._boxes)
        logger.debug("Shuffled %d boxes uniformly", len(self._boxes))

    def __str__(self) -> str:
        return "".join(f"{box}\n" for box in self._boxes)

    def __repr__(self) -> str:
        return f"BoxList(size={len(self._boxes)}, opened={self.opened_count})"
