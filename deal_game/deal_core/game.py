"""
Core Game
=========

Game session orchestrating the boxes, the round schedule, the banker's
offer and the high score.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Any, Dict, Optional

from deal_game.deal_core.box_list import BoxList
from deal_game.deal_core.config_loader import GameConfig, get_config
from deal_game.deal_core.errors import (
    InvalidValueError,
    NoBoxSelectedError,
    ReselectionError,
    RoundNotCompleteError,
    RoundOverflowError,
)
from deal_game.deal_core.high_score import FileHighScoreStore, HighScoreStore

logger = logging.getLogger(__name__)


class DealGame:
    """
    One play-through of the game.

    The driver first calls select_box() to choose the player's box, then
    keeps calling select_box() to open other boxes. When is_end_of_round()
    turns true it can read current_offer and either stop (deal) or call
    start_next_round() (no deal).
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        testing: bool = False,
        seed: Optional[int] = None,
        high_score_store: Optional[HighScoreStore] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            testing: If True, boxes are left in configured order (no shuffle).
            seed: Random seed for the shuffle. Random if None.
            high_score_store: Where the high score is kept. Defaults to the
                file named in the config.

        Raises:
            CorruptHighScoreDataError: If the stored high score is invalid.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._store = high_score_store
        if self._store is None:
            self._store = FileHighScoreStore(config.high_score.path)

        self._boxes = BoxList(config.boxes.values, rng=random.Random(seed))

        # Only shuffle boxes around if not testing
        if not testing:
            if config.shuffle.method == "swaps":
                self._boxes.shuffle(config.shuffle.swaps)
            else:
                self._boxes.shuffle_uniform()

        # First round, nothing opened
        self._round: int = 1
        self._boxes_opened_this_round: int = 0
        self._boxes_opened_total: int = 0
        self._player_box_index: Optional[int] = None

        previous = self._store.load_previous_high_score()
        self._high_score: float = 0.0 if previous is None else float(previous)

        logger.debug(
            f"New game: {len(self._boxes)} boxes, {config.num_rounds} rounds, "
            f"high score {self._high_score}"
        )

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def boxes(self) -> BoxList:
        """The boxes on the board."""
        return self._boxes

    @property
    def num_boxes(self) -> int:
        """Number of boxes on the board."""
        return len(self._boxes)

    @property
    def num_rounds(self) -> int:
        """Number of rounds in a full game."""
        return self._config.num_rounds

    @property
    def round(self) -> int:
        """Current round, starting at 1."""
        return self._round

    @property
    def boxes_opened_this_round(self) -> int:
        """Boxes opened since the current round started."""
        return self._boxes_opened_this_round

    @property
    def boxes_opened_total(self) -> int:
        """Boxes opened in the whole game."""
        return self._boxes_opened_total

    @property
    def has_player_chosen_box(self) -> bool:
        """True once the player has picked their box."""
        return self._player_box_index is not None

    @property
    def player_box_index(self) -> int:
        """Index of the player's box."""
        if self._player_box_index is None:
            raise NoBoxSelectedError("Player has not chosen a box")
        return self._player_box_index

    @property
    def high_score(self) -> float:
        """Highest payout over all plays of the game."""
        return self._high_score

    @property
    def boxes_remaining_to_open_this_round(self) -> int:
        """Boxes still to open before this round's offer."""
        return self._config.boxes_in_round(self._round) - self._boxes_opened_this_round

    @property
    def is_last_round(self) -> bool:
        """True during the final round."""
        return self._round >= self._config.num_rounds

    @property
    def is_over(self) -> bool:
        """True when the last round has been completed."""
        return self.is_last_round and self.is_end_of_round()

    @property
    def current_offer(self) -> float:
        """Banker's offer: unopened average scaled by round progress."""
        return self.get_current_offer()

    @property
    def player_box_value(self) -> float:
        """Value in the player's box."""
        return self.get_player_box_value()

    def select_box(self, index: int) -> None:
        """
        Choose the player's box, or open a box once one has been chosen.

        Args:
            index: Index of the box.

        Raises:
            IndexOutOfRangeError: If index is not a valid box index.
            ReselectionError: If the box is already open or is the player's box.
            RoundOverflowError: If this round's boxes have all been opened.
        """
        if self._boxes.is_open(index):
            raise ReselectionError(f"Box {index} is already open")

        if self._player_box_index is None:
            self._player_box_index = index
            logger.debug(f"Player chose box {index}")
            return

        if index == self._player_box_index:
            raise ReselectionError(f"Box {index} is the player's box")

        if self.is_end_of_round():
            raise RoundOverflowError(
                f"All {self._config.boxes_in_round(self._round)} boxes for round "
                f"{self._round} are open"
            )

        self._boxes.open(index)
        self._boxes_opened_this_round += 1
        self._boxes_opened_total += 1
        logger.debug(
            f"Round {self._round}: opened box {index} "
            f"({self.boxes_remaining_to_open_this_round} left this round)"
        )

    def is_end_of_round(self) -> bool:
        """True when this round's quota of boxes has been opened."""
        return self._boxes_opened_this_round >= self._config.boxes_in_round(self._round)

    def start_next_round(self) -> None:
        """
        Move to the next round.

        Raises:
            RoundNotCompleteError: If boxes remain to be opened this round.
            RoundOverflowError: If this is already the last round.
        """
        if not self.is_end_of_round():
            raise RoundNotCompleteError(
                f"Round {self._round} still has "
                f"{self.boxes_remaining_to_open_this_round} boxes to open"
            )
        if self._round >= self._config.num_rounds:
            raise RoundOverflowError(f"Round {self._round} is the last round")

        self._round += 1
        self._boxes_opened_this_round = 0
        logger.debug(f"Started round {self._round}")

    def get_boxes_remaining_to_open_this_round(self) -> int:
        """Boxes still to open before this round's offer."""
        return self.boxes_remaining_to_open_this_round

    def get_current_offer(self) -> float:
        """
        Calculate the banker's current offer.

        It is the average value of the unopened boxes (including the
        player's box) times the round number, divided by the offer divisor.

        Returns:
            The offer.
        """
        average = self._boxes.average_value_of_unopened_boxes()
        return average * self._round / self._config.offer.divisor

    def get_player_box_value(self) -> float:
        """
        Get the value in the player's box.

        Raises:
            NoBoxSelectedError: If the player has not chosen a box.
        """
        return self._boxes.get_value(self.player_box_index)

    def is_box_open(self, index: int) -> bool:
        """Check whether the box at index is open."""
        return self._boxes.is_open(index)

    def get_value_in_box(self, index: int) -> float:
        """Get the value in the box at index."""
        return self._boxes.get_value(index)

    def is_new_high_score(self, value: float) -> bool:
        """
        Compare a payout to the high score, saving it if strictly higher.

        Args:
            value: Payout to compare.

        Returns:
            True if value beat the high score (which is now value).

        Raises:
            InvalidValueError: If value is not a finite number.
            WriteFailureError: If the new high score can't be saved. The
                in-memory high score is left unchanged.
        """
        if not math.isfinite(value):
            raise InvalidValueError(f"Payout must be a finite number, got {value}")
        if not value > self._high_score:
            return False

        self._store.save_high_score(value)
        logger.info(f"New high score: {value} (was {self._high_score})")
        self._high_score = value
        return True

    def get_info(self) -> Dict[str, Any]:
        """Get a summary of the current game state."""
        return {
            "round": self._round,
            "boxes_opened_this_round": self._boxes_opened_this_round,
            "boxes_opened_total": self._boxes_opened_total,
            "boxes_remaining_this_round": self.boxes_remaining_to_open_this_round,
            "has_player_chosen_box": self.has_player_chosen_box,
            "player_box_index": self._player_box_index,
            "current_offer": self.get_current_offer(),
            "high_score": self._high_score,
            "is_over": self.is_over,
        }

    def __str__(self) -> str:
        return str(self._boxes)
