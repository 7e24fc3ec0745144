"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


SHUFFLE_METHODS = ("uniform", "swaps")


@dataclass(frozen=True)
class BoxesConfig:
    """Monetary amounts sealed in the boxes, in board order before shuffling."""
    values: Tuple[float, ...]

    @property
    def count(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class RoundsConfig:
    """Round schedule."""
    boxes_in_round: Tuple[int, ...]  # Indexed by round number, index 0 unused
    num_rounds: int

    @property
    def scheduled_opens(self) -> int:
        """Total number of boxes opened if every round is played out."""
        return sum(self.boxes_in_round[1:self.num_rounds + 1])


@dataclass(frozen=True)
class ShuffleConfig:
    """Shuffle applied to the boxes before play."""
    method: str  # "uniform" or "swaps"
    swaps: int   # Only used by the "swaps" method


@dataclass(frozen=True)
class OfferConfig:
    """Banker offer parameters."""
    divisor: int


@dataclass(frozen=True)
class HighScoreConfig:
    """Persisted high score location."""
    path: str


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    boxes: BoxesConfig
    rounds: RoundsConfig
    shuffle: ShuffleConfig
    offer: OfferConfig
    high_score: HighScoreConfig

    @property
    def num_boxes(self) -> int:
        """Number of boxes on the board."""
        return self.boxes.count

    @property
    def num_rounds(self) -> int:
        """Number of rounds in a full game."""
        return self.rounds.num_rounds

    def boxes_in_round(self, round_number: int) -> int:
        """Get how many boxes must be opened in a round."""
        if 1 <= round_number <= self.rounds.num_rounds:
            return self.rounds.boxes_in_round[round_number]
        raise ValueError(f"Invalid round number: {round_number}")


def _parse_values(values_data: List) -> Tuple[float, ...]:
    """Parse box values from YAML."""
    if not values_data:
        raise ValueError("boxes.values must contain at least one value")
    return tuple(float(v) for v in values_data)


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    for i, value in enumerate(config.boxes.values):
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Box value at position {i} must be a non-negative number, got {value}")

    rounds = config.rounds
    if rounds.num_rounds < 1:
        raise ValueError(f"num_rounds must be at least 1, got {rounds.num_rounds}")

    # Round table is indexed by round number, so it needs an unused slot 0
    if len(rounds.boxes_in_round) < rounds.num_rounds + 1:
        raise ValueError(
            f"boxes_in_round has {len(rounds.boxes_in_round)} entries but "
            f"{rounds.num_rounds} rounds need {rounds.num_rounds + 1} (index 0 unused)"
        )

    for round_number in range(1, rounds.num_rounds + 1):
        if rounds.boxes_in_round[round_number] < 0:
            raise ValueError(
                f"boxes_in_round[{round_number}] must be non-negative, "
                f"got {rounds.boxes_in_round[round_number]}"
            )

    # The player's box is never opened
    if rounds.scheduled_opens > config.num_boxes - 1:
        raise ValueError(
            f"Round schedule opens {rounds.scheduled_opens} boxes but only "
            f"{config.num_boxes - 1} can be opened besides the player's box"
        )

    if config.shuffle.method not in SHUFFLE_METHODS:
        raise ValueError(f"shuffle.method must be 'uniform' or 'swaps', got '{config.shuffle.method}'")

    if config.shuffle.swaps < 0:
        raise ValueError(f"shuffle.swaps must be non-negative, got {config.shuffle.swaps}")

    if config.offer.divisor <= 0:
        raise ValueError(f"offer.divisor must be positive, got {config.offer.divisor}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    boxes = BoxesConfig(values=_parse_values(raw["boxes"]["values"]))

    rounds_data = raw["rounds"]
    rounds = RoundsConfig(
        boxes_in_round=tuple(int(n) for n in rounds_data["boxes_in_round"]),
        num_rounds=int(rounds_data["num_rounds"])
    )

    # Remaining sections are optional
    shuffle_data = raw.get("shuffle", {})
    shuffle = ShuffleConfig(
        method=str(shuffle_data.get("method", "uniform")),
        swaps=int(shuffle_data.get("swaps", 500))
    )

    offer_data = raw.get("offer", {})
    offer = OfferConfig(
        divisor=int(offer_data.get("divisor", 10))
    )

    high_score_data = raw.get("high_score", {})
    high_score = HighScoreConfig(
        path=str(high_score_data.get("path", "highscore.txt"))
    )

    config = GameConfig(
        boxes=boxes,
        rounds=rounds,
        shuffle=shuffle,
        offer=offer,
        high_score=high_score
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
