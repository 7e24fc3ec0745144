"""
Deal Core - The game session engine.

This module provides the game session, the boxes it plays with, the
high score store and a Gymnasium environment wrapper.

Main exports:
- DealGame: One play-through of the game
- DealEnv: Gymnasium environment for agent training
- Box, BoxList: Sealed boxes and the board holding them
- FileHighScoreStore, InMemoryHighScoreStore: High score persistence
- GameConfig: Configuration loaded from game_config.yaml
"""

from deal_game.deal_core.config_loader import GameConfig, load_config
from deal_game.deal_core.box import Box
from deal_game.deal_core.box_list import BoxList
from deal_game.deal_core.errors import (
    DealGameError,
    InvalidValueError,
    IndexOutOfRangeError,
    ReselectionError,
    NoBoxSelectedError,
    RoundOverflowError,
    RoundNotCompleteError,
    CorruptHighScoreDataError,
    WriteFailureError,
)
from deal_game.deal_core.high_score import (
    HighScoreStore,
    FileHighScoreStore,
    InMemoryHighScoreStore,
)
from deal_game.deal_core.game import DealGame
from deal_game.deal_core.env_gym import DealEnv

__all__ = [
    "GameConfig",
    "load_config",
    "Box",
    "BoxList",
    "DealGameError",
    "InvalidValueError",
    "IndexOutOfRangeError",
    "ReselectionError",
    "NoBoxSelectedError",
    "RoundOverflowError",
    "RoundNotCompleteError",
    "CorruptHighScoreDataError",
    "WriteFailureError",
    "HighScoreStore",
    "FileHighScoreStore",
    "InMemoryHighScoreStore",
    "DealGame",
    "DealEnv",
]
