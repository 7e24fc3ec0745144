"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the Deal game.
Reward is the payout on the terminating step and 0.0 otherwise.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from deal_game.deal_core.config_loader import GameConfig, load_config
from deal_game.deal_core.errors import ReselectionError, RoundNotCompleteError
from deal_game.deal_core.game import DealGame
from deal_game.deal_core.high_score import InMemoryHighScoreStore


class DealEnv(gym.Env):
    """
    Deal game as a Gymnasium environment.

    Action Space:
        Discrete(num_boxes + 1)
        Actions 0..num_boxes-1 select a box: the first selection is the
        player's box, later ones open a box. Action num_boxes ("deal")
        accepts the banker's offer and is only valid at the end of a round.
        Opening a box after a round has ended declines the offer and starts
        the next round.

    Observation Space:
        Dict with the open mask, revealed values, round progress, current
        offer and a mask of valid actions.

    Reward:
        The payout when the episode terminates, 0.0 on every other step.

    Info:
        Contains round, offer, high_score, payout (at termination), etc.
    """

    metadata = {
        "render_modes": ["ansi"],
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        testing: bool = False,
    ):
        """
        Initialize Deal environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "ansi" for a text dump of the boxes, None for headless.
            testing: If True, boxes keep their configured order.
        """
        super().__init__()

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._testing = testing

        # High score is kept per environment, never on disk
        self._store = InMemoryHighScoreStore()
        self._game: Optional[DealGame] = None
        self._payout: Optional[float] = None
        self._accepted_deal = False

        num_boxes = self._config.num_boxes
        self.deal_action = num_boxes

        self.action_space = spaces.Discrete(num_boxes + 1)
        self.observation_space = self._build_observation_space()

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        num_boxes = self._config.num_boxes
        max_value = max(self._config.boxes.values)

        return spaces.Dict({
            "box_open": spaces.MultiBinary(num_boxes),
            "revealed_values": spaces.Box(low=-1, high=max_value, shape=(num_boxes,), dtype=np.float32),
            "player_box": spaces.Discrete(num_boxes + 1),
            "round": spaces.Box(low=1, high=self._config.num_rounds, shape=(), dtype=np.int32),
            "boxes_remaining": spaces.Box(low=0, high=num_boxes, shape=(), dtype=np.int32),
            "offer": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "action_mask": spaces.MultiBinary(num_boxes + 1),
        })

    @property
    def game(self) -> DealGame:
        """Access to underlying game (for debugging/tools)."""
        if self._game is None:
            raise RuntimeError("Call reset() before using the environment")
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for the box shuffle.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))

        self._game = DealGame(
            config=self._config,
            testing=self._testing,
            seed=seed,
            high_score_store=self._store
        )
        self._payout = None
        self._accepted_deal = False

        return self._get_obs(), self._get_info()

    def step(
        self,
        action: Union[int, np.integer]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: Box index to select, or deal_action to accept the offer.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.

        Raises:
            RuntimeError: If the episode has already ended.
            RoundNotCompleteError: If deal is taken mid-round.
            ReselectionError: If an open box or the player's box is selected.
            IndexOutOfRangeError: If the box index is out of range.
        """
        game = self.game
        if self._payout is not None:
            raise RuntimeError("Episode is over. Call reset() to start a new game")

        action = int(action)

        if action == self.deal_action:
            if not game.has_player_chosen_box or not game.is_end_of_round():
                raise RoundNotCompleteError("An offer can only be accepted at the end of a round")
            self._payout = game.get_current_offer()
            self._accepted_deal = True
        else:
            # No deal: move on before opening the next box
            if game.has_player_chosen_box and game.is_end_of_round():
                # Checked first so a rejected box leaves the offer standing
                if game.is_box_open(action):
                    raise ReselectionError(f"Box {action} is already open")
                if action == game.player_box_index:
                    raise ReselectionError(f"Box {action} is the player's box")
                game.start_next_round()
            game.select_box(action)
            if game.is_over:
                self._payout = game.get_player_box_value()

        terminated = self._payout is not None
        reward = 0.0
        if terminated:
            reward = float(self._payout)
            game.is_new_high_score(self._payout)

        return self._get_obs(), reward, terminated, False, self._get_info()

    def action_masks(self) -> np.ndarray:
        """Valid actions for the current state (1 = valid)."""
        game = self.game
        num_boxes = self._config.num_boxes
        mask = np.zeros(num_boxes + 1, dtype=np.int8)
        if self._payout is not None:
            return mask

        player_box = game.player_box_index if game.has_player_chosen_box else None
        for i in game.boxes.unopened_indices():
            if i != player_box:
                mask[i] = 1

        if game.has_player_chosen_box and game.is_end_of_round():
            mask[self.deal_action] = 1

        return mask

    def _get_obs(self) -> Dict[str, np.ndarray]:
        """Build observation dict from game state."""
        game = self.game
        num_boxes = self._config.num_boxes

        box_open = np.zeros(num_boxes, dtype=np.int8)
        revealed = np.full(num_boxes, -1.0, dtype=np.float32)
        for i in range(num_boxes):
            if game.is_box_open(i):
                box_open[i] = 1
                revealed[i] = game.get_value_in_box(i)

        player_box = game.player_box_index if game.has_player_chosen_box else None
        return {
            "box_open": box_open,
            "revealed_values": revealed,
            "player_box": num_boxes if player_box is None else player_box,
            "round": np.int32(game.round),
            "boxes_remaining": np.int32(game.boxes_remaining_to_open_this_round),
            "offer": np.float32(game.get_current_offer()),
            "action_mask": self.action_masks(),
        }

    def _get_info(self) -> Dict[str, Any]:
        """Build info dict."""
        info = self.game.get_info()
        info["payout"] = self._payout
        info["accepted_deal"] = self._accepted_deal
        return info

    def render(self) -> Optional[str]:
        """
        Render the current game state.

        Returns:
            Text dump of the boxes if render_mode is "ansi", None otherwise.
        """
        if self.render_mode == "ansi":
            return str(self.game)
        return None
