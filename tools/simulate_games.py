"""
Game Simulation
===============

Plays many headless games with a simple threshold policy and reports
payout statistics. Useful for checking how generous the banker's offer
curve is.

The policy opens boxes at random and takes the deal as soon as the offer
reaches THRESHOLD times the average of the full board at the start of the
game. Lucky opens (low amounts gone) raise the offer and bring the deal
forward; unlucky ones push it back or rule it out.

Usage:
    python -m tools.simulate_games [--games N] [--seed SEED] [--threshold T]
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional
import numpy as np

from deal_game.deal_core.config_loader import GameConfig, load_config
from deal_game.deal_core.game import DealGame
from deal_game.deal_core.high_score import InMemoryHighScoreStore


def play_game(
    config: GameConfig,
    threshold: float,
    rng: np.random.Generator,
    store: InMemoryHighScoreStore,
    seed: Optional[int] = None
) -> dict:
    """
    Play one game to completion.

    Args:
        config: Game configuration.
        threshold: Deal when offer >= threshold * starting board average.
        rng: Generator picking which boxes to open.
        store: High score store shared across games.
        seed: Seed for the box shuffle.

    Returns:
        Dict with payout, round reached and whether a deal was taken.
    """
    game = DealGame(config=config, seed=seed, high_score_store=store)
    target = threshold * game.boxes.average_value_of_unopened_boxes()

    game.select_box(int(rng.integers(game.num_boxes)))

    while True:
        while not game.is_end_of_round():
            candidates = [
                i for i in game.boxes.unopened_indices()
                if i != game.player_box_index
            ]
            game.select_box(int(rng.choice(candidates)))

        if game.is_over:
            payout = game.get_player_box_value()
            dealt = False
            break

        offer = game.get_current_offer()
        if offer >= target:
            payout = offer
            dealt = True
            break

        game.start_next_round()

    return {
        "payout": payout,
        "round": game.round,
        "dealt": dealt,
        "new_high_score": game.is_new_high_score(payout),
    }


def run_simulation(
    num_games: int = 1000,
    threshold: float = 0.7,
    seed: int = 42,
    config_path: Optional[str] = None
) -> dict:
    """
    Simulate a batch of games.

    Args:
        num_games: Number of games to play.
        threshold: Deal threshold (fraction of starting average).
        seed: Base random seed.
        config_path: Path to game_config.yaml. Uses default if None.

    Returns:
        Dict with payout statistics.
    """
    config = load_config(config_path)
    rng = np.random.default_rng(seed)
    store = InMemoryHighScoreStore()

    payouts: List[float] = []
    rounds: List[int] = []
    deals = 0

    start = time.perf_counter()
    for game_index in range(num_games):
        result = play_game(config, threshold, rng, store, seed=seed + game_index)
        payouts.append(result["payout"])
        rounds.append(result["round"])
        deals += int(result["dealt"])
    elapsed = time.perf_counter() - start

    payouts_arr = np.array(payouts, dtype=np.float64)
    return {
        "num_games": num_games,
        "threshold": threshold,
        "mean_payout": float(np.mean(payouts_arr)),
        "median_payout": float(np.median(payouts_arr)),
        "std_payout": float(np.std(payouts_arr)),
        "min_payout": float(np.min(payouts_arr)),
        "max_payout": float(np.max(payouts_arr)),
        "mean_round": float(np.mean(rounds)),
        "deal_rate": deals / num_games,
        "high_score": max(store.saved) if store.saved else 0.0,
        "elapsed_seconds": elapsed,
    }


def main():
    parser = argparse.ArgumentParser(description="Simulate Deal games with a threshold policy")
    parser.add_argument("--games", type=int, default=1000, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=42, help="Base random seed")
    parser.add_argument("--threshold", type=float, nargs="+", default=[0.5, 0.7, 0.9],
                        help="Deal thresholds (fraction of starting average) to compare")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--verbose", action="store_true", help="Log every game event")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    print("=" * 70)
    print("DEAL GAME SIMULATION")
    print("=" * 70)
    print(f"{'Threshold':>10} {'Mean':>14} {'Median':>14} {'Max':>14} {'Round':>7} {'Deals':>7}")
    print("-" * 70)

    for threshold in args.threshold:
        r = run_simulation(
            num_games=args.games,
            threshold=threshold,
            seed=args.seed,
            config_path=args.config
        )
        print(f"{threshold:>10.2f} {r['mean_payout']:>14,.2f} {r['median_payout']:>14,.2f} "
              f"{r['max_payout']:>14,.2f} {r['mean_round']:>7.2f} {r['deal_rate']:>7.1%}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
