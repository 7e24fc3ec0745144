"""
Deal Game Package
=================

This package contains the session engine for a televised box-selection
game: the player picks one box among many hidden amounts, opens other boxes
in scripted round sizes, and after each round receives a buyout offer based
on the expected value of what remains.

- Box values and round schedule
- Shuffle method
- Offer divisor
- High score location

All tunable parameters are in game_config.yaml.
"""
