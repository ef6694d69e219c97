"""
Configuration for connect_minimax engines and the console driver.
"""

from dataclasses import dataclass


# Board Configuration
BOARD_CONFIG = {
    'rows': 4,                  # 1..7
    'cols': 4,                  # 1..7
    'chain': 3,                 # Connect-3 or Connect-4
}

# Exhaustive MiniMax Configuration
EXHAUSTIVE_CONFIG = {
    # Take an immediately winning child without searching its siblings
    'optimized': True,

    # Print timing, table size and outcome after each search
    'verbose': False,

    # Win in p plies is worth score_scale * rows * cols // p
    'score_scale': 10000,
}

# Heuristic MiniMax Configuration
HEURISTIC_CONFIG = {
    # Plies searched below the root before the static evaluator is used
    'max_depth': 6,

    'verbose': False,
}


@dataclass(frozen=True)
class HeuristicWeights:
    """Scores used by the heuristic engine and its chain evaluator."""
    win_score: int = 100_000     # divided by the depth of the winning move
    singleton: int = 500         # lone stone with room to grow
    two_chain: int = 2_000       # two in a row with room to grow
    three_chain: int = 5_000     # three in a row with room to grow (connect-4 only)
