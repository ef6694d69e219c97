#!/usr/bin/env python3
"""
Solve the empty board for a range of board sizes with the exhaustive engine.

Prints, for every (rows, cols, chain) combination, whether the first player
wins, loses or draws with optimal play, the exact score and the best opening
column. Search time grows combinatorially with board area, so boards larger
than --max-cells are skipped.
"""

import sys
import time
from pathlib import Path
from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from connect_minimax.game.bitboard import ConnectBoard, MAX_DIMENSION, SUPPORTED_CHAINS
from connect_minimax.engine.exhaustive import ExhaustiveMiniMax


def outcome(score: int) -> str:
    if score > 0:
        return "first player wins"
    if score < 0:
        return "second player wins"
    return "draw"


def solve_boards(min_size: int, max_size: int, chains, max_cells: int, optimized: bool = True):
    """
    Solve every board size in [min_size, max_size]^2 for the given chains.

    Returns:
        List of (rows, cols, chain, score, best_move, states, seconds)
    """
    configs = [
        (rows, cols, chain)
        for chain in chains
        for rows in range(min_size, max_size + 1)
        for cols in range(min_size, max_size + 1)
        if rows * cols <= max_cells
    ]

    results = []
    for rows, cols, chain in tqdm(configs, desc="Solving boards"):
        engine = ExhaustiveMiniMax(rows, cols, chain, optimized=optimized)
        start = time.time()
        score, best_move = engine(ConnectBoard())
        results.append((rows, cols, chain, score, best_move, len(engine.tt), time.time() - start))

    return results


def print_results(results):
    print(f"\n{'board':>7} {'chain':>5} {'score':>8} {'move':>4} {'states':>9} {'time':>8}  outcome")
    print("-" * 70)
    for rows, cols, chain, score, best_move, states, seconds in results:
        move = '-' if best_move is None else str(best_move)
        print(f"{rows:>3}x{cols:<3} {chain:>5} {score:>8} {move:>4} {states:>9} "
              f"{seconds:>7.2f}s  {outcome(score)}")


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Solve empty Connect-3/4 boards exactly')
    parser.add_argument('--min-size', type=int, default=1,
                        help='Smallest rows/cols value')
    parser.add_argument('--max-size', type=int, default=4,
                        help=f'Largest rows/cols value (at most {MAX_DIMENSION})')
    parser.add_argument('--chains', type=int, nargs='+', choices=SUPPORTED_CHAINS, default=[3, 4],
                        help='Chain lengths to solve')
    parser.add_argument('--max-cells', type=int, default=16,
                        help='Skip boards with more cells than this')
    parser.add_argument('--plain', action='store_true',
                        help='Use the plain traversal instead of the optimized one')

    args = parser.parse_args()

    if not 1 <= args.min_size <= args.max_size <= MAX_DIMENSION:
        parser.error(f"sizes must satisfy 1 <= min-size <= max-size <= {MAX_DIMENSION}")

    print_results(solve_boards(
        min_size=args.min_size,
        max_size=args.max_size,
        chains=args.chains,
        max_cells=args.max_cells,
        optimized=not args.plain
    ))
