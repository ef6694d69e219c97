"""
Chain-counting static evaluator for the heuristic minimax engine.

For each side the evaluator counts runs of k stones (k < chain) that are
followed by enough empty cells to grow into a full chain, in each of the
eight directions (both senses of vertical, horizontal and the two diagonals):

    k = 1: singleton   (needs chain - 1 empty cells after it)
    k = 2: two-chain   (needs chain - 2 empty cells after it)
    k = 3: three-chain (connect-4 only, needs one empty cell)

The score is the weighted total of the player to move minus that of the
player who just moved. Cells outside the rows x cols area, including the
per-column guard row and the parity bit, are part of a precomputed boundary
mask and never count as empty.
"""

from typing import Optional

from connect_minimax.config import HeuristicWeights
from connect_minimax.game.bitboard import (
    ConnectBoard,
    COLUMN_HEIGHT,
    DIRECTIONS,
    validate_dimensions,
)


FULL_REGISTER = (1 << 64) - 1


def _shift(bits: int, offset: int) -> int:
    """Bit i of the result is bit i + offset of `bits` (0 when out of range)."""
    if offset >= 0:
        return bits >> offset
    return (bits << -offset) & FULL_REGISTER


class ChainHeuristic:
    """Weighted count of extendable chains, from the side to move's view."""

    def __init__(self, rows: int, cols: int, chain: int,
                 weights: Optional[HeuristicWeights] = None):
        validate_dimensions(rows, cols, chain)

        self.rows = rows
        self.cols = cols
        self.chain = chain
        self.weights = weights if weights is not None else HeuristicWeights()

        # Weight of a run of k stones is run_weights[k - 1]
        self.run_weights = (
            self.weights.singleton,
            self.weights.two_chain,
            self.weights.three_chain,
        )[:chain - 1]

        column = (1 << rows) - 1
        cells = 0
        for col in range(cols):
            cells |= column << (COLUMN_HEIGHT * col)
        self.boundary = FULL_REGISTER ^ cells

        self.offsets = DIRECTIONS + tuple(-offset for offset in DIRECTIONS)

    def __call__(self, board: ConnectBoard) -> int:
        empty = ~(board.occupancy | self.boundary) & FULL_REGISTER

        player_total = 0
        opponent_total = 0
        for offset in self.offsets:
            player_total += self.count_chains(board.to_move_mask(), empty, offset)
            opponent_total += self.count_chains(board.mover_mask(), empty, offset)

        return player_total - opponent_total

    def count_chains(self, stones: int, empty: int, offset: int) -> int:
        """
        Weighted count of extendable runs in one direction.

        Args:
            stones: One side's stones
            empty: Empty in-bounds cells
            offset: Bit distance between neighbouring cells of a line
                    (negative to scan the other way)
        """
        total = 0
        run = stones
        for length, weight in enumerate(self.run_weights, start=1):
            if length > 1:
                run &= _shift(stones, (length - 1) * offset)

            room = run
            for step in range(length, self.chain):
                room &= _shift(empty, step * offset)

            total += weight * room.bit_count()

        return total
