"""
Depth-limited minimax with alpha-beta pruning for Connect-3 / Connect-4.

Unlike the exhaustive engine, this engine stops a fixed number of plies
below the root and scores the frontier with the chain heuristic, so its
scores are estimates rather than game values. As in the exhaustive engine,
the side to move at the root is the maximizer.

Algorithm overview:

    def traverse(board, maximize, depth, alpha, beta):
        if tt hit usable for [alpha, beta]:
            return cached score
        if depth > max_depth:
            return heuristic(board) if maximize else -heuristic(board)

        for col in legal columns:
            child = board.make_neighbor(col)
            if child wins:
                return +-win_score // depth        # take it, skip siblings
            score = traverse(child, not maximize, depth + 1, alpha, beta)
            keep best
            if best reaches the opposing bound:
                break                              # prune
            tighten alpha (max node) or beta (min node)

        tt.store(board, best, bound type)
        return best

The table records whether each score is exact or a bound, so pruning never
changes the minimax value of the root. Scores depend on the depth of the
root, so the table is cleared at the start of every search.
"""

import operator
import sys
import time
from typing import Optional, Tuple

from connect_minimax.config import HEURISTIC_CONFIG, HeuristicWeights
from connect_minimax.game.bitboard import ConnectBoard, validate_dimensions
from connect_minimax.engine.heuristic import ChainHeuristic
from connect_minimax.engine.search_result import SearchResult
from connect_minimax.engine.transposition_table import TranspositionTable, BoundType


SCORE_INF = sys.maxsize


class HeuristicMiniMax:
    """
    Alpha-beta minimax with a transposition table and a chain heuristic.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        chain: int,
        max_depth: int = HEURISTIC_CONFIG['max_depth'],
        verbose: bool = HEURISTIC_CONFIG['verbose'],
        weights: Optional[HeuristicWeights] = None
    ):
        """
        Initialize heuristic engine.

        Args:
            rows: Board rows (1-7)
            cols: Board columns (1-7)
            chain: Stones in a row needed to win (3 or 4)
            max_depth: Plies searched before the heuristic takes over
            verbose: Print a report after each search
            weights: Win score and chain weights
        """
        validate_dimensions(rows, cols, chain)
        if max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {max_depth}")

        self.rows = rows
        self.cols = cols
        self.chain = chain
        self.max_depth = max_depth
        self.verbose = verbose
        self.weights = weights if weights is not None else HeuristicWeights()

        self.heuristic = ChainHeuristic(rows, cols, chain, self.weights)
        self.tt = TranspositionTable()

        # Search statistics
        self.nodes_searched = 0
        self.cutoffs = 0

    def __call__(self, board: ConnectBoard) -> Tuple[int, Optional[int]]:
        """Return (score, best column) for the position."""
        return self.search(board).as_pair()

    def search(self, board: ConnectBoard) -> SearchResult:
        """
        Main search entry point.

        Returns:
            SearchResult with best move, score, statistics
        """
        self.tt.clear()
        start_time = time.time() * 1000
        self.nodes_searched = 0
        self.cutoffs = 0

        if board.game_over(self.chain):
            # The side to move has already lost
            return self._result(None, -self.weights.win_score, start_time)
        if board.is_full(self.cols, self.rows):
            return self._result(None, 0, start_time)

        self._traverse(board, True, 1, -SCORE_INF, SCORE_INF)

        entry = self.tt.get(board)
        result = self._result(entry.best_move, entry.score, start_time)

        if self.verbose:
            print(f"MiniMax search completed in {result.time_ms / 1000:.3f} seconds.")
            print(f"{len(self.tt)} states in transposition table.")
            print(f"This state has a score of {result.score}.")
            print()

        return result

    def _traverse(
        self,
        board: ConnectBoard,
        maximize: bool,
        depth: int,
        alpha: int,
        beta: int
    ) -> int:
        """
        Alpha-beta minimax.

        Args:
            board: Position to evaluate
            maximize: True at the root and every second ply below it
            depth: 1 at the root, +1 per ply
            alpha: Best score the maximizer is already assured of
            beta: Best score the minimizer is already assured of

        Returns:
            Score of the position (a bound when the window was left)
        """
        self.nodes_searched += 1

        cached = self.tt.probe(board, alpha, beta)
        if cached is not None:
            return cached

        # Evaluate board by counting usable chains
        if depth > self.max_depth:
            value = self.heuristic(board)
            return value if maximize else -value

        compare = operator.gt if maximize else operator.lt
        best_score = -SCORE_INF if maximize else SCORE_INF
        best_move = None
        original_alpha, original_beta = alpha, beta
        won = False

        for col in range(self.cols):
            if board.is_invalid_move(col, self.rows):
                continue

            child = board.make_neighbor(col)

            if child.game_over(self.chain):
                best_move = col
                win = self.weights.win_score // depth
                best_score = win if maximize else -win
                won = True
                break

            current = self._traverse(child, not maximize, depth + 1, alpha, beta)

            if compare(current, best_score):
                best_move = col
                best_score = current

            # Best score reached the opposing bound -> quit
            if maximize:
                if best_score >= beta:
                    self.cutoffs += 1
                    break
                alpha = max(alpha, best_score)
            else:
                if best_score <= alpha:
                    self.cutoffs += 1
                    break
                beta = min(beta, best_score)

        # Nobody has won and there is nowhere left to play
        if best_move is None:
            return 0

        if won:
            bound = BoundType.EXACT
        elif best_score >= original_beta:
            bound = BoundType.LOWER
        elif best_score <= original_alpha:
            bound = BoundType.UPPER
        else:
            bound = BoundType.EXACT

        self.tt.store(board, best_score, best_move, bound)
        return best_score

    def _result(self, best_move: Optional[int], score: int, start_time: float) -> SearchResult:
        return SearchResult(
            best_move=best_move,
            score=score,
            nodes_searched=self.nodes_searched,
            time_ms=int(time.time() * 1000 - start_time),
            tt_stats=self.tt.get_stats()
        )

    def clear_tt(self):
        """Clear transposition table."""
        self.tt.clear()

    def get_stats(self) -> dict:
        """Get search statistics."""
        return {
            'nodes_searched': self.nodes_searched,
            'cutoffs': self.cutoffs,
            'tt_stats': self.tt.get_stats(),
        }
