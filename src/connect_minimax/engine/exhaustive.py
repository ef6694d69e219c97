"""
Exhaustive minimax search with a transposition table.

The whole game tree below a position is searched, so the returned score is
the exact game-theoretic value. The side to move at the root is the
maximizer: positive scores mean the side to move wins with optimal play,
negative scores mean it loses, zero is a forced draw.

A win completed d plies below the root is worth
score_scale * rows * cols // d, so faster wins have larger magnitude.

Two traversals are available:
- plain: every visited position is memoized, terminal ones included
- optimized: each child is tested for an immediate win before recursing;
  the first winning child is taken without looking at its siblings, and
  terminal leaves are not stored

The table persists for the engine's lifetime, so later queries on positions
already seen return straight from the table. Entries hold a root-independent
outcome for the side to move at that position:

    WIN_HORIZON - k     side to move completes a chain k plies from here
    -(WIN_HORIZON - k)  the opponent completes a chain k plies from here
    0                   forced draw

The root outcome is turned into a score only when a query returns.
"""

import operator
import sys
import time
from typing import Optional, Tuple

from connect_minimax.config import EXHAUSTIVE_CONFIG
from connect_minimax.game.bitboard import ConnectBoard, validate_dimensions
from connect_minimax.engine.search_result import SearchResult
from connect_minimax.engine.transposition_table import TranspositionTable


SCORE_INF = sys.maxsize

# Larger than the longest possible game on a 7x7 board
WIN_HORIZON = 64


def _one_ply_further(outcome: int) -> int:
    """Outcome of a child as seen from its parent: the end is one ply further off."""
    if outcome > 0:
        return outcome - 1
    if outcome < 0:
        return outcome + 1
    return 0


class ExhaustiveMiniMax:
    """
    Full game-tree minimax for small Connect-3 / Connect-4 boards.

    Search cost grows combinatorially with board area; boards beyond about
    4x5 take a long time in pure Python.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        chain: int,
        optimized: bool = EXHAUSTIVE_CONFIG['optimized'],
        verbose: bool = EXHAUSTIVE_CONFIG['verbose'],
        score_scale: int = EXHAUSTIVE_CONFIG['score_scale']
    ):
        """
        Args:
            rows: Board rows (1-7)
            cols: Board columns (1-7)
            chain: Stones in a row needed to win (3 or 4)
            optimized: Use the immediate-win traversal
            verbose: Print a report after each search
            score_scale: Multiplier of the win score
        """
        validate_dimensions(rows, cols, chain)

        self.rows = rows
        self.cols = cols
        self.chain = chain
        self.optimized = optimized
        self.verbose = verbose
        self.score_scale = score_scale

        self.tt = TranspositionTable()
        self.nodes_searched = 0

    def __call__(self, board: ConnectBoard) -> Tuple[int, Optional[int]]:
        """Return (score, best column) for the position."""
        return self.search(board).as_pair()

    def search(self, board: ConnectBoard) -> SearchResult:
        """
        Solve a position, reusing the table when it is already known.

        A position that is already won or full is not searched; its
        terminal score comes back with best_move=None. A won root has been
        lost by the side to move, so it scores the full negative win score.
        """
        start_time = time.time() * 1000
        self.nodes_searched = 0

        if board.game_over(self.chain):
            return self._result(None, -self._score(1), start_time)
        if board.is_full(self.cols, self.rows):
            return self._result(None, 0, start_time)

        if board not in self.tt:
            if self.optimized:
                self._efficient_traverse(board, True)
            else:
                self._traverse(board, True)

        entry = self.tt.get(board)
        result = self._result(entry.best_move, self._outcome_score(entry.score), start_time)

        if self.verbose:
            self._report(board, result)

        return result

    def _probe(self, board: ConnectBoard, maximize: bool) -> Optional[int]:
        cached = self.tt.probe(board)
        if cached is None:
            return None
        return cached if maximize else -cached

    def _store(self, board: ConnectBoard, maximize: bool, outcome: int, best_move: Optional[int]):
        # Stored from the side to move's view, whatever its role in this search
        self.tt.store(board, outcome if maximize else -outcome, best_move)

    def _traverse(self, board: ConnectBoard, maximize: bool) -> int:
        """
        Plain minimax.

        Args:
            board: Position to evaluate
            maximize: True when the side to move is the root's side to move

        Returns:
            Outcome of the position from the maximizer's view
        """
        self.nodes_searched += 1

        cached = self._probe(board, maximize)
        if cached is not None:
            return cached

        # The previous mover completed a chain
        if board.game_over(self.chain):
            best = -WIN_HORIZON if maximize else WIN_HORIZON
            self._store(board, maximize, best, None)
            return best

        if board.is_full(self.cols, self.rows):
            self._store(board, maximize, 0, None)
            return 0

        compare = operator.gt if maximize else operator.lt
        best = -SCORE_INF if maximize else SCORE_INF
        best_move = None

        for col in range(self.cols):
            if board.is_invalid_move(col, self.rows):
                continue

            current = _one_ply_further(self._traverse(board.make_neighbor(col), not maximize))

            if compare(current, best):
                best = current
                best_move = col

        self._store(board, maximize, best, best_move)
        return best

    def _efficient_traverse(self, board: ConnectBoard, maximize: bool) -> int:
        """
        Minimax that takes any immediately winning move outright.

        Once a winning child is found no sibling can score better for the
        side to move, so the remaining columns are skipped.
        """
        self.nodes_searched += 1

        cached = self._probe(board, maximize)
        if cached is not None:
            return cached

        # Filled the whole board without a win
        if board.is_full(self.cols, self.rows):
            return 0

        compare = operator.gt if maximize else operator.lt
        best = -SCORE_INF if maximize else SCORE_INF
        best_move = None

        for col in range(self.cols):
            if board.is_invalid_move(col, self.rows):
                continue

            child = board.make_neighbor(col)

            if child.game_over(self.chain):
                best_move = col
                best = WIN_HORIZON - 1 if maximize else -(WIN_HORIZON - 1)
                break

            current = _one_ply_further(self._efficient_traverse(child, not maximize))

            if compare(current, best):
                best = current
                best_move = col

        self._store(board, maximize, best, best_move)
        return best

    def _outcome_score(self, outcome: int) -> int:
        """Score of a root outcome: the win lands WIN_HORIZON - |outcome| plies away."""
        if outcome > 0:
            return self._score(WIN_HORIZON - outcome)
        if outcome < 0:
            return -self._score(WIN_HORIZON + outcome)
        return 0

    def _score(self, depth: int) -> int:
        return self.score_scale * self.rows * self.cols // depth

    def _result(self, best_move: Optional[int], score: int, start_time: float) -> SearchResult:
        return SearchResult(
            best_move=best_move,
            score=score,
            nodes_searched=self.nodes_searched,
            time_ms=int(time.time() * 1000 - start_time),
            tt_stats=self.tt.get_stats()
        )

    def _report(self, board: ConnectBoard, result: SearchResult):
        print(f"MiniMax search completed in {result.time_ms / 1000:.3f} seconds.")
        print(f"{len(self.tt)} states in the table.")
        print(f"This state has a value of {result.score}.")

        if result.score == 0:
            print("The players will tie with optimal play.")
        elif (result.score > 0) != board.is_player_one():
            # Player one is to move and wins, or player two is to move and loses
            print("First player will win with optimal play.")
        else:
            print("Second player will win with optimal play.")
        print()

    def clear_tt(self):
        """Clear transposition table."""
        self.tt.clear()

    def get_stats(self) -> dict:
        """Get search statistics."""
        return {
            'nodes_searched': self.nodes_searched,
            'tt_stats': self.tt.get_stats(),
        }
