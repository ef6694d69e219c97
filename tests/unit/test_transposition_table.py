"""
Unit tests for the transposition table.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from connect_minimax.game.bitboard import ConnectBoard
from connect_minimax.engine.transposition_table import TranspositionTable, BoundType


class TestTranspositionTable:
    """Test transposition table functionality."""

    def test_store_and_probe(self):
        """Basic store and probe should work."""
        tt = TranspositionTable()
        board = ConnectBoard.from_moves([3, 2])

        tt.store(board, 100, 3)

        assert tt.probe(board) == 100
        assert tt.get(board).best_move == 3
        assert board in tt
        assert len(tt) == 1

    def test_keys_are_snapshots(self):
        """Mutating a board after storing it must not disturb the entry."""
        tt = TranspositionTable()
        board = ConnectBoard.from_moves([0])
        tt.store(board, 7, 1)

        board.make_move(1)

        assert tt.probe(board) is None
        assert tt.probe(ConnectBoard.from_moves([0])) == 7

    def test_transposed_positions_share_entry(self):
        tt = TranspositionTable()
        tt.store(ConnectBoard.from_moves([0, 1, 2]), 42, 0)

        assert tt.probe(ConnectBoard.from_moves([2, 1, 0])) == 42

    def test_bound_types(self):
        """Bound entries only answer when they decide the window."""
        tt = TranspositionTable()
        board = ConnectBoard.from_moves([1])

        tt.store(board, 100, 3, BoundType.LOWER)
        assert tt.probe(board, alpha=-1000, beta=90) == 100
        assert tt.probe(board, alpha=-1000, beta=110) is None

        other = ConnectBoard.from_moves([2])
        tt.store(other, -50, 0, BoundType.UPPER)
        assert tt.probe(other, alpha=-40, beta=1000) == -50
        assert tt.probe(other, alpha=-60, beta=1000) is None

    def test_exact_entry_not_replaced_by_bound(self):
        tt = TranspositionTable()
        board = ConnectBoard.from_moves([1])

        tt.store(board, 10, 2)
        tt.store(board, 99, 0, BoundType.LOWER)

        entry = tt.get(board)
        assert entry.score == 10
        assert entry.bound == BoundType.EXACT

    def test_stats_and_clear(self):
        tt = TranspositionTable()
        board = ConnectBoard()

        tt.probe(board)
        tt.store(board, 0, 0)
        tt.probe(board)

        stats = tt.get_stats()
        assert stats['hits'] == 1
        assert stats['misses'] == 1
        assert stats['hit_rate'] == 0.5
        assert stats['stores'] == 1
        assert stats['size_entries'] == 1

        tt.clear()
        assert len(tt) == 0
        assert tt.get_stats()['stores'] == 0
