"""
Unit tests for the exhaustive minimax engine.

Tests verify:
1. Exact outcomes on hand-checkable positions
2. Scores encode the winning side and the speed of the win
3. The table makes repeated queries free and leaves entries unchanged
4. Plain and optimized traversals agree on values
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from connect_minimax.game.bitboard import ConnectBoard
from connect_minimax.engine.exhaustive import ExhaustiveMiniMax


class TestExhaustiveOutcomes:
    """Exact values on small boards."""

    @pytest.mark.parametrize("optimized", [True, False])
    def test_one_by_three_is_a_draw(self, optimized):
        """Player one gets two of the three cells at most, so nobody can connect."""
        engine = ExhaustiveMiniMax(1, 3, 3, optimized=optimized)

        score, column = engine(ConnectBoard())

        assert score == 0
        assert column == 0

    @pytest.mark.parametrize("optimized", [True, False])
    def test_completes_horizontal_four(self, optimized):
        """Three player-one stones on the bottom row, fourth cell open."""
        engine = ExhaustiveMiniMax(4, 4, 4, optimized=optimized)
        board = ConnectBoard.from_moves([0, 0, 1, 1, 2, 2])

        score, column = engine(board)

        # A win on the first ply below the root has the largest magnitude
        assert column == 3
        assert score == 10000 * 4 * 4

    @pytest.mark.parametrize("optimized", [True, False])
    def test_player_two_to_move_scores_its_win_positive(self, optimized):
        """Player two to move with three stacked in column 1."""
        engine = ExhaustiveMiniMax(4, 4, 4, optimized=optimized)
        board = ConnectBoard.from_moves([0, 1, 0, 1, 2, 1, 3])

        score, column = engine(board)

        assert column == 1
        assert score == 10000 * 4 * 4

    @pytest.mark.parametrize("optimized", [True, False])
    def test_forced_loss_is_negative(self, optimized):
        """Player two cannot cover both cells that complete player one's bottom row."""
        engine = ExhaustiveMiniMax(2, 5, 3, optimized=optimized)
        board = ConnectBoard.from_moves([1, 1, 2, 2, 4])

        score, column = engine(board)

        # Whatever player two plays, player one connects on the next ply
        assert score == -(10000 * 2 * 5 // 2)
        assert column is not None

    def test_blocks_immediate_threat(self):
        """Any move but the block lets player two complete column 1."""
        engine = ExhaustiveMiniMax(4, 4, 4)
        board = ConnectBoard.from_moves([0, 1, 0, 1, 3, 1])

        score, column = engine(board)

        assert column == 1
        assert score > -(10000 * 4 * 4 // 2)

    def test_terminal_root_is_not_searched(self):
        engine = ExhaustiveMiniMax(3, 3, 3)
        board = ConnectBoard.from_moves([0, 1, 0, 1, 0])

        result = engine.search(board)

        # Player two is to move and has already lost
        assert result.best_move is None
        assert result.score == -(10000 * 3 * 3)
        assert result.nodes_searched == 0
        assert len(engine.tt) == 0

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            ExhaustiveMiniMax(8, 4, 3)
        with pytest.raises(ValueError):
            ExhaustiveMiniMax(4, 4, 5)


class TestExhaustiveTable:
    """Memoization behaviour."""

    def test_repeat_query_is_free_and_identical(self):
        engine = ExhaustiveMiniMax(3, 3, 3)
        board = ConnectBoard()

        first = engine.search(board)
        stores = engine.tt.stores
        entry = (engine.tt.get(board).score, engine.tt.get(board).best_move)

        second = engine.search(board)

        assert second.as_pair() == first.as_pair()
        assert second.nodes_searched == 0
        assert engine.tt.stores == stores
        assert (engine.tt.get(board).score, engine.tt.get(board).best_move) == entry

    @pytest.mark.parametrize("optimized", [True, False])
    def test_best_child_is_already_solved(self, optimized):
        """After solving the root, the position after its best move needs no search."""
        engine = ExhaustiveMiniMax(3, 3, 3, optimized=optimized)
        root = ConnectBoard()

        score, column = engine(root)
        result = engine.search(root.make_neighbor(column))

        # Same outcome, seen from the other side
        assert result.nodes_searched == 0
        assert (result.score > 0) == (score < 0)
        assert (result.score == 0) == (score == 0)

    @pytest.mark.parametrize("optimized", [True, False])
    def test_cached_positions_score_from_the_new_root(self, optimized):
        """Entries stored while solving one root are reused at a deeper root."""
        engine = ExhaustiveMiniMax(3, 4, 3, optimized=optimized)
        engine(ConnectBoard())

        for moves in ([0], [0, 1], [1, 2, 1]):
            board = ConnectBoard.from_moves(moves)
            fresh = ExhaustiveMiniMax(3, 4, 3, optimized=optimized)

            assert engine(board) == fresh(board)

    def test_plain_and_optimized_agree(self):
        for rows, cols in [(3, 3), (3, 4), (4, 3)]:
            plain = ExhaustiveMiniMax(rows, cols, 3, optimized=False)
            optimized = ExhaustiveMiniMax(rows, cols, 3, optimized=True)

            assert plain(ConnectBoard())[0] == optimized(ConnectBoard())[0]
            # The plain traversal also memoizes terminal leaves
            assert len(plain.tt) > len(optimized.tt)

    def test_verbose_report(self, capsys):
        engine = ExhaustiveMiniMax(1, 3, 3, verbose=True)

        engine(ConnectBoard())

        out = capsys.readouterr().out
        assert "states in the table" in out
        assert "The players will tie with optimal play." in out

    def test_verbose_report_names_the_winner(self, capsys):
        """Player two is to move and wins, so the report names the second player."""
        engine = ExhaustiveMiniMax(4, 4, 4, verbose=True)

        engine(ConnectBoard.from_moves([0, 1, 0, 1, 2, 1, 3]))

        assert "Second player will win with optimal play." in capsys.readouterr().out
