"""
Transposition table for caching minimax search results.

Positions reachable through different move orders are searched once and
then answered from the table. Entries are keyed by the board's
(occupancy, parity) registers, so the table owns a snapshot of each
position rather than a reference to a board that may later be mutated.

Key concepts:
- Bound types: EXACT (full-window value), LOWER (fail-high cutoff),
  UPPER (fail-low cutoff)
- The exhaustive engine only ever stores EXACT entries
- The heuristic engine stores bounds and clears the table between root searches
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from connect_minimax.game.bitboard import ConnectBoard


class BoundType(Enum):
    """Type of bound stored in transposition table entry."""
    EXACT = 0   # Exact value
    LOWER = 1   # Lower bound (beta cutoff, actual value >= stored value)
    UPPER = 2   # Upper bound (alpha cutoff, actual value <= stored value)


@dataclass
class TTEntry:
    """
    Cached search result for one position.

    Attributes:
        score: Minimax score (or bound on it)
        best_move: Column that produced the score (None for terminal positions)
        bound: Whether the score is exact or a bound
    """
    score: int
    best_move: Optional[int]
    bound: BoundType = BoundType.EXACT

    def is_usable(self, alpha: Optional[int], beta: Optional[int]) -> bool:
        """Whether the stored score can stand in for a search of window [alpha, beta]."""
        if self.bound == BoundType.EXACT:
            return True
        if self.bound == BoundType.LOWER:
            return beta is not None and self.score >= beta
        return alpha is not None and self.score <= alpha


class TranspositionTable:
    """
    Unbounded dict-backed transposition table.

    Boards have at most 49 cells, so positions are keyed exactly by their
    two registers; there are no hash collisions to detect.
    """

    def __init__(self):
        self.table: Dict[Tuple[int, int], TTEntry] = {}

        # Statistics
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def __len__(self):
        return len(self.table)

    def __contains__(self, board: ConnectBoard):
        return board.key() in self.table

    def get(self, board: ConnectBoard) -> Optional[TTEntry]:
        """Return the raw entry for a position without touching statistics."""
        return self.table.get(board.key())

    def probe(
        self,
        board: ConnectBoard,
        alpha: Optional[int] = None,
        beta: Optional[int] = None
    ) -> Optional[int]:
        """
        Look up a cached score.

        Exact entries always hit. Bound entries only hit when they already
        decide the current alpha-beta window.

        Args:
            board: Position to look up
            alpha: Current alpha bound (None outside alpha-beta search)
            beta: Current beta bound (None outside alpha-beta search)

        Returns:
            Cached score if usable, None otherwise
        """
        entry = self.table.get(board.key())

        if entry is None or not entry.is_usable(alpha, beta):
            self.misses += 1
            return None

        self.hits += 1
        return entry.score

    def store(
        self,
        board: ConnectBoard,
        score: int,
        best_move: Optional[int],
        bound: BoundType = BoundType.EXACT
    ):
        """
        Store a search result.

        An EXACT entry is never replaced by a bound for the same position.
        """
        key = board.key()
        existing = self.table.get(key)
        if existing is not None and existing.bound == BoundType.EXACT and bound != BoundType.EXACT:
            return

        self.table[key] = TTEntry(score=score, best_move=best_move, bound=bound)
        self.stores += 1

    def clear(self):
        """Drop all entries and reset statistics."""
        self.table.clear()
        self._reset_stats()

    def _reset_stats(self):
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def get_stats(self) -> dict:
        """
        Get transposition table statistics.

        Returns:
            Dictionary with hits, misses, hit rate, stores and size
        """
        total_queries = self.hits + self.misses
        hit_rate = self.hits / total_queries if total_queries > 0 else 0.0

        return {
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': hit_rate,
            'stores': self.stores,
            'size_entries': len(self.table),
        }
