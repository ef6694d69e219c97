"""
Search result record shared by the exhaustive and heuristic engines.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class SearchResult:
    """Result of a minimax search."""
    best_move: Optional[int]
    score: int
    nodes_searched: int
    time_ms: int
    tt_stats: dict

    def as_pair(self) -> Tuple[int, Optional[int]]:
        """(score, column) as returned by the engines' __call__."""
        return self.score, self.best_move
