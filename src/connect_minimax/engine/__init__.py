"""
Minimax search engines for Connect-3 / Connect-4.

This module contains:
- Transposition table for caching search results
- Exhaustive minimax producing exact game values for small boards
- Chain-counting heuristic for static evaluation
- Depth-limited alpha-beta minimax built on that heuristic
"""

from connect_minimax.engine.transposition_table import TranspositionTable, BoundType, TTEntry
from connect_minimax.engine.search_result import SearchResult
from connect_minimax.engine.exhaustive import ExhaustiveMiniMax
from connect_minimax.engine.heuristic import ChainHeuristic
from connect_minimax.engine.alphabeta import HeuristicMiniMax

__all__ = [
    'TranspositionTable',
    'BoundType',
    'TTEntry',
    'SearchResult',
    'ExhaustiveMiniMax',
    'ChainHeuristic',
    'HeuristicMiniMax',
]
