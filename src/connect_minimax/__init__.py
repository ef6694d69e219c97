"""
connect_minimax: minimax search for Connect-3 and Connect-4 on boards up to 7x7.
"""

from connect_minimax.game.bitboard import ConnectBoard
from connect_minimax.engine.exhaustive import ExhaustiveMiniMax
from connect_minimax.engine.alphabeta import HeuristicMiniMax

__all__ = ['ConnectBoard', 'ExhaustiveMiniMax', 'HeuristicMiniMax']
