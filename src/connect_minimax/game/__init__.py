"""
Board representation for Connect-3 / Connect-4 search.
"""

from connect_minimax.game.bitboard import (
    ConnectBoard,
    validate_dimensions,
    MAX_DIMENSION,
    SUPPORTED_CHAINS,
)

__all__ = [
    'ConnectBoard',
    'validate_dimensions',
    'MAX_DIMENSION',
    'SUPPORTED_CHAINS',
]
