"""
Bit-packed board for N-in-a-row connection games (Connect-3 / Connect-4).

Layout (one 64-bit register per field, column c / row r -> bit 8*c + r):

     7 15 ... 55          <- per-column guard row, never occupied
     6 14 ... 54
     ...
     0  8 ... 48
                     63   <- parity guard bit

The board keeps two registers:
- occupancy: every occupied cell, plus bit 63 which is set from the start
- parity:    XOR of every pre-move occupancy

Because each move XORs the old occupancy into parity, `parity` always holds
the stones of the player to move and `parity ^ occupancy` holds the stones
of the player who just moved. Bit 63 of parity flips on every move, so it
tells whether an odd number of moves has been played.
"""

from typing import Optional, Tuple

import numpy as np


COLUMN_HEIGHT = 8
MAX_DIMENSION = 7
SUPPORTED_CHAINS = (3, 4)

GUARD_BIT = 1 << 63
CELL_MASK = GUARD_BIT - 1

# Vertical, anti-diagonal, horizontal, diagonal
DIRECTIONS = (1, 7, 8, 9)

# Shift (in units of the direction offset) that joins two adjacent pairs
_CHAIN_SPANS = {3: 1, 4: 2}

PLAYER_ONE = 1
PLAYER_TWO = -1


def validate_dimensions(rows: int, cols: int, chain: int) -> None:
    """Raise ValueError unless the board size and chain length are supported."""
    if not 1 <= rows <= MAX_DIMENSION:
        raise ValueError(f"rows must be in [1, {MAX_DIMENSION}], got {rows}")
    if not 1 <= cols <= MAX_DIMENSION:
        raise ValueError(f"cols must be in [1, {MAX_DIMENSION}], got {cols}")
    if chain not in SUPPORTED_CHAINS:
        raise ValueError(f"chain must be one of {SUPPORTED_CHAINS}, got {chain}")


def cell_bit(col: int, row: int) -> int:
    return 1 << (COLUMN_HEIGHT * col + row)


class ConnectBoard:
    """
    Connect-N position stored as (occupancy, parity) bit registers.

    The board does not know its own dimensions; callers pass rows/cols
    where they are needed, the same way for every engine.
    """

    __slots__ = ("occupancy", "parity")

    def __init__(self, occupancy: int = GUARD_BIT, parity: int = 0):
        self.occupancy = occupancy
        self.parity = parity

    def __eq__(self, other):
        if not isinstance(other, ConnectBoard):
            return NotImplemented
        return self.occupancy == other.occupancy and self.parity == other.parity

    def __hash__(self):
        return hash((self.occupancy, self.parity))

    def __repr__(self):
        return f"ConnectBoard(occupancy={self.occupancy:#x}, parity={self.parity:#x})"

    def key(self) -> Tuple[int, int]:
        """Immutable snapshot used as a transposition table key."""
        return (self.occupancy, self.parity)

    def copy(self) -> "ConnectBoard":
        return ConnectBoard(self.occupancy, self.parity)

    def move_count(self) -> int:
        """Number of stones on the board."""
        return (self.occupancy & CELL_MASK).bit_count()

    def is_player_one(self) -> bool:
        """True when the most recent move was made by the first player."""
        return bool(self.parity & GUARD_BIT)

    def is_invalid_move(self, col: int, max_rows: int) -> bool:
        return bool(self.occupancy & cell_bit(col, max_rows - 1))

    def is_full(self, cols: int, max_rows: int) -> bool:
        for col in range(cols):
            if not self.is_invalid_move(col, max_rows):
                return False
        return True

    def make_move(self, col: int) -> None:
        """
        Drop a stone in `col` in place.

        Adding the column's lowest bit ripples a carry up to the first empty
        cell of that column; OR-ing the sum back sets exactly that cell.
        The column must be playable.
        """
        self.parity ^= self.occupancy
        self.occupancy |= self.occupancy + (1 << (COLUMN_HEIGHT * col))

    def make_neighbor(self, col: int) -> "ConnectBoard":
        """Return the position after playing `col`, leaving this board untouched."""
        occupancy = self.occupancy
        return ConnectBoard(occupancy | (occupancy + (1 << (COLUMN_HEIGHT * col))),
                            self.parity ^ occupancy)

    def mover_mask(self) -> int:
        """Stones of the player who made the most recent move."""
        return (self.parity ^ self.occupancy) & CELL_MASK

    def to_move_mask(self) -> int:
        """Stones of the player whose turn it is."""
        return self.parity & CELL_MASK

    def game_over(self, chain: int) -> bool:
        """
        Check whether the last mover has `chain` stones in a row.

        `pair` marks cells i where i and i + offset both hold a mover stone.
        A 3-chain is two pairs one offset apart, a 4-chain two pairs two
        offsets apart.
        """
        mover = self.mover_mask()
        span = _CHAIN_SPANS[chain]

        for offset in DIRECTIONS:
            pair = mover & (mover >> offset)
            if pair & (pair >> (span * offset)):
                return True

        return False

    def render(self, rows: int, cols: int) -> str:
        """
        Text picture of the board, top row first.

        Player one is always 'X' and player two 'O': the symbol for the
        player to move swaps with is_player_one().
        """
        to_move, last = 'X', 'O'
        if self.is_player_one():
            to_move, last = last, to_move

        lines = []
        for row in range(rows - 1, -1, -1):
            cells = []
            for col in range(cols):
                bit = cell_bit(col, row)
                if self.parity & bit:
                    cells.append(to_move)
                elif self.occupancy & bit:
                    cells.append(last)
                else:
                    cells.append(' ')
            lines.append("| " + " | ".join(cells) + " |")

        lines.append("  " + "   ".join(str(col) for col in range(cols)))
        return "\n".join(lines)

    def to_matrix(self, rows: int, cols: int) -> np.ndarray:
        """
        Board as a (rows, cols) array with row 0 at the top.

        Player one's stones are 1, player two's -1, empty cells 0.
        """
        if self.is_player_one():
            player_one, player_two = self.mover_mask(), self.to_move_mask()
        else:
            player_one, player_two = self.to_move_mask(), self.mover_mask()

        matrix = np.zeros((rows, cols), dtype=np.int8)
        for col in range(cols):
            for row in range(rows):
                bit = cell_bit(col, row)
                if player_one & bit:
                    matrix[rows - 1 - row, col] = PLAYER_ONE
                elif player_two & bit:
                    matrix[rows - 1 - row, col] = PLAYER_TWO
        return matrix

    @classmethod
    def from_matrix(cls, matrix) -> "ConnectBoard":
        """
        Build a board from a (rows, cols) array with row 0 at the top.

        Whose turn it is follows from the piece counts: player one moves
        first, so equal counts mean player one is to move.
        """
        matrix = np.asarray(matrix)
        if matrix.ndim != 2:
            raise ValueError(f"Expected a 2D board, got shape {matrix.shape}")

        rows, cols = matrix.shape
        if not (1 <= rows <= MAX_DIMENSION and 1 <= cols <= MAX_DIMENSION):
            raise ValueError(f"Board shape {matrix.shape} exceeds {MAX_DIMENSION}x{MAX_DIMENSION}")

        player_one = 0
        player_two = 0
        for col in range(cols):
            landed = True
            # Walk upward from the bottom row; stones may not float over gaps
            for row in range(rows):
                value = matrix[rows - 1 - row, col]
                if value == 0:
                    landed = False
                    continue
                if not landed:
                    raise ValueError(f"Floating stone in column {col} at row {row}")
                if value == PLAYER_ONE:
                    player_one |= cell_bit(col, row)
                elif value == PLAYER_TWO:
                    player_two |= cell_bit(col, row)
                else:
                    raise ValueError(f"Unexpected cell value {value!r}")

        ones, twos = player_one.bit_count(), player_two.bit_count()
        if ones - twos not in (0, 1):
            raise ValueError(
                f"Impossible piece counts: {ones} for player one, {twos} for player two"
            )

        occupancy = GUARD_BIT | player_one | player_two
        if ones == twos:
            parity = player_one
        else:
            parity = player_two | GUARD_BIT
        return cls(occupancy, parity)

    @classmethod
    def from_moves(cls, moves, max_rows: Optional[int] = None) -> "ConnectBoard":
        """
        Replay a sequence of columns from the empty board.

        With `max_rows` given, a move into a full column raises ValueError.
        """
        board = cls()
        for col in moves:
            if max_rows is not None and board.is_invalid_move(col, max_rows):
                raise ValueError(f"Column {col} is full")
            board.make_move(col)
        return board
