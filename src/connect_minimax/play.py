"""
Play Connect-3 or Connect-4 against a minimax engine in the terminal.

The computer moves first unless --human-first is given. Player one is
shown as X and player two as O.
"""

import argparse
from typing import Callable, Optional

from connect_minimax.config import BOARD_CONFIG, EXHAUSTIVE_CONFIG, HEURISTIC_CONFIG
from connect_minimax.game.bitboard import ConnectBoard, MAX_DIMENSION, SUPPORTED_CHAINS
from connect_minimax.engine.exhaustive import ExhaustiveMiniMax
from connect_minimax.engine.alphabeta import HeuristicMiniMax


def read_human_move(
    board: ConnectBoard,
    rows: int,
    cols: int,
    read_move: Callable[[str], str] = input
) -> Optional[int]:
    """
    Prompt until the player names a playable column.

    Returns:
        Column index, or None if the player typed 'q'
    """
    while True:
        raw = read_move(f"Enter your column from 0 to {cols - 1} (or 'q' to quit): ").strip()
        if raw.lower() == 'q':
            return None

        try:
            col = int(raw)
        except ValueError:
            print("❌ Invalid input! Enter a column number.")
            continue

        if col < 0 or col >= cols or board.is_invalid_move(col, rows):
            print(f"❌ Column {col} is not playable.")
            continue

        return col


def play_game(
    engine,
    rows: int,
    cols: int,
    chain: int,
    human_first: bool = False,
    read_move: Callable[[str], str] = input
) -> ConnectBoard:
    """
    Alternate engine and human moves until the game ends.

    Args:
        engine: ExhaustiveMiniMax or HeuristicMiniMax built for this board
        rows, cols, chain: Game configuration
        human_first: Let the human play first (as X)
        read_move: Source of human input

    Returns:
        Final board
    """
    board = ConnectBoard()
    print(f"\nPlaying Connect-{chain} with a {rows}x{cols} board.\n")

    def finished(b: ConnectBoard) -> bool:
        return b.game_over(chain) or b.is_full(cols, rows)

    computer_turn = not human_first
    while not finished(board):
        if computer_turn:
            print("🤖 Computer is thinking...")
            score, column = engine(board)
            print(f"🤖 Computer plays column {column} (score {score})\n")
            board.make_move(column)
        else:
            print(board.render(rows, cols))
            column = read_human_move(board, rows, cols, read_move)
            if column is None:
                print("👋 Thanks for playing!")
                return board
            board.make_move(column)
            print()

        computer_turn = not computer_turn

    print(board.render(rows, cols))

    if board.game_over(chain):
        # The last mover completed the chain
        if board.is_player_one() != human_first:
            print("The computer won!")
        else:
            print("You won!")
    else:
        print("Players tied!")

    return board


def build_engine(args: argparse.Namespace):
    """Create the engine selected on the command line."""
    if args.engine == 'exhaustive':
        return ExhaustiveMiniMax(args.rows, args.cols, args.chain,
                                 optimized=args.optimized, verbose=args.verbose)
    return HeuristicMiniMax(args.rows, args.cols, args.chain,
                            max_depth=args.max_depth, verbose=args.verbose)


def parse_args(argv=None) -> argparse.Namespace:
    dimensions = range(1, MAX_DIMENSION + 1)

    parser = argparse.ArgumentParser(
        description='Play Connect-3 or Connect-4 against a minimax engine'
    )
    parser.add_argument('--engine', choices=['exhaustive', 'heuristic'], default='heuristic',
                        help='exhaustive: exact solver for small boards; '
                             'heuristic: alpha-beta with a depth limit')
    parser.add_argument('--rows', type=int, choices=dimensions, default=BOARD_CONFIG['rows'],
                        help='Board rows')
    parser.add_argument('--cols', type=int, choices=dimensions, default=BOARD_CONFIG['cols'],
                        help='Board columns')
    parser.add_argument('--chain', type=int, choices=SUPPORTED_CHAINS, default=BOARD_CONFIG['chain'],
                        help='Stones in a row needed to win')
    parser.add_argument('--max-depth', type=int, default=HEURISTIC_CONFIG['max_depth'],
                        help='Search depth of the heuristic engine')
    parser.add_argument('--no-optimized', dest='optimized', action='store_false',
                        default=EXHAUSTIVE_CONFIG['optimized'],
                        help='Use the plain exhaustive traversal (memoizes every leaf)')
    parser.add_argument('--human-first', action='store_true',
                        help='Play first as X')
    parser.add_argument('--verbose', action='store_true',
                        help='Print search statistics after every engine move')

    args = parser.parse_args(argv)
    if args.max_depth < 1:
        parser.error("--max-depth must be a positive integer")
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    engine = build_engine(args)

    try:
        play_game(engine, args.rows, args.cols, args.chain, human_first=args.human_first)
    except (KeyboardInterrupt, EOFError):
        print("\n\n👋 Game interrupted. Thanks for playing!")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
