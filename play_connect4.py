#!/usr/bin/env python3
"""
Play Connect-3 / Connect-4 against the minimax engines.

Examples:
    python play_connect4.py --engine exhaustive --rows 4 --cols 4 --chain 3
    python play_connect4.py --engine heuristic --rows 6 --cols 7 --chain 4 --max-depth 7
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from connect_minimax.play import main


if __name__ == "__main__":
    sys.exit(main())
