#!/usr/bin/env python
"""Pit two CPU difficulty levels against each other.

Usage:
    python scripts/run_arena.py --a hard --b medium --games 20
    python scripts/run_arena.py --a ultimate --b hard --games 10 --seed 7
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from reversi.cpu import CPULevel
from reversi.eval import run_arena

LEVELS = [level.value for level in CPULevel]


def main():
    parser = argparse.ArgumentParser(description="Play headless games between two CPU levels")
    parser.add_argument("--a", choices=LEVELS, default="hard", help="First CPU level")
    parser.add_argument("--b", choices=LEVELS, default="medium", help="Second CPU level")
    parser.add_argument("--games", type=int, default=10, help="Number of games (colors alternate)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random CPU")
    parser.add_argument("--quiet", action="store_true", help="Hide the progress bar")
    args = parser.parse_args()

    if args.games < 1:
        print("❌ --games must be at least 1")
        sys.exit(1)

    result = run_arena(args.a, args.b, num_games=args.games, seed=args.seed, show_progress=not args.quiet)

    print("=" * 60)
    print(f"{result.level_a.value} vs {result.level_b.value}: {result.total_games} games")
    print("=" * 60)
    print(f"  Wins:     {result.wins}")
    print(f"  Losses:   {result.losses}")
    print(f"  Draws:    {result.draws}")
    print(f"  Win rate: {result.win_rate:.1%}")

    avg_black = sum(g.black_count for g in result.games) / result.total_games
    avg_white = sum(g.white_count for g in result.games) / result.total_games
    print(f"  Avg stones (black/white): {avg_black:.1f} / {avg_white:.1f}")


if __name__ == "__main__":
    main()
