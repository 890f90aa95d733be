#!/usr/bin/env python3
"""Generate and solve mazes at several sizes and report them ordered by difficulty."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mazecore.maze import Difficulty, MazeGenerator, timed_solve

DIFFICULTY_ORDER = {Difficulty.EASY.value: 0, Difficulty.MEDIUM.value: 1, Difficulty.HARD.value: 2}


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[15, 29, 49],
        help="Square maze sizes to survey",
    )
    parser.add_argument(
        "--per-size",
        type=int,
        default=5,
        help="Number of mazes generated for each size",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed for reproducible surveys",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full records as JSON instead of a summary table",
    )
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=args.log_level.upper())
    generator = MazeGenerator(seed=args.seed)

    total = len(args.sizes) * args.per_size
    records: List[dict] = []
    index = 0
    for size in args.sizes:
        for record in generator.generate_batch(args.per_size, size, size):
            index += 1
            result = timed_solve(record.grid, record.start, record.end)
            stats = result.statistics
            records.append(
                {
                    "id": record.id,
                    "size": size,
                    "solved": result.solved,
                    **stats.to_dict(),
                }
            )
            print(
                f"[{index}/{total}] {size}x{size} {record.id[:8]} "
                f"path={stats.path_length} dead_ends={stats.dead_end_count} ({stats.difficulty.value})",
                file=sys.stderr if args.json else sys.stdout,
            )

    records.sort(key=lambda item: (DIFFICULTY_ORDER[item["difficulty"]], item["path_length"], item["id"]))

    if args.json:
        print(json.dumps(records, indent=2))
        return
    print()
    for item in records:
        print(
            f"{item['difficulty']:<7} {item['size']:>3}x{item['size']:<3} "
            f"path={item['path_length']:<5} dead_ends={item['dead_end_count']:<5} "
            f"{item['solve_time_ms']:.3f} ms"
        )
    unsolved = sum(1 for item in records if not item["solved"])
    print(f"Surveyed {len(records)} mazes ({unsolved} unsolvable)")


if __name__ == "__main__":
    main()
