"""A* maze solver and structural statistics for occupancy grids."""

from __future__ import annotations

import argparse
import heapq
import itertools
import json
import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..base import AbstractMazeSolver
from ..grid import Coordinate, OccupancyGrid, as_coordinate
from .generator import DEFAULT_SIZE, MazeGenerator, default_endpoints

logger = logging.getLogger(__name__)

HARD_PATH_LENGTH = 100
HARD_DEAD_ENDS = 50
MEDIUM_PATH_LENGTH = 50
MEDIUM_DEAD_ENDS = 25


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


@dataclass(frozen=True)
class MazeStatistics:
    path_length: int
    solve_time_ms: float
    difficulty: Difficulty
    dead_end_count: int

    def to_dict(self) -> dict:
        return {
            "path_length": self.path_length,
            "solve_time_ms": self.solve_time_ms,
            "difficulty": self.difficulty.value,
            "dead_end_count": self.dead_end_count,
        }


@dataclass
class SolveResult:
    path: List[Coordinate]
    statistics: MazeStatistics

    @property
    def solved(self) -> bool:
        return bool(self.path)

    def to_dict(self) -> dict:
        return {
            "solved": self.solved,
            "path": [list(cell) for cell in self.path],
            "statistics": self.statistics.to_dict(),
        }


class MazeSolver(AbstractMazeSolver):
    """Shortest paths over 4-connected open cells with a Manhattan heuristic.

    The frontier is a heap keyed by ``(f_score, admission order)``, so among
    equally promising cells the one admitted first is expanded first. The
    grid is only read.
    """

    def solve(
        self,
        grid: OccupancyGrid,
        start: Sequence[int],
        end: Sequence[int],
    ) -> List[Coordinate]:
        start = as_coordinate(start)
        end = as_coordinate(end)
        if not (grid.in_bounds(start) and grid.in_bounds(end)):
            logger.debug("No path: endpoint outside %dx%d grid (%s -> %s)", grid.width, grid.height, start, end)
            return []
        if not (grid.is_open(start) and grid.is_open(end)):
            logger.debug("No path: endpoint blocked (%s -> %s)", start, end)
            return []

        counter = itertools.count()
        frontier: List[Tuple[int, int, Coordinate]] = [(start.manhattan(end), next(counter), start)]
        came_from: Dict[Coordinate, Coordinate] = {}
        g_score: Dict[Coordinate, int] = {start: 0}
        f_score: Dict[Coordinate, int] = {start: start.manhattan(end)}
        closed = set()

        while frontier:
            f, _, current = heapq.heappop(frontier)
            if current in closed or f > f_score[current]:
                continue
            if current == end:
                path = self._reconstruct(came_from, current)
                logger.debug("Solved %s -> %s: %d cells, %d expanded", start, end, len(path), len(closed))
                return path
            closed.add(current)

            for neighbor in grid.neighbors(current):
                if neighbor in closed or not grid.is_open(neighbor):
                    continue
                tentative = g_score[current] + 1
                if neighbor in g_score and tentative >= g_score[neighbor]:
                    continue
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                f_score[neighbor] = tentative + neighbor.manhattan(end)
                heapq.heappush(frontier, (f_score[neighbor], next(counter), neighbor))

        logger.debug("No path: %s and %s are disconnected (%d expanded)", start, end, len(closed))
        return []

    @staticmethod
    def _reconstruct(came_from: Dict[Coordinate, Coordinate], current: Coordinate) -> List[Coordinate]:
        path = [current]
        while current in came_from:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return path

    def calculate_stats(
        self,
        grid: OccupancyGrid,
        path: Sequence[Sequence[int]],
        solve_time_ms: float,
    ) -> MazeStatistics:
        return calculate_stats(grid, path, solve_time_ms)


def count_dead_ends(grid: OccupancyGrid) -> int:
    """Open interior cells with exactly one open 4-neighbour; the outer ring is skipped."""

    cells = grid.to_array()
    if cells.shape[0] < 3 or cells.shape[1] < 3:
        return 0
    interior = cells[1:-1, 1:-1]
    open_neighbors = (
        cells[:-2, 1:-1].astype(np.int8)
        + cells[2:, 1:-1]
        + cells[1:-1, :-2]
        + cells[1:-1, 2:]
    )
    return int(np.count_nonzero(interior & (open_neighbors == 1)))


def classify_difficulty(path_length: int, dead_end_count: int) -> Difficulty:
    if path_length > HARD_PATH_LENGTH and dead_end_count > HARD_DEAD_ENDS:
        return Difficulty.HARD
    if path_length > MEDIUM_PATH_LENGTH and dead_end_count > MEDIUM_DEAD_ENDS:
        return Difficulty.MEDIUM
    return Difficulty.EASY


def calculate_stats(
    grid: OccupancyGrid,
    path: Sequence[Sequence[int]],
    solve_time_ms: float,
) -> MazeStatistics:
    """Summarize a solve; ``solve_time_ms`` is the caller's own measurement."""

    if solve_time_ms < 0:
        raise ValueError("solve_time_ms must be non-negative")
    path_length = len(path)
    dead_end_count = count_dead_ends(grid)
    return MazeStatistics(
        path_length=path_length,
        solve_time_ms=float(solve_time_ms),
        difficulty=classify_difficulty(path_length, dead_end_count),
        dead_end_count=dead_end_count,
    )


def timed_solve(
    grid: OccupancyGrid,
    start: Sequence[int],
    end: Sequence[int],
    *,
    solver: Optional[AbstractMazeSolver] = None,
) -> SolveResult:
    """Solve and time the call from the outside, then derive statistics."""

    solver = solver or MazeSolver()
    started = time.perf_counter()
    path = solver.solve(grid, start, end)
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    return SolveResult(path=path, statistics=calculate_stats(grid, path, elapsed_ms))


__all__ = [
    "Difficulty",
    "MazeSolver",
    "MazeStatistics",
    "SolveResult",
    "calculate_stats",
    "classify_difficulty",
    "count_dead_ends",
    "timed_solve",
]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a maze and solve it with A*")
    parser.add_argument("width", type=int, nargs="?", default=DEFAULT_SIZE)
    parser.add_argument("height", type=int, nargs="?", default=DEFAULT_SIZE)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--start", type=int, nargs=2, metavar=("X", "Y"), default=None)
    parser.add_argument("--end", type=int, nargs=2, metavar=("X", "Y"), default=None)
    parser.add_argument("--show", action="store_true", help="Print the maze with the path overlaid")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    generator = MazeGenerator(rng=random.Random(args.seed))
    grid = generator.generate(args.width, args.height)
    default_start, default_end = default_endpoints(args.width, args.height)
    start = Coordinate(*args.start) if args.start else default_start
    end = Coordinate(*args.end) if args.end else default_end

    result = timed_solve(grid, start, end)
    if args.show:
        print(grid.to_text(result.path))
        print()
    if not result.solved:
        logger.warning("No path from %s to %s", start, end)
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
