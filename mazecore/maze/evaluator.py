"""Validation of candidate paths against an occupancy grid."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..base import AbstractMazeSolver
from ..grid import Coordinate, OccupancyGrid, as_coordinate
from .solver import MazeSolver

logger = logging.getLogger(__name__)


@dataclass
class PathEvaluationResult:
    starts_at_start: bool
    touches_goal: bool
    contiguous: bool
    stray_in_walls: bool
    has_duplicates: bool
    is_shortest: Optional[bool]
    path_length: int
    message: str

    @property
    def is_valid(self) -> bool:
        return (
            self.starts_at_start
            and self.touches_goal
            and self.contiguous
            and not self.stray_in_walls
            and not self.has_duplicates
        )

    def to_dict(self) -> dict:
        return {
            "starts_at_start": self.starts_at_start,
            "touches_goal": self.touches_goal,
            "contiguous": self.contiguous,
            "stray_in_walls": self.stray_in_walls,
            "has_duplicates": self.has_duplicates,
            "is_shortest": self.is_shortest,
            "path_length": self.path_length,
            "is_valid": self.is_valid,
            "message": self.message,
        }


class PathEvaluator:
    """Check that a path runs from start to goal through open, 4-adjacent cells."""

    def __init__(self, solver: Optional[AbstractMazeSolver] = None) -> None:
        self.solver = solver or MazeSolver()

    def evaluate(
        self,
        grid: OccupancyGrid,
        start: Sequence[int],
        end: Sequence[int],
        candidate: Sequence[Sequence[int]],
    ) -> PathEvaluationResult:
        start = as_coordinate(start)
        end = as_coordinate(end)
        cells = [as_coordinate(cell) for cell in candidate]

        starts_at_start = bool(cells) and cells[0] == start
        touches_goal = bool(cells) and cells[-1] == end
        stray_in_walls = any(not grid.in_bounds(cell) or not grid.is_open(cell) for cell in cells)
        has_duplicates = len(set(cells)) != len(cells)
        contiguous = self._check_contiguity(cells)
        well_formed = (
            starts_at_start and touches_goal and contiguous and not stray_in_walls and not has_duplicates
        )

        optimum = self.solver.solve(grid, start, end)
        if not optimum:
            is_shortest: Optional[bool] = None
        else:
            is_shortest = well_formed and len(cells) == len(optimum)
        logger.debug("Evaluated %d-cell path %s -> %s (optimum %d)", len(cells), start, end, len(optimum))

        if not cells:
            message = "No path given."
        elif stray_in_walls:
            message = "Path crosses walls or leaves the grid."
        elif not starts_at_start:
            message = "Path does not begin at the start cell."
        elif not touches_goal:
            message = "Path does not reach the goal."
        elif not contiguous:
            message = "Path is not continuous from start to goal."
        elif has_duplicates:
            message = "Path revisits a cell."
        elif is_shortest:
            message = "Path is a shortest route from start to goal."
        else:
            message = "Path connects start to goal but is not the shortest."

        return PathEvaluationResult(
            starts_at_start=starts_at_start,
            touches_goal=touches_goal,
            contiguous=contiguous,
            stray_in_walls=stray_in_walls,
            has_duplicates=has_duplicates,
            is_shortest=is_shortest,
            path_length=len(cells),
            message=message,
        )

    @staticmethod
    def _check_contiguity(cells: Sequence[Coordinate]) -> bool:
        return all(a.manhattan(b) == 1 for a, b in zip(cells, cells[1:]))


__all__ = ["PathEvaluator", "PathEvaluationResult"]


def _load_path(raw: str) -> List[Tuple[int, int]]:
    return [(int(x), int(y)) for x, y in json.loads(raw)]


def _select_record(payload: Union[Dict[str, Any], List[Dict[str, Any]]], maze_id: Optional[str]) -> Dict[str, Any]:
    """Pick one record from the generator's JSON list (or accept a bare record)."""

    records = [payload] if isinstance(payload, dict) else list(payload)
    if not records:
        raise ValueError("Maze JSON contains no records")
    if maze_id is None:
        return records[0]
    for record in records:
        if str(record.get("id")) == maze_id:
            return record
    raise KeyError(f"Maze id '{maze_id}' not found in records")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a candidate path through a maze")
    parser.add_argument("maze", type=str, help="JSON maze records as printed by the generator (a list or one record)")
    parser.add_argument("path", type=str, help='JSON list of [x, y] pairs, e.g. "[[0, 0], [0, 1]]"')
    parser.add_argument("--id", dest="maze_id", type=str, default=None, help="Record id to check; defaults to the first")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    record = _select_record(json.loads(args.maze), args.maze_id)
    grid = OccupancyGrid.from_rows(record["maze_grid"])
    result = PathEvaluator().evaluate(grid, record["start"], record["end"], _load_path(args.path))
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
