"""Randomized depth-first maze generator over a coarse carving lattice."""

from __future__ import annotations

import argparse
import json
import logging
import random
import uuid
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..base import AbstractMazeGenerator, check_dimensions
from ..grid import Coordinate, OccupancyGrid

logger = logging.getLogger(__name__)

LATTICE_STEP = 2
DEFAULT_SIZE = 29


def default_endpoints(width: int, height: int) -> Tuple[Coordinate, Coordinate]:
    """Origin and far corner; connected on every generated grid with both sides >= 3."""

    check_dimensions(width, height)
    return Coordinate(0, 0), Coordinate(width - 1, height - 1)


@dataclass
class MazeRecord:
    id: str
    width: int
    height: int
    start: Tuple[int, int]
    end: Tuple[int, int]
    grid: OccupancyGrid

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "width": self.width,
            "height": self.height,
            "start": list(self.start),
            "end": list(self.end),
            "maze_grid": [[int(cell) for cell in row] for row in self.grid.to_rows()],
        }


class MazeGenerator(AbstractMazeGenerator[MazeRecord]):
    """Carve perfect mazes with an explicit stack, one random draw per step.

    Nodes sit on even coordinates; the odd cell between two nodes is the wall
    removed when the carve moves between them. The random source is owned by
    the generator, every other buffer is local to a single call.
    """

    def __init__(
        self,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        fix_corner: bool = True,
    ) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self.fix_corner = fix_corner

    def generate(self, width: int, height: int) -> OccupancyGrid:
        grid = self.carve(width, height)
        if self.fix_corner:
            open_far_corner(grid)
        return grid

    def carve(self, width: int, height: int) -> OccupancyGrid:
        """Run the depth-first carve alone, without the corner fix-up."""

        check_dimensions(width, height)
        grid = OccupancyGrid(width, height)
        visited = np.zeros((height, width), dtype=bool)
        stack: List[Coordinate] = [Coordinate(0, 0)]
        steps = 0

        while stack:
            current = stack[-1]
            visited[current.y, current.x] = True
            grid[current] = True

            neighbors = [
                cell
                for cell in grid.neighbors(current, step=LATTICE_STEP)
                if not visited[cell.y, cell.x]
            ]
            if neighbors:
                chosen = self._rng.choice(neighbors)
                stack.append(chosen)
                grid[current.midpoint(chosen)] = True
                steps += 1
            else:
                stack.pop()

        logger.debug("Carved %dx%d maze in %d steps (%d open cells)", width, height, steps, grid.open_count)
        return grid

    def create_record(self, width: int, height: int, *, maze_id: Optional[str] = None) -> MazeRecord:
        start, end = default_endpoints(width, height)
        return MazeRecord(
            id=maze_id or str(uuid.uuid4()),
            width=width,
            height=height,
            start=start,
            end=end,
            grid=self.generate(width, height),
        )


def open_far_corner(grid: OccupancyGrid) -> None:
    """Force the bottom-right corner and its two inner neighbours open.

    Even dimensions leave the last row/column off the lattice, so the carve
    never reaches the corner. This patches that case only; it does not make
    arbitrary cell pairs connected.
    """

    if grid.width <= 2 or grid.height <= 2:
        return
    right, bottom = grid.width - 1, grid.height - 1
    grid[right, bottom] = True
    grid[right - 1, bottom] = True
    grid[right, bottom - 1] = True


__all__ = ["MazeGenerator", "MazeRecord", "default_endpoints", "open_far_corner"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate perfect mazes by randomized depth-first carving")
    parser.add_argument("width", type=int, nargs="?", default=DEFAULT_SIZE)
    parser.add_argument("height", type=int, nargs="?", default=DEFAULT_SIZE)
    parser.add_argument("--count", type=int, default=1, help="Number of mazes to generate")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--no-corner-fix", action="store_true", help="Skip opening the bottom-right corner")
    parser.add_argument("--show", action="store_true", help="Print a text rendering instead of JSON")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    generator = MazeGenerator(seed=args.seed, fix_corner=not args.no_corner_fix)
    records = generator.generate_batch(args.count, args.width, args.height)
    if args.show:
        print("\n\n".join(record.grid.to_text() for record in records))
    else:
        print(json.dumps([generator.record_to_dict(record) for record in records], indent=2))


if __name__ == "__main__":
    main()
