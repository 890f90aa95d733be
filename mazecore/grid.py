"""Occupancy grid and coordinate types shared by the generator and the solver."""

from __future__ import annotations

from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .base import OutOfBoundsError, check_dimensions

OPEN_CHAR = " "
WALL_CHAR = "#"
PATH_CHAR = "."

# up, right, down, left
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


class Coordinate(NamedTuple):
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Coordinate":
        return Coordinate(self.x + dx, self.y + dy)

    def manhattan(self, other: Sequence[int]) -> int:
        return abs(self.x - other[0]) + abs(self.y - other[1])

    def midpoint(self, other: Sequence[int]) -> "Coordinate":
        return Coordinate((self.x + other[0]) // 2, (self.y + other[1]) // 2)


def as_coordinate(value: Sequence[int]) -> Coordinate:
    if isinstance(value, Coordinate):
        return value
    x, y = value
    return Coordinate(int(x), int(y))


class OccupancyGrid:
    """Fixed-size ``width x height`` grid of walkable (``True``) and blocked cells.

    Cells are addressed by ``(x, y)``; storage is a numpy array indexed
    ``[y, x]``. All cells start blocked.
    """

    def __init__(self, width: int, height: int) -> None:
        check_dimensions(width, height)
        self._width = int(width)
        self._height = int(height)
        self._cells = np.zeros((self._height, self._width), dtype=bool)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[object]]) -> "OccupancyGrid":
        """Build a grid from ``rows[y][x]`` truthy values."""

        height = len(rows)
        width = len(rows[0]) if height else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")
            grid._cells[y] = [bool(value) for value in row]
        return grid

    @classmethod
    def from_array(cls, array: np.ndarray) -> "OccupancyGrid":
        if array.ndim != 2:
            raise ValueError("Occupancy array must be two-dimensional")
        height, width = array.shape
        grid = cls(width, height)
        grid._cells[:] = array.astype(bool)
        return grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        return self._width, self._height

    def in_bounds(self, coord: Sequence[int]) -> bool:
        x, y = coord
        return 0 <= x < self._width and 0 <= y < self._height

    def _check(self, coord: Sequence[int]) -> Coordinate:
        cell = as_coordinate(coord)
        if not self.in_bounds(cell):
            raise OutOfBoundsError(cell.x, cell.y, self._width, self._height)
        return cell

    def is_open(self, coord: Sequence[int]) -> bool:
        cell = self._check(coord)
        return bool(self._cells[cell.y, cell.x])

    def set_open(self, coord: Sequence[int], value: bool = True) -> None:
        cell = self._check(coord)
        self._cells[cell.y, cell.x] = bool(value)

    def __getitem__(self, coord: Sequence[int]) -> bool:
        return self.is_open(coord)

    def __setitem__(self, coord: Sequence[int], value: bool) -> None:
        self.set_open(coord, value)

    def neighbors(self, coord: Sequence[int], step: int = 1) -> List[Coordinate]:
        """In-bounds cells ``step`` away along each axis, ordered up, right, down, left."""

        origin = as_coordinate(coord)
        candidates = (origin.offset(dx * step, dy * step) for dx, dy in DIRECTIONS)
        return [cell for cell in candidates if self.in_bounds(cell)]

    def open_cells(self) -> Iterator[Coordinate]:
        ys, xs = np.nonzero(self._cells)
        for y, x in zip(ys.tolist(), xs.tolist()):
            yield Coordinate(x, y)

    @property
    def open_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def copy(self) -> "OccupancyGrid":
        return OccupancyGrid.from_array(self._cells)

    def to_array(self) -> np.ndarray:
        return self._cells.copy()

    def to_rows(self) -> List[List[bool]]:
        return self._cells.tolist()

    def to_text(self, path: Optional[Iterable[Sequence[int]]] = None) -> str:
        path_cells = {as_coordinate(cell) for cell in path} if path else set()
        lines = []
        for y in range(self._height):
            chars = []
            for x in range(self._width):
                if (x, y) in path_cells:
                    chars.append(PATH_CHAR)
                else:
                    chars.append(OPEN_CHAR if self._cells[y, x] else WALL_CHAR)
            lines.append("".join(chars))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OccupancyGrid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._cells, other._cells))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"OccupancyGrid(width={self._width}, height={self._height}, open={self.open_count})"


__all__ = ["Coordinate", "OccupancyGrid", "DIRECTIONS", "as_coordinate"]
