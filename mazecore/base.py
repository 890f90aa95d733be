"""Abstract interfaces and error types shared by maze generation and solving."""

from __future__ import annotations

from abc import ABC, abstractmethod
from numbers import Integral
from typing import TYPE_CHECKING, Any, Dict, Generic, List, Optional, Sequence, TypeVar

if TYPE_CHECKING:  # pragma: no cover
    from .grid import Coordinate, OccupancyGrid

RecordT = TypeVar("RecordT")


class MazeError(Exception):
    """Base class for maze contract violations."""


class InvalidDimensionsError(MazeError, ValueError):
    """Raised when a grid is requested with a non-positive width or height."""

    def __init__(self, width: object, height: object) -> None:
        super().__init__(f"Invalid maze dimensions {width}x{height}: width and height must be >= 1")
        self.width = width
        self.height = height


class OutOfBoundsError(MazeError, IndexError):
    """Raised when a cell outside ``[0, width) x [0, height)`` is read or written."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"Cell ({x}, {y}) is out of bounds for a {width}x{height} grid")
        self.x = x
        self.y = y


def check_dimensions(width: int, height: int) -> None:
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, Integral) or value < 1:
            raise InvalidDimensionsError(width, height)


class AbstractMazeGenerator(ABC, Generic[RecordT]):
    """Base class for generators that carve occupancy grids and emit records."""

    @abstractmethod
    def generate(self, width: int, height: int) -> "OccupancyGrid":
        """Carve a new maze of the requested size."""

    @abstractmethod
    def create_record(self, width: int, height: int, *, maze_id: Optional[str] = None) -> RecordT:
        """Generate a maze and wrap it in a serializable record."""

    def generate_batch(self, count: int, width: int, height: int) -> List[RecordT]:
        """Generate ``count`` independent mazes of the same size."""

        if count < 0:
            raise ValueError("count must be non-negative")
        return [self.create_record(width, height) for _ in range(count)]

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        """Dictionary serialization hook for maze records."""

        if hasattr(record, "to_dict"):
            return getattr(record, "to_dict")()
        raise TypeError(
            "Maze record must implement to_dict() or override record_to_dict() in the generator."
        )


class AbstractMazeSolver(ABC):
    """Base class for solvers that search a read-only occupancy grid."""

    @abstractmethod
    def solve(
        self,
        grid: "OccupancyGrid",
        start: Sequence[int],
        end: Sequence[int],
    ) -> List["Coordinate"]:
        """Return the path from ``start`` to ``end`` inclusive, or ``[]`` when none exists."""


__all__ = [
    "AbstractMazeGenerator",
    "AbstractMazeSolver",
    "InvalidDimensionsError",
    "MazeError",
    "OutOfBoundsError",
    "check_dimensions",
]
