"""Perfect maze generation and shortest-path solving on occupancy grids."""

__all__ = [
    "AbstractMazeGenerator",
    "AbstractMazeSolver",
    "MazeError",
    "InvalidDimensionsError",
    "OutOfBoundsError",
    "Coordinate",
    "OccupancyGrid",
    "MazeGenerator",
    "MazeRecord",
    "MazeSolver",
    "MazeStatistics",
    "Difficulty",
    "SolveResult",
    "PathEvaluator",
    "PathEvaluationResult",
    "calculate_stats",
    "default_endpoints",
    "timed_solve",
]

from .base import (
    AbstractMazeGenerator,
    AbstractMazeSolver,
    InvalidDimensionsError,
    MazeError,
    OutOfBoundsError,
)
from .grid import Coordinate, OccupancyGrid
from .maze import (
    Difficulty,
    MazeGenerator,
    MazeRecord,
    MazeSolver,
    MazeStatistics,
    PathEvaluationResult,
    PathEvaluator,
    SolveResult,
    calculate_stats,
    default_endpoints,
    timed_solve,
)
