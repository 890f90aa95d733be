"""Maze generation, solving and path evaluation package."""

__all__ = [
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

from .generator import MazeGenerator, MazeRecord, default_endpoints
from .solver import Difficulty, MazeSolver, MazeStatistics, SolveResult, calculate_stats, timed_solve
from .evaluator import PathEvaluator, PathEvaluationResult
