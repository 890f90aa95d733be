import random
import unittest
from collections import deque
from typing import Optional, Sequence, Tuple

from mazecore.grid import OccupancyGrid
from mazecore.maze import Difficulty, MazeGenerator, MazeSolver, default_endpoints, timed_solve
from mazecore.maze.solver import calculate_stats, classify_difficulty, count_dead_ends

# Two routes from (0, 1) to (6, 1): over the top (9 cells) or along the bottom (13 cells).
TWO_ROUTES = [
    [1, 1, 1, 1, 1, 1, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 1, 1, 1, 1, 1, 1],
]

# Column 2 blocked except row 2.
SINGLE_GAP = [
    [1, 1, 0, 1, 1],
    [1, 1, 0, 1, 1],
    [1, 1, 1, 1, 1],
    [1, 1, 0, 1, 1],
    [1, 1, 0, 1, 1],
]

PARTITIONED = [
    [1, 1, 0, 1, 1],
    [1, 1, 0, 1, 1],
    [1, 1, 0, 1, 1],
    [1, 1, 0, 1, 1],
    [1, 1, 0, 1, 1],
]


def bfs_length(grid: OccupancyGrid, start: Tuple[int, int], end: Tuple[int, int]) -> Optional[int]:
    """Number of cells on a shortest path, or None."""

    if not (grid.is_open(start) and grid.is_open(end)):
        return None
    distance = {start: 1}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        if cell == end:
            return distance[cell]
        for neighbor in grid.neighbors(cell):
            if neighbor not in distance and grid.is_open(neighbor):
                distance[neighbor] = distance[cell] + 1
                queue.append(neighbor)
    return None


class MazeSolverTests(unittest.TestCase):
    def setUp(self) -> None:
        self.solver = MazeSolver()

    def assertValidPath(self, grid: OccupancyGrid, path: Sequence, start, end) -> None:
        self.assertTrue(path)
        self.assertEqual(path[0], start)
        self.assertEqual(path[-1], end)
        self.assertEqual(len(set(path)), len(path))
        for cell in path:
            self.assertTrue(grid.is_open(cell), cell)
        for a, b in zip(path, path[1:]):
            self.assertEqual(abs(a[0] - b[0]) + abs(a[1] - b[1]), 1, (a, b))

    def test_routes_through_the_only_gap(self) -> None:
        grid = OccupancyGrid.from_rows(SINGLE_GAP)
        path = self.solver.solve(grid, (0, 0), (4, 4))
        self.assertIn((2, 2), path)
        self.assertEqual(len(path), 9)
        self.assertValidPath(grid, path, (0, 0), (4, 4))

    def test_picks_the_shorter_of_two_routes(self) -> None:
        grid = OccupancyGrid.from_rows(TWO_ROUTES)
        path = self.solver.solve(grid, (0, 1), (6, 1))
        self.assertEqual(len(path), 9)
        self.assertTrue(all(y <= 1 for _, y in path))
        self.assertValidPath(grid, path, (0, 1), (6, 1))

    def test_open_grid_path_matches_manhattan_distance(self) -> None:
        grid = OccupancyGrid.from_rows([[1] * 7 for _ in range(4)])
        path = self.solver.solve(grid, (0, 0), (6, 3))
        self.assertEqual(len(path), 6 + 3 + 1)
        self.assertValidPath(grid, path, (0, 0), (6, 3))

    def test_ties_prefer_the_earliest_admitted_cell(self) -> None:
        grid = OccupancyGrid.from_rows([[1] * 3 for _ in range(3)])
        path = self.solver.solve(grid, (0, 0), (2, 2))
        self.assertEqual(path, [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)])
        self.assertEqual(MazeSolver().solve(grid, (0, 0), (2, 2)), path)

    def test_matches_breadth_first_lengths_on_random_obstacles(self) -> None:
        rng = random.Random(99)
        rows = [[rng.random() > 0.3 for _ in range(15)] for _ in range(12)]
        grid = OccupancyGrid.from_rows(rows)
        open_cells = list(grid.open_cells())
        for _ in range(40):
            start, end = rng.choice(open_cells), rng.choice(open_cells)
            path = self.solver.solve(grid, start, end)
            expected = bfs_length(grid, start, end)
            if expected is None:
                self.assertEqual(path, [])
            else:
                self.assertEqual(len(path), expected, (start, end))
                self.assertValidPath(grid, path, start, end)

    def test_solves_generated_mazes_between_default_endpoints(self) -> None:
        for seed, (width, height) in enumerate([(29, 29), (10, 10), (15, 22)]):
            grid = MazeGenerator(seed=seed).generate(width, height)
            start, end = default_endpoints(width, height)
            path = self.solver.solve(grid, start, end)
            self.assertValidPath(grid, path, start, end)
            self.assertEqual(len(path), bfs_length(grid, start, end))

    def test_start_equal_to_end_is_a_single_cell_path(self) -> None:
        grid = OccupancyGrid.from_rows(SINGLE_GAP)
        self.assertEqual(self.solver.solve(grid, (1, 1), (1, 1)), [(1, 1)])

    def test_blocked_end_has_no_path(self) -> None:
        grid = OccupancyGrid.from_rows(SINGLE_GAP)
        self.assertEqual(self.solver.solve(grid, (0, 0), (2, 0)), [])
        self.assertEqual(self.solver.solve(grid, (2, 4), (0, 0)), [])

    def test_out_of_bounds_endpoints_have_no_path(self) -> None:
        grid = OccupancyGrid.from_rows(SINGLE_GAP)
        self.assertEqual(self.solver.solve(grid, (-1, 0), (4, 4)), [])
        self.assertEqual(self.solver.solve(grid, (5, 5), (4, 4)), [])
        self.assertEqual(self.solver.solve(grid, (0, 0), (0, 5)), [])

    def test_disconnected_regions_have_no_path(self) -> None:
        grid = OccupancyGrid.from_rows(PARTITIONED)
        self.assertEqual(self.solver.solve(grid, (0, 0), (4, 4)), [])

    def test_isolated_start_has_no_path(self) -> None:
        grid = OccupancyGrid(5, 5)
        grid[0, 0] = True
        self.assertEqual(self.solver.solve(grid, (0, 0), (4, 4)), [])
        self.assertEqual(self.solver.solve(grid, (0, 0), (1, 0)), [])

    def test_solve_does_not_mutate_the_grid(self) -> None:
        grid = MazeGenerator(seed=3).generate(15, 15)
        before = grid.copy()
        self.solver.solve(grid, (0, 0), (14, 14))
        self.assertEqual(grid, before)


class MazeStatisticsTests(unittest.TestCase):
    def test_counts_interior_dead_ends_only(self) -> None:
        corridor = OccupancyGrid.from_rows(
            [
                [0, 0, 0, 0, 0],
                [0, 1, 1, 1, 0],
                [0, 0, 0, 0, 0],
                [0, 0, 0, 0, 0],
                [0, 0, 0, 0, 0],
            ]
        )
        self.assertEqual(count_dead_ends(corridor), 2)

        touching_ring = OccupancyGrid.from_rows(
            [
                [0, 0, 0, 0, 0],
                [1, 1, 1, 1, 0],
                [0, 0, 0, 0, 0],
                [0, 0, 0, 0, 0],
                [0, 0, 0, 0, 0],
            ]
        )
        self.assertEqual(count_dead_ends(touching_ring), 1)

    def test_isolated_cells_and_small_grids_have_no_dead_ends(self) -> None:
        lonely = OccupancyGrid(5, 5)
        lonely[2, 2] = True
        self.assertEqual(count_dead_ends(lonely), 0)
        self.assertEqual(count_dead_ends(OccupancyGrid.from_rows([[1, 1], [1, 0]])), 0)

    def test_difficulty_thresholds(self) -> None:
        self.assertEqual(classify_difficulty(101, 51), Difficulty.HARD)
        self.assertEqual(classify_difficulty(101, 50), Difficulty.MEDIUM)
        self.assertEqual(classify_difficulty(100, 51), Difficulty.MEDIUM)
        self.assertEqual(classify_difficulty(51, 26), Difficulty.MEDIUM)
        self.assertEqual(classify_difficulty(50, 26), Difficulty.EASY)
        self.assertEqual(classify_difficulty(200, 25), Difficulty.EASY)
        self.assertEqual(classify_difficulty(0, 0), Difficulty.EASY)

    def test_stats_are_pure_and_pass_timing_through(self) -> None:
        grid = MazeGenerator(seed=11).generate(29, 29)
        path = MazeSolver().solve(grid, (0, 0), (28, 28))
        first = calculate_stats(grid, path, 12.5)
        second = calculate_stats(grid, path, 3.0)
        self.assertEqual(first.path_length, len(path))
        self.assertEqual(first.solve_time_ms, 12.5)
        self.assertEqual(
            (first.path_length, first.dead_end_count, first.difficulty),
            (second.path_length, second.dead_end_count, second.difficulty),
        )
        self.assertEqual(first.dead_end_count, count_dead_ends(grid))
        self.assertEqual(MazeSolver().calculate_stats(grid, path, 12.5), first)

    def test_empty_path_is_easy_with_zero_length(self) -> None:
        stats = calculate_stats(OccupancyGrid(5, 5), [], 0.0)
        self.assertEqual(stats.path_length, 0)
        self.assertEqual(stats.difficulty, Difficulty.EASY)
        self.assertEqual(stats.to_dict()["difficulty"], "Easy")

    def test_negative_timing_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            calculate_stats(OccupancyGrid(3, 3), [], -1.0)

    def test_timed_solve_measures_outside_the_solver(self) -> None:
        grid = MazeGenerator(seed=4).generate(21, 21)
        result = timed_solve(grid, (0, 0), (20, 20))
        self.assertTrue(result.solved)
        self.assertGreaterEqual(result.statistics.solve_time_ms, 0.0)
        self.assertEqual(result.statistics.path_length, len(result.path))
        payload = result.to_dict()
        self.assertEqual(payload["path"][0], [0, 0])
        self.assertEqual(payload["path"][-1], [20, 20])

    def test_unsolvable_result_is_reported_not_raised(self) -> None:
        result = timed_solve(OccupancyGrid.from_rows(PARTITIONED), (0, 0), (4, 4))
        self.assertFalse(result.solved)
        self.assertEqual(result.statistics.path_length, 0)


if __name__ == "__main__":
    unittest.main()
