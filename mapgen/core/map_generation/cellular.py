"""
Cellular-automaton cave builder.

Random fill -> smoothing passes -> border walls -> keep the largest cavity.
"""
import logging
from typing import Optional

from .grid import FLOOR, WALL, Grid, connected_regions, count_wall_neighbors, create_grid
from .rng import SeededRandom

logger = logging.getLogger(__name__)


class CaveBuilder:
    """Builds a single-cavity cave grid (FLOOR = 0, WALL = 1)."""

    def __init__(
        self,
        rng: SeededRandom,
        fill_probability: float = 0.45,
        smooth_iterations: int = 4,
        wall_threshold: int = 5,
    ):
        self.rng = rng
        self.fill_probability = fill_probability
        self.smooth_iterations = smooth_iterations
        self.wall_threshold = wall_threshold

    def build(self, width: int, height: int) -> Grid:
        grid = self.random_fill(width, height)
        for _ in range(self.smooth_iterations):
            grid = self.smooth(grid)
        self.enforce_border(grid)
        self.keep_largest_region(grid)
        return grid

    def random_fill(self, width: int, height: int) -> Grid:
        """Border cells are wall; interior cells are wall with fill_probability."""
        grid = create_grid(width, height, WALL)
        for y in range(1, height - 1):
            for x in range(1, width - 1):
                grid[y][x] = WALL if self.rng.next() < self.fill_probability else FLOOR
        return grid

    def smooth(self, grid: Grid) -> Grid:
        """
        One automaton pass over a snapshot of `grid`.

        A cell becomes wall when at least wall_threshold of its 8 neighbours
        are wall (out-of-bounds counts as wall), floor otherwise.
        """
        height = len(grid)
        width = len(grid[0])
        result = create_grid(width, height, FLOOR)
        for y in range(height):
            for x in range(width):
                walls = count_wall_neighbors(grid, x, y)
                result[y][x] = WALL if walls >= self.wall_threshold else FLOOR
        self.enforce_border(result)
        return result

    @staticmethod
    def enforce_border(grid: Grid) -> None:
        height = len(grid)
        width = len(grid[0])
        for x in range(width):
            grid[0][x] = WALL
            grid[height - 1][x] = WALL
        for y in range(height):
            grid[y][0] = WALL
            grid[y][width - 1] = WALL

    @staticmethod
    def keep_largest_region(grid: Grid) -> Optional[int]:
        """
        Fill every floor region except the largest with wall.

        Returns:
            Size of the kept region, or None when the grid has no floor
        """
        regions = connected_regions(grid, FLOOR)
        if not regions:
            logger.warning(f"Cave has no floor cells ({len(grid[0])}x{len(grid)})")
            return None

        largest = max(regions, key=len)
        for region in regions:
            if region is largest:
                continue
            for x, y in region:
                grid[y][x] = WALL

        logger.debug(f"Kept largest cave region of {len(largest)} cells, removed {len(regions) - 1} others")
        return len(largest)
