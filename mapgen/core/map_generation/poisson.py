"""
Poisson-disk ("blue noise") point sampling.

Fast Poisson Disk Sampling (Bridson): every returned point is at least
`min_distance` from every other point, and all points lie inside
[0, width) x [0, height).
"""
import logging
import math
from typing import List, Optional, Tuple

from .rng import SeededRandom

logger = logging.getLogger(__name__)

Sample = Tuple[float, float]

# Cells searched around a candidate. Cell size is min_distance / sqrt(2),
# so any point closer than min_distance lies within two cells.
_SEARCH_RADIUS = 2


class PoissonDiskSampler:
    """Generates evenly spaced random points with a guaranteed minimum distance."""

    def __init__(self, width: float, height: float, min_distance: float, seed: Optional[int] = None):
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        if min_distance <= 0:
            raise ValueError("min_distance must be positive")

        self.width = width
        self.height = height
        self.min_distance = min_distance
        self.random = SeededRandom(seed)

        self.cell_size = min_distance / math.sqrt(2)
        self.cols = max(1, math.ceil(width / self.cell_size))
        self.rows = max(1, math.ceil(height / self.cell_size))

    def _cell(self, point: Sample) -> Tuple[int, int]:
        col = min(self.cols - 1, int(point[0] // self.cell_size))
        row = min(self.rows - 1, int(point[1] // self.cell_size))
        return row, col

    def _is_valid(self, point: Sample, grid: List[List[Optional[Sample]]]) -> bool:
        x, y = point
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return False

        row, col = self._cell(point)
        min_sq = self.min_distance * self.min_distance
        for r in range(max(0, row - _SEARCH_RADIUS), min(self.rows - 1, row + _SEARCH_RADIUS) + 1):
            for c in range(max(0, col - _SEARCH_RADIUS), min(self.cols - 1, col + _SEARCH_RADIUS) + 1):
                neighbor = grid[r][c]
                if neighbor is not None:
                    dx = x - neighbor[0]
                    dy = y - neighbor[1]
                    if dx * dx + dy * dy < min_sq:
                        return False
        return True

    def generate(self, max_attempts_per_point: int = 30) -> List[Sample]:
        """
        Generate points.

        Args:
            max_attempts_per_point: candidates tried around an active point
                before it is retired

        Returns:
            List of (x, y) float tuples in insertion order
        """
        grid: List[List[Optional[Sample]]] = [[None] * self.cols for _ in range(self.rows)]
        active: List[Sample] = []
        points: List[Sample] = []

        first = (
            self.random.next_float(0, self.width),
            self.random.next_float(0, self.height),
        )
        row, col = self._cell(first)
        grid[row][col] = first
        active.append(first)
        points.append(first)

        while active:
            idx = self.random.next_int(0, len(active) - 1)
            px, py = active[idx]
            found = False

            for _ in range(max_attempts_per_point):
                angle = self.random.next_float(0, 2 * math.pi)
                radius = self.random.next_float(self.min_distance, 2 * self.min_distance)
                candidate = (px + radius * math.cos(angle), py + radius * math.sin(angle))

                if self._is_valid(candidate, grid):
                    r, c = self._cell(candidate)
                    grid[r][c] = candidate
                    active.append(candidate)
                    points.append(candidate)
                    found = True
                    break

            if not found:
                active.pop(idx)

        logger.debug(f"Poisson sampling produced {len(points)} points on {self.width}x{self.height}")
        return points
