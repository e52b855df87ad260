"""
Corridor carving on a shared grid.

Two interchangeable strategies:
- L-shaped: one horizontal and one vertical segment, in random order
- Random walk: a biased walk toward the target with occasional jogs
"""
from typing import List, Tuple

from .grid import FLOOR, Grid, in_bounds
from .rng import SeededRandom

Cell = Tuple[int, int]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def target_bias(walk_steps: int) -> float:
    """Probability of stepping along the dominant axis (0.55 at 1, 0.95 at 9-10)."""
    return min(0.95, 0.5 + walk_steps / 20)


class CorridorCarver:
    """Carves corridors of a fixed width into a grid."""

    def __init__(self, grid: Grid, rng: SeededRandom, width: int = 1, floor: int = FLOOR):
        if width < 1:
            raise ValueError("Corridor width must be at least 1")
        self.grid = grid
        self.rng = rng
        self.width = width
        self.floor = floor
        # Offsets keep the corridor centered on its axis
        self._low = -((width - 1) // 2)
        self._high = width // 2

    # -------------------------------------------------------------------------
    # Primitives
    # -------------------------------------------------------------------------

    def carve_cell(self, x: int, y: int) -> None:
        """Carve a width x width square centered on (x, y)."""
        for dy in range(self._low, self._high + 1):
            for dx in range(self._low, self._high + 1):
                if in_bounds(self.grid, x + dx, y + dy):
                    self.grid[y + dy][x + dx] = self.floor

    def carve_horizontal(self, x1: int, x2: int, y: int) -> None:
        for x in range(min(x1, x2), max(x1, x2) + 1):
            for dy in range(self._low, self._high + 1):
                if in_bounds(self.grid, x, y + dy):
                    self.grid[y + dy][x] = self.floor

    def carve_vertical(self, y1: int, y2: int, x: int) -> None:
        for y in range(min(y1, y2), max(y1, y2) + 1):
            for dx in range(self._low, self._high + 1):
                if in_bounds(self.grid, x + dx, y):
                    self.grid[y][x + dx] = self.floor

    # -------------------------------------------------------------------------
    # Strategies
    # -------------------------------------------------------------------------

    def carve_l_shaped(self, start: Cell, end: Cell) -> None:
        """Connect two cells with a horizontal and a vertical segment."""
        x1, y1 = start
        x2, y2 = end

        if self.rng.next() > 0.5:
            # Horizontal then vertical
            self.carve_horizontal(x1, x2, y1)
            self.carve_vertical(y1, y2, x2)
        else:
            # Vertical then horizontal
            self.carve_vertical(y1, y2, x1)
            self.carve_horizontal(x1, x2, y2)

    def carve_random_walk(
        self,
        start: Cell,
        end: Cell,
        walk_steps: int = 7,
        organic_factor: float = 0.3,
    ) -> List[Cell]:
        """
        Walk from start toward end, carving every cell visited.

        Args:
            start: Source cell
            end: Target cell
            walk_steps: 1-10, higher = straighter corridor
            organic_factor: Drives the chance (organic_factor / 3) of a
                perpendicular jog after each step

        Returns:
            Cells visited, in order
        """
        x, y = start
        end_x, end_y = end
        bias = target_bias(walk_steps)
        jog_chance = organic_factor / 3

        grid_height = len(self.grid)
        grid_width = len(self.grid[0])
        max_steps = (abs(end_x - x) + abs(end_y - y)) * 3

        path = [(x, y)]
        self.carve_cell(x, y)
        steps = 0

        while (x != end_x or y != end_y) and steps < max_steps:
            dx = end_x - x
            dy = end_y - y

            if abs(dx) > abs(dy):
                moved_horizontally = self.rng.next() < bias or dy == 0
            else:
                moved_horizontally = not (self.rng.next() < bias or dx == 0)

            if moved_horizontally:
                x += _sign(dx)
            else:
                y += _sign(dy)
            self.carve_cell(x, y)
            path.append((x, y))

            if self.rng.next() < jog_chance:
                # Perpendicular jog: toward the target if possible, else either way
                if moved_horizontally:
                    step = _sign(end_y - y) or (1 if self.rng.next() > 0.5 else -1)
                    if 1 <= y + step <= grid_height - 2:
                        y += step
                else:
                    step = _sign(end_x - x) or (1 if self.rng.next() > 0.5 else -1)
                    if 1 <= x + step <= grid_width - 2:
                        x += step
                if path[-1] != (x, y):
                    self.carve_cell(x, y)
                    path.append((x, y))

            steps += 1

        # Force both ends open so the connection always closes
        self.carve_cell(x, y)
        self.carve_cell(end_x, end_y)

        if (x, y) != (end_x, end_y):
            # Step cap reached: finish with a straight connector
            self.carve_horizontal(x, end_x, y)
            self.carve_vertical(y, end_y, end_x)
            path.append((end_x, end_y))

        return path
