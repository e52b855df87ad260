"""
Grid helpers shared by the carvers and terrain generators.

A grid is a height x width list of rows of small integer codes.
"""
from collections import deque
from typing import Iterable, List, Optional, Set, Tuple

Grid = List[List[int]]
Cell = Tuple[int, int]

# Cell codes
FLOOR = 0
WALL = 1
CLEARING = 0
TREE = 1

_ORTHOGONAL = ((1, 0), (-1, 0), (0, 1), (0, -1))


def create_grid(width: int, height: int, fill: int = FLOOR) -> Grid:
    """Create a height x width grid filled with `fill`."""
    return [[fill] * width for _ in range(height)]


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def in_bounds(grid: Grid, x: int, y: int) -> bool:
    return 0 <= y < len(grid) and 0 <= x < len(grid[0])


def count_wall_neighbors(grid: Grid, x: int, y: int, wall: int = WALL) -> int:
    """Count walls in the 8-neighbourhood of (x, y). Out-of-bounds counts as wall."""
    height = len(grid)
    width = len(grid[0])
    count = 0
    for dy in (-1, 0, 1):
        ny = y + dy
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx = x + dx
            if nx < 0 or nx >= width or ny < 0 or ny >= height:
                count += 1
            elif grid[ny][nx] == wall:
                count += 1
    return count


def flood_fill(grid: Grid, start_x: int, start_y: int, open_value: int = FLOOR) -> Set[Cell]:
    """
    Collect all cells 4-connected to (start_x, start_y) holding `open_value`.

    Returns:
        Set of (x, y) tuples; empty if the start cell is not open.
    """
    if not in_bounds(grid, start_x, start_y) or grid[start_y][start_x] != open_value:
        return set()

    visited = {(start_x, start_y)}
    queue = deque([(start_x, start_y)])
    while queue:
        x, y = queue.popleft()
        for dx, dy in _ORTHOGONAL:
            nx, ny = x + dx, y + dy
            if (nx, ny) in visited or not in_bounds(grid, nx, ny):
                continue
            if grid[ny][nx] == open_value:
                visited.add((nx, ny))
                queue.append((nx, ny))
    return visited


def connected_regions(grid: Grid, open_value: int = FLOOR) -> List[Set[Cell]]:
    """Return every 4-connected region of open cells, in row-major discovery order."""
    seen: Set[Cell] = set()
    regions: List[Set[Cell]] = []
    for y, row in enumerate(grid):
        for x, value in enumerate(row):
            if value == open_value and (x, y) not in seen:
                region = flood_fill(grid, x, y, open_value)
                seen |= region
                regions.append(region)
    return regions


def count_cells(grid: Grid, value: int) -> int:
    return sum(row.count(value) for row in grid)


def find_nearest_floor(grid: Grid, x: int, y: int, max_radius: int = 10) -> Cell:
    """
    Find the floor cell nearest to (x, y) by searching square rings outward.

    Falls back to (x, y) itself when no floor lies within `max_radius`.
    """
    if in_bounds(grid, x, y) and grid[y][x] == FLOOR:
        return (x, y)

    for radius in range(1, max_radius + 1):
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                # Perimeter of the current ring only
                if abs(dx) != radius and abs(dy) != radius:
                    continue
                nx, ny = x + dx, y + dy
                if in_bounds(grid, nx, ny) and grid[ny][nx] == FLOOR:
                    return (nx, ny)

    return (x, y)


def first_cell(grid: Grid, cells: Iterable[Cell], value: int = FLOOR) -> Optional[Cell]:
    """Return the first of `cells` that is in bounds and holds `value`."""
    for x, y in cells:
        if in_bounds(grid, x, y) and grid[y][x] == value:
            return (x, y)
    return None
