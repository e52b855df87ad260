"""Tests for the cellular-automaton cave builder."""
import logging

from mapgen.core.map_generation import CaveBuilder, SeededRandom
from mapgen.core.map_generation.grid import (
    FLOOR,
    WALL,
    connected_regions,
    copy_grid,
    count_cells,
    count_wall_neighbors,
    create_grid,
)


def open_box(width, height):
    """Wall border around an all-floor interior."""
    grid = create_grid(width, height, FLOOR)
    CaveBuilder.enforce_border(grid)
    return grid


class TestNeighbourCount:
    """Tests for the 8-neighbourhood wall count."""

    def test_out_of_bounds_counts_as_wall(self):
        """A corner cell of an open grid sees five out-of-bounds walls."""
        grid = create_grid(5, 5, FLOOR)
        assert count_wall_neighbors(grid, 0, 0) == 5
        assert count_wall_neighbors(grid, 2, 2) == 0


class TestRandomFill:
    """Tests for the initial noise grid."""

    def test_border_always_wall(self):
        """Random fill starts with a solid border."""
        grid = CaveBuilder(SeededRandom(1), fill_probability=0.0).random_fill(10, 8)
        assert all(grid[0][x] == WALL and grid[7][x] == WALL for x in range(10))
        assert all(grid[y][0] == WALL and grid[y][9] == WALL for y in range(8))
        assert count_cells(grid, FLOOR) == 8 * 6

    def test_full_fill(self):
        """fill_probability 1 makes every cell wall."""
        grid = CaveBuilder(SeededRandom(1), fill_probability=1.0).random_fill(10, 8)
        assert count_cells(grid, FLOOR) == 0


class TestSmoothing:
    """Tests for one automaton pass."""

    def test_uses_snapshot(self):
        """A pass reads only the previous generation."""
        grid = open_box(5, 5)
        before = copy_grid(grid)
        result = CaveBuilder(SeededRandom(1), wall_threshold=5).smooth(grid)
        assert grid == before
        # Inner corners touch five border walls; edge middles touch three
        assert result[1][1] == WALL
        assert result[1][2] == FLOOR
        assert result[2][2] == FLOOR

    def test_solid_stays_solid(self):
        """An all-wall grid is a fixed point."""
        grid = create_grid(6, 6, WALL)
        assert CaveBuilder(SeededRandom(1)).smooth(grid) == grid


class TestRegionSelection:
    """Tests for keeping the largest cavity."""

    def test_keeps_largest(self):
        """Smaller floor pockets are walled in."""
        grid = create_grid(10, 6, WALL)
        for x in range(1, 5):
            grid[2][x] = FLOOR
        grid[4][8] = FLOOR
        assert CaveBuilder.keep_largest_region(grid) == 4
        assert grid[4][8] == WALL
        assert len(connected_regions(grid)) == 1

    def test_no_floor_warns(self, caplog):
        """An all-wall grid is returned as is with a warning."""
        grid = create_grid(6, 6, WALL)
        with caplog.at_level(logging.WARNING, logger="mapgen.core.map_generation.cellular"):
            assert CaveBuilder.keep_largest_region(grid) is None
        assert "no floor" in caplog.text


class TestBuild:
    """Tests for the whole pipeline."""

    def test_borders_and_single_region(self):
        """Built caves have a solid border and one cavity."""
        grid = CaveBuilder(SeededRandom(12345)).build(50, 40)
        assert all(cell == WALL for cell in grid[0])
        assert all(cell == WALL for cell in grid[-1])
        assert all(row[0] == WALL and row[-1] == WALL for row in grid)
        assert len(connected_regions(grid)) <= 1

    def test_deterministic(self):
        """Same seed, same cave."""
        a = CaveBuilder(SeededRandom(77)).build(40, 40)
        b = CaveBuilder(SeededRandom(77)).build(40, 40)
        assert a == b
