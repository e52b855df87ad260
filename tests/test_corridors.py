"""Tests for corridor carving."""
import pytest

from mapgen.core.map_generation import CorridorCarver, SeededRandom
from mapgen.core.map_generation.corridors import target_bias
from mapgen.core.map_generation.grid import FLOOR, WALL, count_cells, create_grid, flood_fill


class TestLShaped:
    """Tests for straight two-segment corridors."""

    def test_connects_endpoints(self, wall_grid):
        """Both endpoints end up in the same floor region."""
        CorridorCarver(wall_grid, SeededRandom(1)).carve_l_shaped((2, 2), (15, 12))
        assert (15, 12) in flood_fill(wall_grid, 2, 2)

    def test_single_width_cell_count(self, wall_grid):
        """A width-1 corridor carves exactly the Manhattan path."""
        CorridorCarver(wall_grid, SeededRandom(4)).carve_l_shaped((3, 3), (10, 8))
        assert count_cells(wall_grid, FLOOR) == (10 - 3) + (8 - 3) + 1

    def test_both_orders_occur(self):
        """The segment order is chosen at random."""
        corners = set()
        for seed in range(1, 30):
            grid = create_grid(20, 20, WALL)
            CorridorCarver(grid, SeededRandom(seed)).carve_l_shaped((2, 2), (12, 12))
            corners.add((grid[2][12], grid[12][2]))
        assert (FLOOR, WALL) in corners
        assert (WALL, FLOOR) in corners

    def test_width_three_centered(self, wall_grid):
        """A width-3 horizontal segment spans one row either side of its axis."""
        CorridorCarver(wall_grid, SeededRandom(1), width=3).carve_horizontal(2, 15, 10)
        for x in range(2, 16):
            assert wall_grid[9][x] == FLOOR
            assert wall_grid[10][x] == FLOOR
            assert wall_grid[11][x] == FLOOR
        assert wall_grid[8][5] == WALL
        assert wall_grid[12][5] == WALL

    def test_width_two(self, wall_grid):
        """Even widths extend toward positive coordinates."""
        CorridorCarver(wall_grid, SeededRandom(1), width=2).carve_vertical(2, 6, 10)
        assert wall_grid[4][10] == FLOOR
        assert wall_grid[4][11] == FLOOR
        assert wall_grid[4][9] == WALL

    def test_clipped_at_edges(self, wall_grid):
        """Wide corridors along the border never index outside the grid."""
        carver = CorridorCarver(wall_grid, SeededRandom(1), width=5)
        carver.carve_l_shaped((0, 0), (19, 19))
        assert wall_grid[0][0] == FLOOR
        assert wall_grid[19][19] == FLOOR

    def test_invalid_width(self, wall_grid):
        """Width must be at least one."""
        with pytest.raises(ValueError):
            CorridorCarver(wall_grid, SeededRandom(1), width=0)


class TestRandomWalk:
    """Tests for biased random-walk corridors."""

    @pytest.mark.parametrize("walk_steps", [1, 4, 7, 10])
    def test_always_connects(self, walk_steps):
        """The walk always joins start and target."""
        for seed in range(1, 15):
            grid = create_grid(40, 30, WALL)
            carver = CorridorCarver(grid, SeededRandom(seed))
            carver.carve_random_walk((3, 4), (35, 25), walk_steps, organic_factor=0.6)
            assert (35, 25) in flood_fill(grid, 3, 4)

    def test_path_ends(self, wall_grid):
        """The path starts at the source and ends at the target."""
        path = CorridorCarver(wall_grid, SeededRandom(2)).carve_random_walk((2, 2), (17, 15))
        assert path[0] == (2, 2)
        assert path[-1] == (17, 15)

    def test_every_path_cell_is_floor(self, wall_grid):
        """Every visited cell is carved."""
        path = CorridorCarver(wall_grid, SeededRandom(5)).carve_random_walk((2, 2), (17, 15), 3, 0.9)
        for x, y in path:
            assert wall_grid[y][x] == FLOOR

    def test_same_start_and_end(self, wall_grid):
        """A zero-length corridor carves the single cell."""
        path = CorridorCarver(wall_grid, SeededRandom(5)).carve_random_walk((6, 6), (6, 6))
        assert path == [(6, 6)]
        assert count_cells(wall_grid, FLOOR) == 1

    def test_deterministic(self):
        """Same seed, same corridor."""
        a = create_grid(30, 30, WALL)
        b = create_grid(30, 30, WALL)
        CorridorCarver(a, SeededRandom(8)).carve_random_walk((1, 1), (28, 20), 5, 0.5)
        CorridorCarver(b, SeededRandom(8)).carve_random_walk((1, 1), (28, 20), 5, 0.5)
        assert a == b

    def test_straight_walk_is_short(self):
        """High walkSteps with no jogs stays close to the Manhattan length."""
        grid = create_grid(40, 40, WALL)
        path = CorridorCarver(grid, SeededRandom(1)).carve_random_walk((2, 2), (30, 20), 10, 0.0)
        assert len(path) == (30 - 2) + (20 - 2) + 1

    def test_target_bias_range(self):
        """walkSteps maps onto a 0.55-0.95 bias."""
        assert target_bias(1) == pytest.approx(0.55)
        assert target_bias(7) == pytest.approx(0.85)
        assert target_bias(10) == pytest.approx(0.95)
