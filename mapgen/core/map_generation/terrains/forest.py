"""
Forest generator: Poisson-disk tree positions thinned by Perlin noise.
"""
import logging
import math
from typing import List

from ..grid import CLEARING, TREE, Grid, create_grid, in_bounds
from ..models import MapData, TerrainType, Tree
from ..noise import PerlinNoise
from ..poisson import PoissonDiskSampler
from .base import GenerationContext, float_param, validate_dimensions

logger = logging.getLogger(__name__)

# Share of raw points kept when the noise filter rejects everything
FALLBACK_FRACTION = 0.3
FALLBACK_LIMIT = 50


def _truncate(value: float) -> float:
    """Two decimals, rounded down so coordinates stay inside the map."""
    return math.floor(value * 100) / 100


def _fallback_trees(points, tree_radius: float) -> List[Tree]:
    count = max(1, min(int(len(points) * FALLBACK_FRACTION), FALLBACK_LIMIT))
    return [
        Tree(x=_truncate(px), y=_truncate(py), size=tree_radius)
        for px, py in points[:count]
    ]


def rasterize_trees(grid: Grid, trees: List[Tree]) -> None:
    """Mark every cell within ceil(size) of a tree's cell as TREE."""
    for tree in trees:
        radius = math.ceil(tree.size or 1)
        cx = int(math.floor(tree.x))
        cy = int(math.floor(tree.y))
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if dx * dx + dy * dy > radius * radius:
                    continue
                if in_bounds(grid, cx + dx, cy + dy):
                    grid[cy + dy][cx + dx] = TREE


def generate_forest(ctx: GenerationContext) -> MapData:
    """
    Generate a forest.

    Points come from Poisson-disk sampling so trees never crowd each other;
    a point becomes a tree when the normalized octave noise at its position
    exceeds 1 - treeDensity. If the filter accepts nothing, the first few
    raw points are kept so the forest is never empty.

    Raises:
        ValidationError: invalid parameters
    """
    validate_dimensions(ctx.params)
    tree_density = float_param(ctx.params, "tree_density", 0.3, low=0.0, high=1.0)
    min_tree_distance = float_param(ctx.params, "min_tree_distance", 3, low=1.0)
    noise_scale = float_param(ctx.params, "noise_scale", 0.05, positive=True)
    tree_radius = float_param(ctx.params, "tree_radius", 1.5, low=0.5, high=5.0)

    sampler = PoissonDiskSampler(ctx.width, ctx.height, min_tree_distance, seed=ctx.seed)
    points = sampler.generate()

    noise = PerlinNoise(seed=ctx.seed)
    threshold = 1 - tree_density
    trees: List[Tree] = []

    for px, py in points:
        value = noise.octave_noise(px * noise_scale, py * noise_scale, octaves=4, persistence=0.5)
        normalized = (value + 1) / 2
        if normalized > threshold:
            size = round(tree_radius * (0.7 + normalized * 0.8), 1)
            trees.append(Tree(x=_truncate(px), y=_truncate(py), size=size))

    logger.debug(
        f"Forest accepted {len(trees)}/{len(points)} points (threshold {threshold:.3f})"
    )

    if not trees and points:
        trees = _fallback_trees(points, tree_radius)
        logger.warning(
            f"No trees passed the density filter (density {tree_density}); "
            f"kept {len(trees)} fallback trees"
        )

    grid = create_grid(ctx.width, ctx.height, CLEARING)
    rasterize_trees(grid, trees)

    return MapData(
        width=ctx.width,
        height=ctx.height,
        seed=ctx.seed,
        terrain_type=TerrainType.FOREST,
        trees=trees,
        grid=grid,
    )
