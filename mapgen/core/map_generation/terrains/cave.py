"""
Cave generator: a thin façade over the cellular-automaton builder.
"""
import logging

from ..cellular import CaveBuilder
from ..grid import FLOOR, count_cells
from ..models import MapData, TerrainType
from .base import MIN_CAVE_MAP_SIZE, GenerationContext, float_param, int_param, validate_dimensions

logger = logging.getLogger(__name__)


def generate_cave(ctx: GenerationContext) -> MapData:
    """
    Generate a cave with a single connected cavity and solid border.

    caveRoughness scales fillProbability (clamped to [0, 1]) so rougher
    caves start from a denser wall fill.

    Raises:
        ValidationError: invalid parameters
    """
    validate_dimensions(ctx.params, MIN_CAVE_MAP_SIZE)
    fill_probability = float_param(ctx.params, "fill_probability", 0.45, low=0.0, high=1.0)
    smooth_iterations = int_param(ctx.params, "smooth_iterations", 4, low=0)
    wall_threshold = int_param(ctx.params, "wall_threshold", 5, low=0, high=8)
    roughness = float_param(ctx.params, "cave_roughness", 1.0, low=0.5, high=2.0)

    effective_fill = min(1.0, max(0.0, fill_probability * roughness))

    builder = CaveBuilder(
        ctx.rng,
        fill_probability=effective_fill,
        smooth_iterations=smooth_iterations,
        wall_threshold=wall_threshold,
    )
    grid = builder.build(ctx.width, ctx.height)

    floor = count_cells(grid, FLOOR)
    logger.debug(
        f"Cave {ctx.width}x{ctx.height}: {floor} floor cells "
        f"({floor / (ctx.width * ctx.height):.1%}), fill {effective_fill:.2f}"
    )

    return MapData(
        width=ctx.width,
        height=ctx.height,
        seed=ctx.seed,
        terrain_type=TerrainType.CAVE,
        grid=grid,
    )
