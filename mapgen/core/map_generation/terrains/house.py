"""
House generator: BSP rooms joined by straight L-shaped corridors.
"""
import logging

from ..bsp import BSPContainer, SpacePartitioner
from ..connectivity import connect_rooms, report_connectivity, validate_graph
from ..corridors import CorridorCarver
from ..grid import WALL, create_grid
from ..models import MapData, TerrainType
from .base import GenerationContext, carve_rooms, fill_room, read_room_settings

logger = logging.getLogger(__name__)


def generate_house(ctx: GenerationContext) -> MapData:
    """
    Generate a house layout.

    Pipeline: hybrid BSP partition -> trim/pad leaves to roomCount ->
    carve rooms -> MST -> L-shaped corridors.

    Raises:
        ValidationError: invalid parameters
        GenerationFailure: the map cannot hold enough rooms
    """
    settings = read_room_settings(ctx.params, min_room_size=4, max_room_size=10, room_count=8)

    partitioner = SpacePartitioner(ctx.rng, min_leaf_size=settings.min_leaf_size)
    leaves = partitioner.partition_hybrid(BSPContainer(0, 0, ctx.width, ctx.height), settings.room_count)
    logger.debug(f"House partition produced {len(leaves)} leaves (target {settings.room_count})")
    leaves = partitioner.fit_leaf_count(leaves, settings.room_count)

    rooms = carve_rooms(ctx, leaves, settings)

    grid = create_grid(ctx.width, ctx.height, WALL)
    for room in rooms:
        fill_room(grid, room)

    corridors = connect_rooms(rooms)
    carver = CorridorCarver(grid, ctx.rng, settings.corridor_width)
    for corridor in corridors:
        carver.carve_l_shaped(corridor.start, corridor.end)

    report_connectivity(validate_graph(rooms, corridors), ctx.connectivity_threshold, "House")

    return MapData(
        width=ctx.width,
        height=ctx.height,
        seed=ctx.seed,
        terrain_type=TerrainType.HOUSE,
        rooms=rooms,
        corridors=corridors,
        grid=grid,
    )
