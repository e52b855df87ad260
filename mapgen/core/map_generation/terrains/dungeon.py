"""
Dungeon generator: BSP rooms with rough edges, joined by winding corridors.

Corridors follow the MST plus a few extra loop edges and are carved as
biased random walks between the nearest floor cells of each room pair.
"""
import logging

from ..bsp import BSPContainer, SpacePartitioner
from ..connectivity import (
    add_extra_connections,
    build_mst,
    edges_to_corridors,
    interior_cell,
    report_connectivity,
    validate_graph,
    validate_grid,
)
from ..corridors import CorridorCarver
from ..grid import FLOOR, WALL, Grid, create_grid, find_nearest_floor
from ..models import MapData, Room, TerrainType
from ..rng import SeededRandom
from .base import GenerationContext, carve_rooms, float_param, int_param, read_room_settings

logger = logging.getLogger(__name__)


def carve_organic_room(grid: Grid, room: Room, rng: SeededRandom, organic_factor: float) -> None:
    """Fill a room with floor, leaving each edge cell as wall with probability organic_factor."""
    right = room.x + room.width - 1
    bottom = room.y + room.height - 1
    for y in range(room.y, bottom + 1):
        for x in range(room.x, right + 1):
            on_edge = x in (room.x, right) or y in (room.y, bottom)
            if on_edge and rng.next() < organic_factor:
                continue
            grid[y][x] = FLOOR


def generate_dungeon(ctx: GenerationContext) -> MapData:
    """
    Generate a dungeon.

    Pipeline: depth-limited BSP -> trim/pad leaves to roomCount -> carve
    rooms with organic edges -> MST + extra edges -> random-walk corridors.

    Raises:
        ValidationError: invalid parameters
        GenerationFailure: the map cannot hold enough rooms
    """
    settings = read_room_settings(ctx.params, min_room_size=5, max_room_size=12, room_count=10)
    walk_steps = int_param(ctx.params, "walk_steps", 7, low=1, high=10)
    organic_factor = float_param(ctx.params, "organic_factor", 0.3, low=0.0, high=1.0)
    connectivity_factor = float_param(ctx.params, "connectivity_factor", 0.15, low=0.0, high=1.0)

    partitioner = SpacePartitioner(ctx.rng, min_leaf_size=settings.min_leaf_size)
    max_depth = SpacePartitioner.depth_for(settings.room_count)
    leaves = partitioner.partition(BSPContainer(0, 0, ctx.width, ctx.height), max_depth)
    logger.debug(f"Dungeon partition produced {len(leaves)} leaves at depth {max_depth}")
    leaves = partitioner.fit_leaf_count(leaves, settings.room_count)

    rooms = carve_rooms(ctx, leaves, settings)

    grid = create_grid(ctx.width, ctx.height, WALL)
    for room in rooms:
        carve_organic_room(grid, room, ctx.rng, organic_factor)

    edges = build_mst(rooms)
    edges = add_extra_connections(rooms, edges, connectivity_factor, ctx.rng)
    corridors = edges_to_corridors(rooms, edges)

    carver = CorridorCarver(grid, ctx.rng, settings.corridor_width)
    for edge in edges:
        start = find_nearest_floor(grid, *interior_cell(rooms[edge.from_index]))
        end = find_nearest_floor(grid, *interior_cell(rooms[edge.to_index]))
        carver.carve_random_walk(start, end, walk_steps, organic_factor)

    logger.debug(f"Dungeon carved {len(corridors)} corridors ({len(edges) - (len(rooms) - 1)} extra)")

    report_connectivity(validate_graph(rooms, corridors), ctx.connectivity_threshold, "Dungeon")
    report_connectivity(validate_grid(grid, rooms), ctx.connectivity_threshold, "Dungeon grid")

    return MapData(
        width=ctx.width,
        height=ctx.height,
        seed=ctx.seed,
        terrain_type=TerrainType.DUNGEON,
        rooms=rooms,
        corridors=corridors,
        grid=grid,
    )
