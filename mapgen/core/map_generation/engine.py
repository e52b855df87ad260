"""
Generation entry point.

Routes a parameter set to the terrain generator registered for its terrain
type. Every call builds its own context (seed, random stream, noise fields),
so concurrent calls never share state.

Usage:
    from mapgen.core.map_generation import generate, GeneratorParameters
    map_data = generate(GeneratorParameters(width=60, height=60, seed=12345), "House")
"""
import logging
from typing import Any, Callable, Dict, Union

from mapgen.core.errors import UnknownTerrainError

from .models import GeneratorParameters, MapData, TerrainType
from .terrains import GenerationContext, generate_cave, generate_dungeon, generate_forest, generate_house

logger = logging.getLogger(__name__)

Generator = Callable[[GenerationContext], MapData]

# ---------------------------------------------------------------------------
# Generator registry
# ---------------------------------------------------------------------------

_GENERATORS: Dict[TerrainType, Generator] = {
    TerrainType.HOUSE: generate_house,
    TerrainType.DUNGEON: generate_dungeon,
    TerrainType.FOREST: generate_forest,
    TerrainType.CAVE: generate_cave,
}


def get_generator(terrain_type: Union[TerrainType, str]) -> Generator:
    """
    Look up the generator for a terrain type.

    Raises:
        UnknownTerrainError: no generator is registered for it
    """
    try:
        terrain = TerrainType.parse(terrain_type)
    except ValueError:
        raise UnknownTerrainError(terrain_type)
    generator = _GENERATORS.get(terrain)
    if generator is None:
        raise UnknownTerrainError(terrain_type)
    return generator


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def generate(
    parameters: Union[GeneratorParameters, Dict[str, Any]],
    terrain_type: Union[TerrainType, str],
    connectivity_threshold: float = 1.0,
) -> MapData:
    """
    Generate one map.

    Args:
        parameters: GeneratorParameters, or a camelCase record of them
        terrain_type: House, Dungeon, Forest or Cave
        connectivity_threshold: Fraction of rooms that must be reachable
            before connectivity diagnostics stay quiet

    Returns:
        A new MapData owned by the caller

    Raises:
        ValidationError: invalid parameters (before any work is done)
        UnknownTerrainError: unregistered terrain type
        GenerationFailure: the map cannot hold enough rooms
    """
    if isinstance(parameters, dict):
        parameters = GeneratorParameters.from_dict(parameters)

    generator = get_generator(terrain_type)
    ctx = GenerationContext.create(parameters, connectivity_threshold)

    map_data = generator(ctx)

    logger.info(
        f"Generated {map_data.terrain_type.value} {map_data.width}x{map_data.height} "
        f"(seed {map_data.seed}): {len(map_data.rooms or [])} rooms, "
        f"{len(map_data.corridors or [])} corridors, {len(map_data.trees or [])} trees"
    )
    return map_data


def house(parameters: Union[GeneratorParameters, Dict[str, Any]], **kwargs) -> MapData:
    """Generate a house. Shorthand for generate(parameters, "House")."""
    return generate(parameters, TerrainType.HOUSE, **kwargs)


def dungeon(parameters: Union[GeneratorParameters, Dict[str, Any]], **kwargs) -> MapData:
    return generate(parameters, TerrainType.DUNGEON, **kwargs)


def forest(parameters: Union[GeneratorParameters, Dict[str, Any]], **kwargs) -> MapData:
    return generate(parameters, TerrainType.FOREST, **kwargs)


def cave(parameters: Union[GeneratorParameters, Dict[str, Any]], **kwargs) -> MapData:
    return generate(parameters, TerrainType.CAVE, **kwargs)
