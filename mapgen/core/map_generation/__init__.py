"""
Procedural terrain generation.

Turns a GeneratorParameters record and a seed into a MapData value for one
of four terrains:
- House: BSP rooms joined by L-shaped corridors
- Dungeon: BSP rooms with organic edges and random-walk corridors plus loops
- Forest: Poisson-disk trees thinned by Perlin noise
- Cave: cellular-automaton cavity
"""
from .bsp import BSPContainer, SpacePartitioner
from .cellular import CaveBuilder
from .connectivity import (
    ConnectivityReport,
    add_extra_connections,
    build_mst,
    connect_rooms,
    validate_graph,
    validate_grid,
)
from .corridors import CorridorCarver
from .engine import cave, dungeon, forest, generate, get_generator, house
from .models import (
    Corridor,
    Edge,
    GeneratorParameters,
    MapData,
    Point,
    Room,
    TerrainType,
    Tree,
)
from .noise import PerlinNoise
from .poisson import PoissonDiskSampler
from .presets import PRESETS, Preset, get_preset_by_name, get_presets_by_terrain
from .rng import SeededRandom
from .rooms import RoomCarver, RoomCarverConfig
from .terrains import GenerationContext

__all__ = [
    # Entry points
    "generate",
    "get_generator",
    "house",
    "dungeon",
    "forest",
    "cave",
    "GenerationContext",
    # Models
    "TerrainType",
    "GeneratorParameters",
    "MapData",
    "Room",
    "Corridor",
    "Tree",
    "Point",
    "Edge",
    # Components
    "SeededRandom",
    "PerlinNoise",
    "PoissonDiskSampler",
    "BSPContainer",
    "SpacePartitioner",
    "RoomCarver",
    "RoomCarverConfig",
    "CorridorCarver",
    "CaveBuilder",
    "ConnectivityReport",
    "build_mst",
    "add_extra_connections",
    "connect_rooms",
    "validate_graph",
    "validate_grid",
    # Presets
    "Preset",
    "PRESETS",
    "get_presets_by_terrain",
    "get_preset_by_name",
]
