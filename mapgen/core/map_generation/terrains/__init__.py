"""Terrain generators. Each takes a GenerationContext and returns MapData."""
from .base import GenerationContext
from .cave import generate_cave
from .dungeon import generate_dungeon
from .forest import generate_forest
from .house import generate_house

__all__ = [
    "GenerationContext",
    "generate_cave",
    "generate_dungeon",
    "generate_forest",
    "generate_house",
]
