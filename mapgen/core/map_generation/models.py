"""
Data model for the generation engine.

Every value here is created fresh inside one generate() call and handed to
the caller. Python attributes are snake_case; to_dict()/from_dict() speak the
camelCase JSON record consumed by renderers and exporters.
"""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from mapgen.core.errors import ValidationError


class TerrainType(str, Enum):
    """Terrain kinds the engine can generate."""
    HOUSE = "House"
    DUNGEON = "Dungeon"
    FOREST = "Forest"
    CAVE = "Cave"

    @classmethod
    def parse(cls, value: Any) -> "TerrainType":
        """Accept an enum member or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        raise ValueError(f"Invalid terrain type: {value}")


@dataclass
class Point:
    """A grid cell coordinate."""
    x: int
    y: int

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}


@dataclass
class Room:
    """An axis-aligned room rectangle in grid cells."""
    x: int
    y: int
    width: int
    height: int
    doors: List[Point] = field(default_factory=list)
    padding: float = 0.0

    def center(self) -> Tuple[float, float]:
        """Get the exact (possibly fractional) center of the room."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, px: float, py: float) -> bool:
        """Check if a point is inside this room."""
        return (self.x <= px < self.x + self.width and
                self.y <= py < self.y + self.height)

    def overlaps(self, other: "Room", padding: int = 0) -> bool:
        """Check if two rooms overlap, optionally requiring a gap of `padding` cells."""
        return not (
            self.x + self.width + padding <= other.x or
            other.x + other.width + padding <= self.x or
            self.y + self.height + padding <= other.y or
            other.y + other.height + padding <= self.y
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "doors": [d.to_dict() for d in self.doors],
            "padding": self.padding,
        }


@dataclass
class Corridor:
    """A connection between two grid cells, usually room centers."""
    start: Tuple[int, int]
    end: Tuple[int, int]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"start": list(self.start), "end": list(self.end)}


@dataclass
class Tree:
    """A tree placed in a forest. `size` is a radius, not a cell count."""
    x: float
    y: float
    size: float

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y, "size": self.size}


@dataclass
class Edge:
    """A weighted edge between two room indices."""
    from_index: int
    to_index: int
    weight: float


# Python attribute -> JSON key
_PARAMETER_KEYS: Dict[str, str] = {
    "width": "width",
    "height": "height",
    "seed": "seed",
    "min_room_size": "minRoomSize",
    "max_room_size": "maxRoomSize",
    "room_count": "roomCount",
    "grid_size": "gridSize",
    "min_room_spacing": "minRoomSpacing",
    "room_padding": "roomPadding",
    "corridor_width": "corridorWidth",
    "walk_steps": "walkSteps",
    "organic_factor": "organicFactor",
    "connectivity_factor": "connectivityFactor",
    "tree_density": "treeDensity",
    "min_tree_distance": "minTreeDistance",
    "noise_scale": "noiseScale",
    "tree_radius": "treeRadius",
    "fill_probability": "fillProbability",
    "smooth_iterations": "smoothIterations",
    "wall_threshold": "wallThreshold",
    "cave_roughness": "caveRoughness",
}
_JSON_TO_ATTR: Dict[str, str] = {v: k for k, v in _PARAMETER_KEYS.items()}


def json_key(attr: str) -> str:
    """camelCase record key for a GeneratorParameters attribute."""
    return _PARAMETER_KEYS.get(attr, attr)


@dataclass
class GeneratorParameters:
    """
    Input record for every terrain generator.

    Only width and height are required. Unset knobs are None and each
    terrain generator substitutes its own defaults.
    """
    width: int
    height: int
    seed: Optional[int] = None

    # Room/building parameters
    min_room_size: Optional[int] = None
    max_room_size: Optional[int] = None
    room_count: Optional[int] = None
    grid_size: Optional[int] = None  # Grid pitch rooms snap to
    min_room_spacing: Optional[int] = None
    room_padding: Optional[float] = None

    # Corridor parameters
    corridor_width: Optional[int] = None
    walk_steps: Optional[int] = None  # 1-10, higher = straighter corridors
    organic_factor: Optional[float] = None
    connectivity_factor: Optional[float] = None

    # Forest parameters
    tree_density: Optional[float] = None
    min_tree_distance: Optional[float] = None
    noise_scale: Optional[float] = None
    tree_radius: Optional[float] = None

    # Cave parameters
    fill_probability: Optional[float] = None
    smooth_iterations: Optional[int] = None
    wall_threshold: Optional[int] = None
    cave_roughness: Optional[float] = None  # 0.5-2.0 multiplier for fill_probability

    def get(self, name: str, default: Any) -> Any:
        """Get a parameter, falling back to `default` when unset."""
        value = getattr(self, name)
        return default if value is None else value

    def with_seed(self, seed: int) -> "GeneratorParameters":
        """Return a copy with the seed replaced."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["seed"] = seed
        return GeneratorParameters(**data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratorParameters":
        """
        Build parameters from a JSON-style record.

        Accepts camelCase keys (and their snake_case equivalents).

        Raises:
            ValidationError: on unknown keys or missing width/height
        """
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            attr = _JSON_TO_ATTR.get(key, key if key in _PARAMETER_KEYS else None)
            if attr is None:
                raise ValidationError(key, f"Unknown generator parameter '{key}'")
            kwargs[attr] = value

        for required in ("width", "height"):
            if kwargs.get(required) is None:
                raise ValidationError(required, f"{required} is required")

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase dictionary, omitting unset fields."""
        return {
            json_key: getattr(self, attr)
            for attr, json_key in _PARAMETER_KEYS.items()
            if getattr(self, attr) is not None
        }


@dataclass(frozen=True)
class MapData:
    """The result of one generate() call. Never modified after it is returned."""
    width: int
    height: int
    seed: int
    terrain_type: TerrainType
    rooms: Optional[List[Room]] = None
    corridors: Optional[List[Corridor]] = None
    trees: Optional[List[Tree]] = None
    grid: Optional[List[List[int]]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the serializable map record."""
        data: Dict[str, Any] = {
            "width": self.width,
            "height": self.height,
            "seed": self.seed,
            "terrainType": self.terrain_type.value,
        }
        if self.rooms is not None:
            data["rooms"] = [r.to_dict() for r in self.rooms]
        if self.corridors is not None:
            data["corridors"] = [c.to_dict() for c in self.corridors]
        if self.trees is not None:
            data["trees"] = [t.to_dict() for t in self.trees]
        if self.grid is not None:
            data["grid"] = [list(row) for row in self.grid]
        return data
