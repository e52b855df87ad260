"""
Named parameter presets for each terrain type.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from mapgen.core.errors import PresetNotFoundError

from .models import GeneratorParameters, TerrainType


@dataclass
class Preset:
    """A named, ready-to-generate parameter set."""
    name: str
    terrain_type: TerrainType
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_parameters(self, seed: Optional[int] = None) -> GeneratorParameters:
        """Build GeneratorParameters from the preset, optionally pinning the seed."""
        params = GeneratorParameters.from_dict(self.parameters)
        if seed is not None:
            params = params.with_seed(seed)
        return params

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "terrainType": self.terrain_type.value,
            "parameters": dict(self.parameters),
        }


PRESETS: List[Preset] = [
    Preset("Small House", TerrainType.HOUSE, {
        "width": 60, "height": 60,
        "minRoomSize": 4, "maxRoomSize": 8, "roomCount": 5,
        "corridorWidth": 1, "gridSize": 4,
    }),
    Preset("Large Manor", TerrainType.HOUSE, {
        "width": 100, "height": 100,
        "minRoomSize": 6, "maxRoomSize": 15, "roomCount": 12,
        "corridorWidth": 2, "gridSize": 4,
    }),
    Preset("Small Dungeon", TerrainType.DUNGEON, {
        "width": 80, "height": 80,
        "minRoomSize": 5, "maxRoomSize": 10, "roomCount": 8,
        "corridorWidth": 1, "gridSize": 4,
        "organicFactor": 0.2, "connectivityFactor": 0.1, "walkSteps": 7,
    }),
    Preset("Large Dungeon", TerrainType.DUNGEON, {
        "width": 120, "height": 120,
        "minRoomSize": 6, "maxRoomSize": 14, "roomCount": 15,
        "corridorWidth": 2, "gridSize": 4,
        "organicFactor": 0.4, "connectivityFactor": 0.2, "walkSteps": 6,
    }),
    Preset("Winding Dungeon", TerrainType.DUNGEON, {
        "width": 100, "height": 100,
        "minRoomSize": 5, "maxRoomSize": 12, "roomCount": 12,
        "corridorWidth": 1, "gridSize": 4,
        "organicFactor": 0.5, "connectivityFactor": 0.25, "walkSteps": 4,
    }),
    Preset("Sparse Forest", TerrainType.FOREST, {
        "width": 100, "height": 100,
        "treeDensity": 0.2, "minTreeDistance": 5, "noiseScale": 0.04, "treeRadius": 1.8,
    }),
    Preset("Dense Forest", TerrainType.FOREST, {
        "width": 100, "height": 100,
        "treeDensity": 0.6, "minTreeDistance": 2, "noiseScale": 0.08, "treeRadius": 1.2,
    }),
    Preset("Small Cave", TerrainType.CAVE, {
        "width": 70, "height": 70,
        "fillProbability": 0.45, "smoothIterations": 4, "wallThreshold": 4, "caveRoughness": 1.0,
    }),
    Preset("Sprawling Cave", TerrainType.CAVE, {
        "width": 120, "height": 120,
        "fillProbability": 0.42, "smoothIterations": 5, "wallThreshold": 4, "caveRoughness": 0.9,
    }),
    Preset("Rough Cavern", TerrainType.CAVE, {
        "width": 80, "height": 80,
        "fillProbability": 0.48, "smoothIterations": 3, "wallThreshold": 4, "caveRoughness": 1.4,
    }),
]


def get_presets_by_terrain(terrain_type: Union[TerrainType, str]) -> List[Preset]:
    terrain = TerrainType.parse(terrain_type)
    return [p for p in PRESETS if p.terrain_type == terrain]


def get_preset_by_name(name: str) -> Preset:
    """
    Find a preset by its exact name.

    Raises:
        PresetNotFoundError: no preset has that name
    """
    for preset in PRESETS:
        if preset.name == name:
            return preset
    raise PresetNotFoundError(name)
