"""
Map Generation API Routes.

Thin HTTP surface over the generation engine. Nothing is stored: every
request generates a fresh map and returns its record.
"""
from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Any, List, Optional

from mapgen.config import get_settings
from mapgen.core.errors import ValidationError
from mapgen.core.map_generation import (
    GeneratorParameters,
    TerrainType,
    generate,
    get_preset_by_name,
    get_presets_by_terrain,
    PRESETS,
)

router = APIRouter(prefix="/maps", tags=["map_generation"])

TERRAIN_DESCRIPTIONS = {
    TerrainType.HOUSE: "Rectangular rooms joined by straight corridors",
    TerrainType.DUNGEON: "Rough-edged rooms joined by winding corridors with loops",
    TerrainType.FOREST: "Evenly spaced trees clustered by noise, with clearings",
    TerrainType.CAVE: "A single organic cavity carved by cellular automata",
}


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class GenerateMapRequest(BaseModel):
    """Request to generate a map. Accepts camelCase or snake_case keys."""
    model_config = ConfigDict(populate_by_name=True)

    terrain_type: str = Field(default="House", alias="terrainType", description="House, Dungeon, Forest or Cave")
    width: int = Field(ge=1, description="Map width in cells")
    height: int = Field(ge=1, description="Map height in cells")
    seed: Optional[int] = Field(default=None, description="Random seed")

    # Rooms and corridors
    min_room_size: Optional[int] = Field(default=None, alias="minRoomSize")
    max_room_size: Optional[int] = Field(default=None, alias="maxRoomSize")
    room_count: Optional[int] = Field(default=None, alias="roomCount")
    grid_size: Optional[int] = Field(default=None, alias="gridSize")
    min_room_spacing: Optional[int] = Field(default=None, alias="minRoomSpacing")
    room_padding: Optional[float] = Field(default=None, alias="roomPadding")
    corridor_width: Optional[int] = Field(default=None, alias="corridorWidth")
    walk_steps: Optional[int] = Field(default=None, alias="walkSteps")
    organic_factor: Optional[float] = Field(default=None, alias="organicFactor")
    connectivity_factor: Optional[float] = Field(default=None, alias="connectivityFactor")

    # Forest
    tree_density: Optional[float] = Field(default=None, alias="treeDensity")
    min_tree_distance: Optional[float] = Field(default=None, alias="minTreeDistance")
    noise_scale: Optional[float] = Field(default=None, alias="noiseScale")
    tree_radius: Optional[float] = Field(default=None, alias="treeRadius")

    # Cave
    fill_probability: Optional[float] = Field(default=None, alias="fillProbability")
    smooth_iterations: Optional[int] = Field(default=None, alias="smoothIterations")
    wall_threshold: Optional[int] = Field(default=None, alias="wallThreshold")
    cave_roughness: Optional[float] = Field(default=None, alias="caveRoughness")

    def to_parameters(self) -> GeneratorParameters:
        return GeneratorParameters.from_dict(
            self.model_dump(by_alias=True, exclude_none=True, exclude={"terrain_type"})
        )


class MapResponse(BaseModel):
    """Response containing generated map data."""
    success: bool
    map: Dict[str, Any]
    message: str = ""


class TerrainTypesResponse(BaseModel):
    """Response listing available terrain types."""
    success: bool
    terrain_types: List[Dict[str, str]]


class PresetsResponse(BaseModel):
    """Response listing parameter presets."""
    success: bool
    presets: List[Dict[str, Any]]


# =============================================================================
# HELPERS
# =============================================================================

def _check_dimensions(params: GeneratorParameters) -> None:
    """Reject maps larger than the service allows."""
    limit = get_settings().MAX_MAP_DIMENSION
    for name in ("width", "height"):
        value = getattr(params, name)
        if value > limit:
            raise ValidationError(name, f"{name} must be at most {limit}", value)


def _generate(params: GeneratorParameters, terrain_type: str) -> MapResponse:
    _check_dimensions(params)
    map_data = generate(params, terrain_type, get_settings().CONNECTIVITY_THRESHOLD)

    return MapResponse(
        success=True,
        map=map_data.to_dict(),
        message=(
            f"Generated {map_data.width}x{map_data.height} "
            f"{map_data.terrain_type.value} (seed {map_data.seed})"
        ),
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/generate", response_model=MapResponse)
async def generate_map(request: GenerateMapRequest):
    """
    Generate a procedural map.

    Same parameters and seed always produce the same map. Invalid
    parameters return 400; a map too small for its rooms returns 422.
    """
    return _generate(request.to_parameters(), request.terrain_type)


@router.get("/generate", response_model=MapResponse)
async def generate_map_get(
    terrain_type: str = Query(default="House"),
    width: int = Query(default=60, ge=1),
    height: int = Query(default=60, ge=1),
    seed: Optional[int] = Query(default=None),
    room_count: Optional[int] = Query(default=None),
    min_room_size: Optional[int] = Query(default=None),
    max_room_size: Optional[int] = Query(default=None),
    tree_density: Optional[float] = Query(default=None),
    fill_probability: Optional[float] = Query(default=None),
):
    """
    Generate a procedural map (GET version for convenience).
    """
    request = GenerateMapRequest(
        terrain_type=terrain_type,
        width=width,
        height=height,
        seed=seed,
        room_count=room_count,
        min_room_size=min_room_size,
        max_room_size=max_room_size,
        tree_density=tree_density,
        fill_probability=fill_probability,
    )
    return await generate_map(request)


@router.get("/terrain-types", response_model=TerrainTypesResponse)
async def list_terrain_types():
    """List all terrain types the engine can generate."""
    terrain_types = [
        {"id": tt.value, "name": tt.value, "description": TERRAIN_DESCRIPTIONS[tt]}
        for tt in TerrainType
    ]

    return TerrainTypesResponse(
        success=True,
        terrain_types=terrain_types
    )


@router.get("/presets", response_model=PresetsResponse)
async def list_presets(terrain_type: Optional[str] = Query(default=None)):
    """
    List parameter presets, optionally filtered by terrain type.
    """
    if terrain_type:
        try:
            presets = get_presets_by_terrain(terrain_type)
        except ValueError:
            raise ValidationError("terrain_type", f"Invalid terrain type: {terrain_type}", terrain_type)
    else:
        presets = PRESETS

    return PresetsResponse(
        success=True,
        presets=[p.to_dict() for p in presets]
    )


@router.post("/presets/{name}", response_model=MapResponse)
async def generate_from_preset(name: str, seed: Optional[int] = Query(default=None)):
    """
    Generate a map from a named preset.

    Pass `seed` to reproduce a specific map; otherwise a time-based seed is used.
    """
    preset = get_preset_by_name(name)
    return _generate(preset.to_parameters(seed), preset.terrain_type.value)
