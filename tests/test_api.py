"""Tests for the map generation HTTP handlers and error responses."""
import json

import pytest

from mapgen.api.routes.map_generation import (
    GenerateMapRequest,
    generate_from_preset,
    generate_map,
    generate_map_get,
    list_presets,
    list_terrain_types,
)
from mapgen.config import get_settings
from mapgen.core.errors import GenerationFailure, PresetNotFoundError, ValidationError
from mapgen.middleware.error_handler import error_response


class TestGenerateRequest:
    """Tests for the request model."""

    def test_camel_case_body(self):
        """JSON bodies use camelCase keys."""
        request = GenerateMapRequest.model_validate({
            "terrainType": "Dungeon", "width": 80, "height": 80, "walkSteps": 4, "organicFactor": 0.2,
        })
        params = request.to_parameters()
        assert request.terrain_type == "Dungeon"
        assert params.walk_steps == 4
        assert params.organic_factor == 0.2
        assert params.seed is None

    def test_snake_case_names(self):
        """Field names work as well as aliases."""
        request = GenerateMapRequest(terrain_type="Cave", width=30, height=30, fill_probability=0.4)
        assert request.to_parameters().fill_probability == 0.4


class TestGenerateEndpoints:
    """Tests for the generate handlers."""

    @pytest.mark.asyncio
    async def test_post_generate(self):
        """POST /maps/generate returns a serialized map."""
        response = await generate_map(GenerateMapRequest(terrain_type="Cave", width=40, height=30, seed=7))
        assert response.success
        assert response.map["terrainType"] == "Cave"
        assert response.map["seed"] == 7
        assert len(response.map["grid"]) == 30
        assert "seed 7" in response.message

    @pytest.mark.asyncio
    async def test_post_generate_house(self):
        """House maps include rooms and corridors."""
        request = GenerateMapRequest.model_validate({
            "terrainType": "House", "width": 60, "height": 60, "seed": 12345,
            "minRoomSize": 4, "maxRoomSize": 8, "roomCount": 5,
        })
        response = await generate_map(request)
        rooms = response.map["rooms"]
        assert 1 <= len(rooms) <= 5
        assert len(response.map["corridors"]) == len(rooms) - 1

    @pytest.mark.asyncio
    async def test_get_generate(self):
        """GET /maps/generate mirrors the POST form."""
        response = await generate_map_get(
            terrain_type="Forest",
            width=50,
            height=50,
            seed=3,
            room_count=None,
            min_room_size=None,
            max_room_size=None,
            tree_density=0.5,
            fill_probability=None,
        )
        assert response.map["terrainType"] == "Forest"
        assert response.map["trees"]

    @pytest.mark.asyncio
    async def test_oversized_map_rejected(self):
        """Maps above MAX_MAP_DIMENSION are refused."""
        too_wide = get_settings().MAX_MAP_DIMENSION + 1
        with pytest.raises(ValidationError) as exc_info:
            await generate_map(GenerateMapRequest(terrain_type="Cave", width=too_wide, height=10, seed=1))
        assert exc_info.value.field == "width"

    @pytest.mark.asyncio
    async def test_generation_failure_propagates(self):
        """Engine failures reach the error handlers unchanged."""
        request = GenerateMapRequest.model_validate({
            "terrainType": "House", "width": 10, "height": 10, "seed": 1,
            "minRoomSize": 8, "maxRoomSize": 10, "roomCount": 5,
        })
        with pytest.raises(GenerationFailure):
            await generate_map(request)


class TestListingEndpoints:
    """Tests for terrain and preset listings."""

    @pytest.mark.asyncio
    async def test_terrain_types(self):
        """All four terrains are listed."""
        response = await list_terrain_types()
        assert [t["id"] for t in response.terrain_types] == ["House", "Dungeon", "Forest", "Cave"]

    @pytest.mark.asyncio
    async def test_all_presets(self):
        """Without a filter every preset is listed."""
        response = await list_presets(terrain_type=None)
        assert len(response.presets) == 10

    @pytest.mark.asyncio
    async def test_filtered_presets(self):
        """Filtering by terrain narrows the list."""
        response = await list_presets(terrain_type="Cave")
        assert {p["terrainType"] for p in response.presets} == {"Cave"}

    @pytest.mark.asyncio
    async def test_filter_with_bad_terrain(self):
        """An unknown terrain filter is a validation error."""
        with pytest.raises(ValidationError):
            await list_presets(terrain_type="Swamp")

    @pytest.mark.asyncio
    async def test_generate_from_preset(self):
        """Presets generate with a fixed seed."""
        response = await generate_from_preset("Small Cave", seed=11)
        assert response.map["terrainType"] == "Cave"
        assert response.map["seed"] == 11
        assert response.map["width"] == 70

    @pytest.mark.asyncio
    async def test_unknown_preset(self):
        """Unknown presets raise PresetNotFoundError."""
        with pytest.raises(PresetNotFoundError):
            await generate_from_preset("Nowhere", seed=None)


class TestErrorResponse:
    """Tests for structured error bodies."""

    def test_validation_error_body(self):
        """Validation errors become 400 responses with the field and an id."""
        response = error_response(ValidationError("treeDensity", "treeDensity must be between 0 and 1", 1.5), "abcd1234")
        body = json.loads(response.body)
        assert response.status_code == 400
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["details"] == {"field": "treeDensity", "value": "1.5"}
        assert body["error"]["error_id"] == "abcd1234"
        assert "timestamp" in body["error"]

    def test_generation_failure_body(self):
        """Generation failures become 422 responses."""
        response = error_response(GenerationFailure("Not enough space"), "00000000")
        body = json.loads(response.body)
        assert response.status_code == 422
        assert body["error"]["code"] == "GENERATION_FAILED"
        assert body["error"]["recoverable"] is False


class TestServiceRoutes:
    """Tests for the root and health handlers."""

    @pytest.mark.asyncio
    async def test_root_and_health(self):
        """The service reports itself online and healthy."""
        from mapgen.main import health_check, root

        assert (await root())["status"] == "online"
        health = await health_check()
        assert health["status"] == "healthy"
        assert health["max_map_dimension"] == get_settings().MAX_MAP_DIMENSION
