"""
Map Generation Engine - Test Configuration and Fixtures
Shared test utilities and fixtures for pytest.
"""
import math
from typing import Any, Dict, List

import pytest

from mapgen.core.map_generation import BSPContainer, Room, SeededRandom
from mapgen.core.map_generation.grid import WALL, Grid, create_grid


# ==================== Random Stream Fixtures ====================

@pytest.fixture
def rng() -> SeededRandom:
    """Seeded random stream with a fixed seed."""
    return SeededRandom(12345)


# ==================== Parameter Fixtures ====================

@pytest.fixture
def house_params() -> Dict[str, Any]:
    """Small house layout."""
    return {
        "width": 60,
        "height": 60,
        "seed": 12345,
        "minRoomSize": 4,
        "maxRoomSize": 8,
        "roomCount": 5,
    }


@pytest.fixture
def dungeon_params() -> Dict[str, Any]:
    """Medium dungeon with winding corridors and a few loops."""
    return {
        "width": 80,
        "height": 80,
        "seed": 4242,
        "minRoomSize": 5,
        "maxRoomSize": 10,
        "roomCount": 8,
        "walkSteps": 6,
        "organicFactor": 0.3,
        "connectivityFactor": 0.25,
    }


@pytest.fixture
def forest_params() -> Dict[str, Any]:
    """Forest with the default density."""
    return {
        "width": 100,
        "height": 100,
        "seed": 12345,
        "treeDensity": 0.3,
        "minTreeDistance": 3,
    }


@pytest.fixture
def cave_params() -> Dict[str, Any]:
    """Classic 45% fill / 4 passes / 5-neighbour cave."""
    return {
        "width": 70,
        "height": 70,
        "seed": 12345,
        "fillProbability": 0.45,
        "smoothIterations": 4,
        "wallThreshold": 5,
    }


# ==================== Grid Fixtures ====================

@pytest.fixture
def wall_grid() -> Grid:
    """20x20 grid of solid wall."""
    return create_grid(20, 20, WALL)


# ==================== Helpers ====================

def rects_overlap(a, b) -> bool:
    """True when two rectangles (x, y, w/width, h/height) share any cell."""
    aw, ah = _size(a)
    bw, bh = _size(b)
    return not (
        a.x + aw <= b.x or b.x + bw <= a.x or
        a.y + ah <= b.y or b.y + bh <= a.y
    )


def _size(rect):
    if isinstance(rect, BSPContainer):
        return rect.w, rect.h
    return rect.width, rect.height


def assert_rooms_valid(rooms: List[Room], width: int, height: int) -> None:
    """Every room is inside the map and no two rooms overlap."""
    for room in rooms:
        assert room.x >= 0 and room.y >= 0
        assert room.width > 0 and room.height > 0
        assert room.x + room.width <= width
        assert room.y + room.height <= height
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            assert not rects_overlap(a, b)


def min_pairwise_distance(points) -> float:
    best = math.inf
    for i, (ax, ay) in enumerate(points):
        for bx, by in points[i + 1:]:
            best = min(best, math.hypot(ax - bx, ay - by))
    return best
