"""
Shared generation context and parameter validation for the terrain generators.

Each terrain is a free function taking a GenerationContext and returning
MapData; nothing here holds state between calls.
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from mapgen.core.errors import GenerationFailure, ValidationError

from ..bsp import BSPContainer
from ..grid import FLOOR, Grid
from ..models import GeneratorParameters, Room, json_key
from ..rng import SeededRandom, default_seed
from ..rooms import RoomCarver, RoomCarverConfig

logger = logging.getLogger(__name__)

# Caves need at least one cell inside the wall border
MIN_CAVE_MAP_SIZE = 3


@dataclass
class GenerationContext:
    """Everything one generate() call owns: parameters, seed and random stream."""
    params: GeneratorParameters
    seed: int
    rng: SeededRandom
    connectivity_threshold: float = 1.0

    @property
    def width(self) -> int:
        return self.params.width

    @property
    def height(self) -> int:
        return self.params.height

    @classmethod
    def create(cls, params: GeneratorParameters, connectivity_threshold: float = 1.0) -> "GenerationContext":
        """Resolve the seed (time-based when absent) and start a fresh random stream."""
        seed = default_seed() if params.seed is None else integer_value("seed", params.seed)
        return cls(
            params=params.with_seed(seed),
            seed=seed,
            rng=SeededRandom(seed),
            connectivity_threshold=connectivity_threshold,
        )


# =============================================================================
# PARAMETER VALIDATION
# =============================================================================

def _number(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(json_key(name), f"{json_key(name)} must be a number", value)
    if math.isnan(value) or math.isinf(value):
        raise ValidationError(json_key(name), f"{json_key(name)} must be finite", value)
    return value


def integer_value(name: str, value) -> int:
    """Accept ints and integral floats; anything else is a ValidationError."""
    number = _number(name, value)
    if isinstance(number, float):
        if not number.is_integer():
            raise ValidationError(json_key(name), f"{json_key(name)} must be an integer", value)
        number = int(number)
    return number


def _check_range(name: str, value, low, high) -> None:
    key = json_key(name)
    if low is not None and high is not None and not (low <= value <= high):
        raise ValidationError(key, f"{key} must be between {low} and {high}", value)
    if low is not None and value < low:
        raise ValidationError(key, f"{key} must be at least {low}", value)
    if high is not None and value > high:
        raise ValidationError(key, f"{key} must be at most {high}", value)


def int_param(params: GeneratorParameters, name: str, default: int, low: Optional[int] = None,
              high: Optional[int] = None) -> int:
    """Read an integer parameter (or its default) and check it lies in [low, high]."""
    value = integer_value(name, params.get(name, default))
    _check_range(name, value, low, high)
    return value


def float_param(params: GeneratorParameters, name: str, default: float, low: Optional[float] = None,
                high: Optional[float] = None, positive: bool = False) -> float:
    """Read a numeric parameter (or its default) and check it lies in [low, high]."""
    value = float(_number(name, params.get(name, default)))
    if positive and value <= 0:
        raise ValidationError(json_key(name), f"{json_key(name)} must be greater than 0", value)
    _check_range(name, value, low, high)
    return value


def validate_dimensions(params: GeneratorParameters, minimum: int = 1) -> None:
    """Width and height must be integers of at least `minimum` cells."""
    for name in ("width", "height"):
        value = integer_value(name, getattr(params, name))
        if value < minimum:
            raise ValidationError(name, f"{name} must be at least {minimum}", value)
        setattr(params, name, value)


# =============================================================================
# ROOM LAYOUT (shared by House and Dungeon)
# =============================================================================

@dataclass
class RoomSettings:
    """Validated room and corridor knobs for a room-based terrain."""
    min_room_size: int
    max_room_size: int
    room_count: int
    corridor_width: int
    min_room_spacing: int
    room_padding: float
    grid_size: Optional[int] = None

    @property
    def min_leaf_size(self) -> int:
        """Smallest BSP leaf that still fits a minimum room plus spacing."""
        return self.min_room_size + 2 * self.min_room_spacing


def read_room_settings(params: GeneratorParameters, min_room_size: int, max_room_size: int,
                       room_count: int) -> RoomSettings:
    """
    Validate room parameters against their ranges.

    Raises:
        ValidationError: before any generation work begins
    """
    validate_dimensions(params)

    settings = RoomSettings(
        min_room_size=int_param(params, "min_room_size", min_room_size, low=3),
        max_room_size=int_param(params, "max_room_size", max_room_size, low=3),
        room_count=int_param(params, "room_count", room_count, low=1),
        corridor_width=int_param(params, "corridor_width", 1, low=1, high=5),
        min_room_spacing=int_param(params, "min_room_spacing", 2, low=0),
        room_padding=float_param(params, "room_padding", 0.0, low=0.0, high=1.0),
    )
    if params.grid_size is not None:
        settings.grid_size = int_param(params, "grid_size", 1, low=1)

    if settings.min_room_size > settings.max_room_size:
        raise ValidationError(
            "minRoomSize",
            f"minRoomSize ({settings.min_room_size}) cannot exceed maxRoomSize ({settings.max_room_size})",
            settings.min_room_size,
        )
    return settings


def carve_rooms(ctx: GenerationContext, leaves: List[BSPContainer], settings: RoomSettings) -> List[Room]:
    """
    Cut one room out of every leaf large enough to hold a minimum room.

    Raises:
        GenerationFailure: when fewer than two rooms (or the single requested
            room) could be placed
    """
    carver = RoomCarver(ctx.rng, RoomCarverConfig(
        min_spacing=settings.min_room_spacing,
        room_padding=settings.room_padding,
        grid_pitch=settings.grid_size,
        min_size=settings.min_room_size,
        max_size=settings.max_room_size,
    ))

    rooms = [
        carver.carve(leaf)
        for leaf in leaves
        if leaf.w >= settings.min_room_size and leaf.h >= settings.min_room_size
    ]

    required = min(2, settings.room_count)
    if len(rooms) < required:
        raise GenerationFailure(
            f"Not enough space for {required} room(s) on a {ctx.width}x{ctx.height} map",
            details={
                "rooms_placed": len(rooms),
                "leaves": len(leaves),
                "min_room_size": settings.min_room_size,
                "min_room_spacing": settings.min_room_spacing,
            },
        )

    logger.debug(f"Carved {len(rooms)} rooms from {len(leaves)} leaves")
    return rooms


def fill_room(grid: Grid, room: Room, value: int = FLOOR) -> None:
    for y in range(room.y, room.y + room.height):
        for x in range(room.x, room.x + room.width):
            grid[y][x] = value
