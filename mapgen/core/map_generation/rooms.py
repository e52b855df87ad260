"""
Room carving: turns a BSP leaf container into a concrete room with doors.
"""
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .bsp import BSPContainer
from .models import Point, Room
from .rng import SeededRandom

# Door sides
TOP, RIGHT, BOTTOM, LEFT = range(4)


@dataclass
class RoomCarverConfig:
    """How rooms are cut out of their containers."""
    min_spacing: int = 2  # Cells between container edge and room on every side
    room_padding: float = 0.0  # Interior padding fraction, carried for renderers
    grid_pitch: Optional[int] = None  # Snap room origin/size to this pitch
    min_size: int = 3
    max_size: Optional[int] = None

    def min_container_size(self) -> int:
        """Smallest container that fits a minimum room plus spacing."""
        return self.min_size + 2 * self.min_spacing


class RoomCarver:
    """
    Carves one room per container.

    The room origin is inset by exactly `min_spacing` cells from the
    container's top-left corner and the far edges are inset by the same
    amount; the size is then clamped to [min_size, max_size] and never
    exceeds the container.
    """

    def __init__(self, rng: SeededRandom, config: Optional[RoomCarverConfig] = None):
        self.rng = rng
        self.config = config or RoomCarverConfig()

    def carve(self, container: BSPContainer) -> Room:
        """Create a room inside `container`, including its doors."""
        x, width = self._fit_axis(container.x, container.w)
        y, height = self._fit_axis(container.y, container.h)

        if self.config.grid_pitch:
            snapped = self._snap(container, x, y, width, height)
            if snapped is not None:
                x, y, width, height = snapped

        return Room(
            x=x,
            y=y,
            width=width,
            height=height,
            doors=self.generate_doors(x, y, width, height),
            padding=self.config.room_padding,
        )

    def _fit_axis(self, start: int, length: int) -> Tuple[int, int]:
        spacing = self.config.min_spacing
        size = length - 2 * spacing
        if self.config.max_size is not None:
            size = min(size, self.config.max_size)
        size = max(size, self.config.min_size)
        size = min(size, length)
        offset = min(spacing, length - size)
        return start + offset, size

    def _snap(
        self,
        container: BSPContainer,
        x: int,
        y: int,
        width: int,
        height: int,
    ) -> Optional[Tuple[int, int, int, int]]:
        """Snap the room to the grid pitch, or None if that breaks the bounds."""
        pitch = self.config.grid_pitch
        sx = math.ceil(x / pitch) * pitch
        sy = math.ceil(y / pitch) * pitch
        sw = (x + width) // pitch * pitch - sx
        sh = (y + height) // pitch * pitch - sy

        if sw < self.config.min_size or sh < self.config.min_size:
            return None
        if sx < container.x or sy < container.y:
            return None
        if sx + sw > container.x + container.w or sy + sh > container.y + container.h:
            return None
        return sx, sy, sw, sh

    def generate_doors(self, x: int, y: int, width: int, height: int) -> List[Point]:
        """Place 1-2 doors, each at a random point on a random side of the room."""
        doors = []
        num_doors = 1 + int(self.rng.next() * 2)

        for _ in range(num_doors):
            side = int(self.rng.next() * 4)
            if side == TOP:
                doors.append(Point(x + int(self.rng.next() * width), y))
            elif side == RIGHT:
                doors.append(Point(x + width - 1, y + int(self.rng.next() * height)))
            elif side == BOTTOM:
                doors.append(Point(x + int(self.rng.next() * width), y + height - 1))
            else:
                doors.append(Point(x, y + int(self.rng.next() * height)))

        return doors
