"""
Room connectivity: minimum spanning tree, extra loop edges, and reachability checks.
"""
import heapq
import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from .grid import FLOOR, Grid, first_cell, flood_fill
from .models import Corridor, Edge, Room
from .rng import SeededRandom

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round halves up, unlike the built-in round()."""
    return int(math.floor(value + 0.5))


def center_cell(room: Room) -> Tuple[int, int]:
    """Room center rounded to a grid cell."""
    cx, cy = room.center()
    return (round_half_up(cx), round_half_up(cy))


def interior_cell(room: Room) -> Tuple[int, int]:
    """Middle cell of a room, never on its edge for rooms at least 3 cells across."""
    return (room.x + room.width // 2, room.y + room.height // 2)


def distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


# =============================================================================
# SPANNING STRUCTURE
# =============================================================================

def build_mst(rooms: List[Room]) -> List[Edge]:
    """
    Prim's minimum spanning tree over room centers, starting from room 0.

    Returns:
        Exactly len(rooms) - 1 edges (none for fewer than two rooms)
    """
    if len(rooms) < 2:
        return []

    centers = [r.center() for r in rooms]
    in_tree = {0}
    edges: List[Edge] = []
    available: List[Tuple[float, int, int]] = []

    for i in range(1, len(rooms)):
        heapq.heappush(available, (distance(centers[0], centers[i]), 0, i))

    while len(in_tree) < len(rooms) and available:
        weight, src, dst = heapq.heappop(available)
        if dst in in_tree:
            continue

        edges.append(Edge(from_index=src, to_index=dst, weight=weight))
        in_tree.add(dst)

        for i in range(len(rooms)):
            if i not in in_tree:
                heapq.heappush(available, (distance(centers[dst], centers[i]), dst, i))

    return edges


def add_extra_connections(
    rooms: List[Room],
    edges: List[Edge],
    factor: float,
    rng: SeededRandom,
) -> List[Edge]:
    """
    Add floor(len(rooms) * factor) random edges between unconnected room pairs.

    Duplicates are skipped. Attempts are capped at 4 per room, so dense graphs
    simply end up with fewer extras.

    Returns:
        A new list: the input edges followed by the extra edges
    """
    extra_count = int(math.floor(len(rooms) * factor))
    result = list(edges)
    if extra_count <= 0 or len(rooms) < 3:
        return result

    connected: Set[frozenset] = {frozenset((e.from_index, e.to_index)) for e in edges}
    centers = [r.center() for r in rooms]

    added = 0
    attempts = 0
    max_attempts = len(rooms) * 4

    while added < extra_count and attempts < max_attempts:
        attempts += 1
        i = rng.next_int(0, len(rooms) - 1)
        j = rng.next_int(0, len(rooms) - 1)
        pair = frozenset((i, j))
        if i == j or pair in connected:
            continue

        result.append(Edge(from_index=i, to_index=j, weight=distance(centers[i], centers[j])))
        connected.add(pair)
        added += 1

    logger.debug(f"Added {added}/{extra_count} extra connections in {attempts} attempts")
    return result


def edges_to_corridors(rooms: List[Room], edges: List[Edge]) -> List[Corridor]:
    """Turn room edges into corridors between rounded room centers."""
    return [
        Corridor(start=center_cell(rooms[e.from_index]), end=center_cell(rooms[e.to_index]))
        for e in edges
    ]


def connect_rooms(rooms: List[Room]) -> List[Corridor]:
    """Connect rooms with MST corridors."""
    return edges_to_corridors(rooms, build_mst(rooms))


# =============================================================================
# VALIDATION
# =============================================================================

@dataclass
class ConnectivityReport:
    """How many rooms are reachable from room 0."""
    reachable: int
    total: int

    @property
    def fraction(self) -> float:
        return 1.0 if self.total == 0 else self.reachable / self.total

    @property
    def is_connected(self) -> bool:
        return self.reachable == self.total

    def __str__(self) -> str:
        return f"{self.reachable}/{self.total} rooms reachable"


def _room_for_point(rooms: List[Room], point: Tuple[int, int], tolerance: float) -> Optional[int]:
    for index, room in enumerate(rooms):
        if room.contains(point[0], point[1]):
            return index
    for index, room in enumerate(rooms):
        if distance(room.center(), point) <= tolerance:
            return index
    return None


def validate_graph(rooms: List[Room], corridors: List[Corridor], tolerance: float = 1.0) -> ConnectivityReport:
    """
    Traverse the corridor graph from room 0.

    Corridor endpoints are matched to the room containing them, or to the
    room whose center lies within `tolerance` cells.
    """
    if not rooms:
        return ConnectivityReport(reachable=0, total=0)

    adjacency: Dict[int, Set[int]] = {i: set() for i in range(len(rooms))}
    for corridor in corridors:
        a = _room_for_point(rooms, corridor.start, tolerance)
        b = _room_for_point(rooms, corridor.end, tolerance)
        if a is None or b is None or a == b:
            continue
        adjacency[a].add(b)
        adjacency[b].add(a)

    seen = {0}
    queue = deque([0])
    while queue:
        current = queue.popleft()
        for neighbor in adjacency[current]:
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)

    return ConnectivityReport(reachable=len(seen), total=len(rooms))


def _room_cells(room: Room):
    cx, cy = int(room.x + room.width // 2), int(room.y + room.height // 2)
    yield (cx, cy)
    for y in range(room.y, room.y + room.height):
        for x in range(room.x, room.x + room.width):
            yield (x, y)


def validate_grid(grid: Grid, rooms: List[Room]) -> ConnectivityReport:
    """
    Flood fill from the first room's floor and count rooms with a reachable floor cell.
    """
    if not rooms:
        return ConnectivityReport(reachable=0, total=0)

    start = first_cell(grid, [interior_cell(rooms[0]), *_room_cells(rooms[0])], FLOOR)
    if start is None:
        return ConnectivityReport(reachable=0, total=len(rooms))

    reachable = flood_fill(grid, start[0], start[1], FLOOR)
    connected = 0
    for room in rooms:
        if any(cell in reachable for cell in _room_cells(room)):
            connected += 1

    return ConnectivityReport(reachable=connected, total=len(rooms))


def report_connectivity(report: ConnectivityReport, threshold: float, label: str) -> None:
    """Log a connectivity diagnostic. Never raises; the map is still returned."""
    if report.fraction < threshold:
        logger.warning(f"[{label}] Connectivity below policy ({threshold:.0%}): {report}")
    else:
        logger.debug(f"[{label}] Connectivity: {report}")
