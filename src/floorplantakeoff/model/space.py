"""
Space Model
===========
A room polygon traced over the floor plan plus one metadata record per wall.

Why is this file needed?
------------------------
1. Invariants: `len(space.edges) == len(space.vertices)` after every mutation,
   and edge i always describes the segment vertex[i] -> vertex[(i + 1) % N].
2. Derived values: area, wall lengths, window areas and the exterior
   perimeter are recomputed from the vertices and the floor's scale factor;
   they are never trusted across a vertex edit.

Classes:
    Direction: Compass orientation of a wall.
    Edge: Wall metadata for one polygon side.
    Space: The room itself.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Dict, List, Optional

from floorplantakeoff.model.ceiling import Ceiling, recompute_area as recompute_ceiling_area, translate_ceiling
from floorplantakeoff.model.geometry_primitives import Point
from floorplantakeoff.model.geometry_utils import distance, polygon_area, project_onto_segment, translate
from floorplantakeoff.utils import finite_or_zero, new_id, parse_count, parse_non_negative

logger = logging.getLogger(__name__)

MIN_VERTICES = 3


class Direction(StrEnum):
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"


@dataclass
class Edge:
    """
    Wall metadata for one side of a Space.

    User-entered dimensions are in feet and may be unset (None). `length` and
    `win_area` are derived and overwritten by `recompute_derived`.
    """
    id: str = field(default_factory=lambda: new_id("edge"))
    is_exterior: bool = False
    height: Optional[float] = None
    win_width: Optional[float] = None
    win_height: Optional[float] = None
    direction: Direction = Direction.N
    has_door: bool = False
    door_quantity: Optional[int] = None
    wall_type: Optional[str] = None
    window_type: Optional[str] = None
    door_type: Optional[str] = None

    # derived
    length: float = 0.0
    win_area: float = 0.0

    @property
    def wall_area(self) -> float:
        return finite_or_zero(self.length) * finite_or_zero(self.height)

    def seed_from(self, other: Edge) -> None:
        """Copy the wall description of `other` onto this (split-off) edge."""
        self.is_exterior = other.is_exterior
        self.height = other.height
        self.win_width = other.win_width
        self.win_height = other.win_height
        self.direction = other.direction
        self.wall_type = other.wall_type
        self.window_type = other.window_type

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "is_exterior": self.is_exterior,
            "height": self.height,
            "win_width": self.win_width,
            "win_height": self.win_height,
            "direction": self.direction.value,
            "has_door": self.has_door,
            "door_quantity": self.door_quantity,
            "wall_type": self.wall_type,
            "window_type": self.window_type,
            "door_type": self.door_type,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Edge:
        direction = data.get("direction", Direction.N)
        return Edge(
            id=data.get("id") or new_id("edge"),
            is_exterior=bool(data.get("is_exterior", False)),
            height=parse_non_negative(data.get("height")),
            win_width=parse_non_negative(data.get("win_width")),
            win_height=parse_non_negative(data.get("win_height")),
            direction=Direction(direction) if direction in Direction.__members__ else Direction.N,
            has_door=bool(data.get("has_door", False)),
            door_quantity=parse_count(data.get("door_quantity")),
            wall_type=data.get("wall_type"),
            window_type=data.get("window_type"),
            door_type=data.get("door_type"),
        )


@dataclass
class Space:
    """A room polygon (absolute pixel coordinates) with per-edge wall metadata."""
    vertices: List[Point]
    name: str = "Room"
    id: str = field(default_factory=lambda: new_id("space"))
    edges: List[Edge] = field(default_factory=list)
    ceiling_height: Optional[float] = None  # ft, average
    has_skylight: bool = False
    skylight_area: Optional[float] = None  # ft²
    skylight_type: Optional[str] = None
    ceiling: Ceiling = field(default_factory=Ceiling)

    # derived
    area: float = 0.0
    exterior_perimeter: float = 0.0

    def __post_init__(self) -> None:
        if len(self.vertices) < MIN_VERTICES:
            raise ValueError(f"A space needs at least {MIN_VERTICES} vertices, got {len(self.vertices)}.")
        self.vertices = list(self.vertices)
        ensure_edges(self)

    def segment(self, edge_index: int) -> tuple[Point, Point]:
        n = len(self.vertices)
        return self.vertices[edge_index], self.vertices[(edge_index + 1) % n]

    @property
    def door_count(self) -> int:
        return sum(e.door_quantity or 0 for e in self.edges if e.has_door)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "vertices": [v.to_dict() for v in self.vertices],
            "edges": [e.to_dict() for e in self.edges],
            "ceiling_height": self.ceiling_height,
            "has_skylight": self.has_skylight,
            "skylight_area": self.skylight_area,
            "skylight_type": self.skylight_type,
            "ceiling": self.ceiling.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Space:
        space = Space(
            vertices=[Point.from_dict(v) for v in data.get("vertices", [])],
            name=data.get("name", "Room"),
            id=data.get("id") or new_id("space"),
            edges=[Edge.from_dict(e) for e in data.get("edges", [])],
            ceiling_height=parse_non_negative(data.get("ceiling_height")),
            has_skylight=bool(data.get("has_skylight", False)),
            skylight_area=parse_non_negative(data.get("skylight_area")),
            skylight_type=data.get("skylight_type"),
            ceiling=Ceiling.from_dict(data.get("ceiling")),
        )
        return space


# ------------------------------------------------------------------------------
# Invariant maintenance
# ------------------------------------------------------------------------------

def ensure_edges(space: Space) -> None:
    """
    Resize the edge list to the vertex count.

    Edges at indices that still exist keep their data; new indices get a
    default Edge. Calling it again without a vertex change is a no-op.
    """
    n = len(space.vertices)
    if len(space.edges) == n:
        return
    existing = space.edges
    space.edges = [existing[i] if i < len(existing) else Edge() for i in range(n)]


def recompute_derived(space: Space, scale_factor: float) -> None:
    """
    Recompute area, edge lengths, window areas and the exterior perimeter.

    With no usable calibration (factor <= 0) every derived quantity is
    forced to exactly 0. User-entered dimensions are left untouched.
    """
    ensure_edges(space)
    recompute_ceiling_area(space.ceiling, scale_factor)

    if scale_factor <= 0:
        space.area = 0.0
        space.exterior_perimeter = 0.0
        for edge in space.edges:
            edge.length = 0.0
            edge.win_area = 0.0
        return

    space.area = polygon_area(space.vertices) * scale_factor * scale_factor

    exterior_perimeter = 0.0
    for i, edge in enumerate(space.edges):
        a, b = space.segment(i)
        edge.length = distance(a, b) * scale_factor
        w = finite_or_zero(edge.win_width)
        h = finite_or_zero(edge.win_height)
        edge.win_area = w * h if w > 0 and h > 0 else 0.0
        if edge.is_exterior:
            exterior_perimeter += edge.length
    space.exterior_perimeter = exterior_perimeter


# ------------------------------------------------------------------------------
# Structural edits
# ------------------------------------------------------------------------------

def insert_vertex(space: Space, edge_index: int, click_point: Point) -> int:
    """
    Split edge `edge_index` at the projection of `click_point`.

    The new vertex goes in after vertex `edge_index`. The edge that was split
    keeps its record for the first half; the second half (edge_index + 1) is
    a new record seeded from it, so every later edge stays aligned with its
    own segment.

    Returns:
        Index of the inserted vertex.
    """
    ensure_edges(space)
    a, b = space.segment(edge_index)
    new_vertex, _ = project_onto_segment(click_point, a, b)

    original = space.edges[edge_index]
    space.vertices.insert(edge_index + 1, new_vertex)
    split_off = Edge()
    split_off.seed_from(original)
    space.edges.insert(edge_index + 1, split_off)
    ensure_edges(space)

    logger.debug(f"Space '{space.name}': vertex inserted at {edge_index + 1}")
    return edge_index + 1


def delete_vertex(space: Space, vertex_index: int) -> bool:
    """
    Remove one vertex, merging its two walls into one.

    The merged wall keeps the record of the wall arriving at the removed
    vertex (its left neighbour, index vertex_index - 1). Refused, with the
    space unchanged, when fewer than 3 vertices would remain.
    """
    n = len(space.vertices)
    if n <= MIN_VERTICES:
        logger.warning(f"Space '{space.name}': refused vertex deletion, minimum vertex count reached.")
        return False
    ensure_edges(space)

    # edges[vertex_index] leaves the removed vertex; edges[vertex_index - 1]
    # arrives at it and now spans the gap.
    del space.vertices[vertex_index]
    del space.edges[vertex_index]
    ensure_edges(space)

    logger.debug(f"Space '{space.name}': vertex {vertex_index} deleted")
    return True


def move_vertex(space: Space, vertex_index: int, point: Point) -> None:
    space.vertices[vertex_index] = point


def translate_space(space: Space, dx: float, dy: float) -> None:
    """Move the whole room, ceiling outline included."""
    space.vertices = translate(space.vertices, dx, dy)
    translate_ceiling(space.ceiling, dx, dy)
