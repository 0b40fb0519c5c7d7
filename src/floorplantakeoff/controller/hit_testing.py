"""
Selection & Hit Testing
=======================
Priority-ordered proximity tests that decide what a pointer position targets.

Only the currently selected space is tested for edits. Other spaces are only
consulted to pick a new selection or to decide on deselection.

Priority (first match wins):
    0. Scale endpoint   (idle mode, line shown)    within VERTEX_RADIUS
    1. Ceiling vertex   (ceiling shown)            within VERTEX_RADIUS
    2. Space vertex                                within VERTEX_RADIUS
    3. Ceiling edge     (insert mode, ceiling shown) within EDGE_BUFFER
    4. Space edge       (globally closest)         within EDGE_BUFFER
    5. Interior of the space
    6. Background
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from floorplantakeoff.config import EDGE_BUFFER, VERTEX_RADIUS
from floorplantakeoff.model.geometry_primitives import Point
from floorplantakeoff.model.geometry_utils import closest_edge_index, closest_vertex_index, point_in_polygon
from floorplantakeoff.model.scale import Scale
from floorplantakeoff.model.space import Space
from floorplantakeoff.model.state import Floor


class HitKind(StrEnum):
    SCALE_ENDPOINT = "scale_endpoint"
    CEILING_VERTEX = "ceiling_vertex"
    VERTEX = "vertex"
    CEILING_EDGE = "ceiling_edge"
    EDGE = "edge"
    INTERIOR = "interior"
    BACKGROUND = "background"


@dataclass(frozen=True)
class HitTarget:
    kind: HitKind
    index: Optional[int] = None
    space_id: Optional[str] = None

    @property
    def is_edge(self) -> bool:
        return self.kind in (HitKind.EDGE, HitKind.CEILING_EDGE)

    @property
    def is_vertex(self) -> bool:
        return self.kind in (HitKind.VERTEX, HitKind.CEILING_VERTEX)


BACKGROUND = HitTarget(HitKind.BACKGROUND)


def ceiling_shown(space: Space) -> bool:
    return space.ceiling.visible and space.ceiling.has_polygon


def hit_test(
    space: Optional[Space],
    point: Point,
    *,
    insert_mode: bool = False,
    vertex_radius: float = VERTEX_RADIUS,
    edge_buffer: float = EDGE_BUFFER,
) -> HitTarget:
    """
    Classify `point` against the selected space.

    Args:
        space: The selected space, or None (always background).
        point: Pointer position in absolute canvas coordinates.
        insert_mode: Whether ceiling edges are candidates (vertex insertion).
        vertex_radius: Vertex hit radius; larger than `edge_buffer` so a
            vertex wins at the end of an edge.
        edge_buffer: Edge hit distance.

    Returns:
        The highest-priority target under the pointer.
    """
    if space is None:
        return BACKGROUND

    show_ceiling = ceiling_shown(space)

    if show_ceiling:
        idx = closest_vertex_index(space.ceiling.vertices, point, vertex_radius)
        if idx is not None:
            return HitTarget(HitKind.CEILING_VERTEX, idx, space.id)

    idx = closest_vertex_index(space.vertices, point, vertex_radius)
    if idx is not None:
        return HitTarget(HitKind.VERTEX, idx, space.id)

    if insert_mode and show_ceiling:
        idx = closest_edge_index(space.ceiling.vertices, point, edge_buffer)
        if idx is not None:
            return HitTarget(HitKind.CEILING_EDGE, idx, space.id)

    idx = closest_edge_index(space.vertices, point, edge_buffer)
    if idx is not None:
        return HitTarget(HitKind.EDGE, idx, space.id)

    if point_in_polygon(point, space.vertices):
        return HitTarget(HitKind.INTERIOR, None, space.id)

    return BACKGROUND


def scale_endpoint_at(scale: Scale, point: Point, radius: float = VERTEX_RADIUS) -> Optional[int]:
    """Index (0 or 1) of the shown reference-line endpoint under the pointer."""
    if scale.reference is None or not scale.visible:
        return None
    return closest_vertex_index(list(scale.reference), point, radius)


def near_boundary(space: Optional[Space], point: Point, edge_buffer: float = EDGE_BUFFER) -> bool:
    """True when the pointer is within edge-hit distance of the space outline."""
    if space is None:
        return False
    return closest_edge_index(space.vertices, point, edge_buffer) is not None


def space_at(floor: Optional[Floor], point: Point, exclude_id: Optional[str] = None) -> Optional[Space]:
    """Topmost (last drawn) space containing `point`."""
    if floor is None:
        return None
    for space in reversed(floor.spaces):
        if space.id == exclude_id:
            continue
        if point_in_polygon(point, space.vertices):
            return space
    return None
