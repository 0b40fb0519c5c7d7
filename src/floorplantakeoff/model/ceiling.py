"""
Ceiling Model
=============
An optional secondary polygon (or a typed-in override) describing the ceiling
area of a room.

Area source, in order of precedence:
    1. `same_as_floor`   -> the owning space's floor area.
    2. `manual_override` -> the user-entered `manual_area` (may be unset).
    3. otherwise         -> the drawn polygon's area (0 without a polygon).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from floorplantakeoff.model.geometry_primitives import Point
from floorplantakeoff.model.geometry_utils import polygon_area, project_onto_segment, translate
from floorplantakeoff.utils import parse_non_negative

if TYPE_CHECKING:
    from floorplantakeoff.model.space import Space

logger = logging.getLogger(__name__)

MIN_VERTICES = 3


@dataclass
class Ceiling:
    vertices: List[Point] = field(default_factory=list)
    area: float = 0.0  # ft², from the polygon only
    same_as_floor: bool = True
    manual_override: bool = False
    manual_area: Optional[float] = None  # ft²
    visible: bool = True

    @property
    def has_polygon(self) -> bool:
        return len(self.vertices) >= MIN_VERTICES

    def set_polygon(self, vertices: List[Point], scale_factor: float) -> None:
        """Replace the drawn outline and switch the area source to the polygon."""
        if len(vertices) < MIN_VERTICES:
            raise ValueError(f"A ceiling needs at least {MIN_VERTICES} vertices, got {len(vertices)}.")
        self.vertices = list(vertices)
        self.same_as_floor = False
        self.manual_override = False
        self.visible = True
        recompute_area(self, scale_factor)

    def clear_polygon(self) -> None:
        self.vertices = []
        self.area = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vertices": [v.to_dict() for v in self.vertices],
            "same_as_floor": self.same_as_floor,
            "manual_override": self.manual_override,
            "manual_area": self.manual_area,
            "visible": self.visible,
        }

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> Ceiling:
        if not data:
            return Ceiling()
        vertices = [Point.from_dict(v) for v in data.get("vertices", [])]
        return Ceiling(
            # a stored outline with too few points is treated as absent
            vertices=vertices if len(vertices) >= MIN_VERTICES else [],
            same_as_floor=bool(data.get("same_as_floor", True)),
            manual_override=bool(data.get("manual_override", False)),
            manual_area=parse_non_negative(data.get("manual_area")),
            visible=bool(data.get("visible", True)),
        )


def recompute_area(ceiling: Ceiling, scale_factor: float) -> None:
    if scale_factor <= 0 or not ceiling.has_polygon:
        ceiling.area = 0.0
        return
    ceiling.area = polygon_area(ceiling.vertices) * scale_factor * scale_factor


def effective_ceiling_area(space: Space) -> Optional[float]:
    """
    The ceiling area used for reporting.

    Returns None only in manual mode with no area entered ("missing").
    """
    ceiling = space.ceiling
    if ceiling.same_as_floor:
        return space.area
    if ceiling.manual_override:
        return ceiling.manual_area
    return ceiling.area


def insert_vertex(ceiling: Ceiling, edge_index: int, click_point: Point) -> int:
    """
    Split ceiling edge `edge_index` at the projection of `click_point`.

    Returns:
        Index of the inserted vertex.
    """
    n = len(ceiling.vertices)
    a = ceiling.vertices[edge_index]
    b = ceiling.vertices[(edge_index + 1) % n]
    new_vertex, _ = project_onto_segment(click_point, a, b)
    ceiling.vertices.insert(edge_index + 1, new_vertex)
    logger.debug(f"Ceiling vertex inserted at {edge_index + 1}")
    return edge_index + 1


def delete_vertex(ceiling: Ceiling, vertex_index: int) -> bool:
    """Remove one vertex; refused when it would leave fewer than 3."""
    if len(ceiling.vertices) <= MIN_VERTICES:
        logger.warning("Refused ceiling vertex deletion: minimum vertex count reached.")
        return False
    del ceiling.vertices[vertex_index]
    return True


def move_vertex(ceiling: Ceiling, vertex_index: int, point: Point) -> None:
    ceiling.vertices[vertex_index] = point


def translate_ceiling(ceiling: Ceiling, dx: float, dy: float) -> None:
    ceiling.vertices = translate(ceiling.vertices, dx, dy)
