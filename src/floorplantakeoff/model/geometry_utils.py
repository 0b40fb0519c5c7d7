from __future__ import annotations

from typing import Optional, Sequence, TYPE_CHECKING

from math import sqrt
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

from floorplantakeoff.model.geometry_primitives import Point


def as_xy_array(points: Sequence[Point]) -> npt.NDArray[np.float64]:
    """Stack points into an (N, 2) array."""
    if not points:
        return np.empty((0, 2), dtype=np.float64)
    return np.array([(p.x, p.y) for p in points], dtype=np.float64)


def distance(p1: Point, p2: Point) -> float:
    return sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2)


def project_onto_segment(point: Point, a: Point, b: Point) -> tuple[Point, float]:
    """
    Closest point to `point` on the closed segment a-b.

    Args:
        point: The query point.
        a: Segment start.
        b: Segment end.

    Returns:
        The projected point and its parameter t, clamped to [0, 1].
        A degenerate segment (a == b) projects to its midpoint with t = 0.5.
    """
    abx, aby = b.x - a.x, b.y - a.y
    ab2 = abx * abx + aby * aby
    t = 0.5
    if ab2 > 0:
        t = ((point.x - a.x) * abx + (point.y - a.y) * aby) / ab2
        t = max(0.0, min(1.0, t))
    return Point(a.x + abx * t, a.y + aby * t), t


def segment_distance(point: Point, a: Point, b: Point) -> float:
    """
    Shortest distance from a point to the closed segment a-b.

    Symmetric in a and b; degenerates to the point distance when a == b.
    """
    abx, aby = b.x - a.x, b.y - a.y
    ab2 = abx * abx + aby * aby
    if ab2 == 0:
        return distance(point, a)
    t = ((point.x - a.x) * abx + (point.y - a.y) * aby) / ab2
    t = max(0.0, min(1.0, t))
    return distance(point, Point(a.x + abx * t, a.y + aby * t))


def point_in_polygon(point: Point, vertices: Sequence[Point]) -> bool:
    """
    Even-odd ray casting test.

    Args:
        point: The query point.
        vertices: Polygon vertices in order (not repeated at the end).

    Returns:
        True if the point lies inside. Always False for fewer than 3 vertices.
    """
    n = len(vertices)
    if n < 3:
        return False

    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = vertices[i].x, vertices[i].y
        xj, yj = vertices[j].x, vertices[j].y
        if (yi > point.y) != (yj > point.y):
            # yi != yj is guaranteed by the straddle test above
            x_cross = (xj - xi) * (point.y - yi) / (yj - yi) + xi
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


def polygon_area(vertices: Sequence[Point]) -> float:
    """
    Shoelace area of a simple polygon, independent of orientation.

    Returns:
        Absolute area in squared input units; 0.0 for fewer than 3 vertices.
    """
    if len(vertices) < 3:
        return 0.0
    pts = as_xy_array(vertices)
    x, y = pts[:, 0], pts[:, 1]
    twice_area = np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))
    return float(abs(twice_area) / 2.0)


def closest_vertex_index(vertices: Sequence[Point], point: Point, tolerance: float) -> Optional[int]:
    """Index of the nearest vertex within `tolerance`, or None."""
    best_idx: Optional[int] = None
    best_dist = float("inf")
    for i, v in enumerate(vertices):
        d = distance(point, v)
        if d < best_dist:
            best_dist = d
            best_idx = i
    if best_idx is not None and best_dist <= tolerance:
        return best_idx
    return None


def closest_edge_index(vertices: Sequence[Point], point: Point, tolerance: float) -> Optional[int]:
    """
    Index of the globally closest polygon edge within `tolerance`, or None.

    Edge i runs from vertex i to vertex (i + 1) mod N. All edges are measured
    before choosing, so where two edges are both in range the nearer one wins
    rather than the first one found.
    """
    n = len(vertices)
    if n < 2:
        return None
    best_idx: Optional[int] = None
    best_dist = float("inf")
    for i in range(n):
        d = segment_distance(point, vertices[i], vertices[(i + 1) % n])
        if d < best_dist:
            best_dist = d
            best_idx = i
    if best_dist <= tolerance:
        return best_idx
    return None


def translate(vertices: Sequence[Point], dx: float, dy: float) -> list[Point]:
    return [Point(v.x + dx, v.y + dy) for v in vertices]
