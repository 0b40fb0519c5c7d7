"""
Geometric Primitives for the floorplan model.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Vector:
    """A displacement on the canvas, e.g. one step of a drag."""
    x: float
    y: float

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x ** 2 + self.y ** 2)


@dataclass(frozen=True)
class Point:
    """
    A point in absolute canvas (pixel) coordinates.

    Value type: two points with the same coordinates are equal.
    """
    x: float
    y: float

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y)
        raise TypeError("Can only subtract a Vector or Point from a Point.")

    def distance_to(self, other: Point) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Point:
        return Point(x=float(data.get("x", 0.0)), y=float(data.get("y", 0.0)))
