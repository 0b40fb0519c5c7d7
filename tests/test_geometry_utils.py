"""Tests for model/geometry_utils.py pure functions."""
import pytest

from floorplantakeoff.model.geometry_primitives import Point, Vector
from floorplantakeoff.model.geometry_utils import (
    closest_edge_index, closest_vertex_index, distance, point_in_polygon, polygon_area,
    project_onto_segment, segment_distance, translate,
)


# --- primitives ---

def test_point_difference_is_vector():
    d = Point(5, 7) - Point(2, 3)
    assert d == Vector(3, 4)
    assert d.magnitude == 5.0
    assert Point(2, 3) + d == Point(5, 7)


def test_point_equality_is_by_value():
    assert Point(1.5, 2) == Point(1.5, 2.0)


# --- distance / projection ---

def test_distance():
    assert distance(Point(0, 0), Point(3, 4)) == 5.0


def test_project_onto_segment_interior():
    p, t = project_onto_segment(Point(50, 30), Point(0, 0), Point(100, 0))
    assert p == Point(50, 0)
    assert t == pytest.approx(0.5)


def test_project_onto_segment_clamps_to_ends():
    p, t = project_onto_segment(Point(-20, 5), Point(0, 0), Point(100, 0))
    assert p == Point(0, 0)
    assert t == 0.0
    p, t = project_onto_segment(Point(150, 5), Point(0, 0), Point(100, 0))
    assert p == Point(100, 0)
    assert t == 1.0


def test_project_onto_degenerate_segment():
    p, t = project_onto_segment(Point(9, 9), Point(2, 2), Point(2, 2))
    assert p == Point(2, 2)
    assert t == 0.5


def test_segment_distance_is_symmetric():
    a, b, q = Point(0, 0), Point(10, 10), Point(7, 1)
    assert segment_distance(q, a, b) == pytest.approx(segment_distance(q, b, a))


def test_segment_distance_beyond_end():
    assert segment_distance(Point(13, 4), Point(0, 0), Point(10, 0)) == pytest.approx(5.0)


def test_segment_distance_degenerate():
    assert segment_distance(Point(3, 4), Point(0, 0), Point(0, 0)) == pytest.approx(5.0)


# --- point in polygon ---

def test_point_in_square(square_points):
    assert point_in_polygon(Point(50, 50), square_points)
    assert not point_in_polygon(Point(150, 50), square_points)


def test_point_in_concave_polygon():
    # L-shape: the notch (75, 75) is outside
    poly = [Point(0, 0), Point(100, 0), Point(100, 50), Point(50, 50), Point(50, 100), Point(0, 100)]
    assert point_in_polygon(Point(25, 75), poly)
    assert not point_in_polygon(Point(75, 75), poly)


def test_point_in_polygon_needs_three_vertices():
    assert not point_in_polygon(Point(0, 0), [Point(-1, -1), Point(1, 1)])


# --- area ---

def test_polygon_area_square(square_points):
    assert polygon_area(square_points) == pytest.approx(10000.0)


def test_polygon_area_orientation_independent(square_points):
    assert polygon_area(list(reversed(square_points))) == pytest.approx(10000.0)


def test_polygon_area_triangle():
    assert polygon_area([Point(0, 0), Point(4, 0), Point(0, 3)]) == pytest.approx(6.0)


def test_polygon_area_degenerate():
    assert polygon_area([Point(0, 0), Point(1, 1)]) == 0.0
    assert polygon_area([Point(0, 0), Point(1, 1), Point(2, 2)]) == pytest.approx(0.0)


# --- closest vertex / edge ---

def test_closest_vertex_within_tolerance(square_points):
    assert closest_vertex_index(square_points, Point(98, 103), 12) == 2
    assert closest_vertex_index(square_points, Point(50, 50), 12) is None


def test_closest_edge_picks_nearest_not_first():
    # Two edges both within tolerance at the corner region; the nearer wins
    poly = [Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)]
    assert closest_edge_index(poly, Point(95, 2), 6) == 0
    assert closest_edge_index(poly, Point(98, 10), 6) == 1


def test_closest_edge_out_of_range(square_points):
    assert closest_edge_index(square_points, Point(50, 50), 6) is None


def test_closest_edge_includes_closing_edge(square_points):
    assert closest_edge_index(square_points, Point(-3, 50), 6) == 3


def test_translate(square_points):
    moved = translate(square_points, 10, -5)
    assert moved[0] == Point(10, -5)
    assert square_points[0] == Point(0, 0)


@pytest.mark.parametrize("shift", range(6))
def test_polygon_area_invariant_under_rotation(shift):
    poly = [Point(0, 0), Point(100, 0), Point(100, 50), Point(50, 50), Point(50, 100), Point(0, 100)]
    rotated = poly[shift:] + poly[:shift]
    assert polygon_area(rotated) == pytest.approx(7500.0)
    assert polygon_area(list(reversed(rotated))) == pytest.approx(7500.0)
