"""Tests for model/scale.py calibration and unit handling."""
import math

import pytest

from floorplantakeoff.model.geometry_primitives import Point
from floorplantakeoff.model.scale import (
    DisplayUnit, Scale, format_with_unit, from_display_area, from_display_length, to_display_area,
    to_display_length,
)


# --- scale factor ---

def test_scale_factor_scenario_a():
    scale = Scale()
    scale.set_reference(Point(0, 0), Point(100, 0))
    assert scale.set_declared_length(10.0)
    assert scale.pixel_length == pytest.approx(100.0)
    assert scale.scale_factor() == pytest.approx(0.1)
    assert scale.is_calibrated


def test_uncalibrated_scale_is_zero_sentinel():
    assert Scale().scale_factor() == 0.0
    scale = Scale()
    scale.set_reference(Point(0, 0), Point(0, 0))
    scale.set_declared_length(10.0)
    assert scale.scale_factor() == 0.0
    assert not scale.is_calibrated


@pytest.mark.parametrize("bad", [0, -3.0, None, math.nan, math.inf])
def test_set_declared_length_rejects_and_keeps_previous(bad):
    scale = Scale()
    scale.set_declared_length(12.0)
    assert not scale.set_declared_length(bad)
    assert scale.declared_length == 12.0


@pytest.mark.parametrize("pixels, real", [(100.0, 10.0), (37.5, 12.25), (640.0, 3.048), (1.0, 1000.0)])
def test_pixel_length_times_factor_is_declared_length(pixels, real):
    scale = Scale()
    # 3-4-5 direction so the reference is not axis aligned
    scale.set_reference(Point(10, 20), Point(10 + 0.6 * pixels, 20 + 0.8 * pixels))
    scale.set_declared_length(real)
    assert scale.pixel_length * scale.scale_factor() == pytest.approx(real)


def test_clear_reference_keeps_pixel_length():
    scale = Scale()
    scale.set_reference(Point(0, 0), Point(50, 0))
    scale.set_declared_length(5.0)
    scale.clear_reference()
    assert scale.reference is None
    assert scale.scale_factor() == pytest.approx(0.1)


# --- units ---

def test_length_conversion():
    assert to_display_length(10.0, DisplayUnit.METERS) == pytest.approx(3.048)
    assert from_display_length(3.048, DisplayUnit.METERS) == pytest.approx(10.0)
    assert to_display_length(10.0, DisplayUnit.FEET) == 10.0


def test_area_conversion():
    assert to_display_area(100.0, DisplayUnit.METERS) == pytest.approx(9.290304)
    assert from_display_area(9.290304, DisplayUnit.METERS) == pytest.approx(100.0)


def test_format_with_unit():
    assert format_with_unit(10.0, DisplayUnit.FEET) == "10 ft"
    assert format_with_unit(100.0, DisplayUnit.FEET, is_area=True) == "100 ft²"
    assert format_with_unit(10.0, DisplayUnit.METERS) == "3 m"
    assert format_with_unit(100.0, DisplayUnit.METERS, is_area=True) == "9.3 m²"


def test_format_with_unit_non_positive():
    assert format_with_unit(0.0, DisplayUnit.FEET) == "-"
    assert format_with_unit(None, DisplayUnit.FEET) == "-"
    assert format_with_unit(0.0, DisplayUnit.FEET, show_zero=True) == "0 ft"


# --- serialization ---

def test_scale_from_dict_round_trip():
    scale = Scale()
    scale.set_reference(Point(1, 2), Point(101, 2))
    scale.set_declared_length(10.0)
    scale.visible = False
    restored = Scale.from_dict(scale.to_dict())
    assert restored.reference == (Point(1, 2), Point(101, 2))
    assert restored.scale_factor() == pytest.approx(0.1)
    assert restored.visible is False


def test_scale_from_dict_legacy_meters():
    restored = Scale.from_dict({"pixel_length": 100, "real_length": 3.048, "unit": "meters"})
    assert restored.declared_length == pytest.approx(10.0)
