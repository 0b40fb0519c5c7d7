"""
Scale Calibration & Units
=========================
Per-floor pixel to real-world calibration and the unit conversions shared by
the panels and the export.

Internal storage is always in feet (lengths) and square feet (areas).
Conversion to the user's display unit happens only at the boundaries.

Classes:
    DisplayUnit: The global display-unit preference.
    Scale: Reference segment + declared length for one floor.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict, Optional

from floorplantakeoff.config import METERS_PER_FOOT
from floorplantakeoff.model.geometry_primitives import Point
from floorplantakeoff.utils import finite_or_zero, round_to_tenth

logger = logging.getLogger(__name__)


class DisplayUnit(StrEnum):
    FEET = "feet"
    METERS = "meters"


def unit_abbrev(unit: DisplayUnit) -> str:
    return "m" if unit == DisplayUnit.METERS else "ft"


# ---- linear ----

def to_display_length(feet: float, unit: DisplayUnit) -> float:
    return feet * METERS_PER_FOOT if unit == DisplayUnit.METERS else feet


def from_display_length(value: float, unit: DisplayUnit) -> float:
    return value / METERS_PER_FOOT if unit == DisplayUnit.METERS else value


# ---- quadratic ----

def to_display_area(square_feet: float, unit: DisplayUnit) -> float:
    return square_feet * METERS_PER_FOOT ** 2 if unit == DisplayUnit.METERS else square_feet


def from_display_area(value: float, unit: DisplayUnit) -> float:
    return value / METERS_PER_FOOT ** 2 if unit == DisplayUnit.METERS else value


def format_with_unit(value: Optional[float], unit: DisplayUnit, *, is_area: bool = False, show_zero: bool = False) -> str:
    """
    Format an internal (feet based) value for display, rounded to a tenth.

    Non-positive values render as "-" unless `show_zero` is set, in which case
    an exact zero renders as "0 ft" / "0 m²".
    """
    raw = finite_or_zero(value)
    display = to_display_area(raw, unit) if is_area else to_display_length(raw, unit)
    display = round_to_tenth(display)
    suffix = f" {unit_abbrev(unit)}²" if is_area else f" {unit_abbrev(unit)}"
    if display > 0:
        return f"{display:g}{suffix}"
    if show_zero and display == 0:
        return f"0{suffix}"
    return "-"


@dataclass
class Scale:
    """
    Calibration of one floor.

    The factor is `declared_length / pixel_length` (feet per pixel). Missing
    or non-positive calibration yields the sentinel 0, never an error.
    """
    reference: Optional[tuple[Point, Point]] = None
    pixel_length: float = 0.0
    declared_length: float = 0.0  # feet
    visible: bool = True

    def set_reference(self, p1: Point, p2: Point) -> None:
        self.reference = (p1, p2)
        self.pixel_length = p1.distance_to(p2)
        logger.debug(f"Scale reference set, pixel length {self.pixel_length:.2f}")

    def clear_reference(self) -> None:
        """Drop the reference line; the pixel length is kept until a new line is drawn."""
        self.reference = None

    def set_declared_length(self, value: Optional[float]) -> bool:
        """
        Set the real-world length of the reference segment in feet.

        Returns:
            False (and keeps the previous value) for non-positive or
            non-finite input. The caller reverts or re-prompts.
        """
        if value is None or not math.isfinite(value) or value <= 0:
            logger.warning(f"Rejected scale length {value!r}")
            return False
        self.declared_length = float(value)
        return True

    def scale_factor(self) -> float:
        pixel_length = finite_or_zero(self.pixel_length)
        declared = finite_or_zero(self.declared_length)
        if pixel_length <= 0 or declared <= 0:
            return 0.0
        return declared / pixel_length

    @property
    def is_calibrated(self) -> bool:
        return self.scale_factor() > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reference": [p.to_dict() for p in self.reference] if self.reference else None,
            "pixel_length": self.pixel_length,
            "declared_length_ft": self.declared_length,
            "visible": self.visible,
        }

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> Scale:
        if not data:
            return Scale()
        scale = Scale(
            pixel_length=finite_or_zero(data.get("pixel_length")),
            visible=bool(data.get("visible", True)),
        )
        ref = data.get("reference")
        if ref and len(ref) == 2:
            scale.reference = (Point.from_dict(ref[0]), Point.from_dict(ref[1]))

        if "declared_length_ft" in data:
            scale.declared_length = finite_or_zero(data.get("declared_length_ft"))
        else:
            # older files stored the length in the unit chosen at the time
            real = finite_or_zero(data.get("real_length"))
            unit = DisplayUnit(data.get("unit", DisplayUnit.FEET))
            scale.declared_length = from_display_length(real, unit)
        return scale
