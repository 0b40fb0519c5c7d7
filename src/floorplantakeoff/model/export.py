"""
Takeoff Export
==============
Turns the committed derived values of every space into spreadsheet rows and
writes them as one Excel workbook with a sheet per floor.

Export is refused up-front, with the full list of offending spaces, while any
space fails validation.
"""
from __future__ import annotations

import logging
import os
import re
import unicodedata
from typing import Dict, List, Sequence, Union

from openpyxl import Workbook
from openpyxl.styles import Font

from floorplantakeoff.model.ceiling import effective_ceiling_area
from floorplantakeoff.model.scale import DisplayUnit, to_display_area, to_display_length, unit_abbrev
from floorplantakeoff.model.space import Direction, Space
from floorplantakeoff.model.state import Floor, ProjectState
from floorplantakeoff.model.validation import InvalidSpace, invalid_spaces
from floorplantakeoff.utils import finite_or_zero, round_to_tenth

logger = logging.getLogger(__name__)

# Column order of the directional breakdown
EXPORT_DIRECTIONS: tuple[Direction, ...] = (
    Direction.N, Direction.NW, Direction.NE,
    Direction.S, Direction.SW, Direction.SE,
    Direction.E, Direction.W,
)

SHEET_TITLE_MAX = 31

Cell = Union[str, float, int]


class ExportRefusedError(ValueError):
    """Raised when export is attempted while spaces fail validation."""

    def __init__(self, invalid: Sequence[InvalidSpace]) -> None:
        self.invalid = list(invalid)
        names = ", ".join(f"{i.floor_name} / {i.space_name or 'Room'}" for i in self.invalid)
        super().__init__(f"{len(self.invalid)} space(s) have missing required fields: {names}")


def directional_areas(space: Space) -> tuple[Dict[Direction, float], Dict[Direction, float]]:
    """
    Sum wall area (length x height) and window area per compass direction.

    Only exterior edges contribute. Values are in ft².
    """
    wall = {d: 0.0 for d in Direction}
    window = {d: 0.0 for d in Direction}
    for edge in space.edges:
        if not edge.is_exterior:
            continue
        wall[edge.direction] += edge.wall_area
        window[edge.direction] += finite_or_zero(edge.win_area)
    return wall, window


def space_row(space: Space, unit: DisplayUnit) -> Dict[str, Cell]:
    u = unit_abbrev(unit)

    def length(v: float) -> float:
        return round_to_tenth(to_display_length(finite_or_zero(v), unit))

    def area(v: float) -> float:
        return round_to_tenth(to_display_area(finite_or_zero(v), unit))

    wall, window = directional_areas(space)
    row: Dict[str, Cell] = {
        "Room Name": space.name or "",
        f"Average Ceiling Height ({u})": length(space.ceiling_height),
        f"Exterior Perimeter Length ({u})": length(space.exterior_perimeter),
        f"Floor Area ({u}²)": area(space.area),
        f"Ceiling Area ({u}²)": area(effective_ceiling_area(space)),
        f"Skylight Area ({u}²)": area(space.skylight_area) if space.has_skylight else 0.0,
        "Door Count": space.door_count,
    }
    for d in EXPORT_DIRECTIONS:
        row[f"{d.value} Wall Area ({u}²)"] = area(wall[d])
    for d in EXPORT_DIRECTIONS:
        row[f"{d.value} Window Area ({u}²)"] = area(window[d])
    return row


def floor_rows(floor: Floor, unit: DisplayUnit) -> List[Dict[str, Cell]]:
    return [space_row(space, unit) for space in floor.spaces]


def check_exportable(state: ProjectState) -> None:
    """Raise ExportRefusedError listing every invalid space, if any."""
    invalid = invalid_spaces(state)
    if invalid:
        logger.warning(f"Export refused: {len(invalid)} invalid space(s).")
        raise ExportRefusedError(invalid)


def safe_filename(name: str, fallback: str = "floor") -> str:
    norm = unicodedata.normalize('NFKD', name).encode('ASCII', 'ignore').decode('utf-8')
    slug = re.sub(r'[^A-Za-z0-9]+', '_', norm).strip('_')
    return slug or fallback


def default_export_name(state: ProjectState) -> str:
    return f"{safe_filename(state.project_name, fallback='Floorplan')}_Export.xlsx"


def sheet_title(name: str, used: set[str]) -> str:
    """Excel-safe, unique sheet title (at most 31 characters)."""
    title = re.sub(r'[\[\]:*?/\\]', '_', name).strip("'")[:SHEET_TITLE_MAX] or "Floor"
    candidate, n = title, 2
    while candidate.lower() in used:
        suffix = f" ({n})"
        candidate = title[:SHEET_TITLE_MAX - len(suffix)] + suffix
        n += 1
    used.add(candidate.lower())
    return candidate


def autosize(ws) -> None:
    widths: Dict[str, int] = {}
    for row in ws.rows:
        for cell in row:
            text = str(cell.value) if cell.value is not None else ""
            widths[cell.column_letter] = max(widths.get(cell.column_letter, 0), len(text) + 2)
    for col, width in widths.items():
        ws.column_dimensions[col].width = min(60, width)


def export_xlsx(state: ProjectState, path: str) -> str:
    """
    Write the takeoff of every floor into one workbook at `path`.

    Each floor gets its own sheet with a bold, frozen header row.

    Returns:
        The written file path.

    Raises:
        ExportRefusedError: If any space fails validation.
        ValueError: If there are no floors.
    """
    if not state.floors:
        raise ValueError("No floors to export.")
    check_exportable(state)

    header = space_row_header(state.display_unit)
    wb = Workbook()
    wb.remove(wb.active)
    used: set[str] = set()
    for floor in state.floors:
        ws = wb.create_sheet(sheet_title(floor.name, used))
        ws.append(header)
        for row in floor_rows(floor, state.display_unit):
            ws.append([row[column] for column in header])
        for cell in ws[1]:
            cell.font = Font(bold=True)
        ws.freeze_panes = "A2"
        autosize(ws)
        logger.info(f"Exported {len(floor.spaces)} space(s) of '{floor.name}' to sheet '{ws.title}'")

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    wb.save(path)
    logger.info(f"Workbook written to {path}")
    return path


def space_row_header(unit: DisplayUnit) -> List[str]:
    u = unit_abbrev(unit)
    header = [
        "Room Name",
        f"Average Ceiling Height ({u})",
        f"Exterior Perimeter Length ({u})",
        f"Floor Area ({u}²)",
        f"Ceiling Area ({u}²)",
        f"Skylight Area ({u}²)",
        "Door Count",
    ]
    header += [f"{d.value} Wall Area ({u}²)" for d in EXPORT_DIRECTIONS]
    header += [f"{d.value} Window Area ({u}²)" for d in EXPORT_DIRECTIONS]
    return header
