"""Tests for model/export.py."""
import pytest
from openpyxl import load_workbook

from floorplantakeoff.model.export import (
    ExportRefusedError, check_exportable, default_export_name, directional_areas, export_xlsx, safe_filename,
    sheet_title, space_row, space_row_header,
)
from floorplantakeoff.model.scale import DisplayUnit
from floorplantakeoff.model.space import Direction, recompute_derived
from floorplantakeoff.model.state import ProjectState


@pytest.fixture
def valid_space(floor, space):
    space.name = "Kitchen"
    space.ceiling_height = 9.0
    edge = space.edges[0]
    edge.is_exterior = True
    edge.height = 8.0
    edge.win_width = 3.0
    edge.win_height = 4.0
    edge.direction = Direction.S
    recompute_derived(space, floor.scale_factor())
    return space


def test_directional_areas_only_count_exterior(valid_space):
    valid_space.edges[1].height = 8.0
    wall, window = directional_areas(valid_space)
    assert wall[Direction.S] == pytest.approx(80.0)
    assert window[Direction.S] == pytest.approx(12.0)
    assert wall[Direction.N] == 0.0


def test_space_row_feet(valid_space):
    row = space_row(valid_space, DisplayUnit.FEET)
    assert row["Room Name"] == "Kitchen"
    assert row["Floor Area (ft²)"] == 100.0
    assert row["Ceiling Area (ft²)"] == 100.0
    assert row["Exterior Perimeter Length (ft)"] == 10.0
    assert row["S Wall Area (ft²)"] == 80.0
    assert row["S Window Area (ft²)"] == 12.0
    assert list(row) == space_row_header(DisplayUnit.FEET)


def test_space_row_meters(valid_space):
    row = space_row(valid_space, DisplayUnit.METERS)
    assert row["Floor Area (m²)"] == 9.3
    assert row["Average Ceiling Height (m)"] == 2.7


def test_header_direction_order():
    header = space_row_header(DisplayUnit.FEET)
    walls = [h.split()[0] for h in header if "Wall Area" in h]
    assert walls == ["N", "NW", "NE", "S", "SW", "SE", "E", "W"]


def test_export_refused_lists_invalid_spaces(state, space):
    with pytest.raises(ExportRefusedError) as exc:
        check_exportable(state)
    assert [i.space_id for i in exc.value.invalid] == [space.id]


def test_export_without_floors():
    with pytest.raises(ValueError):
        export_xlsx(ProjectState(), "unused.xlsx")


def test_refused_export_writes_nothing(tmp_path, state, space):
    path = tmp_path / "takeoff.xlsx"
    with pytest.raises(ExportRefusedError):
        export_xlsx(state, str(path))
    assert not path.exists()


def test_export_xlsx_writes_one_sheet_per_floor(tmp_path, state, valid_space):
    state.add_floor("Second Floor")
    path = export_xlsx(state, str(tmp_path / "takeoff.xlsx"))

    wb = load_workbook(path)
    assert wb.sheetnames == ["First Floor", "Second Floor"]
    ws = wb["First Floor"]
    assert ws.freeze_panes == "A2"
    assert [c.value for c in ws[1]] == space_row_header(DisplayUnit.FEET)
    assert ws[1][0].font.bold
    assert ws.max_row == 2
    assert ws["A2"].value == "Kitchen"
    assert ws["D2"].value == 100.0
    assert wb["Second Floor"].max_row == 1


def test_sheet_title_truncates_and_dedupes():
    used = set()
    long_name = "Basement Level With A Very Long Descriptive Name"
    first = sheet_title(long_name, used)
    second = sheet_title(long_name, used)
    assert first == long_name[:31]
    assert len(second) <= 31
    assert second.endswith(" (2)")
    assert sheet_title("Plan 1/2: East", used) == "Plan 1_2_ East"
    assert sheet_title("", used) == "Floor"


def test_default_export_name(state):
    assert default_export_name(state) == "Floorplan_Export.xlsx"
    state.project_name = "Maple St. Renovation"
    assert default_export_name(state) == "Maple_St_Renovation_Export.xlsx"


def test_safe_filename():
    assert safe_filename("Přízemí / Ground") == "Prizemi_Ground"
    assert safe_filename("???") == "floor"
