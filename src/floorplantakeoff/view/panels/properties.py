"""
Properties Panel
================
Side panel with the editable properties of the active floor's scale, the
selected space, its ceiling and its selected edge.

Why is this file needed?
------------------------
1. Editing: Every field forwards to an InteractionController setter; values
   are typed in the display unit and converted there.
2. Feedback: Derived values (area, wall length, window area, exterior
   perimeter) are shown read-only and refreshed after every change.
"""
from typing import Optional

from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QFormLayout, QGroupBox, QLabel, QLineEdit, QPushButton, QVBoxLayout, QWidget
)

from floorplantakeoff.controller.interaction import InteractionController
from floorplantakeoff.model.ceiling import effective_ceiling_area
from floorplantakeoff.model.registry import TypeKind
from floorplantakeoff.model.scale import (
    DisplayUnit, format_with_unit, to_display_area, to_display_length, unit_abbrev
)
from floorplantakeoff.model.space import Direction


def _fmt(value: Optional[float]) -> str:
    """Text for an editable numeric field; unset shows as empty."""
    if value is None:
        return ""
    return f"{round(value, 2):g}"


class PropertiesPanel(QWidget):
    def __init__(self, controller: InteractionController, parent=None) -> None:
        super().__init__(parent)
        self.controller = controller

        layout = QVBoxLayout(self)

        # --- SCALE ---
        self.grp_scale = QGroupBox("Scale")
        form = QFormLayout(self.grp_scale)
        self.unit_combo = QComboBox()
        for unit in DisplayUnit:
            self.unit_combo.addItem(unit.value.capitalize(), unit.value)
        self.unit_combo.currentIndexChanged.connect(self._on_unit_changed)
        form.addRow("Units:", self.unit_combo)
        self.scale_length_edit = QLineEdit()
        self.scale_length_edit.editingFinished.connect(self._on_scale_length)
        self.lbl_scale_length = QLabel("Real length:")
        form.addRow(self.lbl_scale_length, self.scale_length_edit)
        self.lbl_scale_status = QLabel()
        form.addRow(self.lbl_scale_status)
        self.btn_scale_visibility = QPushButton("Show / Hide Scale Line")
        self.btn_scale_visibility.clicked.connect(controller.toggle_scale_visibility)
        form.addRow(self.btn_scale_visibility)
        layout.addWidget(self.grp_scale)

        # --- SPACE ---
        self.grp_space = QGroupBox("Space")
        form = QFormLayout(self.grp_space)
        self.name_edit = QLineEdit()
        self.name_edit.editingFinished.connect(lambda: controller.set_space_name(self.name_edit.text()))
        form.addRow("Name:", self.name_edit)
        self.ceiling_height_edit = QLineEdit()
        self.ceiling_height_edit.editingFinished.connect(
            lambda: controller.set_ceiling_height(self.ceiling_height_edit.text())
        )
        self.lbl_ceiling_height = QLabel("Avg. ceiling height:")
        form.addRow(self.lbl_ceiling_height, self.ceiling_height_edit)
        self.skylight_check = QCheckBox("Has skylight")
        self.skylight_check.toggled.connect(controller.set_skylight)
        form.addRow(self.skylight_check)
        self.skylight_area_edit = QLineEdit()
        self.skylight_area_edit.editingFinished.connect(
            lambda: controller.set_skylight_area(self.skylight_area_edit.text())
        )
        self.lbl_skylight_area = QLabel("Skylight area:")
        form.addRow(self.lbl_skylight_area, self.skylight_area_edit)
        self.skylight_type_combo = QComboBox()
        self.skylight_type_combo.activated.connect(
            lambda _: controller.set_skylight_type(self.skylight_type_combo.currentData())
        )
        form.addRow("Skylight type:", self.skylight_type_combo)
        self.lbl_area = QLabel()
        form.addRow("Floor area:", self.lbl_area)
        self.lbl_perimeter = QLabel()
        form.addRow("Exterior perimeter:", self.lbl_perimeter)
        self.lbl_doors = QLabel()
        form.addRow("Doors:", self.lbl_doors)
        self.btn_delete_space = QPushButton("Delete Space")
        self.btn_delete_space.clicked.connect(controller.delete_selected_space)
        form.addRow(self.btn_delete_space)
        layout.addWidget(self.grp_space)

        # --- CEILING ---
        self.grp_ceiling = QGroupBox("Ceiling")
        form = QFormLayout(self.grp_ceiling)
        self.same_as_floor_check = QCheckBox("Same as floor area")
        self.same_as_floor_check.toggled.connect(controller.set_ceiling_same_as_floor)
        form.addRow(self.same_as_floor_check)
        self.manual_check = QCheckBox("Manual area")
        self.manual_check.toggled.connect(controller.set_ceiling_manual_override)
        form.addRow(self.manual_check)
        self.manual_area_edit = QLineEdit()
        self.manual_area_edit.editingFinished.connect(
            lambda: controller.set_ceiling_manual_area(self.manual_area_edit.text())
        )
        self.lbl_manual_area = QLabel("Manual area:")
        form.addRow(self.lbl_manual_area, self.manual_area_edit)
        self.lbl_ceiling_area = QLabel()
        form.addRow("Ceiling area:", self.lbl_ceiling_area)
        self.btn_draw_ceiling = QPushButton("Draw Ceiling")
        self.btn_draw_ceiling.clicked.connect(controller.enter_draw_ceiling)
        form.addRow(self.btn_draw_ceiling)
        self.btn_ceiling_visibility = QPushButton("Show / Hide Ceiling")
        self.btn_ceiling_visibility.clicked.connect(controller.toggle_ceiling_visibility)
        form.addRow(self.btn_ceiling_visibility)
        layout.addWidget(self.grp_ceiling)

        # --- EDGE ---
        self.grp_edge = QGroupBox("Edge")
        form = QFormLayout(self.grp_edge)
        self.exterior_check = QCheckBox("Exterior wall")
        self.exterior_check.toggled.connect(controller.set_edge_exterior)
        form.addRow(self.exterior_check)
        self.lbl_edge_length = QLabel()
        form.addRow("Length:", self.lbl_edge_length)
        self.wall_height_edit = QLineEdit()
        self.wall_height_edit.editingFinished.connect(
            lambda: controller.set_edge_height(self.wall_height_edit.text())
        )
        self.lbl_wall_height = QLabel("Wall height:")
        form.addRow(self.lbl_wall_height, self.wall_height_edit)
        self.direction_combo = QComboBox()
        self.direction_combo.addItems([d.value for d in Direction])
        self.direction_combo.activated.connect(
            lambda _: controller.set_edge_direction(self.direction_combo.currentText())
        )
        form.addRow("Direction:", self.direction_combo)
        self.win_width_edit = QLineEdit()
        self.win_width_edit.editingFinished.connect(
            lambda: controller.set_edge_window_width(self.win_width_edit.text())
        )
        self.lbl_win_width = QLabel("Window width:")
        form.addRow(self.lbl_win_width, self.win_width_edit)
        self.win_height_edit = QLineEdit()
        self.win_height_edit.editingFinished.connect(
            lambda: controller.set_edge_window_height(self.win_height_edit.text())
        )
        self.lbl_win_height = QLabel("Window height:")
        form.addRow(self.lbl_win_height, self.win_height_edit)
        self.lbl_win_area = QLabel()
        form.addRow("Window area:", self.lbl_win_area)
        self.door_check = QCheckBox("Has door")
        self.door_check.toggled.connect(controller.set_edge_door)
        form.addRow(self.door_check)
        self.door_qty_edit = QLineEdit()
        self.door_qty_edit.editingFinished.connect(
            lambda: controller.set_edge_door_quantity(self.door_qty_edit.text())
        )
        form.addRow("Door quantity:", self.door_qty_edit)

        self.type_combos: dict[TypeKind, QComboBox] = {}
        for kind, label in ((TypeKind.WALL, "Wall type:"), (TypeKind.WINDOW, "Window type:"),
                            (TypeKind.DOOR, "Door type:")):
            combo = QComboBox()
            combo.activated.connect(lambda _, k=kind, c=combo: controller.set_edge_type(k, c.currentData()))
            self.type_combos[kind] = combo
            form.addRow(label, combo)
        layout.addWidget(self.grp_edge)

        layout.addStretch(1)

        # --- SIGNAL CONNECTIONS ---
        controller.model_changed.connect(self.load_from_state)
        controller.selection_changed.connect(self.load_from_state)
        controller.floors_changed.connect(self.load_from_state)

        self.load_from_state()

    # ---- slots ----

    def _on_unit_changed(self, index: int) -> None:
        value = self.unit_combo.itemData(index)
        if value and value != self.controller.state.display_unit.value:
            self.controller.set_display_unit(DisplayUnit(value))

    def _on_scale_length(self) -> None:
        if not self.controller.set_declared_length_from_display(self.scale_length_edit.text()):
            # revert to the stored value
            self.load_from_state()

    # ---- refresh ----

    def _fill_type_combo(self, combo: QComboBox, kind: TypeKind, current: Optional[str]) -> None:
        combo.clear()
        combo.addItem("(none)", None)
        for element_type in self.controller.state.type_library.list_types(kind):
            combo.addItem(element_type.name, element_type.id)
        index = combo.findData(current)
        combo.setCurrentIndex(index if index >= 0 else 0)

    def load_from_state(self) -> None:
        """Re-read every field from the model without triggering edits."""
        widgets = self.findChildren(QWidget)
        for w in widgets:
            w.blockSignals(True)
        try:
            self._load()
        finally:
            for w in widgets:
                w.blockSignals(False)

    def _load(self) -> None:
        c = self.controller
        unit = c.state.display_unit
        u = unit_abbrev(unit)
        floor = c.active_floor()
        space = c.selected_space()
        edge = c.selected_edge()

        self.unit_combo.setCurrentIndex(self.unit_combo.findData(unit.value))
        self.lbl_scale_length.setText(f"Real length ({u}):")
        self.lbl_ceiling_height.setText(f"Avg. ceiling height ({u}):")
        self.lbl_skylight_area.setText(f"Skylight area ({u}²):")
        self.lbl_manual_area.setText(f"Manual area ({u}²):")
        self.lbl_wall_height.setText(f"Wall height ({u}):")
        self.lbl_win_width.setText(f"Window width ({u}):")
        self.lbl_win_height.setText(f"Window height ({u}):")

        self.grp_scale.setEnabled(floor is not None)
        if floor is not None:
            declared = floor.scale.declared_length
            self.scale_length_edit.setText(_fmt(to_display_length(declared, unit)) if declared > 0 else "")
            self.lbl_scale_status.setText(
                "Calibrated" if floor.scale.is_calibrated else "Not calibrated: draw a scale line"
            )

        self.grp_space.setEnabled(space is not None)
        self.grp_ceiling.setEnabled(space is not None)
        if space is not None:
            self.name_edit.setText(space.name)
            self.ceiling_height_edit.setText(
                _fmt(to_display_length(space.ceiling_height, unit)) if space.ceiling_height is not None else ""
            )
            self.skylight_check.setChecked(space.has_skylight)
            self.skylight_area_edit.setText(
                _fmt(to_display_area(space.skylight_area, unit)) if space.skylight_area is not None else ""
            )
            self.skylight_area_edit.setEnabled(space.has_skylight)
            self._fill_type_combo(self.skylight_type_combo, TypeKind.SKYLIGHT, space.skylight_type)
            self.lbl_area.setText(format_with_unit(space.area, unit, is_area=True))
            self.lbl_perimeter.setText(format_with_unit(space.exterior_perimeter, unit))
            self.lbl_doors.setText(str(space.door_count))

            ceiling = space.ceiling
            self.same_as_floor_check.setChecked(ceiling.same_as_floor)
            self.manual_check.setChecked(ceiling.manual_override)
            self.manual_check.setEnabled(not ceiling.same_as_floor)
            self.manual_area_edit.setText(
                _fmt(to_display_area(ceiling.manual_area, unit)) if ceiling.manual_area is not None else ""
            )
            self.manual_area_edit.setEnabled(ceiling.manual_override and not ceiling.same_as_floor)
            self.lbl_ceiling_area.setText(format_with_unit(effective_ceiling_area(space), unit, is_area=True))
            self.btn_ceiling_visibility.setEnabled(ceiling.has_polygon)
        else:
            for w in (self.name_edit, self.ceiling_height_edit, self.skylight_area_edit, self.manual_area_edit):
                w.clear()
            for lbl in (self.lbl_area, self.lbl_perimeter, self.lbl_doors, self.lbl_ceiling_area):
                lbl.setText("-")

        self.grp_edge.setEnabled(edge is not None)
        if edge is not None:
            self.exterior_check.setChecked(edge.is_exterior)
            self.lbl_edge_length.setText(format_with_unit(edge.length, unit))
            self.wall_height_edit.setText(_fmt(to_display_length(edge.height, unit)) if edge.height is not None else "")
            self.direction_combo.setCurrentText(edge.direction.value)
            self.win_width_edit.setText(
                _fmt(to_display_length(edge.win_width, unit)) if edge.win_width is not None else ""
            )
            self.win_height_edit.setText(
                _fmt(to_display_length(edge.win_height, unit)) if edge.win_height is not None else ""
            )
            self.lbl_win_area.setText(format_with_unit(edge.win_area, unit, is_area=True))
            self.door_check.setChecked(edge.has_door)
            self.door_qty_edit.setText(str(edge.door_quantity) if edge.door_quantity is not None else "")
            self.door_qty_edit.setEnabled(edge.has_door)
            self._fill_type_combo(self.type_combos[TypeKind.WALL], TypeKind.WALL, edge.wall_type)
            self._fill_type_combo(self.type_combos[TypeKind.WINDOW], TypeKind.WINDOW, edge.window_type)
            self._fill_type_combo(self.type_combos[TypeKind.DOOR], TypeKind.DOOR, edge.door_type)
        else:
            for lbl in (self.lbl_edge_length, self.lbl_win_area):
                lbl.setText("-")
