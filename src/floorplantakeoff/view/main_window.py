"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, Toolbar, the floor canvas
and the properties panel.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (File -> Save, Export, floor
   switching) to the IOManager and the InteractionController.
3. Dialogs: It supplies the prompt / confirm callbacks the controller uses.
"""
import logging
import os
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QComboBox, QFileDialog, QInputDialog, QLabel, QLineEdit, QMainWindow, QMessageBox, QScrollArea,
    QSplitter, QToolBar
)

from floorplantakeoff.controller.interaction import InteractionController
from floorplantakeoff.model.export import ExportRefusedError, default_export_name, export_xlsx
from floorplantakeoff.model.io import IOManager, PROJECT_FILE_FILTER
from floorplantakeoff.model.state import ProjectState
from floorplantakeoff.view.panels.properties import PropertiesPanel
from floorplantakeoff.view.widgets.floor_canvas import FloorCanvas

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Floorplan Takeoff"
IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif)"
EXPORT_FILE_FILTER = "Excel Workbook (*.xlsx)"


class MainWindow(QMainWindow):
    def __init__(self, project_state: ProjectState, autosave: bool = True) -> None:
        super().__init__()
        self.project: ProjectState = project_state
        self.autosave = autosave
        self.is_modified: bool = False

        self.controller = InteractionController(
            project_state, prompt=self._prompt, confirm=self._confirm
        )

        self.resize(1400, 900)

        # --- CONTENT AREA ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        self.canvas = FloorCanvas(self.controller)
        splitter.addWidget(self.canvas)

        self.properties = PropertiesPanel(self.controller)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.properties)
        splitter.addWidget(scroll)

        # 4 parts canvas : 1 part sidebar
        splitter.setSizes([1080, 320])

        # --- ACTIONS, MENUS & TOOLBAR ---
        self._create_actions()
        self._create_menus()
        self._create_toolbar()

        # --- SIGNAL CONNECTIONS ---
        self.controller.model_changed.connect(self.on_data_changed)
        self.controller.floors_changed.connect(self.refresh_floor_combo)
        self.controller.status_changed.connect(self.statusBar().showMessage)

        self.refresh_floor_combo()
        self.update_window_title()

    def _create_actions(self) -> None:
        c = self.controller

        # File Actions
        self.act_new = QAction("New Project", self)
        self.act_new.triggered.connect(self.on_file_new)

        self.act_open = QAction("Open...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_save = QAction("Save", self)
        self.act_save.setShortcut("Ctrl+S")
        self.act_save.triggered.connect(self.on_file_save)

        self.act_save_as = QAction("Save As...", self)
        self.act_save_as.setShortcut("Ctrl+Shift+S")
        self.act_save_as.triggered.connect(self.on_file_save_as)

        self.act_export = QAction("Export to Excel...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_export)

        self.act_project_name = QAction("Rename Project...", self)
        self.act_project_name.triggered.connect(self.on_rename_project)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        # Floor Actions
        self.act_add_floor = QAction("Add Floor...", self)
        self.act_add_floor.triggered.connect(self.on_add_floor)

        self.act_delete_floor = QAction("Delete Floor", self)
        self.act_delete_floor.triggered.connect(c.delete_active_floor)

        # Tool Actions
        self.act_draw_scale = QAction("Draw Scale", self)
        self.act_draw_scale.triggered.connect(c.enter_draw_scale)

        self.act_draw_space = QAction("Draw Space", self)
        self.act_draw_space.setShortcut("Ctrl+D")
        self.act_draw_space.triggered.connect(c.enter_draw_space)

        self.act_insert_vertex = QAction("Insert Vertex", self)
        self.act_insert_vertex.triggered.connect(c.toggle_insert_vertex)

        self.act_delete_vertex = QAction("Delete Vertex", self)
        self.act_delete_vertex.triggered.connect(c.delete_selected_vertex)

        self.act_delete_space = QAction("Delete Space", self)
        self.act_delete_space.triggered.connect(c.delete_selected_space)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_new)
        file_menu.addSeparator()
        file_menu.addAction(self.act_open)
        file_menu.addSeparator()
        file_menu.addAction(self.act_save)
        file_menu.addAction(self.act_save_as)
        file_menu.addAction(self.act_export)
        file_menu.addSeparator()
        file_menu.addAction(self.act_project_name)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        floor_menu = menu_bar.addMenu("F&loor")
        floor_menu.addAction(self.act_add_floor)
        floor_menu.addAction(self.act_delete_floor)

        edit_menu = menu_bar.addMenu("&Edit")
        for act in (self.act_draw_scale, self.act_draw_space, self.act_insert_vertex,
                    self.act_delete_vertex, self.act_delete_space):
            edit_menu.addAction(act)

    def _create_toolbar(self) -> None:
        toolbar = QToolBar("Tools")
        self.addToolBar(toolbar)

        toolbar.addWidget(QLabel(" Floor: "))
        self.floor_combo = QComboBox()
        self.floor_combo.setMinimumWidth(160)
        self.floor_combo.activated.connect(self.on_floor_selected)
        toolbar.addWidget(self.floor_combo)
        toolbar.addAction(self.act_add_floor)
        toolbar.addSeparator()
        for act in (self.act_draw_scale, self.act_draw_space, self.act_insert_vertex,
                    self.act_delete_vertex):
            toolbar.addAction(act)
        toolbar.addSeparator()
        toolbar.addAction(self.act_export)

    # --- CONTROLLER CALLBACKS ---

    def _prompt(self, message: str, default: str) -> Optional[str]:
        text, ok = QInputDialog.getText(self, VISIBLE_APP_NAME, message, QLineEdit.Normal, default)
        return text if ok else None

    def _confirm(self, message: str) -> bool:
        reply = QMessageBox.question(self, VISIBLE_APP_NAME, message, QMessageBox.Yes | QMessageBox.No)
        return reply == QMessageBox.Yes

    # --- HELPER METHODS ---

    def update_window_title(self) -> None:
        """Updates the window title based on project name, filename and dirty state."""
        filename = os.path.basename(self.project.filepath) if self.project.filepath else "Untitled"
        title = f"{VISIBLE_APP_NAME} - {self.project.title} [{filename}"
        if self.is_modified:
            title += "*"
        title += "]"
        self.setWindowTitle(title)

    def set_modified(self, modified: bool) -> None:
        if self.is_modified != modified:
            self.is_modified = modified
            self.update_window_title()

    def refresh_floor_combo(self) -> None:
        self.floor_combo.blockSignals(True)
        try:
            self.floor_combo.clear()
            for floor in self.project.floors:
                self.floor_combo.addItem(floor.name, floor.id)
            index = self.floor_combo.findData(self.project.active_floor_id)
            self.floor_combo.setCurrentIndex(index)
        finally:
            self.floor_combo.blockSignals(False)
        self.act_delete_floor.setEnabled(bool(self.project.floors))

    def on_data_changed(self) -> None:
        """Slot called when project data changes."""
        self.set_modified(True)
        self.update_window_title()
        # a drag emits on every move; save once when it is released
        if self.autosave and self.controller.drag is None:
            IOManager.save_autosave(self.project)

    def _replace_project(self, state: ProjectState) -> None:
        self.project = state
        self.controller.set_state(state)
        self.is_modified = False
        self.update_window_title()

    # --- FLOOR SLOTS ---

    def on_floor_selected(self, index: int) -> None:
        floor_id = self.floor_combo.itemData(index)
        if floor_id is not None:
            self.controller.set_active_floor(floor_id)

    def on_add_floor(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(self, "Choose Floor Plan Image", "", IMAGE_FILE_FILTER)
        if fname:
            self.controller.add_floor(fname)

    def on_rename_project(self) -> None:
        text, ok = QInputDialog.getText(
            self, VISIBLE_APP_NAME, "Project title:", QLineEdit.Normal, self.project.project_name
        )
        if ok:
            self.controller.set_project_name(text.strip())

    # --- FILE SLOTS ---

    def on_file_new(self) -> None:
        if self.project.floors and not self._confirm("Discard the current project and start a new one?"):
            return
        self.project.reset()
        self._replace_project(self.project)

    def on_file_open(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(self, "Open Project", "", PROJECT_FILE_FILTER)
        if not fname:
            return
        state = IOManager.load_project(fname)
        if state.filepath is None:
            QMessageBox.critical(self, "Error", f"Could not open file:\n{fname}")
            return
        self._replace_project(state)

    def on_file_save(self) -> None:
        if self.project.filepath:
            try:
                IOManager.save_project(self.project, self.project.filepath)
                self.set_modified(False)
            except Exception as e:
                QMessageBox.critical(self, "Error", f"Could not save file:\n{e}")
        else:
            self.on_file_save_as()

    def on_file_save_as(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(self, "Save Project", "", PROJECT_FILE_FILTER)
        if not fname:
            return
        if not fname.endswith((".fpt", ".h5")):
            fname += ".fpt"
        try:
            IOManager.save_project(self.project, fname)
            self.project.filepath = fname
            self.is_modified = False
            self.update_window_title()
        except Exception as e:
            QMessageBox.critical(self, "Error", f"Could not save file:\n{e}")

    def on_export(self) -> None:
        if not self.project.floors:
            QMessageBox.information(self, VISIBLE_APP_NAME, "Add a floor before exporting.")
            return
        fname, _ = QFileDialog.getSaveFileName(
            self, "Export Takeoff", default_export_name(self.project), EXPORT_FILE_FILTER
        )
        if not fname:
            return
        if not fname.endswith(".xlsx"):
            fname += ".xlsx"
        try:
            written = export_xlsx(self.project, fname)
        except ExportRefusedError as e:
            details = "\n".join(item.describe() for item in e.invalid)
            QMessageBox.warning(
                self, "Export Refused",
                f"Please complete the required fields before exporting:\n\n{details}"
            )
            return
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Could not write export:\n{e}")
            return
        self.statusBar().showMessage(f"Exported takeoff to {written}")

    def closeEvent(self, event, /) -> None:
        """Handle window close event to prompt for saving if modified."""
        if self.is_modified and self.project.filepath:
            reply = QMessageBox.question(
                self,
                "Save changes?",
                "The project has been modified. Save changes before exiting?",
                QMessageBox.Save | QMessageBox.Discard | QMessageBox.Cancel
            )
            if reply == QMessageBox.Save:
                self.on_file_save()
            elif reply == QMessageBox.Cancel:
                event.ignore()
                return

        if self.autosave:
            IOManager.save_autosave(self.project)

        # Clean up Temp Files if any
        IOManager.cleanup_temp_files()
        event.accept()
