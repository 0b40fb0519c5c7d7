"""
Configuration & Constants
=========================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Tuning: Hit-test radii and drawing tolerances are shared by the controller
   (hit testing) and the canvas (rendering); they must agree.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets when the app is frozen into an .exe.

Exports:
    VERTEX_RADIUS, EDGE_BUFFER, CLOSE_THRESHOLD (float): Pointer tolerances in pixels.
    METERS_PER_FOOT (float): Conversion between the internal unit and meters.
    AUTOSAVE_PATH (str): Absolute path of the autosave project file.
"""
import os
import sys
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: config.py is in src/floorplantakeoff/
    project_root: Path = Path(__file__).parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# ---- pointer tolerances (canvas pixels) ----
VERTEX_RADIUS: float = 12.0
EDGE_BUFFER: float = 6.0
CLOSE_THRESHOLD: float = 12.0

# ---- visuals ----
VERTEX_HANDLE_SIZE: float = 10.0
DRAW_POINT_RADIUS: float = 3.0
EDGE_OVERLAY_THICKNESS: float = 2.0
EDGE_HIGHLIGHT_THICKNESS: float = 6.0
TEMP_EDGE_THICKNESS: float = 2.0
SCALE_LINE_WIDTH: float = 8.0

COLOR_SPACE = (16, 185, 129, 46)
COLOR_SPACE_STROKE = "#10b981"
COLOR_SPACE_SELECTED = (37, 99, 235, 46)
COLOR_SPACE_SELECTED_STROKE = "#2563eb"
COLOR_EDGE_SELECTED = (255, 221, 87, 242)
COLOR_EDGE_EXTERIOR = "#f59e0b"
COLOR_CEILING = (168, 85, 247, 40)
COLOR_CEILING_STROKE = "#a855f7"
COLOR_DRAW_POINT = "#93c5fd"
COLOR_DRAW_SEGMENT = "#60a5fa"
COLOR_SCALE_LINE = (239, 68, 68, 200)

DEFAULT_CANVAS_WIDTH: int = 1200
DEFAULT_CANVAS_HEIGHT: int = 800
PAN_STEP: int = 40

# ---- units ----
METERS_PER_FOOT: float = 0.3048

# ---- paths ----
ASSETS_PATH: str = get_resource_path("assets")
APP_DATA_DIR: str = os.environ.get(
    "FLOORPLANTAKEOFF_HOME",
    os.path.join(str(Path.home()), ".floorplantakeoff")
)
AUTOSAVE_PATH: str = os.path.join(APP_DATA_DIR, "autosave.fpt")
