"""
Input/Output Manager (HDF5)
Handles saving and loading the ProjectState to project files.

The whole state is one JSON document stored inside the HDF5 container; the
background images travel alongside it as binary blobs so a project file is
self-contained.
"""
import json
import logging
import os
import tempfile
import uuid
from importlib.metadata import version, PackageNotFoundError
from typing import Optional

import h5py
import numpy as np

from floorplantakeoff.config import AUTOSAVE_PATH
from floorplantakeoff.model.state import ProjectState

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("floorplan-takeoff")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

PROJECT_FILE_FILTER = "Floorplan Takeoff (*.fpt *.h5)"


class IOManager:
    # Track temporary files created during load
    _TEMP_FILES: list[str] = []

    @staticmethod
    def cleanup_temp_files() -> None:
        """Deletes all temporary files created during the session."""
        logger.info(f"Cleaning up {len(IOManager._TEMP_FILES)} temporary image files.")
        for temp_path in IOManager._TEMP_FILES:
            try:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                    logger.debug(f"Deleted temp file: {temp_path}")
            except OSError as e:
                logger.warning(f"Could not delete temp file '{temp_path}': {e}")
        IOManager._TEMP_FILES.clear()

    @staticmethod
    def save_project(state: ProjectState, filepath: str) -> None:
        logger.info(f"Saving project to: {filepath}")
        try:
            directory = os.path.dirname(filepath)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with h5py.File(filepath, "w") as f:
                f.attrs["version"] = APP_VERSION
                f.attrs["project_name"] = state.project_name

                # --- 1. SAVE STATE ---
                state_json = json.dumps(state.to_dict())
                f.create_dataset("state_json", data=np.void(state_json.encode('utf-8')))

                # --- 2. SAVE BACKGROUND IMAGES (BINARY) ---
                grp_img = f.create_group("images")
                for floor in state.floors:
                    if floor.image_path and os.path.exists(floor.image_path):
                        IOManager._save_image_binary(grp_img, floor.id, floor.image_path)

            logger.info(f"Project saved to: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to save project: {e}")
            raise

    @staticmethod
    def load_project(filepath: str) -> ProjectState:
        """
        Read a project file.

        Never raises: a missing, foreign or corrupt file yields an empty
        ProjectState.
        """
        logger.info(f"Loading project from: {filepath}")
        if not os.path.exists(filepath):
            logger.info(f"No project file at '{filepath}', starting empty.")
            return ProjectState()
        if not h5py.is_hdf5(filepath):
            logger.error(f"File '{filepath}' is not a valid HDF5 file.")
            return ProjectState()

        try:
            with h5py.File(filepath, "r") as f:
                if "state_json" not in f:
                    logger.warning("Project file holds no state, starting empty.")
                    return ProjectState()

                state_json = bytes(f["state_json"][()]).decode('utf-8')
                state = ProjectState.from_dict(json.loads(state_json))

                # --- LOAD BACKGROUND IMAGES ---
                if "images" in f:
                    grp_img = f["images"]
                    for floor in state.floors:
                        if floor.id in grp_img:
                            temp_path = IOManager._load_image_binary(grp_img[floor.id])
                            if temp_path:
                                floor.image_path = temp_path

            state.filepath = filepath
            logger.info(f"Project loaded from: {filepath}")
            return state

        except Exception as e:
            logger.exception(f"Failed to load project, starting empty: {e}")
            return ProjectState()

    # ---- autosave ----

    @staticmethod
    def load_autosave(path: str = AUTOSAVE_PATH) -> ProjectState:
        state = IOManager.load_project(path)
        # autosave is not a user-chosen file
        state.filepath = None
        return state

    @staticmethod
    def save_autosave(state: ProjectState, path: str = AUTOSAVE_PATH) -> bool:
        try:
            IOManager.save_project(state, path)
            return True
        except Exception as e:
            logger.warning(f"Autosave failed: {e}")
            return False

    # --- BINARY IMAGE HELPERS ---

    @staticmethod
    def _save_image_binary(group: h5py.Group, name: str, image_path: str) -> None:
        """Reads file bytes and saves to HDF5 Opaque dataset."""
        try:
            with open(image_path, "rb") as img:
                binary_data = img.read()

            data_np = np.frombuffer(binary_data, dtype=np.uint8)
            group.create_dataset(name, data=data_np, compression="gzip")

            # Save original extension so Qt can pick the right decoder
            group[name].attrs["extension"] = os.path.splitext(image_path)[1]

            logger.debug(f"Image for '{name}' saved ({len(data_np)} bytes).")

        except OSError as e:
            logger.warning(f"Could not save image binary '{image_path}': {e}")

    @staticmethod
    def _load_image_binary(dset: h5py.Dataset) -> Optional[str]:
        """Extracts binary blob to temp file."""
        try:
            binary_data = dset[:].tobytes()
            ext = dset.attrs.get("extension", ".png")
            if isinstance(ext, bytes):
                ext = ext.decode('utf-8')

            unique_name = f"floor_{uuid.uuid4().hex}{ext}"
            temp_path = os.path.join(tempfile.gettempdir(), unique_name)

            with open(temp_path, "wb") as img:
                logger.debug(f"Saving temporary image file to: {temp_path}")
                img.write(binary_data)

            IOManager._TEMP_FILES.append(temp_path)
            return temp_path

        except OSError as e:
            logger.warning(f"Could not load image binary: {e}")
            return None
