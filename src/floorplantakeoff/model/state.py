"""
Project State (Data Model)
==========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds every floor, its calibration and its spaces in
   one place, together with the display-unit preference.
2. Persistence: This object is what gets serialized when saving a project;
   the persistence layer treats it as one opaque aggregate.
3. Decoupling: Views read from this object; the controller writes to it.

Classes:
    Floor: One plan sheet with its background, scale and spaces.
    ProjectState: The main container class.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from floorplantakeoff.model.registry import TypeLibrary
from floorplantakeoff.model.scale import DisplayUnit, Scale
from floorplantakeoff.model.space import Space, recompute_derived
from floorplantakeoff.utils import new_id

logger = logging.getLogger(__name__)

UNTITLED_PROJECT = "Project Title Click To Enter"


@dataclass
class Floor:
    name: str
    image_path: Optional[str] = None
    id: str = field(default_factory=lambda: new_id("floor"))
    scale: Scale = field(default_factory=Scale)
    spaces: List[Space] = field(default_factory=list)

    def scale_factor(self) -> float:
        return self.scale.scale_factor()

    def find_space(self, space_id: Optional[str]) -> Optional[Space]:
        if space_id is None:
            return None
        return next((s for s in self.spaces if s.id == space_id), None)

    def add_space(self, space: Space) -> Space:
        self.spaces.append(space)
        recompute_derived(space, self.scale_factor())
        logger.info(f"Space '{space.name}' added to floor '{self.name}'.")
        return space

    def remove_space(self, space_id: str) -> bool:
        before = len(self.spaces)
        self.spaces = [s for s in self.spaces if s.id != space_id]
        return len(self.spaces) != before

    def recompute_all(self) -> None:
        """Re-derive every space after a calibration change."""
        factor = self.scale_factor()
        for space in self.spaces:
            recompute_derived(space, factor)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "image_path": self.image_path,
            "scale": self.scale.to_dict(),
            "spaces": [s.to_dict() for s in self.spaces],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Floor:
        floor = Floor(
            name=data.get("name", "Floor"),
            image_path=data.get("image_path"),
            id=data.get("id") or new_id("floor"),
            scale=Scale.from_dict(data.get("scale")),
        )
        for space_data in data.get("spaces", []):
            try:
                floor.spaces.append(Space.from_dict(space_data))
            except ValueError as e:
                logger.warning(f"Skipping unreadable space on floor '{floor.name}': {e}")
        floor.recompute_all()
        return floor


@dataclass
class ProjectState:
    """
    Singleton-like class that holds the entire state of the open project.
    Pass this instance to the controller and the views.
    """
    project_name: str = ""
    display_unit: DisplayUnit = DisplayUnit.FEET
    floors: List[Floor] = field(default_factory=list)
    active_floor_id: Optional[str] = None
    type_library: TypeLibrary = field(default_factory=TypeLibrary)
    filepath: Optional[str] = None

    def reset(self) -> None:
        """Clear all data for a new project"""
        self.project_name = ""
        self.display_unit = DisplayUnit.FEET
        self.floors = []
        self.active_floor_id = None
        self.type_library = TypeLibrary()
        self.filepath = None
        logger.info("Project state has been reset.")

    @property
    def title(self) -> str:
        name = self.project_name.strip()
        return name if name else UNTITLED_PROJECT

    # ---- floors ----

    def active_floor(self) -> Optional[Floor]:
        return self.find_floor(self.active_floor_id)

    def find_floor(self, floor_id: Optional[str]) -> Optional[Floor]:
        if floor_id is None:
            return None
        return next((f for f in self.floors if f.id == floor_id), None)

    def add_floor(self, name: str, image_path: Optional[str] = None) -> Floor:
        """Append a floor and make it the active one."""
        floor = Floor(name=name, image_path=image_path)
        self.floors.append(floor)
        self.active_floor_id = floor.id
        logger.info(f"Floor '{name}' added.")
        return floor

    def delete_floor(self, floor_id: str) -> bool:
        """Remove a floor with all its spaces; the first remaining floor becomes active."""
        floor = self.find_floor(floor_id)
        if floor is None:
            return False
        self.floors = [f for f in self.floors if f.id != floor_id]
        if self.active_floor_id == floor_id:
            self.active_floor_id = self.floors[0].id if self.floors else None
        logger.info(f"Floor '{floor.name}' deleted with {len(floor.spaces)} space(s).")
        return True

    def set_active_floor(self, floor_id: str) -> bool:
        if self.find_floor(floor_id) is None:
            return False
        self.active_floor_id = floor_id
        return True

    # ---- serialization ----

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_name": self.project_name,
            "display_unit": self.display_unit.value,
            "active_floor_id": self.active_floor_id,
            "floors": [f.to_dict() for f in self.floors],
            "type_library": self.type_library.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ProjectState:
        state = ProjectState(
            project_name=str(data.get("project_name") or ""),
            display_unit=DisplayUnit(data.get("display_unit", DisplayUnit.FEET)),
            floors=[Floor.from_dict(f) for f in data.get("floors", [])],
            type_library=TypeLibrary.from_dict(data.get("type_library")),
        )
        active = data.get("active_floor_id")
        if state.find_floor(active) is not None:
            state.active_floor_id = active
        elif state.floors:
            state.active_floor_id = state.floors[0].id
        return state
