"""
Element Type Library
====================
Named wall / window / door / skylight types that edges and spaces may refer
to by id. References are opaque: a dangling id simply resolves to None.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Dict, List, Optional

from floorplantakeoff.utils import new_id

logger = logging.getLogger(__name__)


class TypeKind(StrEnum):
    WALL = "wall"
    WINDOW = "window"
    DOOR = "door"
    SKYLIGHT = "skylight"


@dataclass
class ElementType:
    kind: TypeKind
    name: str
    description: str = ""
    id: str = field(default_factory=lambda: new_id("type"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "description": self.description,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ElementType:
        return ElementType(
            kind=TypeKind(data.get("kind", TypeKind.WALL)),
            name=data.get("name", "Unnamed Type"),
            description=data.get("description", ""),
            id=data.get("id") or new_id("type"),
        )


class TypeLibrary:
    """
    Manages the named element types of a project.
    """
    def __init__(self, with_defaults: bool = True) -> None:
        self.types: Dict[str, ElementType] = {}
        if with_defaults:
            self._init_defaults()

    def _init_defaults(self) -> None:
        for kind, name in (
            (TypeKind.WALL, "Exterior Wall"),
            (TypeKind.WINDOW, "Standard Window"),
            (TypeKind.DOOR, "Exterior Door"),
            (TypeKind.SKYLIGHT, "Fixed Skylight"),
        ):
            self.add_type(ElementType(kind=kind, name=name, id=f"default_{kind.value}"))

    def add_type(self, element_type: ElementType) -> ElementType:
        """Add or update a type."""
        self.types[element_type.id] = element_type
        return element_type

    def get_type(self, type_id: Optional[str]) -> Optional[ElementType]:
        if not type_id:
            return None
        return self.types.get(type_id)

    def list_types(self, kind: TypeKind) -> List[ElementType]:
        return [t for t in self.types.values() if t.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        return {"types": [t.to_dict() for t in self.types.values()]}

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> TypeLibrary:
        if not data:
            return TypeLibrary()
        library = TypeLibrary(with_defaults=False)
        for item in data.get("types", []):
            try:
                library.add_type(ElementType.from_dict(item))
            except ValueError as e:
                logger.warning(f"Skipping unreadable element type: {e}")
        return library
