"""
Required-field validation for spaces.

Every rule is evaluated independently on every call; nothing is mutated.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import List, Optional, TYPE_CHECKING

from floorplantakeoff.model.space import Space

if TYPE_CHECKING:
    from floorplantakeoff.model.state import Floor, ProjectState


class IssueField(StrEnum):
    CEILING_HEIGHT = "ceiling_height"
    CEILING_MANUAL_AREA = "ceiling_manual_area"
    CEILING_POLYGON = "ceiling_polygon"
    SKYLIGHT_AREA = "skylight_area"
    EDGE_HEIGHT = "edge_height"
    EDGE_WIN_WIDTH = "edge_win_width"
    EDGE_WIN_HEIGHT = "edge_win_height"
    EDGE_DOOR_QUANTITY = "edge_door_quantity"


@dataclass(frozen=True)
class ValidationIssue:
    space_id: str
    field: IssueField
    message: str
    edge_index: Optional[int] = None


@dataclass(frozen=True)
class InvalidSpace:
    """A space failing validation, located for navigation."""
    floor_id: str
    floor_name: str
    space_id: str
    space_name: str
    issues: tuple[ValidationIssue, ...]

    def describe(self) -> str:
        return f"{self.floor_name} / {self.space_name or 'Room'}: " + "; ".join(i.message for i in self.issues)


def validate(space: Space) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    def add(field: IssueField, message: str, edge_index: Optional[int] = None) -> None:
        issues.append(ValidationIssue(space.id, field, message, edge_index))

    if space.ceiling_height is None:
        add(IssueField.CEILING_HEIGHT, "Average ceiling height is required")

    ceiling = space.ceiling
    if not ceiling.same_as_floor:
        if ceiling.manual_override:
            if ceiling.manual_area is None:
                add(IssueField.CEILING_MANUAL_AREA, "Ceiling area is required")
        elif not ceiling.has_polygon:
            add(IssueField.CEILING_POLYGON, "Ceiling outline is required")

    if space.has_skylight and space.skylight_area is None:
        add(IssueField.SKYLIGHT_AREA, "Skylight area is required")

    for i, edge in enumerate(space.edges):
        if not edge.is_exterior:
            continue
        # 0 is a valid entry, only unset values fail
        if edge.height is None:
            add(IssueField.EDGE_HEIGHT, f"Edge {i + 1}: wall height is required", i)
        if edge.win_width is None:
            add(IssueField.EDGE_WIN_WIDTH, f"Edge {i + 1}: window width is required", i)
        if edge.win_height is None:
            add(IssueField.EDGE_WIN_HEIGHT, f"Edge {i + 1}: window height is required", i)
        if edge.has_door and edge.door_quantity is None:
            add(IssueField.EDGE_DOOR_QUANTITY, f"Edge {i + 1}: door quantity is required", i)

    return issues


def invalid_spaces_on_floor(floor: Floor) -> List[InvalidSpace]:
    result: List[InvalidSpace] = []
    for space in floor.spaces:
        issues = validate(space)
        if issues:
            result.append(InvalidSpace(floor.id, floor.name, space.id, space.name, tuple(issues)))
    return result


def invalid_spaces(state: ProjectState) -> List[InvalidSpace]:
    result: List[InvalidSpace] = []
    for floor in state.floors:
        result.extend(invalid_spaces_on_floor(floor))
    return result
