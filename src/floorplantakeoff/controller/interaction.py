"""
Interaction Controller
======================
Turns pointer and keyboard events into model mutations.

Why is this file needed?
------------------------
1. Modes: Exactly one interaction mode is active at a time (idle/select,
   draw space, draw ceiling, draw scale, insert vertex). The mode is a tagged
   union; switching mode always discards in-progress drags and temporary
   drawing points, so no caller ever has to "cancel the other modes".
2. Hover: Every pointer move computes one explicit `hover_target`. Drag and
   deselection decisions consult it directly, never the on-screen cursor.
3. Signals: The view listens to Qt signals to redraw, refresh panels and
   autosave. All emission happens synchronously inside the handler that
   mutated the model.

Classes:
    InteractionController: The state machine (a QObject with signals).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable, Optional, Union

from PySide6.QtCore import QObject, Signal

from floorplantakeoff.config import CLOSE_THRESHOLD, EDGE_BUFFER, VERTEX_RADIUS
from floorplantakeoff.controller.hit_testing import (
    BACKGROUND, HitKind, HitTarget, ceiling_shown, hit_test, near_boundary, scale_endpoint_at, space_at
)
from floorplantakeoff.model import ceiling as ceiling_model
from floorplantakeoff.model.geometry_primitives import Point, Vector
from floorplantakeoff.model.geometry_utils import distance
from floorplantakeoff.model.registry import TypeKind
from floorplantakeoff.model.scale import DisplayUnit, from_display_area, from_display_length, unit_abbrev
from floorplantakeoff.model.space import (
    Direction, Edge, Space, delete_vertex, insert_vertex, move_vertex, recompute_derived, translate_space
)
from floorplantakeoff.model.state import Floor, ProjectState
from floorplantakeoff.utils import parse_count, parse_non_negative

logger = logging.getLogger(__name__)

PromptFn = Callable[[str, str], Optional[str]]
ConfirmFn = Callable[[str], bool]


# ------------------------------------------------------------------------------
# Modes (tagged union)
# ------------------------------------------------------------------------------

@dataclass
class IdleMode:
    """Select / edit mode."""
    label = "select"


@dataclass
class DrawSpaceMode:
    points: list[Point] = field(default_factory=list)
    label = "draw_space"


@dataclass
class DrawCeilingMode:
    space_id: str
    points: list[Point] = field(default_factory=list)
    label = "draw_ceiling"


@dataclass
class DrawScaleMode:
    points: list[Point] = field(default_factory=list)
    label = "draw_scale"


@dataclass
class InsertVertexMode:
    """One-shot: the next qualifying edge click inserts and returns to idle."""
    space_id: str
    label = "insert_vertex"


Mode = Union[IdleMode, DrawSpaceMode, DrawCeilingMode, DrawScaleMode, InsertVertexMode]
DrawingMode = (DrawSpaceMode, DrawCeilingMode, DrawScaleMode)


class CursorHint(StrEnum):
    DEFAULT = "default"
    CROSSHAIR = "crosshair"
    POINTER = "pointer"
    MOVE = "move"


class Key(StrEnum):
    ESCAPE = "escape"
    ENTER = "enter"
    DELETE = "delete"


@dataclass
class Selection:
    space_id: Optional[str] = None
    edge_index: Optional[int] = None
    vertex_index: Optional[int] = None
    ceiling_vertex_index: Optional[int] = None

    def clear_parts(self) -> None:
        self.edge_index = None
        self.vertex_index = None
        self.ceiling_vertex_index = None


@dataclass
class DragState:
    kind: HitKind  # SCALE_ENDPOINT, VERTEX, CEILING_VERTEX or INTERIOR
    index: Optional[int]
    last_point: Point
    moved: bool = False


# ------------------------------------------------------------------------------
# Controller
# ------------------------------------------------------------------------------

class InteractionController(QObject):
    """Modal state machine owning the mode, the selection and the hover target."""
    model_changed = Signal()        # geometry / properties mutated (redraw + persist)
    floors_changed = Signal()       # floor list or active floor changed
    selection_changed = Signal()
    mode_changed = Signal(str)
    hover_changed = Signal(object)  # HitTarget
    preview_changed = Signal()      # temporary drawing points changed
    status_changed = Signal(str)

    def __init__(
        self,
        state: ProjectState,
        prompt: Optional[PromptFn] = None,
        confirm: Optional[ConfirmFn] = None,
    ) -> None:
        super().__init__()
        self.state = state
        self._prompt: PromptFn = prompt or (lambda message, default: None)
        self._confirm: ConfirmFn = confirm or (lambda message: False)

        self.mode: Mode = IdleMode()
        self.selection = Selection()
        self.hover_target: HitTarget = BACKGROUND
        self.drag: Optional[DragState] = None
        self.pointer: Optional[Point] = None
        self.status: str = ""

    # ---- accessors ----

    def active_floor(self) -> Optional[Floor]:
        return self.state.active_floor()

    def selected_space(self) -> Optional[Space]:
        floor = self.active_floor()
        return floor.find_space(self.selection.space_id) if floor else None

    def selected_edge(self) -> Optional[Edge]:
        space = self.selected_space()
        idx = self.selection.edge_index
        if space is None or idx is None or idx >= len(space.edges):
            return None
        return space.edges[idx]

    def draw_points(self) -> list[Point]:
        if isinstance(self.mode, DrawingMode):
            return list(self.mode.points)
        return []

    def cursor_hint(self) -> CursorHint:
        if isinstance(self.mode, DrawingMode):
            return CursorHint.CROSSHAIR
        hover = self.hover_target
        if isinstance(self.mode, InsertVertexMode):
            return CursorHint.CROSSHAIR if hover.is_edge else CursorHint.DEFAULT
        if hover.is_vertex or hover.kind == HitKind.SCALE_ENDPOINT:
            return CursorHint.MOVE
        if hover.kind == HitKind.EDGE:
            return CursorHint.POINTER
        if hover.kind == HitKind.INTERIOR:
            if hover.space_id == self.selection.space_id:
                return CursorHint.MOVE
            return CursorHint.POINTER
        return CursorHint.DEFAULT

    def set_state(self, state: ProjectState) -> None:
        """Swap in a freshly loaded project."""
        self.state = state
        self._set_mode(IdleMode())
        self._reset_selection()
        self.floors_changed.emit()
        self.model_changed.emit()

    # ---- helpers ----

    def _set_status(self, text: str) -> None:
        self.status = text
        logger.debug(f"Status: {text}")
        self.status_changed.emit(text)

    def _set_mode(self, mode: Mode) -> None:
        """Enter a mode, dropping any drag and temporary drawing state."""
        self.drag = None
        self.mode = mode
        self.hover_target = BACKGROUND
        logger.info(f"Mode -> {mode.label}")
        self.mode_changed.emit(mode.label)
        self.preview_changed.emit()

    def _reset_selection(self) -> None:
        self.selection = Selection()
        self.hover_target = BACKGROUND
        self.selection_changed.emit()

    def _recompute(self, space: Space) -> None:
        floor = self.active_floor()
        recompute_derived(space, floor.scale_factor() if floor else 0.0)

    def _require_floor(self) -> Optional[Floor]:
        floor = self.active_floor()
        if floor is None:
            self._set_status("Add a floor first.")
        return floor

    # ------------------------------------------------------------------------------
    # Mode commands
    # ------------------------------------------------------------------------------

    def enter_draw_space(self) -> bool:
        if self._require_floor() is None:
            return False
        self._set_mode(DrawSpaceMode())
        self.deselect()
        self._set_status("Drawing space: click to add vertices, click near first point to finish.")
        return True

    def enter_draw_ceiling(self) -> bool:
        space = self.selected_space()
        if space is None:
            self._set_status("Select a space first.")
            return False
        self._set_mode(DrawCeilingMode(space_id=space.id))
        self.selection.clear_parts()
        self.selection_changed.emit()
        self._set_status("Drawing ceiling: click to add vertices, click near first point to finish.")
        return True

    def enter_draw_scale(self) -> bool:
        floor = self._require_floor()
        if floor is None:
            return False
        self._set_mode(DrawScaleMode())
        floor.scale.clear_reference()
        floor.scale.visible = True
        self.model_changed.emit()
        self._set_status("Scale: click two points to create reference line.")
        return True

    def toggle_insert_vertex(self) -> bool:
        space = self.selected_space()
        if space is None:
            self._set_status("Select a space first.")
            return False
        if isinstance(self.mode, InsertVertexMode):
            self._set_mode(IdleMode())
            self._set_status("Insert vertex mode cancelled.")
            return False
        self._set_mode(InsertVertexMode(space_id=space.id))
        self.selection.clear_parts()
        self.selection_changed.emit()
        self._set_status("Hover near an edge to insert a vertex.")
        return True

    def cancel(self) -> None:
        if not isinstance(self.mode, IdleMode):
            self._set_mode(IdleMode())
            self._set_status("Cancelled.")

    def finish_drawing(self) -> bool:
        """Close the polygon being drawn. Fewer than 3 points is a no-op."""
        mode = self.mode
        if not isinstance(mode, (DrawSpaceMode, DrawCeilingMode)):
            return False
        if len(mode.points) < 3:
            self._set_status("Need at least 3 points for a polygon.")
            return False
        floor = self.active_floor()
        if floor is None:
            self._set_mode(IdleMode())
            return False

        if isinstance(mode, DrawSpaceMode):
            space = floor.add_space(Space(vertices=list(mode.points)))
            self._set_mode(IdleMode())
            self.select_space(space.id)
            self._set_status("Space created. Select edges by clicking near them.")
        else:
            space = floor.find_space(mode.space_id)
            self._set_mode(IdleMode())
            if space is None:
                return False
            space.ceiling.set_polygon(list(mode.points), floor.scale_factor())
            self._set_status("Ceiling outline created.")
        self.model_changed.emit()
        return True

    # ------------------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------------------

    def pointer_move(self, point: Point) -> None:
        self.pointer = point
        if self.drag is not None:
            self._apply_drag(point)
            return
        if isinstance(self.mode, DrawingMode):
            self.preview_changed.emit()
            return

        space = self.selected_space()
        hover = self._scale_hit(point)
        if hover is None:
            hover = hit_test(space, point, insert_mode=isinstance(self.mode, InsertVertexMode))
        if hover.kind == HitKind.BACKGROUND and not isinstance(self.mode, InsertVertexMode):
            other = space_at(self.active_floor(), point, exclude_id=space.id if space else None)
            if other is not None:
                hover = HitTarget(HitKind.INTERIOR, None, other.id)
        if hover != self.hover_target:
            self.hover_target = hover
            self.hover_changed.emit(hover)

    def pointer_down(self, point: Point) -> None:
        self.pointer = point
        if self._require_floor() is None:
            return
        mode = self.mode
        if isinstance(mode, (DrawSpaceMode, DrawCeilingMode)):
            self._add_draw_point(mode, point)
        elif isinstance(mode, DrawScaleMode):
            self._add_scale_point(mode, point)
        elif isinstance(mode, InsertVertexMode):
            self._insert_at(point)
        else:
            self._select_at(point)

    def pointer_up(self, point: Point) -> None:
        self.pointer = point
        drag = self.drag
        if drag is None:
            return
        self.drag = None
        if drag.moved:
            logger.debug(f"Drag finished ({drag.kind})")
            if drag.kind == HitKind.SCALE_ENDPOINT:
                self._set_status("Scale line updated.")
            self.model_changed.emit()

    def key_press(self, key: Key) -> None:
        if key == Key.ESCAPE:
            self.cancel()
        elif key == Key.ENTER:
            self.finish_drawing()
        elif key == Key.DELETE and isinstance(self.mode, IdleMode):
            self.delete_selected_vertex()

    # ---- drawing ----

    def _add_draw_point(self, mode: Union[DrawSpaceMode, DrawCeilingMode], point: Point) -> None:
        if len(mode.points) >= 3 and distance(point, mode.points[0]) <= CLOSE_THRESHOLD:
            self.finish_drawing()
            return
        mode.points.append(point)
        self.preview_changed.emit()

    def _add_scale_point(self, mode: DrawScaleMode, point: Point) -> None:
        mode.points.append(point)
        if len(mode.points) < 2:
            self.preview_changed.emit()
            return

        floor = self.active_floor()
        p1, p2 = mode.points[0], mode.points[1]
        floor.scale.set_reference(p1, p2)
        floor.scale.visible = True

        if floor.scale.declared_length <= 0:
            unit = self.state.display_unit
            answer = self._prompt(
                f"Enter real-world length for the drawn scale (in {unit_abbrev(unit)}):", "10"
            )
            value = parse_non_negative(answer)
            if value is not None and value > 0:
                floor.scale.set_declared_length(from_display_length(value, unit))
            else:
                logger.warning(f"Scale length prompt returned {answer!r}, keeping previous length.")

        floor.recompute_all()
        self._set_mode(IdleMode())
        self._set_status("Scale set. Reference line shown.")
        self.model_changed.emit()

    # ---- insertion ----

    def _insert_at(self, point: Point) -> None:
        space = self.selected_space()
        if space is None:
            self._set_mode(IdleMode())
            return
        hit = hit_test(space, point, insert_mode=True)
        if hit.kind == HitKind.EDGE:
            insert_vertex(space, hit.index, point)
        elif hit.kind == HitKind.CEILING_EDGE:
            ceiling_model.insert_vertex(space.ceiling, hit.index, point)
        else:
            # not on an edge: stay armed
            return
        self._recompute(space)
        self._set_mode(IdleMode())
        self._set_status("Vertex inserted.")
        self.model_changed.emit()

    # ---- selection & dragging ----

    def _scale_hit(self, point: Point) -> Optional[HitTarget]:
        floor = self.active_floor()
        if floor is None or not isinstance(self.mode, IdleMode):
            return None
        idx = scale_endpoint_at(floor.scale, point)
        return HitTarget(HitKind.SCALE_ENDPOINT, idx) if idx is not None else None

    def _select_at(self, point: Point) -> None:
        floor = self.active_floor()
        scale_hit = self._scale_hit(point)
        if scale_hit is not None:
            if self.hover_target == scale_hit:
                self.drag = DragState(scale_hit.kind, scale_hit.index, point)
            return

        space = self.selected_space()
        if space is None:
            other = space_at(floor, point)
            if other is not None:
                self.select_space(other.id)
            return

        hit = hit_test(space, point)
        movable = self.hover_target == hit

        if hit.kind == HitKind.CEILING_VERTEX:
            self.selection.clear_parts()
            self.selection.ceiling_vertex_index = hit.index
            self.selection_changed.emit()
            self._set_status(f"Ceiling vertex {hit.index + 1} selected.")
            if movable:
                self.drag = DragState(hit.kind, hit.index, point)
            return

        if hit.kind == HitKind.VERTEX:
            self.selection.clear_parts()
            self.selection.vertex_index = hit.index
            self.selection_changed.emit()
            self._set_status(f"Vertex {hit.index + 1} selected.")
            if movable:
                self.drag = DragState(hit.kind, hit.index, point)
            return

        if hit.kind == HitKind.EDGE:
            self.selection.clear_parts()
            self.selection.edge_index = hit.index
            self.selection_changed.emit()
            self._set_status(f"Edge {hit.index + 1} selected.")
            return

        if hit.kind == HitKind.INTERIOR:
            self.selection.vertex_index = None
            self.selection.ceiling_vertex_index = None
            if movable:
                self.selection.edge_index = None
                self.drag = DragState(hit.kind, None, point)
            else:
                # first click only arms the move affordance
                self.hover_target = hit
                self.hover_changed.emit(hit)
            self.selection_changed.emit()
            return

        other = space_at(floor, point, exclude_id=space.id)
        if other is not None:
            self.select_space(other.id)
            return
        # an edge hover that went stale during the press widens the guard to the vertex radius
        buffer = VERTEX_RADIUS if self.hover_target.is_edge else EDGE_BUFFER
        if near_boundary(space, point, buffer):
            return
        self.deselect()

    def _apply_drag(self, point: Point) -> None:
        drag = self.drag
        delta = point - drag.last_point
        if delta.magnitude == 0:
            return
        if drag.kind == HitKind.SCALE_ENDPOINT:
            self._drag_scale_endpoint(drag, point, delta)
            return

        space = self.selected_space()
        if space is None:
            self.drag = None
            return

        if drag.kind == HitKind.VERTEX:
            move_vertex(space, drag.index, space.vertices[drag.index] + delta)
        elif drag.kind == HitKind.CEILING_VERTEX:
            ceiling_model.move_vertex(space.ceiling, drag.index, space.ceiling.vertices[drag.index] + delta)
        else:
            translate_space(space, delta.x, delta.y)

        drag.last_point = point
        drag.moved = True
        self._recompute(space)
        self.model_changed.emit()

    def _drag_scale_endpoint(self, drag: DragState, point: Point, delta: Vector) -> None:
        floor = self.active_floor()
        if floor is None or floor.scale.reference is None:
            self.drag = None
            return
        ends = list(floor.scale.reference)
        ends[drag.index] = ends[drag.index] + delta
        floor.scale.set_reference(ends[0], ends[1])
        floor.recompute_all()

        drag.last_point = point
        drag.moved = True
        self.model_changed.emit()

    def select_space(self, space_id: str) -> bool:
        floor = self.active_floor()
        if floor is None or floor.find_space(space_id) is None:
            return False
        if isinstance(self.mode, InsertVertexMode) and self.mode.space_id != space_id:
            self._set_mode(IdleMode())
        self.selection = Selection(space_id=space_id)
        self.selection_changed.emit()
        self._set_status("Space selected.")
        return True

    def deselect(self) -> None:
        if isinstance(self.mode, InsertVertexMode):
            self._set_mode(IdleMode())
        if self.selection.space_id is not None:
            logger.debug("Selection cleared")
        self._reset_selection()

    # ------------------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------------------

    def delete_selected_vertex(self) -> bool:
        space = self.selected_space()
        sel = self.selection
        if space is None or (sel.vertex_index is None and sel.ceiling_vertex_index is None):
            self._set_status("Select a vertex first.")
            return False

        if sel.ceiling_vertex_index is not None:
            if not ceiling_shown(space):
                self._set_status("Show the ceiling outline to edit it.")
                return False
            if not ceiling_model.delete_vertex(space.ceiling, sel.ceiling_vertex_index):
                self._set_status("A ceiling must have at least 3 vertices.")
                return False
        elif not delete_vertex(space, sel.vertex_index):
            self._set_status("A space must have at least 3 vertices.")
            return False

        sel.clear_parts()
        self._recompute(space)
        self.selection_changed.emit()
        self._set_status("Vertex deleted.")
        self.model_changed.emit()
        return True

    def delete_selected_space(self) -> bool:
        floor = self.active_floor()
        space = self.selected_space()
        if floor is None or space is None:
            return False
        if not self._confirm(f'Delete space "{space.name or "Room"}"?'):
            return False
        floor.remove_space(space.id)
        self.deselect()
        self._set_status("Space deleted.")
        self.model_changed.emit()
        return True

    # ------------------------------------------------------------------------------
    # Floors
    # ------------------------------------------------------------------------------

    def add_floor(self, image_path: Optional[str]) -> Optional[Floor]:
        name = (self._prompt("Enter floor name:", "First Floor") or "").strip()
        if not name:
            return None
        floor = self.state.add_floor(name, image_path)
        self._set_mode(IdleMode())
        self._reset_selection()
        self.floors_changed.emit()
        self.model_changed.emit()
        self._set_status(f'Loaded floor "{floor.name}".')
        return floor

    def delete_active_floor(self) -> bool:
        floor = self.active_floor()
        if floor is None:
            return False
        if not self._confirm(f'Delete floor "{floor.name}" and all its spaces? This cannot be undone.'):
            return False
        self.state.delete_floor(floor.id)
        self._set_mode(IdleMode())
        self._reset_selection()
        self.floors_changed.emit()
        self.model_changed.emit()
        self._set_status("No floor selected." if self.active_floor() is None else f'Loaded floor "{self.active_floor().name}".')
        return True

    def set_active_floor(self, floor_id: str) -> bool:
        if not self.state.set_active_floor(floor_id):
            return False
        self._set_mode(IdleMode())
        self._reset_selection()
        self.floors_changed.emit()
        self.model_changed.emit()
        self._set_status(f'Loaded floor "{self.active_floor().name}".')
        return True

    def set_project_name(self, name: str) -> None:
        self.state.project_name = name
        self.model_changed.emit()

    # ------------------------------------------------------------------------------
    # Scale
    # ------------------------------------------------------------------------------

    def set_declared_length_from_display(self, value: Any) -> bool:
        """Set the scale's real length from a display-unit entry."""
        floor = self._require_floor()
        if floor is None:
            return False
        number = parse_non_negative(value)
        length = from_display_length(number, self.state.display_unit) if number is not None else None
        if not floor.scale.set_declared_length(length):
            self._set_status("Real length must be a positive number.")
            return False
        floor.recompute_all()
        self._set_status("Scale real length updated.")
        self.model_changed.emit()
        return True

    def set_display_unit(self, unit: DisplayUnit) -> None:
        self.state.display_unit = DisplayUnit(unit)
        self._set_status("Scale unit updated.")
        self.model_changed.emit()

    def toggle_scale_visibility(self) -> bool:
        floor = self._require_floor()
        if floor is None:
            return False
        if floor.scale.reference is None:
            self._set_status("No scale line to show or hide. Use Draw Scale first.")
            return False
        floor.scale.visible = not floor.scale.visible
        self.model_changed.emit()
        return True

    # ------------------------------------------------------------------------------
    # Property edits (values arrive in the display unit)
    # ------------------------------------------------------------------------------

    def _edit_space(self, apply: Callable[[Space], None]) -> bool:
        space = self.selected_space()
        if space is None:
            return False
        apply(space)
        self._recompute(space)
        self.model_changed.emit()
        return True

    def _edit_edge(self, apply: Callable[[Edge], None]) -> bool:
        space = self.selected_space()
        edge = self.selected_edge()
        if space is None or edge is None:
            return False
        apply(edge)
        self._recompute(space)
        self.model_changed.emit()
        return True

    def _length(self, value: Any) -> Optional[float]:
        number = parse_non_negative(value)
        return from_display_length(number, self.state.display_unit) if number is not None else None

    def _area(self, value: Any) -> Optional[float]:
        number = parse_non_negative(value)
        return from_display_area(number, self.state.display_unit) if number is not None else None

    def set_space_name(self, name: str) -> bool:
        return self._edit_space(lambda s: setattr(s, "name", (name or "").strip()))

    def set_ceiling_height(self, value: Any) -> bool:
        height = self._length(value)
        return self._edit_space(lambda s: setattr(s, "ceiling_height", height))

    def set_skylight(self, flag: bool) -> bool:
        return self._edit_space(lambda s: setattr(s, "has_skylight", bool(flag)))

    def set_skylight_area(self, value: Any) -> bool:
        area = self._area(value)
        return self._edit_space(lambda s: setattr(s, "skylight_area", area))

    def set_skylight_type(self, type_id: Optional[str]) -> bool:
        return self._edit_space(lambda s: setattr(s, "skylight_type", type_id or None))

    def set_ceiling_same_as_floor(self, flag: bool) -> bool:
        return self._edit_space(lambda s: setattr(s.ceiling, "same_as_floor", bool(flag)))

    def set_ceiling_manual_override(self, flag: bool) -> bool:
        return self._edit_space(lambda s: setattr(s.ceiling, "manual_override", bool(flag)))

    def set_ceiling_manual_area(self, value: Any) -> bool:
        area = self._area(value)
        return self._edit_space(lambda s: setattr(s.ceiling, "manual_area", area))

    def toggle_ceiling_visibility(self) -> bool:
        space = self.selected_space()
        if space is None or not space.ceiling.has_polygon:
            self._set_status("No ceiling outline to show or hide.")
            return False
        self.selection.ceiling_vertex_index = None
        self.selection_changed.emit()
        return self._edit_space(lambda s: setattr(s.ceiling, "visible", not s.ceiling.visible))

    def set_edge_exterior(self, flag: bool) -> bool:
        return self._edit_edge(lambda e: setattr(e, "is_exterior", bool(flag)))

    def set_edge_height(self, value: Any) -> bool:
        height = self._length(value)
        return self._edit_edge(lambda e: setattr(e, "height", height))

    def set_edge_window_width(self, value: Any) -> bool:
        width = self._length(value)
        return self._edit_edge(lambda e: setattr(e, "win_width", width))

    def set_edge_window_height(self, value: Any) -> bool:
        height = self._length(value)
        return self._edit_edge(lambda e: setattr(e, "win_height", height))

    def set_edge_direction(self, direction: str) -> bool:
        if direction not in Direction.__members__:
            return False
        return self._edit_edge(lambda e: setattr(e, "direction", Direction(direction)))

    def set_edge_door(self, flag: bool) -> bool:
        return self._edit_edge(lambda e: setattr(e, "has_door", bool(flag)))

    def set_edge_door_quantity(self, value: Any) -> bool:
        quantity = parse_count(value)
        return self._edit_edge(lambda e: setattr(e, "door_quantity", quantity))

    def set_edge_type(self, kind: TypeKind, type_id: Optional[str]) -> bool:
        attr = {
            TypeKind.WALL: "wall_type",
            TypeKind.WINDOW: "window_type",
            TypeKind.DOOR: "door_type",
        }.get(kind)
        if attr is None:
            return False
        return self._edit_edge(lambda e: setattr(e, attr, type_id or None))
