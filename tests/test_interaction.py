"""Tests for controller/interaction.py: the mode / selection state machine."""
import pytest

from floorplantakeoff.controller.hit_testing import HitKind
from floorplantakeoff.controller.interaction import (
    CursorHint, DrawCeilingMode, DrawScaleMode, DrawSpaceMode, IdleMode, InsertVertexMode, InteractionController, Key,
)
from floorplantakeoff.model.geometry_primitives import Point
from floorplantakeoff.model.registry import TypeKind
from floorplantakeoff.model.scale import DisplayUnit
from floorplantakeoff.model.space import Space
from floorplantakeoff.model.state import ProjectState

from conftest import square


def click(controller, x, y):
    p = Point(x, y)
    controller.pointer_move(p)
    controller.pointer_down(p)
    controller.pointer_up(p)


def draw_polygon(controller, points):
    for x, y in points:
        click(controller, x, y)


# --- drawing spaces ---

def test_draw_space_closes_near_first_point(controller, floor):
    assert controller.enter_draw_space()
    assert isinstance(controller.mode, DrawSpaceMode)
    draw_polygon(controller, [(0, 0), (100, 0), (100, 100), (0, 100), (5, 5)])

    assert isinstance(controller.mode, IdleMode)
    assert len(floor.spaces) == 1
    space = floor.spaces[0]
    assert len(space.vertices) == 4
    assert space.area == pytest.approx(100.0)
    assert controller.selection.space_id == space.id


def test_finish_with_too_few_points_is_noop(controller, floor):
    controller.enter_draw_space()
    draw_polygon(controller, [(0, 0), (100, 0)])
    assert not controller.finish_drawing()
    assert isinstance(controller.mode, DrawSpaceMode)
    assert controller.status == "Need at least 3 points for a polygon."
    assert floor.spaces == []


def test_enter_key_finishes_drawing(controller, floor):
    controller.enter_draw_space()
    draw_polygon(controller, [(0, 0), (100, 0), (50, 80)])
    controller.key_press(Key.ENTER)
    assert len(floor.spaces) == 1


def test_escape_discards_temporary_points(controller, floor):
    controller.enter_draw_space()
    draw_polygon(controller, [(0, 0), (100, 0), (50, 80)])
    controller.key_press(Key.ESCAPE)
    assert isinstance(controller.mode, IdleMode)
    assert controller.draw_points() == []
    assert floor.spaces == []


def test_draw_requires_floor(dialogs):
    c = InteractionController(ProjectState(), prompt=dialogs.prompt, confirm=dialogs.confirm)
    assert not c.enter_draw_space()
    assert c.status == "Add a floor first."


# --- scale ---

def test_draw_scale_prompts_for_length(dialogs):
    state = ProjectState()
    state.add_floor("Ground")
    c = InteractionController(state, prompt=dialogs.prompt, confirm=dialogs.confirm)
    dialogs.answers = ["20"]
    c.enter_draw_scale()
    assert isinstance(c.mode, DrawScaleMode)
    click(c, 0, 0)
    click(c, 200, 0)

    floor = state.active_floor()
    assert isinstance(c.mode, IdleMode)
    assert floor.scale.scale_factor() == pytest.approx(0.1)
    assert dialogs.prompts[0][1] == "10"


def test_cancelled_scale_prompt_keeps_sentinel(dialogs):
    state = ProjectState()
    state.add_floor("Ground")
    c = InteractionController(state, prompt=dialogs.prompt, confirm=dialogs.confirm)
    c.enter_draw_scale()
    click(c, 0, 0)
    click(c, 200, 0)
    assert state.active_floor().scale.scale_factor() == 0.0


def test_redrawing_scale_keeps_declared_length(controller, floor, space):
    controller.enter_draw_scale()
    click(controller, 0, 0)
    click(controller, 50, 0)
    assert floor.scale.declared_length == 10.0
    assert floor.scale.scale_factor() == pytest.approx(0.2)
    assert space.area == pytest.approx(400.0)


def test_declared_length_in_meters(controller, state, floor, space):
    controller.set_display_unit(DisplayUnit.METERS)
    assert controller.set_declared_length_from_display("6.096")
    assert floor.scale.declared_length == pytest.approx(20.0)
    assert space.area == pytest.approx(400.0)


def test_invalid_declared_length_is_rejected(controller, floor):
    assert not controller.set_declared_length_from_display("-5")
    assert not controller.set_declared_length_from_display("abc")
    assert floor.scale.declared_length == 10.0


def test_toggle_scale_visibility(controller, floor):
    assert controller.toggle_scale_visibility()
    assert floor.scale.visible is False
    floor.scale.clear_reference()
    assert not controller.toggle_scale_visibility()


# --- selection ---

def test_click_selects_space_then_edge(controller, space):
    click(controller, 50, 50)
    assert controller.selection.space_id == space.id
    click(controller, 50, 3)
    assert controller.selection.edge_index == 0
    assert controller.selected_edge() is space.edges[0]


def test_click_on_background_deselects(controller, space):
    controller.select_space(space.id)
    click(controller, 300, 300)
    assert controller.selection.space_id is None


def test_click_near_boundary_keeps_selection(controller, space):
    controller.select_space(space.id)
    # hover still shows the edge while the press lands just outside its buffer
    controller.pointer_move(Point(-5, 50))
    controller.pointer_down(Point(-7, 50))
    assert controller.selection.space_id == space.id
    assert controller.selection.edge_index is None


def test_click_selects_vertex(controller, space):
    controller.select_space(space.id)
    click(controller, 101, 99)
    assert controller.selection.vertex_index == 2
    assert controller.selection.edge_index is None


# --- dragging ---

def test_drag_vertex_requires_hover(controller, floor, space):
    controller.select_space(space.id)
    controller.pointer_move(Point(100, 100))
    assert controller.hover_target.kind == HitKind.VERTEX
    assert controller.cursor_hint() == CursorHint.MOVE
    controller.pointer_down(Point(100, 100))
    controller.pointer_move(Point(200, 100))
    controller.pointer_up(Point(200, 100))
    assert space.vertices[2] == Point(200, 100)
    assert space.area == pytest.approx(150.0)


def test_drag_space_interior(controller, space):
    controller.select_space(space.id)
    controller.pointer_move(Point(50, 50))
    controller.pointer_down(Point(50, 50))
    controller.pointer_move(Point(60, 70))
    controller.pointer_up(Point(60, 70))
    assert space.vertices[0] == Point(10, 20)
    assert space.area == pytest.approx(100.0)


def test_press_without_hover_does_not_drag(controller, space):
    controller.select_space(space.id)
    controller.pointer_down(Point(50, 50))
    assert controller.drag is None
    controller.pointer_move(Point(60, 70))
    assert space.vertices[0] == Point(0, 0)


# --- vertex insertion / deletion ---

def test_insert_vertex_mode_is_one_shot(controller, space):
    controller.select_space(space.id)
    assert controller.toggle_insert_vertex()
    assert isinstance(controller.mode, InsertVertexMode)

    click(controller, 50, 50)  # interior: stays armed
    assert isinstance(controller.mode, InsertVertexMode)

    click(controller, 50, 2)
    assert isinstance(controller.mode, IdleMode)
    assert len(space.vertices) == 5
    assert space.vertices[1] == Point(50, 0)


def test_insert_on_vertex_does_nothing(controller, space):
    controller.select_space(space.id)
    controller.toggle_insert_vertex()
    click(controller, 100, 1)
    assert len(space.vertices) == 4
    assert isinstance(controller.mode, InsertVertexMode)


def test_insert_requires_selection(controller):
    assert not controller.toggle_insert_vertex()
    assert controller.status == "Select a space first."


def test_delete_selected_vertex(controller, space):
    controller.select_space(space.id)
    click(controller, 100, 100)
    assert controller.delete_selected_vertex()
    assert len(space.vertices) == 3
    assert len(space.edges) == 3
    assert controller.selection.vertex_index is None
    assert space.area == pytest.approx(50.0)


def test_delete_key_refused_at_minimum(controller, space):
    controller.select_space(space.id)
    click(controller, 100, 100)
    controller.key_press(Key.DELETE)
    click(controller, 0, 100)
    controller.key_press(Key.DELETE)
    assert len(space.vertices) == 3
    assert controller.status == "A space must have at least 3 vertices."


# --- ceilings ---

def test_draw_ceiling(controller, space):
    controller.select_space(space.id)
    assert controller.enter_draw_ceiling()
    assert isinstance(controller.mode, DrawCeilingMode)
    draw_polygon(controller, [(20, 20), (80, 20), (80, 80), (20, 80), (21, 21)])
    assert space.ceiling.has_polygon
    assert not space.ceiling.same_as_floor
    assert space.ceiling.area == pytest.approx(36.0)
    assert controller.selection.space_id == space.id


def test_ceiling_manual_area_in_meters(controller, space):
    controller.select_space(space.id)
    controller.set_display_unit(DisplayUnit.METERS)
    controller.set_ceiling_same_as_floor(False)
    controller.set_ceiling_manual_override(True)
    controller.set_ceiling_manual_area("9.290304")
    assert space.ceiling.manual_area == pytest.approx(100.0)


def test_toggle_ceiling_visibility_needs_outline(controller, space):
    controller.select_space(space.id)
    assert not controller.toggle_ceiling_visibility()


# --- property edits ---

def test_edge_edits_update_derived_values(controller, space):
    controller.select_space(space.id)
    click(controller, 50, 3)
    controller.set_edge_exterior(True)
    controller.set_edge_height("8")
    controller.set_edge_window_width("3")
    controller.set_edge_window_height("4")
    controller.set_edge_direction("S")
    edge = space.edges[0]
    assert edge.wall_area == pytest.approx(80.0)
    assert edge.win_area == pytest.approx(12.0)
    assert space.exterior_perimeter == pytest.approx(10.0)
    assert edge.direction == "S"


def test_invalid_entries_become_unset(controller, space):
    controller.select_space(space.id)
    click(controller, 50, 3)
    controller.set_edge_height("8")
    assert controller.set_edge_height("-1")
    assert space.edges[0].height is None
    assert controller.set_ceiling_height("abc")
    assert space.ceiling_height is None


def test_edits_without_selection_are_ignored(controller):
    assert not controller.set_edge_height("8")
    assert not controller.set_space_name("Kitchen")


def test_door_and_types(controller, space):
    controller.select_space(space.id)
    click(controller, 50, 3)
    controller.set_edge_door(True)
    controller.set_edge_door_quantity("2")
    controller.set_edge_type(TypeKind.DOOR, "default_door")
    assert space.door_count == 2
    assert space.edges[0].door_type == "default_door"


def test_model_changed_signal(controller, space):
    received = []
    controller.model_changed.connect(lambda: received.append(True))
    controller.select_space(space.id)
    controller.set_space_name(" Kitchen ")
    assert space.name == "Kitchen"
    assert received


# --- spaces & floors ---

def test_delete_space_asks_for_confirmation(controller, dialogs, floor, space):
    controller.select_space(space.id)
    dialogs.confirm_answer = False
    assert not controller.delete_selected_space()
    assert len(floor.spaces) == 1
    dialogs.confirm_answer = True
    assert controller.delete_selected_space()
    assert floor.spaces == []
    assert controller.selection.space_id is None


def test_add_floor_uses_prompted_name(controller, dialogs, state):
    dialogs.answers = ["Second Floor"]
    floor = controller.add_floor(None)
    assert floor.name == "Second Floor"
    assert state.active_floor_id == floor.id


def test_add_floor_cancelled(controller, state):
    assert controller.add_floor(None) is None
    assert len(state.floors) == 1


def test_switching_floor_clears_selection(controller, dialogs, state, space):
    first = state.active_floor_id
    controller.select_space(space.id)
    dialogs.answers = ["Second Floor"]
    controller.add_floor(None)
    controller.set_active_floor(first)
    assert controller.selection.space_id is None
    assert state.active_floor().spaces == [space]


def test_delete_active_floor(controller, state):
    assert controller.delete_active_floor()
    assert state.floors == []
    assert controller.active_floor() is None


# --- scale line editing ---

def test_dragging_scale_endpoint_rescales_every_space(controller, floor, space):
    other = floor.add_space(Space(vertices=square(50, 200, 200)))
    controller.pointer_move(Point(100, 0))
    assert controller.hover_target.kind == HitKind.SCALE_ENDPOINT
    assert controller.cursor_hint() == CursorHint.MOVE

    controller.pointer_down(Point(100, 0))
    controller.pointer_move(Point(200, 0))
    controller.pointer_up(Point(200, 0))

    assert floor.scale.reference == (Point(0, 0), Point(200, 0))
    assert floor.scale.pixel_length == pytest.approx(200.0)
    assert floor.scale.declared_length == 10.0
    assert space.area == pytest.approx(25.0)
    assert other.area == pytest.approx(6.25)
    assert controller.status == "Scale line updated."


def test_hidden_scale_line_is_not_draggable(controller, floor):
    controller.toggle_scale_visibility()
    controller.pointer_move(Point(100, 0))
    assert controller.hover_target.kind != HitKind.SCALE_ENDPOINT
    controller.pointer_down(Point(100, 0))
    controller.pointer_move(Point(200, 0))
    assert floor.scale.pixel_length == pytest.approx(100.0)


# --- hidden ceilings ---

def test_hidden_ceiling_vertex_cannot_be_deleted(controller, floor, space):
    space.ceiling.set_polygon(square(40, 30, 30), floor.scale_factor())
    controller.select_space(space.id)
    click(controller, 31, 31)
    assert controller.selection.ceiling_vertex_index == 0

    assert controller.toggle_ceiling_visibility()
    assert controller.selection.ceiling_vertex_index is None
    controller.key_press(Key.DELETE)
    assert len(space.ceiling.vertices) == 4

    controller.selection.ceiling_vertex_index = 0
    assert not controller.delete_selected_vertex()
    assert len(space.ceiling.vertices) == 4


# --- deselection guard ---

def test_stale_edge_hover_does_not_keep_far_click(controller, space):
    controller.select_space(space.id)
    controller.pointer_move(Point(50, 3))
    assert controller.hover_target.is_edge
    controller.pointer_down(Point(300, 300))
    assert controller.selection.space_id is None
