"""Tests for model/validation.py required-field rules."""
from floorplantakeoff.model.validation import IssueField, invalid_spaces, validate


def fields(space):
    return {issue.field for issue in validate(space)}


def complete(space):
    space.ceiling_height = 9.0
    edge = space.edges[0]
    edge.is_exterior = True
    edge.height = 8.0
    edge.win_width = 0.0
    edge.win_height = 0.0
    return space


def test_new_space_needs_ceiling_height(space):
    assert fields(space) == {IssueField.CEILING_HEIGHT}


def test_complete_space_is_valid(space):
    assert validate(complete(space)) == []


def test_zero_is_a_valid_entry(space):
    complete(space)
    space.ceiling_height = 0.0
    assert validate(space) == []


def test_exterior_edge_missing_values(space):
    complete(space)
    space.edges[2].is_exterior = True
    issues = validate(space)
    assert {i.field for i in issues} == {IssueField.EDGE_HEIGHT, IssueField.EDGE_WIN_WIDTH, IssueField.EDGE_WIN_HEIGHT}
    assert all(i.edge_index == 2 for i in issues)


def test_interior_edges_are_not_checked(space):
    complete(space)
    space.edges[3].height = None
    assert validate(space) == []


def test_door_quantity_required(space):
    complete(space)
    space.edges[0].has_door = True
    assert fields(space) == {IssueField.EDGE_DOOR_QUANTITY}
    space.edges[0].door_quantity = 2
    assert validate(space) == []


def test_ceiling_manual_area_required(space):
    complete(space)
    space.ceiling.same_as_floor = False
    space.ceiling.manual_override = True
    assert fields(space) == {IssueField.CEILING_MANUAL_AREA}


def test_ceiling_polygon_required(space):
    complete(space)
    space.ceiling.same_as_floor = False
    assert fields(space) == {IssueField.CEILING_POLYGON}


def test_skylight_area_required(space):
    complete(space)
    space.has_skylight = True
    assert fields(space) == {IssueField.SKYLIGHT_AREA}


def test_all_rules_reported_together(space):
    space.has_skylight = True
    space.edges[0].is_exterior = True
    assert len(validate(space)) == 5


def test_invalid_spaces_locates_floor(state, space):
    invalid = invalid_spaces(state)
    assert len(invalid) == 1
    assert invalid[0].floor_name == "First Floor"
    assert invalid[0].space_id == space.id
    assert "Average ceiling height is required" in invalid[0].describe()
