"""Shared test fixtures for the floorplan takeoff tests."""
import pytest

from floorplantakeoff.controller.interaction import InteractionController
from floorplantakeoff.model.geometry_primitives import Point
from floorplantakeoff.model.space import Space
from floorplantakeoff.model.state import Floor, ProjectState


def square(size=100.0, x0=0.0, y0=0.0):
    return [Point(x0, y0), Point(x0 + size, y0), Point(x0 + size, y0 + size), Point(x0, y0 + size)]


@pytest.fixture
def square_points():
    """Unit test square (0,0)-(100,100) in canvas pixels."""
    return square()


@pytest.fixture
def state():
    """Project with one floor calibrated at 0.1 ft/px (100 px == 10 ft)."""
    project = ProjectState()
    floor = project.add_floor("First Floor")
    floor.scale.set_reference(Point(0, 0), Point(100, 0))
    floor.scale.set_declared_length(10.0)
    return project


@pytest.fixture
def floor(state) -> Floor:
    return state.active_floor()


@pytest.fixture
def space(floor, square_points) -> Space:
    """Square room added to the calibrated floor."""
    return floor.add_space(Space(vertices=list(square_points)))


class Dialogs:
    """Scripted prompt / confirm answers for the controller."""

    def __init__(self):
        self.answers = []
        self.confirm_answer = True
        self.prompts = []
        self.confirms = []

    def prompt(self, message, default):
        self.prompts.append((message, default))
        return self.answers.pop(0) if self.answers else None

    def confirm(self, message):
        self.confirms.append(message)
        return self.confirm_answer


@pytest.fixture
def dialogs():
    return Dialogs()


@pytest.fixture
def controller(state, dialogs):
    return InteractionController(state, prompt=dialogs.prompt, confirm=dialogs.confirm)
