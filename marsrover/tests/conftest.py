"""
Pytest fixtures for Mars Rover tests.
"""

import uuid

import pytest

from ..application import GameService
from ..domain import Coordinates, Dimensions, Orientation, Plateau, RoverIdentifier
from ..services import GameContext, InMemoryRoverRepository, PlateauService, RoverService

WIDTH = 5
HEIGHT = 5


@pytest.fixture
def context() -> GameContext:
    """A fresh game context, reset after the test."""
    ctx = GameContext()
    yield ctx
    ctx.reset()


@pytest.fixture
def plateau() -> Plateau:
    """A bare 5x5 plateau with every cell free."""
    return Plateau(uuid.uuid4(), Dimensions(WIDTH, HEIGHT)).initialize_locations()


@pytest.fixture
def plateau_service(context: GameContext) -> PlateauService:
    return PlateauService(context)


@pytest.fixture
def rover_service(plateau_service: PlateauService, context: GameContext) -> RoverService:
    return RoverService(plateau_service, InMemoryRoverRepository(), context)


@pytest.fixture
def loaded_plateau(plateau_service: PlateauService) -> Plateau:
    """A 5x5 plateau stored in the repository and loaded in the context."""
    return plateau_service.initialize_plateau(uuid.uuid4(), WIDTH, HEIGHT)


@pytest.fixture
def rover_id(loaded_plateau: Plateau) -> RoverIdentifier:
    return RoverIdentifier(loaded_plateau.plateau_id, "ROVER_1")


@pytest.fixture
def placed_rover(rover_service: RoverService, rover_id: RoverIdentifier):
    """ROVER_1 at (3, 4) facing SOUTH."""
    return rover_service.initialize_rover(rover_id, Coordinates(3, 4), Orientation.SOUTH)


@pytest.fixture
def game() -> GameService:
    service = GameService()
    yield service
    service.context.reset()
