"""
Services - Orchestrate the domain against storage and the game context.

The services:
- Load plateaus into the context before spatial operations
- Load rovers from the repository, mutate them, commit them
- Detect concurrent writers via the rover version

Storage is in-memory by default. Anything implementing the repository
protocols can be passed in instead.
"""

from .context import GameContext, ROVER_NAME_PREFIX
from .repository import (
    RoverRepository,
    PlateauRepository,
    InMemoryRoverRepository,
    InMemoryPlateauRepository,
)
from .plateau_service import PlateauService
from .rover_service import RoverService

__all__ = [
    "GameContext",
    "ROVER_NAME_PREFIX",
    "RoverRepository",
    "PlateauRepository",
    "InMemoryRoverRepository",
    "InMemoryPlateauRepository",
    "PlateauService",
    "RoverService",
]
