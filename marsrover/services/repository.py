"""
Repositories - Key-value storage for rovers and plateaus.

The services only depend on the RoverRepository / PlateauRepository
protocols. The in-memory implementations keep everything in dicts:
- No database
- Rover loads return copies, so callers never alias stored state
- Plateaus are stored as-is (the game context holds the same object)
"""

from __future__ import annotations
import logging
import uuid
from typing import Protocol, runtime_checkable

from ..domain.errors import NotFoundError
from ..domain.plateau import Plateau
from ..domain.rover import Rover, RoverIdentifier

logger = logging.getLogger(__name__)


@runtime_checkable
class RoverRepository(Protocol):

    def load(self, rover_id: RoverIdentifier) -> Rover: ...

    def add(self, rover: Rover) -> None: ...

    def update(self, rover: Rover) -> None: ...

    def remove(self, rover_id: RoverIdentifier) -> None: ...

    def exists(self, rover_id: RoverIdentifier) -> bool: ...

    def get_all_rovers(self) -> list[Rover]: ...


@runtime_checkable
class PlateauRepository(Protocol):

    def load(self, plateau_id: uuid.UUID) -> Plateau: ...

    def add(self, plateau: Plateau) -> None: ...

    def remove(self, plateau_id: uuid.UUID) -> None: ...


class InMemoryRoverRepository:
    """Rovers keyed by RoverIdentifier."""

    def __init__(self):
        self._rovers: dict[RoverIdentifier, Rover] = {}

    def load(self, rover_id: RoverIdentifier) -> Rover:
        rover = self._rovers.get(rover_id)
        if rover is None:
            raise NotFoundError(
                f"Rover {rover_id} not found",
                details={"plateau_id": str(rover_id.plateau_id), "name": rover_id.name},
            )
        return rover.clone()

    def add(self, rover: Rover) -> None:
        self._rovers[rover.rover_id] = rover.clone()
        logger.debug("Stored %s", rover)

    def update(self, rover: Rover) -> None:
        if rover.rover_id not in self._rovers:
            raise NotFoundError(f"Rover {rover.rover_id} not found")
        self._rovers[rover.rover_id] = rover.clone()
        logger.debug("Updated %s", rover)

    def remove(self, rover_id: RoverIdentifier) -> None:
        if self._rovers.pop(rover_id, None) is None:
            raise NotFoundError(f"Rover {rover_id} not found")

    def exists(self, rover_id: RoverIdentifier) -> bool:
        return rover_id in self._rovers

    def get_all_rovers(self) -> list[Rover]:
        return [rover.clone() for rover in self._rovers.values()]


class InMemoryPlateauRepository:
    """Plateaus keyed by UUID."""

    def __init__(self):
        self._plateaus: dict[uuid.UUID, Plateau] = {}

    def load(self, plateau_id: uuid.UUID) -> Plateau:
        plateau = self._plateaus.get(plateau_id)
        if plateau is None:
            raise NotFoundError(
                f"Plateau {plateau_id} not found",
                details={"plateau_id": str(plateau_id)},
            )
        return plateau

    def add(self, plateau: Plateau) -> None:
        self._plateaus[plateau.plateau_id] = plateau

    def remove(self, plateau_id: uuid.UUID) -> None:
        if self._plateaus.pop(plateau_id, None) is None:
            raise NotFoundError(f"Plateau {plateau_id} not found")
