"""
Rover Service - Orchestrates rover commands against plateau and storage.

Every command follows the same shape:
1. Load the rover's plateau into the game context
2. Load the rover (a copy) from the repository
3. Mutate it through the domain (events are published there)
4. Commit: bump version by one and store

Versioned updates compare the caller's version with the stored one
first. Plain updates (update_rover, update_rover_with_position) skip
that comparison; callers wanting conflict detection must use
update_rover_with_orientation with a VersionedRoverIdentifier.
"""

from __future__ import annotations
import logging
import uuid

from ..domain.errors import (
    GameError,
    LocationAlreadyBusyError,
    OptimisticLockingConflictError,
    OutOfBoundsError,
    RoverInitializationError,
)
from ..domain.events import PlateauSwitchedLocation, RoverInitialized, RoverRemoved
from ..domain.geometry import Coordinates, Orientation, TurnDirection
from ..domain.plateau import Plateau
from ..domain.rover import Rover, RoverIdentifier, VersionedRoverIdentifier
from .context import GameContext
from .plateau_service import PlateauService
from .repository import InMemoryRoverRepository, RoverRepository

logger = logging.getLogger(__name__)


class RoverService:
    """
    Domain service for the Rover entity.

    Usage:
        service = RoverService(plateau_service, context=context)
        service.initialize_rover(rover_id, Coordinates(1, 2), Orientation.NORTH)
        service.move_rover_number_of_times(rover_id, 3)
    """

    def __init__(
        self,
        plateau_service: PlateauService,
        repository: RoverRepository | None = None,
        context: GameContext | None = None,
    ):
        self.plateau_service = plateau_service
        self.repository = repository if repository is not None else InMemoryRoverRepository()
        self.context = context if context is not None else plateau_service.context

    def add_plateau_to_context(self, rover_id: RoverIdentifier) -> Plateau:
        plateau = self.plateau_service.load_plateau(rover_id.plateau_id)
        self.context.add_plateau(plateau)
        return plateau

    def initialize_rover(
        self,
        rover_id: RoverIdentifier,
        coordinates: Coordinates,
        orientation: Orientation,
    ) -> Rover:
        """
        Place a new rover on its plateau at version 0.

        Raises:
            RoverInitializationError: plateau not loadable, or name taken
            OutOfBoundsError: coordinates outside the plateau
            LocationAlreadyBusyError: coordinates occupied
        """
        try:
            plateau = self.add_plateau_to_context(rover_id)
        except GameError as e:
            raise RoverInitializationError(
                details={"plateau_id": str(rover_id.plateau_id), "cause": str(e)},
            ) from e

        if self.repository.exists(rover_id):
            raise RoverInitializationError(
                f"Rover {rover_id.name} already exists on plateau {rover_id.plateau_id}",
            )
        if not plateau.contains(coordinates):
            raise OutOfBoundsError(
                f"Cannot place rover {rover_id.name} at {coordinates}: outside plateau "
                f"{plateau.width}x{plateau.height}",
            )
        if plateau.is_location_busy(coordinates):
            raise LocationAlreadyBusyError(
                f"Cannot place rover {rover_id.name} at {coordinates}: location is busy",
            )

        publisher = self.context.publisher

        def place(rover: Rover) -> None:
            plateau.apply_and_publish(
                publisher,
                lambda p: p.switch_location(None, coordinates),
                lambda p: PlateauSwitchedLocation(
                    plateau_id=p.plateau_id,
                    previous_position=None,
                    current_position=coordinates,
                ),
                rollback=lambda p: p.mark_free(coordinates),
            )
            self.repository.add(rover)

        def unplace(rover: Rover) -> None:
            self.repository.remove(rover.rover_id)
            plateau.mark_free(coordinates)

        rover = Rover(rover_id, coordinates, orientation)
        rover.apply_and_publish(
            publisher,
            place,
            lambda r: RoverInitialized(
                rover_id=r.rover_id, position=r.position, orientation=r.orientation,
            ),
            rollback=unplace,
        )
        logger.info("Initialized %s", rover)
        return rover

    def turn_rover(self, rover_id: RoverIdentifier, direction: TurnDirection) -> Rover:
        self.add_plateau_to_context(rover_id)
        rover = self.get_rover(rover_id)
        rover.turn(direction, self.context)
        return self._commit(rover)

    def move_rover_number_of_times(self, rover_id: RoverIdentifier, times: int) -> Rover:
        """
        Move a rover `times` cells forward.

        A failing move aborts the rest. Earlier moves are still committed
        before the error propagates, whether it came from the domain or
        from a subscriber.
        """
        self.add_plateau_to_context(rover_id)
        rover = self.get_rover(rover_id)
        start = rover.position
        try:
            rover.move_number_of_times(times, self.context)
        except Exception:
            if rover.position != start:
                self._commit(rover)
            raise
        return self._commit(rover)

    def update_rover(self, rover: Rover) -> None:
        """Store the rover as-is. No version check."""
        self.repository.update(rover)

    def get_rover(self, rover_id: RoverIdentifier) -> Rover:
        return self.repository.load(rover_id)

    def update_rover_with_position(self, rover_id: RoverIdentifier, position: Coordinates) -> Rover:
        """
        Overwrite the stored position. No legality or version check.

        Plateau occupancy is not touched: the cell the rover was placed
        on stays busy and the new position is not marked. remove_rover
        only frees the stored position when the plateau shows it busy and
        no other rover is stored there.
        """
        rover = self.get_rover(rover_id)
        rover.position = position
        return self._commit(rover)

    def update_rover_with_orientation(
        self,
        versioned_id: VersionedRoverIdentifier,
        orientation: Orientation,
    ) -> Rover:
        """
        Set orientation if the caller's version matches the stored one.

        Raises OptimisticLockingConflictError otherwise; nothing is stored.
        """
        rover = self._check_version(versioned_id.version, self.get_rover(versioned_id.rover_id))
        rover.orientation = orientation
        self.update_rover(rover)
        return rover

    def remove_rover(self, rover_id: RoverIdentifier) -> None:
        """Remove a rover and free its cell."""
        rover = self.get_rover(rover_id)
        plateau = self.add_plateau_to_context(rover_id)

        held_by_others = {
            other.position for other in self.get_all_rovers_on_plateau(rover_id.plateau_id)
            if other.rover_id != rover_id
        }
        freed: list[Coordinates] = []

        def remove(r: Rover) -> None:
            self.repository.remove(r.rover_id)
            if (
                plateau.contains(r.position)
                and plateau.is_location_busy(r.position)
                and r.position not in held_by_others
            ):
                plateau.mark_free(r.position)
                freed.append(r.position)

        def restore(r: Rover) -> None:
            self.repository.add(r)
            for position in freed:
                plateau.mark_busy(position)

        rover.apply_and_publish(
            self.context.publisher,
            remove,
            lambda r: RoverRemoved(rover_id=r.rover_id, position=r.position),
            rollback=restore,
        )
        logger.info("Removed rover %s", rover_id)

    def get_all_rovers_on_plateau(self, plateau_id: uuid.UUID) -> list[Rover]:
        return [
            rover for rover in self.repository.get_all_rovers()
            if rover.plateau_id == plateau_id
        ]

    def _commit(self, rover: Rover) -> Rover:
        rover.version += 1
        self.update_rover(rover)
        return rover

    def _check_version(self, current_version: int, stored_rover: Rover) -> Rover:
        if current_version == stored_rover.version:
            stored_rover.version += 1
            return stored_rover
        logger.warning(
            "Version conflict on %s: expected %d, stored %d",
            stored_rover.rover_id, current_version, stored_rover.version,
        )
        raise OptimisticLockingConflictError(
            stored_rover,
            expected_version=current_version,
            stored_version=stored_rover.version,
        )
