"""
Rover - A robot placed on a plateau.

A rover knows its plateau only by id. Every spatial check looks the
plateau up through the context it is handed, so a rover never holds a
stale Plateau object between commands.

State changes go through apply_and_publish:
- turn_left / turn_right -> RoverTurned
- move -> PlateauSwitchedLocation, then RoverMoved

Version is not touched here. The service bumps it on commit.
"""

from __future__ import annotations
import logging
import uuid
from copy import deepcopy
from dataclasses import dataclass
from typing import Protocol

from .errors import InvalidCommandError, LocationAlreadyBusyError, OutOfBoundsError
from .events import DomainEventPublisher, EventPublishingEntity, PlateauSwitchedLocation, RoverMoved, RoverTurned
from .geometry import Coordinates, Orientation, TurnDirection, advance, turn
from .plateau import Plateau

logger = logging.getLogger(__name__)


class PlateauLookup(Protocol):
    """What a rover needs from its surroundings to act."""

    publisher: DomainEventPublisher

    def get_plateau(self, plateau_id: uuid.UUID) -> Plateau: ...


@dataclass(frozen=True)
class RoverIdentifier:
    """Unique rover name on a plateau. Repository key."""
    plateau_id: uuid.UUID
    name: str

    def __str__(self) -> str:
        return f"{self.name}@{self.plateau_id}"


@dataclass(frozen=True)
class VersionedRoverIdentifier:
    """A rover identifier plus the version the caller last read."""
    rover_id: RoverIdentifier
    version: int


@dataclass
class Rover(EventPublishingEntity):
    """
    Rover entity.

    position, orientation and version are plain attributes; assigning
    them directly is the raw update path and skips legality checks.
    """
    rover_id: RoverIdentifier
    position: Coordinates
    orientation: Orientation
    version: int = 0

    @property
    def plateau_id(self) -> uuid.UUID:
        return self.rover_id.plateau_id

    @property
    def name(self) -> str:
        return self.rover_id.name

    def turn_left(self, context: PlateauLookup) -> None:
        self._turn(TurnDirection.LEFT, context)

    def turn_right(self, context: PlateauLookup) -> None:
        self._turn(TurnDirection.RIGHT, context)

    def turn(self, direction: TurnDirection, context: PlateauLookup) -> None:
        self._turn(direction, context)

    def _turn(self, direction: TurnDirection, context: PlateauLookup) -> None:
        previous = self.orientation

        def apply(rover: Rover) -> None:
            rover.orientation = turn(rover.orientation, direction)

        def rollback(rover: Rover) -> None:
            rover.orientation = previous

        self.apply_and_publish(
            context.publisher,
            apply,
            lambda rover: RoverTurned(
                rover_id=rover.rover_id,
                previous_orientation=previous,
                orientation=rover.orientation,
            ),
            rollback=rollback,
        )

    def move(self, context: PlateauLookup) -> Coordinates:
        """
        Move one cell forward.

        Raises OutOfBoundsError or LocationAlreadyBusyError without
        touching the rover or the plateau.
        """
        plateau = context.get_plateau(self.plateau_id)
        previous = self.position
        target = advance(previous, self.orientation)

        if not plateau.contains(target):
            raise OutOfBoundsError(
                f"Rover {self.rover_id} cannot move to {target}: outside plateau "
                f"{plateau.width}x{plateau.height}",
                details={"abscissa": target.abscissa, "ordinate": target.ordinate},
            )
        if plateau.is_location_busy(target):
            raise LocationAlreadyBusyError(
                f"Rover {self.rover_id} cannot move to {target}: location is busy",
                details={"abscissa": target.abscissa, "ordinate": target.ordinate},
            )

        def apply(rover: Rover) -> None:
            plateau.apply_and_publish(
                context.publisher,
                lambda p: p.switch_location(previous, target),
                lambda p: PlateauSwitchedLocation(
                    plateau_id=p.plateau_id,
                    previous_position=previous,
                    current_position=target,
                ),
                rollback=lambda p: p.switch_location(target, previous),
            )
            rover.position = target

        def rollback(rover: Rover) -> None:
            plateau.switch_location(target, previous)
            rover.position = previous

        self.apply_and_publish(
            context.publisher,
            apply,
            lambda rover: RoverMoved(
                rover_id=rover.rover_id,
                previous_position=previous,
                position=target,
            ),
            rollback=rollback,
        )
        logger.debug("Rover %s moved %s -> %s", self.rover_id, previous, target)
        return target

    def move_number_of_times(self, times: int, context: PlateauLookup) -> Coordinates:
        """
        Move `times` cells, one at a time.

        The first failing move aborts the rest. Moves made before it stay.
        """
        if times < 0:
            raise InvalidCommandError(f"Number of moves must be >= 0, got {times}")
        for _ in range(times):
            self.move(context)
        return self.position

    def clone(self) -> Rover:
        return deepcopy(self)

    def __str__(self) -> str:
        return (
            f"Rover({self.rover_id}, {self.position}, "
            f"{self.orientation.name}, version={self.version})"
        )
