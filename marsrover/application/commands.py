"""
Commands - Client requests to the game.

Commands are plain immutable values validated at construction:
- InitializePlateauCommand: create a plateau (optionally relativistic)
- InitializeRoverCommand: place a named rover on a plateau
- TurnRoverCommand: turn a rover left or right
- MoveRoverCommand: move a rover forward N cells
- UpdateRoverOrientationCommand: versioned orientation overwrite
- RemoveRoverCommand: take a rover off its plateau

GameService.execute() dispatches on the command type.
"""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from typing import Union

from ..domain.errors import InvalidCommandError
from ..domain.geometry import Coordinates, Orientation, TurnDirection
from ..domain.rover import RoverIdentifier, VersionedRoverIdentifier


def _require_name(name: str) -> None:
    if not name or not name.strip():
        raise InvalidCommandError("Rover name is required")


@dataclass(frozen=True)
class InitializePlateauCommand:
    width: int
    height: int
    plateau_id: uuid.UUID = field(default_factory=uuid.uuid4)
    observer_speed: int = 0

    def __post_init__(self):
        if self.observer_speed < 0:
            raise InvalidCommandError(
                f"Observer speed must be >= 0, got {self.observer_speed}"
            )


@dataclass(frozen=True)
class InitializeRoverCommand:
    plateau_id: uuid.UUID
    name: str
    abscissa: int
    ordinate: int
    orientation: Orientation

    def __post_init__(self):
        _require_name(self.name)

    @classmethod
    def create(
        cls,
        plateau_id: uuid.UUID,
        name: str,
        abscissa: int,
        ordinate: int,
        orientation: Orientation | str,
    ) -> InitializeRoverCommand:
        """Factory accepting a single-letter orientation code."""
        if isinstance(orientation, str):
            orientation = Orientation.from_code(orientation)
        return cls(plateau_id, name, abscissa, ordinate, orientation)

    @property
    def rover_id(self) -> RoverIdentifier:
        return RoverIdentifier(self.plateau_id, self.name)

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.abscissa, self.ordinate)


@dataclass(frozen=True)
class TurnRoverCommand:
    plateau_id: uuid.UUID
    name: str
    direction: TurnDirection

    def __post_init__(self):
        _require_name(self.name)

    @property
    def rover_id(self) -> RoverIdentifier:
        return RoverIdentifier(self.plateau_id, self.name)


@dataclass(frozen=True)
class MoveRoverCommand:
    plateau_id: uuid.UUID
    name: str
    number_of_moves: int = 1

    def __post_init__(self):
        _require_name(self.name)
        if self.number_of_moves < 0:
            raise InvalidCommandError(
                f"Number of moves must be >= 0, got {self.number_of_moves}"
            )

    @property
    def rover_id(self) -> RoverIdentifier:
        return RoverIdentifier(self.plateau_id, self.name)


@dataclass(frozen=True)
class UpdateRoverOrientationCommand:
    plateau_id: uuid.UUID
    name: str
    version: int
    orientation: Orientation

    def __post_init__(self):
        _require_name(self.name)

    @property
    def versioned_id(self) -> VersionedRoverIdentifier:
        return VersionedRoverIdentifier(RoverIdentifier(self.plateau_id, self.name), self.version)


@dataclass(frozen=True)
class RemoveRoverCommand:
    plateau_id: uuid.UUID
    name: str

    def __post_init__(self):
        _require_name(self.name)

    @property
    def rover_id(self) -> RoverIdentifier:
        return RoverIdentifier(self.plateau_id, self.name)


Command = Union[
    InitializePlateauCommand,
    InitializeRoverCommand,
    TurnRoverCommand,
    MoveRoverCommand,
    UpdateRoverOrientationCommand,
    RemoveRoverCommand,
]
