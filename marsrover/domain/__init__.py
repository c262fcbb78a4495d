"""
Domain - Rover and plateau entities and their state transitions.

The domain is the only place state changes:
1. Geometry gives the next orientation / cell
2. Dimensions give the (possibly contracted) plateau size
3. Plateau tracks which cells are busy
4. Rover turns and moves through apply_and_publish
5. Events reach subscribers only after a successful mutation
"""

from .geometry import Orientation, TurnDirection, Coordinates, turn, advance
from .dimensions import (
    Dimensions,
    RelativisticDimensions,
    contraction_factor,
    LIGHT_SPEED,
    MINIMAL_RELATIVISTIC_SPEED,
)
from .plateau import Plateau
from .rover import Rover, RoverIdentifier, VersionedRoverIdentifier
from .events import (
    DomainEvent,
    DomainEventPublisher,
    DomainEventSubscriber,
    PlateauInitialized,
    PlateauSwitchedLocation,
    RoverInitialized,
    RoverMoved,
    RoverRemoved,
    RoverTurned,
    apply_and_publish,
)
from .validation import ValidationResult, validate_plateau
from .errors import (
    GameError,
    IllegalArgumentError,
    InvalidCommandError,
    InvalidDimensionsError,
    LocationAlreadyBusyError,
    NotFoundError,
    OptimisticLockingConflictError,
    OutOfBoundsError,
    PlateauValidationError,
    RoverInitializationError,
    SpatialError,
    UnknownLocationError,
)

__all__ = [
    "Orientation",
    "TurnDirection",
    "Coordinates",
    "turn",
    "advance",
    "Dimensions",
    "RelativisticDimensions",
    "contraction_factor",
    "LIGHT_SPEED",
    "MINIMAL_RELATIVISTIC_SPEED",
    "Plateau",
    "Rover",
    "RoverIdentifier",
    "VersionedRoverIdentifier",
    "DomainEvent",
    "DomainEventPublisher",
    "DomainEventSubscriber",
    "PlateauInitialized",
    "PlateauSwitchedLocation",
    "RoverInitialized",
    "RoverMoved",
    "RoverRemoved",
    "RoverTurned",
    "apply_and_publish",
    "ValidationResult",
    "validate_plateau",
    "GameError",
    "IllegalArgumentError",
    "InvalidCommandError",
    "InvalidDimensionsError",
    "LocationAlreadyBusyError",
    "NotFoundError",
    "OptimisticLockingConflictError",
    "OutOfBoundsError",
    "PlateauValidationError",
    "RoverInitializationError",
    "SpatialError",
    "UnknownLocationError",
]
