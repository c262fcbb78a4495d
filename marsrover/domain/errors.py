"""
Game Errors - Exception hierarchy for the rover engine.

Every error carries a stable code and a human-readable message.
str(error) renders as "[CODE] message" so the code survives any
transport that only forwards the text.

Kinds:
- Validation (ERR-000): bad dimensions, bad commands, missing plateau
- Location (ERR-001): coordinate outside the plateau
- Busy location (ERR-002): coordinate already occupied
- Concurrency (ERR-003): stale version on a versioned update
- Not found (ERR-004): rover or plateau missing from its repository
"""

from __future__ import annotations

from typing import Any


# Codes
ILLEGAL_ARGUMENT_CODE = "ERR-000"
PLATEAU_LOCATION_ERROR_CODE = "ERR-001"
PLATEAU_LOCATION_BUSY_CODE = "ERR-002"
CONCURRENT_MODIFICATION_CODE = "ERR-003"
NOT_FOUND_CODE = "ERR-004"

# Message patterns
ERROR_CODE_AND_MESSAGE_PATTERN = "[{code}] {message}"
ERROR_MESSAGE_SEPARATION_PATTERN = "{first} - {second}"

# Labels
MISSING_PLATEAU_CONFIGURATION = "Missing Plateau configuration"
ADDING_ROVER_NOT_ALLOWED = "It is not allowed to add a Rover. Please initialize the Plateau first."
CONCURRENT_MODIFICATION_ERROR_MESSAGE = (
    "The entity {entity} has been modified concurrently. Please reload it and try again."
)


class GameError(Exception):
    """Base exception for all rover engine errors."""

    code: str = ILLEGAL_ARGUMENT_CODE

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(
            ERROR_CODE_AND_MESSAGE_PATTERN.format(code=self.code, message=message)
        )


# --- Validation ---
class IllegalArgumentError(GameError):
    """Invalid input to a domain operation."""


class InvalidDimensionsError(IllegalArgumentError):
    """Width or height is not a positive integer."""


class InvalidCommandError(IllegalArgumentError):
    """A command or instruction line could not be understood."""


class PlateauValidationError(IllegalArgumentError):
    """Raised when a plateau fails its structural check."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            f"Plateau validation failed with {len(errors)} error(s): " + "; ".join(errors),
            details={"errors": errors},
        )


class RoverInitializationError(IllegalArgumentError):
    """A rover could not be placed (usually: its plateau is not loaded)."""

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(
            message or ERROR_MESSAGE_SEPARATION_PATTERN.format(
                first=MISSING_PLATEAU_CONFIGURATION,
                second=ADDING_ROVER_NOT_ALLOWED,
            ),
            details=details,
        )


# --- Spatial ---
class SpatialError(GameError):
    """Base for location errors on a plateau."""

    code = PLATEAU_LOCATION_ERROR_CODE


class UnknownLocationError(SpatialError):
    """Coordinate lookup outside the plateau's occupancy map."""


class OutOfBoundsError(SpatialError):
    """A rover tried to leave the plateau."""


class LocationAlreadyBusyError(SpatialError):
    """The target coordinate is already occupied by another rover."""

    code = PLATEAU_LOCATION_BUSY_CODE


# --- Concurrency ---
class OptimisticLockingConflictError(GameError):
    """Caller's version does not match the stored version."""

    code = CONCURRENT_MODIFICATION_CODE

    def __init__(self, entity: Any, expected_version: int, stored_version: int):
        self.entity = entity
        self.expected_version = expected_version
        self.stored_version = stored_version
        super().__init__(
            CONCURRENT_MODIFICATION_ERROR_MESSAGE.format(entity=entity),
            details={
                "entity": str(entity),
                "expected_version": expected_version,
                "stored_version": stored_version,
            },
        )


# --- Not found ---
class NotFoundError(GameError):
    """Entity missing from its repository."""

    code = NOT_FOUND_CODE
