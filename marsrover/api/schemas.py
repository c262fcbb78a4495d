"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Error Codes:
- VALIDATION_ERROR: Bad dimensions, bad command values, missing plateau
- LOCATION_OUT_OF_BOUNDS: Coordinate outside the plateau
- LOCATION_BUSY: Coordinate already occupied by another rover
- VERSION_CONFLICT: Stale version on a versioned update
- NOT_FOUND: Rover or plateau does not exist
"""

from enum import Enum
from typing import Optional, Any
from uuid import UUID
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class OrientationCode(str, Enum):
    """Single-letter orientation codes."""
    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"


class TurnCode(str, Enum):
    LEFT = "L"
    RIGHT = "R"


class ErrorCode(str, Enum):
    """Structured error codes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    LOCATION_OUT_OF_BOUNDS = "LOCATION_OUT_OF_BOUNDS"
    LOCATION_BUSY = "LOCATION_BUSY"
    VERSION_CONFLICT = "VERSION_CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CoordinatesInfo(BaseModel):
    abscissa: int
    ordinate: int


# =============================================================================
# Request Models
# =============================================================================

class CreatePlateauRequest(BaseModel):
    """Request to initialize a plateau."""
    width: int = Field(..., ge=1, description="Rest-frame width")
    height: int = Field(..., ge=1, description="Rest-frame height")
    observer_speed: int = Field(0, ge=0, description="Observer speed; contracts the plateau above the threshold")
    plateau_id: Optional[UUID] = Field(None, description="UUID to use; generated if omitted")


class CreateRoverRequest(BaseModel):
    """Request to place a rover on a plateau."""
    name: str = Field(..., min_length=1)
    abscissa: int
    ordinate: int
    orientation: OrientationCode


class TurnRoverRequest(BaseModel):
    direction: TurnCode


class MoveRoverRequest(BaseModel):
    number_of_moves: int = Field(1, ge=0)


class UpdateOrientationRequest(BaseModel):
    """Versioned orientation update. Fails with VERSION_CONFLICT if stale."""
    version: int = Field(..., ge=0)
    orientation: OrientationCode


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    game_error_code: Optional[str] = Field(None, description="Domain error code, e.g. ERR-002")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class PlateauResponse(BaseModel):
    plateau_id: str
    width: int
    height: int
    rest_width: int
    rest_height: int
    observer_speed: int = 0
    busy_locations: list[CoordinatesInfo] = Field(default_factory=list)
    api_version: str = "v1"


class RoverResponse(BaseModel):
    plateau_id: str
    name: str
    abscissa: int
    ordinate: int
    orientation: OrientationCode
    version: int
    api_version: str = "v1"


class RoverListResponse(BaseModel):
    rovers: list[RoverResponse] = Field(default_factory=list)
    count: int = 0


class RemoveRoverResponse(BaseModel):
    success: bool
    name: str


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    plateaus_loaded: int = 0
