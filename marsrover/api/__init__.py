"""
API Module - REST interface to the rover game.

Clients:
1. Initialize a plateau
2. Place rovers on it
3. Turn and move them
4. Read back positions and busy cells

All state lives in the GameService handed to create_app().
"""

from .schemas import (
    # Requests
    CreatePlateauRequest,
    CreateRoverRequest,
    TurnRoverRequest,
    MoveRoverRequest,
    UpdateOrientationRequest,
    # Responses
    PlateauResponse,
    RoverResponse,
    RoverListResponse,
    RemoveRoverResponse,
    HealthResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
)
from .app import create_app

__all__ = [
    "CreatePlateauRequest",
    "CreateRoverRequest",
    "TurnRoverRequest",
    "MoveRoverRequest",
    "UpdateOrientationRequest",
    "PlateauResponse",
    "RoverResponse",
    "RoverListResponse",
    "RemoveRoverResponse",
    "HealthResponse",
    "ErrorResponse",
    "ErrorCode",
    "create_app",
]
