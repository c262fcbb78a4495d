"""
FastAPI Application - REST API for the rover game.

Endpoints:
    GET    /api/v1/health                                   Health check
    POST   /api/v1/plateaus                                 Initialize a plateau
    GET    /api/v1/plateaus/{plateau_id}                    Get plateau and busy cells
    POST   /api/v1/plateaus/{plateau_id}/rovers             Place a rover
    GET    /api/v1/plateaus/{plateau_id}/rovers             List rovers on a plateau
    GET    /api/v1/plateaus/{plateau_id}/rovers/{name}      Get a rover
    DELETE /api/v1/plateaus/{plateau_id}/rovers/{name}      Remove a rover
    POST   /api/v1/plateaus/{plateau_id}/rovers/{name}/turn Turn left/right
    POST   /api/v1/plateaus/{plateau_id}/rovers/{name}/move Move N cells
    PUT    /api/v1/plateaus/{plateau_id}/rovers/{name}/orientation
                                                            Versioned orientation update

Domain errors are returned as ErrorResponse with a matching HTTP status.
Commands run synchronously, one at a time per request.
"""

from typing import Optional
from uuid import UUID, uuid4

from .. import __version__
from ..config import Settings


def create_app(game_service=None, settings: Optional[Settings] = None):
    """
    Create the FastAPI application.

    Args:
        game_service: Optional GameService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from ..application import (
        GameService,
        InitializePlateauCommand,
        InitializeRoverCommand,
        MoveRoverCommand,
        RemoveRoverCommand,
        TurnRoverCommand,
        UpdateRoverOrientationCommand,
    )
    from ..domain import (
        GameError,
        LocationAlreadyBusyError,
        NotFoundError,
        OptimisticLockingConflictError,
        Orientation,
        RelativisticDimensions,
        RoverIdentifier,
        SpatialError,
        TurnDirection,
    )
    from .schemas import (
        # Request models
        CreatePlateauRequest,
        CreateRoverRequest,
        TurnRoverRequest,
        MoveRoverRequest,
        UpdateOrientationRequest,
        # Response models
        CoordinatesInfo,
        ErrorResponse,
        PlateauResponse,
        RoverResponse,
        RoverListResponse,
        RemoveRoverResponse,
        HealthResponse,
        # Enums
        ErrorCode,
        OrientationCode,
    )

    settings = settings or Settings.from_env()
    game = game_service or GameService()

    app = FastAPI(
        title="Mars Rover API",
        description="Place rovers on a plateau, turn them and move them around.",
        version=__version__,
        docs_url=None if settings.is_production else "/api/docs",
        redoc_url=None if settings.is_production else "/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error handling
    # =========================================================================

    def classify(error: GameError) -> tuple[ErrorCode, int]:
        if isinstance(error, NotFoundError):
            return ErrorCode.NOT_FOUND, 404
        if isinstance(error, OptimisticLockingConflictError):
            return ErrorCode.VERSION_CONFLICT, 409
        if isinstance(error, LocationAlreadyBusyError):
            return ErrorCode.LOCATION_BUSY, 409
        if isinstance(error, SpatialError):
            return ErrorCode.LOCATION_OUT_OF_BOUNDS, 400
        return ErrorCode.VALIDATION_ERROR, 400

    @app.exception_handler(GameError)
    async def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
        error_code, status_code = classify(exc)
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=str(exc),
                error_code=error_code,
                game_error_code=exc.code,
                details=exc.details or None,
            ).model_dump(mode="json"),
        )

    # =========================================================================
    # Converters
    # =========================================================================

    def plateau_response(plateau) -> PlateauResponse:
        dimensions = plateau.dimensions
        rest = dimensions.rest_dimensions if isinstance(dimensions, RelativisticDimensions) else dimensions
        speed = dimensions.speed if isinstance(dimensions, RelativisticDimensions) else 0
        return PlateauResponse(
            plateau_id=str(plateau.plateau_id),
            width=plateau.width,
            height=plateau.height,
            rest_width=rest.width,
            rest_height=rest.height,
            observer_speed=speed,
            busy_locations=[
                CoordinatesInfo(abscissa=c.abscissa, ordinate=c.ordinate)
                for c in plateau.busy_locations()
            ],
        )

    def rover_response(rover) -> RoverResponse:
        return RoverResponse(
            plateau_id=str(rover.plateau_id),
            name=rover.name,
            abscissa=rover.position.abscissa,
            ordinate=rover.position.ordinate,
            orientation=OrientationCode(rover.orientation.value),
            version=rover.version,
        )

    # =========================================================================
    # Endpoints
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse(
            version=__version__,
            plateaus_loaded=len(game.context.list_plateaus()),
        )

    @app.post(
        "/api/v1/plateaus",
        response_model=PlateauResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse}},
        tags=["Plateaus"],
        summary="Initialize a plateau",
    )
    async def create_plateau(request: CreatePlateauRequest) -> PlateauResponse:
        plateau = game.execute(
            InitializePlateauCommand(
                width=request.width,
                height=request.height,
                plateau_id=request.plateau_id or uuid4(),
                observer_speed=request.observer_speed,
            )
        )
        return plateau_response(plateau)

    @app.get(
        "/api/v1/plateaus/{plateau_id}",
        response_model=PlateauResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Plateaus"],
    )
    async def get_plateau(plateau_id: UUID) -> PlateauResponse:
        return plateau_response(game.plateau_service.load_plateau(plateau_id))

    @app.post(
        "/api/v1/plateaus/{plateau_id}/rovers",
        response_model=RoverResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Rovers"],
        summary="Place a rover on a plateau",
    )
    async def create_rover(plateau_id: UUID, request: CreateRoverRequest) -> RoverResponse:
        rover = game.execute(
            InitializeRoverCommand(
                plateau_id=plateau_id,
                name=request.name,
                abscissa=request.abscissa,
                ordinate=request.ordinate,
                orientation=Orientation(request.orientation.value),
            )
        )
        return rover_response(rover)

    @app.get(
        "/api/v1/plateaus/{plateau_id}/rovers",
        response_model=RoverListResponse,
        tags=["Rovers"],
    )
    async def list_rovers(plateau_id: UUID) -> RoverListResponse:
        rovers = game.rover_service.get_all_rovers_on_plateau(plateau_id)
        return RoverListResponse(
            rovers=[rover_response(r) for r in rovers],
            count=len(rovers),
        )

    @app.get(
        "/api/v1/plateaus/{plateau_id}/rovers/{name}",
        response_model=RoverResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Rovers"],
    )
    async def get_rover(plateau_id: UUID, name: str) -> RoverResponse:
        return rover_response(game.rover_service.get_rover(RoverIdentifier(plateau_id, name)))

    @app.delete(
        "/api/v1/plateaus/{plateau_id}/rovers/{name}",
        response_model=RemoveRoverResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Rovers"],
    )
    async def remove_rover(plateau_id: UUID, name: str) -> RemoveRoverResponse:
        game.execute(RemoveRoverCommand(plateau_id=plateau_id, name=name))
        return RemoveRoverResponse(success=True, name=name)

    @app.post(
        "/api/v1/plateaus/{plateau_id}/rovers/{name}/turn",
        response_model=RoverResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Rovers"],
    )
    async def turn_rover(plateau_id: UUID, name: str, request: TurnRoverRequest) -> RoverResponse:
        rover = game.execute(
            TurnRoverCommand(
                plateau_id=plateau_id,
                name=name,
                direction=TurnDirection(request.direction.value),
            )
        )
        return rover_response(rover)

    @app.post(
        "/api/v1/plateaus/{plateau_id}/rovers/{name}/move",
        response_model=RoverResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Move leaves the plateau"},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Target cell is busy"},
        },
        tags=["Rovers"],
    )
    async def move_rover(plateau_id: UUID, name: str, request: MoveRoverRequest) -> RoverResponse:
        rover = game.execute(
            MoveRoverCommand(
                plateau_id=plateau_id,
                name=name,
                number_of_moves=request.number_of_moves,
            )
        )
        return rover_response(rover)

    @app.put(
        "/api/v1/plateaus/{plateau_id}/rovers/{name}/orientation",
        response_model=RoverResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Stale version"},
        },
        tags=["Rovers"],
    )
    async def update_orientation(
        plateau_id: UUID, name: str, request: UpdateOrientationRequest,
    ) -> RoverResponse:
        rover = game.execute(
            UpdateRoverOrientationCommand(
                plateau_id=plateau_id,
                name=name,
                version=request.version,
                orientation=Orientation(request.orientation.value),
            )
        )
        return rover_response(rover)

    return app
