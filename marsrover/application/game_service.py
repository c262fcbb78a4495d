"""
Game Service - Single entry point that executes commands.

The service wires a GameContext, a PlateauService and a RoverService
together and dispatches each command to one handler. Errors are not
caught here; they reach the caller with their code intact.
"""

from __future__ import annotations
import logging
from typing import Any, Callable

from ..domain.errors import InvalidCommandError
from ..services import GameContext, PlateauService, RoverService
from .commands import (
    Command,
    InitializePlateauCommand,
    InitializeRoverCommand,
    MoveRoverCommand,
    RemoveRoverCommand,
    TurnRoverCommand,
    UpdateRoverOrientationCommand,
)

logger = logging.getLogger(__name__)


class GameService:
    """
    Executes commands against the domain services.

    Usage:
        game = GameService()
        plateau = game.execute(InitializePlateauCommand(width=5, height=5))
        game.execute(InitializeRoverCommand.create(plateau.plateau_id, "ROVER_1", 1, 2, "N"))
        rover = game.execute(MoveRoverCommand(plateau.plateau_id, "ROVER_1", 2))
    """

    def __init__(
        self,
        context: GameContext | None = None,
        plateau_service: PlateauService | None = None,
        rover_service: RoverService | None = None,
    ):
        self.context = context or GameContext()
        self.plateau_service = plateau_service or PlateauService(self.context)
        self.rover_service = rover_service or RoverService(self.plateau_service, context=self.context)

    def execute(self, command: Command) -> Any:
        """Run one command to completion and return the affected entity."""
        handler = self._get_handler(type(command))
        if handler is None:
            raise InvalidCommandError(f"No handler for command: {type(command).__name__}")
        logger.debug("Executing %s", command)
        return handler(command)

    def execute_all(self, commands: list[Command]) -> list[Any]:
        """Run commands in order. The first failure stops the batch."""
        return [self.execute(command) for command in commands]

    def _get_handler(self, command_type: type) -> Callable[[Any], Any] | None:
        handlers = {
            InitializePlateauCommand: self._handle_initialize_plateau,
            InitializeRoverCommand: self._handle_initialize_rover,
            TurnRoverCommand: self._handle_turn_rover,
            MoveRoverCommand: self._handle_move_rover,
            UpdateRoverOrientationCommand: self._handle_update_orientation,
            RemoveRoverCommand: self._handle_remove_rover,
        }
        return handlers.get(command_type)

    def _handle_initialize_plateau(self, command: InitializePlateauCommand):
        if command.observer_speed >= self.context.MINIMAL_RELATIVISTIC_SPEED:
            return self.plateau_service.initialize_relativistic_plateau(
                command.plateau_id, command.observer_speed, command.width, command.height,
            )
        return self.plateau_service.initialize_plateau(
            command.plateau_id, command.width, command.height,
        )

    def _handle_initialize_rover(self, command: InitializeRoverCommand):
        return self.rover_service.initialize_rover(
            command.rover_id, command.coordinates, command.orientation,
        )

    def _handle_turn_rover(self, command: TurnRoverCommand):
        return self.rover_service.turn_rover(command.rover_id, command.direction)

    def _handle_move_rover(self, command: MoveRoverCommand):
        return self.rover_service.move_rover_number_of_times(
            command.rover_id, command.number_of_moves,
        )

    def _handle_update_orientation(self, command: UpdateRoverOrientationCommand):
        return self.rover_service.update_rover_with_orientation(
            command.versioned_id, command.orientation,
        )

    def _handle_remove_rover(self, command: RemoveRoverCommand):
        self.rover_service.remove_rover(command.rover_id)
        return None
