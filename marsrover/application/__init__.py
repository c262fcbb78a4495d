"""
Application - Commands, their dispatch and the instruction text format.
"""

from .commands import (
    Command,
    InitializePlateauCommand,
    InitializeRoverCommand,
    TurnRoverCommand,
    MoveRoverCommand,
    UpdateRoverOrientationCommand,
    RemoveRoverCommand,
)
from .game_service import GameService
from .parser import parse_instructions, parse_program

__all__ = [
    "Command",
    "InitializePlateauCommand",
    "InitializeRoverCommand",
    "TurnRoverCommand",
    "MoveRoverCommand",
    "UpdateRoverOrientationCommand",
    "RemoveRoverCommand",
    "GameService",
    "parse_instructions",
    "parse_program",
]
