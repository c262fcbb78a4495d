"""
Instruction Parser - Turns the classic rover instruction text into commands.

Format:
    5 5            plateau width and height
    1 2 N          rover position and orientation
    LMLMLMLMM      rover program: L/R turn, M move
    3 3 E          next rover...
    MMRMMRMRRM

Blank lines are ignored. A rover without a program line is placed and
left where it is. Consecutive M's become one MoveRoverCommand.
"""

from __future__ import annotations
import re
import uuid

from ..domain.errors import InvalidCommandError
from ..domain.geometry import Orientation, TurnDirection
from .commands import (
    Command,
    InitializePlateauCommand,
    InitializeRoverCommand,
    MoveRoverCommand,
    TurnRoverCommand,
)

_PLATEAU_LINE = re.compile(r"^(\d+)\s+(\d+)$")
_ROVER_LINE = re.compile(r"^(-?\d+)\s+(-?\d+)\s+([NESWnesw])$")
_PROGRAM_LINE = re.compile(r"^[LRMlrm]+$")


def parse_program(plateau_id: uuid.UUID, name: str, program: str) -> list[Command]:
    """Compile an LRM program into turn / move commands."""
    commands: list[Command] = []
    moves = 0
    for step in program.upper():
        if step == "M":
            moves += 1
            continue
        if moves:
            commands.append(MoveRoverCommand(plateau_id, name, moves))
            moves = 0
        commands.append(TurnRoverCommand(plateau_id, name, TurnDirection(step)))
    if moves:
        commands.append(MoveRoverCommand(plateau_id, name, moves))
    return commands


def parse_instructions(
    text: str,
    plateau_id: uuid.UUID | None = None,
    observer_speed: int = 0,
    name_prefix: str = "ROVER_",
) -> list[Command]:
    """
    Parse instruction text into an ordered command list.

    Rovers are named name_prefix + 1, 2, ... in order of appearance.

    Raises:
        InvalidCommandError: on any line that does not fit the format
    """
    lines = [
        (number, line.strip())
        for number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]
    if not lines:
        raise InvalidCommandError("Instructions are empty")

    number, first = lines[0]
    match = _PLATEAU_LINE.match(first)
    if not match:
        raise InvalidCommandError(f"Line {number}: expected plateau size 'W H', got {first!r}")

    plateau_id = plateau_id or uuid.uuid4()
    commands: list[Command] = [
        InitializePlateauCommand(
            width=int(match.group(1)),
            height=int(match.group(2)),
            plateau_id=plateau_id,
            observer_speed=observer_speed,
        )
    ]

    rover_count = 0
    current: str | None = None
    for number, line in lines[1:]:
        rover_match = _ROVER_LINE.match(line)
        if rover_match:
            rover_count += 1
            current = f"{name_prefix}{rover_count}"
            commands.append(
                InitializeRoverCommand(
                    plateau_id=plateau_id,
                    name=current,
                    abscissa=int(rover_match.group(1)),
                    ordinate=int(rover_match.group(2)),
                    orientation=Orientation.from_code(rover_match.group(3)),
                )
            )
        elif _PROGRAM_LINE.match(line):
            if current is None:
                raise InvalidCommandError(f"Line {number}: program before any rover position")
            commands.extend(parse_program(plateau_id, current, line))
            current = None
        else:
            raise InvalidCommandError(f"Line {number}: cannot parse {line!r}")

    return commands
