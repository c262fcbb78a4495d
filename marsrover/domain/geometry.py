"""
Movement Geometry - Orientations, coordinates and the pure move/turn rules.

Grid convention:
- NORTH increases the ordinate, SOUTH decreases it
- EAST increases the abscissa, WEST decreases it
- Orientations cycle NORTH -> EAST -> SOUTH -> WEST -> NORTH;
  RIGHT steps forward in the cycle, LEFT steps backward

Nothing here knows about plateau bounds. Callers check them.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidCommandError


class Orientation(Enum):
    """Cardinal orientation of a rover."""
    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @classmethod
    def from_code(cls, code: str) -> Orientation:
        """Parse a single-letter orientation code (N, E, S, W)."""
        try:
            return cls(code.strip().upper())
        except ValueError:
            raise InvalidCommandError(f"Unknown orientation: {code!r}") from None


class TurnDirection(Enum):
    """Direction of a 90 degree turn."""
    LEFT = "L"
    RIGHT = "R"

    @classmethod
    def from_code(cls, code: str) -> TurnDirection:
        try:
            return cls(code.strip().upper())
        except ValueError:
            raise InvalidCommandError(f"Unknown turn direction: {code!r}") from None


_CYCLE = [Orientation.NORTH, Orientation.EAST, Orientation.SOUTH, Orientation.WEST]

_DELTAS = {
    Orientation.NORTH: (0, 1),
    Orientation.EAST: (1, 0),
    Orientation.SOUTH: (0, -1),
    Orientation.WEST: (-1, 0),
}


@dataclass(frozen=True)
class Coordinates:
    """An (abscissa, ordinate) point on the grid."""
    abscissa: int
    ordinate: int

    def shifted(self, d_abscissa: int, d_ordinate: int) -> Coordinates:
        return Coordinates(self.abscissa + d_abscissa, self.ordinate + d_ordinate)

    def __str__(self) -> str:
        return f"({self.abscissa}, {self.ordinate})"


def turn(orientation: Orientation, direction: TurnDirection) -> Orientation:
    """Rotate 90 degrees left or right."""
    step = 1 if direction == TurnDirection.RIGHT else -1
    return _CYCLE[(_CYCLE.index(orientation) + step) % len(_CYCLE)]


def advance(position: Coordinates, orientation: Orientation) -> Coordinates:
    """Next cell one step ahead in the given orientation."""
    return position.shifted(*_DELTAS[orientation])
