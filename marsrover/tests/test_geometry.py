"""
Tests for movement geometry.

Tests:
- Turning cycle
- Advancing one cell per orientation
- Orientation / direction codes
"""

import pytest

from ..domain.errors import InvalidCommandError
from ..domain.geometry import Coordinates, Orientation, TurnDirection, advance, turn


class TestTurn:
    """Tests for turn()."""

    def test_right_follows_cycle(self):
        assert turn(Orientation.NORTH, TurnDirection.RIGHT) == Orientation.EAST
        assert turn(Orientation.EAST, TurnDirection.RIGHT) == Orientation.SOUTH
        assert turn(Orientation.SOUTH, TurnDirection.RIGHT) == Orientation.WEST
        assert turn(Orientation.WEST, TurnDirection.RIGHT) == Orientation.NORTH

    def test_left_goes_backward(self):
        assert turn(Orientation.NORTH, TurnDirection.LEFT) == Orientation.WEST
        assert turn(Orientation.WEST, TurnDirection.LEFT) == Orientation.SOUTH

    @pytest.mark.parametrize("orientation", list(Orientation))
    def test_left_then_right_is_identity(self, orientation):
        assert turn(turn(orientation, TurnDirection.LEFT), TurnDirection.RIGHT) == orientation

    @pytest.mark.parametrize("orientation", list(Orientation))
    @pytest.mark.parametrize("direction", list(TurnDirection))
    def test_four_turns_return_to_start(self, orientation, direction):
        result = orientation
        for _ in range(4):
            result = turn(result, direction)
        assert result == orientation


class TestAdvance:
    """Tests for advance()."""

    @pytest.mark.parametrize(
        "orientation,expected",
        [
            (Orientation.NORTH, Coordinates(2, 3)),
            (Orientation.SOUTH, Coordinates(2, 1)),
            (Orientation.EAST, Coordinates(3, 2)),
            (Orientation.WEST, Coordinates(1, 2)),
        ],
    )
    def test_one_step(self, orientation, expected):
        assert advance(Coordinates(2, 2), orientation) == expected

    def test_does_not_check_bounds(self):
        """Bounds are the caller's business."""
        assert advance(Coordinates(0, 0), Orientation.WEST) == Coordinates(-1, 0)


class TestCodes:

    def test_orientation_from_code(self):
        assert Orientation.from_code("s") == Orientation.SOUTH
        assert Orientation.from_code(" E ") == Orientation.EAST

    def test_unknown_orientation_code(self):
        with pytest.raises(InvalidCommandError):
            Orientation.from_code("X")

    def test_turn_direction_from_code(self):
        assert TurnDirection.from_code("l") == TurnDirection.LEFT

    def test_coordinates_are_hashable_values(self):
        assert Coordinates(1, 2) == Coordinates(1, 2)
        assert len({Coordinates(1, 2), Coordinates(1, 2)}) == 1
