"""
Tests for the Rover entity.

Tests:
- Turning publishes RoverTurned and leaves position alone
- Moving updates position and plateau occupancy
- Failed moves leave everything unchanged
- Partial move sequences
- Rollback when a subscriber fails
"""

import pytest

from ..domain.errors import LocationAlreadyBusyError, OutOfBoundsError
from ..domain.events import PlateauSwitchedLocation, RoverMoved, RoverTurned
from ..domain.geometry import Coordinates, Orientation
from ..domain.rover import Rover, RoverIdentifier


@pytest.fixture
def on_plateau(context, plateau):
    """Register the bare plateau in the context and return a rover factory."""
    context.add_plateau(plateau)

    def make(name, x, y, orientation):
        rover = Rover(RoverIdentifier(plateau.plateau_id, name), Coordinates(x, y), orientation)
        plateau.mark_busy(rover.position)
        return rover

    return make


class TestTurn:

    def test_turn_left_and_right(self, context, on_plateau):
        rover = on_plateau("ROVER_1", 1, 1, Orientation.NORTH)
        rover.turn_left(context)
        assert rover.orientation == Orientation.WEST
        rover.turn_right(context)
        rover.turn_right(context)
        assert rover.orientation == Orientation.EAST
        assert rover.position == Coordinates(1, 1)

    def test_turn_publishes_event(self, context, on_plateau):
        rover = on_plateau("ROVER_1", 1, 1, Orientation.NORTH)
        rover.turn_right(context)
        events = context.publisher.get_history(RoverTurned)
        assert len(events) == 1
        assert events[0].previous_orientation == Orientation.NORTH
        assert events[0].orientation == Orientation.EAST

    def test_turn_does_not_touch_version(self, context, on_plateau):
        rover = on_plateau("ROVER_1", 1, 1, Orientation.NORTH)
        rover.turn_left(context)
        assert rover.version == 0


class TestMove:

    def test_move_south_from_3_4(self, context, plateau, on_plateau):
        rover = on_plateau("ROVER_1", 3, 4, Orientation.SOUTH)
        rover.move(context)

        assert rover.position == Coordinates(3, 3)
        assert rover.orientation == Orientation.SOUTH
        assert not plateau.is_location_busy(Coordinates(3, 4))
        assert plateau.is_location_busy(Coordinates(3, 3))

    def test_move_publishes_switch_then_moved(self, context, on_plateau):
        rover = on_plateau("ROVER_1", 3, 4, Orientation.SOUTH)
        rover.move(context)

        history = context.publisher.get_history()
        assert [type(e) for e in history] == [PlateauSwitchedLocation, RoverMoved]
        assert history[0].previous_position == Coordinates(3, 4)
        assert history[0].current_position == Coordinates(3, 3)

    def test_move_onto_busy_cell_fails(self, context, plateau, on_plateau):
        first = on_plateau("ROVER_1", 1, 1, Orientation.NORTH)
        second = on_plateau("ROVER_2", 1, 2, Orientation.SOUTH)
        before = dict(plateau.locations)

        with pytest.raises(LocationAlreadyBusyError):
            first.move(context)

        assert first.position == Coordinates(1, 1)
        assert second.position == Coordinates(1, 2)
        assert plateau.locations == before
        assert context.publisher.get_history() == []

    @pytest.mark.parametrize(
        "x,y,orientation",
        [
            (0, 0, Orientation.WEST),
            (0, 0, Orientation.SOUTH),
            (4, 4, Orientation.EAST),
            (4, 4, Orientation.NORTH),
        ],
    )
    def test_move_off_plateau_fails(self, context, plateau, on_plateau, x, y, orientation):
        rover = on_plateau("ROVER_1", x, y, orientation)

        with pytest.raises(OutOfBoundsError) as exc_info:
            rover.move(context)

        assert exc_info.value.code == "ERR-001"
        assert rover.position == Coordinates(x, y)
        assert plateau.is_location_busy(Coordinates(x, y))

    def test_move_number_of_times_stops_at_first_failure(self, context, plateau, on_plateau):
        rover = on_plateau("ROVER_1", 1, 1, Orientation.NORTH)
        on_plateau("ROVER_2", 1, 3, Orientation.NORTH)

        with pytest.raises(LocationAlreadyBusyError):
            rover.move_number_of_times(3, context)

        assert rover.position == Coordinates(1, 2)
        assert plateau.is_location_busy(Coordinates(1, 2))
        assert not plateau.is_location_busy(Coordinates(1, 1))
        assert len(context.publisher.get_history(RoverMoved)) == 1

    def test_move_zero_times(self, context, on_plateau):
        rover = on_plateau("ROVER_1", 1, 1, Orientation.NORTH)
        assert rover.move_number_of_times(0, context) == Coordinates(1, 1)


class TestRollback:

    def test_failing_moved_subscriber_restores_state(self, context, plateau, on_plateau):
        rover = on_plateau("ROVER_1", 2, 2, Orientation.EAST)

        def fail(event):
            raise RuntimeError("listener down")

        context.publisher.subscribe(RoverMoved, fail)

        with pytest.raises(RuntimeError):
            rover.move(context)

        assert rover.position == Coordinates(2, 2)
        assert plateau.is_location_busy(Coordinates(2, 2))
        assert not plateau.is_location_busy(Coordinates(3, 2))

    def test_failing_switch_subscriber_restores_state(self, context, plateau, on_plateau):
        rover = on_plateau("ROVER_1", 2, 2, Orientation.EAST)

        def fail(event):
            raise RuntimeError("listener down")

        context.publisher.subscribe(PlateauSwitchedLocation, fail)

        with pytest.raises(RuntimeError):
            rover.move(context)

        assert rover.position == Coordinates(2, 2)
        assert plateau.busy_locations() == [Coordinates(2, 2)]
        assert context.publisher.get_history(RoverMoved) == []

    def test_failing_turn_subscriber_restores_orientation(self, context, on_plateau):
        rover = on_plateau("ROVER_1", 2, 2, Orientation.EAST)

        def fail(event):
            raise RuntimeError("listener down")

        context.publisher.subscribe(RoverTurned, fail)

        with pytest.raises(RuntimeError):
            rover.turn_left(context)
        assert rover.orientation == Orientation.EAST


def test_clone_is_independent():
    rover = Rover(RoverIdentifier(None, "ROVER_1"), Coordinates(0, 0), Orientation.NORTH)
    copy = rover.clone()
    copy.version = 3
    assert rover.version == 0
    assert copy == Rover(RoverIdentifier(None, "ROVER_1"), Coordinates(0, 0), Orientation.NORTH, 3)
