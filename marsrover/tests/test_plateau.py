"""
Tests for the Plateau entity.

Tests:
- Occupancy map initialization
- Busy / free lookups and bounds
- Atomic location switching
- Structural validation
"""

import uuid

import pytest
from hypothesis import given, strategies as st

from ..domain.dimensions import MINIMAL_RELATIVISTIC_SPEED, Dimensions, RelativisticDimensions
from ..domain.errors import LocationAlreadyBusyError, PlateauValidationError, UnknownLocationError
from ..domain.geometry import Coordinates
from ..domain.plateau import Plateau
from ..domain.validation import validate_plateau


class TestInitializeLocations:

    @pytest.mark.parametrize("width,height", [(1, 1), (1, 7), (5, 5), (3, 8)])
    def test_all_cells_free(self, width, height):
        plateau = Plateau(uuid.uuid4(), Dimensions(width, height)).initialize_locations()
        assert len(plateau.locations) == width * height
        assert not any(plateau.locations.values())

    def test_reinitialize_resets(self, plateau):
        plateau.mark_busy(Coordinates(1, 1))
        plateau.initialize_locations()
        assert not plateau.is_location_busy(Coordinates(1, 1))
        assert len(plateau.locations) == 25

    def test_relativistic_map_uses_observed_size(self):
        plateau = Plateau(
            uuid.uuid4(),
            RelativisticDimensions(2 * MINIMAL_RELATIVISTIC_SPEED, Dimensions(5, 5)),
        ).initialize_locations()
        assert plateau.width == 3
        assert len(plateau.locations) == 9


class TestLocations:

    def test_mark_busy_and_free(self, plateau):
        c = Coordinates(2, 3)
        plateau.mark_busy(c)
        assert plateau.is_location_busy(c)
        plateau.mark_free(c)
        assert not plateau.is_location_busy(c)

    @pytest.mark.parametrize("coords", [Coordinates(5, 0), Coordinates(0, 5), Coordinates(-1, 2)])
    def test_out_of_range_lookup_fails(self, plateau, coords):
        with pytest.raises(UnknownLocationError):
            plateau.is_location_busy(coords)
        with pytest.raises(UnknownLocationError):
            plateau.mark_busy(coords)
        with pytest.raises(UnknownLocationError):
            plateau.mark_free(coords)

    def test_busy_locations_sorted(self, plateau):
        plateau.mark_busy(Coordinates(3, 1))
        plateau.mark_busy(Coordinates(0, 4))
        assert plateau.busy_locations() == [Coordinates(0, 4), Coordinates(3, 1)]


class TestSwitchLocation:

    def test_switch(self, plateau):
        plateau.mark_busy(Coordinates(1, 1))
        plateau.switch_location(Coordinates(1, 1), Coordinates(1, 2))
        assert not plateau.is_location_busy(Coordinates(1, 1))
        assert plateau.is_location_busy(Coordinates(1, 2))

    def test_first_placement(self, plateau):
        plateau.switch_location(None, Coordinates(0, 0))
        assert plateau.busy_locations() == [Coordinates(0, 0)]

    def test_busy_target_leaves_map_untouched(self, plateau):
        plateau.mark_busy(Coordinates(1, 1))
        plateau.mark_busy(Coordinates(1, 2))
        with pytest.raises(LocationAlreadyBusyError):
            plateau.switch_location(Coordinates(1, 1), Coordinates(1, 2))
        assert plateau.is_location_busy(Coordinates(1, 1))
        assert plateau.is_location_busy(Coordinates(1, 2))

    def test_out_of_range_target_leaves_map_untouched(self, plateau):
        plateau.mark_busy(Coordinates(4, 4))
        with pytest.raises(UnknownLocationError):
            plateau.switch_location(Coordinates(4, 4), Coordinates(5, 4))
        assert plateau.is_location_busy(Coordinates(4, 4))


class TestValidation:

    def test_valid_plateau(self, plateau):
        assert plateau.validate() is plateau
        assert validate_plateau(plateau).valid

    def test_missing_dimensions(self):
        plateau = Plateau(uuid.uuid4(), None)
        result = validate_plateau(plateau)
        assert not result.valid
        assert "dimensions are required" in result.errors
        with pytest.raises(PlateauValidationError) as exc_info:
            plateau.validate()
        assert exc_info.value.code == "ERR-000"

    def test_uninitialized_locations_warn(self):
        plateau = Plateau(uuid.uuid4(), Dimensions(2, 2))
        result = validate_plateau(plateau)
        assert result.valid
        assert result.warnings == ["locations not initialized"]

    def test_partial_map_is_invalid(self, plateau):
        del plateau.locations[Coordinates(0, 0)]
        assert not validate_plateau(plateau).valid


class TestLocationMapProperties:

    @given(
        width=st.integers(min_value=1, max_value=30),
        height=st.integers(min_value=1, max_value=30),
        speed=st.integers(min_value=0, max_value=2 * MINIMAL_RELATIVISTIC_SPEED),
    )
    def test_map_covers_exactly_the_observed_grid(self, width, height, speed):
        plateau = Plateau(
            uuid.uuid4(), RelativisticDimensions(speed, Dimensions(width, height)),
        ).initialize_locations()

        assert len(plateau.locations) == plateau.width * plateau.height
        assert all(plateau.contains(c) for c in plateau.locations)
        assert validate_plateau(plateau).valid
