"""
Plateau - The bounded grid rovers move on.

The plateau owns its occupancy map: one busy/free flag per legal
coordinate, fully populated at creation. Every lookup outside
[0, width) x [0, height) fails with UnknownLocationError.
"""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field

from .dimensions import Dimensions, RelativisticDimensions
from .errors import LocationAlreadyBusyError, UnknownLocationError
from .events import EventPublishingEntity
from .geometry import Coordinates
from .validation import validate_plateau


@dataclass(eq=False)
class Plateau(EventPublishingEntity):
    """
    A plateau identified by UUID.

    Dimensions may be relativistic; width/height are then the observed
    values and the occupancy map is built on those.
    """
    plateau_id: uuid.UUID
    dimensions: Dimensions | RelativisticDimensions | None
    locations: dict[Coordinates, bool] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return self.dimensions.width

    @property
    def height(self) -> int:
        return self.dimensions.height

    def contains(self, coordinates: Coordinates) -> bool:
        """Check if a coordinate is inside the plateau bounds."""
        return self.dimensions.contains(coordinates.abscissa, coordinates.ordinate)

    def initialize_locations(self) -> Plateau:
        """(Re)populate every legal coordinate as free."""
        self.locations = {
            Coordinates(x, y): False
            for x in range(self.width)
            for y in range(self.height)
        }
        return self

    def is_location_busy(self, coordinates: Coordinates) -> bool:
        return self._lookup(coordinates)

    def mark_busy(self, coordinates: Coordinates) -> None:
        self._lookup(coordinates)
        self.locations[coordinates] = True

    def mark_free(self, coordinates: Coordinates) -> None:
        self._lookup(coordinates)
        self.locations[coordinates] = False

    def switch_location(self, previous: Coordinates | None, current: Coordinates) -> None:
        """
        Free `previous` (if any) and occupy `current` as one unit.

        Both cells are checked before either is touched, so a failure
        leaves the map as it was.
        """
        if previous is not None:
            self._lookup(previous)
        if self._lookup(current):
            raise LocationAlreadyBusyError(
                f"Location {current} on plateau {self.plateau_id} is already busy",
                details={"abscissa": current.abscissa, "ordinate": current.ordinate},
            )
        if previous is not None:
            self.locations[previous] = False
        self.locations[current] = True

    def busy_locations(self) -> list[Coordinates]:
        return sorted(
            (c for c, busy in self.locations.items() if busy),
            key=lambda c: (c.abscissa, c.ordinate),
        )

    def validate(self) -> Plateau:
        """Return self if structurally sound, else raise PlateauValidationError."""
        validate_plateau(self, raise_on_error=True)
        return self

    def _lookup(self, coordinates: Coordinates) -> bool:
        try:
            return self.locations[coordinates]
        except KeyError:
            raise UnknownLocationError(
                f"Location {coordinates} is outside plateau {self.plateau_id}",
                details={"abscissa": coordinates.abscissa, "ordinate": coordinates.ordinate},
            ) from None

    def __str__(self) -> str:
        if self.dimensions is None:
            return f"Plateau({self.plateau_id})"
        return f"Plateau({self.plateau_id}, {self.width}x{self.height})"
