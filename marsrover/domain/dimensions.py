"""
Dimension Model - Rest-frame and relativistic plateau sizes.

A RelativisticDimensions wraps rest-frame Dimensions and reports the size
seen by an observer moving at `speed`. Both axes are contracted by the
Lorentz factor:

    gamma(speed) = 1 / sqrt(1 - (speed / LIGHT_SPEED) ** 2)
    observed     = max(1, round_half_up(rest / gamma))

Below MINIMAL_RELATIVISTIC_SPEED no contraction is applied at all, so the
observed size is exactly the rest size. At or above LIGHT_SPEED the
contraction is total and the observed size is the floor value 1.

Contraction table for a rest size of 5:

    speed (x threshold)   speed / c   gamma    observed
    < 1                   < 0.4       1        5
    1                     0.4         1.091    5
    1.5                   0.6         1.25     4
    2                     0.8         1.667    3
    2.25                  0.9         2.294    2
    >= 2.5                >= 1.0      inf      1
"""

from __future__ import annotations
import math
from dataclasses import dataclass

from .errors import InvalidDimensionsError

LIGHT_SPEED = 300_000
MINIMAL_RELATIVISTIC_SPEED = 120_000  # 0.4 c


def contraction_factor(speed: int) -> float:
    """Lorentz factor for an observer speed. 1.0 below the threshold."""
    if speed < MINIMAL_RELATIVISTIC_SPEED:
        return 1.0
    if speed >= LIGHT_SPEED:
        return math.inf
    beta = speed / LIGHT_SPEED
    return 1.0 / math.sqrt(1.0 - beta * beta)


def _contract(length: int, gamma: float) -> int:
    if gamma == 1.0:
        return length
    return max(1, math.floor(length / gamma + 0.5))


@dataclass(frozen=True)
class Dimensions:
    """Width and height of a plateau in its rest frame."""
    width: int
    height: int

    def __post_init__(self):
        for name, value in (("width", self.width), ("height", self.height)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidDimensionsError(
                    f"Plateau {name} must be a positive integer, got {value!r}",
                    details={name: value},
                )

    def contains(self, abscissa: int, ordinate: int) -> bool:
        return 0 <= abscissa < self.width and 0 <= ordinate < self.height


@dataclass(frozen=True)
class RelativisticDimensions:
    """
    Dimensions as observed at a given speed.

    width/height are always the observed values. The rest-frame
    size is only reachable through rest_dimensions.
    """
    speed: int
    rest_dimensions: Dimensions

    @property
    def gamma(self) -> float:
        return contraction_factor(self.speed)

    @property
    def width(self) -> int:
        return _contract(self.rest_dimensions.width, self.gamma)

    @property
    def height(self) -> int:
        return _contract(self.rest_dimensions.height, self.gamma)

    def contains(self, abscissa: int, ordinate: int) -> bool:
        return 0 <= abscissa < self.width and 0 <= ordinate < self.height
