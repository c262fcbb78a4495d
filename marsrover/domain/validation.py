"""
Plateau Validation - Structural checks before a plateau is handed out.

Validates that:
1. Dimensions are present
2. Observed width and height are at least 1
3. The occupancy map covers exactly the legal coordinates
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import PlateauValidationError

if TYPE_CHECKING:
    from .plateau import Plateau


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_plateau(plateau: Plateau, raise_on_error: bool = False) -> ValidationResult:
    """
    Validate a plateau.

    Returns ValidationResult with errors and warnings.
    Raises PlateauValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if plateau.plateau_id is None:
        errors.append("plateau_id is required")

    if plateau.dimensions is None:
        errors.append("dimensions are required")
    else:
        if plateau.width < 1:
            errors.append(f"width must be >= 1, got {plateau.width}")
        if plateau.height < 1:
            errors.append(f"height must be >= 1, got {plateau.height}")

        if not errors:
            expected = plateau.width * plateau.height
            if not plateau.locations:
                warnings.append("locations not initialized")
            elif len(plateau.locations) != expected:
                errors.append(
                    f"locations cover {len(plateau.locations)} cells, expected {expected}"
                )

    result = ValidationResult(valid=not errors, errors=errors, warnings=warnings)
    if errors and raise_on_error:
        raise PlateauValidationError(errors)
    return result
