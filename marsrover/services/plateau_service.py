"""
Plateau Service - Creates, loads and updates plateaus.

A plateau is only handed out after passing validate(). Freshly created
plateaus are stored in the repository and added to the game context.
"""

from __future__ import annotations
import logging
import uuid

from ..domain.dimensions import Dimensions, RelativisticDimensions
from ..domain.events import PlateauInitialized
from ..domain.geometry import Coordinates
from ..domain.plateau import Plateau
from .context import GameContext
from .repository import InMemoryPlateauRepository, PlateauRepository

logger = logging.getLogger(__name__)


class PlateauService:
    """
    Domain service for the Plateau entity.

    Usage:
        service = PlateauService(context=GameContext())
        plateau = service.initialize_plateau(uuid.uuid4(), 5, 5)
        service.update_plateau_with_busy_location(plateau.plateau_id, Coordinates(1, 2))
    """

    def __init__(
        self,
        context: GameContext,
        repository: PlateauRepository | None = None,
    ):
        self.context = context
        self.repository = repository if repository is not None else InMemoryPlateauRepository()

    def initialize_plateau(self, plateau_id: uuid.UUID, width: int, height: int) -> Plateau:
        """Create a rest-frame plateau of width x height, every cell free."""
        return self._initialize(Plateau(plateau_id, Dimensions(width, height)))

    def initialize_relativistic_plateau(
        self,
        plateau_id: uuid.UUID,
        speed: int,
        width: int,
        height: int,
    ) -> Plateau:
        """
        Create a plateau as observed from an observer moving at `speed`.

        Args:
            plateau_id: Plateau identity
            speed: Observer speed, same unit as MINIMAL_RELATIVISTIC_SPEED
            width: Rest-frame width
            height: Rest-frame height
        """
        dimensions = RelativisticDimensions(speed, Dimensions(width, height))
        return self._initialize(Plateau(plateau_id, dimensions))

    def _initialize(self, plateau: Plateau) -> Plateau:
        plateau.initialize_locations().validate()

        def apply(p: Plateau) -> None:
            self.repository.add(p)
            self.context.add_plateau(p)

        def rollback(p: Plateau) -> None:
            self.context.remove_plateau(p.plateau_id)
            self.repository.remove(p.plateau_id)

        plateau.apply_and_publish(
            self.context.publisher,
            apply,
            lambda p: PlateauInitialized(plateau_id=p.plateau_id, width=p.width, height=p.height),
            rollback=rollback,
        )
        logger.info("Initialized %s", plateau)
        return plateau

    def load_plateau(self, plateau_id: uuid.UUID) -> Plateau:
        """Load from the repository. Raises NotFoundError if absent."""
        return self.repository.load(plateau_id).validate()

    def is_location_busy(self, plateau_id: uuid.UUID, coordinates: Coordinates) -> bool:
        return self.load_plateau(plateau_id).is_location_busy(coordinates)

    def update_plateau_with_busy_location(self, plateau_id: uuid.UUID, coordinates: Coordinates) -> None:
        self.load_plateau(plateau_id).mark_busy(coordinates)

    def update_plateau_with_free_location(self, plateau_id: uuid.UUID, coordinates: Coordinates) -> None:
        self.load_plateau(plateau_id).mark_free(coordinates)

    def update_plateau_with_locations(
        self,
        plateau_id: uuid.UUID,
        free_location: Coordinates | None,
        busy_location: Coordinates,
    ) -> None:
        """Free one cell and occupy another as a single step."""
        self.load_plateau(plateau_id).switch_location(free_location, busy_location)
