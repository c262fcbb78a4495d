"""
Game Context - The loaded-plateau cache and event publisher for a game.

LIFECYCLE:
1. Created once per game (or per test) and handed to the services
2. Services add a freshly loaded plateau before any spatial operation
3. Rovers look their plateau up here by id, never by holding it
4. reset() drops every cached plateau, subscriber and published event

The context is an explicit object. Nothing looks it up globally.
"""

from __future__ import annotations
import logging
import uuid

from ..domain.dimensions import MINIMAL_RELATIVISTIC_SPEED
from ..domain.errors import NotFoundError
from ..domain.events import DomainEventPublisher
from ..domain.plateau import Plateau

logger = logging.getLogger(__name__)

ROVER_NAME_PREFIX = "ROVER_"


class GameContext:
    """
    Process-scoped cache of loaded plateaus.

    Usage:
        context = GameContext()
        context.add_plateau(plateau)
        context.get_plateau(plateau.plateau_id)
    """

    MINIMAL_RELATIVISTIC_SPEED = MINIMAL_RELATIVISTIC_SPEED
    ROVER_NAME_PREFIX = ROVER_NAME_PREFIX

    def __init__(self, publisher: DomainEventPublisher | None = None):
        self.publisher = publisher or DomainEventPublisher()
        self._plateaus: dict[uuid.UUID, Plateau] = {}
        self._last_plateau_id: uuid.UUID | None = None

    def add_plateau(self, plateau: Plateau) -> None:
        self._plateaus[plateau.plateau_id] = plateau
        self._last_plateau_id = plateau.plateau_id

    def get_plateau(self, plateau_id: uuid.UUID | None = None) -> Plateau:
        """
        Get a loaded plateau by id.

        Without an id, returns the plateau added most recently.
        """
        if plateau_id is None:
            plateau_id = self._last_plateau_id
        plateau = self._plateaus.get(plateau_id) if plateau_id is not None else None
        if plateau is None:
            raise NotFoundError(
                f"Plateau {plateau_id} is not loaded",
                details={"plateau_id": str(plateau_id)},
            )
        return plateau

    def remove_plateau(self, plateau_id: uuid.UUID) -> None:
        """Drop a plateau from the cache. The default falls back to the previous one."""
        self._plateaus.pop(plateau_id, None)
        if self._last_plateau_id == plateau_id:
            self._last_plateau_id = next(reversed(self._plateaus), None)

    def has_plateau(self, plateau_id: uuid.UUID) -> bool:
        return plateau_id in self._plateaus

    def list_plateaus(self) -> list[uuid.UUID]:
        return list(self._plateaus)

    def reset(self) -> None:
        """Forget every loaded plateau, subscriber and published event."""
        logger.debug("Resetting game context (%d plateaus)", len(self._plateaus))
        self._plateaus.clear()
        self._last_plateau_id = None
        self.publisher.reset()
