"""
Domain Events - Immutable events and the apply-and-publish protocol.

Protocol (apply_and_publish):
1. Run the mutating `apply` against the entity
2. If it fails, hand the error to `on_error` and publish nothing
3. If it succeeds, build the event and publish it synchronously
4. If a subscriber fails, run `rollback` (when given) and re-raise

Subscribers are routed by exact event type and called in the order
they subscribed. Publication blocks until every subscriber returns or
one of them raises; there is no best-effort delivery.
"""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol, TypeVar, runtime_checkable

from .geometry import Coordinates, Orientation

logger = logging.getLogger(__name__)

E = TypeVar("E")

EventHandler = Callable[["DomainEvent"], None]


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DomainEvent:
    """Immutable base for every domain event."""
    event_id: str = field(default_factory=_new_id)
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class PlateauInitialized(DomainEvent):
    plateau_id: uuid.UUID | None = None
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class PlateauSwitchedLocation(DomainEvent):
    """A cell became busy, optionally freeing the previous one."""
    plateau_id: uuid.UUID | None = None
    previous_position: Coordinates | None = None  # None on first placement
    current_position: Coordinates | None = None


@dataclass(frozen=True)
class RoverInitialized(DomainEvent):
    rover_id: Any = None  # RoverIdentifier
    position: Coordinates | None = None
    orientation: Orientation | None = None


@dataclass(frozen=True)
class RoverTurned(DomainEvent):
    rover_id: Any = None
    previous_orientation: Orientation | None = None
    orientation: Orientation | None = None


@dataclass(frozen=True)
class RoverMoved(DomainEvent):
    rover_id: Any = None
    previous_position: Coordinates | None = None
    position: Coordinates | None = None


@dataclass(frozen=True)
class RoverRemoved(DomainEvent):
    rover_id: Any = None
    position: Coordinates | None = None


# ---------------------------------------------------------------------------
# Subscribers
# ---------------------------------------------------------------------------

@runtime_checkable
class DomainEventSubscriber(Protocol):
    """Object-style subscriber: declares its own event type."""

    def handle_event(self, event: Any) -> None: ...

    def subscribed_to_event_type(self) -> type: ...


class DomainEventPublisher:
    """
    Synchronous, type-routed publisher.

    Usage:
        publisher = DomainEventPublisher()
        publisher.subscribe(RoverMoved, lambda event: print(event.position))
        publisher.publish(RoverMoved(...))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[EventHandler]] = defaultdict(list)
        self._history: list[DomainEvent] = []

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """Register `handler` for events of exactly `event_type`."""
        self._handlers[event_type].append(handler)

    def register(self, subscriber: DomainEventSubscriber) -> None:
        """Register an object-style subscriber."""
        self.subscribe(subscriber.subscribed_to_event_type(), subscriber.handle_event)

    def unsubscribe(self, event_type: type, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: DomainEvent) -> None:
        """Deliver `event` to every subscriber of its type, in order."""
        event_cls = type(event)
        for handler in list(self._handlers.get(event_cls, [])):
            try:
                handler(event)
            except Exception:
                logger.exception("Subscriber failed on %s", event_cls.__name__)
                raise
        self._history.append(event)

    def get_history(self, event_type: type | None = None) -> list[DomainEvent]:
        """Published events, optionally filtered by type. For testing."""
        if event_type is None:
            return list(self._history)
        return [e for e in self._history if type(e) is event_type]

    def reset(self) -> None:
        """Drop all subscribers and history."""
        self._handlers.clear()
        self._history.clear()


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

def reraise(entity: Any, error: Exception) -> None:
    """Default error path: log and let the failure reach the caller."""
    logger.warning("Mutation of %s failed: %s", entity, error)
    raise error


def apply_and_publish(
    entity: E,
    apply: Callable[[E], Any],
    make_event: Callable[[E], DomainEvent],
    publisher: DomainEventPublisher,
    on_error: Callable[[E, Exception], Any] = reraise,
    rollback: Callable[[E], Any] | None = None,
) -> DomainEvent | None:
    """
    Mutate `entity` and publish the resulting event only on success.

    Returns the published event, or None when `on_error` handled the
    failure without raising.
    """
    try:
        apply(entity)
    except Exception as e:
        on_error(entity, e)
        return None

    event = make_event(entity)
    try:
        publisher.publish(event)
    except Exception:
        if rollback is not None:
            logger.warning("Rolling back %s after failed publication", type(event).__name__)
            rollback(entity)
        raise
    logger.debug("Published %s", type(event).__name__)
    return event


class EventPublishingEntity:
    """Mixin giving an entity the apply-and-publish protocol."""

    def apply_and_publish(
        self,
        publisher: DomainEventPublisher,
        apply: Callable[[Any], Any],
        make_event: Callable[[Any], DomainEvent],
        on_error: Callable[[Any, Exception], Any] = reraise,
        rollback: Callable[[Any], Any] | None = None,
    ) -> DomainEvent | None:
        return apply_and_publish(
            self, apply, make_event, publisher, on_error=on_error, rollback=rollback,
        )
