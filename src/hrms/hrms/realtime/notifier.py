from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from ..core.enums import ChangeKind, Collection, EventName
from .registry import SubscriptionRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    """A completed, durable mutation described for subscribers."""

    name: EventName
    collection: Collection
    kind: ChangeKind
    payload: Any


class EventPublisher(Protocol):
    def publish(self, event: ChangeEvent) -> None:
        raise NotImplementedError


class ChangeNotifier(EventPublisher):
    """Best-effort fan-out of change events to every connected subscriber.

    ``emit`` has the shape of ``SocketIO.emit(event, data, to=sid)``. There is
    no acknowledgement, retry or replay: a subscriber that fails to receive an
    event, or connects after it was published, simply misses it.
    """

    def __init__(self, registry: SubscriptionRegistry, emit: Callable[..., Any]):
        self._registry = registry
        self._emit = emit

    def publish(self, event: ChangeEvent) -> None:
        subscribers = self._registry.snapshot()
        logger.debug("Publishing %s to %d subscriber(s)", event.name.value, len(subscribers))
        for sid in subscribers:
            try:
                self._emit(event.name.value, event.payload, to=sid)
            except Exception:
                logger.warning("Dropped %s for subscriber %s", event.name.value, sid, exc_info=True)
