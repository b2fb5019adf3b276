from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .realtime.notifier import ChangeNotifier, EventPublisher
from .realtime.registry import SubscriptionRegistry
from .records.service import RecordService
from .storage.repository import DocumentStore
from .users.credentials import CredentialService, WerkzeugCredentialService
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    store: DocumentStore
    registry: SubscriptionRegistry
    publisher: EventPublisher

    record_service: RecordService
    auth_service: AuthService


def build_container(
    *,
    store: DocumentStore,
    emit: Optional[Callable[..., Any]] = None,
    publisher: Optional[EventPublisher] = None,
    credentials: Optional[CredentialService] = None,
) -> Container:
    """Wire the services around one store.

    ``emit`` is the transport send function (``SocketIO.emit``); pass
    ``publisher`` instead to replace the fan-out entirely.
    """

    registry = SubscriptionRegistry()
    if publisher is None:
        if emit is None:
            raise ValueError("build_container needs either emit or publisher")
        publisher = ChangeNotifier(registry, emit)

    record_service = RecordService(store, publisher)
    auth_service = AuthService(record_service, credentials or WerkzeugCredentialService())

    return Container(
        store=store,
        registry=registry,
        publisher=publisher,
        record_service=record_service,
        auth_service=auth_service,
    )
