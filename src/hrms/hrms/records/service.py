from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..common.datetime_utils import now_iso
from ..common.identity import new_identity
from ..common.validators import require_mapping, require_non_empty, require_one_of
from ..core.constants import ATTENDANCE_KEY_FIELDS, IDENTITY_FIELD
from ..core.enums import ChangeKind, Collection, EventName, LeaveStatus
from ..core.exceptions import ConflictError, DuplicateUserError, NotFoundError, StorageError
from ..realtime.notifier import ChangeEvent, EventPublisher
from ..storage.document import Document, Record
from ..storage.repository import DocumentStore

logger = logging.getLogger(__name__)

# Fields an incoming payload may not overwrite on an existing record.
PROTECTED_FIELDS: Dict[Collection, frozenset] = {
    Collection.USERS: frozenset({IDENTITY_FIELD, "role", "password"}),
    Collection.EMPLOYEES: frozenset({IDENTITY_FIELD}),
    Collection.ATTENDANCE: frozenset({IDENTITY_FIELD, *ATTENDANCE_KEY_FIELDS}),
    Collection.LEAVES: frozenset({IDENTITY_FIELD, "status"}),
    Collection.NOTIFICATIONS: frozenset({IDENTITY_FIELD}),
}

Mutation = Callable[[Document], Tuple[Any, Optional[ChangeEvent]]]


class RecordService:
    """Use case: every mutation of the shared document.

    Mutations run one at a time under a single lock. Each one is applied to a
    staged copy of the document, the copy is persisted, and only then does it
    replace the live document and get announced to subscribers. Reads use the
    live document without locking; it is never modified in place.
    """

    def __init__(
        self,
        store: DocumentStore,
        publisher: EventPublisher,
        *,
        id_factory: Callable[[], str] = new_identity,
        document: Optional[Document] = None,
    ):
        self._store = store
        self._publisher = publisher
        self._new_id = id_factory
        self._lock = threading.Lock()
        self._document = document if document is not None else store.load()

    # Reads

    def list_records(self, collection: Collection) -> List[Record]:
        return [dict(r) for r in self._document.records(collection)]

    def get_record(self, collection: Collection, id_value: str) -> Optional[Record]:
        record = self._document.find_by_identity(collection, id_value)
        return dict(record) if record is not None else None

    def find_record(self, collection: Collection, field: str, value: Any) -> Optional[Record]:
        record = self._document.find_by_field(collection, field, value)
        return dict(record) if record is not None else None

    def snapshot(self) -> Document:
        return self._document.copy()

    # Mutations

    def save_employee(self, record: Mapping[str, Any]) -> str:
        return self._save(Collection.EMPLOYEES, record, created=EventName.EMPLOYEE_UPDATE, updated=EventName.EMPLOYEE_UPDATE)

    def delete_employee(self, id_value: str) -> None:
        id_value = require_non_empty(id_value, "id")

        def mutate(doc: Document):
            if not doc.remove_by_identity(Collection.EMPLOYEES, id_value):
                return None, None
            return None, ChangeEvent(EventName.EMPLOYEE_DELETE, Collection.EMPLOYEES, ChangeKind.DELETED, id_value)

        self._commit(mutate)

    def save_attendance(self, record: Mapping[str, Any]) -> str:
        record = require_mapping(record)
        for field in ATTENDANCE_KEY_FIELDS:
            record[field] = require_non_empty(record.get(field), field)
        return self._save(
            Collection.ATTENDANCE, record, created=EventName.ATTENDANCE_UPDATE, updated=EventName.ATTENDANCE_UPDATE
        )

    def create_leave(self, record: Mapping[str, Any]) -> str:
        record = require_mapping(record)
        return self._save(
            Collection.LEAVES,
            record,
            created=EventName.LEAVE_CREATED,
            updated=EventName.LEAVE_UPDATE,
            defaults={"status": LeaveStatus.PENDING.value},
        )

    def update_leave_status(self, id_value: str, status: Any) -> None:
        id_value = require_non_empty(id_value, "id")
        status = require_one_of(status, "status", LeaveStatus)

        def mutate(doc: Document):
            leave = doc.find_by_identity(Collection.LEAVES, id_value)
            if leave is None:
                raise NotFoundError("Not found")
            leave["status"] = status
            payload = {IDENTITY_FIELD: id_value, "status": status}
            return None, ChangeEvent(EventName.LEAVE_UPDATE, Collection.LEAVES, ChangeKind.UPDATED, payload)

        self._commit(mutate)

    def create_notification(self, record: Mapping[str, Any]) -> str:
        record = require_mapping(record)
        return self._save(
            Collection.NOTIFICATIONS,
            record,
            created=EventName.NOTIFICATION,
            updated=EventName.NOTIFICATION,
            defaults={"createdAt": now_iso()},
        )

    def create_user(self, record: Mapping[str, Any], *, unique_field: str = "username") -> str:
        """Append a user unless another one already has the same ``unique_field``."""
        record = self._with_identity(require_mapping(record))
        unique_value = require_non_empty(record.get(unique_field), unique_field)

        def mutate(doc: Document):
            if doc.find_by_field(Collection.USERS, unique_field, unique_value) is not None:
                raise DuplicateUserError("Already exists")
            if doc.find_by_identity(Collection.USERS, record[IDENTITY_FIELD]) is not None:
                raise ConflictError("Identity already in use")
            doc.upsert(Collection.USERS, record)
            return record[IDENTITY_FIELD], None

        return self._commit(mutate)

    # Internals

    def _with_identity(self, record: dict) -> dict:
        id_value = record.get(IDENTITY_FIELD)
        if id_value is None or (isinstance(id_value, str) and not id_value.strip()):
            record[IDENTITY_FIELD] = self._new_id()
        else:
            record[IDENTITY_FIELD] = str(id_value).strip()
        return record

    def _save(
        self,
        collection: Collection,
        record: Mapping[str, Any],
        *,
        created: EventName,
        updated: EventName,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> str:
        record = self._with_identity(require_mapping(record))

        def mutate(doc: Document):
            incoming = dict(record)
            if doc.locate(collection, incoming) is None:
                # A new record must not reuse an identity held by another record.
                if doc.find_by_identity(collection, incoming[IDENTITY_FIELD]) is not None:
                    raise ConflictError("Identity already in use")
                for field, value in (defaults or {}).items():
                    incoming.setdefault(field, value)

            kind, stored = doc.upsert(collection, incoming, protected=PROTECTED_FIELDS[collection])
            name = created if kind == ChangeKind.CREATED else updated
            return stored[IDENTITY_FIELD], ChangeEvent(name, collection, kind, dict(stored))

        return self._commit(mutate)

    def _commit(self, mutate: Mutation) -> Any:
        with self._lock:
            staged = self._document.copy()
            result, event = mutate(staged)
            if event is None and result is None:
                return None

            try:
                self._store.persist(staged)
            except StorageError:
                logger.exception("Persist failed; mutation discarded")
                raise
            self._document = staged
            logger.debug("Committed %s", event.name.value if event else "change")

            if event is not None:
                self._publish(event)
        return result

    def _publish(self, event: ChangeEvent) -> None:
        try:
            self._publisher.publish(event)
        except Exception:
            logger.exception("Publishing %s failed after commit", event.name.value)
