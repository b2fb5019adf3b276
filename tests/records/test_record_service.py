from __future__ import annotations

import threading
import time

import pytest

from src.hrms.hrms.core.enums import ChangeKind, Collection
from src.hrms.hrms.core.exceptions import ConflictError, DuplicateUserError, NotFoundError, StorageError, ValidationError
from src.hrms.hrms.records.service import RecordService
from src.hrms.hrms.storage.document import Document
from src.hrms.hrms.storage.json_store import JSONFileStore
from tests.fakes import InMemoryStore, RecordingPublisher


def test_employee_without_id_gets_generated_id_and_resubmit_updates(records, publisher):
    emp_id = records.save_employee({"name": "A"})
    assert emp_id

    same_id = records.save_employee({"id": emp_id, "name": "B"})

    assert same_id == emp_id
    assert records.list_records(Collection.EMPLOYEES) == [{"id": emp_id, "name": "B"}]
    assert publisher.names == ["employee_update", "employee_update"]
    assert [e.kind for e in publisher.events] == [ChangeKind.CREATED, ChangeKind.UPDATED]


def test_generated_ids_come_from_id_factory(store, publisher):
    ids = iter(["id-1", "id-2"])
    svc = RecordService(store, publisher, id_factory=lambda: next(ids))

    assert svc.save_employee({"name": "A"}) == "id-1"
    assert svc.save_employee({"name": "B"}) == "id-2"


def test_resubmit_keeps_fields_absent_from_second_payload(records):
    emp_id = records.save_employee({"name": "A", "dept": "IT"})
    records.save_employee({"id": emp_id, "name": "B"})

    assert records.get_record(Collection.EMPLOYEES, emp_id) == {"id": emp_id, "name": "B", "dept": "IT"}


def test_attendance_collapses_on_employee_and_date(records, publisher):
    first = records.save_attendance({"id": "a1", "employeeId": "E1", "date": "2024-01-01", "in": "08:00"})
    second = records.save_attendance({"id": "a2", "employeeId": "E1", "date": "2024-01-01", "out": "17:00"})

    assert first == second == "a1"
    assert records.list_records(Collection.ATTENDANCE) == [
        {"id": "a1", "employeeId": "E1", "date": "2024-01-01", "in": "08:00", "out": "17:00"}
    ]
    assert publisher.names == ["attendance_update", "attendance_update"]


def test_attendance_requires_employee_and_date(records, store):
    calls = store.persist_calls
    with pytest.raises(ValidationError):
        records.save_attendance({"employeeId": "E1"})
    assert store.persist_calls == calls


def test_attendance_identity_cannot_be_reused_for_another_day(records):
    records.save_attendance({"id": "a1", "employeeId": "E1", "date": "2024-01-01"})

    with pytest.raises(ConflictError):
        records.save_attendance({"id": "a1", "employeeId": "E1", "date": "2024-01-02"})
    assert len(records.list_records(Collection.ATTENDANCE)) == 1


def test_delete_missing_employee_is_a_noop(records, store, publisher):
    records.save_employee({"id": "e1", "name": "A"})
    calls = store.persist_calls

    records.delete_employee("does-not-exist")

    assert records.list_records(Collection.EMPLOYEES) == [{"id": "e1", "name": "A"}]
    assert store.persist_calls == calls
    assert publisher.names == ["employee_update"]


def test_delete_employee_publishes_identity(records, publisher):
    records.save_employee({"id": "e1", "name": "A"})

    records.delete_employee("e1")

    assert records.list_records(Collection.EMPLOYEES) == []
    assert publisher.events[-1].name.value == "employee_delete"
    assert publisher.events[-1].payload == "e1"


def test_leave_lifecycle(records, publisher):
    leave_id = records.create_leave({"employeeId": "E1", "date": "2024-01-01"})

    created = publisher.events[-1]
    assert created.name.value == "leave_created"
    assert created.payload == {"id": leave_id, "employeeId": "E1", "date": "2024-01-01", "status": "pending"}

    records.update_leave_status(leave_id, "approved")

    assert publisher.events[-1].name.value == "leave_update"
    assert publisher.events[-1].payload == {"id": leave_id, "status": "approved"}
    assert records.get_record(Collection.LEAVES, leave_id)["status"] == "approved"


def test_leave_resubmit_cannot_change_status(records):
    leave_id = records.create_leave({"employeeId": "E1", "status": "pending"})

    records.create_leave({"id": leave_id, "status": "approved", "reason": "trip"})

    leave = records.get_record(Collection.LEAVES, leave_id)
    assert leave["status"] == "pending"
    assert leave["reason"] == "trip"


def test_status_update_on_missing_leave_raises_not_found(records, store, publisher):
    calls = store.persist_calls
    with pytest.raises(NotFoundError):
        records.update_leave_status("nope", "approved")
    assert store.persist_calls == calls
    assert publisher.events == []


def test_status_update_rejects_unknown_status(records):
    leave_id = records.create_leave({"employeeId": "E1"})
    with pytest.raises(ValidationError):
        records.update_leave_status(leave_id, "maybe")


def test_notification_gets_timestamp(records, publisher):
    note_id = records.create_notification({"message": "hello"})

    note = records.get_record(Collection.NOTIFICATIONS, note_id)
    assert note["message"] == "hello"
    assert note["createdAt"]
    assert publisher.names == ["notification"]


def test_non_object_record_is_rejected(records):
    with pytest.raises(ValidationError):
        records.save_employee(["not", "a", "record"])
    with pytest.raises(ValidationError):
        records.create_leave(None)


def test_failed_persist_keeps_previous_state_and_publishes_nothing(records, store, publisher):
    emp_id = records.save_employee({"name": "A"})
    store.fail = True

    with pytest.raises(StorageError):
        records.save_employee({"id": emp_id, "name": "B"})
    with pytest.raises(StorageError):
        records.create_leave({"employeeId": "E1"})

    assert records.list_records(Collection.EMPLOYEES) == [{"id": emp_id, "name": "A"}]
    assert records.list_records(Collection.LEAVES) == []
    assert publisher.names == ["employee_update"]

    store.fail = False
    records.save_employee({"id": emp_id, "name": "C"})
    assert records.get_record(Collection.EMPLOYEES, emp_id)["name"] == "C"


def test_persisted_snapshot_matches_memory_after_mutations(records, store):
    emp_id = records.save_employee({"name": "A"})
    records.save_attendance({"employeeId": emp_id, "date": "2024-01-01"})
    leave_id = records.create_leave({"employeeId": emp_id})
    records.update_leave_status(leave_id, "rejected")
    records.create_notification({"message": "x"})
    records.delete_employee(emp_id)

    assert Document.from_dict(store.saved) == records.snapshot()


def test_service_starts_from_persisted_document():
    store = InMemoryStore({"employees": [{"id": "e1", "name": "A"}]})
    svc = RecordService(store, RecordingPublisher())

    assert svc.list_records(Collection.EMPLOYEES) == [{"id": "e1", "name": "A"}]
    assert svc.list_records(Collection.LEAVES) == []


def test_read_results_do_not_alias_live_document(records):
    emp_id = records.save_employee({"name": "A"})

    listed = records.list_records(Collection.EMPLOYEES)
    listed[0]["name"] = "mutated"

    assert records.get_record(Collection.EMPLOYEES, emp_id)["name"] == "A"


def test_concurrent_mutations_are_all_applied(records, store, publisher):
    def worker(n):
        records.save_employee({"name": f"emp-{n}"})

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(25)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    names = sorted(r["name"] for r in records.list_records(Collection.EMPLOYEES))
    assert names == sorted(f"emp-{n}" for n in range(25))
    assert len(store.saved["employees"]) == 25
    assert len(publisher.events) == 25


def test_create_user_rejects_duplicate_username(records):
    records.create_user({"username": "root", "role": "superadmin"})

    with pytest.raises(DuplicateUserError):
        records.create_user({"username": "root", "role": "superadmin"})
    assert len(records.list_records(Collection.USERS)) == 1


def test_leave_update_payloads(records, publisher):
    leave_id = records.create_leave({"employeeId": "E1", "date": "2024-01-01"})

    records.create_leave({"id": leave_id, "reason": "trip"})
    resubmitted = publisher.events[-1]
    records.update_leave_status(leave_id, "approved")
    status_only = publisher.events[-1]

    assert resubmitted.name.value == status_only.name.value == "leave_update"
    assert resubmitted.payload == {
        "id": leave_id,
        "employeeId": "E1",
        "date": "2024-01-01",
        "status": "pending",
        "reason": "trip",
    }
    assert status_only.payload == {"id": leave_id, "status": "approved"}


class StallingFileStore(JSONFileStore):
    delay = 0.0

    def _write(self, text, ticket):
        time.sleep(self.delay)
        super()._write(text, ticket)


def test_timed_out_persist_never_reaches_disk(tmp_path, publisher):
    path = tmp_path / "data.json"
    store = StallingFileStore(path, timeout=0.1)
    try:
        svc = RecordService(store, publisher)
        svc.save_employee({"id": "e1", "name": "A"})

        store.delay = 0.4
        with pytest.raises(StorageError):
            svc.save_employee({"id": "e1", "name": "B"})
    finally:
        store.close()

    reloaded = JSONFileStore(path)
    try:
        on_disk = reloaded.load()
    finally:
        reloaded.close()
    assert svc.get_record(Collection.EMPLOYEES, "e1")["name"] == "A"
    assert on_disk == svc.snapshot()
