"""Example: drive the service layer directly (no Flask, no sockets).

Controllers are a thin layer; the rules live in the services.
"""

import tempfile
from pathlib import Path

from src.hrms.hrms.container import build_container
from src.hrms.hrms.core.enums import Collection
from src.hrms.hrms.storage.json_store import JSONFileStore


class PrintPublisher:
    def publish(self, event):
        print(f"event {event.name.value}: {event.payload}")


def main():
    with tempfile.TemporaryDirectory() as tmp:
        store = JSONFileStore(Path(tmp) / "data.json")
        container = build_container(store=store, publisher=PrintPublisher())
        records = container.record_service

        emp_id = records.save_employee({"name": "A"})
        records.save_employee({"id": emp_id, "name": "B"})
        leave_id = records.create_leave({"employeeId": emp_id, "date": "2024-01-01"})
        records.update_leave_status(leave_id, "approved")

        print(records.list_records(Collection.EMPLOYEES))
        print(records.list_records(Collection.LEAVES))
        store.close()


if __name__ == "__main__":
    main()
