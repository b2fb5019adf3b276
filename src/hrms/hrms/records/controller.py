from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import json_endpoint
from ..container import Container
from ..core.enums import Collection


def register(app: Flask, container: Container) -> None:
    records = container.record_service

    def _body():
        return request.get_json(silent=True)

    # Employees

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @json_endpoint
    def list_employees():
        return jsonify(records.list_records(Collection.EMPLOYEES))

    @app.route("/api/employees", methods=["POST"], endpoint="save_employee")
    @json_endpoint
    def save_employee():
        record_id = records.save_employee(_body())
        return jsonify({"ok": True, "id": record_id})

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @json_endpoint
    def delete_employee(employee_id: str):
        records.delete_employee(employee_id)
        return jsonify({"ok": True})

    # Attendance

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @json_endpoint
    def list_attendance():
        return jsonify(records.list_records(Collection.ATTENDANCE))

    @app.route("/api/attendance", methods=["POST"], endpoint="save_attendance")
    @json_endpoint
    def save_attendance():
        record_id = records.save_attendance(_body())
        return jsonify({"ok": True, "id": record_id})

    # Leaves

    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    @json_endpoint
    def list_leaves():
        return jsonify(records.list_records(Collection.LEAVES))

    @app.route("/api/leaves", methods=["POST"], endpoint="create_leave")
    @json_endpoint
    def create_leave():
        record_id = records.create_leave(_body())
        return jsonify({"ok": True, "id": record_id})

    @app.route("/api/leaves/<leave_id>", methods=["PUT"], endpoint="update_leave_status")
    @json_endpoint
    def update_leave_status(leave_id: str):
        body = _body() or {}
        records.update_leave_status(leave_id, body.get("status") if isinstance(body, dict) else None)
        return jsonify({"ok": True})

    # Notifications

    @app.route("/api/notifications", methods=["GET"], endpoint="list_notifications")
    @json_endpoint
    def list_notifications():
        return jsonify(records.list_records(Collection.NOTIFICATIONS))

    @app.route("/api/notifications", methods=["POST"], endpoint="create_notification")
    @json_endpoint
    def create_notification():
        record_id = records.create_notification(_body())
        return jsonify({"ok": True, "id": record_id})
