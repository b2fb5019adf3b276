from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles stored on user records."""

    SUPERADMIN = "superadmin"


class Collection(str, Enum):
    """Named collections of the persisted document, in storage order."""

    USERS = "users"
    EMPLOYEES = "employees"
    ATTENDANCE = "attendance"
    LEAVES = "leaves"
    NOTIFICATIONS = "notifications"


class ChangeKind(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class EventName(str, Enum):
    """Names of the events pushed to realtime subscribers."""

    EMPLOYEE_UPDATE = "employee_update"
    EMPLOYEE_DELETE = "employee_delete"
    ATTENDANCE_UPDATE = "attendance_update"
    LEAVE_CREATED = "leave_created"
    LEAVE_UPDATE = "leave_update"
    NOTIFICATION = "notification"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
