from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from ..common.validators import require_non_empty
from ..core.enums import Collection, Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..records.service import RecordService
from .credentials import CredentialService

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class SessionUser:
    """What the login endpoint returns to the client."""

    id: str
    username: str
    role: str
    display_name: str

    def to_dict(self) -> dict:
        return asdict(self)


class AuthService:
    """Use case: create the superadmin account and authenticate users."""

    def __init__(self, records: RecordService, credentials: CredentialService):
        self._records = records
        self._credentials = credentials

    def create_superadmin(self, username: Any, password: Any) -> str:
        username = require_non_empty(username, "username/password")
        if not isinstance(password, str) or not password:
            raise ValidationError("Missing username/password")

        user = {
            "username": username,
            "password": self._credentials.hash(password),
            "role": Role.SUPERADMIN.value,
            "display_name": username,
        }
        return self._records.create_user(user, unique_field="username")

    def authenticate(self, username: Any, password: Any) -> SessionUser:
        # Same error for unknown user and wrong password.
        if not isinstance(username, str) or not isinstance(password, str):
            raise AuthenticationError(INVALID_CREDENTIALS)

        # Usernames are stored stripped by create_superadmin.
        user = self._records.find_record(Collection.USERS, "username", username.strip())
        if not user or not self._credentials.verify(password, user.get("password") or ""):
            raise AuthenticationError(INVALID_CREDENTIALS)

        return SessionUser(
            id=user["id"],
            username=user["username"],
            role=user.get("role", ""),
            display_name=user.get("display_name") or user["username"],
        )
