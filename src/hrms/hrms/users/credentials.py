from __future__ import annotations

from typing import Protocol

from werkzeug.security import check_password_hash, generate_password_hash


class CredentialService(Protocol):
    """One-way credential hashing; plaintext secrets are never stored."""

    def hash(self, secret: str) -> str:
        raise NotImplementedError

    def verify(self, secret: str, hashed: str) -> bool:
        raise NotImplementedError


class WerkzeugCredentialService(CredentialService):
    def hash(self, secret: str) -> str:
        return generate_password_hash(secret)

    def verify(self, secret: str, hashed: str) -> bool:
        try:
            return check_password_hash(hashed, secret)
        except (TypeError, ValueError):
            # e.g. placeholder or corrupted hashes
            return False
