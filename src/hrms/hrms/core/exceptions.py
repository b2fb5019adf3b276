class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a required field is missing."""


class ConflictError(DomainError):
    """Raised when a write would break the uniqueness of an identity."""


class DuplicateUserError(ConflictError):
    """Raised when an account with the same username already exists."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class NotFoundError(DomainError):
    """Raised when an operation references a record that does not exist."""


class StorageError(Exception):
    """Raised when the document cannot be persisted."""


class StorageUnavailableError(StorageError):
    """Raised when the storage medium cannot be read or written at all."""
