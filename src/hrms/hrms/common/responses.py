from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def error_response(exc: Exception):
    """Map an exception to a JSON error body and HTTP status.

    Domain errors carry a client-safe message; anything else is reported as a
    generic server error without internal detail.
    """

    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return jsonify({"error": str(exc)}), status

    if isinstance(exc, StorageError):
        logger.error("Storage failure: %s", exc)
    else:
        logger.error("Unhandled error", exc_info=exc)
    return jsonify({"error": "Server error"}), 500


def json_endpoint(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except Exception as e:
            return error_response(e)

    return wrapper
