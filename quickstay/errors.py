"""Application error taxonomy.

Every error carries the HTTP status it maps to, a client-facing message and
an optional ``data`` payload that ends up in the response envelope.
"""

from typing import Any, Optional


class QuickStayError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None, data: Any = None):
        self.message = message or self.default_message
        self.data = data if data is not None else {}
        super().__init__(self.message)


class ValidationError(QuickStayError):
    """Client-supplied data violates a field or filter constraint.

    ``violations`` is a list of ``{"field": ..., "message": ...}`` dicts, one
    per violated constraint.
    """

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, violations: list[dict], message: Optional[str] = None):
        self.violations = violations
        super().__init__(message, data=violations)

    @property
    def fields(self) -> list[str]:
        return [v["field"] for v in self.violations]

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])


class AuthenticationError(QuickStayError):
    status_code = 401
    default_message = "Authentication required"


class NotFound(QuickStayError):
    """Referenced listing does not exist."""

    status_code = 404
    default_message = "Listing not found"


class StorageError(QuickStayError):
    """Datastore or object-store operation failed."""

    status_code = 500
    default_message = "Storage operation failed"


class UploadRejected(QuickStayError):
    """File count, type or size is outside the configured upload policy."""

    status_code = 400
    default_message = "Upload rejected"
