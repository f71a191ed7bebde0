"""Domain exceptions for the entity service.

Store failures propagate to the caller; cache failures are internal and
absorbed by the consistency coordinator. Presentation layer maps these to
HTTP responses in exception handlers.
"""

from typing import Any


class ServiceException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ServiceException):
    """Raised when input validation fails (e.g. empty update)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class EntityNotFoundException(ServiceException):
    """Raised when no entity exists for the requested id.

    Covers both a plain store miss and a cache hit whose store row is gone;
    callers cannot tell the two apart.
    """

    def __init__(self, entity_id: int) -> None:
        super().__init__(
            f"entity not found: {entity_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": "entity", "resource_id": entity_id},
        )


class StoreWriteException(ServiceException):
    """Raised when the durable store rejects a create, update or delete."""

    def __init__(
        self,
        operation: str,
        reason: str,
        error_code: str = "STORE_WRITE_ERROR",
    ) -> None:
        """Initialize with the failed operation and the store's reason.

        Args:
            operation: 'create', 'update' or 'delete'.
            reason: Store error text (driver message).
            error_code: Machine-readable code; subclasses narrow it.
        """
        super().__init__(
            f"Store {operation} failed: {reason}",
            error_code,
            {"operation": operation},
        )


class DuplicateEmailException(StoreWriteException):
    """Raised when a create or update violates the unique email constraint."""

    def __init__(self, operation: str, email: str | None = None) -> None:
        super().__init__(operation, "email already registered", "DUPLICATE_EMAIL")
        if email:
            self.details["email"] = email


class CacheException(ServiceException):
    """Raised by the cache adapter on any Redis failure. Never surfaced to clients."""

    def __init__(self, operation: str, key: str, reason: str) -> None:
        super().__init__(
            f"Cache {operation} failed for {key}: {reason}",
            "CACHE_ERROR",
            {"operation": operation, "key": key},
        )


class StoreReadException(ServiceException):
    """Raised when the durable store cannot be queried (connectivity, timeout).

    Distinct from EntityNotFoundException so an outage is not reported as a
    missing entity.
    """

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Store {operation} failed: {reason}",
            "STORE_UNAVAILABLE",
            {"operation": operation},
        )
