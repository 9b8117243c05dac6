"""Machine-readable error codes.

Error codes follow ENTITY_ACTION_REASON naming convention and refine an
ErrorKind (several codes map onto one kind).

Categories:
- Validation errors (VALIDATION_*, INVALID_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS, *_NOT_CANCELLABLE, INSUFFICIENT_*)
- Dependency errors (PERSISTENCE_*, EXTERNAL_SERVICE_*, REQUEST_*)
- Unexpected errors
"""

from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_PAYLOAD = "invalid_payload"

    # Resource errors
    ORDER_NOT_FOUND = "order_not_found"
    RESOURCE_NOT_FOUND = "resource_not_found"

    # Conflict errors
    ORDER_ALREADY_EXISTS = "order_already_exists"
    ORDER_NOT_CANCELLABLE = "order_not_cancellable"
    INSUFFICIENT_STOCK = "insufficient_stock"
    RESOURCE_CONFLICT = "resource_conflict"

    # Dependency errors
    PERSISTENCE_FAILED = "persistence_failed"
    EXTERNAL_SERVICE_FAILED = "external_service_failed"
    EXTERNAL_SERVICE_TIMEOUT = "external_service_timeout"
    EXTERNAL_SERVICE_UNAVAILABLE = "external_service_unavailable"
    REQUEST_TIMEOUT = "request_timeout"
    REQUEST_CANCELLED = "request_cancelled"

    # Unexpected errors
    UNEXPECTED_ERROR = "unexpected_error"
