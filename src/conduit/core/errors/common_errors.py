"""Error classes for the five error kinds.

Error Types:
- ValidationError: One or more rule failures found before dispatch
- NotFoundError: Referenced entity does not exist
- ConflictError: Business invariant would be violated
- DependencyError: Outbound collaborator failed, timed out or was cancelled
- UnexpectedError: Unanticipated fault translated at the pipeline boundary

Usage:
    from conduit.core.enums import ErrorCode
    from conduit.core.errors import NotFoundError
    from conduit.core.result import Failure

    return Failure(error=NotFoundError(
        code=ErrorCode.ORDER_NOT_FOUND,
        message="Order not found",
        resource_type="Order",
        resource_id=str(order_id),
    ))
"""

from dataclasses import dataclass
from typing import ClassVar

from conduit.core.enums import ErrorKind
from conduit.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationFailure:
    """A single rule failure.

    Attributes:
        field: Name (or dotted path) of the offending field.
        message: Human-readable explanation.
        rule: Identifier of the rule that failed (e.g. "greater_than").
    """

    field: str
    message: str
    rule: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        failures: Every rule failure, in evaluation order.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION

    failures: tuple[ValidationFailure, ...] = ()

    @property
    def fields(self) -> list[str]:
        """Names of the fields that failed, in order (duplicates kept)."""
        return [failure.field for failure in self.failures]


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (Order, Customer, etc.).
        resource_id: ID of the resource that was not found.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.NOT_FOUND

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Business invariant violation (duplicate, state conflict).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has the conflict, if any.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.CONFLICT

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DependencyError(DomainError):
    """Outbound collaborator failure, timeout or cancellation.

    Attributes:
        dependency: Name of the collaborator (persistence, inventory, pipeline).
    """

    kind: ClassVar[ErrorKind] = ErrorKind.DEPENDENCY

    dependency: str


@dataclass(frozen=True, slots=True, kw_only=True)
class UnexpectedError(DomainError):
    """Unanticipated fault caught at the pipeline boundary.

    The message is generic; the original exception is only logged.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.UNEXPECTED
